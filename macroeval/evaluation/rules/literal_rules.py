from __future__ import annotations

from typing import TYPE_CHECKING

from macroeval import JSValue
from macroeval.evaluation.jsvalues import to_string
from macroeval.reader.bindings import string_value
from macroeval.reader.parser import NodePath, assert_array, assert_not_array
from macroeval.reader.tokens import parse_number
from macroeval.types.result import UNKNOWN, Confident, EvaluateResult

if TYPE_CHECKING:
    from macroeval.evaluation.evaluator import Evaluator


def string_rule(path: NodePath, evaluator: Evaluator) -> EvaluateResult:
    return Confident(string_value(path.node))


def number_rule(path: NodePath, evaluator: Evaluator) -> EvaluateResult:
    return Confident(parse_number(path.text))


def boolean_rule(path: NodePath, evaluator: Evaluator) -> EvaluateResult:
    return Confident(path.type == "true")


def null_rule(path: NodePath, evaluator: Evaluator) -> EvaluateResult:
    return Confident(None)


def object_rule(path: NodePath, evaluator: Evaluator) -> EvaluateResult:
    """Object literal: confident only when every key and every value is.

    Spread elements and methods make the whole object unknown. The mapping
    is built on first read, in declaration order, later keys winning.
    """
    entries: list[tuple[EvaluateResult, EvaluateResult]] = []
    for prop in assert_array(path.get("properties")):
        if prop.type == "pair":
            key = evaluator.evaluate_key(assert_not_array(prop.get("key")))
            value = evaluator.evaluate(assert_not_array(prop.get("value")))
        elif prop.type == "shorthand_property_identifier":
            key = Confident(prop.text)
            value = evaluator.evaluate(prop)
        else:
            return UNKNOWN
        entries.append((key, value))

    for key, value in entries:
        if not key.confident or not value.confident:
            return UNKNOWN

    def build() -> dict[str, JSValue]:
        result: dict[str, JSValue] = {}
        for key, value in entries:
            result[to_string(key.value)] = value.value
        return result

    return Confident.deferred(build)


def array_rule(path: NodePath, evaluator: Evaluator) -> EvaluateResult:
    if path.has_holes():
        return UNKNOWN
    elements = [evaluator.evaluate(element) for element in assert_array(path.get("elements"))]
    if all(element.confident for element in elements):
        return Confident.deferred(lambda: [element.value for element in elements])
    return UNKNOWN
