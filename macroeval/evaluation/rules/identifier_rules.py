from __future__ import annotations

from typing import TYPE_CHECKING

from macroeval.reader.parser import NodePath, assert_not_array
from macroeval.types.result import UNKNOWN, Confident, EvaluateResult

if TYPE_CHECKING:
    from macroeval.evaluation.evaluator import Evaluator


def identifier_rule(path: NodePath, evaluator: Evaluator) -> EvaluateResult:
    # Only the synthetic locals; declared bindings are the baseline's job.
    name = path.text
    if name not in evaluator.locals:
        return UNKNOWN
    return Confident(evaluator.locals.lookup(name))


def parenthesized_rule(path: NodePath, evaluator: Evaluator) -> EvaluateResult:
    """`(expr)` and computed keys `[expr]` evaluate to their inner expression."""
    inner = assert_not_array(path.get("expression"))
    if inner is None:
        return UNKNOWN
    return evaluator.evaluate(inner)
