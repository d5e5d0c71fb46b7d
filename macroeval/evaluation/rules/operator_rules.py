from __future__ import annotations

from typing import TYPE_CHECKING

from macroeval.evaluation.jsvalues import truthy
from macroeval.evaluation.operators import BINARY_OPERATORS, UNARY_OPERATORS
from macroeval.reader.parser import NodePath, assert_not_array
from macroeval.types.result import UNKNOWN, Confident, EvaluateResult

if TYPE_CHECKING:
    from macroeval.evaluation.evaluator import Evaluator


def binary_rule(path: NodePath, evaluator: Evaluator) -> EvaluateResult:
    """Binary and logical operators from BINARY_OPERATORS.

    The right operand is not visited at all when the left one is unknown, so
    an assignment nested on the right never reaches the local environment.
    """
    fn = BINARY_OPERATORS.get(path.operator)
    if fn is None:
        return UNKNOWN
    left = evaluator.evaluate(assert_not_array(path.get("left")))
    if not left.confident:
        return UNKNOWN
    right = evaluator.evaluate(assert_not_array(path.get("right")))
    if not right.confident:
        return UNKNOWN
    return Confident.deferred(lambda: fn(left.value, right.value))


def conditional_rule(path: NodePath, evaluator: Evaluator) -> EvaluateResult:
    """`test ? consequent : alternate`; only the chosen branch is visited."""
    test = evaluator.evaluate(assert_not_array(path.get("test")))
    if not test.confident:
        return UNKNOWN
    branch = path.get("consequent") if truthy(test.value) else path.get("alternate")
    result = evaluator.evaluate(assert_not_array(branch))
    return result if result.confident else UNKNOWN


def unary_rule(path: NodePath, evaluator: Evaluator) -> EvaluateResult:
    fn = UNARY_OPERATORS.get(path.operator)
    if fn is None:
        return UNKNOWN
    operand = evaluator.evaluate(assert_not_array(path.get("argument")))
    if not operand.confident:
        return UNKNOWN
    return Confident.deferred(lambda: fn(operand.value))
