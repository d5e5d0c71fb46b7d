from __future__ import annotations

from typing import TYPE_CHECKING

from macroeval.reader.parser import NodePath, assert_not_array
from macroeval.types.result import UNKNOWN, EvaluateResult

if TYPE_CHECKING:
    from macroeval.evaluation.evaluator import Evaluator


def assignment_rule(path: NodePath, evaluator: Evaluator) -> EvaluateResult:
    """`name = expr`: record the value in the local environment.

    Only plain identifier targets are handled; member targets and
    destructuring stay unknown.
    """
    left = assert_not_array(path.get("left"))
    if left is None or left.type != "identifier":
        return UNKNOWN
    right = evaluator.evaluate(assert_not_array(path.get("right")))
    if not right.confident:
        return UNKNOWN
    evaluator.locals.define(left.text, right.value)
    return right
