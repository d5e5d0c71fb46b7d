from __future__ import annotations

from typing import TYPE_CHECKING

from macroeval.reader.parser import NodePath
from macroeval.types.result import EvaluateResult

if TYPE_CHECKING:
    from macroeval.evaluation.evaluator import Evaluator


def member_rule(path: NodePath, evaluator: Evaluator) -> EvaluateResult:
    """`a.b` and `a[b]`."""
    return evaluator.evaluate_member(path, optional_chain=False)


def optional_member_rule(path: NodePath, evaluator: Evaluator) -> EvaluateResult:
    """`a?.b`, `a?.[b]` and later links of an optional chain.

    A null or undefined object short-circuits to itself when the value is read.
    """
    return evaluator.evaluate_member(path, optional_chain=True)
