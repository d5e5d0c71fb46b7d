from __future__ import annotations

from typing import TYPE_CHECKING

from macroeval.reader.parser import NodePath
from macroeval.types.result import EvaluateResult

if TYPE_CHECKING:
    from macroeval.evaluation.evaluator import Evaluator


def call_rule(path: NodePath, evaluator: Evaluator) -> EvaluateResult:
    # Runtime config placeholders first; they must not reach the macro handlers.
    result = evaluator.maybe_evaluate_runtime_config(path)
    if result.confident:
        return result
    return evaluator.evaluate_macro_call(path)
