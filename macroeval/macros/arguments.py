"""Static argument extraction for macro handlers.

Macro arguments must be known at compile time; anything else is reported to
the developer as a MacroUsageError rather than silently left in place.
"""

from __future__ import annotations

from macroeval import JSValue
from macroeval.errors import MacroUsageError
from macroeval.reader.parser import NodePath, assert_array
from macroeval.types.state import MacroState


def static_arguments(path: NodePath, state: MacroState, macro: str) -> list[JSValue]:
    # Imported here: the evaluator imports the handler table, which imports us.
    from macroeval.evaluation.evaluator import EvaluationEnv, Evaluator

    evaluator = Evaluator(EvaluationEnv(state=state))
    values = []
    for arg in assert_array(path.get("arguments")):
        result = evaluator.evaluate(arg)
        if not result.confident:
            raise MacroUsageError(f"the arguments to {macro} must be statically known, got `{arg.text}`")
        values.append(result.value)
    return values


def expect_arity(values: list[JSValue], count: int, macro: str) -> None:
    if len(values) != count:
        plural = "argument" if count == 1 else "arguments"
        raise MacroUsageError(f"{macro} takes exactly {count} {plural}, got {len(values)}")


def string_argument(values: list[JSValue], index: int, macro: str) -> str:
    value = values[index]
    if not isinstance(value, str):
        raise MacroUsageError(f"argument {index + 1} to {macro} must be a string, got {value!r}")
    return value
