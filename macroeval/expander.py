"""Source-to-source macro expansion.

Finds calls to recognised macro functions, evaluates them (together with the
enclosing expressions that still fold to a known value) and splices literal
replacements into the source text. Anything the evaluator is not confident
about is left exactly as written.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from macroeval.evaluation.baseline import Baseline, host_evaluate
from macroeval.evaluation.evaluator import EvaluationEnv, Evaluator
from macroeval.evaluation.macro_calls import is_macro_call
from macroeval.literals import build_literals
from macroeval.reader.parser import NodeKind, NodePath, parse_program
from macroeval.types.result import EvaluateResult
from macroeval.types.state import MacroState

logger = logging.getLogger(__name__)

# Expressions a folded macro call may be widened into.
FOLDABLE_PARENTS = frozenset({
    NodeKind.MEMBER,
    NodeKind.OPTIONAL_MEMBER,
    NodeKind.BINARY,
    NodeKind.UNARY,
    NodeKind.CONDITIONAL,
    NodeKind.PARENTHESIZED,
})


@dataclass(frozen=True)
class Replacement:
    start: int
    end: int
    text: str


class MacroExpander:
    def __init__(self, state: MacroState, baseline: Baseline = host_evaluate):
        self.state = state
        self.baseline = baseline

    def expand(self, source: str) -> str:
        """Return `source` with every foldable macro call replaced by a literal."""
        replacements = self.plan(parse_program(source))
        data = source.encode("utf-8")
        for r in sorted(replacements, key=lambda r: r.start, reverse=True):
            data = data[:r.start] + r.text.encode("utf-8") + data[r.end:]
        return data.decode("utf-8")

    def plan(self, program: NodePath) -> list[Replacement]:
        candidates: list[tuple[NodePath, EvaluateResult]] = []
        for path in program.walk():
            if not is_macro_call(path, self.state):
                continue
            # One evaluator per expansion attempt.
            evaluator = Evaluator(EvaluationEnv(state=self.state), self.baseline)
            folded = self._widen(path, evaluator)
            if folded is not None:
                candidates.append(folded)

        replacements: list[Replacement] = []
        for target, result in sorted(candidates, key=lambda c: (c[0].start_byte, -c[0].end_byte)):
            if replacements and target.start_byte < replacements[-1].end:
                # nested inside an outer fold
                continue
            literal = build_literals(result.value)
            text = literal.text
            if literal.type in ("object", "unary_expression") or target.type == "parenthesized_expression":
                # statement-position objects, `a -(-1)` and `if (...)` style heads need the parens
                text = f"({text})"
            logger.debug("folding %s -> %s", target.text, text)
            replacements.append(Replacement(target.start_byte, target.end_byte, text))
        return replacements

    def _widen(self, call: NodePath, evaluator: Evaluator) -> tuple[NodePath, EvaluateResult] | None:
        result = evaluator.evaluate(call)
        if not result.confident:
            return None
        target = call
        parent = call.parent
        while parent is not None and parent.kind in FOLDABLE_PARENTS:
            if self._has_runtime_config(parent):
                break
            widened = evaluator.evaluate(parent)
            if not widened.confident:
                break
            target, result = parent, widened
            parent = parent.parent
        return target, result

    def _has_runtime_config(self, path: NodePath) -> bool:
        runtime = self.state.needed_runtime_imports
        for node in path.walk():
            if node.type != "call_expression":
                continue
            callee = node.get("callee")
            if isinstance(callee, NodePath) and callee.type == "identifier" and runtime.get(callee.text) == "config":
                return True
        return False
