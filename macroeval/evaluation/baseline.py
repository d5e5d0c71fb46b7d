"""Baseline literal inference.

The first pass the Evaluator consults before its own rules: the host's
generic, side-effect free knowledge of literals and constant bindings.

    - literals, `undefined`, template strings without substitutions
    - parenthesized expressions
    - identifiers bound by `const name = <init>` whose initializer is itself
      resolvable by this routine

Anything else is Unknown. `never_confident` is a stand-in baseline that knows
nothing, used to exercise the Evaluator on its own.
"""

from __future__ import annotations

from typing import Callable

from macroeval.reader.bindings import resolve_binding, string_value
from macroeval.reader.parser import NodeKind, NodePath
from macroeval.reader.tokens import decode_string_parts, parse_number
from macroeval.types.result import UNKNOWN, Confident, EvaluateResult
from macroeval.types.undefined import UNDEFINED

Baseline = Callable[[NodePath], EvaluateResult]


def never_confident(path: NodePath) -> EvaluateResult:
    return UNKNOWN


def host_evaluate(path: NodePath) -> EvaluateResult:
    return _infer(path, set())


def _infer(path: NodePath, resolving: set[NodePath]) -> EvaluateResult:
    kind = path.kind
    if kind is NodeKind.STRING:
        return Confident(string_value(path.node))
    if kind is NodeKind.NUMBER:
        return Confident(parse_number(path.text))
    if kind is NodeKind.BOOLEAN:
        return Confident(path.type == "true")
    if kind is NodeKind.NULL:
        return Confident(None)
    if kind is NodeKind.UNDEFINED:
        return Confident(UNDEFINED)
    if kind is NodeKind.TEMPLATE:
        parts = [(child.type, child.text) for child in path.named_children()]
        if any(t == "template_substitution" for t, _ in parts):
            return UNKNOWN
        return Confident(decode_string_parts(parts))
    if kind is NodeKind.PARENTHESIZED and path.type == "parenthesized_expression":
        inner = path.get("expression")
        return _infer(inner, resolving) if isinstance(inner, NodePath) else UNKNOWN
    if kind is NodeKind.IDENTIFIER:
        return _infer_constant(path, resolving)
    return UNKNOWN


def _infer_constant(identifier: NodePath, resolving: set[NodePath]) -> EvaluateResult:
    binding = resolve_binding(identifier)
    if binding is None or binding.kind != "const":
        return UNKNOWN
    declarator = binding.node
    target = declarator.get("name")
    init = declarator.get("value")
    if not isinstance(target, NodePath) or target.type != "identifier" or not isinstance(init, NodePath):
        return UNKNOWN
    if declarator in resolving:
        return UNKNOWN
    resolving.add(declarator)
    try:
        return _infer(init, resolving)
    finally:
        resolving.discard(declarator)
