"""Confidence-tracking partial evaluator.

Tries to determine statically the value a JavaScript expression produces at
run time. Every answer is either Confident (a proven value, possibly computed
lazily) or UNKNOWN; nothing is ever guessed.

Evaluation of one node:
  1) memo cache, keyed by node handle
  2) the baseline (host literal inference); trusted when confident
  3) the per-kind rule from NODE_RULES; kinds without a rule are UNKNOWN

The evaluator owns its memo cache and local environment. One instance serves
one evaluation pass over one subtree and must be discarded once the tree
underneath it changes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Optional, Union

from macroeval import JSValue
from macroeval.errors import DeferredValueError
from macroeval.evaluation.baseline import Baseline, host_evaluate
from macroeval.evaluation.jsvalues import get_property, is_nullish
from macroeval.evaluation.macro_calls import MACRO_HANDLERS, macro_name
from macroeval.evaluation.rules import NODE_RULES
from macroeval.reader.parser import NodeKind, NodePath, assert_not_array
from macroeval.types.environment import LocalEnvironment
from macroeval.types.result import UNKNOWN, Confident, EvaluateResult
from macroeval.types.state import MacroState

logger = logging.getLogger(__name__)


@dataclass
class EvaluationEnv:
    """Seeds for a new Evaluator. Anything left as None starts out empty."""
    known_paths: Optional[dict[NodePath, EvaluateResult]] = None
    locals: Optional[Union[LocalEnvironment, Mapping[str, JSValue]]] = None
    state: Optional[MacroState] = None


class Evaluator:
    def __init__(self, env: EvaluationEnv | None = None, baseline: Baseline = host_evaluate):
        env = env or EvaluationEnv()
        self.known_paths: dict[NodePath, EvaluateResult] = (
            env.known_paths if env.known_paths is not None else {}
        )
        if isinstance(env.locals, LocalEnvironment):
            self.locals = env.locals
        else:
            self.locals = LocalEnvironment(env.locals)
        self.state: MacroState | None = env.state
        self.baseline = baseline

    def child(self) -> Evaluator:
        """A new evaluator sharing this one's cache, locals and state."""
        return Evaluator(EvaluationEnv(self.known_paths, self.locals, self.state), self.baseline)

    def evaluate(self, path: NodePath) -> EvaluateResult:
        known = self.known_paths.get(path)
        if known is not None:
            return known
        result = self._real_evaluate(path)
        self.known_paths[path] = result
        return result

    def _real_evaluate(self, path: NodePath) -> EvaluateResult:
        built_in = self.baseline(path)
        if built_in.confident:
            return built_in
        rule = NODE_RULES.get(path.kind)
        if rule is None:
            return UNKNOWN
        return rule(path, self)

    def evaluate_key(self, path: NodePath) -> EvaluateResult:
        """Evaluate an object key or a non-computed member property.

        Bare names in key position are syntax, not variable references, so a
        name that does not evaluate stands for itself.
        """
        first = self.evaluate(path)
        if first.confident:
            return first
        if path.kind in (NodeKind.IDENTIFIER, NodeKind.PROPERTY_NAME):
            return Confident(path.text)
        return UNKNOWN

    def evaluate_member(self, path: NodePath, optional_chain: bool) -> EvaluateResult:
        property_path = assert_not_array(path.get("property"))
        if property_path is None:
            return UNKNOWN
        if path.computed:
            prop = self.evaluate(property_path)
        else:
            prop = self.evaluate_key(property_path)
        # The property is usually the cheaper side; only look at the object
        # once it is known.
        if prop.confident:
            obj = self.evaluate(assert_not_array(path.get("object")))
            if obj.confident:
                confident_object, confident_property = obj, prop

                def read() -> JSValue:
                    target = confident_object.value
                    if optional_chain and is_nullish(target):
                        return target
                    return get_property(target, confident_property.value)

                return Confident.deferred(read)
        return UNKNOWN

    # Runtime-mode config accessors are reported as confident so that callers
    # still get feedback about non-static arguments around them, but their
    # value belongs to run time. The value is lazy so confidence can be checked
    # without ever computing it.
    def maybe_evaluate_runtime_config(self, path: NodePath) -> EvaluateResult:
        if self.state is None:
            return UNKNOWN
        callee = assert_not_array(path.get("callee"))
        if callee is not None and callee.type == "identifier":
            if self.state.needed_runtime_imports.get(callee.text) == "config":
                logger.debug("runtime config accessor %s deferred", callee.text)
                return Confident.deferred(_unreadable_runtime_value)
        return UNKNOWN

    def evaluate_macro_call(self, path: NodePath) -> EvaluateResult:
        if self.state is None:
            return UNKNOWN
        callee = assert_not_array(path.get("callee"))
        if callee is None:
            return UNKNOWN
        name = macro_name(callee, self.state)
        if name is None:
            return UNKNOWN
        value = MACRO_HANDLERS[name](path, self.state)
        logger.debug("macro %s in %s evaluated to %r", name, self.state.filename, value)
        return Confident(value)


def _unreadable_runtime_value() -> JSValue:
    raise DeferredValueError("bug in macroeval: didn't expect to need to evaluate this value")
