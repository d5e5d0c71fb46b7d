"""Memo cache and local environment of an Evaluator."""

import pytest

from macroeval.evaluation.evaluator import EvaluationEnv, Evaluator
from macroeval.evaluation.macro_calls import MACRO_HANDLERS
from macroeval.reader.parser import parse_expression
from macroeval.types.environment import LocalEnvironment
from macroeval.types.result import UNKNOWN, Confident
from conftest import MACRO_IMPORTS


# -------------------------------
# Memoization
# -------------------------------
def test_repeated_evaluation_returns_same_result(evaluator):
    path = parse_expression("{a: [1, 2]}")
    first = evaluator.evaluate(path)
    assert evaluator.evaluate(path) is first
    assert first.value is evaluator.evaluate(path).value


def test_each_node_is_computed_once(counting_baseline):
    evaluator = Evaluator(baseline=counting_baseline)
    path = parse_expression("1 + 2")
    evaluator.evaluate(path)
    evaluator.evaluate(path)
    assert counting_baseline.visits.count("1 + 2") == 1
    assert counting_baseline.visits.count("1") == 1


def test_unknown_results_are_cached_too(counting_baseline):
    evaluator = Evaluator(baseline=counting_baseline)
    path = parse_expression("x")
    assert evaluator.evaluate(path) is UNKNOWN
    assert evaluator.evaluate(path) is UNKNOWN
    assert counting_baseline.visits == ["x"]


def test_macro_handler_runs_once_per_node(state, monkeypatch):
    calls = []

    def fake_is_testing(path, state):
        calls.append(path.text)
        return True

    monkeypatch.setitem(MACRO_HANDLERS, "isTesting", fake_is_testing)
    evaluator = Evaluator(EvaluationEnv(state=state))
    path = parse_expression("isTesting()", prelude=MACRO_IMPORTS)
    assert evaluator.evaluate(path).value is True
    assert evaluator.evaluate(path).value is True
    assert calls == ["isTesting()"]


def test_seeded_known_paths_win(counting_baseline):
    path = parse_expression("whatever")
    evaluator = Evaluator(EvaluationEnv(known_paths={path: Confident(99)}), counting_baseline)
    assert evaluator.evaluate(path).value == 99
    assert counting_baseline.visits == []


def test_child_shares_cache(evaluator):
    path = parse_expression("[1]")
    first = evaluator.evaluate(path)
    assert evaluator.child().evaluate(path) is first


# -------------------------------
# Assignments and locals
# -------------------------------
def test_assignment_defines_local(evaluator):
    result = evaluator.evaluate(parse_expression("x = 5"))
    assert result.value == 5
    assert evaluator.locals.lookup("x") == 5
    assert evaluator.evaluate(parse_expression("x * 2")).value == 10


def test_locals_are_per_evaluator(evaluator):
    evaluator.evaluate(parse_expression("x = 5"))
    assert Evaluator().evaluate(parse_expression("x")) is UNKNOWN


def test_assignment_then_read_in_one_expression(evaluator):
    assert evaluator.evaluate(parse_expression("(x = 2) + x")).value == 4


def test_reassignment_replaces_value(evaluator):
    evaluator.evaluate(parse_expression("x = 1"))
    evaluator.evaluate(parse_expression("x = 'two'"))
    assert evaluator.evaluate(parse_expression("x")).value == "two"


@pytest.mark.parametrize("source", ["a.b = 1", "x += 1", "[a] = [1]", "x = y"])
def test_unsupported_assignments(evaluator, source):
    assert evaluator.evaluate(parse_expression(source)) is UNKNOWN
    assert len(evaluator.locals) == 0


def test_seeded_locals():
    evaluator = Evaluator(EvaluationEnv(locals={"x": 3}))
    assert evaluator.evaluate(parse_expression("x + 1")).value == 4

    shared = LocalEnvironment({"y": None})
    evaluator = Evaluator(EvaluationEnv(locals=shared))
    assert evaluator.locals is shared
    assert evaluator.evaluate(parse_expression("y ?? 'd'")).value == "d"


def test_child_shares_locals(evaluator):
    evaluator.child().evaluate(parse_expression("y = 1"))
    assert "y" in evaluator.locals


def test_local_environment_str():
    env = LocalEnvironment({"a": 1})
    env.update({"b": "x"})
    assert str(env) == "{a: 1, b: 'x'}"
    assert repr(env) == "<LocalEnvironment {a: 1, b: 'x'}>"
    assert list(env) == ["a", "b"]


def test_dotted_keys_ignore_locals(evaluator):
    evaluator.evaluate(parse_expression("x = 'y'"))
    assert evaluator.evaluate(parse_expression("({x: 1, y: 2}).x")).value == 1
    assert evaluator.evaluate(parse_expression("({x: 1, y: 2})[x]")).value == 2
    assert evaluator.evaluate(parse_expression("({x: 1})")).value == {"x": 1}
