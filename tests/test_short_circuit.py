"""Short-circuit evaluation: operands that cannot matter are never visited."""

import pytest

from macroeval.evaluation.evaluator import Evaluator
from macroeval.reader.parser import parse_expression
from macroeval.types.result import UNKNOWN


@pytest.fixture
def counting_evaluator(counting_baseline):
    return Evaluator(baseline=counting_baseline)


def test_unknown_left_skips_right(counting_evaluator, counting_baseline):
    result = counting_evaluator.evaluate(parse_expression("a && sideEffect()"))
    assert result is UNKNOWN
    assert "a" in counting_baseline.visits
    assert "sideEffect()" not in counting_baseline.visits
    assert "sideEffect" not in counting_baseline.visits


def test_unknown_left_keeps_assignment_out_of_locals(evaluator):
    result = evaluator.evaluate(parse_expression("unknownThing && (z = 1)"))
    assert result is UNKNOWN
    assert "z" not in evaluator.locals


def test_known_left_visits_right(counting_evaluator, counting_baseline):
    result = counting_evaluator.evaluate(parse_expression("1 && 2"))
    assert result.value == 2
    assert counting_baseline.visits == ["1 && 2", "1", "2"]


@pytest.mark.parametrize(
    "source,expected,visited,skipped",
    [
        ("0 ? a() : 'no'", "no", "'no'", "a()"),
        ("1 ? 'yes' : b()", "yes", "'yes'", "b()"),
        ("false ? a() : 'no'", "no", "'no'", "a()"),
    ],
)
def test_conditional_visits_one_branch(counting_evaluator, counting_baseline, source, expected, visited, skipped):
    assert counting_evaluator.evaluate(parse_expression(source)).value == expected
    assert visited in counting_baseline.visits
    assert skipped not in counting_baseline.visits


def test_unknown_test_visits_neither_branch(counting_evaluator, counting_baseline):
    assert counting_evaluator.evaluate(parse_expression("t ? a() : b()")) is UNKNOWN
    assert "a()" not in counting_baseline.visits
    assert "b()" not in counting_baseline.visits


def test_member_looks_at_property_first(counting_evaluator, counting_baseline):
    counting_evaluator.evaluate(parse_expression("obj.b"))
    assert counting_baseline.visits == ["obj.b", "b", "obj"]


def test_unknown_computed_property_skips_object(counting_evaluator, counting_baseline):
    assert counting_evaluator.evaluate(parse_expression("obj[k]")) is UNKNOWN
    assert "obj" not in counting_baseline.visits
