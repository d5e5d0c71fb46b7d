import pytest

from macroeval.errors import MacroTypeError
from macroeval.reader.parser import parse_expression
from macroeval.types.result import UNKNOWN
from macroeval.types.undefined import UNDEFINED


def evaluate(evaluator, source, prelude=""):
    return evaluator.evaluate(parse_expression(source, prelude=prelude))


# -------------------------------
# Objects
# -------------------------------
def test_object_literal(evaluator):
    value = evaluate(evaluator, "{a: 1, 'b': 'x', 3: true}").value
    assert value == {"a": 1, "b": "x", "3": True}


def test_object_keeps_declaration_order_and_last_key_wins(evaluator):
    value = evaluate(evaluator, "{b: 1, a: 2, b: 3}").value
    assert list(value) == ["b", "a"]
    assert value == {"b": 3, "a": 2}


def test_object_is_built_lazily(evaluator):
    result = evaluate(evaluator, "{a: 1}")
    assert result.confident
    assert not result.is_forced
    assert result.value == {"a": 1}


def test_computed_and_shorthand_keys(evaluator):
    assert evaluate(evaluator, "{['x' + 1]: 2}").value == {"x1": 2}
    assert evaluate(evaluator, "{a}", prelude="const a = 5;").value == {"a": 5}


def test_nested_object(evaluator):
    assert evaluate(evaluator, "{a: {b: [1, {c: null}]}}").value == {"a": {"b": [1, {"c": None}]}}


@pytest.mark.parametrize(
    "source",
    [
        "{x: 1, y: unknownExpr}",
        "{[k]: 1}",
        "{a}",
        "{...rest}",
        "{f() { return 1; }}",
        "{get g() { return 1; }}",
    ],
)
def test_object_unknown_when_any_part_is(evaluator, source):
    assert evaluate(evaluator, source) is UNKNOWN


# -------------------------------
# Arrays
# -------------------------------
def test_array_literal(evaluator):
    assert evaluate(evaluator, "[1, 'two', null, [3]]").value == [1, "two", None, [3]]
    assert evaluate(evaluator, "[]").value == []


@pytest.mark.parametrize("source", ["[1, x]", "[1, , 2]", "[...a]"])
def test_array_unknown(evaluator, source):
    assert evaluate(evaluator, source) is UNKNOWN


# -------------------------------
# Member access
# -------------------------------
@pytest.mark.parametrize(
    "source,expected",
    [
        ("({a: {b: 2}}).a.b", 2),
        ("[10, 20][1]", 20),
        ("[10, 20]['1']", 20),
        ("'abc'.length", 3),
        ("'abc'[1]", "b"),
        ("[1, 2, 3].length", 3),
        ("({a: 1})['a']", 1),
        ("({a: 1})['b' ? 'a' : 'z']", 1),
        ("({1: 'one'})[1]", "one"),
        ("'\U0001F600'.length", 2),
        ("'a\U0001F600b'.length", 4),
        ("'a\U0001F600b'[1]", "\ud83d"),
        ("'a\U0001F600b'[3]", "b"),
    ],
)
def test_member_reads(evaluator, source, expected):
    assert evaluate(evaluator, source).value == expected


@pytest.mark.parametrize("source", ["({a: 1}).missing", "[1][5]", "(1).x", "'\U0001F600'[2]"])
def test_missing_properties_are_undefined(evaluator, source):
    assert evaluate(evaluator, source).value is UNDEFINED


@pytest.mark.parametrize("source", ["null.a", "undefined.a", "({}).a.b"])
def test_reading_through_nullish_raises_on_read(evaluator, source):
    result = evaluate(evaluator, source)
    assert result.confident
    with pytest.raises(MacroTypeError):
        result.value


@pytest.mark.parametrize(
    "source,expected",
    [
        ("null?.a", None),
        ("undefined?.a", UNDEFINED),
        ("null?.a.b", None),
        ("({a: 1})?.a", 1),
        ("({a: {b: 2}})?.a.b", 2),
        ("[1, 2]?.[0]", 1),
    ],
)
def test_optional_chains(evaluator, source, expected):
    result = evaluate(evaluator, source)
    assert result.confident
    assert result.value == expected


@pytest.mark.parametrize("source", ["({a: 1})[k]", "foo.bar", "foo?.bar", "foo.bar.baz"])
def test_member_unknown(evaluator, source):
    assert evaluate(evaluator, source) is UNKNOWN
