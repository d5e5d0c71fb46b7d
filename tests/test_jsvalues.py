import math

import pytest
from hypothesis import given, strategies as st

from macroeval.errors import MacroTypeError
from macroeval.evaluation.jsvalues import (
    get_property,
    loose_equals,
    number_to_string,
    strict_equals,
    to_int32,
    to_number,
    to_string,
    to_uint32,
    truthy,
    type_tag,
    utf16_length,
)
from macroeval.types.bigint import BigInt
from macroeval.types.undefined import UNDEFINED


@pytest.mark.parametrize(
    "value,tag",
    [
        (UNDEFINED, "undefined"),
        (None, "null"),
        (False, "boolean"),
        (0, "number"),
        (1.5, "number"),
        ("", "string"),
        ([], "object"),
        ({}, "object"),
    ],
)
def test_type_tag(value, tag):
    assert type_tag(value) == tag


@pytest.mark.parametrize("value", [UNDEFINED, None, False, 0, math.nan, ""])
def test_falsy(value):
    assert not truthy(value)


@pytest.mark.parametrize("value", [True, 1, -0.5, "0", "false", [], {}])
def test_truthy(value):
    assert truthy(value)


@pytest.mark.parametrize(
    "value,expected",
    [
        (" 12 ", 12),
        ("0x10", 16),
        ("1e2", 100),
        ("-Infinity", -math.inf),
        ("", 0),
        ([], 0),
        ([7], 7),
        (True, 1),
    ],
)
def test_to_number(value, expected):
    assert to_number(value) == expected


@pytest.mark.parametrize("value", ["abc", "1px", UNDEFINED, {}, [1, 2]])
def test_to_number_nan(value):
    assert math.isnan(to_number(value))


@pytest.mark.parametrize(
    "value,expected",
    [
        (1.0, "1"),
        (0.5, "0.5"),
        (math.nan, "NaN"),
        (-math.inf, "-Infinity"),
        (None, "null"),
        (UNDEFINED, "undefined"),
        ([1, None, [2, UNDEFINED]], "1,,2,"),
        ({"a": 1}, "[object Object]"),
        (True, "true"),
    ],
)
def test_to_string(value, expected):
    assert to_string(value) == expected


def test_equality_of_objects_is_identity():
    items = [1]
    assert strict_equals(items, items)
    assert not strict_equals([1], [1])
    assert not loose_equals({}, {})
    assert not strict_equals(math.nan, math.nan)


@given(st.integers(min_value=-(2**60), max_value=2**60))
def test_int32_wraps(n):
    assert -(2**31) <= to_int32(n) < 2**31
    assert 0 <= to_uint32(n) < 2**32
    assert to_int32(n) % 2**32 == to_uint32(n)


@given(st.text(max_size=10))
def test_strings_are_loosely_equal_to_themselves(s):
    assert loose_equals(s, s)
    assert strict_equals(s, s)


def test_get_property_on_nullish():
    with pytest.raises(MacroTypeError, match="Cannot read properties of null"):
        get_property(None, "a")
    with pytest.raises(MacroTypeError, match="undefined"):
        get_property(UNDEFINED, 0)


@pytest.mark.parametrize(
    "value,expected",
    [
        (1e-7, "1e-7"),
        (1.25e-7, "1.25e-7"),
        (1e21, "1e+21"),
        (1.7976931348623157e308, "1.7976931348623157e+308"),
        (5e-324, "5e-324"),
        (-0.0, "0"),
        (2**60, "1152921504606847000"),
        (2**70, "1.1805916207174113e+21"),
    ],
)
def test_number_to_string(value, expected):
    assert number_to_string(value) == expected


def test_bigint_values():
    assert type_tag(BigInt(1)) == "bigint"
    assert to_string(BigInt(-12)) == "-12"
    assert not truthy(BigInt(0))
    with pytest.raises(MacroTypeError):
        to_number(BigInt(1))


@pytest.mark.parametrize("text,units", [("", 0), ("abc", 3), ("\U0001F600", 2), ("é\U0001F600x", 4)])
def test_utf16_length(text, units):
    assert utf16_length(text) == units
