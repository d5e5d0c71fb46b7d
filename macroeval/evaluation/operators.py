"""Operator tables.

Two fixed tables map operator symbols to pure functions over JavaScript
values. The evaluator only folds operators that appear here; anything else
(`in`, `instanceof`, `**`, `typeof`, `delete`, ...) stays unknown.

Number arithmetic is done on doubles. BigInt operands only combine with
other BigInts; mixing them with Numbers raises MacroTypeError when the value
is read, where JS throws a TypeError.
"""

from __future__ import annotations

import math
import operator
from typing import Callable

from macroeval import JSValue
from macroeval.errors import MacroTypeError
from macroeval.evaluation.jsvalues import (
    NAN,
    concat,
    is_nullish,
    loose_equals,
    strict_equals,
    string_to_bigint,
    to_double,
    to_int32,
    to_number,
    to_numeric,
    to_primitive,
    to_string,
    to_uint32,
    truthy,
    utf16_units,
)
from macroeval.reader.tokens import normalize_number
from macroeval.types.bigint import BigInt
from macroeval.types.undefined import UNDEFINED

BinaryFn = Callable[[JSValue, JSValue], JSValue]
UnaryFn = Callable[[JSValue], JSValue]


def _wrap_int32(n: int) -> int:
    n %= 2**32
    return n - 2**32 if n >= 2**31 else n


def _shift_count(b: JSValue) -> int:
    return to_uint32(b) & 31


def _numeric_operands(a: JSValue, b: JSValue, symbol: str) -> tuple:
    """ToNumeric on both sides; the flag says whether both are BigInts."""
    na, nb = to_numeric(a), to_numeric(b)
    big = isinstance(na, BigInt)
    if big != isinstance(nb, BigInt):
        raise MacroTypeError(f"Cannot mix BigInt and other types in `{symbol}`, use explicit conversions")
    return na, nb, big


def _trunc_div(x: int, y: int) -> int:
    q = abs(x) // abs(y)
    return q if (x >= 0) == (y > 0) else -q


def _big_shift(x: int, count: int) -> int:
    return x << count if count >= 0 else x >> -count


# -------------------------------
# Arithmetic
# -------------------------------
def add(a: JSValue, b: JSValue) -> JSValue:
    pa, pb = to_primitive(a), to_primitive(b)
    if isinstance(pa, str) or isinstance(pb, str):
        return concat(to_string(pa), to_string(pb))
    na, nb, big = _numeric_operands(pa, pb, "+")
    if big:
        return BigInt(na.value + nb.value)
    return normalize_number(float(na) + float(nb))


def sub(a: JSValue, b: JSValue) -> JSValue:
    na, nb, big = _numeric_operands(a, b, "-")
    if big:
        return BigInt(na.value - nb.value)
    return normalize_number(float(na) - float(nb))


def mul(a: JSValue, b: JSValue) -> JSValue:
    na, nb, big = _numeric_operands(a, b, "*")
    if big:
        return BigInt(na.value * nb.value)
    return normalize_number(float(na) * float(nb))


def div(a: JSValue, b: JSValue) -> JSValue:
    na, nb, big = _numeric_operands(a, b, "/")
    if big:
        if nb.value == 0:
            raise MacroTypeError("Division by zero")
        return BigInt(_trunc_div(na.value, nb.value))
    x, y = float(na), float(nb)
    if y == 0:
        if x == 0 or math.isnan(x):
            return NAN
        return math.copysign(math.inf, x) * math.copysign(1.0, y)
    return normalize_number(x / y)


def mod(a: JSValue, b: JSValue) -> JSValue:
    na, nb, big = _numeric_operands(a, b, "%")
    if big:
        if nb.value == 0:
            raise MacroTypeError("Division by zero")
        return BigInt(na.value - nb.value * _trunc_div(na.value, nb.value))
    x, y = float(na), float(nb)
    if y == 0 or math.isnan(x) or math.isnan(y) or math.isinf(x):
        return NAN
    if math.isinf(y):
        return normalize_number(x)
    # fmod keeps the dividend's sign, -0 included
    return normalize_number(math.fmod(x, y))


# -------------------------------
# Bitwise
# -------------------------------
def _bitwise(op: Callable[[int, int], int], symbol: str) -> BinaryFn:
    def apply(a: JSValue, b: JSValue) -> JSValue:
        na, nb, big = _numeric_operands(a, b, symbol)
        if big:
            return BigInt(op(na.value, nb.value))
        return op(to_int32(na), to_int32(nb))
    return apply


def shift_left(a: JSValue, b: JSValue) -> JSValue:
    na, nb, big = _numeric_operands(a, b, "<<")
    if big:
        return BigInt(_big_shift(na.value, nb.value))
    return _wrap_int32(to_int32(na) << _shift_count(nb))


def shift_right(a: JSValue, b: JSValue) -> JSValue:
    na, nb, big = _numeric_operands(a, b, ">>")
    if big:
        return BigInt(_big_shift(na.value, -nb.value))
    return to_int32(na) >> _shift_count(nb)


def unsigned_shift_right(a: JSValue, b: JSValue) -> JSValue:
    na, nb, big = _numeric_operands(a, b, ">>>")
    if big:
        raise MacroTypeError("BigInts have no unsigned right shift, use >> instead")
    return to_uint32(na) >> _shift_count(nb)


# -------------------------------
# Comparison
# -------------------------------
def _comparable(p: JSValue) -> int | float:
    return p.value if isinstance(p, BigInt) else to_number(p)


def _relational(op: Callable[[JSValue, JSValue], bool]) -> BinaryFn:
    def compare(a: JSValue, b: JSValue) -> bool:
        pa, pb = to_primitive(a), to_primitive(b)
        if isinstance(pa, str) and isinstance(pb, str):
            # code unit order, not code point order
            return op(utf16_units(pa), utf16_units(pb))
        if isinstance(pa, BigInt) and isinstance(pb, str):
            n = string_to_bigint(pb)
            return n is not None and op(pa.value, n)
        if isinstance(pa, str) and isinstance(pb, BigInt):
            n = string_to_bigint(pa)
            return n is not None and op(n, pb.value)
        # NaN compares false under every operator, as in JS
        return op(_comparable(pa), _comparable(pb))
    return compare


# -------------------------------
# Logic
# -------------------------------
def logical_or(a: JSValue, b: JSValue) -> JSValue:
    return a if truthy(a) else b


def logical_and(a: JSValue, b: JSValue) -> JSValue:
    return b if truthy(a) else a


def nullish_coalesce(a: JSValue, b: JSValue) -> JSValue:
    return b if is_nullish(a) else a


# -------------------------------
# Unary
# -------------------------------
def negate(a: JSValue) -> JSValue:
    n = to_numeric(a)
    if isinstance(n, BigInt):
        return BigInt(-n.value)
    return normalize_number(-float(n))


def bitwise_not(a: JSValue) -> JSValue:
    n = to_numeric(a)
    if isinstance(n, BigInt):
        return BigInt(~n.value)
    return ~to_int32(n)


BINARY_OPERATORS: dict[str, BinaryFn] = {
    "||": logical_or,
    "&&": logical_and,
    "|": _bitwise(operator.or_, "|"),
    "^": _bitwise(operator.xor, "^"),
    "&": _bitwise(operator.and_, "&"),
    "==": loose_equals,
    "!=": lambda a, b: not loose_equals(a, b),
    "===": strict_equals,
    "!==": lambda a, b: not strict_equals(a, b),
    "<": _relational(operator.lt),
    ">": _relational(operator.gt),
    "<=": _relational(operator.le),
    ">=": _relational(operator.ge),
    "<<": shift_left,
    ">>": shift_right,
    ">>>": unsigned_shift_right,
    "+": add,
    "-": sub,
    "*": mul,
    "/": div,
    "%": mod,
    "??": nullish_coalesce,
}

UNARY_OPERATORS: dict[str, UnaryFn] = {
    "-": negate,
    # ToNumber refuses BigInt, so unary plus on one raises
    "+": lambda a: normalize_number(to_double(a)),
    "~": bitwise_not,
    "!": lambda a: not truthy(a),
    "void": lambda a: UNDEFINED,
}
