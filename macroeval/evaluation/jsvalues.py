"""JavaScript value semantics over plain Python values.

Python stands in for JS values as follows: str, int/float (Number, an IEEE
double; ints only for integral values in the safe range), BigInt, bool, None
(null), UNDEFINED, list (array) and dict (plain object). The helpers here
implement the abstract operations of the language that the operator tables
need: ToPrimitive, ToNumber, ToNumeric, ToString, ToInt32/ToUint32,
ToBoolean, the loose and strict equality algorithms and property reads.

Strings are measured and indexed in UTF-16 code units, as JS does.
"""

from __future__ import annotations

import math
import re
from typing import Optional

from macroeval import JSValue
from macroeval.errors import MacroTypeError
from macroeval.reader.tokens import int_to_double, join_chunks, normalize_number
from macroeval.types.bigint import BigInt
from macroeval.types.undefined import UNDEFINED

NAN = float("nan")

_DECIMAL_RE = re.compile(r"[+-]?(?:\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?)")
_RADIX_RE = re.compile(r"0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+")
_INTEGER_RE = re.compile(r"[+-]?\d+")
_INDEX_RE = re.compile(r"0|[1-9]\d*")


def type_tag(value: JSValue) -> str:
    """The language type of a value: undefined, null, boolean, number, bigint, string or object."""
    if value is UNDEFINED:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, BigInt):
        return "bigint"
    if isinstance(value, str):
        return "string"
    return "object"


def is_nullish(value: JSValue) -> bool:
    return value is None or value is UNDEFINED


def truthy(value: JSValue) -> bool:
    tag = type_tag(value)
    if tag in ("undefined", "null"):
        return False
    if tag == "boolean":
        return value
    if tag == "number":
        return not (value == 0 or math.isnan(value))
    if tag == "bigint":
        return value.value != 0
    if tag == "string":
        return len(value) > 0
    return True


def to_primitive(value: JSValue) -> JSValue:
    if isinstance(value, list):
        return to_string(value)
    if isinstance(value, dict):
        return "[object Object]"
    return value


def to_number(value: JSValue) -> int | float:
    """ToNumber. Raises MacroTypeError for BigInt, which JS refuses to convert implicitly."""
    tag = type_tag(value)
    if tag == "undefined":
        return NAN
    if tag == "null":
        return 0
    if tag == "boolean":
        return 1 if value else 0
    if tag == "number":
        return normalize_number(value)
    if tag == "bigint":
        raise MacroTypeError("Cannot convert a BigInt value to a number")
    if tag == "string":
        return _string_to_number(value)
    return to_number(to_primitive(value))


def to_numeric(value: JSValue) -> int | float | BigInt:
    prim = to_primitive(value)
    if isinstance(prim, BigInt):
        return prim
    return to_number(prim)


def to_double(value: JSValue) -> float:
    return float(to_number(value))


def _string_to_number(text: str) -> int | float:
    t = text.strip()
    if not t:
        return 0
    if t in ("Infinity", "+Infinity"):
        return math.inf
    if t == "-Infinity":
        return -math.inf
    if _RADIX_RE.fullmatch(t):
        return normalize_number(int(t, 0))
    if _DECIMAL_RE.fullmatch(t):
        return normalize_number(float(t))
    return NAN


def string_to_bigint(text: str) -> Optional[int]:
    """StringToBigInt; None where JS would give undefined."""
    t = text.strip()
    if not t:
        return 0
    if _RADIX_RE.fullmatch(t):
        return int(t, 0)
    if _INTEGER_RE.fullmatch(t):
        return int(t)
    return None


def number_to_string(value: int | float) -> str:
    """Number::toString: shortest round-trip digits, laid out as JS does."""
    if isinstance(value, int):
        if abs(value) <= 2**53 - 1:
            return str(value)
        value = int_to_double(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"
    sign = "-" if value < 0 else ""
    digits, n = _decimal_digits(abs(value))
    k = len(digits)
    if k <= n <= 21:
        return sign + digits + "0" * (n - k)
    if 0 < n <= 21:
        return sign + digits[:n] + "." + digits[n:]
    if -6 < n <= 0:
        return sign + "0." + "0" * -n + digits
    e = n - 1
    exponent = f"e{'+' if e >= 0 else '-'}{abs(e)}"
    if k == 1:
        return sign + digits + exponent
    return sign + digits[0] + "." + digits[1:] + exponent


def _decimal_digits(x: float) -> tuple[str, int]:
    # repr() gives the shortest digits that round-trip, same as JS; only the
    # layout differs. Returns (digits, n) with x == 0.digits * 10**n.
    mantissa, _, exp = repr(x).partition("e")
    whole, _, frac = mantissa.partition(".")
    raw = whole + frac
    stripped = raw.lstrip("0")
    n = len(whole) + int(exp or 0) - (len(raw) - len(stripped))
    return stripped.rstrip("0"), n


def to_string(value: JSValue) -> str:
    tag = type_tag(value)
    if tag == "undefined":
        return "undefined"
    if tag == "null":
        return "null"
    if tag == "boolean":
        return "true" if value else "false"
    if tag == "number":
        return number_to_string(value)
    if tag == "bigint":
        return str(value.value)
    if tag == "string":
        return value
    if isinstance(value, list):
        return ",".join("" if is_nullish(item) else to_string(item) for item in value)
    return "[object Object]"


def concat(a: str, b: str) -> str:
    return join_chunks((a, b))


def utf16_units(text: str) -> bytes:
    """Big-endian UTF-16 encoding; bytewise order is code unit order."""
    return text.encode("utf-16-be", "surrogatepass")


def utf16_length(text: str) -> int:
    return len(utf16_units(text)) // 2


def utf16_unit_at(text: str, index: int) -> str:
    unit = utf16_units(text)[2 * index:2 * index + 2]
    return unit.decode("utf-16-be", "surrogatepass")


def to_int32(value: JSValue) -> int:
    n = to_uint32(value)
    return n - 2**32 if n >= 2**31 else n


def to_uint32(value: JSValue) -> int:
    n = to_number(value)
    if isinstance(n, float) and (math.isnan(n) or math.isinf(n)):
        return 0
    return math.trunc(n) % 2**32


def strict_equals(a: JSValue, b: JSValue) -> bool:
    ta, tb = type_tag(a), type_tag(b)
    if ta != tb:
        return False
    if ta in ("undefined", "null"):
        return True
    if ta == "object":
        return a is b
    return a == b


def loose_equals(a: JSValue, b: JSValue) -> bool:
    ta, tb = type_tag(a), type_tag(b)
    if ta == tb:
        return strict_equals(a, b)
    if {ta, tb} <= {"undefined", "null"}:
        return True
    if ta == "number" and tb == "string":
        return a == to_number(b)
    if ta == "string" and tb == "number":
        return to_number(a) == b
    if ta == "bigint" and tb == "string":
        return a.value == string_to_bigint(b)
    if ta == "string" and tb == "bigint":
        return loose_equals(b, a)
    if ta == "boolean":
        return loose_equals(to_number(a), b)
    if tb == "boolean":
        return loose_equals(a, to_number(b))
    if ta in ("number", "string", "bigint") and tb == "object":
        return loose_equals(a, to_primitive(b))
    if ta == "object" and tb in ("number", "string", "bigint"):
        return loose_equals(to_primitive(a), b)
    if {ta, tb} == {"bigint", "number"}:
        big, num = (a, b) if ta == "bigint" else (b, a)
        return not math.isinf(num) and big.value == num
    return False


def get_property(obj: JSValue, key: JSValue) -> JSValue:
    """Read `obj[key]` the way a property access does at run time.

    Raises MacroTypeError for null and undefined receivers.
    """
    if is_nullish(obj):
        raise MacroTypeError(
            f"Cannot read properties of {to_string(obj)} (reading '{to_string(key)}')"
        )
    name = to_string(key)
    if isinstance(obj, dict):
        return obj.get(name, UNDEFINED)
    if isinstance(obj, list):
        if name == "length":
            return len(obj)
        if _INDEX_RE.fullmatch(name) and int(name) < len(obj):
            return obj[int(name)]
    if isinstance(obj, str):
        if name == "length":
            return utf16_length(obj)
        if _INDEX_RE.fullmatch(name) and int(name) < utf16_length(obj):
            return utf16_unit_at(obj, int(name))
    return UNDEFINED
