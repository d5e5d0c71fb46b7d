"""
  Literal token decoding

Turns the text of tree-sitter-javascript literal nodes into Python values:

    - number  -> int (integral values in the safe range) or float; BigInt
    - string  -> str, with escape sequences decoded
    - template chunks without substitutions -> str

Numeric literals follow the JavaScript lexical grammar: hex/octal/binary
prefixes, legacy octal (`017`), numeric separators (`1_000`) and the BigInt
suffix `n`. Numbers are IEEE doubles; an int only ever stands for an integral
double no larger than MAX_SAFE_INTEGER.
"""

from __future__ import annotations

import math
import re
from typing import Iterable

from macroeval.errors import MacroSyntaxError
from macroeval.types.bigint import BigInt

_LEGACY_OCTAL_RE = re.compile(r"0[0-7]+")
_OCTAL_ESCAPE_RE = re.compile(r"[0-7]{1,3}")

SIMPLE_ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}

# JS numbers are doubles; integral values inside the safe range become ints.
MAX_SAFE_INTEGER = 2**53 - 1


def int_to_double(n: int) -> float:
    try:
        return float(n)
    except OverflowError:
        return math.copysign(math.inf, n)


def normalize_number(value: int | float) -> int | float:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        if abs(value) <= MAX_SAFE_INTEGER:
            return value
        value = int_to_double(value)
    if value.is_integer() and abs(value) <= MAX_SAFE_INTEGER and not is_negative_zero(value):
        return int(value)
    return value


def is_negative_zero(value: int | float) -> bool:
    return isinstance(value, float) and value == 0 and math.copysign(1.0, value) < 0


def parse_number(text: str) -> int | float | BigInt:
    """Parse the source text of a JavaScript numeric literal."""
    t = text.replace("_", "")
    if t.endswith("n"):
        return BigInt(int(t[:-1], 0))
    lower = t.lower()
    if lower.startswith(("0x", "0o", "0b")):
        return normalize_number(int(t, 0))
    if _LEGACY_OCTAL_RE.fullmatch(t):
        return normalize_number(int(t, 8))
    try:
        value = float(t)
    except ValueError:
        raise MacroSyntaxError(f"Invalid numeric literal {text!r}")
    if math.isinf(value):
        return value
    return normalize_number(value)


def decode_escape(escape: str) -> str:
    """Decode one escape sequence, backslash included."""
    body = escape[1:]
    if not body:
        raise MacroSyntaxError("Empty escape sequence")
    head = body[0]
    if head in ("\n", "\r", "\u2028", "\u2029"):
        # Line continuation
        return ""
    if head in SIMPLE_ESCAPES and len(body) == 1:
        return SIMPLE_ESCAPES[head]
    if head == "x":
        return chr(int(body[1:3], 16))
    if head == "u":
        if body.startswith("u{"):
            return chr(int(body[2:-1], 16))
        return chr(int(body[1:5], 16))
    if _OCTAL_ESCAPE_RE.fullmatch(body):
        # Legacy octal escape, e.g. \101; \8 and \9 stand for themselves
        return chr(int(body, 8))
    return body


def join_chunks(chunks: Iterable[str]) -> str:
    """Join decoded chunks, pairing UTF-16 surrogates produced by \\u escapes."""
    # Lone surrogates are legal in JS strings and pass through unpaired.
    text = "".join(chunks)
    return text.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "surrogatepass")


def decode_string_parts(parts: Iterable[tuple[str, str]]) -> str:
    """Decode (node type, text) pairs of a string or template literal body."""
    chunks = []
    for kind, text in parts:
        if kind == "escape_sequence":
            chunks.append(decode_escape(text))
        elif kind == "comment":
            continue
        else:
            chunks.append(text)
    return join_chunks(chunks)
