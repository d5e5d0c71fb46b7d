"""Literal re-encoding.

Turns a resolved value back into a literal expression node that can be
spliced into a program. The value is serialized as JSON and re-parsed as the
argument of a throwaway call, `a(<json>)`, so the fragment is whatever the
parser itself makes of that text.
"""

from __future__ import annotations

import json

from macroeval import JSValue
from macroeval.errors import LiteralEncodingError
from macroeval.reader.parser import NodePath, assert_array, parse_expression, parse_program
from macroeval.types.undefined import UNDEFINED


def build_literals(value: JSValue) -> NodePath:
    """Literal expression node for `value`.

    `undefined` has no JSON form and becomes the `undefined` token.
    Raises LiteralEncodingError for values JSON cannot represent: functions
    and other Python objects, BigInts, cyclic structures, NaN and infinities, and
    nested undefined.
    """
    if value is UNDEFINED:
        return parse_expression("undefined")
    try:
        text = json.dumps(value, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise LiteralEncodingError(f"cannot encode {value!r} as a literal: {exc}") from exc
    statement = parse_program(f"a({text})").named_children()[0]
    call = statement.named_children()[0]
    return assert_array(call.get("arguments"))[0]
