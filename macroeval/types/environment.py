"""Synthetic local environment for one evaluation pass.

A LocalEnvironment is a flat mapping from variable names to the last value
assigned to them by a simple `name = expr` assignment. It deliberately has no
outer link: it models straight-line synthetic binding, not lexical scoping.
Lexical bindings declared in the program are the baseline's business.
"""

from __future__ import annotations

from io import StringIO
from typing import Iterator, Mapping

from macroeval import JSValue


class LocalEnvironment:
    """Flat mapping from names to JavaScript values, owned by one evaluator."""

    __slots__ = ("vars",)

    def __init__(self, initial: Mapping[str, JSValue] | None = None):
        self.vars: dict[str, JSValue] = dict(initial or {})

    def define(self, name: str, value: JSValue) -> None:
        """Bind `name` to `value`, replacing any earlier binding."""
        self.vars[name] = value

    def lookup(self, name: str) -> JSValue:
        """Return the value bound to `name`.

        Raises KeyError if the name was never assigned; callers check
        membership first because `undefined` and `null` are legal values.
        """
        return self.vars[name]

    def update(self, mapping: Mapping[str, JSValue]) -> None:
        """Bulk-define a mapping of name -> value."""
        for k, v in mapping.items():
            self.define(k, v)

    def __contains__(self, name: object) -> bool:
        return name in self.vars

    def __iter__(self) -> Iterator[str]:
        return iter(self.vars)

    def __len__(self) -> int:
        return len(self.vars)

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write("{")
            first = True
            for k, v in self.vars.items():
                if not first:
                    buffer.write(", ")
                buffer.write(f"{k}: {v!r}")
                first = False
            buffer.write("}")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return f"<LocalEnvironment {self}>"
