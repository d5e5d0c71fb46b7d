"""Evaluation results.

An evaluation either proves a value (`Confident`) or gives up (`UNKNOWN`).
A confident value may be deferred behind a thunk: confidence is reported
without computing the value, and the thunk runs on the first read of
`.value`. Once a thunk has produced a value that value is reused, so reads
are stable for the lifetime of the result.
"""

from __future__ import annotations

from typing import Callable, Union

from macroeval import JSValue

_UNSET = object()


class Confident:
    __slots__ = ("_compute", "_value")

    confident = True

    def __init__(self, value: JSValue = _UNSET, compute: Callable[[], JSValue] | None = None):
        if (value is _UNSET) == (compute is None):
            raise TypeError("Confident needs exactly one of value or compute")
        self._value = value
        self._compute = compute

    @classmethod
    def deferred(cls, compute: Callable[[], JSValue]) -> Confident:
        return cls(compute=compute)

    @property
    def is_forced(self) -> bool:
        return self._value is not _UNSET

    @property
    def value(self) -> JSValue:
        if self._value is _UNSET:
            # A raising thunk leaves the result unforced; every read raises again.
            self._value = self._compute()
            self._compute = None
        return self._value

    def __repr__(self):
        if self._value is _UNSET:
            return "Confident(<deferred>)"
        return f"Confident({self._value!r})"


class Unknown:
    __slots__ = ()

    confident = False
    _instance: Unknown | None = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "Unknown"


UNKNOWN = Unknown()

EvaluateResult = Union[Confident, Unknown]
