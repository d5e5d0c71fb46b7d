from __future__ import annotations


class UndefinedType:
    """JavaScript `undefined`, kept distinct from None (which models `null`)."""

    __slots__ = ()
    _instance: UndefinedType | None = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self): return "undefined"
    def __bool__(self): return False

    def __eq__(self, other):
        return isinstance(other, UndefinedType)

    def __hash__(self):
        return hash(UndefinedType)

    def __reduce__(self):
        return (UndefinedType, ())


UNDEFINED = UndefinedType()
