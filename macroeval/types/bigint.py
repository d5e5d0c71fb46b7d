from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BigInt:
    """JavaScript BigInt. Kept apart from int, which models Number."""
    value: int

    def __repr__(self):
        return f"{self.value}n"
