from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Location:
    """A (row, col) coordinate on the field. Equality and hash by coordinates."""

    row: int
    col: int

    def __str__(self) -> str:
        return f"{self.row},{self.col}"
