"""
Rectangular grid holding at most one occupant per cell.

The field only stores references; entity lifetime belongs to the Simulator.
Neighbour enumeration is a row-major scan, so the first free cell handed out
is always the same for a given occupancy.
"""
from __future__ import annotations

from typing import Iterator, List, Optional

import numpy as np

from savanna.location import Location


class InvalidPlacement(ValueError):
    """Raised when a location outside the field is used."""


def _in_bounds(row: int, col: int, depth: int, width: int) -> bool:
    return 0 <= row < depth and 0 <= col < width


class Field:
    def __init__(self, depth: int, width: int):
        if depth <= 0 or width <= 0:
            raise ValueError(f"Field dimensions must be positive, got {depth}x{width}")
        self._depth = depth
        self._width = width
        self._cells = np.empty((depth, width), dtype=object)

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def width(self) -> int:
        return self._width

    def in_bounds(self, location: Location) -> bool:
        return _in_bounds(location.row, location.col, self._depth, self._width)

    def _check(self, location: Location) -> None:
        if not self.in_bounds(location):
            raise InvalidPlacement(
                f"Location {location} outside field of size {self._depth}x{self._width}"
            )

    def place(self, entity, location: Location) -> None:
        self._check(location)
        self._cells[location.row, location.col] = entity

    def clear(self, location: Location) -> None:
        self._check(location)
        self._cells[location.row, location.col] = None

    def clear_all(self) -> None:
        self._cells.fill(None)

    def occupant_at(self, location: Location):
        self._check(location)
        return self._cells[location.row, location.col]

    def locations(self) -> Iterator[Location]:
        for row in range(self._depth):
            for col in range(self._width):
                yield Location(row, col)

    def neighbors(self, location: Location, radius: int = 1) -> List[Location]:
        """In-bounds cells within Chebyshev distance `radius`, centre excluded, row-major."""
        result = []
        for row in range(location.row - radius, location.row + radius + 1):
            for col in range(location.col - radius, location.col + radius + 1):
                if row == location.row and col == location.col:
                    continue
                if _in_bounds(row, col, self._depth, self._width):
                    result.append(Location(row, col))
        return result

    def free_neighbors(self, location: Location, radius: int = 1) -> List[Location]:
        return [
            where
            for where in self.neighbors(location, radius)
            if self._cells[where.row, where.col] is None
        ]

    def free_adjacent_location(self, location: Location) -> Optional[Location]:
        free = self.free_neighbors(location, 1)
        return free[0] if free else None

    def __repr__(self) -> str:
        return f"Field(depth={self._depth}, width={self._width})"
