from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    """A (row, col) cell coordinate. Row 0 is the top of the board."""

    row: int
    col: int

    def __add__(self, other: "Position") -> "Position":
        return Position(self.row + other.row, self.col + other.col)

    def __sub__(self, other: "Position") -> "Position":
        return Position(self.row - other.row, self.col - other.col)
