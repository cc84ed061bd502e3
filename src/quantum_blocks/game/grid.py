from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np

from .pieces import Piece
from .position import Position


MIN_SIZE = 4


class Board:
    """Fixed-size occupancy grid.

    ``True`` marks an occupied cell. Row 0 is the top. The backing array is
    read-only; every mutating operation returns a new Board.
    """

    def __init__(self, height: int, width: int, cells: Optional[np.ndarray] = None) -> None:
        self.height = int(height)
        self.width = int(width)
        if self.height < MIN_SIZE or self.width < MIN_SIZE:
            raise ValueError(f"board must be at least {MIN_SIZE}x{MIN_SIZE}, got {height}x{width}")
        if cells is None:
            cells = np.zeros((self.height, self.width), dtype=np.bool_)
        else:
            cells = np.array(cells, dtype=np.bool_)
            if cells.shape != (self.height, self.width):
                raise ValueError(f"cells shape {cells.shape} does not match {(self.height, self.width)}")
        cells.setflags(write=False)
        self._cells = cells

    @classmethod
    def empty(cls, height: int = 20, width: int = 10) -> "Board":
        return cls(height, width)

    @classmethod
    def from_rows(cls, rows: List[List[bool]]) -> "Board":
        arr = np.array(rows, dtype=np.bool_)
        return cls(arr.shape[0], arr.shape[1], arr)

    def is_inside(self, pos: Position) -> bool:
        return 0 <= pos.row < self.height and 0 <= pos.col < self.width

    def is_occupied(self, row: int, col: int) -> bool:
        return bool(self._cells[row, col])

    def is_valid_cell(self, pos: Position) -> bool:
        return self.is_inside(pos) and not self._cells[pos.row, pos.col]

    def can_place(self, piece: Piece) -> bool:
        return all(self.is_valid_cell(b) for b in piece.blocks)

    def place(self, piece: Piece) -> "Board":
        """Mark the piece's blocks occupied; out-of-bounds blocks are ignored."""
        grid = self._cells.copy()
        for b in piece.blocks:
            if self.is_inside(b):
                grid[b.row, b.col] = True
        return Board(self.height, self.width, grid)

    def clear_full_lines(self) -> Tuple["Board", int]:
        full_rows = np.where(np.all(self._cells, axis=1))[0]
        if full_rows.size == 0:
            return self, 0
        num = int(full_rows.size)
        # Remove every full row at once, then pad with empty rows at the top
        kept = np.delete(self._cells, full_rows, axis=0)
        new_rows = np.zeros((num, self.width), dtype=np.bool_)
        return Board(self.height, self.width, np.vstack((new_rows, kept))), num

    def rows(self) -> List[List[bool]]:
        return [[bool(v) for v in row] for row in self._cells]

    def to_array(self) -> np.ndarray:
        return self._cells.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.height == other.height and self.width == other.width and bool(
            np.array_equal(self._cells, other._cells)
        )

    def __hash__(self) -> int:
        return hash((self.height, self.width, self._cells.tobytes()))

    def __repr__(self) -> str:
        return f"Board({self.height}x{self.width}, filled={int(self._cells.sum())})"
