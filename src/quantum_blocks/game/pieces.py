from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Tuple

from .position import Position


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


# (blocks, center) in each shape's local frame, as (row, col)
BASE_SHAPES: Dict[TetrominoType, Tuple[Tuple[Tuple[int, int], ...], Tuple[int, int]]] = {
    TetrominoType.I: (((0, 0), (0, 1), (0, 2), (0, 3)), (0, 1)),
    TetrominoType.O: (((0, 0), (0, 1), (1, 0), (1, 1)), (0, 0)),
    TetrominoType.T: (((0, 1), (1, 0), (1, 1), (1, 2)), (1, 1)),
    TetrominoType.S: (((0, 1), (0, 2), (1, 0), (1, 1)), (1, 1)),
    TetrominoType.Z: (((0, 0), (0, 1), (1, 1), (1, 2)), (1, 1)),
    TetrominoType.J: (((0, 0), (1, 0), (1, 1), (1, 2)), (1, 1)),
    TetrominoType.L: (((0, 2), (1, 0), (1, 1), (1, 2)), (1, 1)),
}


def _rotate_cw(pos: Position, center: Position) -> Position:
    rel = pos - center
    return center + Position(rel.col, -rel.row)


@dataclass(frozen=True)
class Piece:
    """A tetromino in absolute board coordinates.

    ``center`` is the rotation pivot and need not be one of the blocks.
    Pieces never check legality; that is the board's job.
    """

    kind: TetrominoType
    blocks: Tuple[Position, ...]
    center: Position

    def __post_init__(self) -> None:
        if len(self.blocks) != 4:
            raise ValueError(f"a tetromino has exactly 4 blocks, got {len(self.blocks)}")

    @classmethod
    def create(cls, kind: TetrominoType, offset: Position = Position(0, 0)) -> "Piece":
        cells, (crow, ccol) = BASE_SHAPES[kind]
        blocks = tuple(Position(r, c) + offset for r, c in cells)
        return cls(kind=kind, blocks=blocks, center=Position(crow, ccol) + offset)

    def move(self, delta: Position) -> "Piece":
        return Piece(
            kind=self.kind,
            blocks=tuple(b + delta for b in self.blocks),
            center=self.center + delta,
        )

    def rotate(self) -> "Piece":
        # The square looks the same in every orientation
        if self.kind is TetrominoType.O:
            return self
        return Piece(
            kind=self.kind,
            blocks=tuple(_rotate_cw(b, self.center) for b in self.blocks),
            center=self.center,
        )

    def cells(self) -> frozenset:
        return frozenset(self.blocks)
