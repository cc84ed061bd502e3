from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Tuple, Union

from .pieces import Piece, TetrominoType


class Action(IntEnum):
    TICK = 0
    MOVE_LEFT = 1
    MOVE_RIGHT = 2
    MOVE_DOWN = 3
    ROTATE = 4
    START_GAME = 5
    RESET_GAME = 6
    SOFT_DROP_START = 7
    SOFT_DROP_STOP = 8


@dataclass(frozen=True)
class SpawnPiece:
    """Put ``piece`` on the board.

    ``next_piece`` and ``queue``, when given, replace the look-ahead slot and
    the pending randomizer queue in the same step.
    """

    piece: Piece
    next_piece: Optional[Piece] = None
    queue: Optional[Tuple[TetrominoType, ...]] = None


Command = Union[Action, SpawnPiece]
