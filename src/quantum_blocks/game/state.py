from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

import numpy as np

from .grid import Board
from .pieces import Piece, TetrominoType
from .rules import level_for_score


@dataclass(frozen=True)
class GameState:
    """Immutable snapshot of one game.

    Only ``GameEngine.process_command`` produces new snapshots; renderers
    read them and must not try to change them.
    """

    board: Board = field(default_factory=Board.empty)
    current_piece: Optional[Piece] = None
    next_piece: Optional[Piece] = None
    game_over: bool = False
    score: int = 0
    needs_new_piece: bool = False
    soft_drop_active: bool = False
    randomizer_queue: Tuple[TetrominoType, ...] = ()
    lines_cleared_total: int = 0

    @property
    def level(self) -> int:
        return level_for_score(self.score)

    @property
    def board_height(self) -> int:
        return self.board.height

    @property
    def board_width(self) -> int:
        return self.board.width

    def to_matrix(self) -> np.ndarray:
        # Locked cells are 1, the falling piece is overlaid as -kind
        state = self.board.to_array().astype(np.int8)
        if self.current_piece is not None and not self.game_over:
            for b in self.current_piece.blocks:
                if self.board.is_inside(b):
                    state[b.row, b.col] = -int(self.current_piece.kind)
        return state
