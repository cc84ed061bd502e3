from __future__ import annotations

import random
from typing import Optional, Tuple

from .pieces import Piece, TetrominoType
from .position import Position


Queue = Tuple[TetrominoType, ...]


class PieceRandomizer:
    """7-bag piece sequencing.

    Each refill is a shuffled permutation of all seven shapes, so every shape
    shows up exactly once per bag and no shape is absent for more than 12
    consecutive draws. The queue itself lives in the game state; this object
    only holds the random source and the spawn offset.
    """

    def __init__(self, rng: Optional[random.Random] = None, spawn_offset: Position = Position(0, 4)) -> None:
        self.rng = rng or random.Random()
        self.spawn_offset = spawn_offset

    def refill(self) -> Queue:
        bag = list(TetrominoType)
        self.rng.shuffle(bag)
        return tuple(bag)

    def next(self, queue: Queue) -> Tuple[Piece, Queue]:
        if not queue:
            queue = self.refill()
        kind, rest = queue[0], queue[1:]
        return Piece.create(kind, self.spawn_offset), rest
