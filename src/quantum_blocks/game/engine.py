from __future__ import annotations

import logging
import random
from dataclasses import dataclass, replace
from typing import Optional

from .commands import Action, Command, SpawnPiece
from .grid import MIN_SIZE, Board
from .pieces import Piece, TetrominoType
from .position import Position
from .randomizer import PieceRandomizer
from .rules import ScoringRules
from .state import GameState


logger = logging.getLogger(__name__)

LEFT = Position(0, -1)
RIGHT = Position(0, 1)
DOWN = Position(1, 0)


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    random_seed: Optional[int] = None
    spawn_row: int = 0

    def __post_init__(self) -> None:
        if self.height < MIN_SIZE or self.width < MIN_SIZE:
            raise ValueError(f"board must be at least {MIN_SIZE}x{MIN_SIZE}, got {self.height}x{self.width}")
        # Every shape must fit on an empty board at the spawn offset
        for kind in TetrominoType:
            piece = Piece.create(kind, self.spawn_offset)
            if not all(0 <= b.row < self.height and 0 <= b.col < self.width for b in piece.blocks):
                raise ValueError(
                    f"{kind.name} piece does not fit at spawn offset on a {self.height}x{self.width} board"
                )

    @property
    def spawn_offset(self) -> Position:
        return Position(self.spawn_row, self.width // 2 - 1)


class GameEngine:
    """Command processor: ``process_command(command, state) -> state``.

    The engine keeps no game state of its own. Its random source is only
    consumed on reset and by spawn draws, both of which the state holder
    runs inside its critical section.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        randomizer: Optional[PieceRandomizer] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.randomizer = randomizer or PieceRandomizer(
            random.Random(self.config.random_seed), self.config.spawn_offset
        )

    def initial_state(self) -> GameState:
        return GameState(board=Board.empty(self.config.height, self.config.width))

    def reset_game(self) -> GameState:
        return replace(self.initial_state(), randomizer_queue=self.randomizer.refill())

    def process_command(self, command: Command, state: GameState) -> GameState:
        if isinstance(command, SpawnPiece):
            return self._spawn(command, state)
        if not isinstance(command, Action):
            raise TypeError(f"unknown command: {command!r}")

        if command == Action.RESET_GAME:
            return self.reset_game()
        if state.game_over:
            return state
        if command == Action.SOFT_DROP_STOP:
            return replace(state, soft_drop_active=False) if state.soft_drop_active else state

        if command == Action.START_GAME:
            return state
        if command == Action.SOFT_DROP_START:
            return state if state.soft_drop_active else replace(state, soft_drop_active=True)
        if state.current_piece is None:
            return state

        if command == Action.MOVE_LEFT:
            return self._try_move(state, state.current_piece.move(LEFT))
        elif command == Action.MOVE_RIGHT:
            return self._try_move(state, state.current_piece.move(RIGHT))
        elif command == Action.ROTATE:
            return self._try_move(state, state.current_piece.rotate())
        elif command in (Action.MOVE_DOWN, Action.TICK):
            moved = state.current_piece.move(DOWN)
            if state.board.can_place(moved):
                return replace(state, current_piece=moved)
            return self._lock_piece(state)
        raise TypeError(f"unhandled action: {command!r}")

    def _try_move(self, state: GameState, candidate: Piece) -> GameState:
        if state.board.can_place(candidate):
            return replace(state, current_piece=candidate)
        return state

    def _spawn(self, command: SpawnPiece, state: GameState) -> GameState:
        extra = {}
        if command.next_piece is not None:
            extra["next_piece"] = command.next_piece
        if command.queue is not None:
            extra["randomizer_queue"] = command.queue
        if state.board.can_place(command.piece):
            return replace(state, current_piece=command.piece, game_over=False, needs_new_piece=False, **extra)
        logger.debug("no room to spawn %s, game over at score %d", command.piece.kind.name, state.score)
        return replace(state, current_piece=None, game_over=True, needs_new_piece=False, **extra)

    def _lock_piece(self, state: GameState) -> GameState:
        piece = state.current_piece
        assert piece is not None
        board, lines = state.board.place(piece).clear_full_lines()
        gained = self.rules.score_for_lines(lines) * state.level
        if lines:
            logger.debug("locked %s, cleared %d line(s) for %d points", piece.kind.name, lines, gained)
        else:
            logger.debug("locked %s", piece.kind.name)
        return replace(
            state,
            board=board,
            current_piece=None,
            needs_new_piece=True,
            score=state.score + gained,
            lines_cleared_total=state.lines_cleared_total + lines,
        )
