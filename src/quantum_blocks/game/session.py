from __future__ import annotations

import logging
import threading
from typing import Callable, Optional, Union

from .commands import Action, Command, SpawnPiece
from .engine import GameConfig, GameEngine
from .holder import CommandFactory, GameStateHolder, Listener
from .rules import ScoringRules
from .scheduler import FallTimer, SoftDropTimer
from .state import GameState


logger = logging.getLogger(__name__)


class GameSession:
    """Runs one game: wires engine, state holder, piece supply and timers.

    User input and both timers go through ``dispatch``. After every command
    the session tops up the falling piece when the engine asks for one and
    stops the timers once the game is over.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        engine: Optional[GameEngine] = None,
        autostart_timers: bool = True,
    ) -> None:
        self.engine = engine or GameEngine(config, rules)
        self.rules = self.engine.rules
        self.holder = GameStateHolder(self.engine)
        self.autostart_timers = autostart_timers
        self._timers_lock = threading.RLock()
        self._fall_timer: Optional[FallTimer] = None
        self._soft_drop_timer: Optional[SoftDropTimer] = None

    @property
    def state(self) -> GameState:
        return self.holder.state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        return self.holder.subscribe(listener)

    # Piece supply

    def _next_spawn(self, state: GameState) -> SpawnPiece:
        randomizer = self.engine.randomizer
        piece, queue = state.next_piece, state.randomizer_queue
        if piece is None:
            piece, queue = randomizer.next(queue)
        next_piece, queue = randomizer.next(queue)
        return SpawnPiece(piece, next_piece=next_piece, queue=queue)

    def _spawn_if_needed(self, state: GameState) -> Optional[SpawnPiece]:
        if state.needs_new_piece and not state.game_over:
            return self._next_spawn(state)
        return None

    # Command path

    def dispatch(
        self,
        command: Union[Command, CommandFactory],
        guard: Optional[Callable[[], bool]] = None,
    ) -> GameState:
        state = self.holder.dispatch(command, guard=guard)
        if state.needs_new_piece and not state.game_over:
            state = self.holder.dispatch(self._spawn_if_needed)
        if state.game_over:
            self._stop_timers_on_game_over()
        return state

    def start_new_game(self) -> GameState:
        with self._timers_lock:
            self._cancel_timers()
            self.holder.dispatch(Action.RESET_GAME)
            state = self.holder.dispatch(self._next_spawn)
            if state.game_over:
                logger.debug("first piece could not spawn")
            elif self.autostart_timers:
                self._fall_timer = FallTimer(self.holder, self.rules, dispatch=self.dispatch)
                self._fall_timer.start()
            return state

    # Input

    def _input(self, command: Command) -> GameState:
        if self.holder.state.game_over:
            return self.holder.state
        return self.dispatch(command)

    def move_left(self) -> GameState:
        return self._input(Action.MOVE_LEFT)

    def move_right(self) -> GameState:
        return self._input(Action.MOVE_RIGHT)

    def rotate(self) -> GameState:
        return self._input(Action.ROTATE)

    def move_down(self) -> GameState:
        return self._input(Action.MOVE_DOWN)

    def soft_drop_start(self) -> GameState:
        if self.holder.state.game_over:
            return self.holder.state
        with self._timers_lock:
            if self._soft_drop_timer is not None:
                self._soft_drop_timer.cancel()
            state = self.dispatch(Action.SOFT_DROP_START)
            if state.soft_drop_active and self.autostart_timers:
                self._soft_drop_timer = SoftDropTimer(self.holder, self.rules, dispatch=self.dispatch)
                self._soft_drop_timer.start()
            return state

    def soft_drop_stop(self) -> GameState:
        with self._timers_lock:
            state = self.dispatch(Action.SOFT_DROP_STOP)
            if self._soft_drop_timer is not None:
                self._soft_drop_timer.cancel()
                self._soft_drop_timer = None
            return state

    # Timers

    @property
    def fall_timer(self) -> Optional[FallTimer]:
        return self._fall_timer

    @property
    def soft_drop_timer(self) -> Optional[SoftDropTimer]:
        return self._soft_drop_timer

    def _cancel_timers(self) -> None:
        for timer in (self._fall_timer, self._soft_drop_timer):
            if timer is not None:
                timer.cancel()
        self._fall_timer = None
        self._soft_drop_timer = None

    def _stop_timers_on_game_over(self) -> None:
        with self._timers_lock:
            # A restart may have happened while we waited for the lock
            if self.holder.state.game_over:
                self._cancel_timers()

    def close(self, timeout: float = 1.0) -> None:
        with self._timers_lock:
            timers = [t for t in (self._fall_timer, self._soft_drop_timer) if t is not None]
            self._cancel_timers()
        for timer in timers:
            if timer is not threading.current_thread():
                timer.join(timeout)

    def __enter__(self) -> "GameSession":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
