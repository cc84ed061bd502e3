from __future__ import annotations

import logging
import threading
from typing import Callable, List, Optional, Tuple, Union

from .commands import Command
from .engine import GameEngine
from .state import GameState


logger = logging.getLogger(__name__)

Listener = Callable[[GameState], None]
CommandFactory = Callable[[GameState], Optional[Command]]


class GameStateHolder:
    """Owns the one authoritative GameState of a session.

    Writers are serialized: every command is computed against the latest
    committed snapshot and published by a single reference swap. Readers use
    ``state`` and never take the lock.

    Listeners run after the write lock is released, so a slow listener never
    holds up another command. Delivery is latest-wins: snapshots arrive in
    publish order, but one published while a listener is busy may be skipped
    in favour of a newer one.
    """

    def __init__(self, engine: GameEngine, initial_state: Optional[GameState] = None) -> None:
        self.engine = engine
        initial = initial_state if initial_state is not None else engine.initial_state()
        self._published: Tuple[int, GameState] = (0, initial)
        self._delivered = 0
        self._lock = threading.RLock()
        self._notify_lock = threading.Lock()
        self._listeners: List[Listener] = []

    @property
    def state(self) -> GameState:
        return self._published[1]

    def dispatch(
        self,
        command: Union[Command, CommandFactory],
        guard: Optional[Callable[[], bool]] = None,
    ) -> GameState:
        """Apply ``command`` to the latest snapshot and publish the result.

        ``command`` may be a callable that builds the command from the latest
        snapshot; returning None skips the update. ``guard`` is checked inside
        the critical section and vetoes the update when it returns False.
        """
        with self._lock:
            version, current = self._published
            if guard is not None and not guard():
                return current
            if callable(command):
                command = command(current)
                if command is None:
                    return current
            new_state = self.engine.process_command(command, current)
            if new_state is current:
                return current
            self._published = (version + 1, new_state)
        self._deliver()
        return new_state

    def barrier(self) -> None:
        """Wait for any in-flight dispatch to finish."""
        with self._lock:
            pass

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _deliver(self) -> None:
        while True:
            # Whoever holds the notify lock picks up our snapshot on its next pass
            if not self._notify_lock.acquire(blocking=False):
                return
            try:
                version, state = self._published
                if version > self._delivered:
                    self._delivered = version
                    self._notify(state)
            finally:
                self._notify_lock.release()
            if self._published[0] == self._delivered:
                return

    def _notify(self, state: GameState) -> None:
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("state listener %r failed", listener)
