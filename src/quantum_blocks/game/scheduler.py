from __future__ import annotations

import logging
import threading
from abc import ABCMeta, abstractmethod
from typing import Callable, Optional

from .commands import Action, Command
from .holder import GameStateHolder
from .rules import ScoringRules


logger = logging.getLogger(__name__)

Dispatch = Callable[..., object]


class _TimerThread(threading.Thread, metaclass=ABCMeta):
    """Daemon loop that issues one command per period until cancelled.

    ``cancel()`` is immediate: once it returns, this timer issues no more
    commands. Dispatches are guarded inside the holder's critical section,
    and cancel waits out any dispatch already in progress.
    """

    command: Command = Action.TICK

    def __init__(
        self,
        holder: GameStateHolder,
        rules: ScoringRules,
        dispatch: Optional[Dispatch] = None,
        name: Optional[str] = None,
    ) -> None:
        super().__init__(daemon=True, name=name)
        self.holder = holder
        self.rules = rules
        self._dispatch = dispatch or holder.dispatch
        self._stopped = threading.Event()

    @property
    def cancelled(self) -> bool:
        return self._stopped.is_set()

    def _live(self) -> bool:
        return not self._stopped.is_set()

    def cancel(self) -> None:
        if not self._stopped.is_set():
            logger.debug("%s cancelled", self.name)
        self._stopped.set()
        self.holder.barrier()

    @abstractmethod
    def next_delay(self) -> float:
        """Seconds to wait before the next command."""

    def should_continue(self) -> bool:
        return not self.holder.state.game_over

    def run(self) -> None:
        logger.debug("%s started", self.name)
        while not self._stopped.is_set():
            if self._stopped.wait(self.next_delay()):
                break
            if not self.should_continue():
                break
            self._dispatch(self.command, guard=self._live)
        logger.debug("%s stopped", self.name)


class FallTimer(_TimerThread):
    """Issues TICK at the score-derived fall interval."""

    command = Action.TICK

    def __init__(self, holder: GameStateHolder, rules: ScoringRules, dispatch: Optional[Dispatch] = None) -> None:
        super().__init__(holder, rules, dispatch, name="fall-timer")

    def next_delay(self) -> float:
        # Re-read the score every round so speed-ups apply immediately
        return self.rules.fall_delay_ms(self.holder.state.score) / 1000.0


class SoftDropTimer(_TimerThread):
    """Issues MOVE_DOWN on a fixed short period while soft drop is held."""

    command = Action.MOVE_DOWN

    def __init__(self, holder: GameStateHolder, rules: ScoringRules, dispatch: Optional[Dispatch] = None) -> None:
        super().__init__(holder, rules, dispatch, name="soft-drop-timer")

    def next_delay(self) -> float:
        return self.rules.soft_drop_delay_ms / 1000.0

    def should_continue(self) -> bool:
        state = self.holder.state
        return state.soft_drop_active and not state.game_over
