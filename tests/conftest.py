from __future__ import annotations

import random
import time
from typing import Callable

import pytest

from quantum_blocks.game import GameConfig, GameEngine, PieceRandomizer, ScoringRules


@pytest.fixture
def engine() -> GameEngine:
    config = GameConfig(random_seed=1234)
    return GameEngine(config, randomizer=PieceRandomizer(random.Random(1234), config.spawn_offset))


@pytest.fixture
def fast_rules() -> ScoringRules:
    return ScoringRules(initial_fall_delay_ms=10, soft_drop_delay_ms=5)


def _wait_until(predicate: Callable[[], bool], timeout: float = 2.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return predicate()


@pytest.fixture
def wait_until() -> Callable[..., bool]:
    return _wait_until

