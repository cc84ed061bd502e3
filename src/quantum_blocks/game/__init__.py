"""Game module for Quantum Blocks.

Exports the rules engine and supporting classes:
- Position: (row, col) board coordinate
- Piece, TetrominoType: the seven tetrominoes with move and rotation
- Board: occupancy grid, collision checks and line clearing
- PieceRandomizer: 7-bag piece sequencing
- ScoringRules: line-clear table and fall-speed formula
- GameState: immutable snapshot of a game
- Action, SpawnPiece: commands understood by the engine
- GameEngine: pure command processor
- GameStateHolder: serialized owner of the current snapshot
- FallTimer, SoftDropTimer: background tick loops
- GameSession: orchestrates a full game
"""

import logging

from .position import Position
from .pieces import Piece, TetrominoType
from .grid import Board
from .randomizer import PieceRandomizer
from .rules import ScoringRules, level_for_score
from .state import GameState
from .commands import Action, Command, SpawnPiece
from .engine import GameConfig, GameEngine
from .holder import GameStateHolder
from .scheduler import FallTimer, SoftDropTimer
from .session import GameSession

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Position",
    "Piece",
    "TetrominoType",
    "Board",
    "PieceRandomizer",
    "ScoringRules",
    "level_for_score",
    "GameState",
    "Action",
    "Command",
    "SpawnPiece",
    "GameConfig",
    "GameEngine",
    "GameStateHolder",
    "FallTimer",
    "SoftDropTimer",
    "GameSession",
]
