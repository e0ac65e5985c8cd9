"""ConnectRush: connect-four against the clock, one more color every level."""

from .core import GamePhase, MoveResult, Outcome, Position
from .game import ConnectRules, GameEngine


__version__ = "0.1.0"

__all__ = [
    "ConnectRules",
    "GameEngine",
    "GamePhase",
    "MoveResult",
    "Outcome",
    "Position",
]
