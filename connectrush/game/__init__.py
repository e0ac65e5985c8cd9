"""Game logic module for ConnectRush."""

from .engine import GameEngine
from .rules import ConnectRules, roster_for_level, roster_size


__all__ = [
    "ConnectRules",
    "GameEngine",
    "roster_for_level",
    "roster_size",
]
