"""
Event definitions for the ConnectRush game.

The engine publishes these events; presentation and effects layers
subscribe to them without the engine knowing who listens.
"""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any


class EventType(Enum):
    """Types of events in the system."""

    # Board & turn events
    BOARD_CHANGED = auto()  # data: BoardState snapshot
    MOVE_MADE = auto()  # data: {"color", "row", "col"}
    TURN_CHANGED = auto()  # data: {"color", "index"}

    # Level & scoring events
    LEVEL_CHANGED = auto()  # data: {"level", "roster"}
    SCORE_CHANGED = auto()  # data: {"score"}
    TIME_CHANGED = auto()  # data: {"seconds_left"}

    # Round lifecycle
    ROUND_ENDED = auto()  # data: MoveResult
    GAME_FINISHED = auto()  # data: {"level", "score"}
    GAME_RESET = auto()
    LEVEL_RESET = auto()  # data: {"level"}


@dataclass
class Event:
    """
    Base event structure.

    Attributes:
        type: The type of event
        data: Event-specific payload
        timestamp: When the event was created
        source: Which module created the event
    """

    type: EventType
    data: Any = None
    timestamp: float = field(default_factory=time.time)
    source: str = "unknown"

    def __str__(self) -> str:
        return f"[{self.source}] {self.type.name}: {self.data}"
