"""Core infrastructure for the ConnectRush game."""

from .bus import EventBus, get_event_bus, reset_event_bus
from .config import (
    DEFAULT_PALETTE,
    EffectsSettings,
    GameSettings,
    Settings,
    get_settings,
    reset_settings,
)
from .events import Event, EventType
from .scheduler import ManualScheduler, MonotonicScheduler, ScheduledCall, Scheduler
from .types import (
    EMPTY,
    BoardState,
    GamePhase,
    GameState,
    MoveResult,
    Outcome,
    Position,
)


__all__ = [
    # Config
    "get_settings",
    "reset_settings",
    "Settings",
    "GameSettings",
    "EffectsSettings",
    "DEFAULT_PALETTE",
    # Types
    "EMPTY",
    "GamePhase",
    "Outcome",
    "Position",
    "BoardState",
    "MoveResult",
    "GameState",
    # Events
    "Event",
    "EventType",
    "EventBus",
    "get_event_bus",
    "reset_event_bus",
    # Scheduling
    "Scheduler",
    "ScheduledCall",
    "ManualScheduler",
    "MonotonicScheduler",
]
