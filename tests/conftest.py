import pytest

from connectrush.core.bus import EventBus, reset_event_bus
from connectrush.core.config import GameSettings, reset_settings
from connectrush.core.events import Event, EventType
from connectrush.core.scheduler import ManualScheduler
from connectrush.game.engine import GameEngine


@pytest.fixture(autouse=True)
def _isolate_singletons(monkeypatch):
    for key in ("GAME_ROWS", "GAME_COLS", "GAME_PALETTE", "GAME_ROUND_SECONDS", "EFFECTS_SOUND_ENABLED"):
        monkeypatch.delenv(key, raising=False)
    reset_settings()
    reset_event_bus()
    yield
    reset_settings()
    reset_event_bus()


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def events(bus):
    """Every event published on the bus, in order."""
    captured: list[Event] = []
    for event_type in EventType:
        bus.subscribe(event_type, captured.append)
    return captured


@pytest.fixture
def make_engine(bus, scheduler):
    def _make(**overrides) -> GameEngine:
        settings = GameSettings(**overrides)
        return GameEngine(bus=bus, scheduler=scheduler, settings=settings)

    return _make


@pytest.fixture
def engine(make_engine):
    return make_engine()
