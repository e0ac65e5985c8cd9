"""Audio/visual feedback driven by engine events.

Listens on the bus and turns moves and wins into cues for whatever can
play them. Mute is purely presentation state; the engine never sees it.
"""

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from ..core.bus import EventBus, get_event_bus
from ..core.config import EffectsSettings, get_settings
from ..core.events import Event, EventType
from ..core.types import MoveResult, Outcome


logger = logging.getLogger(__name__)


class Cue(str, Enum):
    """Sound cues."""

    CLICK = "click"
    WIN = "win"


@dataclass
class Spark:
    """One particle of a win celebration."""

    x: float
    y: float
    radius: float
    hue: int
    dx: float
    dy: float

    def step(self) -> None:
        self.x += self.dx
        self.y += self.dy


def make_sparkles(
    count: int,
    width: float,
    height: float,
    rng: random.Random | None = None,
) -> list[Spark]:
    """Scatter count sparks over a width x height area with random drift."""
    rng = rng or random.Random()
    return [
        Spark(
            x=rng.random() * width,
            y=rng.random() * height,
            radius=rng.random() * 3 + 2,
            hue=rng.randrange(360),
            dx=(rng.random() - 0.5) * 8,
            dy=(rng.random() - 0.5) * 8,
        )
        for _ in range(count)
    ]


class FeedbackController:
    """Effects layer subscriber.

    Plays a click for every accepted move and a win cue plus a sparkle
    burst when a round is won.
    """

    def __init__(
        self,
        cue_player: Callable[[Cue], None],
        sparkle_handler: Callable[[list[Spark]], None] | None = None,
        bus: EventBus | None = None,
        settings: EffectsSettings | None = None,
        rng: random.Random | None = None,
        area: tuple[float, float] = (80.0, 24.0),
    ):
        """Initialize and subscribe.

        Args:
            cue_player: Called with each cue while sound is enabled
            sparkle_handler: Called with the sparks of a win burst
            bus: Event bus (uses global if None)
            settings: Effects settings (uses global if None)
            rng: Random source for sparkles
            area: Width and height the sparks are scattered over
        """
        self.settings = settings or get_settings().effects
        self.sound_enabled = self.settings.sound_enabled
        self.cue_player = cue_player
        self.sparkle_handler = sparkle_handler
        self.bus = bus or get_event_bus()
        self.rng = rng or random.Random()
        self.area = area

        self.bus.subscribe(EventType.MOVE_MADE, self._on_move)
        self.bus.subscribe(EventType.ROUND_ENDED, self._on_round_ended)

    def toggle_mute(self) -> bool:
        """Flip sound on/off. Returns True if sound is now enabled."""
        self.sound_enabled = not self.sound_enabled
        logger.debug("Sound %s", "enabled" if self.sound_enabled else "muted")
        return self.sound_enabled

    def close(self) -> None:
        """Stop listening to the bus."""
        self.bus.unsubscribe(EventType.MOVE_MADE, self._on_move)
        self.bus.unsubscribe(EventType.ROUND_ENDED, self._on_round_ended)

    def _play(self, cue: Cue) -> None:
        if self.sound_enabled:
            self.cue_player(cue)

    def _on_move(self, event: Event) -> None:
        self._play(Cue.CLICK)

    def _on_round_ended(self, event: Event) -> None:
        result: MoveResult = event.data
        if result.outcome != Outcome.WIN:
            return
        if self.sparkle_handler is not None and self.settings.sparkle_count:
            width, height = self.area
            self.sparkle_handler(make_sparkles(self.settings.sparkle_count, width, height, self.rng))
        self._play(Cue.WIN)
