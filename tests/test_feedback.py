import random

from connectrush.core.config import EffectsSettings
from connectrush.core.events import Event, EventType
from connectrush.core.types import MoveResult, Outcome
from connectrush.effects.feedback import Cue, FeedbackController, make_sparkles


def _controller(bus, **settings):
    cues = []
    bursts = []
    controller = FeedbackController(
        cue_player=cues.append,
        sparkle_handler=bursts.append,
        bus=bus,
        settings=EffectsSettings(**settings),
        rng=random.Random(7),
    )
    return controller, cues, bursts


def test_click_only_for_accepted_moves(engine, bus):
    _, cues, _ = _controller(bus)

    engine.attempt_move(0, 0)
    engine.attempt_move(0, 1)
    engine.attempt_move(0, 1)  # ignored, no click

    assert cues == [Cue.CLICK, Cue.CLICK]


def test_win_plays_cue_and_sparkles(engine, bus):
    _, cues, bursts = _controller(bus, sparkle_count=12)

    for red, yellow in [((0, 0), (5, 0)), ((0, 1), (5, 2)), ((0, 2), (5, 4))]:
        engine.attempt_move(*red)
        engine.attempt_move(*yellow)
    engine.attempt_move(0, 3)

    assert cues[-1] == Cue.WIN
    assert len(bursts) == 1
    assert len(bursts[0]) == 12


def test_draw_has_no_celebration(bus):
    _, cues, bursts = _controller(bus)
    bus.publish(Event(type=EventType.ROUND_ENDED, data=MoveResult(outcome=Outcome.TIMEOUT)))
    assert cues == []
    assert bursts == []


def test_mute_silences_cues_but_keeps_sparkles(bus):
    controller, cues, bursts = _controller(bus)

    assert controller.toggle_mute() is False
    bus.publish(Event(type=EventType.MOVE_MADE, data={"color": "red", "row": 0, "col": 0}))
    bus.publish(Event(type=EventType.ROUND_ENDED, data=MoveResult(outcome=Outcome.WIN, color="red")))

    assert cues == []
    assert len(bursts) == 1

    assert controller.toggle_mute() is True
    bus.publish(Event(type=EventType.MOVE_MADE, data={"color": "red", "row": 0, "col": 1}))
    assert cues == [Cue.CLICK]


def test_close_unsubscribes(bus):
    controller, cues, _ = _controller(bus)
    controller.close()
    bus.publish(Event(type=EventType.MOVE_MADE))
    assert cues == []


def test_sparkles_stay_in_area_and_move():
    sparks = make_sparkles(50, 100.0, 40.0, random.Random(1))

    assert len(sparks) == 50
    for spark in sparks:
        assert 0 <= spark.x < 100
        assert 0 <= spark.y < 40
        assert 2 <= spark.radius < 5
        assert 0 <= spark.hue < 360
        assert -4 <= spark.dx <= 4

    first = sparks[0]
    x, y = first.x, first.y
    first.step()
    assert (first.x, first.y) == (x + first.dx, y + first.dy)
