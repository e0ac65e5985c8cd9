import logging

from connectrush.core.bus import EventBus, get_event_bus, reset_event_bus
from connectrush.core.events import Event, EventType


def test_publish_reaches_subscribers():
    bus = EventBus()
    received = []
    bus.subscribe(EventType.SCORE_CHANGED, received.append)

    bus.publish(Event(type=EventType.SCORE_CHANGED, data={"score": 3}))
    bus.publish(Event(type=EventType.LEVEL_CHANGED, data={"level": 2}))

    assert [e.data for e in received] == [{"score": 3}]


def test_subscribe_is_idempotent_and_unsubscribe_stops_delivery():
    bus = EventBus()
    received = []
    bus.subscribe(EventType.GAME_RESET, received.append)
    bus.subscribe(EventType.GAME_RESET, received.append)

    bus.publish(Event(type=EventType.GAME_RESET))
    bus.unsubscribe(EventType.GAME_RESET, received.append)
    bus.publish(Event(type=EventType.GAME_RESET))

    assert len(received) == 1


def test_failing_handler_is_logged_and_others_still_run(caplog):
    bus = EventBus()
    received = []

    def broken(event):
        raise RuntimeError("boom")

    bus.subscribe(EventType.ROUND_ENDED, broken)
    bus.subscribe(EventType.ROUND_ENDED, received.append)

    with caplog.at_level(logging.ERROR, logger="connectrush.core.bus"):
        bus.publish(Event(type=EventType.ROUND_ENDED))

    assert len(received) == 1
    assert "ROUND_ENDED" in caplog.text


def test_singleton_reset():
    first = get_event_bus()
    assert get_event_bus() is first
    reset_event_bus()
    assert get_event_bus() is not first


def test_event_str_names_type_and_source():
    event = Event(type=EventType.TIME_CHANGED, data={"seconds_left": 4}, source="game_engine")
    assert str(event) == "[game_engine] TIME_CHANGED: {'seconds_left': 4}"
