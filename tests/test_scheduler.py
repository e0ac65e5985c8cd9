import pytest

from connectrush.core.scheduler import ManualScheduler, MonotonicScheduler


def test_call_runs_when_due():
    scheduler = ManualScheduler()
    calls = []
    scheduler.call_later(2.0, lambda: calls.append(scheduler.now()))

    scheduler.advance(1.0)
    assert calls == []

    scheduler.advance(1.0)
    assert calls == [2.0]
    assert scheduler.now() == 2.0


def test_calls_run_in_time_then_schedule_order():
    scheduler = ManualScheduler()
    calls = []
    scheduler.call_later(1.0, lambda: calls.append("b"))
    scheduler.call_later(0.5, lambda: calls.append("a"))
    scheduler.call_later(1.0, lambda: calls.append("c"))

    scheduler.advance(5)

    assert calls == ["a", "b", "c"]


def test_cancelled_call_never_runs():
    scheduler = ManualScheduler()
    calls = []
    call = scheduler.call_later(1.0, lambda: calls.append(1))

    assert call.cancel() is True
    assert call.cancel() is False
    scheduler.advance(5)

    assert calls == []
    assert call.cancelled
    assert not call.active


def test_cancel_after_run_returns_false():
    scheduler = ManualScheduler()
    call = scheduler.call_later(0.0, lambda: None)
    scheduler.run_pending()
    assert call.cancel() is False


def test_callbacks_can_reschedule_within_one_advance():
    scheduler = ManualScheduler()
    ticks = []

    def tick():
        ticks.append(scheduler.now())
        if len(ticks) < 5:
            scheduler.call_later(1.0, tick)

    scheduler.call_later(1.0, tick)
    scheduler.advance(3.5)

    assert ticks == [1.0, 2.0, 3.0]
    assert scheduler.now() == 3.5
    assert scheduler.time_until_next() == 0.5


def test_callback_cancelling_another_call():
    scheduler = ManualScheduler()
    calls = []
    later = scheduler.call_later(2.0, lambda: calls.append("later"))
    scheduler.call_later(1.0, later.cancel)

    scheduler.advance(3.0)

    assert calls == []
    assert scheduler.pending == 0


def test_negative_delay_and_rewind_rejected():
    scheduler = ManualScheduler()
    with pytest.raises(ValueError):
        scheduler.call_later(-1, lambda: None)
    with pytest.raises(ValueError):
        scheduler.advance(-0.1)


def test_time_until_next_empty():
    assert ManualScheduler().time_until_next() is None


def test_monotonic_scheduler_follows_clock():
    now = [100.0]
    scheduler = MonotonicScheduler(clock=lambda: now[0])
    calls = []
    scheduler.call_later(1.0, lambda: calls.append(scheduler.now()))

    scheduler.poll()
    assert calls == []

    now[0] = 101.25
    scheduler.poll()
    assert calls == [101.0]
    assert scheduler.now() == 101.25


def test_monotonic_wait_for_next_without_calls_returns():
    scheduler = MonotonicScheduler(clock=lambda: 5.0)
    scheduler.wait_for_next()
    assert scheduler.pending == 0
