"""
Delayed callbacks for level transitions and the round countdown.

The engine never touches platform timers. It asks a Scheduler for a
cancellable ScheduledCall, and whoever owns the scheduler decides when
time passes:

- ManualScheduler: virtual clock, advanced explicitly (tests, replays)
- MonotonicScheduler: follows time.monotonic(), polled from the UI loop

Both run callbacks on the thread that advances them, so moves, ticks and
transitions are serialized onto one logical event queue.
"""

import logging
import sched
import time
from abc import ABC, abstractmethod
from collections.abc import Callable


logger = logging.getLogger(__name__)


class ScheduledCall:
    """Handle for a callback waiting on a scheduler."""

    def __init__(self, when: float, callback: Callable[[], None]):
        self.when = when
        self._callback = callback
        self._queue: sched.scheduler | None = None
        self._event: sched.Event | None = None
        self._cancelled = False
        self._done = False

    @property
    def active(self) -> bool:
        """True while the callback is still due to run."""
        return not (self._cancelled or self._done)

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> bool:
        """Cancel the call. Returns False if it already ran or was cancelled."""
        if not self.active:
            return False
        self._cancelled = True
        if self._queue is not None and self._event is not None:
            self._queue.cancel(self._event)
        return True

    def _run(self) -> None:
        if self._cancelled:
            return
        self._done = True
        self._callback()

    def __repr__(self) -> str:
        state = "cancelled" if self._cancelled else "done" if self._done else "pending"
        return f"ScheduledCall(when={self.when:.2f}, {state})"


class Scheduler(ABC):
    """Abstract source of time and delayed callbacks."""

    @abstractmethod
    def now(self) -> float:
        """Current scheduler time in seconds."""
        pass

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        """Run callback after delay seconds.

        Args:
            delay: Seconds from now (must be >= 0)
            callback: Zero-argument callable

        Returns:
            Handle that can cancel the call
        """
        pass


class ManualScheduler(Scheduler):
    """Scheduler driven by an explicit virtual clock.

    Time only moves when advance() is called. Calls due at the same
    instant run in the order they were scheduled, and calls scheduled by
    a running callback are picked up within the same advance().
    """

    def __init__(self, start: float = 0.0):
        self._now = start
        self._queue = sched.scheduler(self.now, self._sleep)

    def now(self) -> float:
        return self._now

    def _sleep(self, seconds: float) -> None:
        self._now += seconds

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        if delay < 0:
            raise ValueError(f"delay must be >= 0, got {delay}")
        call = ScheduledCall(self._now + delay, callback)
        call._queue = self._queue
        call._event = self._queue.enterabs(call.when, 0, call._run)
        return call

    def advance(self, seconds: float) -> None:
        """Move the clock forward, running every call that falls due."""
        if seconds < 0:
            raise ValueError(f"cannot move time backwards ({seconds})")
        target = self._now + seconds
        while True:
            queue = self._queue.queue
            if not queue or queue[0].time > target:
                break
            self._now = max(self._now, queue[0].time)
            self._queue.run(blocking=False)
        self._now = target

    def run_pending(self) -> None:
        """Run calls already due without moving the clock."""
        self.advance(0.0)

    def time_until_next(self) -> float | None:
        """Seconds until the next pending call, or None if nothing is queued."""
        queue = self._queue.queue
        if not queue:
            return None
        return max(0.0, queue[0].time - self._now)

    @property
    def pending(self) -> int:
        """Number of calls waiting to run."""
        return len(self._queue.queue)


class MonotonicScheduler(ManualScheduler):
    """Scheduler that follows a real clock when polled.

    Nothing runs in the background: the owner calls poll() from its loop
    and every call that fell due since the last poll runs in order.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        super().__init__(start=clock())

    def poll(self) -> None:
        """Catch the virtual clock up with the real one."""
        elapsed = self._clock() - self.now()
        if elapsed > 0:
            self.advance(elapsed)
        else:
            self.run_pending()

    def wait_for_next(self, limit: float | None = None) -> None:
        """Sleep until the next pending call is due (at most limit seconds), then poll."""
        self.poll()
        remaining = self.time_until_next()
        if remaining is None:
            return
        if limit is not None:
            remaining = min(remaining, limit)
        logger.debug("Waiting %.2fs for next scheduled call", remaining)
        time.sleep(remaining)
        self.poll()
