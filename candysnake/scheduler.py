"""
scheduler.py — Virtual-time scheduler for delayed and repeating actions.

The game never reads the wall clock. Whoever owns the real loop (the pygame
controller, or a test) pushes time forward with advance(ms); every timer that
falls due fires in due order, one at a time, on the caller's thread.

Timers are created through a TimerGroup so that a whole chain of pending
actions can be dropped with a single cancel_all().
"""

from __future__ import annotations

import heapq
import itertools
from typing import Callable

Callback = Callable[[], None]


class Timer:
    """Handle for one scheduled action."""

    def __init__(self, due: float, callback: Callback, interval: float | None,
                 group: "TimerGroup"):
        self.due = due
        self.callback = callback
        self.interval = interval
        self.group = group
        self.cancelled = False

    @property
    def repeating(self) -> bool:
        return self.interval is not None

    def cancel(self) -> None:
        self.cancelled = True
        self.group._discard(self)


class Scheduler:
    """Heap of timers ordered by due time, then by creation order."""

    def __init__(self, start: float = 0.0):
        self._now: float = start
        self._heap: list[tuple[float, int, Timer]] = []
        self._seq = itertools.count()

    @property
    def now(self) -> float:
        return self._now

    @property
    def pending(self) -> int:
        return sum(1 for _, _, t in self._heap if not t.cancelled)

    def group(self) -> "TimerGroup":
        return TimerGroup(self)

    def next_due(self) -> float | None:
        self._drop_cancelled()
        return self._heap[0][0] if self._heap else None

    def advance(self, ms: float) -> int:
        """Move the clock forward by ms, firing what falls due. Returns fired count."""
        if ms < 0:
            raise ValueError("time only moves forward")
        until = self._now + ms
        fired = 0
        while True:
            due = self.next_due()
            if due is None or due > until:
                break
            self._fire_next()
            fired += 1
        self._now = until
        return fired

    def step(self) -> bool:
        """Jump to the next due timer and fire it. False if nothing is pending."""
        if self.next_due() is None:
            return False
        self._fire_next()
        return True

    # ── Private helpers ──────────────────────────────────────────
    def _push(self, timer: Timer) -> None:
        heapq.heappush(self._heap, (timer.due, next(self._seq), timer))

    def _drop_cancelled(self) -> None:
        while self._heap and self._heap[0][2].cancelled:
            heapq.heappop(self._heap)

    def _fire_next(self) -> None:
        due, _, timer = heapq.heappop(self._heap)
        self._now = max(self._now, due)
        if timer.repeating:
            timer.callback()
            # The callback may have cancelled its own timer.
            if not timer.cancelled:
                timer.due = due + timer.interval
                self._push(timer)
        else:
            timer.group._discard(timer)
            timer.cancelled = True
            timer.callback()


class TimerGroup:
    """A set of timers that can be cancelled together."""

    def __init__(self, scheduler: Scheduler):
        self.scheduler = scheduler
        self._timers: set[Timer] = set()

    @property
    def active(self) -> bool:
        return bool(self._timers)

    def call_later(self, delay: float, callback: Callback) -> Timer:
        return self._add(delay, callback, None)

    def call_every(self, interval: float, callback: Callback) -> Timer:
        if interval <= 0:
            raise ValueError("interval must be positive")
        return self._add(interval, callback, interval)

    def cancel_all(self) -> None:
        for timer in list(self._timers):
            timer.cancel()

    def _add(self, delay: float, callback: Callback, interval: float | None) -> Timer:
        if delay < 0:
            raise ValueError("delay must not be negative")
        timer = Timer(self.scheduler.now + delay, callback, interval, self)
        self._timers.add(timer)
        self.scheduler._push(timer)
        return timer

    def _discard(self, timer: Timer) -> None:
        self._timers.discard(timer)
