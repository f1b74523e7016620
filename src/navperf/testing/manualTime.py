"""Deterministic clock and frame scheduler for tests and script runs."""

import heapq
import itertools
from typing import Callable


class ManualClock:
    """Clock that only moves when told to.

    Args:
        start: Initial time in milliseconds.
    """

    def __init__(self, start: float = 0.0):
        self._now = start

    def now(self) -> float:
        return self._now

    def advance(self, ms: float) -> float:
        """Move the clock forward.

        Returns:
            The new time.
        """
        if ms < 0:
            raise ValueError("Cannot move a clock backwards")
        self._now += ms
        return self._now

    def set(self, ms: float) -> None:
        """Jump to an absolute time (never backwards)."""
        if ms < self._now:
            raise ValueError("Cannot move a clock backwards")
        self._now = ms


class ScheduledFrame:
    """Handle for a callback queued on a ManualFrameScheduler."""

    def __init__(self, dueAt: float, callback: Callable[[], None]):
        self.dueAt = dueAt
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualFrameScheduler:
    """Frame scheduler whose time advances explicitly.

    Callbacks run in due-time order, then in the order they were
    scheduled. Callbacks scheduled while advancing run in the same call if
    they fall due within the advanced window.

    Args:
        clock: Clock to drive (shared with a PerformanceContext so that
            measures line up with animation time).
    """

    def __init__(self, clock: ManualClock | None = None):
        self.clock = clock or ManualClock()
        self._queue: list[tuple[float, int, ScheduledFrame]] = []
        self._sequence = itertools.count()

    def now(self) -> float:
        return self.clock.now()

    def schedule(self, delayMs: float, callback: Callable[[], None]) -> ScheduledFrame:
        frame = ScheduledFrame(self.clock.now() + max(0.0, delayMs), callback)
        heapq.heappush(self._queue, (frame.dueAt, next(self._sequence), frame))
        return frame

    @property
    def pendingCount(self) -> int:
        """Number of queued, uncancelled callbacks."""
        return sum(1 for _, _, f in self._queue if not f.cancelled)

    def advance(self, ms: float) -> int:
        """Advance time, running every callback that falls due.

        Args:
            ms: Milliseconds to advance.

        Returns:
            Number of callbacks run.
        """
        target = self.clock.now() + ms
        ran = 0

        while self._queue and self._queue[0][0] <= target:
            dueAt, _, frame = heapq.heappop(self._queue)
            if frame.cancelled:
                continue
            if dueAt > self.clock.now():
                self.clock.set(dueAt)
            frame.callback()
            ran += 1

        self.clock.set(max(target, self.clock.now()))
        return ran

    def runUntilIdle(self, maxMs: float = 60_000.0) -> int:
        """Advance until nothing is queued or maxMs has elapsed.

        Returns:
            Number of callbacks run.
        """
        ran = 0
        deadline = self.clock.now() + maxMs
        while self.pendingCount and self.clock.now() < deadline:
            nextDue = min(f.dueAt for _, _, f in self._queue if not f.cancelled)
            ran += self.advance(max(0.0, min(nextDue, deadline) - self.clock.now()))
        return ran
