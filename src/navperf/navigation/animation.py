"""Progress animation driven by frame callbacks.

An animation advances a ProgressValue on frames requested from a
FrameScheduler. Stopping is synchronous: the pending frame is cancelled
through its handle and the completion callback runs with ``finished=False``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Protocol

logger = logging.getLogger("navperf.navigation.animation")

Easing = Callable[[float], float]
DoneCallback = Callable[[bool], None]


class FrameHandle(Protocol):
    """Handle for a scheduled frame callback."""

    def cancel(self) -> None: ...


class FrameScheduler(Protocol):
    """Source of time and delayed callbacks for animations."""

    def now(self) -> float:
        """Current time in milliseconds."""
        ...

    def schedule(self, delayMs: float, callback: Callable[[], None]) -> FrameHandle:
        """Run callback after delayMs; the handle cancels it."""
        ...


class AsyncioFrameScheduler:
    """Frame scheduler on an asyncio event loop.

    Args:
        loop: Event loop to schedule on (defaults to the running loop).
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop or asyncio.get_running_loop()

    def now(self) -> float:
        return self._loop.time() * 1000

    def schedule(self, delayMs: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self._loop.call_later(max(0.0, delayMs) / 1000, callback)


def linear(t: float) -> float:
    return t


def easeOutCubic(t: float) -> float:
    """Cubic ease-out: fast start, gentle stop."""
    return 1 - (1 - t) ** 3


def interpolate(
    value: float,
    inputRange: tuple[float, float],
    outputRange: tuple[float, float],
) -> float:
    """Linearly map value from inputRange onto outputRange."""
    inStart, inEnd = inputRange
    outStart, outEnd = outputRange
    if inEnd == inStart:
        return outStart
    ratio = (value - inStart) / (inEnd - inStart)
    return outStart + (outEnd - outStart) * ratio


class ProgressValue:
    """Mutable animated value that notifies listeners on change.

    Args:
        value: Initial value.
    """

    def __init__(self, value: float = 0.0):
        self._value = value
        self._listeners: list[Callable[[float], None]] = []

    @property
    def value(self) -> float:
        return self._value

    def setValue(self, value: float) -> None:
        """Set the value and notify listeners."""
        if value == self._value:
            return
        self._value = value
        for listener in list(self._listeners):
            listener(value)

    def addListener(self, listener: Callable[[float], None]) -> Callable[[], None]:
        """Add a change listener.

        Returns:
            Callable removing the listener.
        """
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def interpolate(
        self,
        outputRange: tuple[float, float],
        inputRange: tuple[float, float] = (0.0, 1.0),
    ) -> float:
        """Map the current value onto outputRange."""
        return interpolate(self._value, inputRange, outputRange)

    def __float__(self) -> float:
        return float(self._value)

    def __repr__(self) -> str:
        return f"ProgressValue({self._value!r})"


class CancellationToken:
    """Marks one animation run; a cancelled token must not commit results."""

    def __init__(self) -> None:
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True


class TimingAnimation:
    """Animates a ProgressValue to a target over a fixed duration.

    Args:
        value: Value to animate.
        scheduler: Frame scheduler.
        toValue: Target value.
        durationMs: Animation duration.
        easing: Easing curve applied to normalized time.
        frameIntervalMs: Delay between frames.
    """

    def __init__(
        self,
        value: ProgressValue,
        scheduler: FrameScheduler,
        toValue: float = 1.0,
        durationMs: float = 280.0,
        easing: Easing = easeOutCubic,
        frameIntervalMs: float = 16.0,
    ):
        self._value = value
        self._scheduler = scheduler
        self._toValue = toValue
        self._durationMs = durationMs
        self._easing = easing
        self._frameIntervalMs = frameIntervalMs

        self._fromValue = value.value
        self._startTime = 0.0
        self._handle: FrameHandle | None = None
        self._onDone: DoneCallback | None = None
        self._running = False
        self._frames = 0

    @property
    def isRunning(self) -> bool:
        return self._running

    @property
    def frameCount(self) -> int:
        """Frames rendered so far."""
        return self._frames

    def start(self, onDone: DoneCallback | None = None) -> None:
        """Start animating.

        Args:
            onDone: Called once with True on completion, False when stopped.
        """
        if self._running:
            self.stop()

        self._fromValue = self._value.value
        self._startTime = self._scheduler.now()
        self._onDone = onDone
        self._running = True
        self._frames = 0

        if self._durationMs <= 0:
            self._value.setValue(self._toValue)
            self._finish(True)
            return

        self._handle = self._scheduler.schedule(self._frameIntervalMs, self._tick)

    def stop(self) -> None:
        """Stop the animation where it is. No-op when not running."""
        if not self._running:
            return

        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

        self._finish(False)

    def _tick(self) -> None:
        self._handle = None
        if not self._running:
            return

        elapsed = self._scheduler.now() - self._startTime
        t = min(1.0, max(0.0, elapsed / self._durationMs))
        self._frames += 1
        self._value.setValue(
            self._fromValue + (self._toValue - self._fromValue) * self._easing(t)
        )

        # A listener stopped or restarted the animation while it was updating
        if not self._running or self._handle is not None:
            return

        if t >= 1.0:
            self._finish(True)
        else:
            self._handle = self._scheduler.schedule(self._frameIntervalMs, self._tick)

    def _finish(self, finished: bool) -> None:
        self._running = False
        onDone, self._onDone = self._onDone, None
        logger.debug(f"Animation {'finished' if finished else 'stopped'} after {self._frames} frames")
        if onDone is not None:
            onDone(finished)
