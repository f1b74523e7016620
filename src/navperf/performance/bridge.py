"""In-process stand-in for the platform performance module.

The platform records launch marks (``nativeLaunchStart``,
``nativeLaunchEnd``, ``runJsBundleStart``, ``runJsBundleEnd``) before the
app code runs and reports them to observers. Observers attached after the
fact receive the buffered entries on attach.
"""

import logging
from typing import Any, Callable, Iterable

from navperf.performance.clock import Clock, MonotonicClock
from navperf.performance.marks import Mark

logger = logging.getLogger("navperf.performance.bridge")

NATIVE_LAUNCH_START = "nativeLaunchStart"
NATIVE_LAUNCH_END = "nativeLaunchEnd"
RUN_JS_BUNDLE_START = "runJsBundleStart"
RUN_JS_BUNDLE_END = "runJsBundleEnd"

NativeMarkCallback = Callable[[list[Mark]], None]


class MarkObserver:
    """Handle for a native mark observer."""

    def __init__(self, bridge: "NativeBridge", callback: NativeMarkCallback):
        self._bridge = bridge
        self.callback = callback
        self._connected = True

    @property
    def connected(self) -> bool:
        """Check if the observer still receives entries."""
        return self._connected

    def disconnect(self) -> None:
        """Stop receiving entries. Safe to call repeatedly."""
        if self._connected:
            self._connected = False
            self._bridge._detach(self)


class NativeBridge:
    """Native performance module bridge.

    Args:
        clock: Clock used to stamp the launch mark.
        recordLaunch: Record ``nativeLaunchStart`` on construction.
    """

    def __init__(self, clock: Clock | None = None, recordLaunch: bool = True):
        self._clock = clock or MonotonicClock()
        self._buffer: list[Mark] = []
        self._observers: list[MarkObserver] = []
        self._resourceLogging = False

        if recordLaunch:
            self._buffer.append(
                Mark(name=NATIVE_LAUNCH_START, timestamp=self._clock.now())
            )

    @property
    def resourceLoggingEnabled(self) -> bool:
        """Check if resource-timing capture is enabled."""
        return self._resourceLogging

    def setResourceLoggingEnabled(self, enabled: bool) -> None:
        """Enable or disable resource-timing capture."""
        if enabled != self._resourceLogging:
            logger.info(f"Resource logging {'enabled' if enabled else 'disabled'}")
        self._resourceLogging = enabled

    def observe(self, callback: NativeMarkCallback, buffered: bool = True) -> MarkObserver:
        """Attach a native mark observer.

        Args:
            callback: Receives lists of native marks.
            buffered: Deliver already-recorded marks immediately.

        Returns:
            Observer handle with ``disconnect()``.
        """
        observer = MarkObserver(self, callback)
        self._observers.append(observer)

        if buffered and self._buffer:
            callback(list(self._buffer))

        return observer

    def reportMarks(self, entries: Iterable[Mark | tuple[str, float]]) -> list[Mark]:
        """Report native marks as the platform would.

        Args:
            entries: Marks, or (name, timestamp) pairs.

        Returns:
            The reported marks.
        """
        marks = [e if isinstance(e, Mark) else Mark(name=e[0], timestamp=e[1]) for e in entries]
        if not marks:
            return marks

        self._buffer.extend(marks)
        for observer in list(self._observers):
            if observer.connected:
                observer.callback(list(marks))

        return marks

    def reportMark(self, name: str, timestamp: float | None = None, **detail: Any) -> Mark:
        """Report a single native mark, stamped now unless a timestamp is given."""
        entry = Mark(
            name=name,
            timestamp=self._clock.now() if timestamp is None else timestamp,
            detail=detail,
        )
        self.reportMarks([entry])
        return entry

    def getBufferedMarks(self) -> list[Mark]:
        """Get every native mark reported so far."""
        return list(self._buffer)

    @property
    def observerCount(self) -> int:
        """Number of connected observers."""
        return len(self._observers)

    def _detach(self, observer: MarkObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)
