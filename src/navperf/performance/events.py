"""Typed performance events and the bus that delivers them.

Every event kind is its own frozen dataclass carrying only the fields
relevant to it. The bus dispatches synchronously, in registration order,
to a snapshot of its subscribers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Mapping, Union

from navperf.exceptions import UnknownEventError
from navperf.performance.marks import Mark, freezeDetail
from navperf.performance.measures import Measure

logger = logging.getLogger("navperf.performance.events")


class EventType(str, Enum):
    """Kinds of performance events."""

    NAVIGATION_START = "navigationStart"
    NAVIGATION_COMPLETE = "navigationComplete"
    MEASURE = "measure"
    NATIVE_MARK = "nativeMark"
    APP_INTERACTIVE = "appInteractive"


class MeasureCategory(str, Enum):
    """What a measure event describes."""

    NAVIGATION = "navigation"
    STARTUP = "startup"


@dataclass(frozen=True)
class NavigationStartEvent:
    """A screen transition started."""

    screen: str
    detail: Mapping[str, Any] = field(default_factory=dict)
    mark: Mark | None = None
    type: EventType = field(default=EventType.NAVIGATION_START, init=False)

    def __post_init__(self):
        object.__setattr__(self, "detail", freezeDetail(self.detail))

    def toDict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "type": self.type.value,
            "screen": self.screen,
            "detail": dict(self.detail),
            "mark": self.mark.toDict() if self.mark else None,
        }


@dataclass(frozen=True)
class NavigationCompleteEvent:
    """A screen transition settled."""

    screen: str
    measure: Measure
    detail: Mapping[str, Any] = field(default_factory=dict)
    mark: Mark | None = None
    type: EventType = field(default=EventType.NAVIGATION_COMPLETE, init=False)

    def __post_init__(self):
        object.__setattr__(self, "detail", freezeDetail(self.detail))

    def toDict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "type": self.type.value,
            "screen": self.screen,
            "detail": dict(self.detail),
            "measure": self.measure.toDict(),
            "mark": self.mark.toDict() if self.mark else None,
        }


@dataclass(frozen=True)
class MeasureEvent:
    """A measure was computed."""

    name: str
    measure: Measure
    category: MeasureCategory
    type: EventType = field(default=EventType.MEASURE, init=False)

    @property
    def entry(self) -> Measure:
        """The measure entry (alias used by console consumers)."""
        return self.measure

    def toDict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "type": self.type.value,
            "name": self.name,
            "category": self.category.value,
            "measure": self.measure.toDict(),
        }


@dataclass(frozen=True)
class NativeMarkEvent:
    """The platform reported native marks."""

    entries: tuple[Mark, ...]
    type: EventType = field(default=EventType.NATIVE_MARK, init=False)

    def toDict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "type": self.type.value,
            "entries": [e.toDict() for e in self.entries],
        }


@dataclass(frozen=True)
class AppInteractiveEvent:
    """The app became interactive."""

    measure: Measure
    detail: Mapping[str, Any] = field(default_factory=dict)
    mark: Mark | None = None
    type: EventType = field(default=EventType.APP_INTERACTIVE, init=False)

    def __post_init__(self):
        object.__setattr__(self, "detail", freezeDetail(self.detail))

    def toDict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "type": self.type.value,
            "detail": dict(self.detail),
            "measure": self.measure.toDict(),
            "mark": self.mark.toDict() if self.mark else None,
        }


PerformanceEvent = Union[
    NavigationStartEvent,
    NavigationCompleteEvent,
    MeasureEvent,
    NativeMarkEvent,
    AppInteractiveEvent,
]

EVENT_CLASSES: dict[EventType, type] = {
    EventType.NAVIGATION_START: NavigationStartEvent,
    EventType.NAVIGATION_COMPLETE: NavigationCompleteEvent,
    EventType.MEASURE: MeasureEvent,
    EventType.NATIVE_MARK: NativeMarkEvent,
    EventType.APP_INTERACTIVE: AppInteractiveEvent,
}

EventListener = Callable[[PerformanceEvent], None]
Unsubscribe = Callable[[], None]


def checkEvent(event: object) -> PerformanceEvent:
    """Ensure an object is one of the performance event kinds.

    Raises:
        UnknownEventError: If it isn't.
    """
    eventType = getattr(event, "type", None)
    expected = EVENT_CLASSES.get(eventType) if isinstance(eventType, EventType) else None
    if expected is None or type(event) is not expected:
        raise UnknownEventError(event)
    return event  # type: ignore[return-value]


def _noop() -> None:
    return None


class PerformanceEventBus:
    """Ordered publish/subscribe bus for performance events.

    Example:
        >>> bus = PerformanceEventBus()
        >>> unsubscribe = bus.subscribe(lambda e: print(e.type.value))
        >>> bus.emit(NativeMarkEvent(entries=()))
        nativeMark
        >>> unsubscribe()

    Args:
        maxHistory: Maximum events kept in history.
    """

    def __init__(self, maxHistory: int = 100):
        # dict keys double as an insertion-ordered set
        self._listeners: dict[EventListener, None] = {}
        self._eventHistory: list[PerformanceEvent] = []
        self._maxHistory = maxHistory
        self._failures = 0

    def subscribe(self, listener: EventListener) -> Unsubscribe:
        """Subscribe a listener to all events.

        Subscribing a listener that is already subscribed keeps its
        original position.

        Args:
            listener: Callback receiving each event.

        Returns:
            Callable that removes the listener; safe to call repeatedly.
        """
        if not callable(listener):
            logger.warning(f"Ignoring non-callable listener: {listener!r}")
            return _noop

        self._listeners.setdefault(listener, None)
        logger.debug(f"Subscribed listener ({len(self._listeners)} total)")

        def unsubscribe() -> None:
            self._listeners.pop(listener, None)

        return unsubscribe

    def isSubscribed(self, listener: EventListener) -> bool:
        """Check if a listener is currently subscribed."""
        return listener in self._listeners

    def emit(self, event: PerformanceEvent) -> PerformanceEvent:
        """Emit an event to all subscribers.

        Args:
            event: Event to emit.

        Returns:
            The emitted event.

        Raises:
            UnknownEventError: If event is not a performance event.
        """
        checkEvent(event)

        if self._maxHistory:
            self._eventHistory.append(event)
            if len(self._eventHistory) > self._maxHistory:
                self._eventHistory.pop(0)

        snapshot = list(self._listeners)
        for listener in snapshot:
            # Skip listeners removed by an earlier listener in this dispatch
            if listener not in self._listeners:
                continue
            try:
                listener(event)
            except Exception as e:
                self._failures += 1
                logger.error(f"Performance listener error for '{event.type.value}': {e}")

        logger.debug(f"Emitted '{event.type.value}' to {len(snapshot)} listeners")
        return event

    def getHistory(self, limit: int = 10) -> list[PerformanceEvent]:
        """Get recent event history.

        Args:
            limit: Maximum events to return.

        Returns:
            List of recent events (newest last).
        """
        if limit <= 0:
            return []
        return self._eventHistory[-limit:]

    def clearHistory(self) -> None:
        """Clear event history."""
        self._eventHistory.clear()

    def clear(self) -> None:
        """Remove all listeners and history."""
        self._listeners.clear()
        self._eventHistory.clear()
        self._failures = 0

    def getStats(self) -> dict[str, Any]:
        """Get event bus statistics.

        Returns:
            Dictionary with stats.
        """
        return {
            "totalListeners": len(self._listeners),
            "historySize": len(self._eventHistory),
            "listenerFailures": self._failures,
        }

    def __len__(self) -> int:
        return len(self._listeners)
