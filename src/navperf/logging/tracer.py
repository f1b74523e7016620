"""Performance event tracing for developer tooling.

A PerformanceTracer subscribes to a PerformanceContext and keeps a
filterable, exportable record of the event stream, the way a developer
console would display it.
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

from navperf.performance.context import PerformanceContext
from navperf.performance.events import (
    AppInteractiveEvent,
    EventType,
    MeasureEvent,
    NativeMarkEvent,
    NavigationCompleteEvent,
    NavigationStartEvent,
    PerformanceEvent,
    Unsubscribe,
    checkEvent,
)

logger = logging.getLogger("navperf.devtools")


@dataclass
class TraceEvent:
    """A single traced performance event.

    Attributes:
        eventType: Type of event.
        summary: One-line description.
        timestamp: When the event was traced.
        data: Event payload.
        duration: Measured duration in milliseconds, if any.
        screen: Associated screen, if any.
    """

    eventType: EventType
    summary: str
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())
    data: dict[str, Any] = field(default_factory=dict)
    duration: float | None = None
    screen: str | None = None

    def toDict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "eventType": self.eventType.value,
            "summary": self.summary,
            "timestamp": self.timestamp,
            "data": self.data,
            "duration": self.duration,
            "screen": self.screen,
        }


def describeEvent(event: PerformanceEvent) -> TraceEvent:
    """Build a trace entry for any performance event.

    Raises:
        UnknownEventError: If event is not a performance event.
    """
    checkEvent(event)
    data = event.toDict()

    if isinstance(event, NavigationStartEvent):
        source = event.detail.get("from")
        return TraceEvent(
            eventType=event.type,
            summary=f"→ {event.screen}" + (f" (from {source})" if source else ""),
            data=data,
            screen=event.screen,
        )
    if isinstance(event, NavigationCompleteEvent):
        flag = " [no start mark]" if event.measure.degraded else ""
        return TraceEvent(
            eventType=event.type,
            summary=f"✓ {event.screen} in {event.measure.duration:.1f}ms{flag}",
            data=data,
            duration=event.measure.duration,
            screen=event.screen,
        )
    if isinstance(event, MeasureEvent):
        return TraceEvent(
            eventType=event.type,
            summary=f"{event.category.value}: {event.name} = {event.measure.duration:.1f}ms",
            data=data,
            duration=event.measure.duration,
            screen=event.measure.detail.get("screen"),
        )
    if isinstance(event, NativeMarkEvent):
        names = ", ".join(e.name for e in event.entries)
        return TraceEvent(
            eventType=event.type,
            summary=f"native marks: {names}",
            data=data,
        )
    if isinstance(event, AppInteractiveEvent):
        return TraceEvent(
            eventType=event.type,
            summary=f"interactive after {event.measure.duration:.1f}ms",
            data=data,
            duration=event.measure.duration,
            screen=event.detail.get("initialScreen"),
        )
    raise AssertionError(f"Unhandled event type: {event.type}")


class PerformanceTracer:
    """Records the performance event stream for inspection.

    Args:
        enabled: Whether tracing is enabled.
        maxEvents: Maximum events to keep in memory.
        echo: Log each traced event at INFO level.
    """

    def __init__(
        self,
        enabled: bool = True,
        maxEvents: int = 10000,
        echo: bool = False,
    ):
        self._enabled = enabled
        self._maxEvents = maxEvents
        self._echo = echo
        self._events: list[TraceEvent] = []
        self._unsubscribe: Unsubscribe | None = None

    def enable(self) -> None:
        """Enable tracing."""
        self._enabled = True

    def disable(self) -> None:
        """Disable tracing."""
        self._enabled = False

    @property
    def isEnabled(self) -> bool:
        """Check if tracing is enabled."""
        return self._enabled

    @property
    def isAttached(self) -> bool:
        """Check if the tracer is subscribed to a context."""
        return self._unsubscribe is not None

    def attach(self, context: PerformanceContext) -> "PerformanceTracer":
        """Subscribe to a context's event stream (detaching any previous one)."""
        self.detach()
        self._unsubscribe = context.subscribe(self)
        return self

    def detach(self) -> None:
        """Stop receiving events."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def __call__(self, event: PerformanceEvent) -> None:
        self.record(event)

    def record(self, event: PerformanceEvent) -> TraceEvent | None:
        """Record a performance event.

        Args:
            event: Event to record.

        Returns:
            The trace entry, or None when disabled.
        """
        if not self._enabled:
            return None

        entry = describeEvent(event)
        self._events.append(entry)

        if len(self._events) > self._maxEvents:
            self._events = self._events[-self._maxEvents:]

        if self._echo:
            logger.info(entry.summary)
        else:
            logger.debug(f"Trace: {entry.summary}")
        return entry

    def getEvents(
        self,
        eventType: EventType | str | None = None,
        screen: str | None = None,
        limit: int | None = None,
    ) -> list[TraceEvent]:
        """Get filtered events.

        Args:
            eventType: Filter by event type.
            screen: Filter by screen.
            limit: Maximum events to return (newest).

        Returns:
            List of matching events.
        """
        events = self._events

        if eventType:
            events = [e for e in events if e.eventType == eventType]

        if screen:
            events = [e for e in events if e.screen == screen]

        if limit:
            events = events[-limit:]

        return events

    def getStats(self) -> dict[str, Any]:
        """Get tracing statistics.

        Returns:
            Dict with event counts and navigation timing.
        """
        eventCounts: dict[str, int] = {}
        for event in self._events:
            key = event.eventType.value
            eventCounts[key] = eventCounts.get(key, 0) + 1

        navDurations = [
            e.duration
            for e in self._events
            if e.eventType == EventType.NAVIGATION_COMPLETE and e.duration is not None
        ]

        navigationStats = {}
        if navDurations:
            navigationStats = {
                "count": len(navDurations),
                "avgDuration": sum(navDurations) / len(navDurations),
                "minDuration": min(navDurations),
                "maxDuration": max(navDurations),
            }

        return {
            "enabled": self._enabled,
            "totalEvents": len(self._events),
            "eventCounts": eventCounts,
            "navigationStats": navigationStats,
        }

    def clear(self) -> None:
        """Clear all recorded events."""
        self._events.clear()

    def export(self, path: Path | None = None) -> str:
        """Export trace to JSON.

        Args:
            path: Path to write file (None for return string only).

        Returns:
            JSON string of trace data.
        """
        data = {
            "exportTime": datetime.now().isoformat(),
            "stats": self.getStats(),
            "events": [e.toDict() for e in self._events],
        }

        # Mark details are caller-supplied and may hold non-JSON values
        jsonStr = json.dumps(data, indent=2, ensure_ascii=False, default=str)

        if path:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                f.write(jsonStr)
            logger.info(f"Exported trace to {path}")

        return jsonStr

    def __len__(self) -> int:
        """Get number of recorded events."""
        return len(self._events)
