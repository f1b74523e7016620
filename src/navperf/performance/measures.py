"""Durations derived from pairs of marks."""

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from navperf.exceptions import MissingMarkError
from navperf.performance.clock import Clock
from navperf.performance.marks import MarkStore, freezeDetail

logger = logging.getLogger("navperf.performance")


@dataclass(frozen=True)
class Measure:
    """Elapsed time between two marks.

    Attributes:
        name: Measure name.
        start: Name of the start mark.
        end: Name of the end mark, or None when measured up to "now".
        duration: Elapsed milliseconds, never negative.
        startTime: Timestamp of the start mark.
        detail: Descriptive data for telemetry consumers.
        degraded: True when a mark was missing and duration fell back to 0.
    """

    name: str
    start: str
    end: str | None
    duration: float
    startTime: float
    detail: Mapping[str, Any] = field(default_factory=dict)
    degraded: bool = False

    def __post_init__(self):
        object.__setattr__(self, "detail", freezeDetail(self.detail))

    def toDict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "start": self.start,
            "end": self.end,
            "duration": self.duration,
            "startTime": self.startTime,
            "detail": dict(self.detail),
            "degraded": self.degraded,
        }


class MeasureEngine:
    """Computes measures from marks held in a MarkStore.

    Args:
        marks: Mark store to read from.
        clock: Clock used when a measure ends at "now".
        maxHistory: Maximum measures to keep in memory.
    """

    def __init__(self, marks: MarkStore, clock: Clock, maxHistory: int = 1000):
        self._marks = marks
        self._clock = clock
        self._maxHistory = maxHistory
        self._measures: list[Measure] = []

    def measure(
        self,
        name: str,
        start: str,
        end: str | None = None,
        detail: dict[str, Any] | None = None,
    ) -> Measure:
        """Measure the time between two marks.

        A missing mark never raises: the measure is still produced with a
        zero duration and flagged as degraded.

        Args:
            name: Measure name.
            start: Start mark name.
            end: End mark name (None measures up to now).
            detail: Optional measure detail.

        Returns:
            The recorded Measure.
        """
        degraded = False

        try:
            endTime = self._marks.require(end).timestamp if end else self._clock.now()
        except MissingMarkError as e:
            logger.warning(f"Measure '{name}': {e}, reporting zero duration")
            endTime = self._clock.now()
            degraded = True

        try:
            startTime = self._marks.require(start).timestamp
        except MissingMarkError as e:
            logger.warning(f"Measure '{name}': {e}, reporting zero duration")
            startTime = endTime
            degraded = True

        duration = 0.0 if degraded else max(0.0, endTime - startTime)

        entry = Measure(
            name=name,
            start=start,
            end=end,
            duration=duration,
            startTime=startTime,
            detail=detail or {},
            degraded=degraded,
        )
        self._record(entry)
        return entry

    def _record(self, entry: Measure) -> None:
        self._measures.append(entry)

        if len(self._measures) > self._maxHistory:
            self._measures = self._measures[-self._maxHistory:]

        logger.debug(f"Measured: {entry.name} - {entry.duration:.2f}ms")

    def getEntries(self, name: str | None = None) -> list[Measure]:
        """Get recorded measures, optionally filtered by name."""
        if name is None:
            return list(self._measures)
        return [m for m in self._measures if m.name == name]

    def clear(self) -> None:
        """Clear all recorded measures."""
        self._measures.clear()

    def __len__(self) -> int:
        return len(self._measures)
