"""Metric aggregation for navigation and startup timings.

Every measure re-emitted as a metric (``screenTransition``, ``appStartup``,
``appInteractive``, ``nativeLaunch``, ``jsBundleExecution``) lands here and
can be summarized per metric name or per screen.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from statistics import mean, stdev
from typing import Any

logger = logging.getLogger("navperf.metrics")


@dataclass(frozen=True)
class MetricRecord:
    """A named measure re-emitted with descriptive detail.

    Attributes:
        name: Metric name (e.g. "screenTransition").
        value: Metric value in milliseconds.
        startTime: Start timestamp of the underlying measure.
        detail: Descriptive data (screen, phase, label...).
        recordedAt: Wall-clock time the metric was recorded.
    """

    name: str
    value: float
    startTime: float = 0.0
    detail: dict[str, Any] = field(default_factory=dict)
    recordedAt: datetime = field(default_factory=datetime.now)

    def toDict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "value": self.value,
            "startTime": self.startTime,
            "detail": dict(self.detail),
            "recordedAt": self.recordedAt.isoformat(),
        }


class MetricsRecorder:
    """Records and summarizes metric values.

    Args:
        maxHistory: Maximum records to keep in memory.
    """

    def __init__(self, maxHistory: int = 10000):
        self._maxHistory = maxHistory
        self._records: list[MetricRecord] = []

    def record(
        self,
        name: str,
        value: float,
        startTime: float = 0.0,
        detail: dict[str, Any] | None = None,
    ) -> MetricRecord:
        """Record a metric value.

        Args:
            name: Metric name.
            value: Value in milliseconds.
            startTime: Start timestamp of the measure.
            detail: Descriptive detail.

        Returns:
            Recorded MetricRecord.
        """
        entry = MetricRecord(
            name=name,
            value=value,
            startTime=startTime,
            detail=dict(detail or {}),
        )
        self._records.append(entry)

        if len(self._records) > self._maxHistory:
            self._records = self._records[-self._maxHistory:]

        logger.debug(f"Metric: {name} = {value:.2f}ms {entry.detail}")
        return entry

    def getRecords(self, name: str | None = None) -> list[MetricRecord]:
        """Get recorded metrics, optionally filtered by name."""
        if name is None:
            return list(self._records)
        return [r for r in self._records if r.name == name]

    def getNames(self) -> list[str]:
        """Get distinct metric names in first-recorded order."""
        return list(dict.fromkeys(r.name for r in self._records))

    def getStats(self, name: str | None = None) -> dict[str, Any]:
        """Get summary statistics.

        Args:
            name: Metric to summarize (None for all metrics).

        Returns:
            Dictionary with count, average, percentiles and extremes.
        """
        return self._summarize(self.getRecords(name))

    def getScreenStats(self, screen: str) -> dict[str, Any]:
        """Get screenTransition statistics for a single screen.

        Args:
            screen: Destination screen name.

        Returns:
            Dictionary with screen-specific metrics.
        """
        records = [
            r
            for r in self._records
            if r.name == "screenTransition" and r.detail.get("screen") == screen
        ]
        stats = self._summarize(records)
        stats["screen"] = screen
        return stats

    def _summarize(self, records: list[MetricRecord]) -> dict[str, Any]:
        if not records:
            return {
                "count": 0,
                "avgMs": 0,
                "p50Ms": 0,
                "p95Ms": 0,
                "p99Ms": 0,
                "minMs": 0,
                "maxMs": 0,
                "stdDevMs": 0,
            }

        values = [r.value for r in records]
        sortedValues = sorted(values)

        return {
            "count": len(values),
            "avgMs": mean(values),
            "p50Ms": self._percentile(sortedValues, 50),
            "p95Ms": self._percentile(sortedValues, 95),
            "p99Ms": self._percentile(sortedValues, 99),
            "minMs": sortedValues[0],
            "maxMs": sortedValues[-1],
            "stdDevMs": stdev(values) if len(values) > 1 else 0,
        }

    def _percentile(self, sortedValues: list[float], percentile: int) -> float:
        """Calculate percentile from sorted values."""
        if not sortedValues:
            return 0
        index = int(len(sortedValues) * percentile / 100)
        index = min(index, len(sortedValues) - 1)
        return sortedValues[index]

    def clear(self) -> None:
        """Clear all recorded metrics."""
        self._records.clear()
        logger.info("Cleared performance metrics")

    def formatReport(self) -> str:
        """Generate a human-readable metrics report.

        Returns:
            Formatted report string.
        """
        lines = [
            "Performance Report",
            "=" * 50,
            f"Total Metrics: {len(self._records)}",
        ]

        for name in self.getNames():
            stats = self.getStats(name)
            lines.extend(
                [
                    "",
                    f"{name} ({stats['count']}):",
                    f"  Average: {stats['avgMs']:.2f}ms",
                    f"  P50: {stats['p50Ms']:.2f}ms",
                    f"  P95: {stats['p95Ms']:.2f}ms",
                    f"  Min: {stats['minMs']:.2f}ms",
                    f"  Max: {stats['maxMs']:.2f}ms",
                ]
            )

        screens = list(
            dict.fromkeys(
                r.detail.get("screen")
                for r in self._records
                if r.name == "screenTransition" and r.detail.get("screen")
            )
        )
        if screens:
            lines.append("")
            lines.append("Screens:")
            for screen in screens:
                stats = self.getScreenStats(screen)
                lines.append(
                    f"  {screen}: {stats['count']} transitions, avg {stats['avgMs']:.2f}ms"
                )

        return "\n".join(lines)

    def __len__(self) -> int:
        return len(self._records)
