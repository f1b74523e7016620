"""Performance metrics module for navperf.

Aggregates screen transition and startup metrics into summary statistics
and a text report.
"""

from navperf.metrics.recorder import MetricRecord, MetricsRecorder

__all__ = [
    "MetricsRecorder",
    "MetricRecord",
]
