"""Testing utilities for navperf.

Provides a manual clock and frame scheduler for deterministic animation
and timing, and an event collector for the performance event stream.
"""

from navperf.testing.collector import EventCollector
from navperf.testing.manualTime import ManualClock, ManualFrameScheduler, ScheduledFrame

__all__ = [
    "ManualClock",
    "ManualFrameScheduler",
    "ScheduledFrame",
    "EventCollector",
]
