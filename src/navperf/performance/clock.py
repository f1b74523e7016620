"""Monotonic clock used for marks and measures."""

import time
from typing import Protocol


class Clock(Protocol):
    """Source of monotonic timestamps in milliseconds."""

    def now(self) -> float: ...


class MonotonicClock:
    """Clock backed by ``time.perf_counter``.

    Timestamps are milliseconds relative to an arbitrary origin, so only
    differences between them are meaningful.
    """

    def now(self) -> float:
        """Get the current timestamp in milliseconds."""
        return time.perf_counter() * 1000
