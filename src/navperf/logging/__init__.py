"""Logging and developer tracing for navperf.

Provides component logger setup, debug modes, and performance event tracing.
"""

from navperf.logging.config import (
    DEBUG_CAPS,
    LOGGER_NAME,
    TelemetryFormatter,
    configureLogging,
    setDebugMode,
)
from navperf.logging.tracer import PerformanceTracer, TraceEvent, describeEvent

__all__ = [
    "configureLogging",
    "setDebugMode",
    "TelemetryFormatter",
    "LOGGER_NAME",
    "DEBUG_CAPS",
    "PerformanceTracer",
    "TraceEvent",
    "describeEvent",
]
