"""Shared pytest fixtures for navperf tests."""

import logging
import os

import pytest

from navperf import performance
from navperf.config import Settings, resetSettings
from navperf.logging import setDebugMode
from navperf.performance import NativeBridge, PerformanceContext
from navperf.testing import EventCollector, ManualClock, ManualFrameScheduler


@pytest.fixture(autouse=True)
def clean_env():
    """Clean up any NAVPERF env vars and global state around each test."""
    # Clear any NAVPERF env vars that might interfere
    for key in list(os.environ.keys()):
        if key.startswith("NAVPERF_"):
            del os.environ[key]
    resetSettings()
    performance.setPerformanceContext(None)

    # navperf logs don't propagate by default; caplog listens on the root logger
    navperfLogger = logging.getLogger("navperf")
    originalLevel = navperfLogger.level
    originalHandlers = list(navperfLogger.handlers)
    navperfLogger.propagate = True

    yield

    performance.unsafeResetPerformanceState()
    performance.setPerformanceContext(None)
    resetSettings()
    setDebugMode(False)
    navperfLogger.setLevel(originalLevel)
    navperfLogger.handlers[:] = originalHandlers
    navperfLogger.propagate = True


@pytest.fixture
def clock() -> ManualClock:
    """Manual clock starting at 0ms."""
    return ManualClock()


@pytest.fixture
def scheduler(clock: ManualClock) -> ManualFrameScheduler:
    """Frame scheduler sharing the manual clock."""
    return ManualFrameScheduler(clock)


@pytest.fixture
def bridge(clock: ManualClock) -> NativeBridge:
    """Native bridge whose nativeLaunchStart is stamped at 0ms."""
    return NativeBridge(clock)


@pytest.fixture
def context(clock: ManualClock, bridge: NativeBridge) -> PerformanceContext:
    """Uninitialized performance context on the manual clock."""
    return PerformanceContext(clock=clock, bridge=bridge, settings=Settings())


@pytest.fixture
def collector(context: PerformanceContext) -> EventCollector:
    """Event collector subscribed to the test context."""
    events = EventCollector()
    context.subscribe(events)
    return events
