"""Performance monitoring for navigation and app startup.

Module-level helpers operate on a process-wide default PerformanceContext.
Code that can be handed a context explicitly should prefer that.
"""

from typing import Any

from navperf.performance.bridge import MarkObserver, NativeBridge
from navperf.performance.clock import Clock, MonotonicClock
from navperf.performance.context import (
    APP_INTERACTIVE_MARK,
    SCREEN_TRANSITION_PREFIX,
    PerformanceConfig,
    PerformanceContext,
    transitionMarkName,
    transitionMeasureName,
)
from navperf.performance.events import (
    AppInteractiveEvent,
    EventListener,
    EventType,
    MeasureCategory,
    MeasureEvent,
    NativeMarkEvent,
    NavigationCompleteEvent,
    NavigationStartEvent,
    PerformanceEvent,
    PerformanceEventBus,
    Unsubscribe,
)
from navperf.performance.marks import Mark, MarkStore
from navperf.performance.measures import Measure, MeasureEngine

# Created on import so nativeLaunchStart approximates process boot
_nativeBridge = NativeBridge()

# Process-wide default context
_defaultContext: PerformanceContext | None = None


def getNativeBridge() -> NativeBridge:
    """Get the process-wide native bridge."""
    return _nativeBridge


def getPerformanceContext() -> PerformanceContext:
    """Get the process-wide performance context, creating it if necessary."""
    global _defaultContext
    if _defaultContext is None:
        _defaultContext = PerformanceContext(bridge=_nativeBridge)
    return _defaultContext


def setPerformanceContext(context: PerformanceContext | None) -> None:
    """Replace the process-wide context (None recreates it on next use)."""
    global _defaultContext
    _defaultContext = context


def initializePerformanceMonitoring(
    config: PerformanceConfig | dict[str, Any] | None = None,
    **kwargs: Any,
) -> None:
    """Initialize the default context. See PerformanceContext.initialize."""
    getPerformanceContext().initialize(config, **kwargs)


def markNavigationStart(screen: str, detail: dict[str, Any] | None = None) -> Mark | None:
    """Mark a navigation start on the default context."""
    return getPerformanceContext().markNavigationStart(screen, detail)


def markNavigationComplete(
    screen: str, detail: dict[str, Any] | None = None
) -> Measure | None:
    """Mark a navigation completion on the default context."""
    return getPerformanceContext().markNavigationComplete(screen, detail)


def markAppInteractive(detail: dict[str, Any] | None = None) -> Measure:
    """Mark the app interactive on the default context."""
    return getPerformanceContext().markAppInteractive(detail)


def subscribeToPerformanceEvents(listener: EventListener) -> Unsubscribe:
    """Subscribe to the default context's event stream."""
    return getPerformanceContext().subscribe(listener)


def unsafeResetPerformanceState() -> None:
    """Reset the default context to its pristine state (tests only)."""
    getPerformanceContext().unsafeReset()


__all__ = [
    # Facade
    "PerformanceContext",
    "PerformanceConfig",
    "getPerformanceContext",
    "setPerformanceContext",
    "getNativeBridge",
    "initializePerformanceMonitoring",
    "markNavigationStart",
    "markNavigationComplete",
    "markAppInteractive",
    "subscribeToPerformanceEvents",
    "unsafeResetPerformanceState",
    "transitionMarkName",
    "transitionMeasureName",
    "SCREEN_TRANSITION_PREFIX",
    "APP_INTERACTIVE_MARK",
    # Building blocks
    "Clock",
    "MonotonicClock",
    "Mark",
    "MarkStore",
    "Measure",
    "MeasureEngine",
    "NativeBridge",
    "MarkObserver",
    # Events
    "PerformanceEventBus",
    "PerformanceEvent",
    "EventType",
    "EventListener",
    "Unsubscribe",
    "MeasureCategory",
    "NavigationStartEvent",
    "NavigationCompleteEvent",
    "MeasureEvent",
    "NativeMarkEvent",
    "AppInteractiveEvent",
]
