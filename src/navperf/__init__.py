"""navperf - Navigation timing and home screen transitions.

This package records screen transition and app startup timings as named
marks and measures, publishes them as typed events, and drives the slide
animation played when navigation leaves or returns to the home screen.

Example:
    >>> from navperf import initializePerformanceMonitoring, markNavigationStart
    >>> initializePerformanceMonitoring(onEvent=print)
    >>> markNavigationStart("grade1", {"from": "home"})

Test Mode Example:
    >>> from navperf import NavigationSession, PerformanceContext
    >>> from navperf.testing import ManualFrameScheduler
    >>> scheduler = ManualFrameScheduler()
    >>> session = NavigationSession(scheduler, PerformanceContext(clock=scheduler.clock))
    >>> session.goTo("grade1")
    >>> scheduler.runUntilIdle()  # Plays the slide to completion
"""

__version__ = "0.1.0"

__all__ = [
    # Performance
    "PerformanceContext",
    "PerformanceConfig",
    "getPerformanceContext",
    "initializePerformanceMonitoring",
    "markNavigationStart",
    "markNavigationComplete",
    "markAppInteractive",
    "subscribeToPerformanceEvents",
    "unsafeResetPerformanceState",
    "EventType",
    "Mark",
    "Measure",
    # Navigation
    "NavState",
    "NavigationStateHolder",
    "NavigationActions",
    "NavigationSession",
    "HomeScreenTransition",
    "TransitionState",
    "Direction",
    "canAnimate",
    # Metrics
    "MetricsRecorder",
    # Logging
    "configureLogging",
    "setDebugMode",
    "PerformanceTracer",
    # Config
    "Settings",
    "getSettings",
    # Exceptions
    "NavPerfError",
    "ConfigurationError",
    "MissingMarkError",
    "UnknownEventError",
    "ScriptError",
]

_PERFORMANCE_NAMES = (
    "PerformanceContext",
    "PerformanceConfig",
    "getPerformanceContext",
    "initializePerformanceMonitoring",
    "markNavigationStart",
    "markNavigationComplete",
    "markAppInteractive",
    "subscribeToPerformanceEvents",
    "unsafeResetPerformanceState",
    "EventType",
    "Mark",
    "Measure",
)

_NAVIGATION_NAMES = (
    "NavState",
    "NavigationStateHolder",
    "NavigationActions",
    "NavigationSession",
    "HomeScreenTransition",
    "TransitionState",
    "Direction",
    "canAnimate",
)


def __getattr__(name: str):
    """Lazy import to avoid circular dependencies."""
    if name in _PERFORMANCE_NAMES:
        from navperf import performance

        return getattr(performance, name)
    elif name in _NAVIGATION_NAMES:
        from navperf import navigation

        return getattr(navigation, name)
    elif name == "MetricsRecorder":
        from navperf.metrics import MetricsRecorder

        return MetricsRecorder
    elif name in ("configureLogging", "setDebugMode", "PerformanceTracer"):
        from navperf import logging as navperf_logging

        return getattr(navperf_logging, name)
    elif name in ("Settings", "getSettings"):
        from navperf import config

        return getattr(config, name)
    elif name in __all__:
        from navperf import exceptions

        return getattr(exceptions, name)
    raise AttributeError(f"module 'navperf' has no attribute '{name}'")
