"""Performance facade: marks, measures and events for navigation and startup.

A PerformanceContext owns one mark store, measure engine, event bus and
metrics recorder. Navigation code receives the context it reports to;
module-level helpers in ``navperf.performance`` use a process-wide default.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from navperf.config import Settings, getSettings
from navperf.exceptions import ConfigurationError
from navperf.metrics import MetricsRecorder
from navperf.performance.bridge import (
    NATIVE_LAUNCH_END,
    NATIVE_LAUNCH_START,
    RUN_JS_BUNDLE_END,
    RUN_JS_BUNDLE_START,
    MarkObserver,
    NativeBridge,
)
from navperf.performance.clock import Clock, MonotonicClock
from navperf.performance.events import (
    AppInteractiveEvent,
    EventListener,
    MeasureCategory,
    MeasureEvent,
    NativeMarkEvent,
    NavigationCompleteEvent,
    NavigationStartEvent,
    PerformanceEventBus,
    Unsubscribe,
)
from navperf.performance.marks import Mark, MarkStore
from navperf.performance.measures import Measure, MeasureEngine

logger = logging.getLogger("navperf.performance")

SCREEN_TRANSITION_PREFIX = "screen-transition"
APP_INTERACTIVE_MARK = "appInteractive"


class PerformanceConfig(BaseModel):
    """Options for ``PerformanceContext.initialize``.

    Attributes:
        resourceLogging: Enable native resource-timing capture
            (None uses the settings default).
        onEvent: Listener subscribed to the event stream.
    """

    model_config = ConfigDict(extra="forbid")

    resourceLogging: bool | None = Field(
        default=None,
        description="Enable native resource-timing capture",
    )
    onEvent: Callable[[Any], None] | None = Field(
        default=None,
        description="Listener auto-subscribed to performance events",
    )


def transitionMarkName(screen: str, phase: str) -> str:
    """Get the mark name for a screen transition phase."""
    return f"{SCREEN_TRANSITION_PREFIX}:{screen}:{phase}"


def transitionMeasureName(screen: str) -> str:
    """Get the measure name for a screen transition."""
    return f"{SCREEN_TRANSITION_PREFIX}:{screen}"


class PerformanceContext:
    """Records navigation and startup timings and publishes them as events.

    Args:
        clock: Clock for timestamps (defaults to a monotonic clock).
        bridge: Native performance bridge (defaults to an in-process one).
        settings: Settings to size histories from (defaults to global).
    """

    def __init__(
        self,
        clock: Clock | None = None,
        bridge: NativeBridge | None = None,
        settings: Settings | None = None,
    ):
        settings = settings or getSettings()
        self._clock = clock or MonotonicClock()
        self._bridge = bridge or NativeBridge(self._clock)
        self._defaultResourceLogging = settings.resourceLogging

        self._marks = MarkStore()
        self._measures = MeasureEngine(self._marks, self._clock, settings.maxMeasureHistory)
        self._bus = PerformanceEventBus(settings.maxEventHistory)
        self._metrics = MetricsRecorder(settings.maxMetricHistory)

        self._observer: MarkObserver | None = None
        self._initialized = False

    # -- Accessors --

    @property
    def isInitialized(self) -> bool:
        """Check if initialize() has run since the last reset."""
        return self._initialized

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def bridge(self) -> NativeBridge:
        return self._bridge

    @property
    def marks(self) -> MarkStore:
        return self._marks

    @property
    def measures(self) -> MeasureEngine:
        return self._measures

    @property
    def bus(self) -> PerformanceEventBus:
        return self._bus

    @property
    def metrics(self) -> MetricsRecorder:
        return self._metrics

    # -- Lifecycle --

    def initialize(
        self,
        config: PerformanceConfig | dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        """Start performance monitoring.

        Calling again while initialized attaches no second native observer;
        ``onEvent`` is subscribed only if not already subscribed.

        Args:
            config: PerformanceConfig or mapping of its fields.
            **kwargs: Config fields, merged over ``config``.

        Raises:
            ConfigurationError: If the configuration is invalid.
        """
        config = self._resolveConfig(config, kwargs)

        if config.onEvent is not None:
            self._bus.subscribe(config.onEvent)

        if self._initialized:
            logger.debug("Performance monitoring already initialized")
            return

        resourceLogging = (
            self._defaultResourceLogging
            if config.resourceLogging is None
            else config.resourceLogging
        )
        if resourceLogging:
            self._bridge.setResourceLoggingEnabled(True)

        self._initialized = True
        self._ensureObserver()
        logger.info(f"Performance monitoring initialized (resourceLogging={resourceLogging})")

    def _resolveConfig(
        self,
        config: PerformanceConfig | dict[str, Any] | None,
        overrides: dict[str, Any],
    ) -> PerformanceConfig:
        if isinstance(config, PerformanceConfig):
            if not overrides:
                return config
            config = config.model_dump()
        try:
            return PerformanceConfig(**{**(config or {}), **overrides})
        except (TypeError, ValidationError) as e:
            raise ConfigurationError(f"Invalid performance config: {e}") from e

    def _ensureObserver(self) -> None:
        if self._observer is not None and self._observer.connected:
            return
        self._observer = self._bridge.observe(self._onNativeMarks, buffered=True)

    def unsafeReset(self) -> None:
        """Return to the pristine, uninitialized state.

        Clears marks, measures, metrics, event history and subscribers,
        detaches the native observer and turns resource logging off.
        Intended for test isolation.
        """
        self._marks.clear()
        self._measures.clear()
        self._metrics.clear()
        self._bus.clear()

        if self._observer is not None:
            self._observer.disconnect()
            self._observer = None

        self._bridge.setResourceLoggingEnabled(False)
        self._initialized = False

    # -- Subscriptions --

    def subscribe(self, listener: EventListener) -> Unsubscribe:
        """Subscribe to performance events.

        Args:
            listener: Callback receiving each event.

        Returns:
            Callable removing the listener.
        """
        return self._bus.subscribe(listener)

    # -- Navigation --

    def markNavigationStart(
        self,
        screen: str,
        detail: dict[str, Any] | None = None,
    ) -> Mark | None:
        """Mark the start of a transition to a screen.

        Args:
            screen: Destination screen.
            detail: Extra detail (e.g. {"from": previousScreen}).

        Returns:
            The start mark, or None if screen is empty.
        """
        if not screen:
            return None

        markDetail = {**(detail or {}), "screen": screen, "phase": "start"}
        startMark = self._marks.mark(
            transitionMarkName(screen, "start"), self._clock.now(), markDetail
        )

        self._bus.emit(NavigationStartEvent(screen=screen, detail=markDetail, mark=startMark))
        return startMark

    def markNavigationComplete(
        self,
        screen: str,
        detail: dict[str, Any] | None = None,
    ) -> Measure | None:
        """Mark the end of a transition and measure it.

        A missing start mark yields a zero-duration, degraded measure.

        Args:
            screen: Destination screen.
            detail: Extra detail (e.g. {"from": previousScreen}).

        Returns:
            The transition measure, or None if screen is empty.
        """
        if not screen:
            return None

        startName = transitionMarkName(screen, "start")
        endName = transitionMarkName(screen, "end")
        markDetail = {**(detail or {}), "screen": screen, "phase": "end"}
        endMark = self._marks.mark(endName, self._clock.now(), markDetail)

        startMark = self._marks.get(startName)
        measureDetail = {**(startMark.detail if startMark else {}), **markDetail}

        entry = self._measure(
            transitionMeasureName(screen),
            startName,
            endName,
            measureDetail,
            MeasureCategory.NAVIGATION,
        )
        self._metric("screenTransition", entry)

        # The occurrence is consumed; a later complete without a new start
        # degrades instead of reusing this start mark. Marks written by
        # listeners during the measure dispatch belong to the next occurrence.
        self._consumeMark(startName, startMark)
        self._consumeMark(endName, endMark)

        self._bus.emit(
            NavigationCompleteEvent(
                screen=screen,
                measure=entry,
                detail=markDetail,
                mark=endMark,
            )
        )
        return entry

    # -- Startup --

    def markAppInteractive(self, detail: dict[str, Any] | None = None) -> Measure:
        """Mark the app as interactive and record startup measures.

        Args:
            detail: Extra detail (e.g. {"initialScreen": "home"}).

        Returns:
            The ``appStartup`` measure.
        """
        markDetail = {**(detail or {}), "phase": "interactive"}
        interactiveMark = self._marks.mark(APP_INTERACTIVE_MARK, self._clock.now(), markDetail)

        startup = self._measure(
            "appStartup",
            NATIVE_LAUNCH_START,
            APP_INTERACTIVE_MARK,
            {**markDetail, "label": "Native Launch → Interactive"},
            MeasureCategory.STARTUP,
        )
        self._metric("appStartup", startup)

        if RUN_JS_BUNDLE_END in self._marks:
            bundle = self._measure(
                "bundleToInteractive",
                RUN_JS_BUNDLE_END,
                APP_INTERACTIVE_MARK,
                {**markDetail, "label": "JS Bundle → Interactive"},
                MeasureCategory.STARTUP,
            )
            self._metric("appInteractive", bundle)

        self._bus.emit(
            AppInteractiveEvent(measure=startup, detail=markDetail, mark=interactiveMark)
        )
        return startup

    def _onNativeMarks(self, entries: list[Mark]) -> None:
        """Observer callback for marks reported by the platform."""
        if not entries:
            return

        for entry in entries:
            self._marks.put(entry)

        names = {e.name for e in entries}

        if NATIVE_LAUNCH_END in names:
            launch = self._measure(
                "nativeLaunch",
                NATIVE_LAUNCH_START,
                NATIVE_LAUNCH_END,
                {"phase": "startup", "label": "Native Launch"},
                MeasureCategory.STARTUP,
            )
            self._metric("nativeLaunch", launch)

        if RUN_JS_BUNDLE_END in names:
            bundle = self._measure(
                "jsBundleExecution",
                RUN_JS_BUNDLE_START,
                RUN_JS_BUNDLE_END,
                {"phase": "startup", "label": "Run JS Bundle"},
                MeasureCategory.STARTUP,
            )
            self._metric("jsBundleExecution", bundle)

        self._bus.emit(NativeMarkEvent(entries=tuple(entries)))

    # -- Helpers --

    def _measure(
        self,
        name: str,
        start: str,
        end: str | None,
        detail: dict[str, Any],
        category: MeasureCategory,
    ) -> Measure:
        entry = self._measures.measure(name, start, end, detail)
        self._bus.emit(MeasureEvent(name=name, measure=entry, category=category))
        return entry

    def _consumeMark(self, name: str, entry: Mark | None) -> None:
        if entry is not None and self._marks.get(name) is entry:
            self._marks.clear(name)

    def _metric(self, name: str, entry: Measure) -> None:
        self._metrics.record(
            name,
            entry.duration,
            startTime=entry.startTime,
            detail=entry.detail,
        )
