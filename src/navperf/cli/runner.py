"""Runs navigation scripts against a deterministic frame scheduler."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from typing import Any, TextIO

from navperf.cli.loader import NavigationScript
from navperf.config import Settings, getSettings
from navperf.logging.tracer import PerformanceTracer, TraceEvent
from navperf.navigation.renderer import PaneLayout
from navperf.navigation.session import NavigationSession
from navperf.performance.bridge import NATIVE_LAUNCH_START, NativeBridge
from navperf.performance.context import PerformanceContext
from navperf.testing.manualTime import ManualClock, ManualFrameScheduler

logger = logging.getLogger("navperf.cli")


class TextRenderer:
    """Writes pane layouts as text lines."""

    def __init__(self, out: TextIO | None = None):
        self._out = out or sys.stdout

    def render(self, panes: list[PaneLayout]) -> None:
        parts = [
            f"{p.nav.screen}@{p.offsetX:+.0f}{'' if p.interactive else ' (inert)'}"
            for p in panes
        ]
        print(f"    | {'  '.join(parts)}", file=self._out)


@dataclass
class ScriptResult:
    """Outcome of a script run.

    Attributes:
        script: Script that ran.
        finalScreen: Screen settled at the end.
        elapsedMs: Simulated time from launch to the end of the run.
        events: Traced performance events.
        report: Metrics report text.
        stats: Tracer statistics.
        traceJson: Exported event trace.
    """

    script: NavigationScript
    finalScreen: str
    elapsedMs: float
    events: list[TraceEvent] = field(default_factory=list)
    report: str = ""
    stats: dict[str, Any] = field(default_factory=dict)
    traceJson: str = ""


class ScriptRunner:
    """Plays a NavigationScript through a NavigationSession.

    Time is simulated: each step's ``wait`` advances a manual clock shared by
    the performance context and the animation scheduler.

    Args:
        settings: Settings to use (defaults to global settings).
        renderer: Optional renderer receiving pane layouts on every frame.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        renderer: TextRenderer | None = None,
    ):
        self._settings = settings or getSettings()
        self._renderer = renderer

    def run(self, script: NavigationScript) -> ScriptResult:
        """Run a script to completion.

        Args:
            script: Script to run.

        Returns:
            ScriptResult with the traced events and metrics report.
        """
        clock = ManualClock()
        scheduler = ManualFrameScheduler(clock)

        hasLaunchMark = any(m.name == NATIVE_LAUNCH_START for m in script.nativeMarks)
        bridge = NativeBridge(clock, recordLaunch=not hasLaunchMark)
        bridge.reportMarks(
            (m.name, m.at) for m in sorted(script.nativeMarks, key=lambda m: m.at)
        )

        context = PerformanceContext(clock=clock, bridge=bridge, settings=self._settings)
        tracer = PerformanceTracer().attach(context)
        context.initialize(resourceLogging=script.resourceLogging)

        lastNative = max((m.at for m in script.nativeMarks), default=0.0)
        clock.set(max(script.interactiveAt, lastNative))

        session = NavigationSession(
            scheduler,
            performance=context,
            initialScreen=script.initialScreen,
            viewportWidth=script.viewportWidth,
            homeScreen=script.homeScreen,
        )

        removeRenderHook = None
        if self._renderer is not None:
            renderer = self._renderer
            removeRenderHook = session.transition.transitionProgress.addListener(
                lambda _: renderer.render(session.layout())
            )

        try:
            session.start()
            for index, step in enumerate(script.steps):
                if step.goTo:
                    logger.debug(f"Step {index + 1}: goTo {step.goTo} {step.params}")
                    session.goTo(step.goTo, **step.params)
                if step.wait:
                    scheduler.advance(step.wait)
            scheduler.runUntilIdle()
            finalScreen = session.snapshot().displayNav.screen
        finally:
            if removeRenderHook is not None:
                removeRenderHook()
            session.dispose()
            tracer.detach()

        return ScriptResult(
            script=script,
            finalScreen=finalScreen,
            elapsedMs=clock.now(),
            events=tracer.getEvents(),
            report=context.metrics.formatReport(),
            stats=tracer.getStats(),
            traceJson=tracer.export(),
        )
