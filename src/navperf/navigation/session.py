"""One app run's navigation wiring."""

import logging
from typing import Any, Callable

from navperf.config import getSettings
from navperf.navigation.actions import NavigationActions
from navperf.navigation.animation import FrameScheduler
from navperf.navigation.holder import NavigationStateHolder
from navperf.navigation.renderer import PaneLayout, layoutView
from navperf.navigation.transition import HomeScreenTransition, NavState, TransitionViewState
from navperf.performance import Measure, PerformanceContext, getPerformanceContext

logger = logging.getLogger("navperf.navigation")


class NavigationSession:
    """Connects the navigation holder to the home transition.

    Args:
        scheduler: Frame scheduler for the slide animation.
        performance: Performance context (defaults to the process-wide one).
        initialScreen: Screen shown at launch (defaults to the home screen).
        viewportWidth: Viewport width.
        homeScreen: Home screen name (defaults to settings).
        awardAchievement: Optional achievement callback for actions.
    """

    def __init__(
        self,
        scheduler: FrameScheduler,
        performance: PerformanceContext | None = None,
        initialScreen: str | None = None,
        viewportWidth: float = 0.0,
        homeScreen: str | None = None,
        awardAchievement: Callable[[str], None] | None = None,
    ):
        self._performance = performance or getPerformanceContext()
        homeScreen = homeScreen or getSettings().homeScreen
        initialNav = NavState(initialScreen or homeScreen)

        self.holder = NavigationStateHolder(initialNav, self._performance)
        self.transition = HomeScreenTransition(
            initialNav,
            scheduler,
            performance=self._performance,
            viewportWidth=viewportWidth,
            homeScreen=homeScreen,
        )
        self.actions = NavigationActions.fromHolder(
            self.holder, awardAchievement, homeScreen=homeScreen
        )
        self._unsubscribe = self.holder.subscribe(self.transition.request)
        self._started = False

    @property
    def performance(self) -> PerformanceContext:
        return self._performance

    def start(self) -> Measure | None:
        """Mark the app interactive on the initial screen (once).

        Returns:
            The appStartup measure, or None if already started.
        """
        if self._started:
            return None
        self._started = True
        return self._performance.markAppInteractive({"initialScreen": self.holder.nav.screen})

    def goTo(self, screen: str, **params: Any) -> NavState | None:
        """Navigate through the holder."""
        return self.holder.goTo(screen, **params)

    def snapshot(self) -> TransitionViewState:
        return self.transition.snapshot()

    def layout(self) -> list[PaneLayout]:
        """Lay out panes for the current view state."""
        return layoutView(self.transition.snapshot())

    def dispose(self) -> None:
        """Detach from the holder and stop any animation."""
        self._unsubscribe()
        self.transition.dispose()
