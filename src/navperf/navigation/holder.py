"""Navigation state holder: the "go to screen" entry point."""

import logging
from typing import Any, Callable

from navperf.config import getSettings
from navperf.navigation.transition import NavState
from navperf.performance import PerformanceContext, getPerformanceContext

logger = logging.getLogger("navperf.navigation")

NavListener = Callable[[NavState], None]

EXPLORER_GRADES = (1, 2, 3, 4)


class NavigationStateHolder:
    """Holds the requested navigation state and announces changes.

    Navigating to a different screen marks the navigation start before the
    new state is pushed to subscribers.

    Args:
        initialNav: Starting navigation (defaults to the home screen).
        performance: Context receiving navigation-start marks.
    """

    def __init__(
        self,
        initialNav: NavState | None = None,
        performance: PerformanceContext | None = None,
    ):
        self._nav = initialNav or NavState(getSettings().homeScreen)
        self._performance = performance or getPerformanceContext()
        self._listeners: list[NavListener] = []
        self._visitedGrades: dict[int, bool] = {g: False for g in EXPLORER_GRADES}

    @property
    def nav(self) -> NavState:
        return self._nav

    @property
    def visitedGrades(self) -> dict[int, bool]:
        return dict(self._visitedGrades)

    def subscribe(self, listener: NavListener) -> Callable[[], None]:
        """Subscribe to navigation changes.

        Returns:
            Callable removing the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def goTo(self, screen: str, **params: Any) -> NavState | None:
        """Navigate to a screen.

        Args:
            screen: Destination screen (empty is ignored).
            **params: Navigation parameters.

        Returns:
            The new navigation state, or None if ignored.
        """
        if not screen:
            return None

        previousScreen = self._nav.screen
        nextNav = NavState(screen=screen, params=dict(params))

        if previousScreen != screen:
            self._performance.markNavigationStart(screen, {"from": previousScreen})

        self._nav = nextNav
        logger.debug(f"Navigate: {previousScreen} -> {screen} {params or ''}")
        self._publish(nextNav)
        return nextNav

    def setNav(self, nav: NavState) -> None:
        """Replace the navigation state without marking a start."""
        self._nav = nav
        self._publish(nav)

    def markGradeVisited(self, grade: int) -> None:
        """Record that a grade's screen was visited."""
        if self._visitedGrades.get(grade):
            return
        self._visitedGrades[grade] = True

    def _publish(self, nav: NavState) -> None:
        for listener in list(self._listeners):
            listener(nav)
