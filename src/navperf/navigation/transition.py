"""Home screen slide transition state machine.

Navigation that leaves or returns to the home screen slides the panes
horizontally; any other navigation swaps screens immediately. A new request
always cancels the animation in flight before it is evaluated, and each run
carries a CancellationToken so a superseded run can never settle.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

from navperf.config import getSettings
from navperf.navigation.animation import (
    CancellationToken,
    Easing,
    FrameScheduler,
    ProgressValue,
    TimingAnimation,
    easeOutCubic,
)
from navperf.performance import PerformanceContext, getPerformanceContext

logger = logging.getLogger("navperf.navigation")


class Direction(str, Enum):
    """Slide direction."""

    FORWARD = "forward"
    BACKWARD = "backward"


@dataclass(frozen=True)
class NavState:
    """Navigation state: a screen plus its parameters.

    Attributes:
        screen: Screen name.
        params: Extra navigation parameters (setNumber, lessonNumber...).
    """

    screen: str
    params: dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a navigation parameter."""
        return self.params.get(key, default)

    def toDict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {**self.params, "screen": self.screen}

    @classmethod
    def fromDict(cls, data: dict[str, Any]) -> "NavState":
        """Create from a ``{"screen": ..., **params}`` mapping."""
        params = {k: v for k, v in data.items() if k != "screen"}
        return cls(screen=data["screen"], params=params)


@dataclass(frozen=True)
class TransitionState:
    """An in-flight slide between two navigation states.

    Attributes:
        fromNav: Outgoing navigation state.
        toNav: Incoming navigation state.
        direction: Slide direction.
    """

    fromNav: NavState
    toNav: NavState
    direction: Direction

    def toDict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "from": self.fromNav.toDict(),
            "to": self.toNav.toDict(),
            "direction": self.direction.value,
        }


@dataclass(frozen=True)
class TransitionViewState:
    """What a view needs to lay out the transition.

    Attributes:
        displayNav: Settled navigation state.
        transitionState: In-flight transition, or None when idle.
        transitionProgress: Progress of the slide from 0 to 1.
        viewportWidth: Width of the viewport.
    """

    displayNav: NavState
    transitionState: TransitionState | None
    transitionProgress: float
    viewportWidth: float


def isHomeScreen(screen: str | None, homeScreen: str = "home") -> bool:
    return screen == homeScreen


def shouldAnimateHomeTransition(
    fromNav: NavState | None,
    toNav: NavState | None,
    homeScreen: str = "home",
) -> bool:
    """Check if a navigation leaves or returns to the home screen."""
    if fromNav is None or toNav is None:
        return False
    return isHomeScreen(fromNav.screen, homeScreen) != isHomeScreen(toNav.screen, homeScreen)


def getDirection(fromNav: NavState, toNav: NavState, homeScreen: str = "home") -> Direction:
    """Forward when leaving home, backward otherwise."""
    if isHomeScreen(fromNav.screen, homeScreen) and not isHomeScreen(toNav.screen, homeScreen):
        return Direction.FORWARD
    return Direction.BACKWARD


ChangeListener = Callable[[TransitionViewState], None]


class HomeScreenTransition:
    """Decides and drives transitions for each navigation request.

    Args:
        initialNav: Navigation state settled at start.
        scheduler: Frame scheduler driving the slide.
        performance: Context that receives navigation-complete marks
            (defaults to the process-wide context).
        viewportWidth: Initial viewport width.
        homeScreen: Home screen name (defaults to settings).
        durationMs: Slide duration (defaults to settings).
        frameIntervalMs: Frame interval (defaults to settings).
        easing: Easing curve for the slide.
    """

    def __init__(
        self,
        initialNav: NavState,
        scheduler: FrameScheduler,
        performance: PerformanceContext | None = None,
        viewportWidth: float = 0.0,
        homeScreen: str | None = None,
        durationMs: float | None = None,
        frameIntervalMs: float | None = None,
        easing: Easing = easeOutCubic,
    ):
        settings = getSettings()
        self._scheduler = scheduler
        self._performance = performance or getPerformanceContext()
        self._viewportWidth = viewportWidth
        self._homeScreen = homeScreen or settings.homeScreen
        self._durationMs = settings.slideDurationMs if durationMs is None else durationMs
        self._frameIntervalMs = frameIntervalMs or settings.frameIntervalMs
        self._easing = easing

        self._settledNav = initialNav
        self._displayNav = initialNav
        self._transitionState: TransitionState | None = None
        self._progress = ProgressValue(0.0)
        self._animation: TimingAnimation | None = None
        self._token: CancellationToken | None = None
        self._listeners: list[ChangeListener] = []
        self._disposed = False

    # -- View state --

    @property
    def displayNav(self) -> NavState:
        return self._displayNav

    @property
    def transitionState(self) -> TransitionState | None:
        return self._transitionState

    @property
    def transitionProgress(self) -> ProgressValue:
        return self._progress

    @property
    def viewportWidth(self) -> float:
        return self._viewportWidth

    @property
    def homeScreen(self) -> str:
        return self._homeScreen

    @property
    def isAnimating(self) -> bool:
        return self._transitionState is not None

    @property
    def isDisposed(self) -> bool:
        return self._disposed

    def setViewportWidth(self, width: float) -> None:
        """Update the viewport width (e.g. on rotation)."""
        self._viewportWidth = width
        self._notify()

    def snapshot(self) -> TransitionViewState:
        """Get the current view state."""
        return TransitionViewState(
            displayNav=self._displayNav,
            transitionState=self._transitionState,
            transitionProgress=self._progress.value,
            viewportWidth=self._viewportWidth,
        )

    def onChange(self, listener: ChangeListener) -> Callable[[], None]:
        """Listen for settled-nav and transition-state changes.

        Returns:
            Callable removing the listener.
        """
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    # -- Requests --

    def request(self, nav: NavState | None) -> None:
        """Handle a navigation request.

        Args:
            nav: Requested navigation state (None is ignored).
        """
        if self._disposed:
            logger.warning(f"Ignoring navigation request after dispose: {nav}")
            return
        if nav is None:
            return

        previous = self._settledNav
        self._cancelAnimation()

        if previous.screen == nav.screen:
            self._settle(nav)
            return

        if shouldAnimateHomeTransition(previous, nav, self._homeScreen):
            self._startAnimation(previous, nav)
            return

        self._settle(nav)
        self._reportComplete(previous, nav, animated=False)

    def dispose(self) -> None:
        """Stop any running animation and ignore further requests."""
        if self._disposed:
            return
        self._disposed = True

        if self._token is not None:
            self._token.cancel()
            self._token = None
        if self._animation is not None:
            animation, self._animation = self._animation, None
            animation.stop()

        self._listeners.clear()
        logger.debug("Home screen transition disposed")

    # -- Internals --

    def _startAnimation(self, previous: NavState, nav: NavState) -> None:
        direction = getDirection(previous, nav, self._homeScreen)
        token = CancellationToken()
        self._token = token
        self._transitionState = TransitionState(fromNav=previous, toNav=nav, direction=direction)

        animation = TimingAnimation(
            self._progress,
            self._scheduler,
            toValue=1.0,
            durationMs=self._durationMs,
            easing=self._easing,
            frameIntervalMs=self._frameIntervalMs,
        )
        self._animation = animation

        logger.debug(f"Animating {previous.screen} -> {nav.screen} ({direction.value})")
        self._notify()
        animation.start(lambda finished: self._onAnimationDone(token, finished))

    def _onAnimationDone(self, token: CancellationToken, finished: bool) -> None:
        if token.cancelled or token is not self._token:
            logger.debug("Ignoring completion of a superseded animation")
            return

        state = self._transitionState
        self._token = None
        self._animation = None
        self._transitionState = None

        if finished and state is not None:
            self._settle(state.toNav)
            self._reportComplete(state.fromNav, state.toNav, animated=True, direction=state.direction)
        else:
            self._notify()

    def _cancelAnimation(self) -> None:
        if self._token is not None:
            self._token.cancel()
            self._token = None

        if self._animation is not None:
            animation, self._animation = self._animation, None
            animation.stop()
            logger.debug("Cancelled in-flight transition")

        self._progress.setValue(0.0)
        self._transitionState = None

    def _settle(self, nav: NavState) -> None:
        self._settledNav = nav
        self._displayNav = nav
        self._notify()

    def _reportComplete(
        self,
        previous: NavState,
        nav: NavState,
        animated: bool,
        direction: Direction | None = None,
    ) -> None:
        detail: dict[str, Any] = {"from": previous.screen, "animated": animated}
        if direction is not None:
            detail["direction"] = direction.value
        self._performance.markNavigationComplete(nav.screen, detail)

    def _notify(self) -> None:
        if not self._listeners:
            return
        state = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception as e:
                logger.error(f"Transition listener error: {e}")
