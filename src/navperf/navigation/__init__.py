"""Navigation state, actions and the home screen slide transition."""

from navperf.navigation.actions import EXPLORER_ACHIEVEMENT, NavigationActions
from navperf.navigation.animation import (
    AsyncioFrameScheduler,
    CancellationToken,
    FrameHandle,
    FrameScheduler,
    ProgressValue,
    TimingAnimation,
    easeOutCubic,
    interpolate,
    linear,
)
from navperf.navigation.holder import EXPLORER_GRADES, NavigationStateHolder
from navperf.navigation.renderer import (
    PaneLayout,
    TransitionRenderer,
    canAnimate,
    layoutPanes,
    layoutView,
    paneOffsets,
)
from navperf.navigation.session import NavigationSession
from navperf.navigation.transition import (
    Direction,
    HomeScreenTransition,
    NavState,
    TransitionState,
    TransitionViewState,
    getDirection,
    isHomeScreen,
    shouldAnimateHomeTransition,
)

__all__ = [
    # State
    "NavState",
    "NavigationStateHolder",
    "NavigationActions",
    "NavigationSession",
    "EXPLORER_GRADES",
    "EXPLORER_ACHIEVEMENT",
    # Transition
    "HomeScreenTransition",
    "TransitionState",
    "TransitionViewState",
    "Direction",
    "isHomeScreen",
    "shouldAnimateHomeTransition",
    "getDirection",
    # Animation
    "FrameScheduler",
    "FrameHandle",
    "AsyncioFrameScheduler",
    "TimingAnimation",
    "ProgressValue",
    "CancellationToken",
    "easeOutCubic",
    "linear",
    "interpolate",
    # Rendering
    "PaneLayout",
    "TransitionRenderer",
    "canAnimate",
    "paneOffsets",
    "layoutPanes",
    "layoutView",
]
