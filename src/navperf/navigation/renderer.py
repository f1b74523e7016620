"""Pane layout for the home slide transition.

Views consume TransitionViewState and lay out either one pane (idle) or an
outgoing and an incoming pane whose horizontal offsets follow the progress.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Protocol

from navperf.navigation.animation import interpolate
from navperf.navigation.transition import (
    Direction,
    NavState,
    TransitionState,
    TransitionViewState,
)


@dataclass(frozen=True)
class PaneLayout:
    """A positioned screen pane.

    Attributes:
        nav: Navigation state rendered in the pane.
        offsetX: Horizontal offset from the viewport origin.
        interactive: Whether the pane receives input.
    """

    nav: NavState
    offsetX: float
    interactive: bool = True


class TransitionRenderer(Protocol):
    """View that draws laid-out panes."""

    def render(self, panes: list[PaneLayout]) -> None: ...


def canAnimate(transitionState: TransitionState | None, viewportWidth: object) -> bool:
    """Check if a slide can be drawn.

    True only for a transition with both endpoints and a positive,
    finite numeric viewport width.
    """
    if transitionState is None:
        return False
    if transitionState.fromNav is None or transitionState.toNav is None:
        return False
    if isinstance(viewportWidth, bool) or not isinstance(viewportWidth, (int, float)):
        return False
    return math.isfinite(viewportWidth) and viewportWidth > 0


def paneOffsets(direction: Direction, progress: float, viewportWidth: float) -> tuple[float, float]:
    """Get (outgoing, incoming) pane offsets for a progress value.

    Forward slides the outgoing pane to the left and brings the incoming
    pane in from the right; backward mirrors this.
    """
    if direction == Direction.FORWARD:
        outgoing = (0.0, -viewportWidth)
        incoming = (viewportWidth, 0.0)
    else:
        outgoing = (0.0, viewportWidth)
        incoming = (-viewportWidth, 0.0)

    return (
        interpolate(progress, (0.0, 1.0), outgoing),
        interpolate(progress, (0.0, 1.0), incoming),
    )


def layoutPanes(
    transitionState: TransitionState | None,
    progress: float,
    viewportWidth: float,
    displayNav: NavState | None = None,
) -> list[PaneLayout]:
    """Lay out the panes for the current transition.

    Args:
        transitionState: In-flight transition or None.
        progress: Slide progress from 0 to 1.
        viewportWidth: Viewport width.
        displayNav: Settled navigation, drawn when nothing animates.

    Returns:
        One pane when idle, outgoing then incoming pane when animating.
    """
    if not canAnimate(transitionState, viewportWidth):
        destination = transitionState.toNav if transitionState is not None else displayNav
        if destination is None:
            return []
        return [PaneLayout(nav=destination, offsetX=0.0, interactive=True)]

    fromOffset, toOffset = paneOffsets(transitionState.direction, progress, viewportWidth)
    return [
        PaneLayout(nav=transitionState.fromNav, offsetX=fromOffset, interactive=False),
        PaneLayout(nav=transitionState.toNav, offsetX=toOffset, interactive=True),
    ]


def layoutView(state: TransitionViewState) -> list[PaneLayout]:
    """Lay out panes from a transition view state."""
    return layoutPanes(
        state.transitionState,
        state.transitionProgress,
        state.viewportWidth,
        displayNav=state.displayNav,
    )
