"""Tests for transition pane layout."""

import math

import pytest

from navperf.navigation import (
    Direction,
    NavState,
    TransitionState,
    canAnimate,
    layoutPanes,
    layoutView,
    paneOffsets,
)

HOME = NavState("home")
GRADE1 = NavState("grade1")
FORWARD = TransitionState(fromNav=HOME, toNav=GRADE1, direction=Direction.FORWARD)


class TestCanAnimate:
    """Tests for canAnimate."""

    def test_valid(self):
        assert canAnimate(FORWARD, 390)
        assert canAnimate(FORWARD, 390.5)

    @pytest.mark.parametrize("width", [0, -10, math.nan, math.inf, None, "390", True])
    def test_invalid_width(self, width):
        """Test widths that aren't positive finite numbers."""
        assert not canAnimate(FORWARD, width)

    def test_no_transition(self):
        assert not canAnimate(None, 390)


class TestPaneOffsets:
    """Tests for paneOffsets."""

    def test_forward(self):
        """Test forward slides the outgoing pane left and brings the new one from the right."""
        assert paneOffsets(Direction.FORWARD, 0, 390) == (0, 390)
        assert paneOffsets(Direction.FORWARD, 0.5, 390) == (-195, 195)
        assert paneOffsets(Direction.FORWARD, 1, 390) == (-390, 0)

    def test_backward(self):
        """Test backward mirrors forward."""
        assert paneOffsets(Direction.BACKWARD, 0, 390) == (0, -390)
        assert paneOffsets(Direction.BACKWARD, 1, 390) == (390, 0)


class TestLayoutPanes:
    """Tests for layoutPanes and layoutView."""

    def test_idle_renders_display_nav(self):
        """Test an idle view draws only the settled screen."""
        panes = layoutPanes(None, 0, 390, displayNav=HOME)

        assert len(panes) == 1
        assert panes[0].nav == HOME
        assert panes[0].offsetX == 0
        assert panes[0].interactive

    def test_zero_width_renders_destination(self):
        """Test a transition without a usable width draws the destination only."""
        panes = layoutPanes(FORWARD, 0.5, 0, displayNav=HOME)

        assert [p.nav.screen for p in panes] == ["grade1"]
        assert panes[0].offsetX == 0

    def test_animating_renders_two_panes(self):
        """Test both panes are laid out while animating."""
        outgoing, incoming = layoutPanes(FORWARD, 0.5, 390)

        assert outgoing.nav == HOME
        assert outgoing.offsetX == -195
        assert not outgoing.interactive
        assert incoming.nav == GRADE1
        assert incoming.offsetX == 195
        assert incoming.interactive

    def test_nothing_to_render(self):
        assert layoutPanes(None, 0, 390) == []

    def test_layout_view_follows_transition(self, scheduler, context):
        """Test layout from a live transition snapshot."""
        from navperf.navigation import HomeScreenTransition

        transition = HomeScreenTransition(
            HOME, scheduler, performance=context, viewportWidth=390, durationMs=280
        )
        transition.request(GRADE1)
        scheduler.advance(140)

        panes = layoutView(transition.snapshot())
        assert len(panes) == 2
        assert -390 < panes[0].offsetX < 0
        assert 0 < panes[1].offsetX < 390

        scheduler.runUntilIdle()
        panes = layoutView(transition.snapshot())
        assert [(p.nav.screen, p.offsetX) for p in panes] == [("grade1", 0)]
