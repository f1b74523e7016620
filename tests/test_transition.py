"""Tests for the home screen transition state machine."""

import logging

import pytest

from navperf.navigation import (
    Direction,
    HomeScreenTransition,
    NavState,
    getDirection,
    isHomeScreen,
    shouldAnimateHomeTransition,
)


@pytest.fixture
def makeTransition(scheduler, context):
    """Factory for transitions on the manual scheduler."""

    def factory(screen: str = "home", **kwargs) -> HomeScreenTransition:
        kwargs.setdefault("viewportWidth", 390)
        kwargs.setdefault("durationMs", 280)
        kwargs.setdefault("frameIntervalMs", 16)
        return HomeScreenTransition(NavState(screen), scheduler, performance=context, **kwargs)

    return factory


class TestRules:
    """Tests for the animate/direction decision helpers."""

    def test_is_home_screen(self):
        assert isHomeScreen("home")
        assert not isHomeScreen("grade1")
        assert isHomeScreen("menu", homeScreen="menu")

    def test_should_animate(self):
        """Test only navigation into or out of home animates."""
        home, grade1, grade2 = NavState("home"), NavState("grade1"), NavState("grade2")

        assert shouldAnimateHomeTransition(home, grade1)
        assert shouldAnimateHomeTransition(grade1, home)
        assert not shouldAnimateHomeTransition(grade1, grade2)
        assert not shouldAnimateHomeTransition(home, home)
        assert not shouldAnimateHomeTransition(None, grade1)

    def test_direction(self):
        """Test leaving home is forward and returning is backward."""
        assert getDirection(NavState("home"), NavState("grade1")) == Direction.FORWARD
        assert getDirection(NavState("grade1"), NavState("home")) == Direction.BACKWARD


class TestHomeScreenTransition:
    """Tests for HomeScreenTransition."""

    def test_leaving_home_animates_forward(self, makeTransition, scheduler):
        """Test home to grade1 slides forward, then settles."""
        transition = makeTransition("home")

        transition.request(NavState("grade1"))

        state = transition.transitionState
        assert transition.isAnimating
        assert state.direction == Direction.FORWARD
        assert state.fromNav.screen == "home"
        assert state.toNav.screen == "grade1"
        assert transition.displayNav.screen == "home"

        scheduler.runUntilIdle()

        assert not transition.isAnimating
        assert transition.transitionState is None
        assert transition.displayNav.screen == "grade1"
        assert transition.transitionProgress.value == 1.0

    def test_returning_home_animates_backward(self, makeTransition, scheduler):
        """Test grade1 to home slides backward."""
        transition = makeTransition("grade1")

        transition.request(NavState("home"))

        assert transition.transitionState.direction == Direction.BACKWARD
        scheduler.runUntilIdle()
        assert transition.displayNav.screen == "home"

    def test_between_grades_settles_immediately(self, makeTransition, scheduler, context):
        """Test navigation that doesn't touch home swaps without animating."""
        transition = makeTransition("grade1")
        context.markNavigationStart("grade2", {"from": "grade1"})

        transition.request(NavState("grade2"))

        assert not transition.isAnimating
        assert transition.displayNav.screen == "grade2"
        assert scheduler.pendingCount == 0

        entry = context.measures.getEntries("screen-transition:grade2")[0]
        assert entry.detail["animated"] is False
        assert entry.detail["from"] == "grade1"
        assert not entry.degraded

    def test_same_screen_settles_without_measure(self, makeTransition, context):
        """Test re-navigating to the settled screen only updates params."""
        transition = makeTransition("grade2Set")

        transition.request(NavState("grade2Set", {"setNumber": 3}))

        assert transition.displayNav.get("setNumber") == 3
        assert transition.transitionProgress.value == 0
        assert context.metrics.getRecords("screenTransition") == []

    def test_none_request_ignored(self, makeTransition):
        """Test a None request changes nothing."""
        transition = makeTransition("home")

        transition.request(None)

        assert transition.displayNav.screen == "home"
        assert not transition.isAnimating

    def test_animated_completion_is_measured(self, makeTransition, scheduler, context):
        """Test the slide duration is reported as a navigation measure."""
        transition = makeTransition("home")
        context.markNavigationStart("grade1", {"from": "home"})

        transition.request(NavState("grade1"))
        scheduler.runUntilIdle()

        entry = context.measures.getEntries("screen-transition:grade1")[0]
        assert entry.duration >= 280
        assert entry.detail["animated"] is True
        assert entry.detail["direction"] == "forward"
        assert entry.detail["from"] == "home"

    def test_no_measure_until_animation_finishes(self, makeTransition, scheduler, context):
        """Test completion is only reported once the slide settles."""
        transition = makeTransition("home")

        transition.request(NavState("grade1"))
        scheduler.advance(100)

        assert context.metrics.getRecords("screenTransition") == []

    def test_interruption_settles_on_latest_request(self, makeTransition, scheduler, context):
        """Test a second request mid-animation supersedes the first."""
        transition = makeTransition("home")
        displayed = []
        transition.onChange(lambda state: displayed.append(state.displayNav.screen))

        transition.request(NavState("grade1"))
        scheduler.advance(100)
        assert 0 < transition.transitionProgress.value < 1

        transition.request(NavState("grade2"))

        # Evaluated against the still-settled home screen
        assert transition.transitionState.toNav.screen == "grade2"
        assert transition.transitionState.fromNav.screen == "home"
        assert transition.transitionProgress.value == 0

        scheduler.runUntilIdle()

        assert transition.displayNav.screen == "grade2"
        assert "grade1" not in displayed
        screens = [r.detail["screen"] for r in context.metrics.getRecords("screenTransition")]
        assert screens == ["grade2"]

    def test_returning_home_mid_slide_cancels(self, makeTransition, scheduler, context):
        """Test going back home before the slide finishes snaps back."""
        transition = makeTransition("home")

        transition.request(NavState("grade1"))
        scheduler.advance(50)
        transition.request(NavState("home"))

        assert not transition.isAnimating
        assert transition.transitionProgress.value == 0
        assert scheduler.pendingCount == 0

        scheduler.runUntilIdle()
        assert transition.displayNav.screen == "home"
        assert context.metrics.getRecords("screenTransition") == []

    def test_dispose_stops_animation(self, makeTransition, scheduler, context, caplog):
        """Test dispose stops the animation and ignores later requests."""
        transition = makeTransition("home")
        transition.request(NavState("grade1"))

        transition.dispose()
        transition.dispose()

        assert transition.isDisposed
        assert scheduler.pendingCount == 0

        with caplog.at_level(logging.WARNING):
            transition.request(NavState("grade3"))

        scheduler.runUntilIdle()
        assert transition.displayNav.screen == "home"
        assert context.metrics.getRecords("screenTransition") == []
        assert "after dispose" in caplog.text

    def test_on_change_listener(self, makeTransition, scheduler):
        """Test listeners see the transition begin and settle."""
        transition = makeTransition("home")
        states = []
        remove = transition.onChange(states.append)

        transition.request(NavState("grade1"))
        scheduler.runUntilIdle()
        remove()
        transition.request(NavState("home"))

        assert states[0].transitionState is not None
        assert states[-1].transitionState is None
        assert states[-1].displayNav.screen == "grade1"

    def test_failing_change_listener_logged(self, makeTransition, caplog):
        """Test a raising listener doesn't break the transition."""
        transition = makeTransition("grade1")

        def broken(state):
            raise RuntimeError("view crashed")

        transition.onChange(broken)

        with caplog.at_level(logging.ERROR):
            transition.request(NavState("grade2"))

        assert transition.displayNav.screen == "grade2"
        assert "view crashed" in caplog.text

    def test_viewport_width(self, makeTransition):
        """Test viewport width updates appear in the snapshot."""
        transition = makeTransition("home", viewportWidth=0)

        transition.setViewportWidth(412)

        assert transition.snapshot().viewportWidth == 412

    def test_custom_home_screen(self, makeTransition):
        """Test the animated screen can be configured."""
        transition = makeTransition("menu", homeScreen="menu")

        transition.request(NavState("grade1"))

        assert transition.homeScreen == "menu"
        assert transition.isAnimating

    def test_home_screen_from_settings(self, scheduler, context, monkeypatch):
        """Test the home screen defaults to settings."""
        from navperf.config import resetSettings

        monkeypatch.setenv("NAVPERF_HOMESCREEN", "start")
        resetSettings()

        transition = HomeScreenTransition(NavState("start"), scheduler, performance=context)
        transition.request(NavState("grade1"))

        assert transition.homeScreen == "start"
        assert transition.isAnimating
