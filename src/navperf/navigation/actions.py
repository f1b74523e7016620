"""Named navigation actions for the app's screens."""

from __future__ import annotations

from typing import Any, Callable, Mapping

from navperf.config import getSettings
from navperf.navigation.holder import EXPLORER_GRADES, NavigationStateHolder
from navperf.navigation.transition import NavState

GoTo = Callable[..., Any]
NavSource = NavState | Mapping[str, Any] | Callable[[], NavState | Mapping[str, Any]]
GradesSource = Mapping[int, bool] | Callable[[], Mapping[int, bool]]

EXPLORER_ACHIEVEMENT = "explorer"


class NavigationActions:
    """Navigation shortcuts used by screens.

    Visiting grades 1 to 4 awards the explorer achievement once, the first
    time all of them have been visited.

    Args:
        goTo: Navigate function, ``goTo(screen, **params)``.
        nav: Current navigation state, or a callable returning it.
        markGradeVisited: Records a visited grade.
        visitedGrades: Visited grade flags, or a callable returning them.
        awardAchievement: Optional achievement callback.
        homeScreen: Screen goHome() navigates to (defaults to settings).
    """

    def __init__(
        self,
        goTo: GoTo,
        nav: NavSource,
        markGradeVisited: Callable[[int], None],
        visitedGrades: GradesSource,
        awardAchievement: Callable[[str], None] | None = None,
        homeScreen: str | None = None,
    ):
        self._goTo = goTo
        self._nav = nav
        self._markGradeVisited = markGradeVisited
        self._visitedGrades = visitedGrades
        self._awardAchievement = awardAchievement
        self._homeScreen = homeScreen or getSettings().homeScreen

    @classmethod
    def fromHolder(
        cls,
        holder: NavigationStateHolder,
        awardAchievement: Callable[[str], None] | None = None,
        homeScreen: str | None = None,
    ) -> "NavigationActions":
        """Create actions bound to a NavigationStateHolder."""
        return cls(
            goTo=holder.goTo,
            nav=lambda: holder.nav,
            markGradeVisited=holder.markGradeVisited,
            visitedGrades=lambda: holder.visitedGrades,
            awardAchievement=awardAchievement,
            homeScreen=homeScreen,
        )

    def _param(self, key: str) -> Any:
        # NavState and plain mappings both expose get()
        nav = self._nav() if callable(self._nav) else self._nav
        return nav.get(key)

    def _grades(self) -> dict[int, bool]:
        grades = self._visitedGrades() if callable(self._visitedGrades) else self._visitedGrades
        return dict(grades)

    def _markAndMaybeAward(self, grade: int) -> None:
        before = self._grades()
        alreadyCompleted = all(before.get(g) for g in EXPLORER_GRADES)
        self._markGradeVisited(grade)

        if self._awardAchievement is None:
            return
        updated = {**before, grade: True}
        if not alreadyCompleted and all(updated.get(g) for g in EXPLORER_GRADES):
            self._awardAchievement(EXPLORER_ACHIEVEMENT)

    @property
    def homeScreen(self) -> str:
        return self._homeScreen

    def goHome(self) -> None:
        self._goTo(self._homeScreen)

    def goGrade1(self) -> None:
        self._markAndMaybeAward(1)
        self._goTo("grade1")

    def goGrade2(self) -> None:
        self._markAndMaybeAward(2)
        self._goTo("grade2")

    def goGrade3(self) -> None:
        self._markAndMaybeAward(3)
        self._goTo("grade3")

    def goGrade4(self) -> None:
        self._markAndMaybeAward(4)
        self._goTo("grade4")

    def goGrade2Set(self, setNumber: int) -> None:
        self._goTo("grade2Set", setNumber=setNumber)

    def goGrade2Lesson(self, lessonNumber: int) -> None:
        self._goTo(
            "grade2Lesson",
            setNumber=self._param("setNumber"),
            lessonNumber=lessonNumber,
        )

    def goGrade2b(self) -> None:
        # Grade 2b shares grade 2's explorer credit
        self._markAndMaybeAward(2)
        self._goTo("grade2b")

    def goGrade2bSet(self, setNumber: int) -> None:
        self._goTo("grade2bSet", setNumber=setNumber)

    def goGrade2bLesson(self, lessonNumber: int) -> None:
        self._goTo(
            "grade2bLesson",
            setNumber=self._param("setNumber"),
            lessonNumber=lessonNumber,
        )

    def goBackToGrade2Set(self) -> None:
        self._goTo("grade2Set", setNumber=self._param("setNumber"))

    def goBackToGrade2bSet(self) -> None:
        self._goTo("grade2bSet", setNumber=self._param("setNumber"))

    def goBackToLesson(self) -> None:
        """Return to the lesson remembered in the current navigation."""
        self._goTo(
            self._param("lessonScreen") or "grade2Lesson",
            setNumber=self._param("setNumber"),
            lessonNumber=self._param("lessonNumber"),
        )
