from __future__ import annotations

import datetime
from typing import Iterable, Optional

from algorithms import DateTools, MathTools
from algorithms.date_tools import DateLike
from exercise_catalog import ExerciseCatalog, normalize
from models import (
    AchievementProgress,
    CalorieEntry,
    FrozenModel,
    StepEntry,
    WorkoutRecord,
)
from progression_service import ProgressionService
from streak_service import StreakService


class Achievement(FrozenModel):
    id: str
    title: str
    description: str
    category: str
    metric: str
    target: int


ACHIEVEMENTS: tuple[Achievement, ...] = (
    Achievement(
        id="first_workout",
        title="First Steps",
        description="Log your first workout",
        category="Workouts",
        metric="workouts",
        target=1,
    ),
    Achievement(
        id="dedicated_10",
        title="Dedicated",
        description="Log 10 workouts",
        category="Workouts",
        metric="workouts",
        target=10,
    ),
    Achievement(
        id="warrior_50",
        title="Warrior",
        description="Log 50 workouts",
        category="Workouts",
        metric="workouts",
        target=50,
    ),
    Achievement(
        id="streak_7",
        title="On Fire",
        description="7-day workout streak",
        category="Streaks",
        metric="streak",
        target=7,
    ),
    Achievement(
        id="streak_30",
        title="Unstoppable",
        description="30-day workout streak",
        category="Streaks",
        metric="streak",
        target=30,
    ),
    Achievement(
        id="pr_5",
        title="PR Hunter",
        description="Set 5 personal records",
        category="Strength",
        metric="records",
        target=5,
    ),
    Achievement(
        id="pr_25",
        title="Record Breaker",
        description="Set 25 personal records",
        category="Strength",
        metric="records",
        target=25,
    ),
    Achievement(
        id="steps_7_days",
        title="Step Master",
        description="Hit step goal 7 days",
        category="Consistency",
        metric="step_days",
        target=7,
    ),
    Achievement(
        id="nutrition_7_days",
        title="Nutrition Pro",
        description="Log meals for 7 days",
        category="Consistency",
        metric="calorie_days",
        target=7,
    ),
    Achievement(
        id="well_rounded",
        title="Well-Rounded",
        description="Train all 6 muscle groups in one week",
        category="Variety",
        metric="groups_per_week",
        target=6,
    ),
)


class GamificationService:
    """Derive achievement progress from logged history."""

    def __init__(
        self,
        catalog: ExerciseCatalog,
        streaks: Optional[StreakService] = None,
        progression: Optional[ProgressionService] = None,
        excluded_groups: Iterable[str] = ("Cardio",),
    ) -> None:
        self.catalog = catalog
        self.streaks = streaks or StreakService()
        self.progression = progression or ProgressionService()
        self.excluded_groups = {normalize(g) for g in excluded_groups}

    def max_groups_in_week(self, workouts: Iterable[WorkoutRecord]) -> int:
        """Return the most distinct strength muscle groups trained in one week."""
        weeks: dict[datetime.date, set[str]] = {}
        for workout in workouts:
            if not workout.completed:
                continue
            monday = DateTools.week_bounds(workout.date).start
            for ex in workout.exercises:
                group = self.catalog.muscle_group(ex.exercise_name)
                if group is None or normalize(group) in self.excluded_groups:
                    continue
                weeks.setdefault(monday, set()).add(group)
        return max((len(g) for g in weeks.values()), default=0)

    def metrics(
        self,
        workouts: Iterable[WorkoutRecord],
        calories: Iterable[CalorieEntry] = (),
        steps: Iterable[StepEntry] = (),
        today: Optional[DateLike] = None,
    ) -> dict[str, int]:
        workouts = list(workouts)
        return {
            "workouts": sum(1 for w in workouts if w.completed),
            "streak": self.streaks.workout_streak(workouts, today).longest,
            "records": self.progression.personal_record_events(workouts),
            "step_days": len({s.date for s in steps if s.goal > 0 and s.steps >= s.goal}),
            "calorie_days": len({c.date for c in calories if c.calories > 0}),
            "groups_per_week": self.max_groups_in_week(workouts),
        }

    def achievements(
        self,
        workouts: Iterable[WorkoutRecord],
        calories: Iterable[CalorieEntry] = (),
        steps: Iterable[StepEntry] = (),
        today: Optional[DateLike] = None,
    ) -> list[AchievementProgress]:
        """Return progress towards every achievement."""
        values = self.metrics(workouts, calories, steps, today)
        result = []
        for a in ACHIEVEMENTS:
            current = values[a.metric]
            percent = MathTools.clamp(current / a.target * 100, 0, 100)
            result.append(
                AchievementProgress(
                    id=a.id,
                    title=a.title,
                    category=a.category,
                    current=current,
                    target=a.target,
                    unlocked=current >= a.target,
                    percent=MathTools.round_half_up(percent),
                )
            )
        return result
