from __future__ import annotations

from typing import Iterable, Optional

import pandas as pd
from loguru import logger

from algorithms import DateTools, MathTools
from algorithms.date_tools import DateLike
from models import (
    CalorieEntry,
    DailyTargets,
    StepEntry,
    VolumePoint,
    VolumeSummary,
    WeekComparison,
    WeeklyStats,
    WorkoutRecord,
)

DAYS_PER_WEEK = 7


def workout_volume(workout: WorkoutRecord) -> float:
    """Return the summed weight times reps of every set in ``workout``."""
    return MathTools.volume(
        (s.reps, s.weight) for ex in workout.exercises for s in ex.sets
    )


class WeeklyStatsService:
    """Aggregate workouts and daily metrics per Monday-start week."""

    def __init__(self, default_targets: Optional[DailyTargets] = None) -> None:
        self.default_targets = default_targets or DailyTargets()

    def weekly_stats(
        self,
        workouts: Iterable[WorkoutRecord],
        calories: Iterable[CalorieEntry],
        steps: Iterable[StepEntry],
        week_start: DateLike,
        week_end: DateLike,
        targets: Optional[DailyTargets] = None,
    ) -> WeeklyStats:
        """Return totals for the inclusive range ``[week_start, week_end]``."""
        start = DateTools.to_date(week_start)
        end = DateTools.to_date(week_end)
        targets = targets or self.default_targets

        week_workouts = [
            w for w in workouts if w.completed and DateTools.in_range(w.date, start, end)
        ]
        week_calories = [c for c in calories if DateTools.in_range(c.date, start, end)]
        week_steps = [s for s in steps if DateTools.in_range(s.date, start, end)]

        total_calories = sum(c.calories for c in week_calories)
        total_steps = sum(s.steps for s in week_steps)
        active = {w.date for w in week_workouts}
        active.update(c.date for c in week_calories if c.calories)
        active.update(s.date for s in week_steps if s.steps)

        return WeeklyStats(
            week_start=start,
            week_end=end,
            total_workouts=len(week_workouts),
            total_calories=total_calories,
            total_steps=total_steps,
            # the full week length keeps partial weeks comparable
            avg_calories=MathTools.round_half_up(total_calories / DAYS_PER_WEEK),
            avg_steps=MathTools.round_half_up(total_steps / DAYS_PER_WEEK),
            days_active=len(active),
            calorie_target=targets.calorie_target * DAYS_PER_WEEK,
            step_goal=targets.step_goal * DAYS_PER_WEEK,
        )

    @staticmethod
    def compare_weeks(current: WeeklyStats, previous: WeeklyStats) -> WeekComparison:
        """Return signed deltas and percent changes; zero deltas are kept."""
        return WeekComparison(
            workouts=MathTools.difference(current.total_workouts, previous.total_workouts),
            calories=MathTools.difference(current.total_calories, previous.total_calories),
            steps=MathTools.difference(current.total_steps, previous.total_steps),
            workouts_percent=MathTools.percent_change(
                current.total_workouts, previous.total_workouts
            ),
            calories_percent=MathTools.percent_change(
                current.total_calories, previous.total_calories
            ),
            steps_percent=MathTools.percent_change(
                current.total_steps, previous.total_steps
            ),
        )

    def week_summary(
        self,
        workouts: Iterable[WorkoutRecord],
        calories: Iterable[CalorieEntry] = (),
        steps: Iterable[StepEntry] = (),
        today: Optional[DateLike] = None,
        targets: Optional[DailyTargets] = None,
    ) -> tuple[WeeklyStats, WeeklyStats, WeekComparison]:
        """Return this week's stats, last week's stats and their comparison."""
        workouts = list(workouts)
        calories = list(calories)
        steps = list(steps)
        ref = DateTools.today(today)
        this_week = DateTools.week_bounds(ref)
        last_week = DateTools.previous_week_bounds(ref)
        current = self.weekly_stats(
            workouts, calories, steps, this_week.start, this_week.end, targets
        )
        previous = self.weekly_stats(
            workouts, calories, steps, last_week.start, last_week.end, targets
        )
        return current, previous, self.compare_weeks(current, previous)

    @staticmethod
    def weekly_volume(workouts: Iterable[WorkoutRecord]) -> list[VolumePoint]:
        """Return training volume and workout count per week, oldest first."""
        rows = [
            {
                "week_start": DateTools.week_bounds(w.date).start,
                "volume": workout_volume(w),
            }
            for w in workouts
            if w.completed
        ]
        if not rows:
            return []
        df = pd.DataFrame(rows)
        grouped = (
            df.groupby("week_start")["volume"]
            .agg(["sum", "count"])
            .sort_index()
        )
        points = [
            VolumePoint(
                week_start=week,
                volume=MathTools.round_half_up(float(row["sum"])),
                workouts=int(row["count"]),
            )
            for week, row in grouped.iterrows()
        ]
        logger.debug("weekly volume computed for {} weeks", len(points))
        return points

    @staticmethod
    def volume_summary(points: Iterable[VolumePoint]) -> VolumeSummary:
        points = list(points)
        if not points:
            return VolumeSummary()
        total = sum(p.volume for p in points)
        peak = points[0]
        for p in points[1:]:
            if p.volume > peak.volume:
                peak = p
        return VolumeSummary(
            total=total,
            avg_weekly=MathTools.round_half_up(total / len(points)),
            peak=peak.volume,
            peak_week=peak.week_start,
        )
