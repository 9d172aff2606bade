from __future__ import annotations

import datetime
from typing import Iterable, Optional

from loguru import logger

from algorithms import DateTools, MathTools
from algorithms.date_tools import DateLike
from models import FrequencyPoint, StreakResult, WorkoutRecord


def completed_dates(workouts: Iterable[WorkoutRecord]) -> set[datetime.date]:
    """Return the distinct dates holding at least one completed workout."""
    return {w.date for w in workouts if w.completed}


class StreakService:
    """Compute daily and weekly workout streaks."""

    def __init__(self, grace_days: int = 1) -> None:
        if grace_days < 0:
            raise ValueError("grace_days must be non-negative")
        self.grace_days = grace_days

    def streak_from_dates(
        self,
        dates: Iterable[DateLike],
        today: Optional[DateLike] = None,
    ) -> StreakResult:
        """Return current and longest runs of consecutive calendar days."""
        days = sorted({DateTools.to_date(d) for d in dates})
        if not days:
            return StreakResult(current=0, longest=0)
        ref = DateTools.today(today)

        longest = run = 1
        for prev, nxt in zip(days, days[1:]):
            gap = (nxt - prev).days
            if gap == 1:
                run += 1
            else:
                longest = max(longest, run)
                run = 1
        longest = max(longest, run)

        past = [d for d in days if d <= ref]
        current = 0
        if past and (ref - past[-1]).days <= self.grace_days:
            current = 1
            for nxt, prev in zip(reversed(past), reversed(past[:-1])):
                if (nxt - prev).days != 1:
                    break
                current += 1
        return StreakResult(current=current, longest=longest)

    def workout_streak(
        self,
        workouts: Iterable[WorkoutRecord],
        today: Optional[DateLike] = None,
    ) -> StreakResult:
        """Return the daily streak of completed workouts."""
        result = self.streak_from_dates(completed_dates(workouts), today)
        logger.debug("workout streak current={} longest={}", result.current, result.longest)
        return result

    def weekly_streak(
        self,
        workouts: Iterable[WorkoutRecord],
        today: Optional[DateLike] = None,
    ) -> StreakResult:
        """Return current and longest runs of consecutive training weeks."""
        mondays = sorted(
            {DateTools.week_bounds(d).start for d in completed_dates(workouts)}
        )
        if not mondays:
            return StreakResult(current=0, longest=0)
        this_week = DateTools.week_bounds(DateTools.today(today)).start

        longest = run = 1
        for prev, nxt in zip(mondays, mondays[1:]):
            if (nxt - prev).days == 7:
                run += 1
            else:
                longest = max(longest, run)
                run = 1
        longest = max(longest, run)

        past = [m for m in mondays if m <= this_week]
        current = 0
        # the running week may still be empty without breaking the streak
        if past and (this_week - past[-1]).days <= 7:
            current = 1
            for nxt, prev in zip(reversed(past), reversed(past[:-1])):
                if (nxt - prev).days != 7:
                    break
                current += 1
        return StreakResult(current=current, longest=longest)

    @staticmethod
    def frequency(workouts: Iterable[WorkoutRecord]) -> list[FrequencyPoint]:
        """Return the number of completed workouts per date."""
        counts: dict[datetime.date, int] = {}
        for w in workouts:
            if w.completed:
                counts[w.date] = counts.get(w.date, 0) + 1
        return [FrequencyPoint(date=d, count=counts[d]) for d in sorted(counts)]

    @staticmethod
    def consistency(workouts: Iterable[WorkoutRecord]) -> dict[str, float]:
        """Return coefficient of variation of workout intervals."""
        dates = sorted(completed_dates(workouts))
        if len(dates) < 2:
            return {"consistency": 0.0, "average_gap": 0.0}
        gaps = [(b - a).days for a, b in zip(dates[:-1], dates[1:])]
        avg_gap = sum(gaps) / len(gaps)
        cv = MathTools.coefficient_of_variation(gaps)
        return {"consistency": round(cv, 2), "average_gap": round(avg_gap, 2)}
