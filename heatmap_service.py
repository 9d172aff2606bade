from __future__ import annotations

import datetime
from typing import Iterable, Optional

from loguru import logger

from algorithms import DateTools
from algorithms.date_tools import DateLike
from exercise_catalog import ExerciseCatalog
from models import Intensity, MuscleGroupHeatmapData, MuscleGroupScore, WorkoutRecord

INTENSITY_LOW_MIN = 1
INTENSITY_MEDIUM_MIN = 5
INTENSITY_HIGH_MIN = 10
DEFAULT_WINDOW_DAYS = 7
ATTENTION_MODES = ("relative", "absolute")


class MuscleHeatmapService:
    """Score recent training volume per muscle group."""

    def __init__(
        self,
        catalog: ExerciseCatalog,
        *,
        low_min: int = INTENSITY_LOW_MIN,
        medium_min: int = INTENSITY_MEDIUM_MIN,
        high_min: int = INTENSITY_HIGH_MIN,
        attention_mode: str = "relative",
    ) -> None:
        if catalog is None:
            raise ValueError("an exercise catalog is required")
        if not 0 < low_min <= medium_min <= high_min:
            raise ValueError("intensity thresholds must be ascending and positive")
        if attention_mode not in ATTENTION_MODES:
            raise ValueError(f"unknown attention mode: {attention_mode}")
        self.catalog = catalog
        self.low_min = low_min
        self.medium_min = medium_min
        self.high_min = high_min
        self.attention_mode = attention_mode

    def intensity(self, sets: int) -> Intensity:
        if sets >= self.high_min:
            return Intensity.HIGH
        if sets >= self.medium_min:
            return Intensity.MEDIUM
        if sets >= self.low_min:
            return Intensity.LOW
        return Intensity.NONE

    def heatmap(
        self,
        workouts: Iterable[WorkoutRecord],
        window_days: int = DEFAULT_WINDOW_DAYS,
        today: Optional[DateLike] = None,
    ) -> MuscleGroupHeatmapData:
        """Return per-group scores for the trailing ``window_days`` window."""
        window = DateTools.window_bounds(window_days, today)
        groups = self.catalog.muscle_groups()
        sets = dict.fromkeys(groups, 0)
        volume = dict.fromkeys(groups, 0.0)
        days: dict[str, set[datetime.date]] = {g: set() for g in groups}
        last: dict[str, Optional[datetime.date]] = dict.fromkeys(groups)
        active: set[datetime.date] = set()
        skipped: set[str] = set()

        for workout in workouts:
            if not workout.completed:
                continue
            if not DateTools.in_range(workout.date, window.start, window.end):
                continue
            active.add(workout.date)
            for exercise in workout.exercises:
                group = self.catalog.muscle_group(exercise.exercise_name)
                if group is None:
                    skipped.add(exercise.exercise_name)
                    continue
                if not exercise.sets:
                    continue
                sets[group] += len(exercise.sets)
                volume[group] += sum(s.weight * s.reps for s in exercise.sets)
                days[group].add(workout.date)
                if last[group] is None or workout.date > last[group]:
                    last[group] = workout.date
        if skipped:
            logger.debug("heatmap skipped unknown exercises: {}", sorted(skipped))

        scores = tuple(
            MuscleGroupScore(
                name=g,
                sets=sets[g],
                days_trained=len(days[g]),
                last_trained=last[g],
                intensity=self.intensity(sets[g]),
                volume=round(volume[g], 2),
            )
            for g in groups
        )

        most_trained = None
        best = 0
        for score in scores:
            # strict comparison keeps the first declared group on ties
            if score.sets > best:
                best = score.sets
                most_trained = score.name

        return MuscleGroupHeatmapData(
            scores=scores,
            total_sets=sum(sets.values()),
            most_trained=most_trained,
            days_active=len(active),
            needs_attention=self._needs_attention(scores),
            window_start=window.start,
            window_end=window.end,
        )

    def _needs_attention(self, scores: tuple[MuscleGroupScore, ...]) -> tuple[str, ...]:
        weak = (Intensity.NONE, Intensity.LOW)
        flagged = []
        for score in scores:
            if score.intensity not in weak:
                continue
            if self.attention_mode == "relative" and not any(
                other.intensity == Intensity.HIGH
                for other in scores
                if other.name != score.name
            ):
                continue
            flagged.append(score.name)
        return tuple(flagged)
