from __future__ import annotations

from typing import Iterable, Optional, Sequence

from loguru import logger

from algorithms import MathTools
from exercise_catalog import normalize
from models import (
    ExerciseProgressionStats,
    PersonalRecord,
    ProgressionPoint,
    SetEntry,
    StrengthPoint,
    WorkoutRecord,
)


def best_set(sets: Sequence[SetEntry]) -> Optional[SetEntry]:
    """Return the heaviest set; equal weights are decided by reps."""
    best = None
    for s in sets:
        if best is None or s.weight > best.weight or (
            s.weight == best.weight and s.reps > best.reps
        ):
            best = s
    return best


def matching_sets(workout: WorkoutRecord, key: str) -> list[SetEntry]:
    """Return all sets logged for the normalized exercise ``key``."""
    return [
        s
        for ex in workout.exercises
        if normalize(ex.exercise_name) == key
        for s in ex.sets
    ]


def _sorted_completed(workouts: Iterable[WorkoutRecord]) -> list[WorkoutRecord]:
    return sorted((w for w in workouts if w.completed), key=lambda w: w.date)


class ProgressionService:
    """Track strength progression per exercise."""

    def exercise_progression(
        self, workouts: Iterable[WorkoutRecord], exercise_name: str
    ) -> Optional[ExerciseProgressionStats]:
        """Return the 1RM trend for ``exercise_name`` or None without data."""
        key = normalize(exercise_name)
        points: list[ProgressionPoint] = []
        display = exercise_name
        for workout in _sorted_completed(workouts):
            done = [s for s in matching_sets(workout, key) if s.completed]
            top = best_set(done)
            if top is None or top.weight <= 0:
                continue
            if not points:
                # report the name as first logged, not as typed by the caller
                display = next(
                    ex.exercise_name
                    for ex in workout.exercises
                    if normalize(ex.exercise_name) == key
                )
            points.append(
                ProgressionPoint(
                    date=workout.date,
                    best_weight=top.weight,
                    best_reps=top.reps,
                    estimated_1rm=MathTools.epley_1rm(top.weight, top.reps),
                    total_volume=MathTools.volume((s.reps, s.weight) for s in done),
                    total_sets=len(done),
                )
            )
        if not points:
            logger.debug("no progression data for {}", exercise_name)
            return None

        first, last = points[0], points[-1]
        return ExerciseProgressionStats(
            exercise_name=display,
            data_points=tuple(points),
            starting_weight=first.best_weight,
            current_weight=last.best_weight,
            weight_gain=MathTools.difference(last.best_weight, first.best_weight),
            weight_gain_percent=MathTools.percent_change(
                last.best_weight, first.best_weight
            ),
            starting_1rm=first.estimated_1rm,
            current_1rm=last.estimated_1rm,
            improvement_1rm=MathTools.difference(last.estimated_1rm, first.estimated_1rm),
            improvement_1rm_percent=MathTools.percent_change(
                last.estimated_1rm, first.estimated_1rm
            ),
            total_workouts=len(points),
            first_date=first.date,
            last_date=last.date,
        )

    @staticmethod
    def strength_progression(
        workouts: Iterable[WorkoutRecord], exercise_name: str
    ) -> list[StrengthPoint]:
        """Return the heaviest logged set per workout for ``exercise_name``."""
        key = normalize(exercise_name)
        result = []
        for workout in _sorted_completed(workouts):
            sets = matching_sets(workout, key)
            if not sets:
                continue
            top = max(sets, key=lambda s: s.weight)
            result.append(
                StrengthPoint(
                    date=workout.date,
                    weight=top.weight,
                    reps=top.reps,
                    workout_name=workout.name,
                )
            )
        return result

    @staticmethod
    def unique_exercises(workouts: Iterable[WorkoutRecord]) -> list[str]:
        """Return distinct exercise names; the first spelling seen is kept."""
        names: dict[str, str] = {}
        for workout in workouts:
            for ex in workout.exercises:
                names.setdefault(normalize(ex.exercise_name), ex.exercise_name)
        return [names[k] for k in sorted(names)]

    @staticmethod
    def exercises_with_history(
        workouts: Iterable[WorkoutRecord], min_points: int = 3
    ) -> list[str]:
        """Return exercises logged in at least ``min_points`` workouts, most frequent first."""
        counts: dict[str, int] = {}
        names: dict[str, str] = {}
        for workout in workouts:
            if not workout.completed:
                continue
            seen = set()
            for ex in workout.exercises:
                key = normalize(ex.exercise_name)
                names.setdefault(key, ex.exercise_name)
                if key not in seen:
                    seen.add(key)
                    counts[key] = counts.get(key, 0) + 1
        ranked = sorted(
            (k for k, c in counts.items() if c >= min_points),
            key=lambda k: (-counts[k], k),
        )
        return [names[k] for k in ranked]

    def top_progressing(
        self,
        workouts: Iterable[WorkoutRecord],
        limit: int = 5,
        min_points: int = 3,
    ) -> list[ExerciseProgressionStats]:
        """Return exercises with the largest positive 1RM improvement."""
        workouts = list(workouts)
        stats = []
        for name in self.exercises_with_history(workouts, min_points):
            progression = self.exercise_progression(workouts, name)
            if progression is not None and progression.improvement_1rm_percent > 0:
                stats.append(progression)
        stats.sort(key=lambda p: p.improvement_1rm_percent, reverse=True)
        return stats[:limit]

    @staticmethod
    def personal_records(workouts: Iterable[WorkoutRecord]) -> list[PersonalRecord]:
        """Return the best completed set per exercise, sorted by name."""
        records: dict[str, PersonalRecord] = {}
        for workout in _sorted_completed(workouts):
            for ex in workout.exercises:
                top = best_set([s for s in ex.sets if s.completed])
                if top is None or top.weight <= 0:
                    continue
                key = normalize(ex.exercise_name)
                current = records.get(key)
                if current is None or top.weight > current.weight or (
                    top.weight == current.weight and top.reps > current.reps
                ):
                    records[key] = PersonalRecord(
                        exercise_name=ex.exercise_name,
                        weight=top.weight,
                        reps=top.reps,
                        estimated_1rm=MathTools.epley_1rm(top.weight, top.reps),
                        date=workout.date,
                        workout_id=workout.id,
                    )
        return [records[k] for k in sorted(records)]

    @staticmethod
    def personal_record_events(workouts: Iterable[WorkoutRecord]) -> int:
        """Return how many times a new personal record was set over the history."""
        bests: dict[str, tuple[float, int]] = {}
        events = 0
        for workout in _sorted_completed(workouts):
            for ex in workout.exercises:
                top = best_set([s for s in ex.sets if s.completed])
                if top is None or top.weight <= 0:
                    continue
                key = normalize(ex.exercise_name)
                if key not in bests or (top.weight, top.reps) > bests[key]:
                    bests[key] = (top.weight, top.reps)
                    events += 1
        return events
