from __future__ import annotations

from typing import Iterable, Optional

from exercise_catalog import normalize
from models import OverloadSuggestion, WorkoutRecord
from progression_service import best_set, matching_sets


class RecommendationService:
    """Suggest the next working set from logged history."""

    COMPOUND_EXERCISES = (
        "squat",
        "deadlift",
        "bench press",
        "overhead press",
        "barbell row",
        "pull-up",
        "chin-up",
        "dip",
        "leg press",
        "romanian deadlift",
        "front squat",
        "incline bench",
        "decline bench",
        "hip thrust",
        "pendlay row",
        "bent over row",
        "military press",
        "push press",
    )
    COMPOUND_INCREMENT = 5.0
    ISOLATION_INCREMENT = 2.5

    @classmethod
    def is_compound(cls, exercise_name: str) -> bool:
        name = normalize(exercise_name)
        return any(c in name for c in cls.COMPOUND_EXERCISES)

    @staticmethod
    def _round_to(weight: float, increment: float) -> float:
        # halves round up to match the increments shown in the app
        return int(weight / increment + 0.5) * increment

    @staticmethod
    def _fmt(value: float) -> str:
        return f"{value:g}"

    def progressive_overload(
        self,
        exercise_name: str,
        last_weight: float,
        last_reps: int,
        last_sets: int,
        unit: str = "kg",
    ) -> OverloadSuggestion:
        """Return the next target after a session at ``last_weight`` x ``last_reps``."""
        if last_weight <= 0:
            return OverloadSuggestion(
                suggested_weight=0,
                suggested_reps=last_reps + 1,
                suggested_sets=last_sets,
                increase="+1 rep",
                strategy="reps",
            )
        compound = self.is_compound(exercise_name)
        increment = self.COMPOUND_INCREMENT if compound else self.ISOLATION_INCREMENT
        return OverloadSuggestion(
            suggested_weight=self._round_to(last_weight + increment, increment),
            suggested_reps=last_reps,
            suggested_sets=last_sets,
            increase=f"+{self._fmt(increment)} {unit}",
            strategy="weight",
        )

    def next_session(
        self,
        workouts: Iterable[WorkoutRecord],
        exercise_name: str,
        unit: str = "kg",
    ) -> Optional[OverloadSuggestion]:
        """Return an overload suggestion based on the latest completed session."""
        key = normalize(exercise_name)
        latest = None
        for workout in sorted(
            (w for w in workouts if w.completed), key=lambda w: w.date
        ):
            done = [s for s in matching_sets(workout, key) if s.completed]
            if done:
                latest = done
        if latest is None:
            return None
        top = best_set(latest)
        return self.progressive_overload(
            exercise_name, top.weight, top.reps, len(latest), unit
        )

    @classmethod
    def format_suggestion(
        cls, sets: int, reps: int, weight: float, unit: str = "kg"
    ) -> str:
        if weight <= 0:
            return f"{sets}×{reps}"
        return f"{sets}×{reps} @ {cls._fmt(weight)} {unit}"
