from __future__ import annotations

from typing import Iterable, Optional

from loguru import logger

from algorithms import DateTools, WeightConverter
from algorithms.date_tools import DateLike
from exercise_catalog import ExerciseCatalog, default_catalog, normalize
from gamification_service import GamificationService
from heatmap_service import MuscleHeatmapService
from models import (
    CalorieEntry,
    DailyTargets,
    StepEntry,
    WeightEntry,
    WeightStats,
    WorkoutRecord,
)
from progression_service import ProgressionService
from recommendation_service import RecommendationService
from settings_schema import SettingsSchema
from streak_service import StreakService
from suggestion_service import SuggestionService
from weekly_service import WeeklyStatsService, workout_volume


class StatisticsService:
    """Compute workout statistics for analysis."""

    def __init__(
        self,
        settings: SettingsSchema | None = None,
        catalog: ExerciseCatalog | None = None,
    ) -> None:
        self.settings = settings or SettingsSchema()
        if catalog is None:
            if self.settings.catalog_path:
                catalog = ExerciseCatalog.from_yaml(self.settings.catalog_path)
            else:
                catalog = default_catalog()
        self.catalog = catalog
        self.streaks = StreakService(self.settings.streak_grace_days)
        self.weekly = WeeklyStatsService(self.default_targets)
        self.heatmaps = MuscleHeatmapService(
            self.catalog,
            low_min=self.settings.intensity_low_min,
            medium_min=self.settings.intensity_medium_min,
            high_min=self.settings.intensity_high_min,
            attention_mode=self.settings.attention_mode,
        )
        self.progression = ProgressionService()
        self.suggestions = SuggestionService(
            self.heatmaps,
            self.settings.min_workouts_for_suggestions,
            self.settings.suggestion_excluded_groups,
        )
        self.recommender = RecommendationService()
        self.gamification = GamificationService(
            self.catalog, self.streaks, self.progression
        )

    @property
    def default_targets(self) -> DailyTargets:
        return DailyTargets(
            calorie_target=self.settings.daily_calorie_target,
            step_goal=self.settings.daily_step_goal,
        )

    def heatmap(
        self,
        workouts: Iterable[WorkoutRecord],
        window_days: Optional[int] = None,
        today: Optional[DateLike] = None,
    ):
        return self.heatmaps.heatmap(
            workouts,
            self.settings.heatmap_window_days if window_days is None else window_days,
            today,
        )

    def suggest(
        self,
        workouts: Iterable[WorkoutRecord],
        window_days: Optional[int] = None,
        today: Optional[DateLike] = None,
    ):
        return self.suggestions.suggest(
            workouts,
            self.settings.suggestion_window_days if window_days is None else window_days,
            today,
        )

    def overview(
        self,
        workouts: Iterable[WorkoutRecord],
        start_date: Optional[DateLike] = None,
        end_date: Optional[DateLike] = None,
    ) -> dict[str, float]:
        """Return aggregated workout statistics."""
        selected = [
            w
            for w in workouts
            if w.completed
            and (start_date is None or w.date >= DateTools.to_date(start_date))
            and (end_date is None or w.date <= DateTools.to_date(end_date))
        ]
        if not selected:
            return {
                "workouts": 0,
                "volume": 0.0,
                "sets": 0,
                "exercises": 0,
                "avg_duration": 0.0,
            }
        exercises = {
            normalize(ex.exercise_name) for w in selected for ex in w.exercises
        }
        sets = sum(len(ex.sets) for w in selected for ex in w.exercises)
        durations = [w.duration_minutes for w in selected if w.duration_minutes is not None]
        avg_duration = sum(durations) / len(durations) if durations else 0.0
        return {
            "workouts": len(selected),
            "volume": round(sum(workout_volume(w) for w in selected), 2),
            "sets": sets,
            "exercises": len(exercises),
            "avg_duration": round(avg_duration, 2),
        }

    def body_weight_history(
        self,
        weights: Iterable[WeightEntry],
        unit: Optional[str] = None,
    ) -> list[dict[str, float]]:
        unit = unit or self.settings.weight_unit
        return [
            {
                "date": w.date.isoformat(),
                "weight": WeightConverter.convert(w.weight, w.unit, unit),
            }
            for w in sorted(weights, key=lambda w: w.date)
        ]

    def weight_stats(
        self,
        weights: Iterable[WeightEntry],
        unit: Optional[str] = None,
    ) -> WeightStats:
        unit = unit or self.settings.weight_unit
        history = self.body_weight_history(weights, unit)
        if not history:
            return WeightStats(unit=unit)
        values = [h["weight"] for h in history]
        return WeightStats(
            unit=unit,
            start=values[0],
            current=values[-1],
            change=round(values[-1] - values[0], 2),
            min=min(values),
            max=max(values),
            avg=round(sum(values) / len(values), 2),
            entries=len(values),
        )

    def dashboard(
        self,
        workouts: Iterable[WorkoutRecord],
        calories: Iterable[CalorieEntry] = (),
        steps: Iterable[StepEntry] = (),
        today: Optional[DateLike] = None,
        targets: Optional[DailyTargets] = None,
    ) -> dict:
        """Return the summaries shown on the home screen in one call."""
        workouts = list(workouts)
        this_week, last_week, comparison = self.weekly.week_summary(
            workouts, calories, steps, today, targets
        )
        result = {
            "streak": self.streaks.workout_streak(workouts, today),
            "this_week": this_week,
            "last_week": last_week,
            "comparison": comparison,
            "heatmap": self.heatmap(workouts, today=today),
            "suggestions": self.suggest(workouts, today=today),
        }
        logger.debug("dashboard computed for {} workouts", len(workouts))
        return result
