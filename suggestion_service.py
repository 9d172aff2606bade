from __future__ import annotations

from typing import Iterable, Optional

from loguru import logger

from algorithms import DateTools
from algorithms.date_tools import DateLike
from exercise_catalog import normalize
from heatmap_service import MuscleHeatmapService
from models import (
    Intensity,
    MuscleGroupHeatmapData,
    MuscleGroupScore,
    SuggestionData,
    WorkoutRecord,
    WorkoutSuggestion,
)

MIN_WORKOUTS_FOR_SUGGESTIONS = 3
DEFAULT_WINDOW_DAYS = 14


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


class SuggestionService:
    """Recommend which muscle groups to train next."""

    def __init__(
        self,
        heatmap: MuscleHeatmapService,
        min_workouts: int = MIN_WORKOUTS_FOR_SUGGESTIONS,
        excluded_groups: Iterable[str] = (),
    ) -> None:
        if heatmap is None:
            raise ValueError("a heatmap service is required")
        self.heatmap = heatmap
        self.min_workouts = min_workouts
        self.excluded_groups = {normalize(g) for g in excluded_groups}

    def suggest(
        self,
        workouts: Iterable[WorkoutRecord],
        window_days: int = DEFAULT_WINDOW_DAYS,
        today: Optional[DateLike] = None,
    ) -> SuggestionData:
        """Return prioritized muscle groups that lag behind the training leader."""
        if window_days <= 0:
            raise ValueError("window_days must be positive")
        workouts = list(workouts)
        completed = sum(1 for w in workouts if w.completed)
        if completed < self.min_workouts:
            logger.debug(
                "not enough history for suggestions ({} < {})",
                completed,
                self.min_workouts,
            )
            return SuggestionData(has_enough_data=False)

        data = self.heatmap.heatmap(workouts, window_days, today)
        return self.from_heatmap(data, window_days)

    def from_heatmap(
        self, data: MuscleGroupHeatmapData, window_days: int
    ) -> SuggestionData:
        """Turn heatmap output into suggestions without re-reading workouts."""
        leader = data.score_for(data.most_trained) if data.most_trained else None
        suggestions = []
        for name in data.needs_attention:
            if normalize(name) in self.excluded_groups:
                continue
            score = data.score_for(name)
            if score is None:
                continue
            suggestions.append(self._suggestion(score, leader, data, window_days))
        # high priority first; sort is stable so catalog order is kept within a tier
        suggestions.sort(key=lambda s: 0 if s.priority == "high" else 1)
        return SuggestionData(
            has_enough_data=True,
            suggestions=tuple(suggestions),
            most_trained=data.most_trained,
            most_trained_sets=leader.sets if leader is not None else 0,
        )

    @staticmethod
    def _suggestion(
        score: MuscleGroupScore,
        leader: Optional[MuscleGroupScore],
        data: MuscleGroupHeatmapData,
        window_days: int,
    ) -> WorkoutSuggestion:
        days_since = None
        if score.last_trained is not None:
            days_since = DateTools.days_between(score.last_trained, data.window_end)
        if score.intensity == Intensity.NONE:
            priority = "high"
            reason = f"Not trained in the last {_plural(window_days, 'day')}"
        else:
            priority = "medium"
            reason = f"Only {_plural(score.sets, 'set')}"
            if leader is not None and leader.name != score.name:
                reason += f" vs {leader.sets} for {leader.name}"
            if score.last_trained is not None:
                when = DateTools.relative_date(score.last_trained, data.window_end)
                reason += f", last trained {when.lower()}"
        return WorkoutSuggestion(
            muscle_group=score.name,
            priority=priority,
            reason=reason,
            days_since_training=days_since,
            window_sets=score.sets,
        )
