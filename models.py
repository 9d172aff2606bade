"""Immutable records consumed and produced by the analytics services.

Python attributes are snake_case; JSON uses the camelCase names of the
mobile app's export format (``exerciseName``, ``durationMinutes``, ...).
Both spellings are accepted on input.
"""
from __future__ import annotations

import datetime
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class FrozenModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ---------------------------------------------------------------- records


class SetEntry(FrozenModel):
    weight: float = Field(default=0.0, ge=0)
    reps: int
    completed: bool = True
    rpe: Optional[int] = None


class ExerciseEntry(FrozenModel):
    exercise_name: str
    sets: tuple[SetEntry, ...] = ()
    id: Optional[str] = None


class WorkoutRecord(FrozenModel):
    id: str
    user_id: str = ""
    date: datetime.date
    name: str = ""
    exercises: tuple[ExerciseEntry, ...] = ()
    completed: bool = True
    duration_minutes: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = None


class CalorieEntry(FrozenModel):
    date: datetime.date
    calories: float = 0
    target: float = 0
    user_id: str = ""


class StepEntry(FrozenModel):
    date: datetime.date
    steps: int = 0
    goal: int = 0
    user_id: str = ""


class WeightEntry(FrozenModel):
    date: datetime.date
    weight: float
    unit: Literal["kg", "lbs"] = "kg"
    goal: Optional[float] = None
    user_id: str = ""


class DailyTargets(FrozenModel):
    calorie_target: float = 2000
    step_goal: int = 10000


# ---------------------------------------------------------------- results


class StreakResult(FrozenModel):
    current: int = 0
    longest: int = 0


class WeeklyStats(FrozenModel):
    week_start: datetime.date
    week_end: datetime.date
    total_workouts: int
    total_calories: float
    total_steps: int
    avg_calories: int
    avg_steps: int
    days_active: int
    calorie_target: float
    step_goal: int


class WeekComparison(FrozenModel):
    workouts: int
    calories: float
    steps: int
    workouts_percent: int
    calories_percent: int
    steps_percent: int


class Intensity(str, Enum):
    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class MuscleGroupScore(FrozenModel):
    name: str
    sets: int = 0
    days_trained: int = 0
    last_trained: Optional[datetime.date] = None
    intensity: Intensity = Intensity.NONE
    volume: float = 0.0


class MuscleGroupHeatmapData(FrozenModel):
    scores: tuple[MuscleGroupScore, ...]
    total_sets: int
    most_trained: Optional[str]
    days_active: int
    needs_attention: tuple[str, ...]
    window_start: datetime.date
    window_end: datetime.date

    def score_for(self, name: str) -> Optional[MuscleGroupScore]:
        for score in self.scores:
            if score.name == name:
                return score
        return None


class ProgressionPoint(FrozenModel):
    date: datetime.date
    best_weight: float
    best_reps: int
    estimated_1rm: float = Field(alias="estimated1RM")
    total_volume: float
    total_sets: int


class ExerciseProgressionStats(FrozenModel):
    exercise_name: str
    data_points: tuple[ProgressionPoint, ...]
    starting_weight: float
    current_weight: float
    weight_gain: float
    weight_gain_percent: int
    starting_1rm: float = Field(alias="starting1RM")
    current_1rm: float = Field(alias="current1RM")
    improvement_1rm: float = Field(alias="improvement1RM")
    improvement_1rm_percent: int = Field(alias="improvement1RMPercent")
    total_workouts: int
    first_date: datetime.date
    last_date: datetime.date


class StrengthPoint(FrozenModel):
    date: datetime.date
    weight: float
    reps: int
    workout_name: str


class PersonalRecord(FrozenModel):
    exercise_name: str
    weight: float
    reps: int
    estimated_1rm: float = Field(alias="estimated1RM")
    date: datetime.date
    workout_id: str


class WorkoutSuggestion(FrozenModel):
    muscle_group: str
    priority: Literal["high", "medium"]
    reason: str
    days_since_training: Optional[int] = None
    window_sets: int = 0


class SuggestionData(FrozenModel):
    has_enough_data: bool
    suggestions: tuple[WorkoutSuggestion, ...] = ()
    most_trained: Optional[str] = None
    most_trained_sets: int = 0


class FrequencyPoint(FrozenModel):
    date: datetime.date
    count: int


class VolumePoint(FrozenModel):
    week_start: datetime.date
    volume: int
    workouts: int


class VolumeSummary(FrozenModel):
    total: int = 0
    avg_weekly: int = 0
    peak: int = 0
    peak_week: Optional[datetime.date] = None


class OverloadSuggestion(FrozenModel):
    suggested_weight: float
    suggested_reps: int
    suggested_sets: int
    increase: str
    strategy: Literal["weight", "reps"]


class AchievementProgress(FrozenModel):
    id: str
    title: str
    category: str
    current: int
    target: int
    unlocked: bool
    percent: int


class WeightStats(FrozenModel):
    unit: Literal["kg", "lbs"]
    start: float = 0.0
    current: float = 0.0
    change: float = 0.0
    min: float = 0.0
    max: float = 0.0
    avg: float = 0.0
    entries: int = 0
