from typing import Literal, Optional

from pydantic import BaseModel, ValidationError, model_validator


class SettingsSchema(BaseModel):
    heatmap_window_days: int = 7
    suggestion_window_days: int = 14
    intensity_low_min: int = 1
    intensity_medium_min: int = 5
    intensity_high_min: int = 10
    attention_mode: Literal["relative", "absolute"] = "relative"
    streak_grace_days: int = 1
    min_workouts_for_suggestions: int = 3
    suggestion_excluded_groups: list[str] = []
    daily_calorie_target: int = 2000
    daily_step_goal: int = 10000
    weight_unit: Literal["kg", "lbs"] = "kg"
    catalog_path: Optional[str] = None

    @model_validator(mode="after")
    def _check_thresholds(self) -> "SettingsSchema":
        if self.heatmap_window_days <= 0 or self.suggestion_window_days <= 0:
            raise ValueError("window lengths must be positive")
        if not (
            0 < self.intensity_low_min
            <= self.intensity_medium_min
            <= self.intensity_high_min
        ):
            raise ValueError("intensity thresholds must be ascending and positive")
        if self.streak_grace_days < 0:
            raise ValueError("streak_grace_days must be non-negative")
        if self.min_workouts_for_suggestions < 0:
            raise ValueError("min_workouts_for_suggestions must be non-negative")
        return self


def validate_settings(data: dict) -> SettingsSchema:
    try:
        return SettingsSchema(**data)
    except ValidationError as e:
        raise ValueError(str(e))
