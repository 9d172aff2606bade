from typing import Optional

from fastapi import Body, FastAPI, HTTPException
from loguru import logger
from pydantic import BaseModel

from algorithms import MathTools
from config import APP_VERSION, YamlConfig
from exercise_catalog import ExerciseCatalog
from models import (
    CalorieEntry,
    DailyTargets,
    StepEntry,
    WeightEntry,
    WorkoutRecord,
)
from settings_schema import SettingsSchema
from stats_service import StatisticsService


class HistoryPayload(BaseModel):
    """Request body carrying the user's logged history."""

    workouts: list[WorkoutRecord] = []
    calories: list[CalorieEntry] = []
    steps: list[StepEntry] = []
    weights: list[WeightEntry] = []
    today: Optional[str] = None
    targets: Optional[DailyTargets] = None


def serialize(value):
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, (list, tuple)):
        return [serialize(v) for v in value]
    if isinstance(value, dict):
        return {k: serialize(v) for k, v in value.items()}
    return value


class AnalyticsAPI:
    """Provides REST endpoints for workout statistics."""

    def __init__(
        self,
        yaml_path: str = "settings.yaml",
        *,
        settings: SettingsSchema | None = None,
        catalog: ExerciseCatalog | None = None,
    ) -> None:
        self.config = YamlConfig(yaml_path)
        self.settings = settings or self.config.settings()
        self.statistics = StatisticsService(self.settings, catalog)
        self.app = FastAPI(title="Workout Insights", version=APP_VERSION)
        self._setup_routes()
        logger.info("analytics API ready with {} catalog exercises", len(self.statistics.catalog))

    def _setup_routes(self) -> None:
        stats = self.statistics

        @self.app.get(
            "/health",
            summary="Health check",
            description="Verify the API is up.",
        )
        def health():
            return {"status": "ok", "version": APP_VERSION}

        @self.app.get("/catalog")
        def catalog():
            return stats.catalog.to_dict()

        @self.app.get("/tools/one_rep_max")
        def one_rep_max(weight: float, reps: int):
            if weight < 0 or reps <= 0:
                raise HTTPException(
                    status_code=400, detail="weight must be >= 0 and reps > 0"
                )
            estimates = MathTools.one_rep_max(weight, reps)
            return {
                "estimates": estimates,
                "rep_table": MathTools.rep_table(estimates["average"]),
            }

        @self.app.post("/stats/streak")
        def streak(payload: HistoryPayload = Body(...)):
            try:
                return {
                    "daily": serialize(stats.streaks.workout_streak(payload.workouts, payload.today)),
                    "weekly": serialize(stats.streaks.weekly_streak(payload.workouts, payload.today)),
                }
            except ValueError as e:
                raise HTTPException(status_code=400, detail=str(e))

        @self.app.post("/stats/weekly")
        def weekly(payload: HistoryPayload = Body(...)):
            try:
                this_week, last_week, comparison = stats.weekly.week_summary(
                    payload.workouts,
                    payload.calories,
                    payload.steps,
                    payload.today,
                    payload.targets,
                )
            except ValueError as e:
                raise HTTPException(status_code=400, detail=str(e))
            return {
                "thisWeek": serialize(this_week),
                "lastWeek": serialize(last_week),
                "comparison": serialize(comparison),
            }

        @self.app.post("/stats/heatmap")
        def heatmap(
            payload: HistoryPayload = Body(...),
            window_days: Optional[int] = None,
        ):
            try:
                return serialize(stats.heatmap(payload.workouts, window_days, payload.today))
            except ValueError as e:
                raise HTTPException(status_code=400, detail=str(e))

        @self.app.post("/stats/progression")
        def progression(exercise: str, payload: HistoryPayload = Body(...)):
            result = stats.progression.exercise_progression(payload.workouts, exercise)
            if result is None:
                raise HTTPException(
                    status_code=404, detail=f"no progression data for {exercise}"
                )
            return {
                "progression": serialize(result),
                "next": serialize(
                    stats.recommender.next_session(
                        payload.workouts, exercise, stats.settings.weight_unit
                    )
                ),
            }

        @self.app.post("/stats/personal_records")
        def personal_records(payload: HistoryPayload = Body(...)):
            return serialize(stats.progression.personal_records(payload.workouts))

        @self.app.post("/stats/suggestions")
        def suggestions(
            payload: HistoryPayload = Body(...),
            window_days: Optional[int] = None,
        ):
            try:
                return serialize(stats.suggest(payload.workouts, window_days, payload.today))
            except ValueError as e:
                raise HTTPException(status_code=400, detail=str(e))

        @self.app.post("/stats/volume")
        def volume(payload: HistoryPayload = Body(...)):
            points = stats.weekly.weekly_volume(payload.workouts)
            return {
                "weeks": serialize(points),
                "summary": serialize(stats.weekly.volume_summary(points)),
                "overview": stats.overview(payload.workouts),
            }

        @self.app.post("/stats/achievements")
        def achievements(payload: HistoryPayload = Body(...)):
            try:
                return serialize(
                    stats.gamification.achievements(
                        payload.workouts, payload.calories, payload.steps, payload.today
                    )
                )
            except ValueError as e:
                raise HTTPException(status_code=400, detail=str(e))

        @self.app.post("/stats/body_weight")
        def body_weight(payload: HistoryPayload = Body(...), unit: Optional[str] = None):
            try:
                return {
                    "history": stats.body_weight_history(payload.weights, unit),
                    "stats": serialize(stats.weight_stats(payload.weights, unit)),
                }
            except ValueError as e:
                raise HTTPException(status_code=400, detail=str(e))

        @self.app.post("/stats/dashboard")
        def dashboard(payload: HistoryPayload = Body(...)):
            try:
                result = stats.dashboard(
                    payload.workouts,
                    payload.calories,
                    payload.steps,
                    payload.today,
                    payload.targets,
                )
            except ValueError as e:
                raise HTTPException(status_code=400, detail=str(e))
            return serialize(result)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(AnalyticsAPI().app)
