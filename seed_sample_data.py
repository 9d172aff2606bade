import datetime
import json
from typing import Iterable, Optional

from models import (
    CalorieEntry,
    ExerciseEntry,
    SetEntry,
    StepEntry,
    WeightEntry,
    WorkoutRecord,
)


def build_workout(
    date,
    exercises: dict[str, Iterable[tuple[float, int]]],
    *,
    completed: bool = True,
    name: str = "Workout",
    workout_id: Optional[str] = None,
    duration: Optional[float] = None,
) -> WorkoutRecord:
    """Create a workout from ``{exercise: [(weight, reps), ...]}``."""
    if isinstance(date, str):
        date = datetime.date.fromisoformat(date)
    return WorkoutRecord(
        id=workout_id or f"w-{date.isoformat()}-{name.lower().replace(' ', '-')}",
        user_id="user-1",
        date=date,
        name=name,
        completed=completed,
        duration_minutes=duration,
        exercises=tuple(
            ExerciseEntry(
                exercise_name=ex_name,
                sets=tuple(SetEntry(weight=w, reps=r) for w, r in sets),
            )
            for ex_name, sets in exercises.items()
        ),
    )


def sample_history(today: Optional[datetime.date] = None, weeks: int = 4) -> dict:
    """Return a push/pull/legs history ending ``today`` plus daily metrics."""
    today = today or datetime.date.today()
    start = today - datetime.timedelta(days=weeks * 7 - 1)
    workouts = []
    calories = []
    steps = []
    weights = []
    for offset in range(weeks * 7):
        day = start + datetime.timedelta(days=offset)
        week = offset // 7
        slot = offset % 7
        if slot in (0, 2, 4):
            bump = 2.5 * week
            if slot == 0:
                plan = {
                    "Bench Press": [(80 + bump, 8)] * 3 + [(80 + bump, 6)],
                    "Overhead Press": [(45 + bump, 8)] * 3,
                    "Tricep Pushdown": [(25, 12)] * 3,
                }
                name = "Push Day"
            elif slot == 2:
                plan = {
                    "Deadlift": [(120 + 2 * bump, 5)] * 3,
                    "Barbell Rows": [(60 + bump, 8)] * 3,
                    "Barbell Curl": [(30, 10)] * 3,
                }
                name = "Pull Day"
            else:
                plan = {
                    "Squat": [(100 + 2 * bump, 5)] * 4,
                    "Leg Press": [(150 + 2 * bump, 10)] * 3,
                    "Plank": [(0, 60)] * 3,
                }
                name = "Leg Day"
            workouts.append(build_workout(day, plan, name=name, duration=60))
        calories.append(CalorieEntry(date=day, calories=1900 + 50 * slot, target=2200))
        steps.append(StepEntry(date=day, steps=7000 + 600 * slot, goal=10000))
        if slot == 6:
            weights.append(WeightEntry(date=day, weight=82.0 - 0.3 * week, unit="kg"))
    return {
        "workouts": workouts,
        "calories": calories,
        "steps": steps,
        "weights": weights,
    }


def history_to_json(history: dict) -> str:
    """Serialize ``history`` to the app's camelCase export format."""
    out = {
        key: [item.model_dump(mode="json", by_alias=True) for item in items]
        for key, items in history.items()
    }
    return json.dumps(out, indent=2)


def seed(path: str = "history.json") -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(history_to_json(sample_history()))
    print(f"Sample history written to {path}")


if __name__ == "__main__":
    seed()
