from __future__ import annotations

from typing import Iterable, Optional

import yaml

from models import FrozenModel


def normalize(name: str) -> str:
    """Return the comparison key for an exercise or muscle group name."""
    return name.strip().lower()


class MuscleGroupCategory(FrozenModel):
    name: str
    icon: str = ""
    color: str = ""


class CatalogExercise(FrozenModel):
    name: str
    category: str
    default_sets: Optional[int] = None
    default_reps: Optional[int] = None


DEFAULT_CATEGORIES: tuple[MuscleGroupCategory, ...] = (
    MuscleGroupCategory(name="Chest", icon="fitness-outline", color="#FF6B6B"),
    MuscleGroupCategory(name="Back", icon="body-outline", color="#4ECDC4"),
    MuscleGroupCategory(name="Shoulders", icon="triangle-outline", color="#95E1D3"),
    MuscleGroupCategory(name="Arms", icon="hand-left-outline", color="#F38181"),
    MuscleGroupCategory(name="Legs", icon="walk-outline", color="#FFE66D"),
    MuscleGroupCategory(name="Core", icon="square-outline", color="#A8DADC"),
    MuscleGroupCategory(name="Cardio", icon="heart-outline", color="#FF8B94"),
)

_DEFAULT_EXERCISES: dict[str, tuple[tuple[str, int, int], ...]] = {
    "Chest": (
        ("Bench Press", 4, 8),
        ("Incline Bench Press", 3, 10),
        ("Decline Bench Press", 3, 10),
        ("Dumbbell Chest Press", 3, 10),
        ("Incline Dumbbell Press", 3, 10),
        ("Cable Flyes", 3, 12),
        ("Dumbbell Flyes", 3, 12),
        ("Push-ups", 3, 15),
    ),
    "Back": (
        ("Deadlift", 4, 5),
        ("Barbell Rows", 4, 8),
        ("Dumbbell Rows", 3, 10),
        ("Pull-ups", 3, 8),
        ("Chin-ups", 3, 8),
        ("Lat Pulldown", 3, 10),
        ("Cable Rows", 3, 10),
        ("T-Bar Rows", 3, 10),
        ("Face Pulls", 3, 15),
        ("Shrugs", 3, 12),
    ),
    "Shoulders": (
        ("Overhead Press", 4, 8),
        ("Dumbbell Shoulder Press", 3, 10),
        ("Arnold Press", 3, 10),
        ("Lateral Raises", 3, 12),
        ("Front Raises", 3, 12),
        ("Rear Delt Flyes", 3, 12),
        ("Upright Rows", 3, 10),
    ),
    "Arms": (
        ("Barbell Curl", 3, 10),
        ("Dumbbell Curl", 3, 10),
        ("Hammer Curls", 3, 10),
        ("Preacher Curls", 3, 10),
        ("Tricep Dips", 3, 10),
        ("Close-Grip Bench Press", 3, 10),
        ("Tricep Pushdown", 3, 12),
        ("Overhead Tricep Extension", 3, 12),
    ),
    "Legs": (
        ("Squat", 4, 8),
        ("Front Squat", 3, 8),
        ("Leg Press", 3, 10),
        ("Romanian Deadlift", 3, 10),
        ("Leg Curl", 3, 12),
        ("Leg Extension", 3, 12),
        ("Lunges", 3, 10),
        ("Bulgarian Split Squat", 3, 10),
        ("Calf Raises", 4, 15),
        ("Hip Thrusts", 3, 12),
    ),
    "Core": (
        ("Plank", 3, 60),
        ("Crunches", 3, 20),
        ("Russian Twists", 3, 20),
        ("Leg Raises", 3, 15),
        ("Ab Wheel Rollouts", 3, 10),
        ("Mountain Climbers", 3, 20),
    ),
    "Cardio": (
        ("Running", 1, 30),
        ("Cycling", 1, 30),
        ("Rowing", 1, 20),
        ("Jump Rope", 3, 100),
        ("Burpees", 3, 15),
    ),
}


def _parse_categories(data: dict) -> list[MuscleGroupCategory]:
    return [
        MuscleGroupCategory(
            name=str(c["name"]),
            icon=str(c.get("icon", "")),
            color=str(c.get("color", "")),
        )
        for c in data.get("categories") or []
    ]


def _parse_exercises(data: dict) -> list[CatalogExercise]:
    return [
        CatalogExercise(
            name=str(e["name"]),
            category=str(e["category"]),
            default_sets=e.get("default_sets"),
            default_reps=e.get("default_reps"),
        )
        for e in data.get("exercises") or []
    ]


class ExerciseCatalog:
    """Read-only lookup from exercise name to muscle group.

    Muscle groups keep their declaration order, which is also the tie-break
    order used by the heatmap.
    """

    def __init__(
        self,
        categories: Iterable[MuscleGroupCategory],
        exercises: Iterable[CatalogExercise],
    ) -> None:
        self._categories: dict[str, MuscleGroupCategory] = {}
        for cat in categories:
            key = normalize(cat.name)
            if key in self._categories:
                raise ValueError(f"duplicate muscle group: {cat.name}")
            self._categories[key] = cat
        self._exercises: dict[str, CatalogExercise] = {}
        for ex in exercises:
            group = self._categories.get(normalize(ex.category))
            if group is None:
                raise ValueError(
                    f"unknown muscle group {ex.category!r} for exercise {ex.name!r}"
                )
            self._exercises[normalize(ex.name)] = ex.model_copy(
                update={"category": group.name}
            )

    def __len__(self) -> int:
        return len(self._exercises)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and normalize(name) in self._exercises

    def muscle_groups(self) -> list[str]:
        return [c.name for c in self._categories.values()]

    def categories(self) -> list[MuscleGroupCategory]:
        return list(self._categories.values())

    def exercises(self) -> list[CatalogExercise]:
        return list(self._exercises.values())

    def category(self, group: str) -> Optional[MuscleGroupCategory]:
        return self._categories.get(normalize(group))

    def get(self, name: str) -> Optional[CatalogExercise]:
        return self._exercises.get(normalize(name))

    def muscle_group(self, name: str) -> Optional[str]:
        """Return the muscle group for ``name`` or None when unknown."""
        ex = self._exercises.get(normalize(name))
        return ex.category if ex is not None else None

    def exercises_for(self, group: str) -> list[CatalogExercise]:
        cat = self.category(group)
        if cat is None:
            return []
        return [ex for ex in self._exercises.values() if ex.category == cat.name]

    def search(self, query: str) -> list[CatalogExercise]:
        """Return exercises whose name contains ``query`` (case-insensitive)."""
        needle = normalize(query)
        if not needle:
            return self.exercises()
        return [ex for ex in self._exercises.values() if needle in normalize(ex.name)]

    def with_exercises(self, extra: Iterable[CatalogExercise]) -> "ExerciseCatalog":
        """Return a new catalog that also contains ``extra`` exercises."""
        return ExerciseCatalog(self.categories(), [*self.exercises(), *extra])

    def to_dict(self) -> dict:
        return {
            "categories": [
                {"name": c.name, "icon": c.icon, "color": c.color}
                for c in self.categories()
            ],
            "exercises": [
                {
                    "name": ex.name,
                    "category": ex.category,
                    "default_sets": ex.default_sets,
                    "default_reps": ex.default_reps,
                }
                for ex in self.exercises()
            ],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ExerciseCatalog":
        """Build a catalog from ``{"categories": [...], "exercises": [...]}``.

        Without a ``categories`` list the default muscle groups are used.
        """
        categories = _parse_categories(data) or list(DEFAULT_CATEGORIES)
        return cls(categories, _parse_exercises(data))

    @classmethod
    def from_yaml(cls, path: str, extend_default: bool = True) -> "ExerciseCatalog":
        """Load custom exercises from ``path``.

        With ``extend_default`` the file's exercises and any new muscle groups
        are added to the built-in catalog; otherwise the file is the whole catalog.
        """
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not extend_default:
            return cls.from_dict(data)
        base = default_catalog()
        # new groups go after the built-in ones so the tie-break order holds
        extra = [c for c in _parse_categories(data) if base.category(c.name) is None]
        return cls([*base.categories(), *extra], [*base.exercises(), *_parse_exercises(data)])


def default_catalog() -> ExerciseCatalog:
    """Return the built-in catalog of seven muscle groups."""
    exercises = [
        CatalogExercise(name=name, category=group, default_sets=sets, default_reps=reps)
        for group, items in _DEFAULT_EXERCISES.items()
        for name, sets, reps in items
    ]
    return ExerciseCatalog(DEFAULT_CATEGORIES, exercises)
