import os
import sys
import tempfile
import unittest

import yaml

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from exercise_catalog import (
    CatalogExercise,
    ExerciseCatalog,
    MuscleGroupCategory,
    default_catalog,
    normalize,
)


class ExerciseCatalogTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.catalog = default_catalog()

    def test_normalize(self) -> None:
        self.assertEqual(normalize("  Bench Press "), "bench press")

    def test_default_catalog(self) -> None:
        self.assertEqual(
            self.catalog.muscle_groups(),
            ["Chest", "Back", "Shoulders", "Arms", "Legs", "Core", "Cardio"],
        )
        self.assertEqual(len(self.catalog), 54)
        self.assertEqual(self.catalog.category("legs").color, "#FFE66D")

    def test_lookup_is_case_insensitive(self) -> None:
        self.assertEqual(self.catalog.muscle_group(" bench PRESS "), "Chest")
        self.assertIn("squat", self.catalog)
        self.assertNotIn("Mystery Lift", self.catalog)
        self.assertIsNone(self.catalog.muscle_group("Mystery Lift"))
        self.assertEqual(self.catalog.get("plank").default_reps, 60)

    def test_exercises_for_and_search(self) -> None:
        self.assertEqual(len(self.catalog.exercises_for("Cardio")), 5)
        self.assertEqual(self.catalog.exercises_for("Neck"), [])
        names = [ex.name for ex in self.catalog.search("curl")]
        self.assertEqual(
            names,
            ["Barbell Curl", "Dumbbell Curl", "Hammer Curls", "Preacher Curls", "Leg Curl"],
        )
        self.assertEqual(len(self.catalog.search("  ")), 54)

    def test_with_exercises(self) -> None:
        extended = self.catalog.with_exercises([CatalogExercise(name="Sled Push", category="legs")])
        self.assertEqual(extended.muscle_group("sled push"), "Legs")
        self.assertIsNone(self.catalog.muscle_group("sled push"))
        with self.assertRaises(ValueError):
            self.catalog.with_exercises([CatalogExercise(name="Neck Curl", category="Neck")])

    def test_duplicate_group_rejected(self) -> None:
        with self.assertRaises(ValueError):
            ExerciseCatalog(
                [MuscleGroupCategory(name="Chest"), MuscleGroupCategory(name="chest")], []
            )

    def test_dict_round_trip(self) -> None:
        rebuilt = ExerciseCatalog.from_dict(self.catalog.to_dict())
        self.assertEqual(rebuilt.muscle_groups(), self.catalog.muscle_groups())
        self.assertEqual(len(rebuilt), len(self.catalog))

    def test_from_yaml(self) -> None:
        data = {"exercises": [{"name": "Sled Push", "category": "Legs"}]}
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "catalog.yaml")
            with open(path, "w", encoding="utf-8") as f:
                yaml.safe_dump(data, f)
            extended = ExerciseCatalog.from_yaml(path)
            self.assertEqual(len(extended), 55)
            self.assertEqual(extended.muscle_group("Sled Push"), "Legs")
            only = ExerciseCatalog.from_yaml(path, extend_default=False)
            self.assertEqual(len(only), 1)
            self.assertEqual(len(only.muscle_groups()), 7)

    def test_from_yaml_adds_new_muscle_group(self) -> None:
        data = {
            "categories": [{"name": "Glutes", "color": "#C0FFEE"}, {"name": "legs"}],
            "exercises": [
                {"name": "Hip Abduction", "category": "Glutes"},
                {"name": "Sled Push", "category": "Legs"},
            ],
        }
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "catalog.yaml")
            with open(path, "w", encoding="utf-8") as f:
                yaml.safe_dump(data, f)
            catalog = ExerciseCatalog.from_yaml(path)
        self.assertEqual(
            catalog.muscle_groups(),
            ["Chest", "Back", "Shoulders", "Arms", "Legs", "Core", "Cardio", "Glutes"],
        )
        self.assertEqual(catalog.muscle_group("hip abduction"), "Glutes")
        self.assertEqual(catalog.muscle_group("Sled Push"), "Legs")
        self.assertEqual(catalog.category("glutes").color, "#C0FFEE")
        self.assertEqual(len(catalog), 56)

    def test_entries_are_frozen(self) -> None:
        bench = self.catalog.get("bench press")
        self.assertEqual(bench.model_dump(by_alias=True)["defaultSets"], bench.default_sets)
        with self.assertRaises(ValueError):
            bench.name = "Floor Press"
        with self.assertRaises(ValueError):
            self.catalog.category("chest").color = "#000000"


if __name__ == "__main__":
    unittest.main()
