import os
import sys
import unittest

from fastapi.testclient import TestClient

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from rest_api import AnalyticsAPI
from settings_schema import SettingsSchema


def workout(wid: str, date: str, name: str, sets: list, completed: bool = True) -> dict:
    return {
        "id": wid,
        "date": date,
        "completed": completed,
        "exercises": [
            {
                "exerciseName": name,
                "sets": [{"weight": w, "reps": r} for w, r in sets],
            }
        ],
    }


class APITestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.api = AnalyticsAPI(settings=SettingsSchema())
        self.client = TestClient(self.api.app)
        self.payload = {
            "workouts": [
                workout("a", "2024-01-08", "Bench Press", [(100, 5)] * 12),
                workout("b", "2024-01-09", "Deadlift", [(140, 3)] * 2),
                workout("c", "2024-01-10", "Bench Press", [(110, 5)]),
            ],
            "calories": [{"date": "2024-01-08", "calories": 2100}],
            "steps": [{"date": "2024-01-09", "steps": 9000, "goal": 10000}],
            "today": "2024-01-10",
        }

    def test_health(self) -> None:
        resp = self.client.get("/health")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["status"], "ok")

    def test_catalog(self) -> None:
        data = self.client.get("/catalog").json()
        self.assertEqual(len(data["categories"]), 7)
        self.assertEqual(len(data["exercises"]), 54)

    def test_one_rep_max(self) -> None:
        resp = self.client.get("/tools/one_rep_max", params={"weight": 100, "reps": 5})
        self.assertEqual(resp.status_code, 200)
        self.assertAlmostEqual(resp.json()["estimates"]["epley"], 116.7)
        self.assertEqual(len(resp.json()["rep_table"]), 11)
        bad = self.client.get("/tools/one_rep_max", params={"weight": 100, "reps": 0})
        self.assertEqual(bad.status_code, 400)

    def test_streak(self) -> None:
        resp = self.client.post("/stats/streak", json=self.payload)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["daily"], {"current": 3, "longest": 3})

    def test_weekly(self) -> None:
        data = self.client.post("/stats/weekly", json=self.payload).json()
        self.assertEqual(data["thisWeek"]["weekStart"], "2024-01-08")
        self.assertEqual(data["thisWeek"]["totalWorkouts"], 3)
        self.assertEqual(data["thisWeek"]["daysActive"], 3)
        self.assertEqual(data["comparison"]["workoutsPercent"], 100)

    def test_heatmap(self) -> None:
        data = self.client.post("/stats/heatmap", json=self.payload).json()
        self.assertEqual(data["mostTrained"], "Chest")
        self.assertIn("Back", data["needsAttention"])
        resp = self.client.post("/stats/heatmap?window_days=0", json=self.payload)
        self.assertEqual(resp.status_code, 400)

    def test_progression(self) -> None:
        resp = self.client.post(
            "/stats/progression", params={"exercise": "bench press"}, json=self.payload
        )
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["progression"]["starting1RM"], 117)
        self.assertEqual(data["progression"]["current1RM"], 128)
        self.assertEqual(data["next"]["suggestedWeight"], 115)
        missing = self.client.post(
            "/stats/progression", params={"exercise": "Squat"}, json=self.payload
        )
        self.assertEqual(missing.status_code, 404)

    def test_personal_records(self) -> None:
        data = self.client.post("/stats/personal_records", json=self.payload).json()
        self.assertEqual([r["exerciseName"] for r in data], ["Bench Press", "Deadlift"])
        self.assertEqual(data[0]["estimated1RM"], 128)

    def test_suggestions(self) -> None:
        data = self.client.post("/stats/suggestions", json=self.payload).json()
        self.assertTrue(data["hasEnoughData"])
        self.assertEqual(data["suggestions"][-1]["muscleGroup"], "Back")
        few = dict(self.payload, workouts=self.payload["workouts"][:1])
        data = self.client.post("/stats/suggestions", json=few).json()
        self.assertFalse(data["hasEnoughData"])

    def test_volume(self) -> None:
        data = self.client.post("/stats/volume", json=self.payload).json()
        self.assertEqual(data["weeks"][0]["volume"], 7390)
        self.assertEqual(data["summary"]["peakWeek"], "2024-01-08")
        self.assertEqual(data["overview"]["workouts"], 3)

    def test_achievements_and_body_weight(self) -> None:
        data = self.client.post("/stats/achievements", json=self.payload).json()
        self.assertEqual(len(data), 10)
        payload = dict(self.payload, weights=[{"date": "2024-01-01", "weight": 80}])
        data = self.client.post("/stats/body_weight?unit=lbs", json=payload).json()
        self.assertEqual(data["history"], [{"date": "2024-01-01", "weight": 176.37}])
        bad = self.client.post("/stats/body_weight?unit=stone", json=payload)
        self.assertEqual(bad.status_code, 400)

    def test_dashboard(self) -> None:
        data = self.client.post("/stats/dashboard", json=self.payload).json()
        self.assertEqual(data["streak"]["current"], 3)
        self.assertEqual(data["heatmap"]["totalSets"], 15)

    def test_invalid_input(self) -> None:
        resp = self.client.post("/stats/streak", json={"workouts": [{"date": "not a date"}]})
        self.assertEqual(resp.status_code, 422)
        bad_today = dict(self.payload, today="01/10/2024")
        resp = self.client.post("/stats/streak", json=bad_today)
        self.assertEqual(resp.status_code, 400)


if __name__ == "__main__":
    unittest.main()
