import contextlib
import io
import json
import os
import sys
import tempfile
import unittest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from cli import demo_data, load_history, main


class CLITestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.data = os.path.join(self.tmp.name, "history.json")
        self.yaml = os.path.join(self.tmp.name, "settings.yaml")
        demo_data(self.data, "2024-01-28")

    def tearDown(self) -> None:
        self.tmp.cleanup()

    def run_cli(self, *args: str):
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            main(list(args))
        return out.getvalue()

    def history_args(self, cmd: str, *extra: str) -> list[str]:
        return [cmd, "--data", self.data, "--yaml", self.yaml, "--today", "2024-01-28", *extra]

    def test_demo_data(self) -> None:
        history = load_history(self.data)
        self.assertEqual(len(history.workouts), 12)
        self.assertEqual(len(history.calories), 28)
        self.assertEqual(len(history.weights), 4)

    def test_streak(self) -> None:
        data = json.loads(self.run_cli(*self.history_args("streak")))
        self.assertEqual(data["daily"], {"current": 0, "longest": 1})
        self.assertEqual(data["weekly"]["current"], 4)

    def test_records(self) -> None:
        data = json.loads(self.run_cli(*self.history_args("records")))
        names = [r["exerciseName"] for r in data]
        self.assertIn("Bench Press", names)
        self.assertNotIn("Plank", names)
        bench = [r for r in data if r["exerciseName"] == "Bench Press"][0]
        self.assertEqual(bench["weight"], 87.5)

    def test_heatmap_and_suggest(self) -> None:
        heat = json.loads(self.run_cli(*self.history_args("heatmap", "--window", "7")))
        self.assertEqual(heat["windowStart"], "2024-01-22")
        self.assertEqual(heat["mostTrained"], "Legs")
        sug = json.loads(self.run_cli(*self.history_args("suggest")))
        self.assertTrue(sug["hasEnoughData"])

    def test_progression(self) -> None:
        data = json.loads(self.run_cli(*self.history_args("progression", "--exercise", "Squat")))
        self.assertEqual(data["startingWeight"], 100)
        self.assertEqual(data["currentWeight"], 115)
        with self.assertRaises(SystemExit) as ctx:
            self.run_cli(*self.history_args("progression", "--exercise", "Snatch"))
        self.assertEqual(ctx.exception.code, 1)

    def test_weekly(self) -> None:
        data = json.loads(self.run_cli(*self.history_args("weekly")))
        self.assertEqual(data["thisWeek"]["totalWorkouts"], 3)
        self.assertEqual(data["thisWeek"]["calorieTarget"], 14000)

    def test_tools(self) -> None:
        data = json.loads(self.run_cli("one-rep-max", "--weight", "100", "--reps", "5"))
        self.assertAlmostEqual(data["estimates"]["epley"], 116.7)
        self.assertEqual(self.run_cli("convert", "--weight", "100", "--unit", "kg").strip(), "100.0 kg = 220.46 lbs")

    def test_missing_file(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            self.run_cli("streak", "--data", os.path.join(self.tmp.name, "nope.json"), "--yaml", self.yaml)
        self.assertEqual(ctx.exception.code, 1)


if __name__ == "__main__":
    unittest.main()
