import datetime
import os
import sys
import unittest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from models import CalorieEntry, DailyTargets, StepEntry, VolumeSummary
from seed_sample_data import build_workout
from weekly_service import WeeklyStatsService


class WeeklyStatsServiceTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.service = WeeklyStatsService()
        self.workouts = [
            build_workout("2024-01-08", {"Bench Press": [(100, 5)]}, workout_id="a"),
            build_workout("2024-01-10", {"Squat": [(100, 5)]}, workout_id="b"),
            build_workout("2024-01-11", {"Squat": [(100, 5)]}, completed=False, workout_id="c"),
            build_workout("2024-01-15", {"Squat": [(100, 5)]}, workout_id="d"),
        ]
        self.calories = [
            CalorieEntry(date="2024-01-08", calories=2000),
            CalorieEntry(date="2024-01-09", calories=1500),
            CalorieEntry(date="2024-01-15", calories=900),
        ]
        self.steps = [
            StepEntry(date="2024-01-12", steps=7000),
            StepEntry(date="2024-01-14", steps=3500),
        ]

    def test_weekly_stats_totals(self) -> None:
        stats = self.service.weekly_stats(
            self.workouts, self.calories, self.steps, "2024-01-08", "2024-01-14"
        )
        self.assertEqual(stats.total_workouts, 2)
        self.assertEqual(stats.total_calories, 3500)
        self.assertEqual(stats.total_steps, 10500)
        self.assertEqual(stats.avg_calories, 500)
        self.assertEqual(stats.avg_steps, 1500)
        self.assertEqual(stats.days_active, 5)
        self.assertEqual(stats.calorie_target, 14000)
        self.assertEqual(stats.step_goal, 70000)

    def test_range_is_inclusive(self) -> None:
        stats = self.service.weekly_stats(
            self.workouts, self.calories, self.steps, "2024-01-08", "2024-01-08"
        )
        self.assertEqual(stats.total_workouts, 1)
        self.assertEqual(stats.total_calories, 2000)
        self.assertEqual(stats.total_steps, 0)

    def test_custom_targets(self) -> None:
        targets = DailyTargets(calorie_target=2500, step_goal=8000)
        stats = self.service.weekly_stats([], [], [], "2024-01-08", "2024-01-14", targets)
        self.assertEqual(stats.calorie_target, 17500)
        self.assertEqual(stats.step_goal, 56000)
        service = WeeklyStatsService(targets)
        stats = service.weekly_stats([], [], [], "2024-01-08", "2024-01-14")
        self.assertEqual(stats.step_goal, 56000)

    def test_week_summary_against_empty_week(self) -> None:
        calories = [CalorieEntry(date="2024-01-03", calories=1500)]
        this_week, last_week, comparison = self.service.week_summary(
            [], calories, [], today="2024-01-10"
        )
        self.assertEqual(this_week.week_start, datetime.date(2024, 1, 8))
        self.assertEqual(last_week.week_start, datetime.date(2024, 1, 1))
        self.assertEqual(this_week.total_calories, 0)
        self.assertEqual(this_week.calorie_target, 14000)
        self.assertEqual(comparison.calories, -1500)
        self.assertEqual(comparison.calories_percent, -100)

    def test_compare_weeks_zero_baseline(self) -> None:
        this_week, _, comparison = self.service.week_summary(
            self.workouts, today="2024-01-10"
        )
        self.assertEqual(this_week.total_workouts, 2)
        self.assertEqual(comparison.workouts, 2)
        self.assertEqual(comparison.workouts_percent, 100)
        self.assertEqual(comparison.steps, 0)
        self.assertEqual(comparison.steps_percent, 0)

    def test_weekly_volume(self) -> None:
        workouts = [
            build_workout("2024-01-01", {"Bench Press": [(100, 5)]}, workout_id="a"),
            build_workout("2024-01-03", {"Squat": [(100, 5), (100, 5)]}, workout_id="b"),
            build_workout("2024-01-09", {"Squat": [(60, 5)]}, workout_id="c"),
            build_workout("2024-01-10", {"Squat": [(60, 5)]}, completed=False, workout_id="d"),
        ]
        points = WeeklyStatsService.weekly_volume(workouts)
        self.assertEqual(
            [(p.week_start.isoformat(), p.volume, p.workouts) for p in points],
            [("2024-01-01", 1500, 2), ("2024-01-08", 300, 1)],
        )
        summary = WeeklyStatsService.volume_summary(points)
        self.assertEqual(summary.total, 1800)
        self.assertEqual(summary.avg_weekly, 900)
        self.assertEqual(summary.peak, 1500)
        self.assertEqual(summary.peak_week, datetime.date(2024, 1, 1))

    def test_weekly_volume_empty(self) -> None:
        self.assertEqual(WeeklyStatsService.weekly_volume([]), [])
        self.assertEqual(WeeklyStatsService.volume_summary([]), VolumeSummary())


if __name__ == "__main__":
    unittest.main()
