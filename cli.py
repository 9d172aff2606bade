import argparse
import datetime
import json
import sys
from typing import Optional

from loguru import logger
from pydantic import ValidationError

from algorithms import MathTools, WeightConverter
from config import YamlConfig
from rest_api import HistoryPayload, serialize
from seed_sample_data import history_to_json, sample_history
from stats_service import StatisticsService


def load_history(path: str) -> HistoryPayload:
    """Read a JSON export of ``{workouts, calories, steps, weights}``."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a JSON object")
    return HistoryPayload(**data)


def print_json(value) -> None:
    print(json.dumps(serialize(value), indent=2, default=str))


def demo_data(path: str, today: Optional[str] = None) -> None:
    """Write a sample history export to ``path``."""
    ref = datetime.date.fromisoformat(today) if today else None
    with open(path, "w", encoding="utf-8") as f:
        f.write(history_to_json(sample_history(ref)))
    logger.info("Demo history written to {}", path)


def run(args: argparse.Namespace) -> None:
    if args.cmd == "demo":
        demo_data(args.out, args.today)
        return
    if args.cmd == "one-rep-max":
        estimates = MathTools.one_rep_max(args.weight, args.reps)
        print_json({"estimates": estimates, "rep_table": MathTools.rep_table(estimates["average"])})
        return
    if args.cmd == "convert":
        target = "lbs" if args.unit == "kg" else "kg"
        converted = WeightConverter.convert(args.weight, args.unit, target)
        print(f"{args.weight} {args.unit} = {converted} {target}")
        return

    stats = StatisticsService(YamlConfig(args.yaml).settings())
    history = load_history(args.data)
    today = args.today or history.today
    if args.cmd == "streak":
        print_json(
            {
                "daily": stats.streaks.workout_streak(history.workouts, today),
                "weekly": stats.streaks.weekly_streak(history.workouts, today),
            }
        )
    elif args.cmd == "weekly":
        this_week, last_week, comparison = stats.weekly.week_summary(
            history.workouts, history.calories, history.steps, today, history.targets
        )
        print_json(
            {"thisWeek": this_week, "lastWeek": last_week, "comparison": comparison}
        )
    elif args.cmd == "heatmap":
        print_json(stats.heatmap(history.workouts, args.window, today))
    elif args.cmd == "progression":
        result = stats.progression.exercise_progression(history.workouts, args.exercise)
        if result is None:
            raise ValueError(f"no progression data for {args.exercise}")
        print_json(result)
    elif args.cmd == "suggest":
        print_json(stats.suggest(history.workouts, args.window, today))
    elif args.cmd == "records":
        print_json(stats.progression.personal_records(history.workouts))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Workout statistics commands")
    sub = parser.add_subparsers(dest="cmd", required=True)

    def history_command(name: str) -> argparse.ArgumentParser:
        cmd = sub.add_parser(name)
        cmd.add_argument("--data", default="history.json")
        cmd.add_argument("--yaml", default="settings.yaml")
        cmd.add_argument("--today")
        return cmd

    history_command("streak")
    history_command("weekly")
    heat = history_command("heatmap")
    heat.add_argument("--window", type=int)
    prog = history_command("progression")
    prog.add_argument("--exercise", required=True)
    sug = history_command("suggest")
    sug.add_argument("--window", type=int)
    history_command("records")

    orm = sub.add_parser("one-rep-max")
    orm.add_argument("--weight", type=float, required=True)
    orm.add_argument("--reps", type=int, required=True)

    conv = sub.add_parser("convert")
    conv.add_argument("--weight", type=float, required=True)
    conv.add_argument("--unit", choices=["kg", "lbs"], required=True)

    demo = sub.add_parser("demo")
    demo.add_argument("--out", default="history.json")
    demo.add_argument("--today")
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    try:
        run(args)
    except (ValueError, ValidationError, OSError) as e:
        logger.error("{} failed: {}", args.cmd, e)
        sys.exit(1)


if __name__ == "__main__":
    main()
