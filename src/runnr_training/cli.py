#!/usr/bin/env python3
"""
runnr CLI.

Race predictions, pacing strategies and training plans from a Strava
activity export.

Usage:
    runnr predict activities.json                      # Predictions, summary and trend
    runnr pacing --distance 21.1 --pace 5:10           # Race-day splits
    runnr plan activities.json goal.json               # Week-by-week training plan
"""

import argparse
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, List, Optional

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .config import get_settings
from .exceptions import InsufficientDataError, RunnrError, ValidationError
from .metrics.aggregation import calculate_detailed_metrics
from .models.activity import ActivityRecord, load_activities
from .models.plans import TrainingPhase, TrainingPlan, WorkoutType, parse_race_goal
from .models.predictions import PredictionDistance
from .models.race_pacing import PacingStrategyType
from .services.plan_service import get_training_plan_service, should_regenerate_plan
from .services.prediction_service import PredictionReport, get_race_prediction_service
from .services.race_pacing_service import get_race_pacing_service
from .utils.dates import parse_timestamp
from .utils.formatting import format_pace, format_race_time, parse_pace

console = Console()
err_console = Console(stderr=True)

CLI_ATHLETE_ID = "cli"

PHASE_COLORS = {
    TrainingPhase.BASE: "blue",
    TrainingPhase.BUILD: "yellow",
    TrainingPhase.PEAK: "red",
    TrainingPhase.TAPER: "green",
}


def configure_logging(level: Optional[str] = None) -> None:
    """Route log records through rich on stderr."""
    logging.basicConfig(
        level=(level or get_settings().log_level).upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, rich_tracebacks=True)],
        force=True,
    )


def load_json(path: str) -> Any:
    """
    Load a JSON document from disk.

    Raises:
        ValidationError: If the file is missing or not valid JSON.
    """
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        raise ValidationError(f"Cannot read {path}: {e.strerror}", field="path") from e
    except json.JSONDecodeError as e:
        raise ValidationError(f"{path} is not valid JSON: {e.msg}", field="path") from e


def load_activity_file(path: str) -> List[ActivityRecord]:
    """Load activities from a JSON list or an object with an ``activities`` key."""
    data = load_json(path)
    if isinstance(data, dict):
        data = data.get("activities", [])
    if not isinstance(data, list):
        raise ValidationError(f"{path} must contain a list of activities", field="path")
    return load_activities(data)


def resolve_now(value: Optional[str]) -> datetime:
    if value is None:
        return datetime.now(timezone.utc)
    try:
        return parse_timestamp(value)
    except ValueError as e:
        raise ValidationError(str(e), field="now") from e


def format_minutes(minutes: Optional[float]) -> str:
    return format_race_time(minutes) if minutes is not None else "-"


# =============================================================================
# Commands
# =============================================================================


def render_report(report: PredictionReport) -> None:
    table = Table(title="Race Predictions", box=box.ROUNDED)
    table.add_column("Distance", style="cyan")
    table.add_column("Time", style="bold")
    table.add_column("Pace")
    table.add_column("Notes", style="dim")

    for distance, prediction in report.predictions.items():
        if prediction.available:
            table.add_row(distance.display_name, prediction.formatted_time, prediction.formatted_pace, "")
        else:
            table.add_row(distance.display_name, "-", "-", prediction.reason)
    console.print(table)

    metrics = report.training_metrics
    summary = Text()
    summary.append(f"Runs: {metrics.recent_run_count}\n")
    summary.append(f"Weekly distance: {metrics.weekly_kilometers:.1f} km\n")
    summary.append(f"Average pace: {format_pace(metrics.avg_pace) if metrics.avg_pace else '-'}\n")
    summary.append(f"Longest run: {metrics.longest_run:.1f} km")
    console.print(Panel(summary, title="Last 24 Weeks", box=box.ROUNDED))

    if report.history:
        trend = Table(title="Prediction Trend", box=box.ROUNDED)
        trend.add_column("Date", style="cyan")
        for distance in PredictionDistance:
            trend.add_column(distance.display_name, justify="right")
        for point in report.history:
            trend.add_row(
                point.date.isoformat(),
                *[format_minutes(point.predictions.get(distance)) for distance in PredictionDistance],
            )
        console.print(trend)


def cmd_predict(args) -> int:
    """Show race predictions, the 24-week summary and the prediction trend."""
    activities = load_activity_file(args.activities)
    if not activities:
        raise InsufficientDataError(f"No activities found in {args.activities}", required=1, available=0)

    report = get_race_prediction_service().get_report(CLI_ATHLETE_ID, activities, resolve_now(args.now))

    if args.json:
        print(json.dumps(report.to_dict(), indent=2))
    else:
        render_report(report)
    return 0


def cmd_pacing(args) -> int:
    """Show a race-day pacing strategy."""
    try:
        base_pace = parse_pace(args.pace)
    except ValueError as e:
        raise ValidationError(str(e), field="pace") from e
    if args.distance <= 0:
        raise ValidationError("Distance must be positive", field="distance")

    strategy = get_race_pacing_service().generate_pacing_strategy(
        args.distance, base_pace, PacingStrategyType(args.strategy)
    )

    if args.json:
        print(strategy.model_dump_json(indent=2))
        return 0

    console.print(Panel(
        f"[bold]{strategy.race_distance:g} km[/bold] in [bold]{strategy.target_time_formatted}[/bold] "
        f"({strategy.strategy.value} split, average {format_pace(strategy.average_pace)})",
        title="Pacing Strategy",
        box=box.ROUNDED,
    ))

    table = Table(box=box.ROUNDED)
    table.add_column("Split", justify="right", style="cyan")
    table.add_column("Distance", justify="right")
    table.add_column("Pace")
    table.add_column("Split Time", justify="right")
    table.add_column("Elapsed", justify="right", style="bold")
    table.add_column("Note", style="dim")
    for split in strategy.splits:
        table.add_row(
            str(split.split_number),
            f"{split.cumulative_distance:.2f}",
            split.pace_formatted,
            split.split_time_formatted,
            split.cumulative_time_formatted,
            split.note,
        )
    console.print(table)

    console.print(Panel("\n".join(f"- {tip}" for tip in strategy.recommendations), title="Tips", box=box.ROUNDED))
    return 0


def render_plan(plan: TrainingPlan) -> None:
    goal = plan.race_goal
    header = Text()
    header.append(f"{goal.distance.value} on {goal.race_date.isoformat()}\n", style="bold")
    header.append(f"Weeks until race: {plan.weeks_until_race}\n")
    header.append(f"Current fitness: {plan.current_fitness.value}\n")
    header.append(f"Estimated race time: {plan.estimated_race_time}")
    console.print(Panel(header, title="Training Plan", box=box.ROUNDED))

    for week in plan.plan:
        color = PHASE_COLORS[week.phase]
        table = Table(
            title=(
                f"Week {week.week_number} ({week.week_start_date.isoformat()}) "
                f"[{color}]{week.focus}[/{color}] - {week.total_kilometers:g} km"
            ),
            caption=week.notes,
            box=box.SIMPLE,
        )
        table.add_column("Day", style="cyan")
        table.add_column("Workout")
        table.add_column("km", justify="right")
        table.add_column("Intensity")
        table.add_column("Details", style="dim")
        for workout in week.workouts:
            style = "bold red" if workout.type == WorkoutType.RACE_DAY else None
            table.add_row(
                workout.day,
                Text(workout.type.value, style=style or ""),
                f"{workout.distance:g}" if workout.distance is not None else "",
                workout.intensity.value,
                workout.description,
            )
        console.print(table)

    console.print(Panel(
        "\n".join(f"- {rec}" for rec in plan.recommendations),
        title="Recommendations",
        box=box.ROUNDED,
    ))


def cmd_plan(args) -> int:
    """Generate a training plan for a race goal."""
    now = resolve_now(args.now)
    try:
        regenerate = should_regenerate_plan(args.last_generated, now)
    except ValueError as e:
        raise ValidationError(f"Invalid --last-generated date: {args.last_generated}", field="last_generated") from e
    if not regenerate:
        console.print("Plan is up to date")
        return 0

    activities = load_activity_file(args.activities)
    goal = parse_race_goal(load_json(args.goal))

    metrics = calculate_detailed_metrics(activities, now)
    predictions = get_race_prediction_service().get_predictions(activities, now)
    plan = get_training_plan_service().generate_training_plan(goal, metrics, now, predictions)

    if args.json:
        print(json.dumps(plan.to_dict(), indent=2))
    else:
        render_plan(plan)
    return 0


# =============================================================================
# Entry Point
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="runnr",
        description="runnr - race predictions, pacing and training plans",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  runnr predict activities.json --now 2025-06-01T08:00:00Z
  runnr pacing --distance 42.2 --pace 5:20 --strategy negative
  runnr plan activities.json goal.json --last-generated 2025-05-31
        """,
    )
    parser.add_argument("--log-level", help="Override RUNNR_LOG_LEVEL (DEBUG, INFO, WARNING)")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Predict command
    predict_p = subparsers.add_parser("predict", help="Predict race times from activity history")
    predict_p.add_argument("activities", help="JSON file with Strava activities")
    predict_p.add_argument("--now", help="Reference time (ISO-8601), defaults to the current time")
    predict_p.add_argument("--json", action="store_true", help="Print JSON instead of tables")

    # Pacing command
    pacing_p = subparsers.add_parser("pacing", help="Generate a race pacing strategy")
    pacing_p.add_argument("--distance", type=float, required=True, help="Race distance in km")
    pacing_p.add_argument("--pace", required=True, help="Target pace (M:SS per km)")
    pacing_p.add_argument(
        "--strategy",
        choices=[s.value for s in PacingStrategyType],
        default=PacingStrategyType.EVEN.value,
        help="Pacing strategy",
    )
    pacing_p.add_argument("--json", action="store_true", help="Print JSON instead of tables")

    # Plan command
    plan_p = subparsers.add_parser("plan", help="Generate a training plan for a race goal")
    plan_p.add_argument("activities", help="JSON file with Strava activities")
    plan_p.add_argument("goal", help="JSON file with the race goal")
    plan_p.add_argument("--now", help="Reference time (ISO-8601), defaults to the current time")
    plan_p.add_argument("--last-generated", help="Date the stored plan was generated (YYYY-MM-DD)")
    plan_p.add_argument("--json", action="store_true", help="Print JSON instead of tables")

    return parser


COMMANDS = {
    "predict": cmd_predict,
    "pacing": cmd_pacing,
    "plan": cmd_plan,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command not in COMMANDS:
        parser.print_help()
        return 1

    configure_logging(args.log_level)

    try:
        return COMMANDS[args.command](args)
    except RunnrError as e:
        logging.getLogger(__name__).debug(f"{args.command} failed: {e!r}")
        err_console.print(f"[red]Error:[/red] {e.message}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
