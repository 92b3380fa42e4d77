"""
Training metrics aggregation.

Turns a raw activity list into the summary figures consumed by the
predictor and the plan generator. Every function takes an explicit ``now``
so the trailing windows are reproducible.
"""

import logging
import math
from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Sequence

from ..models.activity import ActivityRecord
from ..models.metrics import DetailedTrainingMetrics, TrainingMetrics, WeeklyTrend
from ..utils.dates import ensure_utc
from .zones import calculate_pace_zones


logger = logging.getLogger(__name__)

RECENT_WINDOW_WEEKS = 4
OLDER_WINDOW_WEEKS = 8

# Weekly trend thresholds (last quarter vs first quarter of recent runs)
TREND_INCREASE_RATIO = 1.10
TREND_DECREASE_RATIO = 0.90

# 16 runs in 4 weeks (4/week) is a full consistency score
FULL_CONSISTENCY_RUNS = 16
LONG_RUN_FRACTION = 0.25


def runs_between(
    activities: Iterable[ActivityRecord],
    start: Optional[datetime],
    end: datetime,
) -> List[ActivityRecord]:
    """
    Select runs with ``start <= start_date <= end``, ordered by start time.

    ``start=None`` leaves the window open at the beginning.
    """
    end = ensure_utc(end)
    start = ensure_utc(start) if start is not None else None
    selected = [
        activity for activity in activities
        if activity.is_run
        and activity.start_date <= end
        and (start is None or activity.start_date >= start)
    ]
    selected.sort(key=lambda a: a.start_date)
    return selected


def trailing_runs(activities: Iterable[ActivityRecord], now: datetime, weeks: float) -> List[ActivityRecord]:
    """Runs within the trailing ``weeks`` weeks ending at ``now``."""
    now = ensure_utc(now)
    return runs_between(activities, now - timedelta(weeks=weeks), now)


def average_pace(runs: Sequence[ActivityRecord]) -> Optional[float]:
    """Unweighted mean of per-run paces (min/km), or None without valid runs."""
    paces = [run.pace_min_per_km for run in runs if run.pace_min_per_km is not None]
    if not paces:
        return None
    return sum(paces) / len(paces)


def calculate_training_metrics(
    activities: Iterable[ActivityRecord],
    now: datetime,
    window_weeks: int = RECENT_WINDOW_WEEKS,
) -> TrainingMetrics:
    """
    Summarise the trailing window of runs.

    Args:
        activities: Activity history
        now: End of the window
        window_weeks: Window length in weeks; weekly kilometers divide by it

    Returns:
        TrainingMetrics for the window
    """
    runs = trailing_runs(activities, now, window_weeks)
    total_km = sum(run.distance_km for run in runs)
    total_min = sum(run.moving_time_min for run in runs)

    return TrainingMetrics(
        recent_run_count=len(runs),
        weekly_kilometers=total_km / window_weeks,
        avg_pace=total_min / total_km if total_km > 0 else 0.0,
        longest_run=max((run.distance_km for run in runs), default=0.0),
    )


def calculate_weekly_trend(recent_runs: Sequence[ActivityRecord]) -> WeeklyTrend:
    """
    Compare the first and last quarter of the recent runs by summed distance.

    Runs must be in chronological order. Fewer than four runs leave an
    empty quarter, which is reported as stable.
    """
    quarter = len(recent_runs) // 4
    if quarter == 0:
        return WeeklyTrend.STABLE

    first_km = sum(run.distance_km for run in recent_runs[:quarter])
    last_km = sum(run.distance_km for run in recent_runs[-quarter:])

    if last_km >= first_km * TREND_INCREASE_RATIO:
        return WeeklyTrend.INCREASING
    if last_km <= first_km * TREND_DECREASE_RATIO:
        return WeeklyTrend.DECREASING
    return WeeklyTrend.STABLE


def calculate_consistency_score(recent_run_count: int) -> float:
    """Consistency on a 0-100 scale; four runs a week for four weeks is 100."""
    return min(100.0, recent_run_count / FULL_CONSISTENCY_RUNS * 100)


def calculate_avg_long_run(recent_runs: Sequence[ActivityRecord], fallback: float) -> float:
    """Mean distance (km) of the longest 25% of recent runs (at least one)."""
    if not recent_runs:
        return fallback
    by_distance = sorted(recent_runs, key=lambda r: r.distance_km, reverse=True)
    count = max(1, math.ceil(len(by_distance) * LONG_RUN_FRACTION))
    long_runs = by_distance[:count]
    return sum(run.distance_km for run in long_runs) / len(long_runs)


def calculate_pace_improvement(older_pace: float, recent_pace: float) -> float:
    """Percentage pace improvement; positive means the runner got faster."""
    if older_pace <= 0:
        return 0.0
    return (older_pace - recent_pace) / older_pace * 100


def calculate_detailed_metrics(
    activities: Sequence[ActivityRecord],
    now: datetime,
    metrics: Optional[TrainingMetrics] = None,
) -> DetailedTrainingMetrics:
    """
    Enrich the four-week summary with zones, trend, consistency and improvement.

    Args:
        activities: Activity history
        now: End of the trailing windows
        metrics: Precomputed summary; computed over four weeks when omitted

    Returns:
        DetailedTrainingMetrics
    """
    now = ensure_utc(now)
    if metrics is None:
        metrics = calculate_training_metrics(activities, now, RECENT_WINDOW_WEEKS)

    four_weeks_ago = now - timedelta(weeks=RECENT_WINDOW_WEEKS)
    eight_weeks_ago = now - timedelta(weeks=OLDER_WINDOW_WEEKS)

    recent_runs = runs_between(activities, four_weeks_ago, now)
    older_runs = [
        run for run in runs_between(activities, eight_weeks_ago, now)
        if run.start_date < four_weeks_ago
    ]

    recent_pace = average_pace(recent_runs)
    if recent_pace is None:
        recent_pace = metrics.avg_pace
    older_pace = average_pace(older_runs)
    if older_pace is None:
        older_pace = recent_pace

    detailed = DetailedTrainingMetrics(
        recent_run_count=metrics.recent_run_count,
        weekly_kilometers=metrics.weekly_kilometers,
        avg_pace=recent_pace,
        longest_run=metrics.longest_run,
        pace_zones=calculate_pace_zones(recent_pace),
        weekly_trend=calculate_weekly_trend(recent_runs),
        consistency_score=calculate_consistency_score(metrics.recent_run_count),
        avg_long_run=calculate_avg_long_run(recent_runs, metrics.longest_run),
        recent_pace_improvement=calculate_pace_improvement(older_pace, recent_pace),
    )
    logger.debug(
        f"Detailed metrics: {len(recent_runs)} recent runs, trend={detailed.weekly_trend.value}, "
        f"improvement={detailed.recent_pace_improvement:.1f}%"
    )
    return detailed
