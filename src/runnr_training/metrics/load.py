"""Training load assessment used to adjust race predictions."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import IntEnum
from typing import Any, Dict, Sequence

from ..models.activity import ActivityRecord
from ..utils.dates import days_between, ensure_utc
from .aggregation import average_pace, runs_between, trailing_runs


LOAD_WINDOW_WEEKS = 4
FORM_WINDOW_WEEKS = 12
FORM_SAMPLE_SIZE = 10
FORM_MIN_RUNS = 6
FORM_CHANGE_THRESHOLD = 0.05

# Stress model: weekly km / 30 + frequency * 0.2 + form * 0.1, capped at 1.0
STRESS_VOLUME_DIVISOR = 30.0
STRESS_FREQUENCY_WEIGHT = 0.2
STRESS_FORM_WEIGHT = 0.1


class FormTrend(IntEnum):
    """Recent pace direction across the last handful of runs."""
    DECLINING = -1
    STABLE = 0
    IMPROVING = 1


@dataclass
class TrainingLoad:
    """Recent training load summary."""

    weekly_kilometers: float
    training_frequency: float  # fraction of the last four weeks with at least one run
    form_trend: FormTrend
    training_stress: float  # 0.0 - 1.0
    recent_run_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "weekly_kilometers": round(self.weekly_kilometers, 2),
            "training_frequency": self.training_frequency,
            "form_trend": int(self.form_trend),
            "training_stress": round(self.training_stress, 3),
            "recent_run_count": self.recent_run_count,
        }


def calculate_form_trend(runs: Sequence[ActivityRecord]) -> FormTrend:
    """
    Compare the average pace of the first and second half of the runs.

    Runs must be chronological. A pace gain of at least 5% between the
    halves is improving, a loss of at least 5% is declining.
    """
    if len(runs) < FORM_MIN_RUNS:
        return FormTrend.STABLE

    midpoint = len(runs) // 2
    first_pace = average_pace(runs[:midpoint])
    second_pace = average_pace(runs[midpoint:])
    if not first_pace or second_pace is None:
        return FormTrend.STABLE

    improvement = (first_pace - second_pace) / first_pace
    if improvement >= FORM_CHANGE_THRESHOLD:
        return FormTrend.IMPROVING
    if improvement <= -FORM_CHANGE_THRESHOLD:
        return FormTrend.DECLINING
    return FormTrend.STABLE


def analyze_training_load(activities: Sequence[ActivityRecord], now: datetime) -> TrainingLoad:
    """
    Assess recent training load.

    Args:
        activities: Activity history
        now: Reference instant for the trailing windows

    Returns:
        TrainingLoad with weekly volume, frequency, form trend and stress
    """
    now = ensure_utc(now)
    recent_runs = trailing_runs(activities, now, LOAD_WINDOW_WEEKS)
    weekly_km = sum(run.distance_km for run in recent_runs) / LOAD_WINDOW_WEEKS

    # Trailing 7-day buckets, 0 = the last seven days
    weeks_with_runs = {
        min(days_between(run.start_date, now) // 7, LOAD_WINDOW_WEEKS - 1)
        for run in recent_runs
    }
    frequency = len(weeks_with_runs) / LOAD_WINDOW_WEEKS

    form_runs = runs_between(activities, now - timedelta(weeks=FORM_WINDOW_WEEKS), now)
    form_trend = calculate_form_trend(form_runs[-FORM_SAMPLE_SIZE:])

    stress = min(
        1.0,
        weekly_km / STRESS_VOLUME_DIVISOR
        + frequency * STRESS_FREQUENCY_WEIGHT
        + int(form_trend) * STRESS_FORM_WEIGHT,
    )

    return TrainingLoad(
        weekly_kilometers=weekly_km,
        training_frequency=frequency,
        form_trend=form_trend,
        training_stress=stress,
        recent_run_count=len(recent_runs),
    )
