"""Shared fixtures: deterministic activity histories built against a fixed now."""

from datetime import datetime, timedelta, timezone

import pytest

from runnr_training.models.activity import ActivityRecord
from runnr_training.models.metrics import DetailedTrainingMetrics


NOW = datetime(2025, 6, 1, 8, 0, tzinfo=timezone.utc)


def build_run(days_ago: float, km: float = 5.0, pace: float = 5.0, activity_type: str = "Run") -> ActivityRecord:
    """A run ``days_ago`` days before NOW covering ``km`` at ``pace`` min/km."""
    return ActivityRecord(
        distance_m=km * 1000,
        moving_time_s=km * pace * 60,
        start_date=NOW - timedelta(days=days_ago),
        activity_type=activity_type,
    )


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def make_run():
    """Factory for single runs relative to NOW."""
    return build_run


@pytest.fixture
def make_runs():
    """Factory for evenly spaced runs, most recent at ``start_days_ago``."""

    def _make(count: int, every_days: float, km: float = 5.0, pace: float = 5.0, start_days_ago: float = 0):
        return [build_run(start_days_ago + i * every_days, km=km, pace=pace) for i in range(count)]

    return _make


@pytest.fixture
def make_metrics():
    """Factory for DetailedTrainingMetrics with neutral defaults."""

    def _make(**overrides):
        values = dict(
            recent_run_count=12,
            weekly_kilometers=20.0,
            avg_pace=5.5,
            longest_run=8.0,
            consistency_score=75.0,
            avg_long_run=7.0,
            recent_pace_improvement=0.0,
        )
        values.update(overrides)
        return DetailedTrainingMetrics(**values)

    return _make
