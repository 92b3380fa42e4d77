"""Training metrics: aggregation, pace zones and training load."""

from .aggregation import (
    average_pace,
    calculate_avg_long_run,
    calculate_consistency_score,
    calculate_detailed_metrics,
    calculate_pace_improvement,
    calculate_training_metrics,
    calculate_weekly_trend,
    runs_between,
    trailing_runs,
)
from .load import FormTrend, TrainingLoad, analyze_training_load, calculate_form_trend
from .zones import ZONE_MULTIPLIERS, calculate_pace_zones

__all__ = [
    "average_pace",
    "calculate_avg_long_run",
    "calculate_consistency_score",
    "calculate_detailed_metrics",
    "calculate_pace_improvement",
    "calculate_training_metrics",
    "calculate_weekly_trend",
    "runs_between",
    "trailing_runs",
    "FormTrend",
    "TrainingLoad",
    "analyze_training_load",
    "calculate_form_trend",
    "ZONE_MULTIPLIERS",
    "calculate_pace_zones",
]
