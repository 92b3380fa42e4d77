"""Data models for runnr-training."""

from .activity import ActivityRecord, RUN_ACTIVITY_TYPE, load_activities
from .metrics import (
    DetailedTrainingMetrics,
    PaceRange,
    PaceZones,
    TrainingMetrics,
    WeeklyTrend,
)
from .plans import (
    DAY_NAMES,
    RECOVERY_WEEK_FOCUS,
    FitnessLevel,
    Intensity,
    RaceDistance,
    RaceGoal,
    TrainingPhase,
    TrainingPlan,
    WeeklyPlan,
    Workout,
    WorkoutType,
    parse_race_goal,
)
from .predictions import (
    HistoricalPoint,
    Prediction,
    PredictionDistance,
    RacePredictions,
)
from .race_pacing import PacingSplit, PacingStrategy, PacingStrategyType

__all__ = [
    # Activities
    "ActivityRecord",
    "RUN_ACTIVITY_TYPE",
    "load_activities",
    # Metrics
    "DetailedTrainingMetrics",
    "PaceRange",
    "PaceZones",
    "TrainingMetrics",
    "WeeklyTrend",
    # Plans
    "DAY_NAMES",
    "RECOVERY_WEEK_FOCUS",
    "FitnessLevel",
    "Intensity",
    "RaceDistance",
    "RaceGoal",
    "TrainingPhase",
    "TrainingPlan",
    "WeeklyPlan",
    "Workout",
    "WorkoutType",
    "parse_race_goal",
    # Predictions
    "HistoricalPoint",
    "Prediction",
    "PredictionDistance",
    "RacePredictions",
    # Pacing
    "PacingSplit",
    "PacingStrategy",
    "PacingStrategyType",
]
