"""Services composing the prediction, pacing and planning core."""

from .cache import HistoricalPredictionCache
from .plan_service import (
    TrainingPlanService,
    assign_weekly_volume,
    calculate_base_volume,
    calculate_weeks_until_race,
    classify_phase,
    generate_training_plan,
    generate_workout,
    get_training_plan_service,
    should_regenerate_plan,
)
from .prediction_service import PredictionReport, RacePredictionService, get_race_prediction_service
from .race_pacing_service import RacePacingService, generate_pacing_strategy, get_race_pacing_service

__all__ = [
    "HistoricalPredictionCache",
    "TrainingPlanService",
    "assign_weekly_volume",
    "calculate_base_volume",
    "calculate_weeks_until_race",
    "classify_phase",
    "generate_training_plan",
    "generate_workout",
    "get_training_plan_service",
    "should_regenerate_plan",
    "PredictionReport",
    "RacePredictionService",
    "get_race_prediction_service",
    "RacePacingService",
    "generate_pacing_strategy",
    "get_race_pacing_service",
]
