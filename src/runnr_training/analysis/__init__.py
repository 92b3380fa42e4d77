"""Race prediction, prediction history and fitness assessment."""

from .fitness import (
    FitnessAssessment,
    assess_fitness,
    assess_fitness_level,
    calculate_fitness_score,
    classify_fitness_score,
)
from .history import calculate_historical_predictions, filter_outliers, plausible_time
from .predictions import (
    PaceCandidate,
    calculate_age_weight,
    calculate_distance_prediction,
    calculate_race_predictions,
    estimate_pace_from_training,
    filter_pace_outliers,
    get_distance_adjustment_factor,
    get_similar_distance_range,
)

__all__ = [
    # Fitness
    "FitnessAssessment",
    "assess_fitness",
    "assess_fitness_level",
    "calculate_fitness_score",
    "classify_fitness_score",
    # History
    "calculate_historical_predictions",
    "filter_outliers",
    "plausible_time",
    # Predictions
    "PaceCandidate",
    "calculate_age_weight",
    "calculate_distance_prediction",
    "calculate_race_predictions",
    "estimate_pace_from_training",
    "filter_pace_outliers",
    "get_distance_adjustment_factor",
    "get_similar_distance_range",
]
