"""Race predictions, pacing strategies and training plans from running history."""

from .analysis import (
    assess_fitness_level,
    calculate_distance_prediction,
    calculate_historical_predictions,
    calculate_race_predictions,
)
from .metrics import calculate_detailed_metrics, calculate_pace_zones, calculate_training_metrics
from .models import (
    ActivityRecord,
    DetailedTrainingMetrics,
    PacingStrategy,
    PacingStrategyType,
    Prediction,
    RaceGoal,
    RacePredictions,
    TrainingMetrics,
    TrainingPlan,
    load_activities,
    parse_race_goal,
)
from .services import (
    HistoricalPredictionCache,
    RacePacingService,
    RacePredictionService,
    TrainingPlanService,
    generate_pacing_strategy,
    generate_training_plan,
    should_regenerate_plan,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Models
    "ActivityRecord",
    "DetailedTrainingMetrics",
    "PacingStrategy",
    "PacingStrategyType",
    "Prediction",
    "RaceGoal",
    "RacePredictions",
    "TrainingMetrics",
    "TrainingPlan",
    "load_activities",
    "parse_race_goal",
    # Metrics
    "calculate_detailed_metrics",
    "calculate_pace_zones",
    "calculate_training_metrics",
    # Analysis
    "assess_fitness_level",
    "calculate_distance_prediction",
    "calculate_historical_predictions",
    "calculate_race_predictions",
    # Services
    "HistoricalPredictionCache",
    "RacePacingService",
    "RacePredictionService",
    "TrainingPlanService",
    "generate_pacing_strategy",
    "generate_training_plan",
    "should_regenerate_plan",
]
