"""Race prediction service.

Assembles the race predictions view: current predictions for the four
canonical distances, the 24-week training summary and the historical
prediction series (read through an in-memory cache).
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from ..analysis.history import calculate_historical_predictions
from ..analysis.predictions import PREDICTION_WINDOW_WEEKS, calculate_race_predictions
from ..config import Settings, get_settings
from ..metrics.aggregation import calculate_training_metrics
from ..models.activity import ActivityRecord
from ..models.metrics import TrainingMetrics
from ..models.predictions import HistoricalPoint, RacePredictions
from ..utils.dates import ensure_utc
from .cache import HistoricalPredictionCache


@dataclass
class PredictionReport:
    """Everything the race predictions view renders."""

    predictions: RacePredictions
    training_metrics: TrainingMetrics
    history: List[HistoricalPoint] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "predictions": self.predictions.to_dict(),
            "training_metrics": self.training_metrics.to_dict(),
            "history": [point.to_dict() for point in self.history],
        }


class RacePredictionService:
    """Service for race predictions and their history."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        cache: Optional[HistoricalPredictionCache] = None,
    ):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.settings = settings or get_settings()
        self.cache = cache if cache is not None else HistoricalPredictionCache(
            ttl_seconds=self.settings.history_cache_ttl_seconds,
            max_entries=self.settings.history_cache_max_entries,
        )

    def get_predictions(self, activities: Sequence[ActivityRecord], now: datetime) -> RacePredictions:
        """Current predictions for all four distances."""
        return calculate_race_predictions(activities, ensure_utc(now))

    def get_history(
        self,
        athlete_id: str,
        activities: Sequence[ActivityRecord],
        now: datetime,
    ) -> List[HistoricalPoint]:
        """
        Historical prediction series, cached per athlete.

        A cached series is reused while it is within the TTL and the
        athlete's activity count is unchanged.
        """
        cached = self.cache.get(athlete_id, len(activities))
        if cached is not None:
            self.logger.info(f"History cache hit for athlete {athlete_id}")
            return cached

        self.logger.info(f"History cache miss for athlete {athlete_id}, recomputing")
        points = calculate_historical_predictions(activities, ensure_utc(now), self.settings)
        self.cache.set(athlete_id, len(activities), points)
        return points

    def get_report(
        self,
        athlete_id: str,
        activities: Sequence[ActivityRecord],
        now: datetime,
    ) -> PredictionReport:
        """
        Build the full predictions view for an athlete.

        Args:
            athlete_id: Cache key for the historical series
            activities: Activity history
            now: Reference instant

        Returns:
            PredictionReport
        """
        now = ensure_utc(now)
        return PredictionReport(
            predictions=self.get_predictions(activities, now),
            training_metrics=calculate_training_metrics(activities, now, PREDICTION_WINDOW_WEEKS),
            history=self.get_history(athlete_id, activities, now),
        )


# Singleton instance
_race_prediction_service: Optional[RacePredictionService] = None


def get_race_prediction_service() -> RacePredictionService:
    """Get the race prediction service singleton."""
    global _race_prediction_service
    if _race_prediction_service is None:
        _race_prediction_service = RacePredictionService()
    return _race_prediction_service
