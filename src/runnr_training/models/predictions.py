"""Race prediction models."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, Iterator, Optional, Tuple


class PredictionDistance(Enum):
    """Canonical race distances predicted from training history."""

    FIVE_K = "five_k"
    TEN_K = "ten_k"
    HALF_MARATHON = "half_marathon"
    MARATHON = "marathon"

    @property
    def distance_km(self) -> float:
        return _DISTANCE_KM[self]

    @property
    def min_runs(self) -> int:
        """Runs needed in the prediction window before this distance is offered."""
        return _MIN_RUNS[self]

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def plausible_minutes(self) -> Tuple[float, float]:
        """Exclusive bounds for a believable predicted time in the trend series."""
        return _PLAUSIBLE_MINUTES[self]


_DISTANCE_KM = {
    PredictionDistance.FIVE_K: 5.0,
    PredictionDistance.TEN_K: 10.0,
    PredictionDistance.HALF_MARATHON: 21.1,
    PredictionDistance.MARATHON: 42.2,
}

_MIN_RUNS = {
    PredictionDistance.FIVE_K: 5,
    PredictionDistance.TEN_K: 10,
    PredictionDistance.HALF_MARATHON: 20,
    PredictionDistance.MARATHON: 20,
}

_DISPLAY_NAMES = {
    PredictionDistance.FIVE_K: "5K",
    PredictionDistance.TEN_K: "10K",
    PredictionDistance.HALF_MARATHON: "half marathon",
    PredictionDistance.MARATHON: "marathon",
}

_PLAUSIBLE_MINUTES = {
    PredictionDistance.FIVE_K: (10.0, 60.0),
    PredictionDistance.TEN_K: (20.0, 120.0),
    PredictionDistance.HALF_MARATHON: (60.0, 300.0),
    PredictionDistance.MARATHON: (120.0, 600.0),
}


@dataclass
class Prediction:
    """
    Predicted performance for one race distance.

    ``time`` is in minutes and ``pace`` in min/km. Both are None while the
    prediction is unavailable, in which case ``reason`` explains why.
    """

    available: bool
    time: Optional[float] = None
    pace: Optional[float] = None
    reason: str = ""
    formatted_time: Optional[str] = None
    formatted_pace: Optional[str] = None

    @classmethod
    def unavailable(cls, reason: str) -> "Prediction":
        return cls(available=False, reason=reason)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "available": self.available,
            "time": self.time,
            "pace": self.pace,
            "reason": self.reason,
            "formatted_time": self.formatted_time,
            "formatted_pace": self.formatted_pace,
        }


@dataclass
class RacePredictions:
    """Predictions for all four canonical distances."""

    five_k: Prediction
    ten_k: Prediction
    half_marathon: Prediction
    marathon: Prediction

    def get(self, distance: PredictionDistance) -> Prediction:
        return getattr(self, distance.value)

    def items(self) -> Iterator[Tuple[PredictionDistance, Prediction]]:
        for distance in PredictionDistance:
            yield distance, self.get(distance)

    def to_dict(self) -> Dict[str, Any]:
        return {distance.value: prediction.to_dict() for distance, prediction in self.items()}


@dataclass
class HistoricalPoint:
    """Predicted race times (minutes) as they stood at ``date``."""

    date: date
    predictions: Dict[PredictionDistance, Optional[float]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "predictions": {
                distance.value: self.predictions.get(distance) for distance in PredictionDistance
            },
        }
