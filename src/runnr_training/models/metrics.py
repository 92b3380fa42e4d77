"""Training metrics derived from a window of activity history."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from ..utils.formatting import format_pace_range


class WeeklyTrend(str, Enum):
    """Direction of weekly volume across the trailing four weeks."""
    INCREASING = "increasing"
    STABLE = "stable"
    DECREASING = "decreasing"


@dataclass(frozen=True)
class PaceRange:
    """A pace interval in min/km (``min`` is the faster bound)."""

    min: float
    max: float

    @property
    def formatted(self) -> str:
        return format_pace_range(self.min, self.max)

    def to_dict(self) -> Dict[str, Any]:
        return {"min": round(self.min, 3), "max": round(self.max, 3), "formatted": self.formatted}


@dataclass(frozen=True)
class PaceZones:
    """Five training pace zones derived from one reference pace."""

    easy: PaceRange
    tempo: PaceRange
    threshold: PaceRange
    interval: PaceRange
    long: PaceRange

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "easy": self.easy.to_dict(),
            "tempo": self.tempo.to_dict(),
            "threshold": self.threshold.to_dict(),
            "interval": self.interval.to_dict(),
            "long": self.long.to_dict(),
        }


@dataclass
class TrainingMetrics:
    """
    Summary of a trailing window of runs.

    Attributes:
        recent_run_count: Number of runs in the window
        weekly_kilometers: Average kilometers per week over the window
        avg_pace: Average pace in min/km (0 when there is no distance)
        longest_run: Longest single run in km
    """

    recent_run_count: int
    weekly_kilometers: float
    avg_pace: float
    longest_run: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "recent_run_count": self.recent_run_count,
            "weekly_kilometers": round(self.weekly_kilometers, 2),
            "avg_pace": round(self.avg_pace, 3),
            "longest_run": round(self.longest_run, 2),
        }


@dataclass
class DetailedTrainingMetrics(TrainingMetrics):
    """Training metrics enriched with zones, trend, consistency and improvement."""

    pace_zones: Optional[PaceZones] = None
    weekly_trend: WeeklyTrend = WeeklyTrend.STABLE
    consistency_score: float = 0.0  # 0-100
    avg_long_run: float = 0.0
    recent_pace_improvement: float = 0.0  # percentage, positive = faster

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({
            "pace_zones": self.pace_zones.to_dict() if self.pace_zones else None,
            "weekly_trend": self.weekly_trend.value,
            "consistency_score": round(self.consistency_score, 1),
            "avg_long_run": round(self.avg_long_run, 2),
            "recent_pace_improvement": round(self.recent_pace_improvement, 2),
        })
        return data
