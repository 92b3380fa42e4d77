"""
Fitness level assessment.

Scores current training against the target race distance (0-100) and maps
the score onto a coarse tier used to tailor the plan's recommendations.
"""

from dataclasses import dataclass
from typing import Any, Dict

from ..models.metrics import DetailedTrainingMetrics
from ..models.plans import FitnessLevel


ADVANCED_THRESHOLD = 75
INTERMEDIATE_THRESHOLD = 50

# (ratio threshold, points), checked in order
WEEKLY_VOLUME_POINTS = [(2.5, 40), (1.8, 30), (1.2, 20)]
WEEKLY_VOLUME_FLOOR_POINTS = 10
LONG_RUN_POINTS = [(0.7, 25), (0.5, 18), (0.3, 10)]
LONG_RUN_FLOOR_POINTS = 5
RUN_COUNT_POINTS = [(16, 15), (12, 10), (8, 5)]

CONSISTENCY_MAX_POINTS = 20
IMPROVEMENT_MIN_POINTS = -5
IMPROVEMENT_MAX_POINTS = 10


@dataclass
class FitnessAssessment:
    """Fitness score and the tier it maps to."""

    score: float
    level: FitnessLevel

    def to_dict(self) -> Dict[str, Any]:
        return {"score": round(self.score, 1), "level": self.level.value}


def _tiered_points(value: float, tiers, floor: int = 0) -> int:
    for threshold, points in tiers:
        if value >= threshold:
            return points
    return floor


def calculate_fitness_score(metrics: DetailedTrainingMetrics, race_distance_km: float) -> float:
    """
    Weighted fitness score against a race distance.

    Weekly volume ratio (up to 40), long run ratio (up to 25),
    consistency (up to 20), run count (up to 15) and recent pace
    improvement clamped to [-5, +10].
    """
    score = float(_tiered_points(
        metrics.weekly_kilometers / race_distance_km, WEEKLY_VOLUME_POINTS, WEEKLY_VOLUME_FLOOR_POINTS
    ))
    score += _tiered_points(metrics.avg_long_run / race_distance_km, LONG_RUN_POINTS, LONG_RUN_FLOOR_POINTS)
    score += (metrics.consistency_score / 100) * CONSISTENCY_MAX_POINTS
    score += _tiered_points(metrics.recent_run_count, RUN_COUNT_POINTS)
    score += max(IMPROVEMENT_MIN_POINTS, min(IMPROVEMENT_MAX_POINTS, metrics.recent_pace_improvement))
    return score


def classify_fitness_score(score: float) -> FitnessLevel:
    if score >= ADVANCED_THRESHOLD:
        return FitnessLevel.ADVANCED
    if score >= INTERMEDIATE_THRESHOLD:
        return FitnessLevel.INTERMEDIATE
    return FitnessLevel.BEGINNER


def assess_fitness(metrics: DetailedTrainingMetrics, race_distance_km: float) -> FitnessAssessment:
    score = calculate_fitness_score(metrics, race_distance_km)
    return FitnessAssessment(score=score, level=classify_fitness_score(score))


def assess_fitness_level(metrics: DetailedTrainingMetrics, race_distance_km: float) -> FitnessLevel:
    """Fitness tier (Beginner/Intermediate/Advanced) for a race distance."""
    return assess_fitness(metrics, race_distance_km).level
