"""Tests for fitness level assessment."""

import pytest

from runnr_training.analysis.fitness import (
    assess_fitness,
    assess_fitness_level,
    calculate_fitness_score,
    classify_fitness_score,
)
from runnr_training.models.plans import FitnessLevel


class TestFitnessScore:
    """Tests for the weighted fitness score."""

    def test_maximum_score(self, make_metrics):
        """High volume, long runs, full consistency and frequency score 100."""
        metrics = make_metrics(
            weekly_kilometers=30.0,
            avg_long_run=8.0,
            consistency_score=100.0,
            recent_run_count=16,
        )
        assert calculate_fitness_score(metrics, 10.0) == pytest.approx(100.0)

    def test_floor_points(self, make_metrics):
        """Minimal training still earns the volume and long run floors."""
        metrics = make_metrics(
            weekly_kilometers=5.0,
            avg_long_run=2.0,
            consistency_score=25.0,
            recent_run_count=4,
        )
        assert calculate_fitness_score(metrics, 10.0) == pytest.approx(10 + 5 + 5)

    def test_improvement_bonus_clamped(self, make_metrics):
        base = make_metrics(recent_pace_improvement=0.0)
        fast = make_metrics(recent_pace_improvement=50.0)
        slow = make_metrics(recent_pace_improvement=-50.0)

        base_score = calculate_fitness_score(base, 10.0)

        assert calculate_fitness_score(fast, 10.0) == pytest.approx(base_score + 10)
        assert calculate_fitness_score(slow, 10.0) == pytest.approx(base_score - 5)

    def test_longer_race_lowers_score(self, make_metrics):
        metrics = make_metrics()
        assert calculate_fitness_score(metrics, 42.2) < calculate_fitness_score(metrics, 5.0)


class TestFitnessLevel:
    """Tests for tier classification."""

    @pytest.mark.parametrize(
        "score, level",
        [
            (75.0, FitnessLevel.ADVANCED),
            (74.9, FitnessLevel.INTERMEDIATE),
            (50.0, FitnessLevel.INTERMEDIATE),
            (49.9, FitnessLevel.BEGINNER),
        ],
    )
    def test_thresholds(self, score, level):
        assert classify_fitness_score(score) == level

    def test_intermediate_runner(self, make_metrics):
        metrics = make_metrics(
            weekly_kilometers=15.0,
            avg_long_run=5.0,
            consistency_score=50.0,
            recent_run_count=8,
        )
        assessment = assess_fitness(metrics, 10.0)

        assert assessment.score == pytest.approx(20 + 18 + 10 + 5)
        assert assessment.level == FitnessLevel.INTERMEDIATE
        assert assess_fitness_level(metrics, 10.0) == FitnessLevel.INTERMEDIATE
        assert assessment.to_dict() == {"score": 53.0, "level": "Intermediate"}
