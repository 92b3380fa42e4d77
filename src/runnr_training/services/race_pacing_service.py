"""Race pacing service for generating kilometer-by-kilometer pacing plans.

This service handles:
- Split generation for even, negative and positive strategies
- Late-race fatigue modulation for half marathons and longer
- Strategy and distance-specific race execution recommendations
"""

import logging
import math
from typing import List, Optional, Tuple

from ..models.race_pacing import PacingSplit, PacingStrategy, PacingStrategyType
from ..utils.formatting import format_pace, format_race_time


logger = logging.getLogger(__name__)


# Strategy pace multipliers: (first half, second half)
STRATEGY_MULTIPLIERS = {
    PacingStrategyType.EVEN: (1.0, 1.0),
    PacingStrategyType.NEGATIVE: (1.02, 0.98),
    PacingStrategyType.POSITIVE: (0.98, 1.02),
}

STRATEGY_NOTES = {
    PacingStrategyType.EVEN: ("Even pace", "Even pace"),
    PacingStrategyType.NEGATIVE: ("Start conservative", "Push harder"),
    PacingStrategyType.POSITIVE: ("Fast start", "Maintain effort"),
}

# Fatigue modelling for long races
FATIGUE_MIN_DISTANCE_KM = 21.1
FATIGUE_ONSET_RATIO = 0.75
FATIGUE_RATE = 0.04

HALFWAY_CHECKPOINT_MIN_KM = 10.0

STRATEGY_RECOMMENDATIONS = {
    PacingStrategyType.EVEN: [
        "Even pacing is the most efficient strategy for most runners",
        "Focus on maintaining consistent effort throughout",
    ],
    PacingStrategyType.NEGATIVE: [
        "Negative split strategy: Start controlled, finish strong",
        "Save energy early to push harder in the second half",
    ],
    PacingStrategyType.POSITIVE: [
        "Positive split (not recommended): High injury/burnout risk",
        "Only use if you know your fitness can handle it",
    ],
}


class RacePacingService:
    """Service for generating race pacing strategies."""

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    def generate_pacing_strategy(
        self,
        distance_km: float,
        base_pace: float,
        strategy: PacingStrategyType = PacingStrategyType.EVEN,
    ) -> PacingStrategy:
        """
        Generate a pacing strategy for a race.

        Args:
            distance_km: Race distance in kilometers
            base_pace: Reference pace in min/km
            strategy: Pacing style

        Returns:
            PacingStrategy with one split per kilometer plus any fractional remainder

        Raises:
            ValueError: If distance or pace is not positive
        """
        if distance_km <= 0:
            raise ValueError(f"Race distance must be positive, got {distance_km}")
        if base_pace <= 0:
            raise ValueError(f"Base pace must be positive, got {base_pace}")
        strategy = PacingStrategyType(strategy)

        splits = self._generate_splits(distance_km, base_pace, strategy)
        target_time = splits[-1].cumulative_time

        self.logger.info(
            f"Generated {strategy.value} pacing for {distance_km}km: "
            f"{len(splits)} splits, {format_race_time(target_time)}"
        )

        return PacingStrategy(
            race_distance=distance_km,
            base_pace=base_pace,
            target_time=target_time,
            average_pace=target_time / distance_km,
            strategy=strategy,
            splits=splits,
            recommendations=self._generate_recommendations(distance_km, strategy),
        )

    def _generate_splits(
        self,
        distance_km: float,
        base_pace: float,
        strategy: PacingStrategyType,
    ) -> List[PacingSplit]:
        """Generate splits, accumulating distance and time split by split."""
        splits = []
        num_splits = int(math.ceil(distance_km))
        whole_kms = int(math.floor(distance_km))
        cumulative_distance = 0.0
        cumulative_time = 0.0

        for split_num in range(1, num_splits + 1):
            split_distance = 1.0 if split_num <= whole_kms else distance_km % 1
            target_pace, note = self._split_pace(split_num, num_splits, distance_km, base_pace, strategy)

            split_time = target_pace * split_distance
            cumulative_distance += split_distance
            cumulative_time += split_time

            splits.append(PacingSplit(
                split_number=split_num,
                distance=split_distance,
                target_pace=target_pace,
                target_time=split_time,
                cumulative_distance=cumulative_distance,
                cumulative_time=cumulative_time,
                pace_formatted=format_pace(target_pace),
                split_time_formatted=format_race_time(split_time),
                cumulative_time_formatted=format_race_time(cumulative_time),
                note=note,
            ))

        return splits

    def _split_pace(
        self,
        split_num: int,
        total_splits: int,
        distance_km: float,
        base_pace: float,
        strategy: PacingStrategyType,
    ) -> Tuple[float, str]:
        """
        Target pace and note for one split.

        Strategy modulation switches at the halfway split; races of a half
        marathon or longer add a fatigue multiplier past 75% completion.
        """
        progress = split_num / total_splits
        half = 0 if progress <= 0.5 else 1

        pace = base_pace * STRATEGY_MULTIPLIERS[strategy][half]
        note = STRATEGY_NOTES[strategy][half]

        if distance_km >= FATIGUE_MIN_DISTANCE_KM and progress > FATIGUE_ONSET_RATIO:
            pace *= 1 + (progress - FATIGUE_ONSET_RATIO) * FATIGUE_RATE
            if strategy == PacingStrategyType.EVEN:
                note = "Manage fatigue"

        return pace, note

    def _generate_recommendations(
        self,
        distance_km: float,
        strategy: PacingStrategyType,
    ) -> List[str]:
        """Race execution tips for the strategy and distance."""
        recommendations = list(STRATEGY_RECOMMENDATIONS[strategy])

        if distance_km >= FATIGUE_MIN_DISTANCE_KM:
            recommendations.append("Plan hydration every 5km for optimal performance")
            recommendations.append("Consider fuel (gel/chews) around 45-60 minutes in")

        if distance_km >= HALFWAY_CHECKPOINT_MIN_KM:
            recommendations.append("Mental checkpoint: Focus on form and breathing at halfway point")

        recommendations.append("Use your watch/app to track pace but focus on effort feel")
        recommendations.append("Start behind the pack to avoid going out too fast")
        return recommendations


# Singleton instance
_race_pacing_service: Optional[RacePacingService] = None


def get_race_pacing_service() -> RacePacingService:
    """Get the race pacing service singleton."""
    global _race_pacing_service
    if _race_pacing_service is None:
        _race_pacing_service = RacePacingService()
    return _race_pacing_service


def generate_pacing_strategy(
    distance_km: float,
    base_pace: float,
    strategy: PacingStrategyType = PacingStrategyType.EVEN,
) -> PacingStrategy:
    """Convenience wrapper around the shared RacePacingService."""
    return get_race_pacing_service().generate_pacing_strategy(distance_km, base_pace, strategy)
