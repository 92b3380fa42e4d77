"""
Race Performance Prediction

Estimates race times for 5K, 10K, half marathon and marathon from recent
run history:

1. Assess training load (weekly volume, frequency, form trend)
2. Use the best pace from runs of a similar distance when there are any
3. Otherwise take the fastest outlier-filtered pace and extrapolate it to
   the target distance with a Riegel-style exponent
4. Adjust for training load and form

Insufficient history is reported through unavailable predictions, never
through exceptions.
"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional, Sequence, Tuple

from ..metrics.aggregation import runs_between
from ..metrics.load import FormTrend, TrainingLoad, analyze_training_load
from ..models.activity import ActivityRecord
from ..models.predictions import Prediction, PredictionDistance, RacePredictions
from ..utils.dates import days_between, ensure_utc
from ..utils.formatting import format_pace, format_race_time


logger = logging.getLogger(__name__)

PREDICTION_WINDOW_WEEKS = 24
MIN_RUNS_FOR_ANY_PREDICTION = PredictionDistance.FIVE_K.min_runs

# Extrapolation candidate filters
MIN_SOURCE_DISTANCE_KM = 1.0
MAX_SOURCE_DISTANCE_KM = 50.0
MIN_VALID_PACE = 2.5   # min/km
MAX_VALID_PACE = 12.0  # min/km
FALLBACK_RECENT_RUNS = 5

# Recency weight: 1.0 today, decaying to a 0.3 floor
AGE_WEIGHT_HORIZON_DAYS = 90
AGE_WEIGHT_DECAY = 0.7
AGE_WEIGHT_FLOOR = 0.3

IQR_MULTIPLIER = 1.5

# Riegel: T2 = T1 * (D2/D1)^1.06, so pace scales with (D2/D1)^0.06
RIEGEL_PACE_EXPONENT = 0.06
EXTRAPOLATION_PENALTY_RATIO = 4.0
EXTRAPOLATION_PENALTY_RATE = 0.02

TRAINING_ADJUSTMENT_RATE = 0.05
FORM_ADJUSTMENTS = {
    FormTrend.IMPROVING: 0.98,
    FormTrend.STABLE: 1.0,
    FormTrend.DECLINING: 1.02,
}

INSUFFICIENT_DATA_REASON = "Insufficient data for prediction"


@dataclass
class PaceCandidate:
    """A run eligible as an extrapolation source."""

    distance_km: float
    pace: float
    days_ago: int
    weight: float


def get_similar_distance_range(target_km: float) -> Tuple[float, float]:
    """Distance window (km) treated as "similar" to the target distance."""
    if target_km <= 5:
        return target_km * 0.8, target_km * 1.2
    if target_km <= 10:
        return target_km * 0.7, target_km * 1.3
    if target_km <= 21.1:
        return target_km * 0.6, target_km * 1.4
    return target_km * 0.5, target_km * 1.5


def get_distance_adjustment_factor(from_km: float, to_km: float) -> float:
    """
    Pace multiplier for moving from one distance to another.

    Uses the Riegel pace exponent, plus an extra fatigue penalty when
    extrapolating more than four times the source distance.
    """
    ratio = to_km / from_km
    factor = ratio ** RIEGEL_PACE_EXPONENT
    if ratio > EXTRAPOLATION_PENALTY_RATIO:
        factor *= 1 + (math.log(ratio) - math.log(EXTRAPOLATION_PENALTY_RATIO)) * EXTRAPOLATION_PENALTY_RATE
    return factor


def calculate_age_weight(days_ago: int) -> float:
    """Recency weight of a run: linear decay over 90 days, floored at 0.3."""
    return max(AGE_WEIGHT_FLOOR, 1 - (days_ago / AGE_WEIGHT_HORIZON_DAYS) * AGE_WEIGHT_DECAY)


def filter_pace_outliers(candidates: List[PaceCandidate]) -> List[PaceCandidate]:
    """
    Drop candidates whose raw pace falls outside 1.5x the interquartile range.

    Falls back to the five most recent candidates when nothing survives.
    Candidates must be ordered most recent first.
    """
    if not candidates:
        return []
    paces = sorted(c.pace for c in candidates)
    q1 = paces[int(len(paces) * 0.25)]
    q3 = paces[int(len(paces) * 0.75)]
    iqr = q3 - q1
    lower = q1 - IQR_MULTIPLIER * iqr
    upper = q3 + IQR_MULTIPLIER * iqr

    survivors = [c for c in candidates if lower <= c.pace <= upper]
    if not survivors:
        survivors = candidates[:FALLBACK_RECENT_RUNS]
    return survivors


def collect_pace_candidates(activities: Sequence[ActivityRecord], now: datetime) -> List[PaceCandidate]:
    """Runs usable for extrapolation, most recent first."""
    candidates = []
    for run in activities:
        pace = run.pace_min_per_km
        if pace is None:
            continue
        if not MIN_SOURCE_DISTANCE_KM < run.distance_km < MAX_SOURCE_DISTANCE_KM:
            continue
        if not MIN_VALID_PACE < pace < MAX_VALID_PACE:
            continue
        days_ago = days_between(run.start_date, now)
        candidates.append(PaceCandidate(
            distance_km=run.distance_km,
            pace=pace,
            days_ago=days_ago,
            weight=calculate_age_weight(days_ago),
        ))
    candidates.sort(key=lambda c: c.days_ago)
    return candidates


def estimate_pace_from_training(
    activities: Sequence[ActivityRecord],
    target_km: float,
    now: datetime,
) -> Optional[float]:
    """
    Extrapolate a target-distance pace from general training.

    Args:
        activities: Runs in the prediction window
        target_km: Target race distance
        now: Reference instant for run ages

    Returns:
        Pace in min/km, or None when no run qualifies
    """
    candidates = filter_pace_outliers(collect_pace_candidates(activities, now))
    if not candidates:
        return None

    best = min(candidates, key=lambda c: c.pace)
    factor = get_distance_adjustment_factor(best.distance_km, target_km)
    logger.debug(
        f"Extrapolating {target_km}km from {best.distance_km:.2f}km at {best.pace:.2f} min/km "
        f"(factor {factor:.4f})"
    )
    return best.pace * factor


def best_similar_distance_pace(activities: Sequence[ActivityRecord], target_km: float) -> Optional[float]:
    """Fastest pace among runs inside the target's similar-distance window."""
    low_km, high_km = get_similar_distance_range(target_km)
    paces = [
        run.pace_min_per_km
        for run in activities
        if run.moving_time_s > 0
        and low_km <= run.distance_km <= high_km
        and run.pace_min_per_km is not None
    ]
    return min(paces) if paces else None


def calculate_distance_prediction(
    activities: Sequence[ActivityRecord],
    target_km: float,
    now: datetime,
    training_load: Optional[TrainingLoad] = None,
) -> Prediction:
    """
    Predict time and pace for one target distance.

    Args:
        activities: Runs in the prediction window
        target_km: Target race distance in km
        now: Reference instant
        training_load: Precomputed load; derived from ``activities`` when omitted

    Returns:
        Prediction (unavailable when no pace could be derived)
    """
    now = ensure_utc(now)
    if training_load is None:
        training_load = analyze_training_load(activities, now)

    pace = best_similar_distance_pace(activities, target_km)
    if pace is None:
        pace = estimate_pace_from_training(activities, target_km, now)
    else:
        logger.debug(f"Using similar-distance pace {pace:.2f} min/km for {target_km}km")

    if pace is None:
        return Prediction.unavailable(INSUFFICIENT_DATA_REASON)

    pace *= 1 + (training_load.training_stress - 0.5) * TRAINING_ADJUSTMENT_RATE
    pace *= FORM_ADJUSTMENTS[training_load.form_trend]

    predicted_time = pace * target_km
    return Prediction(
        available=True,
        time=predicted_time,
        pace=pace,
        reason="",
        formatted_time=format_race_time(predicted_time),
        formatted_pace=format_pace(pace),
    )


def calculate_race_predictions(activities: Sequence[ActivityRecord], now: datetime) -> RacePredictions:
    """
    Predict all four canonical race distances.

    Only runs in the trailing 24 weeks count. Each distance is offered
    once the window holds its minimum number of runs (5 for 5K, 10 for
    10K, 20 for half and full marathon).

    Args:
        activities: Activity history
        now: Reference instant

    Returns:
        RacePredictions
    """
    now = ensure_utc(now)
    recent = runs_between(activities, now - timedelta(weeks=PREDICTION_WINDOW_WEEKS), now)
    run_count = len(recent)

    if run_count < MIN_RUNS_FOR_ANY_PREDICTION:
        reason = (
            f"Need at least {MIN_RUNS_FOR_ANY_PREDICTION} runs in the last "
            f"{PREDICTION_WINDOW_WEEKS} weeks. Currently have {run_count}."
        )
        logger.debug(f"Predictions unavailable: {run_count} runs in window")
        return RacePredictions(**{d.value: Prediction.unavailable(reason) for d in PredictionDistance})

    training_load = analyze_training_load(recent, now)
    predictions = {}
    for distance in PredictionDistance:
        if run_count < distance.min_runs:
            predictions[distance.value] = Prediction.unavailable(
                f"Need {distance.min_runs} runs for {distance.display_name} prediction"
            )
            continue
        predictions[distance.value] = calculate_distance_prediction(
            recent, distance.distance_km, now, training_load
        )

    return RacePredictions(**predictions)
