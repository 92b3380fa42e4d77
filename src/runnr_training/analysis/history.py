"""
Historical race prediction series.

Replays the predictor at earlier cutoffs so the dashboard can chart how
predicted race times moved over the past year.
"""

import logging
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Sequence

from ..config import Settings, get_settings
from ..metrics.aggregation import runs_between
from ..models.activity import ActivityRecord
from ..models.predictions import HistoricalPoint, PredictionDistance
from ..utils.dates import days_between, ensure_utc
from .predictions import IQR_MULTIPLIER, PREDICTION_WINDOW_WEEKS, calculate_race_predictions


logger = logging.getLogger(__name__)

MIN_VALUES_FOR_OUTLIER_FILTER = 3


def plausible_time(distance: PredictionDistance, minutes: Optional[float]) -> Optional[float]:
    """Return ``minutes`` when it falls strictly inside the distance's sanity bounds."""
    if minutes is None:
        return None
    low, high = distance.plausible_minutes
    if low < minutes < high:
        return minutes
    return None


def filter_outliers(values: List[Optional[float]]) -> List[Optional[float]]:
    """
    Null out values outside 1.5x the interquartile range.

    None entries are kept in place and ignored when computing quartiles.
    Series with fewer than three values are returned unchanged.
    """
    present = sorted(v for v in values if v is not None)
    if len(present) < MIN_VALUES_FOR_OUTLIER_FILTER:
        return list(values)

    q1 = present[int(len(present) * 0.25)]
    q3 = present[int(len(present) * 0.75)]
    iqr = q3 - q1
    lower = q1 - IQR_MULTIPLIER * iqr
    upper = q3 + IQR_MULTIPLIER * iqr
    return [v if v is not None and lower <= v <= upper else None for v in values]


def calculate_historical_predictions(
    activities: Sequence[ActivityRecord],
    now: datetime,
    settings: Optional[Settings] = None,
) -> List[HistoricalPoint]:
    """
    Compute predicted race times at regular cutoffs before ``now``.

    Args:
        activities: Activity history
        now: Reference instant (the most recent cutoff)
        settings: Overrides for the look-back span, step and minimum runs

    Returns:
        HistoricalPoints, oldest first
    """
    settings = settings or get_settings()
    now = ensure_utc(now)
    runs = runs_between(activities, None, now)
    if not runs:
        return []

    weeks_of_history = days_between(runs[0].start_date, now) // 7
    max_weeks_back = min(settings.history_max_weeks_back, weeks_of_history)

    points: List[HistoricalPoint] = []
    for weeks_back in range(0, max_weeks_back + 1, settings.history_step_weeks):
        cutoff = now - timedelta(weeks=weeks_back)
        window = runs_between(runs, cutoff - timedelta(weeks=PREDICTION_WINDOW_WEEKS), cutoff)
        if len(window) < settings.history_min_runs:
            continue

        predictions = calculate_race_predictions(window, cutoff)
        points.append(HistoricalPoint(
            date=cutoff.date(),
            predictions={
                distance: plausible_time(distance, prediction.time if prediction.available else None)
                for distance, prediction in predictions.items()
            },
        ))

    points.reverse()

    filtered: Dict[PredictionDistance, List[Optional[float]]] = {
        distance: filter_outliers([point.predictions[distance] for point in points])
        for distance in PredictionDistance
    }
    for index, point in enumerate(points):
        for distance in PredictionDistance:
            point.predictions[distance] = filtered[distance][index]

    logger.debug(f"Historical series: {len(points)} points over {max_weeks_back} weeks")
    return points
