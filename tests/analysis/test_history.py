"""Tests for the historical prediction series."""

import pytest

from runnr_training.analysis.history import (
    calculate_historical_predictions,
    filter_outliers,
    plausible_time,
)
from runnr_training.config import Settings
from runnr_training.models.predictions import PredictionDistance


class TestPlausibleTime:
    """Tests for sanity bounds on predicted times."""

    def test_inside_bounds(self):
        assert plausible_time(PredictionDistance.FIVE_K, 25.0) == 25.0

    def test_bounds_are_exclusive(self):
        assert plausible_time(PredictionDistance.FIVE_K, 10.0) is None
        assert plausible_time(PredictionDistance.FIVE_K, 60.0) is None
        assert plausible_time(PredictionDistance.MARATHON, 120.0) is None

    def test_none_passes_through(self):
        assert plausible_time(PredictionDistance.TEN_K, None) is None


class TestFilterOutliers:
    """Tests for per-distance IQR filtering of the series."""

    def test_outlier_nulled_in_place(self):
        values = [20.0, 21.0, 21.0, 22.0, 22.0, 80.0]
        assert filter_outliers(values) == [20.0, 21.0, 21.0, 22.0, 22.0, None]

    def test_missing_values_kept(self):
        values = [None, 20.0, 21.0, 22.0]
        assert filter_outliers(values) == [None, 20.0, 21.0, 22.0]

    def test_short_series_unchanged(self):
        assert filter_outliers([10.0, 100.0]) == [10.0, 100.0]


class TestHistoricalPredictions:
    """Tests for calculate_historical_predictions."""

    def test_no_activities(self, now):
        assert calculate_historical_predictions([], now, Settings()) == []

    def test_series_is_oldest_first_and_ends_now(self, make_runs, now):
        runs = make_runs(50, every_days=4)

        points = calculate_historical_predictions(runs, now, Settings())

        assert len(points) > 1
        dates = [p.date for p in points]
        assert dates == sorted(dates)
        assert dates[-1] == now.date()

    def test_cutoffs_need_minimum_runs(self, make_runs, now):
        """Cutoffs with fewer than ten runs in their window are skipped."""
        runs = make_runs(50, every_days=4)

        points = calculate_historical_predictions(runs, now, Settings())

        # Runs cover 196 days; a cutoff 24 weeks back sees only 8 runs
        assert len(points) == 12

    def test_consistent_history_gives_flat_5k_series(self, make_runs, now):
        runs = make_runs(50, every_days=4)

        points = calculate_historical_predictions(runs, now, Settings())
        five_k = [p.predictions[PredictionDistance.FIVE_K] for p in points]

        assert all(value is not None for value in five_k)
        assert max(five_k) - min(five_k) < 1.5

    def test_gated_distances_are_none(self, make_runs, now):
        """The marathon needs 20 runs in the window; earlier cutoffs have fewer."""
        runs = make_runs(50, every_days=4)

        points = calculate_historical_predictions(runs, now, Settings())

        assert points[0].predictions[PredictionDistance.MARATHON] is None
        assert points[-1].predictions[PredictionDistance.MARATHON] is not None

    def test_step_setting(self, make_runs, now):
        runs = make_runs(50, every_days=4)

        every_two = calculate_historical_predictions(runs, now, Settings(history_step_weeks=2))
        every_four = calculate_historical_predictions(runs, now, Settings(history_step_weeks=4))

        assert len(every_four) < len(every_two)

    def test_max_weeks_back_setting(self, make_runs, now):
        runs = make_runs(50, every_days=4)

        points = calculate_historical_predictions(runs, now, Settings(history_max_weeks_back=4))

        assert len(points) == 3

    def test_to_dict(self, make_runs, now):
        points = calculate_historical_predictions(make_runs(12, every_days=3), now, Settings())

        data = points[-1].to_dict()

        assert data["date"] == now.date().isoformat()
        assert set(data["predictions"]) == {d.value for d in PredictionDistance}
        assert data["predictions"]["half_marathon"] is None
