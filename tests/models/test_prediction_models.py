"""Tests for prediction models."""

from datetime import date

from runnr_training.models.predictions import (
    HistoricalPoint,
    Prediction,
    PredictionDistance,
    RacePredictions,
)


class TestPredictionDistance:
    def test_thresholds(self):
        assert [d.min_runs for d in PredictionDistance] == [5, 10, 20, 20]
        assert [d.distance_km for d in PredictionDistance] == [5.0, 10.0, 21.1, 42.2]


class TestPrediction:
    """Tests for Prediction and RacePredictions."""

    def test_unavailable(self):
        prediction = Prediction.unavailable("Insufficient data for prediction")

        assert prediction.available is False
        assert prediction.time is None
        assert prediction.to_dict()["reason"] == "Insufficient data for prediction"

    def test_lookup_by_distance(self):
        five_k = Prediction(available=True, time=25.0, pace=5.0, formatted_time="25:00", formatted_pace="5:00 min/km")
        missing = Prediction.unavailable("Need 10 runs for 10K prediction")
        predictions = RacePredictions(five_k=five_k, ten_k=missing, half_marathon=missing, marathon=missing)

        assert predictions.get(PredictionDistance.FIVE_K) is five_k
        assert [d for d, _ in predictions.items()] == list(PredictionDistance)


class TestHistoricalPoint:
    def test_missing_distances_serialize_as_none(self):
        point = HistoricalPoint(date=date(2025, 5, 1), predictions={PredictionDistance.FIVE_K: 24.5})

        assert point.to_dict() == {
            "date": "2025-05-01",
            "predictions": {"five_k": 24.5, "ten_k": None, "half_marathon": None, "marathon": None},
        }
