"""Tests for the RacePredictionService and its history cache."""

import pytest

from runnr_training.config import Settings
from runnr_training.services.cache import HistoricalPredictionCache
from runnr_training.services.prediction_service import (
    RacePredictionService,
    get_race_prediction_service,
)


class FakeClock:
    """Manually advanced clock for cache expiry tests."""

    def __init__(self, start: float = 1000.0):
        self.current = start

    def __call__(self) -> float:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return HistoricalPredictionCache(ttl_seconds=1800, max_entries=2, clock=clock)


@pytest.fixture
def service(cache):
    return RacePredictionService(settings=Settings(), cache=cache)


class TestHistoricalPredictionCache:
    """Tests for HistoricalPredictionCache."""

    def test_miss_when_empty(self, cache):
        assert cache.get("athlete-1", 10) is None

    def test_hit_within_ttl(self, cache, clock):
        cache.set("athlete-1", 10, [])
        clock.advance(1799)

        assert cache.get("athlete-1", 10) == []

    def test_expires_after_ttl(self, cache, clock):
        cache.set("athlete-1", 10, [])
        clock.advance(1800)

        assert cache.get("athlete-1", 10) is None
        assert len(cache) == 0

    def test_activity_count_change_misses(self, cache):
        cache.set("athlete-1", 10, [])

        assert cache.get("athlete-1", 11) is None

    def test_oldest_entry_evicted(self, cache, clock):
        cache.set("athlete-1", 1, [])
        clock.advance(1)
        cache.set("athlete-2", 1, [])
        clock.advance(1)
        cache.set("athlete-3", 1, [])

        assert len(cache) == 2
        assert cache.get("athlete-1", 1) is None
        assert cache.get("athlete-3", 1) == []

    def test_invalidate(self, cache):
        cache.set("athlete-1", 1, [])
        cache.invalidate("athlete-1")

        assert cache.get("athlete-1", 1) is None


class TestRacePredictionService:
    """Tests for RacePredictionService."""

    def test_history_is_cached(self, service, make_runs, now):
        runs = make_runs(30, every_days=4)

        first = service.get_history("athlete-1", runs, now)
        second = service.get_history("athlete-1", runs, now)

        assert first
        assert second is first

    def test_new_activity_recomputes(self, service, make_runs, make_run, now):
        runs = make_runs(30, every_days=4)
        first = service.get_history("athlete-1", runs, now)

        second = service.get_history("athlete-1", runs + [make_run(0.5)], now)

        assert second is not first

    def test_expired_history_recomputes(self, service, clock, make_runs, now):
        runs = make_runs(30, every_days=4)
        first = service.get_history("athlete-1", runs, now)
        clock.advance(1800)

        assert service.get_history("athlete-1", runs, now) is not first

    def test_report(self, service, make_runs, now):
        runs = make_runs(20, every_days=8)

        report = service.get_report("athlete-1", runs, now)

        assert report.predictions.marathon.available is True
        assert report.training_metrics.recent_run_count == 20
        assert report.training_metrics.weekly_kilometers == pytest.approx(100.0 / 24)
        assert report.history[-1].date == now.date()

        data = report.to_dict()
        assert set(data) == {"predictions", "training_metrics", "history"}

    def test_supplied_cache_is_kept(self, clock):
        """An empty cache passed in is used as-is, clock and TTL included."""
        cache = HistoricalPredictionCache(ttl_seconds=5, clock=clock)

        service = RacePredictionService(settings=Settings(), cache=cache)

        assert service.cache is cache
        assert service.cache.ttl_seconds == 5

    def test_settings_drive_cache(self):
        service = RacePredictionService(
            settings=Settings(history_cache_ttl_seconds=60, history_cache_max_entries=5)
        )

        assert service.cache.ttl_seconds == 60
        assert service.cache.max_entries == 5

    def test_singleton(self):
        assert get_race_prediction_service() is get_race_prediction_service()
