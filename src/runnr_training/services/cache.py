"""In-memory cache for historical prediction series.

Replaying the predictor over a year of cutoffs is the most expensive
computation in the package, so the series is cached per athlete. An entry
stays valid while it is younger than the TTL and the athlete's activity
count has not changed.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from ..models.predictions import HistoricalPoint


logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    """A cached series with the time it was stored and the activity count it was built from."""

    cached_at: float
    activity_count: int
    points: List[HistoricalPoint]


class HistoricalPredictionCache:
    """
    Size and TTL bounded cache keyed by athlete id.

    Args:
        ttl_seconds: Entry lifetime
        max_entries: Maximum number of athletes kept; the oldest entry is evicted
        clock: Source of the current time in seconds (``time.time`` by default)
    """

    def __init__(
        self,
        ttl_seconds: float = 1800,
        max_entries: int = 128,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, athlete_id: str, activity_count: int) -> Optional[List[HistoricalPoint]]:
        """Get a cached series if it is fresh and built from the same number of activities."""
        entry = self._entries.get(athlete_id)
        if entry is None:
            return None

        if self._clock() - entry.cached_at >= self.ttl_seconds:
            # Expired, remove from cache
            del self._entries[athlete_id]
            return None

        if entry.activity_count != activity_count:
            return None

        return entry.points

    def set(self, athlete_id: str, activity_count: int, points: List[HistoricalPoint]) -> None:
        """Cache a series, evicting the oldest entry when full."""
        self._entries.pop(athlete_id, None)
        while self._entries and len(self._entries) >= self.max_entries:
            oldest = min(self._entries, key=lambda key: self._entries[key].cached_at)
            logger.debug(f"Evicting cached history for {oldest}")
            del self._entries[oldest]
        self._entries[athlete_id] = CacheEntry(
            cached_at=self._clock(),
            activity_count=activity_count,
            points=points,
        )

    def invalidate(self, athlete_id: str) -> None:
        self._entries.pop(athlete_id, None)

    def clear(self) -> None:
        self._entries.clear()
