"""Activity records synced from Strava."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from ..exceptions import ActivityParseError
from ..utils.dates import ensure_utc, parse_timestamp

RUN_ACTIVITY_TYPE = "Run"


@dataclass(frozen=True)
class ActivityRecord:
    """
    One completed activity.

    Attributes:
        distance_m: Distance in meters
        moving_time_s: Moving time in seconds
        start_date: Start timestamp (aware, UTC)
        activity_type: Strava activity type ("Run", "Ride", ...)
        elevation_gain_m: Total elevation gain in meters
        activity_id: Optional Strava activity ID
    """

    distance_m: float
    moving_time_s: float
    start_date: datetime
    activity_type: str = RUN_ACTIVITY_TYPE
    elevation_gain_m: float = 0.0
    activity_id: Optional[int] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "start_date", ensure_utc(self.start_date))

    @property
    def distance_km(self) -> float:
        """Distance in kilometers."""
        return self.distance_m / 1000

    @property
    def moving_time_min(self) -> float:
        """Moving time in minutes."""
        return self.moving_time_s / 60

    @property
    def is_run(self) -> bool:
        return self.activity_type == RUN_ACTIVITY_TYPE

    @property
    def pace_min_per_km(self) -> Optional[float]:
        """Average pace in min/km, or None when distance or time is not positive."""
        if self.distance_m <= 0 or self.moving_time_s <= 0:
            return None
        return self.moving_time_min / self.distance_km

    @classmethod
    def from_strava(cls, payload: Dict[str, Any]) -> "ActivityRecord":
        """
        Build a record from a Strava activity summary.

        Raises:
            ActivityParseError: If a required field is missing or malformed.
        """
        for field in ("distance", "moving_time", "start_date"):
            if payload.get(field) is None:
                raise ActivityParseError(
                    f"Activity is missing '{field}'",
                    field=field,
                    details={"activity_id": payload.get("id")},
                )
        try:
            start_date = parse_timestamp(payload["start_date"])
            return cls(
                distance_m=float(payload["distance"]),
                moving_time_s=float(payload["moving_time"]),
                start_date=start_date,
                activity_type=payload.get("type") or payload.get("sport_type") or RUN_ACTIVITY_TYPE,
                elevation_gain_m=float(payload.get("total_elevation_gain") or 0.0),
                activity_id=payload.get("id"),
            )
        except (TypeError, ValueError) as e:
            raise ActivityParseError(
                f"Malformed activity: {e}",
                details={"activity_id": payload.get("id")},
            ) from e

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a Strava-shaped dictionary."""
        return {
            "id": self.activity_id,
            "distance": self.distance_m,
            "moving_time": self.moving_time_s,
            "start_date": self.start_date.isoformat().replace("+00:00", "Z"),
            "type": self.activity_type,
            "total_elevation_gain": self.elevation_gain_m,
        }


def load_activities(payloads: Iterable[Dict[str, Any]]) -> List[ActivityRecord]:
    """Parse Strava activity summaries and return them ordered by start time."""
    records = [ActivityRecord.from_strava(p) for p in payloads]
    records.sort(key=lambda a: a.start_date)
    return records
