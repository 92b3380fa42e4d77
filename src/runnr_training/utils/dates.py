"""Date and time helpers.

Every window computation in the package takes an explicit ``now``; these
helpers only normalise timestamps so that naive and aware values compare
safely.
"""

from datetime import date, datetime, timezone
from typing import Union

SECONDS_PER_DAY = 24 * 60 * 60


def ensure_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime (naive values are taken as UTC)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_timestamp(value: Union[str, datetime, date]) -> datetime:
    """
    Parse an ISO-8601 timestamp (Strava style, trailing 'Z') into aware UTC.

    Raises:
        ValueError: If the string cannot be parsed.
    """
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    try:
        return ensure_utc(datetime.fromisoformat(value.strip().replace("Z", "+00:00")))
    except ValueError as err:
        raise ValueError(f"Invalid timestamp: {value}") from err


def days_between(earlier: datetime, later: datetime) -> int:
    """Whole days elapsed from ``earlier`` to ``later`` (floored)."""
    delta = ensure_utc(later) - ensure_utc(earlier)
    return int(delta.total_seconds() // SECONDS_PER_DAY)


def to_date(value: Union[datetime, date]) -> date:
    """Calendar date of a datetime (UTC) or date."""
    if isinstance(value, datetime):
        return ensure_utc(value).date()
    return value
