"""Utility helpers for formatting and date handling."""

from .dates import days_between, ensure_utc, parse_timestamp, to_date
from .formatting import (
    format_pace,
    format_pace_range,
    format_pace_value,
    format_race_time,
    parse_pace,
    parse_time_string,
)

__all__ = [
    "days_between",
    "ensure_utc",
    "parse_timestamp",
    "to_date",
    "format_pace",
    "format_pace_range",
    "format_pace_value",
    "format_race_time",
    "parse_pace",
    "parse_time_string",
]
