"""Formatting helpers for race times and paces.

All inputs are expressed in minutes (race times) or minutes per kilometer
(paces), which is the unit the prediction and planning code works in.
"""


def _split_minutes(total_minutes: float) -> tuple[int, int, int]:
    """Split a minute value into whole (hours, minutes, seconds)."""
    total_seconds = int(round(total_minutes * 60))
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return hours, minutes, seconds


def format_race_time(total_minutes: float) -> str:
    """Format a race time given in minutes as H:MM:SS or MM:SS."""
    hours, minutes, seconds = _split_minutes(total_minutes)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


def format_pace_value(pace_min_per_km: float) -> str:
    """Format a pace in min/km as M:SS."""
    hours, minutes, seconds = _split_minutes(pace_min_per_km)
    return f"{hours * 60 + minutes}:{seconds:02d}"


def format_pace(pace_min_per_km: float) -> str:
    """Format a pace in min/km as 'M:SS min/km'."""
    return f"{format_pace_value(pace_min_per_km)} min/km"


def format_pace_range(min_pace: float, max_pace: float) -> str:
    """Format a pace range for training zones, e.g. '5:00-5:30/km'."""
    return f"{format_pace_value(min_pace)}-{format_pace_value(max_pace)}/km"


def parse_pace(pace_str: str) -> float:
    """
    Parse a 'M:SS' pace string (optionally suffixed with '/km') to min/km.

    Raises:
        ValueError: If the string is not a valid pace.
    """
    cleaned = pace_str.strip().lower().replace("min/km", "").replace("/km", "").strip()
    parts = cleaned.split(":")
    if len(parts) == 1:
        value = float(parts[0])
    elif len(parts) == 2:
        minutes, seconds = int(parts[0]), float(parts[1])
        if not 0 <= seconds < 60:
            raise ValueError(f"Invalid pace seconds: {pace_str}")
        value = minutes + seconds / 60
    else:
        raise ValueError(f"Invalid pace format: {pace_str}")
    if value <= 0:
        raise ValueError(f"Pace must be positive: {pace_str}")
    return value


def parse_time_string(time_str: str) -> float:
    """
    Parse an HH:MM:SS or MM:SS time string to minutes.

    Raises:
        ValueError: If the string is not a valid time.
    """
    parts = time_str.strip().split(":")
    if len(parts) == 3:
        hours, minutes, seconds = map(float, parts)
        return hours * 60 + minutes + seconds / 60
    elif len(parts) == 2:
        minutes, seconds = map(float, parts)
        return minutes + seconds / 60
    else:
        raise ValueError(f"Invalid time format: {time_str}")
