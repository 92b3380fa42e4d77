"""Pace zone calculations.

Zones are fixed multiples of a single reference pace (the trailing
four-week average, in min/km). Lower numbers are faster:

- Interval:  75-85% of reference
- Threshold: 85-90%
- Tempo:     90-95%
- Long run:  110-120%
- Easy:      115-130%
"""

from ..models.metrics import PaceRange, PaceZones

ZONE_MULTIPLIERS = {
    "easy": (1.15, 1.30),
    "tempo": (0.90, 0.95),
    "threshold": (0.85, 0.90),
    "interval": (0.75, 0.85),
    "long": (1.10, 1.20),
}


def calculate_pace_zones(reference_pace: float) -> PaceZones:
    """
    Calculate training pace zones from a reference pace.

    Args:
        reference_pace: Reference pace in min/km

    Returns:
        PaceZones with [min, max] ranges in min/km
    """
    ranges = {
        name: PaceRange(min=reference_pace * low, max=reference_pace * high)
        for name, (low, high) in ZONE_MULTIPLIERS.items()
    }
    return PaceZones(**ranges)
