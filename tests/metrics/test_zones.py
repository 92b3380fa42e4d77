"""Tests for pace zone calculations."""

import pytest

from runnr_training.metrics.zones import calculate_pace_zones


class TestPaceZones:
    """Tests for calculate_pace_zones."""

    def test_multipliers(self):
        zones = calculate_pace_zones(5.0)

        assert zones.easy.min == pytest.approx(5.75)
        assert zones.easy.max == pytest.approx(6.5)
        assert zones.tempo.min == pytest.approx(4.5)
        assert zones.threshold.max == pytest.approx(4.5)
        assert zones.interval.min == pytest.approx(3.75)
        assert zones.long.max == pytest.approx(6.0)

    @pytest.mark.parametrize("reference", [3.2, 4.0, 5.0, 6.5, 9.75])
    def test_zones_ordered_by_effort(self, reference):
        """Interval is fastest, easy is slowest, long sits above the reference."""
        zones = calculate_pace_zones(reference)

        assert zones.interval.min < zones.interval.max <= zones.threshold.max <= zones.tempo.max
        assert zones.threshold.min < zones.tempo.min < reference
        assert reference < zones.long.min < zones.easy.min < zones.easy.max

    def test_formatted_range(self):
        zones = calculate_pace_zones(5.0)
        assert zones.interval.formatted == "3:45-4:15/km"
