"""Tests for time and pace formatting."""

import pytest

from runnr_training.utils.formatting import (
    format_pace,
    format_pace_range,
    format_race_time,
    parse_pace,
    parse_time_string,
)


class TestFormatRaceTime:
    @pytest.mark.parametrize(
        "minutes, expected",
        [
            (25.0, "25:00"),
            (49.5, "49:30"),
            (105.25, "1:45:15"),
            (59.999, "1:00:00"),
        ],
    )
    def test_format(self, minutes, expected):
        assert format_race_time(minutes) == expected


class TestFormatPace:
    def test_format_pace(self):
        assert format_pace(5.5) == "5:30 min/km"

    def test_seconds_carry_into_minutes(self):
        """A pace that rounds to 60 seconds rolls over to the next minute."""
        assert format_pace(4.9999) == "5:00 min/km"

    def test_range(self):
        assert format_pace_range(5.0, 5.5) == "5:00-5:30/km"


class TestParsing:
    """Tests for pace and time parsing."""

    @pytest.mark.parametrize("text", ["5:30", "5:30/km", "5:30 min/km", " 5:30 "])
    def test_parse_pace(self, text):
        assert parse_pace(text) == pytest.approx(5.5)

    @pytest.mark.parametrize("text", ["5:75", "0:00", "1:2:3", "abc"])
    def test_invalid_pace(self, text):
        with pytest.raises(ValueError):
            parse_pace(text)

    def test_parse_time_string(self):
        assert parse_time_string("1:45:00") == pytest.approx(105.0)
        assert parse_time_string("24:30") == pytest.approx(24.5)

    def test_invalid_time_string(self):
        with pytest.raises(ValueError):
            parse_time_string("90")
