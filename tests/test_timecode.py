"""Unit tests for manual time string parsing.

WHY: In manual timing mode the user types the start and end of the caption
range. A typo must give a clear error instead of a shifted track.

HOW: parse_time_string() returns seconds or None; parse_time_range()
validates a pair and raises ValidationError with a user-facing message.
"""

import pytest

from script_captions import ValidationError, parse_time_range, parse_time_string


class TestParseTimeString:

    @pytest.mark.parametrize("text,expected", [
        ("00:00:00", 0.0),
        ("00:00:10", 10.0),
        ("1:2:3", 3723.0),
        ("01:30:00", 5400.0),
        ("99:59:59", 359999.0),
        ("00:01:05,250", 65.25),
        ("00:01:05.250", 65.25),
        ("00:00:01,5", 1.005),
        ("00:00:01.05", 1.005),
        ("00:00:01,050", 1.05),
        ("  00:00:10  ", 10.0),
    ])
    def test_valid(self, text, expected):
        assert parse_time_string(text) == pytest.approx(expected)

    @pytest.mark.parametrize("text", [
        None,
        "",
        "10",
        "00:10",
        "00:60:00",
        "00:00:60",
        "100:00:00",
        "00:00:10,1234",
        "00:00:10,",
        "aa:bb:cc",
        "-1:00:00",
        "00:00:10 extra",
        "００:００:１０",
    ])
    def test_invalid(self, text):
        assert parse_time_string(text) is None


class TestParseTimeRange:

    def test_valid_range(self):
        assert parse_time_range("00:00:10", "00:00:50") == (10.0, 50.0)

    def test_invalid_start(self):
        with pytest.raises(ValidationError, match="Invalid start or end time format"):
            parse_time_range("bogus", "00:00:50")

    def test_missing_end(self):
        with pytest.raises(ValidationError, match="HH:MM:SS"):
            parse_time_range("00:00:10", None)

    def test_equal_times(self):
        with pytest.raises(ValidationError, match="End time must be after start time"):
            parse_time_range("00:00:10", "00:00:10")

    def test_inverted_range(self):
        with pytest.raises(ValidationError, match="End time must be after start time"):
            parse_time_range("00:01:00", "00:00:30")
