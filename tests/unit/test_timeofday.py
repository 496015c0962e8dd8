# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for wall-clock time utilities."""

from datetime import time, timezone

import pytest

from registrar.utils.timeofday import format_12h, parse_clock_time


class TestParseClockTime:
    """Tests for parse_clock_time."""

    def test_parses_hours_and_minutes(self) -> None:
        """Test HH:MM form."""
        assert parse_clock_time("09:30") == time(9, 30)

    def test_parses_zero_seconds(self) -> None:
        """Test HH:MM:SS form as sent by the backend."""
        assert parse_clock_time("13:00:00") == time(13, 0)

    def test_accepts_time_instances(self) -> None:
        """Test time values pass through."""
        assert parse_clock_time(time(8, 15)) == time(8, 15)

    @pytest.mark.parametrize("value", ["9am", "", "25:00", "09:30:15", "09-30", "a:b"])
    def test_rejects_malformed_values(self, value: str) -> None:
        """Test malformed strings and non-zero seconds are rejected."""
        with pytest.raises(ValueError):
            parse_clock_time(value)

    def test_rejects_timezone_aware_time(self) -> None:
        """Test wall-clock times must be naive."""
        with pytest.raises(ValueError):
            parse_clock_time(time(9, 0, tzinfo=timezone.utc))


class TestFormatting:
    """Tests for time formatting helpers."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (time(0, 0), "12:00 AM"),
            (time(9, 5), "9:05 AM"),
            (time(12, 0), "12:00 PM"),
            (time(13, 30), "1:30 PM"),
        ],
    )
    def test_format_12h(self, value: time, expected: str) -> None:
        """Test 12-hour rendering."""
        assert format_12h(value) == expected

    def test_format_12h_none(self) -> None:
        assert format_12h(None) == ""
