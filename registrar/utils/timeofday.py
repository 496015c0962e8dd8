# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Wall-clock time utilities for schedule slots.

Schedule slots meet at a weekday and a wall-clock time range with minute
precision. These helpers convert between the backend's string forms
("09:00", "09:00:00") and ``datetime.time`` values.

Usage:
------
    from registrar.utils.timeofday import parse_clock_time, format_12h

    start = parse_clock_time("13:30:00")
    format_12h(start)  # "1:30 PM"
"""

from datetime import time


def parse_clock_time(value: str | time) -> time:
    """Parse a wall-clock time with minute precision.

    Args:
        value: "HH:MM" or "HH:MM:SS" string, or a time instance.

    Returns:
        Naive time with seconds and microseconds equal to zero.

    Raises:
        ValueError: If the value is malformed or carries non-zero seconds.

    Example:
        >>> parse_clock_time("09:30")
        datetime.time(9, 30)
    """
    if isinstance(value, time):
        parsed = value
    else:
        text = value.strip()
        parts = text.split(":")
        if len(parts) not in (2, 3) or not all(p.isdigit() for p in parts):
            raise ValueError(f"Invalid clock time: {value!r}")
        parsed = time(*(int(p) for p in parts))

    if parsed.second or parsed.microsecond:
        raise ValueError(f"Clock time must have minute precision: {value!r}")
    if parsed.tzinfo is not None:
        raise ValueError(f"Clock time must be naive: {value!r}")
    return parsed


def format_12h(value: time | None) -> str:
    """Format a time the way the console displays it ("9:05 AM").

    Args:
        value: Time to format.

    Returns:
        12-hour string, or an empty string for None.
    """
    if value is None:
        return ""
    hour12 = value.hour % 12 or 12
    suffix = "AM" if value.hour < 12 else "PM"
    return f"{hour12}:{value.minute:02d} {suffix}"
