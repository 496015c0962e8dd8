# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Shared enums and field types for registrar models.

The registrar backend mixes numeric and string identifiers and upper/mixed
case enum values. Everything is normalized here so downstream code can
compare plain strings and enum members.
"""

from enum import Enum
from typing import Annotated, Any

from pydantic import BeforeValidator


class DayOfWeek(str, Enum):
    """Teaching days recognised by the schedule catalog."""

    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"

    @classmethod
    def parse(cls, value: "str | DayOfWeek") -> "DayOfWeek":
        """Parse a day from its full name or three-letter abbreviation.

        Args:
            value: Day name in any case ("MONDAY", "mon", "Monday").

        Returns:
            Matching DayOfWeek member.

        Raises:
            ValueError: If the value is not one of the six teaching days.
        """
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        for day in cls:
            if text in (day.value.lower(), day.value[:3].lower()):
                return day
        raise ValueError(f"Unknown day of week: {value!r}")


class SlotStatus(str, Enum):
    """Lifecycle status of a schedule slot."""

    ACTIVE = "Active"
    CANCELLED = "Cancelled"
    COMPLETED = "Completed"
    FULL = "Full"

    @property
    def is_terminal(self) -> bool:
        """Cancelled and Completed slots can no longer be booked."""
        return self in (SlotStatus.CANCELLED, SlotStatus.COMPLETED)

    @classmethod
    def parse(cls, value: "str | SlotStatus") -> "SlotStatus":
        """Parse a status case-insensitively ("ACTIVE" -> Active).

        Raises:
            ValueError: If the value is not a recognised status.
        """
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        for status in cls:
            if text == status.value.lower():
                return status
        raise ValueError(f"Unknown slot status: {value!r}")


class EnrollmentStatus(str, Enum):
    """Status of an enrollment row."""

    ENROLLED = "Enrolled"
    DROPPED = "Dropped"

    @classmethod
    def parse(cls, value: "str | EnrollmentStatus") -> "EnrollmentStatus":
        """Parse a status case-insensitively.

        Raises:
            ValueError: If the value is not a recognised status.
        """
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        for status in cls:
            if text == status.value.lower():
                return status
        raise ValueError(f"Unknown enrollment status: {value!r}")


def _coerce_id(value: Any) -> Any:
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, (int, str)):
        return str(value).strip()
    return value


# Identifiers arrive as ints or strings; they are compared as strings.
EntityId = Annotated[str, BeforeValidator(_coerce_id)]
