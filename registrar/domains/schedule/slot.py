# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Schedule slot value model.

A ScheduleSlot is one bookable meeting time: a teaching day, a wall-clock
range with minute precision, a room, a status and optionally the course
taught in it. Slots are immutable values; use ``replace`` to derive a
changed copy, which is validated again.

Example:
    >>> slot = ScheduleSlot(
    ...     slot_id="17",
    ...     day="Mon",
    ...     start_time="09:00",
    ...     end_time="10:30",
    ...     room="R101",
    ... )
    >>> slot.describe()
    'Monday 9:00 AM-10:30 AM • Room: R101'
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import time
from typing import Any

from registrar.core.exceptions import InvalidSlotError
from registrar.models.catalog import CoursePayload, SlotPayload
from registrar.models.common import DayOfWeek, SlotStatus
from registrar.utils.timeofday import format_12h, parse_clock_time


@dataclass(frozen=True)
class Course:
    """Catalog course.

    Courses compare and hash by ``course_id`` only, so the same course
    embedded in different payloads is recognised as one course.

    Attributes:
        course_id: Course identifier.
        code: Short course code (e.g., "CS101").
        description: Course title.
        credits: Credit units.
        program_id: Owning program identifier.
    """

    course_id: str
    code: str = field(default="", compare=False)
    description: str = field(default="", compare=False)
    credits: int = field(default=0, compare=False)
    program_id: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "course_id", str(self.course_id))

    @classmethod
    def from_payload(cls, payload: CoursePayload) -> Course:
        """Build a course from its wire representation."""
        return cls(
            course_id=payload.id,
            code=payload.course_code,
            description=payload.course_description,
            credits=payload.credits or 0,
            program_id=payload.program_id,
        )

    @property
    def label(self) -> str:
        """Code, falling back to the identifier."""
        return self.code or self.course_id


@dataclass(frozen=True)
class ScheduleSlot:
    """One timed, bookable occurrence of a section.

    Day and status accept enum members or their string forms, times accept
    ``datetime.time`` or "HH:MM[:SS]" strings; all are normalized at
    construction.

    Attributes:
        slot_id: Slot identifier.
        day: Teaching day.
        start_time: Start of the half-open meeting interval.
        end_time: End of the half-open meeting interval.
        room: Free-text room name.
        status: Slot status.
        course: Course bound to this slot, if any.

    Raises:
        InvalidSlotError: If day, status or the time range is invalid.
    """

    slot_id: str
    day: DayOfWeek
    start_time: time
    end_time: time
    room: str = ""
    status: SlotStatus = SlotStatus.ACTIVE
    course: Course | None = None

    def __post_init__(self) -> None:
        invalid: list[str] = []
        values: dict[str, Any] = {}

        try:
            values["day"] = DayOfWeek.parse(self.day)
        except (TypeError, ValueError):
            invalid.append("day")

        try:
            values["status"] = SlotStatus.parse(self.status)
        except (TypeError, ValueError):
            invalid.append("status")

        for name in ("start_time", "end_time"):
            try:
                values[name] = parse_clock_time(getattr(self, name))
            except (TypeError, ValueError, AttributeError):
                invalid.append(name)

        if "start_time" in values and "end_time" in values:
            if values["start_time"] >= values["end_time"]:
                invalid.extend(["start_time", "end_time"])

        if invalid:
            raise InvalidSlotError(
                f"Invalid schedule slot {self.slot_id!r}",
                fields=invalid,
                details={
                    "day": str(self.day),
                    "start_time": str(self.start_time),
                    "end_time": str(self.end_time),
                    "status": str(self.status),
                },
            )

        object.__setattr__(self, "slot_id", str(self.slot_id))
        object.__setattr__(self, "room", self.room or "")
        for name, value in values.items():
            object.__setattr__(self, name, value)

    @classmethod
    def parse(
        cls,
        slot_id: str | int,
        day: str | None,
        start_time: str | time | None,
        end_time: str | time | None,
        room: str | None = None,
        status: str | None = None,
        course: Course | None = None,
    ) -> ScheduleSlot:
        """Build a slot from loosely typed values.

        Args:
            slot_id: Slot identifier, numeric or string.
            day: Day name or abbreviation ("MON", "Monday").
            start_time: "HH:MM" or "HH:MM:SS".
            end_time: "HH:MM" or "HH:MM:SS".
            room: Room name.
            status: Status in any case; missing means Active.
            course: Bound course.

        Returns:
            Validated slot.

        Raises:
            InvalidSlotError: If any value is missing or malformed.
        """
        return cls(
            slot_id=str(slot_id),
            day=day,  # type: ignore[arg-type]
            start_time=start_time,  # type: ignore[arg-type]
            end_time=end_time,  # type: ignore[arg-type]
            room=room or "",
            status=status or SlotStatus.ACTIVE,  # type: ignore[arg-type]
            course=course,
        )

    @classmethod
    def from_payload(cls, payload: SlotPayload) -> ScheduleSlot:
        """Build a slot from its wire representation.

        Raises:
            InvalidSlotError: If the payload has no usable day or times.
        """
        return cls.parse(
            slot_id=payload.schedule_id,
            day=payload.day,
            start_time=payload.start_time,
            end_time=payload.end_time,
            room=payload.room,
            status=payload.status,
            course=Course.from_payload(payload.course) if payload.course else None,
        )

    def replace(self, **changes: Any) -> ScheduleSlot:
        """Return a copy with the given fields replaced.

        Raises:
            InvalidSlotError: If the resulting slot is invalid.
        """
        return dataclasses.replace(self, **changes)

    @property
    def is_terminal(self) -> bool:
        """Whether the slot is Cancelled or Completed."""
        return self.status.is_terminal

    @property
    def is_bookable(self) -> bool:
        """Whether a student can still book the slot (Active only)."""
        return self.status is SlotStatus.ACTIVE

    def is_bound_to(self, course: Course | str) -> bool:
        """Check whether this slot is bound to the given course."""
        if self.course is None:
            return False
        course_id = course.course_id if isinstance(course, Course) else str(course)
        return self.course.course_id == course_id

    def overlaps(self, other: ScheduleSlot) -> bool:
        """Check whether two slots meet at overlapping times.

        Intervals are half-open, so a slot ending at 10:00 does not
        overlap one starting at 10:00.
        """
        return (
            self.day is other.day
            and self.start_time < other.end_time
            and other.start_time < self.end_time
        )

    def describe(self) -> str:
        """Human-readable meeting description used in rejection details."""
        text = f"{self.day.value} {format_12h(self.start_time)}-{format_12h(self.end_time)}"
        if self.room:
            text = f"{text} • Room: {self.room}"
        if self.course is not None:
            text = f"{self.course.label} {text}"
        return text
