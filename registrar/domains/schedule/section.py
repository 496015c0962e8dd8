# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Section aggregate.

A Section is one offering of teaching within a program and term. It owns an
ordered collection of schedule slots. The backend delivers sections in two
shapes (a ``schedules`` collection, or a single legacy ``schedule`` object
with the course bound to the section itself); ``normalize`` collapses both
into the same Section so nothing downstream branches on shape.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from registrar.core.exceptions import InvalidSectionError, InvalidSlotError
from registrar.domains.schedule.slot import Course, ScheduleSlot
from registrar.models.catalog import SectionPayload, SlotPayload

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Program:
    """Academic program owning sections and courses."""

    program_id: str
    name: str = ""


@dataclass(frozen=True)
class Faculty:
    """Faculty member assigned to a section."""

    faculty_id: str
    first_name: str = ""
    last_name: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class Section:
    """Course section with its ordered schedule slots.

    Attributes:
        section_id: Section identifier.
        name: Display name, conventionally "<year>-<ordinal>".
        program: Owning program.
        semester: Semester label.
        academic_year: Academic year label.
        faculty: Assigned faculty, if any.
        course: Section-level course of legacy sections.
        slots: Ordered schedule slots; empty means "TBA".
    """

    section_id: str
    name: str = ""
    program: Program | None = None
    semester: str | None = None
    academic_year: str | None = None
    faculty: Faculty | None = None
    course: Course | None = None
    slots: tuple[ScheduleSlot, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "section_id", str(self.section_id))
        object.__setattr__(self, "slots", tuple(self.slots))

    def has_multiple_slots(self) -> bool:
        """Check whether the section meets more than once a week."""
        return len(self.slots) > 1

    def has_direct_course_slots(self) -> bool:
        """Check whether any slot is bound to a course directly."""
        return any(slot.course is not None for slot in self.slots)

    def slots_for_course(self, course: Course | str) -> tuple[ScheduleSlot, ...]:
        """Return the slots in which the given course is taught.

        A slot bound to a course matches only that course. Unbound slots
        belong to the section-level course, if the section has one.

        Args:
            course: Course or course identifier.

        Returns:
            Matching slots in section order.
        """
        course_id = course.course_id if isinstance(course, Course) else str(course)
        section_match = self.course is not None and self.course.course_id == course_id

        return tuple(
            slot
            for slot in self.slots
            if (slot.course.course_id == course_id if slot.course else section_match)
        )

    def find_slot(self, slot_id: str | int) -> ScheduleSlot | None:
        """Find a slot of this section by identifier."""
        slot_id = str(slot_id)
        for slot in self.slots:
            if slot.slot_id == slot_id:
                return slot
        return None

    def course_of(self, slot: ScheduleSlot) -> Course | None:
        """Course taught in a slot of this section."""
        return slot.course or self.course


def normalize(raw: Mapping[str, Any] | SectionPayload, strict: bool = True) -> Section:
    """Normalize a raw section into a Section.

    Accepts the slots collection shape (``schedules``) and the legacy single
    embedded slot shape (``schedule``). A missing or empty collection with no
    embedded slot yields a section without slots.

    Args:
        raw: Section JSON object or an already validated SectionPayload.
        strict: When False, malformed slots are skipped with a warning
            instead of failing the whole section.

    Returns:
        Normalized section.

    Raises:
        InvalidSectionError: If the payload is malformed or carries both
            shapes at once.
        InvalidSlotError: If a slot is malformed and ``strict`` is True.
    """
    if isinstance(raw, SectionPayload):
        payload = raw
    else:
        try:
            payload = SectionPayload.model_validate(raw)
        except ValidationError as e:
            raise InvalidSectionError(
                "Malformed section payload",
                details={"errors": e.errors(include_url=False)},
            ) from e

    if payload.schedules and payload.schedule is not None:
        raise InvalidSectionError(
            f"Section {payload.section_id} carries both a schedules collection "
            "and an embedded schedule",
            details={"section_id": payload.section_id},
        )

    raw_slots: list[SlotPayload] = list(payload.schedules or [])
    if not raw_slots and payload.schedule is not None:
        raw_slots = [payload.schedule]

    slots: list[ScheduleSlot] = []
    for slot_payload in raw_slots:
        try:
            slots.append(ScheduleSlot.from_payload(slot_payload))
        except InvalidSlotError as e:
            if strict:
                raise
            logger.warning(
                "Skipping malformed slot %s of section %s: %s",
                slot_payload.schedule_id,
                payload.section_id,
                e,
            )

    return Section(
        section_id=payload.section_id,
        name=payload.section_name,
        program=(
            Program(program_id=payload.program.program_id, name=payload.program.program_name)
            if payload.program
            else None
        ),
        semester=payload.semester,
        academic_year=payload.year,
        faculty=(
            Faculty(
                faculty_id=payload.faculty.faculty_id,
                first_name=payload.faculty.first_name,
                last_name=payload.faculty.last_name,
            )
            if payload.faculty
            else None
        ),
        course=Course.from_payload(payload.course) if payload.course else None,
        slots=tuple(slots),
    )
