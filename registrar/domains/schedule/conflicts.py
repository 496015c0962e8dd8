# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Time-of-week conflict detection.

Pure functions over an explicitly supplied snapshot of slots. Two kinds of
conflict exist:

- global: the candidate overlaps any blocking slot of the supplied set.
  Cancelled and Completed slots never block.
- course-scoped: within one section, the candidate overlaps another slot of
  the same course. This check is not filtered by status.
"""

from collections.abc import Iterable

from registrar.domains.schedule.section import Section
from registrar.domains.schedule.slot import Course, ScheduleSlot


def overlaps(a: ScheduleSlot, b: ScheduleSlot) -> bool:
    """Check whether two slots overlap in time of week.

    Args:
        a: First slot.
        b: Second slot.

    Returns:
        True if both slots share a day and their half-open intervals
        intersect.
    """
    return a.overlaps(b)


def find_global_conflicts(
    candidate: ScheduleSlot,
    existing: Iterable[ScheduleSlot],
    exclude_slot_id: str | None = None,
) -> list[ScheduleSlot]:
    """Find existing slots that the candidate collides with.

    Args:
        candidate: Slot being booked or created.
        existing: Slots to check against, in scan order.
        exclude_slot_id: Slot to ignore, typically the one being edited.

    Returns:
        Overlapping non-terminal slots in the order of ``existing``.
    """
    excluded = str(exclude_slot_id) if exclude_slot_id is not None else None
    return [
        slot
        for slot in existing
        if not slot.is_terminal and slot.slot_id != excluded and overlaps(candidate, slot)
    ]


def find_course_schedule_conflicts(
    section_id: str,
    course: Course | str,
    candidate: ScheduleSlot,
    sections: Iterable[Section],
    exclude_slot_id: str | None = None,
) -> list[ScheduleSlot]:
    """Find slots of the same course in the same section that overlap.

    Returns:
        Overlapping slots of ``course`` in section ``section_id``. Empty if
        the section is not in ``sections``.
    """
    section_id = str(section_id)
    excluded = str(exclude_slot_id) if exclude_slot_id is not None else None

    for section in sections:
        if section.section_id != section_id:
            continue
        return [
            slot
            for slot in section.slots_for_course(course)
            if slot.slot_id != excluded and overlaps(candidate, slot)
        ]
    return []


def find_course_schedule_conflict(
    section_id: str,
    course: Course | str,
    candidate: ScheduleSlot,
    sections: Iterable[Section],
    exclude_slot_id: str | None = None,
) -> bool:
    """Check whether the course already meets at an overlapping time in the section.

    Args:
        section_id: Section being booked into.
        course: Course the candidate slot is for.
        candidate: Slot being booked or created.
        sections: Catalog snapshot.
        exclude_slot_id: Slot to ignore, typically the candidate itself.

    Returns:
        True if another slot of the course in that section overlaps.
    """
    return bool(
        find_course_schedule_conflicts(section_id, course, candidate, sections, exclude_slot_id)
    )


def catalog_slots(sections: Iterable[Section]) -> list[tuple[Section, ScheduleSlot]]:
    """Flatten a catalog snapshot into (section, slot) pairs in scan order."""
    return [(section, slot) for section in sections for slot in section.slots]
