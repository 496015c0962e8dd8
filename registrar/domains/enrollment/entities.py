# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment records and the catalog snapshot they are checked against."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable
from dataclasses import dataclass

from registrar.domains.schedule.section import Section
from registrar.domains.schedule.slot import Course, ScheduleSlot
from registrar.models.common import EnrollmentStatus

# Slot ids made up for enrollment rows that carry times but no schedule id
SYNTHETIC_SLOT_PREFIX = "enrolled:"


@dataclass(frozen=True)
class AcademicTerm:
    """Semester and academic year an enrollment belongs to."""

    semester: str | None = None
    academic_year: str | None = None


@dataclass(frozen=True)
class Enrollment:
    """One course row of a student's enrollment.

    Several rows may share an ``enrollment_id`` when a section teaches more
    than one course.

    Attributes:
        enrollment_id: Enrollment grouping identifier.
        student_id: Enrolled student.
        course: Enrolled course.
        section_id: Chosen section.
        slot: Chosen slot; None for legacy direct-course sections.
        status: Enrolled or Dropped.
        term: Academic term, if known.
        section_name: Section display name, if known.
    """

    enrollment_id: str
    student_id: str
    course: Course
    section_id: str | None = None
    slot: ScheduleSlot | None = None
    status: EnrollmentStatus = EnrollmentStatus.ENROLLED
    term: AcademicTerm | None = None
    section_name: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "enrollment_id", str(self.enrollment_id))
        object.__setattr__(self, "student_id", str(self.student_id))
        if self.section_id is not None:
            object.__setattr__(self, "section_id", str(self.section_id))
        object.__setattr__(self, "status", EnrollmentStatus.parse(self.status))

    @property
    def is_active(self) -> bool:
        return self.status is EnrollmentStatus.ENROLLED

    @property
    def schedule_id(self) -> str | None:
        """Backend schedule id of the row's slot; None for synthetic or missing slots."""
        if self.slot is None or self.slot.slot_id.startswith(SYNTHETIC_SLOT_PREFIX):
            return None
        return self.slot.slot_id

    def dropped(self) -> Enrollment:
        """Return this row with status Dropped."""
        return dataclasses.replace(self, status=EnrollmentStatus.DROPPED)


@dataclass(frozen=True)
class EnrollmentSnapshot:
    """Catalog and enrollment state an operation is checked against.

    Snapshots are immutable. Operations that commit return or build new
    snapshots instead of mutating the one they were given.

    Attributes:
        sections: Catalog sections in scan order.
        enrollments: Enrollment rows.
    """

    sections: tuple[Section, ...] = ()
    enrollments: tuple[Enrollment, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "sections", tuple(self.sections))
        object.__setattr__(self, "enrollments", tuple(self.enrollments))

    def find_section(self, section_id: str | int | None) -> Section | None:
        if section_id is None:
            return None
        section_id = str(section_id)
        for section in self.sections:
            if section.section_id == section_id:
                return section
        return None

    def active_enrollments(self, student_id: str) -> list[Enrollment]:
        """Enrolled rows of a student, in snapshot order."""
        student_id = str(student_id)
        return [e for e in self.enrollments if e.student_id == student_id and e.is_active]

    def is_enrolled(self, student_id: str, course: Course | str) -> bool:
        """Check whether the student has an Enrolled row for the course."""
        course_id = course.course_id if isinstance(course, Course) else str(course)
        return any(e.course.course_id == course_id for e in self.active_enrollments(student_id))

    def booked_slots(self, student_id: str) -> list[ScheduleSlot]:
        """Slots the student currently occupies.

        Rows without a slot (legacy direct-course sections) occupy every
        slot of their section that teaches the enrolled course.
        """
        booked: list[ScheduleSlot] = []
        for enrollment in self.active_enrollments(student_id):
            if enrollment.slot is not None:
                booked.append(enrollment.slot)
                continue
            section = self.find_section(enrollment.section_id)
            if section is not None:
                booked.extend(section.slots_for_course(enrollment.course))
        return booked

    def with_enrollment(self, enrollment: Enrollment) -> EnrollmentSnapshot:
        """Return a snapshot with one more enrollment row."""
        return dataclasses.replace(self, enrollments=(*self.enrollments, enrollment))

    def with_enrollments(self, enrollments: Iterable[Enrollment]) -> EnrollmentSnapshot:
        """Return a snapshot whose enrollment rows are replaced."""
        return dataclasses.replace(self, enrollments=tuple(enrollments))
