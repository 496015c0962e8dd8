# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Curriculum requirement resolution.

Matches a student's curriculum against the schedule catalog to produce the
list of courses the student can still enroll in, each with the section
slots that teach it.

Resolution steps:
1. Filter requirements by semester tag ("all" disables the filter)
2. Optionally filter by year level (exactly N, or up to N)
3. Drop requirements already satisfied by an Enrolled row of the student
4. Attach every non-terminal (section, slot) pair teaching the course

Requirements without any candidate slot are kept so that callers can show
"no schedule available yet" for them.

Example:
    >>> resolver = CurriculumResolver()
    >>> available = resolver.resolve("stu-1", curriculum, sections, enrollments)
    >>> [entry.course.code for entry in available]
    ['CS101', 'MATH101']
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from registrar.core.exceptions import InvalidCurriculumError
from registrar.domains.schedule.section import Section
from registrar.domains.schedule.slot import Course, ScheduleSlot
from registrar.models.common import EnrollmentStatus, SlotStatus
from registrar.models.curriculum import CurriculumDetailPayload

if TYPE_CHECKING:
    from registrar.domains.enrollment.entities import Enrollment

logger = logging.getLogger(__name__)

ALL_SEMESTERS = "all"


def _normalize_tag(value: str | int | None) -> str:
    return str(value).strip().lower() if value is not None else ""


@dataclass(frozen=True)
class CurriculumRequirement:
    """A course a curriculum requires, tagged with year level and semester.

    Attributes:
        curriculum_id: Curriculum the requirement belongs to.
        course: Required course.
        year_level: Year level the course is taken in.
        semester: Semester tag the course is taken in.
    """

    curriculum_id: str
    course: Course
    year_level: int | None = None
    semester: str | None = None

    @classmethod
    def from_payload(
        cls, curriculum_id: str, payload: CurriculumDetailPayload
    ) -> CurriculumRequirement | None:
        """Build a requirement from a curriculum detail row.

        Returns:
            The requirement, or None when the row has no course.
        """
        if payload.course is None:
            return None
        return cls(
            curriculum_id=str(curriculum_id),
            course=Course.from_payload(payload.course),
            year_level=payload.year_level,
            semester=payload.semester,
        )


def build_curriculum(
    requirements: Iterable[CurriculumRequirement],
) -> list[CurriculumRequirement]:
    """Build an ordered curriculum, rejecting duplicate courses.

    Args:
        requirements: Requirements in declaration order.

    Returns:
        Requirements in declaration order.

    Raises:
        InvalidCurriculumError: If a course appears twice in one curriculum.
    """
    seen: set[tuple[str, str]] = set()
    curriculum: list[CurriculumRequirement] = []

    for requirement in requirements:
        key = (requirement.curriculum_id, requirement.course.course_id)
        if key in seen:
            raise InvalidCurriculumError(
                f"Course {requirement.course.label} is listed twice in "
                f"curriculum {requirement.curriculum_id}",
                details={
                    "curriculum_id": requirement.curriculum_id,
                    "course_id": requirement.course.course_id,
                },
            )
        seen.add(key)
        curriculum.append(requirement)

    return curriculum


class YearScope(str, Enum):
    """How a year-level filter is applied."""

    EXACT = "exact"
    UP_TO = "up_to"


@dataclass(frozen=True)
class CandidateSlot:
    """A bookable (section, slot) pair for a course."""

    section: Section
    slot: ScheduleSlot

    @property
    def key(self) -> str:
        """Selection key in the "<sectionId>-<slotId>" form."""
        return f"{self.section.section_id}-{self.slot.slot_id}"


@dataclass(frozen=True)
class EnrollableCourse:
    """A curriculum requirement the student can still enroll in.

    Attributes:
        course: Required course.
        required_year: Year level from the curriculum.
        required_semester: Semester tag from the curriculum.
        candidate_slots: Slots teaching the course, in catalog scan order.
    """

    course: Course
    required_year: int | None
    required_semester: str | None
    candidate_slots: tuple[CandidateSlot, ...] = ()

    @property
    def has_candidates(self) -> bool:
        return bool(self.candidate_slots)

    @property
    def has_multiple_candidates(self) -> bool:
        return len(self.candidate_slots) > 1


class CurriculumResolver:
    """Resolves curriculum requirements against the schedule catalog.

    Attributes:
        surface_full_slots: Whether Full slots are offered as candidates.
    """

    def __init__(self, surface_full_slots: bool = True) -> None:
        self.surface_full_slots = surface_full_slots

    def resolve(
        self,
        student_id: str,
        curriculum: Sequence[CurriculumRequirement],
        sections: Sequence[Section],
        enrollments: Iterable[Enrollment],
        semester: str | int = ALL_SEMESTERS,
        year_level: int | None = None,
        year_scope: YearScope = YearScope.EXACT,
    ) -> list[EnrollableCourse]:
        """Compute the courses a student can still enroll in.

        Args:
            student_id: Student to resolve for.
            curriculum: Requirements in declaration order.
            sections: Catalog snapshot.
            enrollments: Enrollment rows; only Enrolled rows of this
                student count as satisfying a requirement.
            semester: Semester tag to keep, or "all".
            year_level: Year level to keep, or None for every year.
            year_scope: Whether ``year_level`` is exact or an upper bound.

        Returns:
            Enrollable courses in curriculum declaration order, including
            those with no candidate slot.
        """
        student_id = str(student_id)
        semester_tag = _normalize_tag(semester)

        enrolled_course_ids = {
            enrollment.course.course_id
            for enrollment in enrollments
            if enrollment.student_id == student_id
            and enrollment.status is EnrollmentStatus.ENROLLED
        }

        result: list[EnrollableCourse] = []
        for requirement in curriculum:
            if semester_tag != ALL_SEMESTERS and _normalize_tag(requirement.semester) != semester_tag:
                continue
            if not self._matches_year(requirement, year_level, year_scope):
                continue
            if requirement.course.course_id in enrolled_course_ids:
                continue

            result.append(
                EnrollableCourse(
                    course=requirement.course,
                    required_year=requirement.year_level,
                    required_semester=requirement.semester,
                    candidate_slots=self.candidates_for(requirement.course, sections),
                )
            )

        logger.debug(
            "Resolved curriculum: student=%s, requirements=%d, enrollable=%d",
            student_id,
            len(curriculum),
            len(result),
        )
        return result

    def candidates_for(
        self, course: Course, sections: Iterable[Section]
    ) -> tuple[CandidateSlot, ...]:
        """Collect the bookable (section, slot) pairs teaching a course.

        Args:
            course: Course to look up.
            sections: Catalog snapshot, in scan order.

        Returns:
            Unique candidates in catalog scan order.
        """
        seen: set[tuple[str, str]] = set()
        candidates: list[CandidateSlot] = []

        for section in sections:
            for slot in section.slots_for_course(course):
                if slot.is_terminal:
                    continue
                if slot.status is SlotStatus.FULL and not self.surface_full_slots:
                    continue
                key = (section.section_id, slot.slot_id)
                if key in seen:
                    continue
                seen.add(key)
                candidates.append(CandidateSlot(section=section, slot=slot))

        return tuple(candidates)

    @staticmethod
    def _matches_year(
        requirement: CurriculumRequirement,
        year_level: int | None,
        year_scope: YearScope,
    ) -> bool:
        if year_level is None:
            return True
        if requirement.year_level is None:
            return False
        if year_scope is YearScope.UP_TO:
            return requirement.year_level <= year_level
        return requirement.year_level == year_level
