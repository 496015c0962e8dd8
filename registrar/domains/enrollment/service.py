# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment service for booking students into course schedule slots.

This module provides the EnrollmentService class for:
- Loading a fresh catalog and enrollment snapshot from the registrar
- Resolving the courses a student can still enroll in
- Single enrollment with conflict and duplicate checks
- Bulk enrollment that records per-course failures without aborting
- Dropping enrollments by grouping id or by course

Each enrollment attempt moves through Selected, Validating and then
Committed or Rejected. A rejected attempt never writes anything.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from registrar.core.config import EnrollmentSettings, get_settings
from registrar.core.exceptions import (
    AlreadyEnrolledError,
    DuplicateCourseScheduleError,
    EnrollmentRejectedError,
    NoSelectionError,
    NotEnrolledError,
    RejectionReason,
    ScheduleConflictError,
    SectionNotFoundError,
    TransportError,
    UnaddressableDropError,
)
from registrar.domains.curriculum.resolver import (
    CandidateSlot,
    CurriculumResolver,
    EnrollableCourse,
    YearScope,
)
from registrar.domains.enrollment.entities import Enrollment, EnrollmentSnapshot
from registrar.domains.schedule.conflicts import (
    find_course_schedule_conflict,
    find_global_conflicts,
)
from registrar.domains.schedule.section import Section
from registrar.domains.schedule.slot import Course
from registrar.utils.logging import log_context

if TYPE_CHECKING:
    from registrar.services.registrar_api.base import RegistrarGateway

logger = logging.getLogger(__name__)


class AttemptState(str, Enum):
    """Lifecycle of one enrollment attempt."""

    SELECTED = "Selected"
    VALIDATING = "Validating"
    COMMITTED = "Committed"
    REJECTED = "Rejected"


class BulkOutcome(str, Enum):
    """Overall outcome of a bulk enrollment."""

    ALL = "all"
    PARTIAL = "partial"
    NONE = "none"


@dataclass(frozen=True)
class BulkEnrollFailure:
    """One course that could not be enrolled in a bulk operation.

    Attributes:
        course_id: Course of the failed selection.
        reason: Machine-checkable reason code.
        detail: Human-readable explanation.
    """

    course_id: str
    reason: RejectionReason
    detail: str


@dataclass
class BulkEnrollResult:
    """Result of a bulk enrollment.

    Attributes:
        committed: Enrollments created, in submission order.
        failed: Failed selections, in submission order.
        snapshot: Snapshot including every committed enrollment.
    """

    committed: list[Enrollment] = field(default_factory=list)
    failed: list[BulkEnrollFailure] = field(default_factory=list)
    snapshot: EnrollmentSnapshot | None = None

    @property
    def total_committed(self) -> int:
        return len(self.committed)

    @property
    def total_failed(self) -> int:
        return len(self.failed)

    @property
    def outcome(self) -> BulkOutcome:
        """Whether all, some or none of the selections were committed."""
        if self.committed and not self.failed:
            return BulkOutcome.ALL
        if self.committed:
            return BulkOutcome.PARTIAL
        return BulkOutcome.NONE


@dataclass(frozen=True)
class EnrollmentSummary:
    """Statistics over a student's active enrollments.

    Attributes:
        active_count: Number of Enrolled rows.
        total_credits: Sum of credits over Enrolled rows.
        unique_courses: Number of distinct enrolled courses.
        direct_course_count: Rows whose slot is bound to a course directly.
        multi_slot_section_count: Rows in sections with more than one slot.
    """

    active_count: int = 0
    total_credits: int = 0
    unique_courses: int = 0
    direct_course_count: int = 0
    multi_slot_section_count: int = 0


def parse_selection_key(key: str) -> tuple[str, str]:
    """Split a "<sectionId>-<slotId>" selection key.

    Args:
        key: Selection key, e.g. "12-40".

    Returns:
        Tuple of (section_id, slot_id).

    Raises:
        ValueError: If the key does not have both parts.
    """
    section_id, sep, slot_id = str(key).strip().partition("-")
    if not sep or not section_id or not slot_id:
        raise ValueError(f"Invalid selection key: {key!r}")
    return section_id, slot_id


def summarize_enrollments(
    enrollments: Iterable[Enrollment],
    sections: Iterable[Section],
) -> EnrollmentSummary:
    """Compute enrollment statistics.

    Args:
        enrollments: Enrollment rows; only Enrolled rows are counted.
        sections: Catalog snapshot, used to tell multi-slot sections.

    Returns:
        Enrollment summary.
    """
    multi_slot_ids = {s.section_id for s in sections if s.has_multiple_slots()}
    active = [e for e in enrollments if e.is_active]

    return EnrollmentSummary(
        active_count=len(active),
        total_credits=sum(e.course.credits for e in active),
        unique_courses=len({e.course.course_id for e in active}),
        direct_course_count=sum(
            1 for e in active if e.slot is not None and e.slot.course is not None
        ),
        multi_slot_section_count=sum(1 for e in active if e.section_id in multi_slot_ids),
    )


class EnrollmentService:
    """Service for enrolling students into schedule slots.

    The service keeps no state between calls. Every check runs against the
    snapshot passed in; ``load_snapshot`` fetches a fresh one.

    Attributes:
        gateway: Registrar backend.
        settings: Enrollment configuration.
        resolver: Curriculum resolver.
    """

    def __init__(
        self,
        gateway: RegistrarGateway,
        settings: EnrollmentSettings | None = None,
    ) -> None:
        """Initialize enrollment service.

        Args:
            gateway: Registrar backend used for fetches and commits.
            settings: Enrollment configuration. Defaults to the global settings.
        """
        self.gateway = gateway
        self.settings = settings or get_settings().enrollment
        self.resolver = CurriculumResolver(surface_full_slots=self.settings.surface_full_slots)

    async def load_snapshot(self, student_id: str) -> EnrollmentSnapshot:
        """Fetch a fresh catalog and the student's enrollments.

        Args:
            student_id: Student whose enrollments are fetched.

        Returns:
            New snapshot.

        Raises:
            TransportError: If the backend cannot be reached.
        """
        sections = await self.gateway.fetch_catalog()
        enrollments = await self.gateway.fetch_active_enrollments(str(student_id))

        logger.debug(
            "Loaded snapshot: student=%s, sections=%d, enrollments=%d",
            student_id,
            len(sections),
            len(enrollments),
        )
        return EnrollmentSnapshot(sections=tuple(sections), enrollments=tuple(enrollments))

    async def available_courses(
        self,
        student_id: str,
        curriculum_id: str,
        semester: str | int | None = None,
        year_level: int | None = None,
        year_scope: YearScope = YearScope.EXACT,
        snapshot: EnrollmentSnapshot | None = None,
    ) -> list[EnrollableCourse]:
        """Resolve the courses a student can still enroll in.

        Args:
            student_id: Student to resolve for.
            curriculum_id: Student's curriculum.
            semester: Semester tag, or "all". Defaults to the configured one.
            year_level: Year level filter, or None.
            year_scope: Whether ``year_level`` is exact or an upper bound.
            snapshot: Snapshot to resolve against. A fresh one is fetched
                when omitted.

        Returns:
            Enrollable courses in curriculum order.

        Raises:
            TransportError: If the backend cannot be reached.
            InvalidCurriculumError: If the curriculum lists a course twice.
        """
        with log_context(student_id=str(student_id), curriculum_id=str(curriculum_id)):
            curriculum = await self.gateway.fetch_curriculum(str(curriculum_id))
            if snapshot is None:
                snapshot = await self.load_snapshot(student_id)

            return self.resolver.resolve(
                student_id,
                curriculum,
                snapshot.sections,
                snapshot.enrollments,
                semester=semester if semester is not None else self.settings.default_semester,
                year_level=year_level,
                year_scope=year_scope,
            )

    def resolve_selection(
        self,
        snapshot: EnrollmentSnapshot,
        section_id: str | int,
        slot_id: str | int | None,
    ) -> CandidateSlot | None:
        """Look up a (section, slot) selection in the snapshot.

        Args:
            snapshot: Snapshot holding the catalog.
            section_id: Chosen section.
            slot_id: Chosen slot, or None for no selection.

        Returns:
            The candidate, or None when no slot was chosen.

        Raises:
            SectionNotFoundError: If the section or slot is not in the catalog.
        """
        if slot_id is None or slot_id == "":
            return None

        section = snapshot.find_section(section_id)
        if section is None:
            raise SectionNotFoundError(f"Section {section_id} not found")

        slot = section.find_slot(slot_id)
        if slot is None:
            raise SectionNotFoundError(
                f"Schedule {slot_id} not found in section {section_id}",
                details={"section_id": str(section_id), "slot_id": str(slot_id)},
            )
        return CandidateSlot(section=section, slot=slot)

    async def enroll(
        self,
        student_id: str,
        course: Course,
        selection: CandidateSlot | None,
        snapshot: EnrollmentSnapshot,
    ) -> Enrollment:
        """Enroll a student in a course at the chosen slot.

        Args:
            student_id: Student to enroll.
            course: Course to enroll in.
            selection: Chosen (section, slot), or None.
            snapshot: Catalog and enrollment state to check against.

        Returns:
            The created enrollment.

        Raises:
            NoSelectionError: If no slot was chosen, or the chosen slot does
                not teach the course.
            ScheduleConflictError: If the slot overlaps a booked slot.
            DuplicateCourseScheduleError: If the course already meets at an
                overlapping time in the section.
            AlreadyEnrolledError: If the student is already enrolled.
            TransportError: If the commit fails.
        """
        student_id = str(student_id)
        logger.debug(
            "Enrollment attempt %s: student=%s, course=%s",
            AttemptState.SELECTED.value,
            student_id,
            course.course_id,
        )

        try:
            selection = self._validate(student_id, course, selection, snapshot)
        except EnrollmentRejectedError as e:
            logger.warning(
                "Enrollment attempt %s: student=%s, course=%s, reason=%s",
                AttemptState.REJECTED.value,
                student_id,
                course.course_id,
                e.reason.value,
            )
            raise

        enrollment = await self.gateway.commit_enrollment(
            student_id,
            selection.section.section_id,
            selection.slot.slot_id,
        )

        logger.info(
            "Enrollment attempt %s: student=%s, course=%s, section=%s, slot=%s",
            AttemptState.COMMITTED.value,
            student_id,
            course.course_id,
            selection.section.section_id,
            selection.slot.slot_id,
        )
        return self._as_booked(enrollment, course, selection)

    async def enroll_many(
        self,
        student_id: str,
        selections: Mapping[str, CandidateSlot | None],
        snapshot: EnrollmentSnapshot,
        courses: Mapping[str, Course] | None = None,
    ) -> BulkEnrollResult:
        """Enroll a student in several courses, one after another.

        Each selection is checked against the snapshot plus every enrollment
        committed earlier in the batch. A failed selection never aborts the
        batch or undoes earlier commits.

        Args:
            student_id: Student to enroll.
            selections: Ordered mapping of course id to chosen slot.
            snapshot: Catalog and enrollment state at the start of the batch.
            courses: Course details by id. Courses not listed are taken from
                the chosen slot or section.

        Returns:
            Committed enrollments and per-course failures.
        """
        student_id = str(student_id)
        result = BulkEnrollResult()
        current = snapshot

        with log_context(student_id=student_id):
            for course_id, selection in selections.items():
                course_id = str(course_id)
                course = self._course_for(course_id, selection, courses)

                try:
                    enrollment = await self.enroll(student_id, course, selection, current)
                except EnrollmentRejectedError as e:
                    result.failed.append(
                        BulkEnrollFailure(course_id=course_id, reason=e.reason, detail=str(e))
                    )
                    continue
                except TransportError as e:
                    logger.error(
                        "Enrollment commit failed: student=%s, course=%s, error=%s",
                        student_id,
                        course_id,
                        e,
                    )
                    result.failed.append(
                        BulkEnrollFailure(
                            course_id=course_id,
                            reason=RejectionReason.TRANSPORT_ERROR,
                            detail=str(e),
                        )
                    )
                    continue

                result.committed.append(enrollment)
                current = current.with_enrollment(enrollment)

            result.snapshot = current
            logger.info(
                "Bulk enrollment: student=%s, committed=%d, failed=%d, outcome=%s",
                student_id,
                result.total_committed,
                result.total_failed,
                result.outcome.value,
            )
        return result

    async def drop(
        self,
        enrollment_id: str,
        snapshot: EnrollmentSnapshot,
        course_id: str | None = None,
    ) -> list[Enrollment]:
        """Drop an enrollment, or one course of it.

        Args:
            enrollment_id: Enrollment grouping identifier.
            snapshot: Enrollment state holding the rows to drop.
            course_id: Course to drop. When omitted every row sharing the
                grouping id is dropped.

        Returns:
            The dropped rows, with status Dropped.

        Raises:
            NotEnrolledError: If no Enrolled row matches.
            UnaddressableDropError: If ``course_id`` names a row without a
                schedule id while other rows share its grouping id.
            TransportError: If the backend rejects the drop.
        """
        enrollment_id = str(enrollment_id)
        wanted_course = str(course_id) if course_id is not None else None

        targets = [
            e
            for e in snapshot.enrollments
            if e.enrollment_id == enrollment_id
            and e.is_active
            and (wanted_course is None or e.course.course_id == wanted_course)
        ]
        if not targets:
            raise NotEnrolledError(
                f"No active enrollment {enrollment_id}"
                + (f" for course {wanted_course}" if wanted_course else ""),
                details={"enrollment_id": enrollment_id, "course_id": wanted_course},
            )

        slot_id = None
        if wanted_course is not None:
            slot_id = targets[0].schedule_id
            group = [
                e for e in snapshot.enrollments if e.enrollment_id == enrollment_id and e.is_active
            ]
            if slot_id is None and len(group) > 1:
                raise UnaddressableDropError(
                    f"Course {wanted_course} of enrollment {enrollment_id} has no schedule id "
                    "and cannot be dropped without the rest of its group",
                    details={
                        "enrollment_id": enrollment_id,
                        "course_id": wanted_course,
                        "group_size": len(group),
                    },
                )

        await self.gateway.commit_drop(enrollment_id, wanted_course, slot_id)

        logger.info(
            "Dropped enrollment: enrollment=%s, course=%s, rows=%d",
            enrollment_id,
            wanted_course or "all",
            len(targets),
        )
        return [e.dropped() for e in targets]

    def _validate(
        self,
        student_id: str,
        course: Course,
        selection: CandidateSlot | None,
        snapshot: EnrollmentSnapshot,
    ) -> CandidateSlot:
        """Run the rejection checks of one attempt in order.

        Returns:
            The validated selection.
        """
        logger.debug(
            "Enrollment attempt %s: student=%s, course=%s",
            AttemptState.VALIDATING.value,
            student_id,
            course.course_id,
        )

        if selection is None:
            raise NoSelectionError(
                f"No schedule selected for {course.label}",
                course_id=course.course_id,
            )

        if selection.slot not in selection.section.slots_for_course(course):
            raise NoSelectionError(
                f"Selected schedule {selection.slot.slot_id} of section "
                f"{selection.section.name or selection.section.section_id} "
                f"does not teach {course.label}",
                course_id=course.course_id,
                details={
                    "section_id": selection.section.section_id,
                    "slot_id": selection.slot.slot_id,
                },
            )

        conflicts = find_global_conflicts(selection.slot, snapshot.booked_slots(student_id))
        if conflicts:
            raise ScheduleConflictError(
                f"{course.label} conflicts with your existing schedule",
                conflicts=[slot.describe() for slot in conflicts],
                course_id=course.course_id,
            )

        if find_course_schedule_conflict(
            selection.section.section_id,
            course,
            selection.slot,
            snapshot.sections,
            exclude_slot_id=selection.slot.slot_id,
        ):
            raise DuplicateCourseScheduleError(
                f"{course.label} already has a different schedule in section "
                f"{selection.section.name or selection.section.section_id}",
                course_id=course.course_id,
            )

        if snapshot.is_enrolled(student_id, course):
            raise AlreadyEnrolledError(
                f"Already enrolled in {course.label}",
                course_id=course.course_id,
            )

        return selection

    @staticmethod
    def _course_for(
        course_id: str,
        selection: CandidateSlot | None,
        courses: Mapping[str, Course] | None,
    ) -> Course:
        if courses and course_id in courses:
            return courses[course_id]
        if selection is not None:
            bound = selection.section.course_of(selection.slot)
            if bound is not None and bound.course_id == course_id:
                return bound
        return Course(course_id=course_id)

    @staticmethod
    def _as_booked(
        enrollment: Enrollment,
        course: Course,
        selection: CandidateSlot,
    ) -> Enrollment:
        """Fill in course and slot of a committed row from the selection."""
        if enrollment.slot is not None and enrollment.course == course:
            return enrollment
        return Enrollment(
            enrollment_id=enrollment.enrollment_id,
            student_id=enrollment.student_id,
            course=course,
            section_id=selection.section.section_id,
            slot=enrollment.slot or selection.slot,
            status=enrollment.status,
            term=enrollment.term,
            section_name=enrollment.section_name or selection.section.name,
        )

