# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across all test types:
- Slot, course and section builders
- A small sample catalog and curriculum
- An in-memory registrar gateway
"""

from collections.abc import Callable, Iterable
from typing import Any

import pytest

from registrar.core.config import EnrollmentSettings, clear_settings_cache
from registrar.core.exceptions import TransportError
from registrar.domains.curriculum import CurriculumRequirement
from registrar.domains.enrollment import Enrollment, EnrollmentService, EnrollmentSnapshot
from registrar.domains.schedule import Course, Program, ScheduleSlot, Section
from registrar.services.registrar_api import RegistrarGateway


# =============================================================================
# In-memory Gateway
# =============================================================================


class FakeRegistrarGateway(RegistrarGateway):
    """Registrar gateway keeping everything in memory.

    Attributes:
        sections: Catalog returned by fetch_catalog.
        curricula: Requirements by curriculum id.
        enrollments: Every enrollment row, including dropped ones.
        commits: (student_id, section_id, slot_id) of each commit call.
        drops: (enrollment_id, course_id, slot_id) of each drop call.
        failing_sections: Section ids whose commits raise TransportError.
    """

    def __init__(
        self,
        sections: Iterable[Section] = (),
        curricula: dict[str, list[CurriculumRequirement]] | None = None,
        enrollments: Iterable[Enrollment] = (),
    ) -> None:
        self.sections = list(sections)
        self.curricula = dict(curricula or {})
        self.enrollments = list(enrollments)
        self.commits: list[tuple[str, str, str | None]] = []
        self.drops: list[tuple[str, str | None, str | None]] = []
        self.failing_sections: set[str] = set()
        self._next_id = 100

    async def fetch_catalog(self) -> list[Section]:
        return list(self.sections)

    async def fetch_curriculum(self, curriculum_id: str) -> list[CurriculumRequirement]:
        return list(self.curricula.get(str(curriculum_id), []))

    async def fetch_active_enrollments(self, student_id: str) -> list[Enrollment]:
        return [e for e in self.enrollments if e.student_id == str(student_id)]

    async def commit_enrollment(
        self,
        student_id: str,
        section_id: str,
        slot_id: str | None = None,
    ) -> Enrollment:
        if section_id in self.failing_sections:
            raise TransportError("Registrar unavailable", status_code=503)

        section = next(s for s in self.sections if s.section_id == section_id)
        slot = section.find_slot(slot_id) if slot_id is not None else None
        course = (section.course_of(slot) if slot else section.course) or Course(course_id="")

        self._next_id += 1
        enrollment = Enrollment(
            enrollment_id=str(self._next_id),
            student_id=student_id,
            course=course,
            section_id=section_id,
            slot=slot,
            section_name=section.name,
        )
        self.enrollments.append(enrollment)
        self.commits.append((student_id, section_id, slot_id))
        return enrollment

    async def commit_drop(
        self,
        enrollment_id: str,
        course_id: str | None = None,
        slot_id: str | None = None,
    ) -> None:
        self.drops.append((enrollment_id, course_id, slot_id))
        self.enrollments = [
            e.dropped()
            if e.enrollment_id == enrollment_id
            and (course_id is None or e.course.course_id == course_id)
            else e
            for e in self.enrollments
        ]


# =============================================================================
# Builders
# =============================================================================


@pytest.fixture
def courses() -> dict[str, Course]:
    """Provide sample courses keyed by course id."""
    return {
        "101": Course(course_id="101", code="CS101", description="Intro to Computing", credits=3),
        "102": Course(course_id="102", code="MATH101", description="College Algebra", credits=3),
        "103": Course(course_id="103", code="ENG101", description="Purposive Communication", credits=2),
        "104": Course(course_id="104", code="PE101", description="Physical Fitness", credits=2),
    }


@pytest.fixture
def make_slot() -> Callable[..., ScheduleSlot]:
    """Provide a builder for schedule slots."""

    def _make(
        slot_id: str,
        day: str = "Monday",
        start: str = "09:00",
        end: str = "10:00",
        room: str = "R101",
        status: str = "Active",
        course: Course | None = None,
    ) -> ScheduleSlot:
        return ScheduleSlot.parse(
            slot_id=slot_id,
            day=day,
            start_time=start,
            end_time=end,
            room=room,
            status=status,
            course=course,
        )

    return _make


@pytest.fixture
def make_section() -> Callable[..., Section]:
    """Provide a builder for sections."""

    def _make(
        section_id: str,
        slots: Iterable[ScheduleSlot] = (),
        name: str | None = None,
        course: Course | None = None,
        semester: str | None = "1",
    ) -> Section:
        return Section(
            section_id=section_id,
            name=name or f"1-{section_id}",
            program=Program(program_id="P1", name="BS Computer Science"),
            semester=semester,
            academic_year="2024-2025",
            course=course,
            slots=tuple(slots),
        )

    return _make


@pytest.fixture
def sample_student_id() -> str:
    """Provide a sample student ID for testing."""
    return "2024-0001"


@pytest.fixture
def catalog(make_slot, make_section, courses) -> list[Section]:
    """Provide a small catalog.

    Section 1 teaches CS101 on Monday morning and MATH101 on Wednesday.
    Section 2 teaches CS101 on Tuesday and ENG101 on Monday 09:30.
    Section 3 is a legacy section bound to PE101 with one unbound slot.
    """
    return [
        make_section(
            "1",
            [
                make_slot("10", "Monday", "09:00", "10:00", course=courses["101"]),
                make_slot("11", "Wednesday", "13:00", "14:30", room="R204", course=courses["102"]),
            ],
        ),
        make_section(
            "2",
            [
                make_slot("20", "Tuesday", "09:00", "10:00", room="R102", course=courses["101"]),
                make_slot("21", "Monday", "09:30", "10:30", room="R305", course=courses["103"]),
            ],
        ),
        make_section(
            "3",
            [make_slot("30", "Friday", "15:00", "17:00", room="GYM")],
            course=courses["104"],
        ),
    ]


@pytest.fixture
def curriculum(courses) -> list[CurriculumRequirement]:
    """Provide a curriculum in declaration order."""
    return [
        CurriculumRequirement("C1", courses["101"], year_level=1, semester="1"),
        CurriculumRequirement("C1", courses["102"], year_level=1, semester="1"),
        CurriculumRequirement("C1", courses["103"], year_level=1, semester="2"),
        CurriculumRequirement("C1", courses["104"], year_level=2, semester="1"),
    ]


@pytest.fixture
def snapshot(catalog) -> EnrollmentSnapshot:
    """Provide a snapshot of the sample catalog without enrollments."""
    return EnrollmentSnapshot(sections=tuple(catalog))


@pytest.fixture
def gateway(catalog, curriculum) -> FakeRegistrarGateway:
    """Provide an in-memory gateway over the sample catalog."""
    return FakeRegistrarGateway(sections=catalog, curricula={"C1": curriculum})


@pytest.fixture
def enrollment_service(gateway) -> EnrollmentService:
    """Provide an enrollment service over the in-memory gateway."""
    return EnrollmentService(gateway, settings=EnrollmentSettings())


@pytest.fixture
def clean_settings() -> Any:
    """Clear cached settings before and after a test."""
    clear_settings_cache()
    yield
    clear_settings_cache()


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test (requires services)"
    )
