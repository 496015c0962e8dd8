# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for curriculum requirement resolution."""

import pytest

from registrar.core.exceptions import InvalidCurriculumError
from registrar.domains.curriculum import (
    CurriculumRequirement,
    CurriculumResolver,
    YearScope,
    build_curriculum,
)
from registrar.domains.enrollment import Enrollment
from registrar.models import CurriculumDetailPayload, EnrollmentStatus


@pytest.fixture
def resolver() -> CurriculumResolver:
    """Create a resolver that surfaces Full slots."""
    return CurriculumResolver()


def _codes(entries) -> list[str]:
    return [entry.course.code for entry in entries]


def _keys(entry) -> list[str]:
    return [candidate.key for candidate in entry.candidate_slots]


class TestResolve:
    """Tests for CurriculumResolver.resolve."""

    def test_declaration_order_and_candidates(self, resolver, curriculum, catalog) -> None:
        """Test every requirement is returned with its slots in scan order."""
        result = resolver.resolve("S1", curriculum, catalog, [])

        assert _codes(result) == ["CS101", "MATH101", "ENG101", "PE101"]
        assert _keys(result[0]) == ["1-10", "2-20"]
        assert _keys(result[1]) == ["1-11"]
        assert _keys(result[2]) == ["2-21"]
        assert _keys(result[3]) == ["3-30"]
        assert result[0].required_year == 1
        assert result[0].required_semester == "1"
        assert result[0].has_multiple_candidates

    def test_semester_filter(self, resolver, curriculum, catalog) -> None:
        assert _codes(resolver.resolve("S1", curriculum, catalog, [], semester="2")) == ["ENG101"]

    def test_semester_filter_compares_normalized_tags(self, resolver, curriculum, catalog) -> None:
        """Test numeric and string semester tags match."""
        result = resolver.resolve("S1", curriculum, catalog, [], semester=1)

        assert _codes(result) == ["CS101", "MATH101", "PE101"]

    def test_all_bypasses_semester_filter(self, resolver, curriculum, catalog) -> None:
        assert len(resolver.resolve("S1", curriculum, catalog, [], semester="ALL")) == 4

    def test_year_filter_exact(self, resolver, curriculum, catalog) -> None:
        result = resolver.resolve("S1", curriculum, catalog, [], year_level=2)

        assert _codes(result) == ["PE101"]

    def test_year_filter_up_to(self, resolver, curriculum, catalog) -> None:
        result = resolver.resolve(
            "S1", curriculum, catalog, [], year_level=1, year_scope=YearScope.UP_TO
        )

        assert _codes(result) == ["CS101", "MATH101", "ENG101"]

    def test_enrolled_course_excluded_through_any_section(
        self, resolver, curriculum, catalog, courses
    ) -> None:
        """Test a course enrolled in any section satisfies the requirement."""
        enrollment = Enrollment(
            enrollment_id="E1",
            student_id="S1",
            course=courses["101"],
            section_id="2",
            slot=catalog[1].find_slot("20"),
        )

        result = resolver.resolve("S1", curriculum, catalog, [enrollment])

        assert "CS101" not in _codes(result)

    def test_dropped_and_foreign_enrollments_ignored(
        self, resolver, curriculum, catalog, courses
    ) -> None:
        dropped = Enrollment("E1", "S1", courses["101"], status=EnrollmentStatus.DROPPED)
        other_student = Enrollment("E2", "S2", courses["102"])

        result = resolver.resolve("S1", curriculum, catalog, [dropped, other_student])

        assert _codes(result) == ["CS101", "MATH101", "ENG101", "PE101"]

    def test_cancelled_slot_leaves_empty_candidates(
        self, resolver, make_slot, make_section, courses
    ) -> None:
        """Test a requirement whose only slot is Cancelled is still returned."""
        section = make_section(
            "1",
            [
                make_slot("10", "Monday", course=courses["101"]),
                make_slot("11", "Tuesday", status="Cancelled", course=courses["102"]),
            ],
        )
        curriculum = [CurriculumRequirement("C1", courses["102"], 1, "1")]

        result = resolver.resolve("S1", curriculum, [section], [])

        assert len(result) == 1
        assert result[0].course == courses["102"]
        assert result[0].candidate_slots == ()
        assert not result[0].has_candidates

    def test_completed_slot_excluded(self, resolver, make_slot, make_section, courses) -> None:
        section = make_section("1", [make_slot("10", status="Completed", course=courses["101"])])
        curriculum = [CurriculumRequirement("C1", courses["101"], 1, "1")]

        assert resolver.resolve("S1", curriculum, [section], [])[0].candidate_slots == ()

    def test_full_slots_configurable(self, make_slot, make_section, courses) -> None:
        section = make_section("1", [make_slot("10", status="Full", course=courses["101"])])
        curriculum = [CurriculumRequirement("C1", courses["101"], 1, "1")]

        surfaced = CurriculumResolver(surface_full_slots=True).resolve("S1", curriculum, [section], [])
        hidden = CurriculumResolver(surface_full_slots=False).resolve("S1", curriculum, [section], [])

        assert len(surfaced[0].candidate_slots) == 1
        assert hidden[0].candidate_slots == ()

    def test_duplicate_candidates_collapsed(self, resolver, make_slot, make_section, courses) -> None:
        """Test a section listed twice in the catalog yields one candidate."""
        section = make_section("1", [make_slot("10", course=courses["101"])])
        curriculum = [CurriculumRequirement("C1", courses["101"], 1, "1")]

        result = resolver.resolve("S1", curriculum, [section, section], [])

        assert _keys(result[0]) == ["1-10"]


class TestBuildCurriculum:
    """Tests for curriculum construction."""

    def test_duplicate_course_rejected(self, courses) -> None:
        with pytest.raises(InvalidCurriculumError):
            build_curriculum(
                [
                    CurriculumRequirement("C1", courses["101"], 1, "1"),
                    CurriculumRequirement("C1", courses["101"], 2, "2"),
                ]
            )

    def test_same_course_in_different_curricula_allowed(self, courses) -> None:
        result = build_curriculum(
            [
                CurriculumRequirement("C1", courses["101"], 1, "1"),
                CurriculumRequirement("C2", courses["101"], 1, "1"),
            ]
        )

        assert len(result) == 2

    def test_from_payload(self) -> None:
        payload = CurriculumDetailPayload.model_validate(
            {
                "curriculumDetailID": 9,
                "course": {"id": 101, "courseCode": "CS101", "credits": 3},
                "YearLevel": 1,
                "semester": 2,
            }
        )

        requirement = CurriculumRequirement.from_payload("C1", payload)

        assert requirement.course.course_id == "101"
        assert requirement.year_level == 1
        assert requirement.semester == "2"

    def test_from_payload_without_course(self) -> None:
        payload = CurriculumDetailPayload.model_validate({"curriculumDetailID": 9})

        assert CurriculumRequirement.from_payload("C1", payload) is None
