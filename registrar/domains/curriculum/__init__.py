# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Curriculum domain package.

This package provides curriculum resolution:
- CurriculumRequirement: A required course with year/semester tags
- CurriculumResolver: Matches requirements against the schedule catalog
"""

from registrar.domains.curriculum.resolver import (
    ALL_SEMESTERS,
    CandidateSlot,
    CurriculumRequirement,
    CurriculumResolver,
    EnrollableCourse,
    YearScope,
    build_curriculum,
)

__all__ = [
    "ALL_SEMESTERS",
    "CandidateSlot",
    "CurriculumRequirement",
    "CurriculumResolver",
    "EnrollableCourse",
    "YearScope",
    "build_curriculum",
]
