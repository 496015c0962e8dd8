# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pydantic models for registrar backend payloads and shared enums."""

from registrar.models.catalog import (
    CoursePayload,
    FacultyPayload,
    ProgramPayload,
    SectionPayload,
    SlotPayload,
)
from registrar.models.common import DayOfWeek, EnrollmentStatus, EntityId, SlotStatus
from registrar.models.curriculum import CurriculumDetailPayload
from registrar.models.enrollment import EnrolledCoursePayload, EnrollmentCreateRequest

__all__ = [
    # Enums
    "DayOfWeek",
    "SlotStatus",
    "EnrollmentStatus",
    "EntityId",
    # Catalog
    "CoursePayload",
    "ProgramPayload",
    "FacultyPayload",
    "SlotPayload",
    "SectionPayload",
    # Curriculum
    "CurriculumDetailPayload",
    # Enrollment
    "EnrolledCoursePayload",
    "EnrollmentCreateRequest",
]
