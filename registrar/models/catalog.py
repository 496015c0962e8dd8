# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Wire models for the course-section catalog.

These Pydantic models validate the raw JSON returned by the registrar
backend for ``GET /course-sections``. A section arrives in one of two
shapes:

- the slots collection shape: ``{"schedules": [{...}, {...}]}``
- the legacy single embedded slot shape: ``{"schedule": {...}}``

Both are accepted here as-is; collapsing them into one representation is
the job of ``registrar.domains.schedule.section.normalize``.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from registrar.models.common import EntityId


class CoursePayload(BaseModel):
    """Course as embedded in sections, schedules and curriculum details.

    Attributes:
        id: Course identifier.
        course_code: Short course code (e.g., "CS101").
        course_description: Course title / description.
        credits: Credit units.
        program_id: Owning program identifier.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: EntityId = Field(validation_alias=AliasChoices("id", "courseID", "courseId"))
    course_code: str = Field(
        default="",
        validation_alias=AliasChoices("courseCode", "course_code"),
    )
    course_description: str = Field(
        default="",
        validation_alias=AliasChoices("courseDescription", "course_description", "courseName"),
    )
    credits: int | None = None
    program_id: EntityId | None = Field(
        default=None,
        validation_alias=AliasChoices("programId", "programID", "program_id"),
    )


class ProgramPayload(BaseModel):
    """Program reference embedded in a section."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    program_id: EntityId = Field(
        validation_alias=AliasChoices("programID", "programId", "id"),
    )
    program_name: str = Field(
        default="",
        validation_alias=AliasChoices("programName", "program_name", "name"),
    )


class FacultyPayload(BaseModel):
    """Faculty reference embedded in a section."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    faculty_id: EntityId = Field(
        validation_alias=AliasChoices("facultyID", "facultyId", "id"),
    )
    first_name: str = Field(default="", validation_alias=AliasChoices("firstName", "first_name"))
    last_name: str = Field(default="", validation_alias=AliasChoices("lastName", "last_name"))


class SlotPayload(BaseModel):
    """One schedule (meeting time) as returned by the backend.

    Day, times and status are kept as strings here; they are validated
    when the domain ScheduleSlot is built so that malformed values surface
    as InvalidSlotError rather than a generic validation failure.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    schedule_id: EntityId = Field(
        validation_alias=AliasChoices("scheduleID", "scheduleId", "id"),
    )
    day: str | None = None
    start_time: str | None = Field(
        default=None,
        validation_alias=AliasChoices("startTime", "start_time"),
    )
    end_time: str | None = Field(
        default=None,
        validation_alias=AliasChoices("endTime", "end_time"),
    )
    room: str | None = None
    status: str | None = None
    course: CoursePayload | None = None


class SectionPayload(BaseModel):
    """Course section as returned by ``GET /course-sections``.

    Attributes:
        section_id: Section identifier.
        section_name: Display name, conventionally "<year>-<ordinal>".
        semester: Semester label.
        year: Academic year.
        program: Owning program.
        faculty: Assigned faculty, if any.
        course: Section-level course (legacy direct-course sections).
        schedules: Slots collection shape.
        schedule: Legacy single embedded slot shape.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    section_id: EntityId = Field(
        validation_alias=AliasChoices("sectionID", "sectionId", "id"),
    )
    section_name: str = Field(
        default="",
        validation_alias=AliasChoices("sectionName", "section_name"),
    )
    semester: EntityId | None = None
    year: EntityId | None = Field(
        default=None,
        validation_alias=AliasChoices("year", "academicYear"),
    )
    program: ProgramPayload | None = None
    faculty: FacultyPayload | None = None
    course: CoursePayload | None = None
    schedules: list[SlotPayload] | None = None
    schedule: SlotPayload | None = None
