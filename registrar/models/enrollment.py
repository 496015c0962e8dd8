# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Wire models for enrolled courses (``/enrolled-courses``)."""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from registrar.models.common import EntityId


class EnrollmentCreateRequest(BaseModel):
    """Body of ``POST /enrolled-courses``.

    Attributes:
        student_id: Student being enrolled.
        course_section_id: Section chosen by the student.
        schedule_id: Slot chosen within the section, if any.
        status: Always "Enrolled" on creation.
    """

    model_config = ConfigDict(populate_by_name=True)

    student_id: str = Field(serialization_alias="studentId")
    course_section_id: str = Field(serialization_alias="courseSectionId")
    schedule_id: str | None = Field(default=None, serialization_alias="scheduleId")
    status: str = "Enrolled"


class EnrolledCoursePayload(BaseModel):
    """Enrolled-course row as returned by the backend.

    The backend flattens section, course and meeting time into one DTO.

    Attributes:
        enrolled_course_id: Enrollment grouping identifier.
        student_id: Owning student, when present in the DTO.
        status: "Enrolled" or "Dropped".
        section_id: Section identifier, when present.
        section_name: Section display name.
        schedule_id: Slot identifier, when present.
        course_id: Course identifier; creation responses may omit it.
        course_code: Course code.
        course_description: Course title.
        credits: Credit units.
        day: Meeting day.
        start_time: Meeting start.
        end_time: Meeting end.
        room: Meeting room.
        semester: Enrollment semester.
        academic_year: Enrollment academic year.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    enrolled_course_id: EntityId = Field(
        validation_alias=AliasChoices("enrolledCourseID", "enrolledCourseId", "id"),
    )
    student_id: EntityId | None = Field(
        default=None,
        validation_alias=AliasChoices("studentId", "studentID"),
    )
    status: str | None = "Enrolled"
    section_id: EntityId | None = Field(
        default=None,
        validation_alias=AliasChoices("courseSectionId", "sectionId", "sectionID"),
    )
    section_name: str | None = Field(default=None, validation_alias=AliasChoices("sectionName"))
    schedule_id: EntityId | None = Field(
        default=None,
        validation_alias=AliasChoices("scheduleId", "scheduleID"),
    )
    course_id: EntityId | None = Field(
        default=None,
        validation_alias=AliasChoices("courseId", "courseID"),
    )
    course_code: str = Field(default="", validation_alias=AliasChoices("courseCode"))
    course_description: str = Field(
        default="",
        validation_alias=AliasChoices("courseDescription"),
    )
    credits: int | None = None
    day: str | None = None
    start_time: str | None = Field(default=None, validation_alias=AliasChoices("startTime"))
    end_time: str | None = Field(default=None, validation_alias=AliasChoices("endTime"))
    room: str | None = None
    semester: EntityId | None = None
    academic_year: EntityId | None = Field(
        default=None,
        validation_alias=AliasChoices("academicYear"),
    )
