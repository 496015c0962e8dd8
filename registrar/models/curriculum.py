# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Wire model for curriculum details (``GET /curriculum-details/curriculum/{id}``)."""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from registrar.models.catalog import CoursePayload
from registrar.models.common import EntityId


class CurriculumDetailPayload(BaseModel):
    """One required course of a curriculum.

    The backend is inconsistent about casing of the year and semester
    keys ("YearLevel" vs "yearLevel"); both are accepted.

    Attributes:
        curriculum_detail_id: Row identifier.
        course: Required course. Rows without a course are skipped.
        year_level: Year level the course is taken in.
        semester: Semester tag the course is taken in.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    curriculum_detail_id: EntityId | None = Field(
        default=None,
        validation_alias=AliasChoices("curriculumDetailID", "curriculumDetailId", "id"),
    )
    course: CoursePayload | None = None
    year_level: int | None = Field(
        default=None,
        validation_alias=AliasChoices("yearLevel", "YearLevel", "year_level"),
    )
    semester: EntityId | None = Field(
        default=None,
        validation_alias=AliasChoices("semester", "Semester"),
    )
