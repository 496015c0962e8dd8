# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""HTTP client for the registrar REST backend.

Implements RegistrarGateway over the backend routes:
- GET /course-sections
- GET /curriculum-details/curriculum/{id}
- GET /enrolled-courses/student/{id}
- POST /enrolled-courses
- DELETE /enrolled-courses/{id}

Raw JSON is validated with the payload models in ``registrar.models`` and
converted to domain objects before it leaves this module.

Example:
    >>> gateway = HttpRegistrarGateway(get_settings().registrar_api)
    >>> sections = await gateway.fetch_catalog()
    >>> await gateway.close()
"""

import dataclasses
import logging
from typing import Any

import httpx
from pydantic import ValidationError

from registrar.core.config.settings import RegistrarAPISettings
from registrar.core.exceptions import InvalidSectionError, InvalidSlotError, TransportError
from registrar.domains.curriculum.resolver import CurriculumRequirement, build_curriculum
from registrar.domains.enrollment.entities import (
    SYNTHETIC_SLOT_PREFIX,
    AcademicTerm,
    Enrollment,
)
from registrar.domains.schedule.section import Section, normalize
from registrar.domains.schedule.slot import Course, ScheduleSlot
from registrar.models.curriculum import CurriculumDetailPayload
from registrar.models.enrollment import EnrolledCoursePayload, EnrollmentCreateRequest
from registrar.services.registrar_api.base import RegistrarGateway

logger = logging.getLogger(__name__)


class HttpRegistrarGateway(RegistrarGateway):
    """Registrar gateway backed by the REST API.

    Attributes:
        _settings: Registrar API configuration.
        _client: HTTP client for API requests.

    Example:
        >>> async with HttpRegistrarGateway(settings) as gateway:
        ...     enrollments = await gateway.fetch_active_enrollments("42")
    """

    def __init__(
        self,
        settings: RegistrarAPISettings,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the gateway.

        Args:
            settings: Registrar API configuration.
            client: Preconfigured HTTP client. Built from settings if omitted.
        """
        self._settings = settings
        self._client = client or httpx.AsyncClient(
            base_url=settings.base_url,
            headers=settings.auth_headers,
            timeout=settings.timeout,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "HttpRegistrarGateway":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def fetch_catalog(self) -> list[Section]:
        """Fetch every section with its slots.

        Sections that cannot be normalized are skipped with a warning, as
        are individual malformed slots.
        """
        rows = await self._request("GET", "/course-sections")

        sections: list[Section] = []
        for row in self._as_list(rows):
            try:
                sections.append(normalize(row, strict=False))
            except InvalidSectionError as e:
                logger.warning("Skipping malformed section: %s", e)

        logger.debug("Fetched catalog: sections=%d", len(sections))
        return sections

    async def fetch_curriculum(self, curriculum_id: str) -> list[CurriculumRequirement]:
        """Fetch the requirements of a curriculum in declaration order."""
        rows = await self._request("GET", f"/curriculum-details/curriculum/{curriculum_id}")

        requirements: list[CurriculumRequirement] = []
        for row in self._as_list(rows):
            try:
                payload = CurriculumDetailPayload.model_validate(row)
            except ValidationError as e:
                logger.warning("Skipping malformed curriculum detail: %s", e)
                continue
            requirement = CurriculumRequirement.from_payload(curriculum_id, payload)
            if requirement is not None:
                requirements.append(requirement)

        return build_curriculum(requirements)

    async def fetch_active_enrollments(self, student_id: str) -> list[Enrollment]:
        """Fetch the enrollment rows of a student."""
        rows = await self._request("GET", f"/enrolled-courses/student/{student_id}")

        enrollments: list[Enrollment] = []
        for row in self._as_list(rows):
            try:
                payload = EnrolledCoursePayload.model_validate(row)
            except ValidationError as e:
                logger.warning("Skipping malformed enrollment row: %s", e)
                continue
            try:
                enrollments.append(self._to_enrollment(payload, str(student_id)))
            except ValueError as e:
                logger.warning(
                    "Skipping enrollment %s: %s", payload.enrolled_course_id, e
                )

        return enrollments

    async def commit_enrollment(
        self,
        student_id: str,
        section_id: str,
        slot_id: str | None = None,
    ) -> Enrollment:
        """Create an Enrolled row via ``POST /enrolled-courses``."""
        request = EnrollmentCreateRequest(
            student_id=str(student_id),
            course_section_id=str(section_id),
            schedule_id=str(slot_id) if slot_id is not None else None,
        )
        body = request.model_dump(by_alias=True, exclude_none=True)

        data = await self._request("POST", "/enrolled-courses", json=body)
        try:
            payload = EnrolledCoursePayload.model_validate(data)
        except ValidationError as e:
            raise TransportError(
                "Unexpected enrollment response from registrar",
                response_body=str(data),
                details={"errors": e.errors(include_url=False)},
            ) from e

        enrollment = self._to_enrollment(payload, str(student_id))
        if enrollment.section_id is None:
            enrollment = dataclasses.replace(enrollment, section_id=str(section_id))

        logger.info(
            "Committed enrollment: id=%s, student=%s, section=%s, slot=%s",
            enrollment.enrollment_id,
            student_id,
            section_id,
            slot_id,
        )
        return enrollment

    async def commit_drop(
        self,
        enrollment_id: str,
        course_id: str | None = None,
        slot_id: str | None = None,
    ) -> None:
        """Drop rows via ``DELETE /enrolled-courses/{id}``.

        The backend identifies a single course row of a multi-course group
        by its schedule id; without one the whole group is dropped.
        """
        params = None
        if slot_id is not None and not str(slot_id).startswith(SYNTHETIC_SLOT_PREFIX):
            params = {"scheduleId": str(slot_id)}
        await self._request("DELETE", f"/enrolled-courses/{enrollment_id}", params=params)

        logger.info(
            "Committed drop: id=%s, course=%s, slot=%s",
            enrollment_id,
            course_id,
            slot_id,
        )

    async def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        """Send a request and decode its JSON body.

        Raises:
            TransportError: On connection failures and non-2xx responses.
        """
        try:
            response = await self._client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                "Registrar API error: %s %s -> %d",
                method,
                url,
                e.response.status_code,
            )
            raise TransportError(
                f"Registrar API request failed: {method} {url}",
                status_code=e.response.status_code,
                response_body=e.response.text,
            ) from e
        except httpx.HTTPError as e:
            logger.error("Registrar API connection error: %s", str(e))
            raise TransportError(
                f"Failed to connect to registrar API: {str(e)}",
                details={"error_type": type(e).__name__},
            ) from e

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise TransportError(
                f"Registrar API returned invalid JSON: {method} {url}",
                status_code=response.status_code,
                response_body=response.text,
            ) from e

    @staticmethod
    def _as_list(data: Any) -> list[Any]:
        """Unwrap list responses, with or without a ``data`` envelope."""
        if isinstance(data, dict):
            data = data.get("data", [])
        if not isinstance(data, list):
            return []
        return data

    @staticmethod
    def _to_enrollment(payload: EnrolledCoursePayload, student_id: str) -> Enrollment:
        """Convert an enrolled-course DTO into an Enrollment."""
        course = Course(
            course_id=payload.course_id or "",
            code=payload.course_code,
            description=payload.course_description,
            credits=payload.credits or 0,
        )

        slot = None
        if payload.day and payload.start_time and payload.end_time:
            slot_id = payload.schedule_id or f"{SYNTHETIC_SLOT_PREFIX}{payload.enrolled_course_id}"
            try:
                slot = ScheduleSlot.parse(
                    slot_id=slot_id,
                    day=payload.day,
                    start_time=payload.start_time,
                    end_time=payload.end_time,
                    room=payload.room,
                    course=course if payload.course_id else None,
                )
            except InvalidSlotError as e:
                logger.warning(
                    "Enrollment %s has an unusable schedule: %s",
                    payload.enrolled_course_id,
                    e,
                )

        term = None
        if payload.semester is not None or payload.academic_year is not None:
            term = AcademicTerm(semester=payload.semester, academic_year=payload.academic_year)

        return Enrollment(
            enrollment_id=payload.enrolled_course_id,
            student_id=payload.student_id or student_id,
            course=course,
            section_id=payload.section_id,
            slot=slot,
            status=payload.status or "Enrolled",
            term=term,
            section_name=payload.section_name,
        )
