# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Exception hierarchy for the registrar engine.

This module defines every error the engine raises:
- RegistrarError: Base exception for all registrar errors
- InvalidSlotError / InvalidSectionError / InvalidCurriculumError:
  malformed catalog input, raised at construction time
- EnrollmentRejectedError and subclasses: recoverable, user-correctable
  rejections of an enrollment or slot booking, each with a reason code
- NotEnrolledError / SectionNotFoundError: lookups that found nothing
- UnaddressableDropError: single-course drop the backend cannot target
- TransportError: failures of the external registrar backend
"""

from enum import Enum
from typing import Any


class RejectionReason(str, Enum):
    """Machine-checkable reason codes for rejected enrollment attempts."""

    NO_SELECTION = "NoSelection"
    SCHEDULE_CONFLICT = "ScheduleConflict"
    DUPLICATE_COURSE_SCHEDULE = "DuplicateCourseSchedule"
    ALREADY_ENROLLED = "AlreadyEnrolled"
    TRANSPORT_ERROR = "TransportError"


class RegistrarError(Exception):
    """Base exception for all registrar errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional error context.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize registrar error.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation with details if available."""
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class InvalidSlotError(RegistrarError):
    """Raised when a schedule slot cannot be constructed.

    Attributes:
        fields: Names of the offending fields.
    """

    def __init__(
        self,
        message: str,
        fields: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.fields = fields or []
        super().__init__(message, details)

    def __str__(self) -> str:
        base = self.message
        if self.fields:
            base = f"{base} (fields: {', '.join(self.fields)})"
        return base


class InvalidSectionError(RegistrarError):
    """Raised when a section payload cannot be normalized."""

    pass


class InvalidCurriculumError(RegistrarError):
    """Raised when a curriculum lists the same course more than once."""

    pass


class SectionNotFoundError(RegistrarError):
    """Raised when a section id is not present in the catalog snapshot."""

    pass


class NotEnrolledError(RegistrarError):
    """Raised when no active enrollment matches a drop request."""

    pass


class UnaddressableDropError(RegistrarError):
    """Raised when one course of a multi-course enrollment cannot be dropped alone.

    The backend singles out a course row by its schedule id. Rows without
    a real schedule id can only be dropped together with their group.
    """

    pass


class EnrollmentRejectedError(RegistrarError):
    """Base class for rejected enrollment attempts.

    Rejections are recoverable: the caller can correct the selection and
    try again. Prior state is never modified by a rejected attempt.

    Attributes:
        reason: Machine-checkable reason code.
        detail: Human-readable explanation shown to the user.
        course_id: Course the attempt targeted, when known.
    """

    reason: RejectionReason

    def __init__(
        self,
        detail: str,
        course_id: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        """Initialize enrollment rejection.

        Args:
            detail: Human-readable explanation.
            course_id: Course the attempt targeted, when known.
            details: Optional dictionary with additional error context.
        """
        self.detail = detail
        self.course_id = course_id
        super().__init__(detail, details)

    def __str__(self) -> str:
        """Return string representation prefixed with the reason code."""
        return f"[{self.reason.value}] {self.detail}"


class NoSelectionError(EnrollmentRejectedError):
    """Raised when no schedule slot was chosen for a course."""

    reason = RejectionReason.NO_SELECTION


class ScheduleConflictError(EnrollmentRejectedError):
    """Raised when the chosen slot overlaps an already booked slot.

    Attributes:
        conflicts: Descriptions of the conflicting slots.
    """

    reason = RejectionReason.SCHEDULE_CONFLICT

    def __init__(
        self,
        detail: str,
        conflicts: list[str] | None = None,
        course_id: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.conflicts = conflicts or []
        super().__init__(detail, course_id=course_id, details=details)

    def __str__(self) -> str:
        base = super().__str__()
        if self.conflicts:
            base = f"{base}: {'; '.join(self.conflicts)}"
        return base


class DuplicateCourseScheduleError(EnrollmentRejectedError):
    """Raised when the course already meets at an overlapping time in the section."""

    reason = RejectionReason.DUPLICATE_COURSE_SCHEDULE


class AlreadyEnrolledError(EnrollmentRejectedError):
    """Raised when the student already has an active enrollment for the course."""

    reason = RejectionReason.ALREADY_ENROLLED


class TransportError(RegistrarError):
    """Error from the external registrar backend.

    Raised when a catalog fetch or a commit fails or the backend is
    unreachable. The engine never retries; the caller decides.

    Attributes:
        status_code: HTTP status code from the backend, if any.
        response_body: Raw response body if available.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        """Initialize transport error.

        Args:
            message: Human-readable error description.
            status_code: HTTP status code from the backend.
            response_body: Raw response body if available.
            details: Optional dictionary with additional error context.
        """
        self.status_code = status_code
        self.response_body = response_body
        super().__init__(message, details)

    def __str__(self) -> str:
        """Return string representation with status code."""
        base = f"{self.message}"
        if self.status_code:
            base = f"[{self.status_code}] {base}"
        if self.details:
            base = f"{base} - Details: {self.details}"
        return base
