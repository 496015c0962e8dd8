# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment domain package.

This package provides student enrollment functionality including:
- Enrollment records and catalog snapshots
- Single and bulk enrollment with conflict checks
- Dropping enrollments
- Enrollment statistics
"""

from registrar.domains.enrollment.entities import (
    AcademicTerm,
    Enrollment,
    EnrollmentSnapshot,
)
from registrar.domains.enrollment.service import (
    AttemptState,
    BulkEnrollFailure,
    BulkEnrollResult,
    BulkOutcome,
    EnrollmentService,
    EnrollmentSummary,
    parse_selection_key,
    summarize_enrollments,
)

__all__ = [
    "AcademicTerm",
    "Enrollment",
    "EnrollmentSnapshot",
    "AttemptState",
    "BulkEnrollFailure",
    "BulkEnrollResult",
    "BulkOutcome",
    "EnrollmentService",
    "EnrollmentSummary",
    "parse_selection_key",
    "summarize_enrollments",
]
