# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Registrar backend contract.

The engine never talks to storage directly. Catalog snapshots, curricula
and enrollments are read through a RegistrarGateway and every write goes
through it too. Implementations are async and raise TransportError on
any backend failure; the engine does not retry.
"""

from abc import ABC, abstractmethod

from registrar.domains.curriculum.resolver import CurriculumRequirement
from registrar.domains.enrollment.entities import Enrollment
from registrar.domains.schedule.section import Section


class RegistrarGateway(ABC):
    """Abstract base class for registrar backends."""

    @abstractmethod
    async def fetch_catalog(self) -> list[Section]:
        """Fetch a full snapshot of sections with their slots.

        Raises:
            TransportError: If the backend cannot be reached.
        """
        ...

    @abstractmethod
    async def fetch_curriculum(self, curriculum_id: str) -> list[CurriculumRequirement]:
        """Fetch the requirements of a curriculum in declaration order.

        Raises:
            TransportError: If the backend cannot be reached.
            InvalidCurriculumError: If a course is listed twice.
        """
        ...

    @abstractmethod
    async def fetch_active_enrollments(self, student_id: str) -> list[Enrollment]:
        """Fetch the enrollment rows of a student.

        Raises:
            TransportError: If the backend cannot be reached.
        """
        ...

    @abstractmethod
    async def commit_enrollment(
        self,
        student_id: str,
        section_id: str,
        slot_id: str | None = None,
    ) -> Enrollment:
        """Persist a new Enrolled row.

        Args:
            student_id: Student being enrolled.
            section_id: Chosen section.
            slot_id: Chosen slot, if the section has slots.

        Returns:
            The created enrollment.

        Raises:
            TransportError: If the backend rejects or cannot store the row.
        """
        ...

    @abstractmethod
    async def commit_drop(
        self,
        enrollment_id: str,
        course_id: str | None = None,
        slot_id: str | None = None,
    ) -> None:
        """Mark enrollment rows as Dropped.

        Args:
            enrollment_id: Enrollment grouping identifier.
            course_id: Course to drop; every row of the group when None.
            slot_id: Slot of the dropped course row, when known.

        Raises:
            TransportError: If the backend rejects the drop.
        """
        ...
