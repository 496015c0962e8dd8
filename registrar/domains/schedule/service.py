# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Schedule service for validating slot changes against the catalog.

This module provides the ScheduleService class used before an
administrator creates or edits a schedule slot:
- Global overlap check against every slot of the catalog
- Same-course overlap check within the target section
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from registrar.core.exceptions import (
    DuplicateCourseScheduleError,
    ScheduleConflictError,
    SectionNotFoundError,
)
from registrar.domains.schedule.conflicts import (
    catalog_slots,
    find_course_schedule_conflicts,
    find_global_conflicts,
)
from registrar.domains.schedule.section import Section
from registrar.domains.schedule.slot import ScheduleSlot

if TYPE_CHECKING:
    from registrar.services.registrar_api.base import RegistrarGateway

logger = logging.getLogger(__name__)

GLOBAL_CONFLICT_MESSAGE = "This time slot conflicts with existing schedules in other sections."
COURSE_CONFLICT_MESSAGE = "This course already has a different schedule in this section."


class ScheduleService:
    """Service for validating schedule slots before they are saved.

    Attributes:
        gateway: Optional registrar backend used to fetch a fresh catalog.
    """

    def __init__(self, gateway: RegistrarGateway | None = None) -> None:
        """Initialize schedule service.

        Args:
            gateway: Registrar backend; required only for ``check_slot``.
        """
        self.gateway = gateway

    def validate_slot(
        self,
        section_id: str,
        candidate: ScheduleSlot,
        sections: Sequence[Section],
        exclude_slot_id: str | None = None,
    ) -> None:
        """Validate a new or edited slot against a catalog snapshot.

        Args:
            section_id: Section the slot is being saved into.
            candidate: Slot being created or the edited version of a slot.
            sections: Catalog snapshot to validate against.
            exclude_slot_id: Identifier of the slot being edited, if any.

        Raises:
            SectionNotFoundError: If the section is not in the snapshot.
            ScheduleConflictError: If the slot overlaps any other slot.
            DuplicateCourseScheduleError: If the slot's course already meets
                at an overlapping time in the section.
        """
        section_id = str(section_id)
        if not any(section.section_id == section_id for section in sections):
            raise SectionNotFoundError(f"Section {section_id} not found")

        pairs = catalog_slots(sections)
        conflicts = find_global_conflicts(
            candidate,
            [slot for _, slot in pairs],
            exclude_slot_id=exclude_slot_id,
        )
        if conflicts:
            owners = {id(slot): section for section, slot in pairs}
            described = [
                f"{owners[id(slot)].name or owners[id(slot)].section_id}: {slot.describe()}"
                for slot in conflicts
            ]
            logger.warning(
                "Slot rejected: section=%s, day=%s, conflicts=%d",
                section_id,
                candidate.day.value,
                len(conflicts),
            )
            raise ScheduleConflictError(GLOBAL_CONFLICT_MESSAGE, conflicts=described)

        if candidate.course is not None:
            duplicates = find_course_schedule_conflicts(
                section_id,
                candidate.course,
                candidate,
                sections,
                exclude_slot_id=exclude_slot_id,
            )
            if duplicates:
                logger.warning(
                    "Slot rejected: section=%s, course=%s overlaps itself",
                    section_id,
                    candidate.course.course_id,
                )
                raise DuplicateCourseScheduleError(
                    COURSE_CONFLICT_MESSAGE,
                    course_id=candidate.course.course_id,
                )

        logger.debug("Slot accepted: section=%s, slot=%s", section_id, candidate.slot_id)

    async def check_slot(
        self,
        section_id: str,
        candidate: ScheduleSlot,
        exclude_slot_id: str | None = None,
    ) -> list[Section]:
        """Fetch a fresh catalog and validate a slot against it.

        Args:
            section_id: Section the slot is being saved into.
            candidate: Slot being created or edited.
            exclude_slot_id: Identifier of the slot being edited, if any.

        Returns:
            The catalog snapshot the slot was validated against.

        Raises:
            RuntimeError: If the service has no gateway.
            TransportError: If the catalog cannot be fetched.
            SectionNotFoundError: If the section does not exist.
            ScheduleConflictError: If the slot overlaps any other slot.
            DuplicateCourseScheduleError: If the course overlaps itself.
        """
        if self.gateway is None:
            raise RuntimeError("ScheduleService.check_slot requires a gateway")

        sections = await self.gateway.fetch_catalog()
        self.validate_slot(section_id, candidate, sections, exclude_slot_id=exclude_slot_id)
        return sections
