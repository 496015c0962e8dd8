# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for Schedule service."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from registrar.core.exceptions import (
    DuplicateCourseScheduleError,
    RejectionReason,
    ScheduleConflictError,
    SectionNotFoundError,
    TransportError,
)
from registrar.domains.schedule import ScheduleService


@pytest.fixture
def schedule_service() -> ScheduleService:
    """Create schedule service without a gateway."""
    return ScheduleService()


class TestValidateSlot:
    """Tests for validating administrative slot edits."""

    def test_free_time_accepted(self, schedule_service, make_slot, catalog, courses) -> None:
        candidate = make_slot("new", "Thursday", "09:00", "10:00", course=courses["102"])

        schedule_service.validate_slot("1", candidate, catalog)

    def test_overlap_with_other_section_rejected(self, schedule_service, make_slot, catalog) -> None:
        """Test a new slot overlapping Section 2's ENG101 slot."""
        candidate = make_slot("new", "Monday", "10:00", "11:00")

        with pytest.raises(ScheduleConflictError) as exc_info:
            schedule_service.validate_slot("1", candidate, catalog)

        error = exc_info.value
        assert error.reason is RejectionReason.SCHEDULE_CONFLICT
        assert error.detail == "This time slot conflicts with existing schedules in other sections."
        assert error.conflicts == ["1-2: ENG101 Monday 9:30 AM-10:30 AM • Room: R305"]

    def test_edit_excludes_previous_version(self, schedule_service, catalog) -> None:
        """Test moving a slot within its own time range is allowed."""
        slot = catalog[0].find_slot("11")
        edited = slot.replace(start_time="13:30", end_time="15:00")

        schedule_service.validate_slot("1", edited, catalog, exclude_slot_id="11")

    def test_cancelled_slots_do_not_block(self, schedule_service, make_slot, make_section) -> None:
        sections = [
            make_section("1"),
            make_section("2", [make_slot("20", "Monday", "09:00", "10:00", status="Cancelled")]),
        ]
        candidate = make_slot("new", "Monday", "09:00", "10:00")

        schedule_service.validate_slot("1", candidate, sections)

    def test_duplicate_course_schedule_rejected(
        self, schedule_service, make_slot, make_section, courses
    ) -> None:
        """Test a course meeting twice at once in one section."""
        sections = [
            make_section(
                "1",
                [make_slot("10", "Monday", "09:00", "10:00", status="Cancelled", course=courses["101"])],
            )
        ]
        candidate = make_slot("new", "Monday", "09:30", "10:30", course=courses["101"])

        with pytest.raises(DuplicateCourseScheduleError) as exc_info:
            schedule_service.validate_slot("1", candidate, sections)

        assert exc_info.value.detail == "This course already has a different schedule in this section."
        assert exc_info.value.course_id == "101"

    def test_unknown_section(self, schedule_service, make_slot, catalog) -> None:
        candidate = make_slot("new", "Thursday", "09:00", "10:00")

        with pytest.raises(SectionNotFoundError):
            schedule_service.validate_slot("404", candidate, catalog)


class TestCheckSlot:
    """Tests for validating against a freshly fetched catalog."""

    @pytest.mark.asyncio
    async def test_fetches_catalog_each_time(self, make_slot, catalog) -> None:
        gateway = MagicMock()
        gateway.fetch_catalog = AsyncMock(return_value=catalog)
        service = ScheduleService(gateway)
        candidate = make_slot("new", "Saturday", "08:00", "09:00")

        await service.check_slot("1", candidate)
        await service.check_slot("2", candidate)

        assert gateway.fetch_catalog.await_count == 2

    @pytest.mark.asyncio
    async def test_transport_error_propagates(self, make_slot) -> None:
        gateway = MagicMock()
        gateway.fetch_catalog = AsyncMock(side_effect=TransportError("down", status_code=502))
        service = ScheduleService(gateway)

        with pytest.raises(TransportError):
            await service.check_slot("1", make_slot("new"))

    @pytest.mark.asyncio
    async def test_requires_gateway(self, schedule_service, make_slot) -> None:
        with pytest.raises(RuntimeError):
            await schedule_service.check_slot("1", make_slot("new"))
