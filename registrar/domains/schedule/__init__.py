# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Schedule domain package.

This package provides the schedule catalog model:
- ScheduleSlot and Course value types
- Section aggregate and payload normalization
- Time-of-week conflict detection
- Slot validation for administrative edits
"""

from registrar.domains.schedule.slot import Course, ScheduleSlot
from registrar.domains.schedule.section import Faculty, Program, Section, normalize
from registrar.domains.schedule.conflicts import (
    catalog_slots,
    find_course_schedule_conflict,
    find_course_schedule_conflicts,
    find_global_conflicts,
    overlaps,
)
from registrar.domains.schedule.service import ScheduleService

__all__ = [
    "Course",
    "ScheduleSlot",
    "Program",
    "Faculty",
    "Section",
    "normalize",
    "overlaps",
    "find_global_conflicts",
    "find_course_schedule_conflict",
    "find_course_schedule_conflicts",
    "catalog_slots",
    "ScheduleService",
]
