# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Utility functions and helpers for the registrar engine.

This package contains cross-cutting utilities:
- logging: Structured logging with structlog
- timeofday: Wall-clock time parsing and formatting
"""

from registrar.utils.logging import log_context, setup_logging
from registrar.utils.timeofday import format_12h, parse_clock_time

__all__ = [
    # Logging
    "setup_logging",
    "log_context",
    # Time of day
    "parse_clock_time",
    "format_12h",
]
