# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Course schedule enrollment engine.

Resolves a student's curriculum against the section schedule catalog,
detects time-of-week conflicts and runs single and bulk enrollments
against the registrar backend.
"""

__version__ = "0.1.0"
