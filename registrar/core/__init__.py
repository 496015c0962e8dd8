# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Core infrastructure for the registrar engine.

- config: Environment-driven settings
- exceptions: Error hierarchy and rejection reason codes
"""
