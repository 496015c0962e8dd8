# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Registrar backend access.

This package provides:
- RegistrarGateway: Async contract the engine reads and writes through
- HttpRegistrarGateway: httpx client for the registrar REST API

Usage:
    from registrar.services.registrar_api import HttpRegistrarGateway
    from registrar.core.config import get_settings

    async with HttpRegistrarGateway(get_settings().registrar_api) as gateway:
        sections = await gateway.fetch_catalog()
"""

from registrar.services.registrar_api.base import RegistrarGateway
from registrar.services.registrar_api.client import HttpRegistrarGateway

__all__ = [
    "RegistrarGateway",
    "HttpRegistrarGateway",
]
