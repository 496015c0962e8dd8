# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Structured logging for the registrar engine.

Engine modules log through ``logging.getLogger(__name__)`` so that the
library stays quiet until an application opts in. ``setup_logging`` attaches
a structlog ``ProcessorFormatter`` to the ``registrar`` logger, which renders
those records as colored console lines in development and as JSON lines
otherwise.

Values bound with ``log_context`` (the enrollment service binds the student
being processed) are merged into every record emitted inside the block.

Example:
    >>> from registrar.core.config import get_settings
    >>> from registrar.utils.logging import log_context, setup_logging
    >>> setup_logging(get_settings())
    >>> with log_context(student_id="2024-0001"):
    ...     result = await service.enroll_many("2024-0001", selections, snapshot)
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, TextIO

import structlog
from structlog.types import Processor

if TYPE_CHECKING:
    from registrar.core.config.settings import Settings

ENGINE_LOGGER = "registrar"

# Third-party loggers kept at WARNING regardless of the engine level
_QUIET_LOGGERS = ("httpx", "httpcore")


def setup_logging(settings: "Settings", stream: TextIO | None = None) -> logging.Handler:
    """Route the engine's log records through structlog.

    Replaces any handler installed by an earlier call, so calling it again
    with new settings reconfigures the output.

    Args:
        settings: Application settings providing log_level, debug and
            environment.
        stream: Output stream. Defaults to stdout.

    Returns:
        The handler attached to the ``registrar`` logger.
    """
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    pre_chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.is_development or settings.debug:
        renderers: list[Processor] = [structlog.dev.ConsoleRenderer(colors=True)]
    else:
        renderers = [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, *renderers],
        )
    )
    handler.set_name(ENGINE_LOGGER)

    engine_logger = logging.getLogger(ENGINE_LOGGER)
    for existing in list(engine_logger.handlers):
        if existing.get_name() == ENGINE_LOGGER:
            engine_logger.removeHandler(existing)
    engine_logger.addHandler(handler)
    engine_logger.setLevel(log_level)
    engine_logger.propagate = False

    for logger_name in _QUIET_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    return handler


@contextmanager
def log_context(**values: object) -> Iterator[None]:
    """Bind values to every log record emitted inside the block.

    Values bound by an enclosing block are restored on exit.

    Args:
        **values: Key-value pairs, e.g. ``student_id``.
    """
    with structlog.contextvars.bound_contextvars(**values):
        yield
