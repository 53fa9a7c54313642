"""Structured logging for klaw-enum.

Library code logs through structlog loggers bound to stdlib loggers under the
``klaw_enum`` namespace, so nothing is emitted until an application configures
logging (either its own stdlib setup or ``configure_logging``).

Uses structlog's ProcessorFormatter so that structlog events and plain stdlib
records from the same namespace render identically.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

__all__ = [
    'LOGGER_NAME',
    'configure_logging',
    'get_logger',
]

LOGGER_NAME = 'klaw_enum'


def _pre_chain() -> list[Any]:
    """Processors applied to both structlog events and plain stdlib records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt='iso'),
        structlog.stdlib.ExtraAdder(),
    ]


def _bound_chain() -> list[Any]:
    """Chain for loggers returned by get_logger; hands off to ProcessorFormatter."""
    return [
        structlog.stdlib.filter_by_level,
        *_pre_chain(),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ]


def _renderer_for(json_output: bool = True) -> Any:
    """JSON lines, or the dev console renderer (colored on a TTY)."""
    if json_output:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(
    level: str = 'INFO',
    *,
    json_output: bool = True,
) -> logging.Handler:
    """Attach a structured handler to the ``klaw_enum`` logger.

    Only the library's own logger is touched; the root logger and any
    application handlers are left alone. Calling this again replaces the
    handler installed by the previous call.

    Args:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL").
        json_output: If True, emit JSON logs. If False, use console output.

    Returns:
        The installed handler.
    """
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_pre_chain(),
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer_for(json_output),
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    handler.set_name(LOGGER_NAME)

    logger = logging.getLogger(LOGGER_NAME)
    for existing in [h for h in logger.handlers if h.get_name() == LOGGER_NAME]:
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler


def get_logger(name: str | None = None) -> Any:
    """Get a structlog logger backed by a stdlib logger.

    Args:
        name: Logger name, normally the caller's ``__name__``. Defaults to the
            package logger.

    Returns:
        A structlog BoundLogger proxy.
    """
    return structlog.wrap_logger(
        logging.getLogger(name or LOGGER_NAME),
        processors=_bound_chain(),
        wrapper_class=structlog.stdlib.BoundLogger,
    )
