"""Structured logging configuration.

This module initializes structlog with a stable JSON format.
Callers bind per-call context (component, category, counts) on the
returned logger instead of sharing mutable global state.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from core.constants import DEFAULT_LOG_LEVEL

_configured_level: str | None = None


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Configure structlog processors and level filtering.

    Args:
        level: Minimum level name, e.g. ``INFO``.
    """
    global _configured_level
    if _configured_level == level:
        return
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(sort_keys=True),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level)),
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )
    _configured_level = level


def _stderr_logger(*args: Any) -> Any:
    """Print to the stderr stream current at logger creation."""
    return structlog.PrintLogger(file=sys.stderr)


def get_logger(name: str, /, **context: Any) -> Any:
    """Return a module logger with bound context.

    Args:
        name: Logger name, usually __name__.
        **context: Fields attached to every event from this logger.

    Returns:
        A bound structlog logger.
    """
    if _configured_level is None:
        configure_logging()
    return structlog.get_logger().bind(logger=name, **context)
