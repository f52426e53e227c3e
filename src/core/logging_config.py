"""Structured logging configuration.

This module initializes structlog with a stable structured format.
Events are rendered as JSON and routed through stdlib logging handlers.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

_CONFIGURED = False


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A structlog logger with structured output.
    """
    _configure_structlog()
    return structlog.get_logger(name)


def configure_log_output(level: str = "INFO") -> None:
    """Send rendered events to stderr at the given level.

    Args:
        level: Standard logging level name.
    """
    logging.basicConfig(level=level.upper(), stream=sys.stderr, format="%(message)s")


def _configure_structlog() -> None:
    global _CONFIGURED
    if _CONFIGURED:
        return
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.stdlib.add_logger_name,
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(sort_keys=True),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    _CONFIGURED = True
