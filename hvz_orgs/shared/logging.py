"""Structured JSON logging for the HvZ organization services.

Service modules log through ``get_logger()`` with org/user/game ids as
key/value pairs. Entry points (the CLI) call ``bind_invocation`` so every
line emitted while handling one command carries the same context.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog


def configure_logging(log_level: str = "INFO") -> None:
    """Configure JSON logging to stderr, filtered at ``log_level``."""
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(**initial_context: Any) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(**initial_context)


def bind_invocation(**context: Any) -> None:
    """Replace the per-invocation context; ``None`` values are dropped."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        **{key: value for key, value in context.items() if value is not None}
    )
