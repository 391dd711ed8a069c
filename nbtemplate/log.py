"""Logging configuration for nb-template."""

from __future__ import annotations

import logging
import sys

import structlog

_VERBOSITY_LEVELS = (logging.INFO, logging.DEBUG)


def resolve_level(configured: str, verbosity: int = 0) -> int:
    """Combine the configured level name with ``-v`` repetitions."""

    level = getattr(logging, configured.upper(), logging.WARNING)
    if verbosity > 0:
        index = min(verbosity, len(_VERBOSITY_LEVELS)) - 1
        level = min(level, _VERBOSITY_LEVELS[index])
    return level


def setup_logging(level: int = logging.WARNING) -> None:
    """Route structlog through stdlib logging, rendering to stderr."""

    logging.basicConfig(
        level=level,
        format="%(message)s",
        stream=sys.stderr,
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
