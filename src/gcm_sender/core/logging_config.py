"""Structured logging setup for the GCM sender."""

import logging
import sys
from typing import Any, Protocol

import structlog

from gcm_sender.core.config import settings


class ErrorLogger(Protocol):
    """Anything that can record an error line."""

    def error(self, message: str) -> Any: ...


def stderr_logger() -> structlog.typing.BindableLogger:
    """Default error sink: a structlog logger writing to standard error.

    Processors come from the current structlog configuration, only the
    output stream is fixed.
    """
    return structlog.wrap_logger(structlog.PrintLogger(file=sys.stderr))


def configure_logging(level: str | None = None) -> None:
    """Configure structlog for console output on stderr.

    Args:
        level: Minimum level name; defaults to ``GCM_LOG_LEVEL``
    """
    level = level or settings.log_level
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
