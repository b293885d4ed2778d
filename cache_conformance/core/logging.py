"""Structured logging configuration.

Features:
- JSON-formatted log output for production and CI runs
- Human-readable format for development
- Suite context on every entry
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import Processor

from cache_conformance.core.config import get_settings


_configured = False

_JSON_ENVIRONMENTS = ("production", "staging", "ci")


def add_suite_context(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Add suite context to all log entries.

    Args:
        logger: The wrapped logger object.
        method_name: The name of the method called on the logger.
        event_dict: The event dictionary to process.

    Returns:
        Updated event dictionary with suite context.
    """
    settings = get_settings()
    event_dict["suite"] = settings.suite_name
    event_dict["environment"] = settings.environment
    return event_dict


def configure_logging(force: bool = False) -> None:
    """Configure structured logging for the suite.

    In development: Human-readable colored output
    In production/CI: JSON-formatted structured logs

    Args:
        force: Reconfigure even if logging was already configured.
    """
    global _configured
    if _configured and not force:
        return

    settings = get_settings()
    use_json = settings.environment in _JSON_ENVIRONMENTS
    level = logging.getLevelName(settings.log_level.upper())

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_suite_context,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if use_json:
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )
    _configured = True


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Optional logger name (module name recommended).

    Returns:
        Configured structlog BoundLogger instance.

    Example:
        ```python
        from cache_conformance.core.logging import get_logger

        logger = get_logger(__name__)
        logger.info("case_passed", case_id="miss-default")
        ```
    """
    return structlog.get_logger(name)

