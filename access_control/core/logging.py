"""
Logging Configuration

Structured logging setup using structlog.

Every event passes through redact_credentials, so device and server
credentials or user password hashes never reach the log output even when a
call site logs a whole payload. Request-scoped fields (request_id, acting
user) are bound with log_context and merged into every event.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.typing import EventDict, Processor, WrappedLogger

from access_control.config.settings import settings

REDACTED = "***"

# Keys masked at any depth of an event
SENSITIVE_KEYS = frozenset(
    {"password", "password_hash", "access_token", "api_token", "authorization"}
)


def _redact(value: Any) -> Any:
    if isinstance(value, dict):
        return {
            key: REDACTED if key in SENSITIVE_KEYS and item is not None else _redact(item)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [_redact(item) for item in value]
    if type(value) is tuple:
        return tuple(_redact(item) for item in value)
    return value


def redact_credentials(
    _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> EventDict:
    """Mask credential values in an event before it is rendered."""
    return _redact(event_dict)


def setup_logging() -> None:
    """Configure structured logging for the application."""
    is_dev = settings.is_development
    level = getattr(logging, settings.LOG_LEVEL.upper())

    # PrintLoggerFactory is used below, so no add_logger_name (needs stdlib loggers)
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        redact_credentials,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if is_dev:
        final_processors: list[Processor] = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=True),
        ]
    else:
        final_processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=final_processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # SQLAlchemy, uvicorn and alembic go through the standard library
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
        force=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


def log_context(**kwargs: Any) -> None:
    """Bind fields to every log call made later in the current request.

    Example:
        log_context(request_id="3f2c9a1b", user_id=str(user.id))
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_log_context() -> None:
    """Drop all request-scoped fields."""
    structlog.contextvars.clear_contextvars()


setup_logging()

logger = get_logger("access_control")
