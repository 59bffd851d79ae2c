"""Structured logging for the TheTVDB client.

Every module logs snake_case structlog events through ``get_logger``.
Importing the package does not touch logging; applications that want the
events rendered call ``configure_logging()`` once at startup. Output goes
to the ``thetvdb`` stdlib logger only, as JSON in production and as
console-friendly text in development.
"""

import logging
import re
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from thetvdb.config import settings

PACKAGE_LOGGER = "thetvdb"

SENSITIVE_KEYS = frozenset(
    {
        "token",
        "apikey",
        "api_key",
        "secret",
        "authorization",
        "credentials",
        "cookie",
    }
)

_BEARER_RE = re.compile(r"(Bearer\s+)\S+", re.IGNORECASE)


def _censor(key: str, value: Any) -> Any:
    if any(sensitive in key.lower() for sensitive in SENSITIVE_KEYS):
        return "***"
    if isinstance(value, dict):
        return {k: _censor(str(k), v) for k, v in value.items()}
    if isinstance(value, list):
        return [_censor(key, item) for item in value]
    if isinstance(value, str):
        # Error messages may quote an Authorization header
        return _BEARER_RE.sub(r"\1***", value)
    return value


def censor_sensitive_data(
    _logger: logging.Logger, _method_name: str, event_dict: EventDict
) -> EventDict:
    """Mask bearer tokens and the API key in log events.

    Values under sensitive keys are replaced, nested dicts and lists
    included, and ``Bearer <jwt>`` inside any string is cut to ``Bearer ***``.
    """
    return {key: _censor(key, value) for key, value in event_dict.items()}


def configure_logging(level: str | None = None) -> None:
    """Render the client's events on stdout.

    Args:
        level: Log level name. Uses settings.log_level if None.
    """
    level_name = (level or settings.log_level).upper()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        censor_sensitive_data,
    ]

    if settings.is_production:
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.plain_traceback,
        )

    structlog.configure(
        processors=[*shared_processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.handlers.clear()
    package_logger.addHandler(handler)
    package_logger.setLevel(getattr(logging, level_name))
    package_logger.propagate = False


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger, e.g. ``get_logger(__name__)``."""
    return structlog.get_logger(name)
