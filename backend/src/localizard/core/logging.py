import logging
import sys
from collections.abc import MutableMapping
from typing import Any

import structlog

from localizard.core.config import settings

REDACTED = "[REDACTED]"

# Event fields whose values are credentials. API keys, bearer tokens and
# passwords must never reach a log sink.
SECRET_FIELDS = frozenset(
    {
        "api_key",
        "key_value",
        "authorization",
        "x-api-key",
        "password",
        "token",
        "access_token",
    }
)


def redact_secrets(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Replace credential values in an event with a fixed marker.

    Matching is case-insensitive on the field name. Nested dicts (e.g. a
    logged `headers` mapping) are redacted one level deep.
    """
    for field, value in list(event_dict.items()):
        if field.lower() in SECRET_FIELDS:
            event_dict[field] = REDACTED
        elif isinstance(value, dict):
            event_dict[field] = {
                k: REDACTED if str(k).lower() in SECRET_FIELDS else v
                for k, v in value.items()
            }
    return event_dict


def add_service_name(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    event_dict.setdefault("service", settings.PROJECT_NAME)
    return event_dict


def setup_logging() -> None:
    log_level = logging.DEBUG if settings.DEBUG else logging.INFO

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_service_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        redact_secrets,
    ]

    processors: list[Any]
    if settings.ENVIRONMENT == "local":
        processors = [*shared_processors, structlog.dev.ConsoleRenderer(colors=True)]
    else:
        processors = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str, **initial_values: Any) -> structlog.stdlib.BoundLogger:
    """Return a named structlog logger, optionally pre-bound with context."""
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger
