"""
Serenity Logging Configuration

Structured logging with structlog:
- JSON output for staging/production, console output for development
- Secret redaction
- PHI redaction: patient text must never reach a log line

SECURITY: Detection code logs ids, counts and scores only. The PHI
processor below is a second line of defence, not a licence to log text.
"""

import logging
import sys
from typing import Any

import structlog

from serenity.config.settings import Settings


SERVICE_NAME = "serenity-crisis-engine"
SERVICE_VERSION = "0.1.0"

# Substrings of keys whose values are secrets
SENSITIVE_PATTERNS: frozenset[str] = frozenset({
    "password",
    "token",
    "secret",
    "api_key",
    "apikey",
    "authorization",
    "credential",
    "private_key",
})

# Exact keys that may carry patient-authored text
PHI_KEYS: frozenset[str] = frozenset({
    "text",
    "raw_text",
    "input_text",
    "normalized_text",
    "message",
    "message_text",
})


def _redact_sensitive_data(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """
    Redact secrets and patient text from log entries.

    Args:
        logger: Logger instance (unused but required by structlog)
        method_name: Log method name (unused but required by structlog)
        event_dict: Log event dictionary

    Returns:
        Sanitized event dictionary
    """
    def redact_value(key: str, value: Any) -> Any:
        key_lower = key.lower()
        if key_lower in PHI_KEYS:
            return "[PHI_REDACTED]"
        for pattern in SENSITIVE_PATTERNS:
            if pattern in key_lower:
                return "[REDACTED]"

        if isinstance(value, dict):
            return {k: redact_value(k, v) for k, v in value.items()}
        elif isinstance(value, list):
            return [redact_value(key, item) for item in value]

        return value

    # "event" is the log message itself
    return {
        key: value if key == "event" else redact_value(key, value)
        for key, value in event_dict.items()
    }


def _add_service_context(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Add service-level context to all log entries."""
    event_dict["service"] = SERVICE_NAME
    event_dict["version"] = SERVICE_VERSION
    return event_dict


def get_processors(is_development: bool) -> list[Any]:
    """
    Get structlog processors based on environment.

    Args:
        is_development: Whether running in development mode

    Returns:
        List of log processors
    """
    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        _redact_sensitive_data,
        _add_service_context,
    ]

    if is_development:
        shared_processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        shared_processors.extend([
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ])

    return shared_processors


def configure_logging(settings: Settings) -> None:
    """
    Configure application logging.

    Should be called once during application startup.

    Args:
        settings: Application settings
    """
    is_development = settings.env == "development"
    log_level = getattr(logging, settings.log_level.upper())

    structlog.configure(
        processors=get_processors(is_development),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a configured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


def bind_correlation_id(correlation_id: str) -> None:
    """
    Bind correlation ID to current context.

    Hosting applications call this per request so engine log lines
    can be traced back to the originating request.
    """
    structlog.contextvars.bind_contextvars(correlation_id=correlation_id)


def clear_context() -> None:
    """Clear all context variables (call at end of request)."""
    structlog.contextvars.clear_contextvars()
