"""
Serenity Exceptions

Error hierarchy for the crisis detection engine.

- ConfigurationError is fatal and raised only while loading
  configuration or the keyword registry, never mid-request.
- InputTooLargeError is raised to callers for oversize input.
- EngineNotInitializedError is raised when the process-wide engine
  is used before startup initialization.
- AuditSinkError is logged locally by the audit dispatcher and
  never reaches analyze_text callers.
"""

from typing import Optional


class SerenityError(Exception):
    """Base exception for all Serenity errors."""


class ConfigurationError(SerenityError):
    """Malformed configuration or keyword registry data."""

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        super().__init__(message)
        self.source = source
        self.original_error = original_error


class InputTooLargeError(SerenityError):
    """Input text exceeds the configured maximum length."""

    def __init__(self, length: int, limit: int) -> None:
        super().__init__(
            f"Input length {length} exceeds maximum of {limit} characters"
        )
        self.length = length
        self.limit = limit


class AuditSinkError(SerenityError):
    """Audit event could not be delivered to its sink."""

    def __init__(
        self,
        message: str,
        sink: str,
        original_error: Optional[Exception] = None,
    ) -> None:
        super().__init__(message)
        self.sink = sink
        self.original_error = original_error


class EngineNotInitializedError(SerenityError, RuntimeError):
    """The process-wide engine was used before initialize() was called."""

    def __init__(self) -> None:
        super().__init__(
            "Crisis detection engine not initialized. Call initialize() at startup."
        )
