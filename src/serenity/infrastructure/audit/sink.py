"""
Audit Sinks

Write-only destinations for CrisisAuditEvent records.

ARCHITECTURE: The engine only emits events; persistence and retention
belong to the hosting application's sink. Sinks receive metadata only,
never patient text.
"""

import threading
from abc import ABC, abstractmethod

from serenity.config.logging_config import get_logger
from serenity.domain.models.audit_event import CrisisAuditEvent


class AuditSink(ABC):
    """
    Abstract audit destination.

    Implementations may perform I/O; they are always awaited under
    the dispatcher's timeout and may raise on failure.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Sink identifier for logs and metrics."""
        pass

    @abstractmethod
    async def emit(self, event: CrisisAuditEvent) -> None:
        """
        Deliver one audit event.

        Args:
            event: Metadata-only crisis audit record
        """
        pass


class LoggingAuditSink(AuditSink):
    """Writes audit events as structured records on the audit logger."""

    def __init__(self, logger_name: str = "serenity.audit") -> None:
        self._logger = get_logger(logger_name)

    @property
    def name(self) -> str:
        return "logging"

    async def emit(self, event: CrisisAuditEvent) -> None:
        self._logger.warning(
            "Crisis keywords detected in text",
            audit_result="warning",
            **event.to_dict(),
        )


class InMemoryAuditSink(AuditSink):
    """
    Keeps events in memory.

    Used for tests and for review queues inside a single process.
    Thread-safe: events may arrive from the dispatcher's worker threads.
    """

    def __init__(self) -> None:
        self._events: list[CrisisAuditEvent] = []
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return "memory"

    @property
    def events(self) -> list[CrisisAuditEvent]:
        with self._lock:
            return list(self._events)

    async def emit(self, event: CrisisAuditEvent) -> None:
        with self._lock:
            self._events.append(event)

    def clear(self) -> None:
        with self._lock:
            self._events.clear()
