"""Audit emission infrastructure."""

from serenity.infrastructure.audit.sink import AuditSink, InMemoryAuditSink, LoggingAuditSink
from serenity.infrastructure.audit.dispatcher import AuditDispatcher

__all__ = [
    "AuditSink",
    "InMemoryAuditSink",
    "LoggingAuditSink",
    "AuditDispatcher",
]
