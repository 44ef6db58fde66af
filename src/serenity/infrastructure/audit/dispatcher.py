"""
Audit Dispatcher

Fire-and-forget delivery of crisis audit events.

SAFETY-CRITICAL: Detection must never fail or slow down because
auditing failed. dispatch() returns immediately; delivery runs on the
caller's event loop when there is one, otherwise on a small worker
pool. Every delivery is bounded by a timeout and retried within it.
Failures become AuditSinkError, are logged locally and counted, and
are never raised to the caller.
"""

import asyncio
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional

from tenacity import retry, stop_after_attempt, wait_exponential

from serenity.config.logging_config import get_logger
from serenity.domain.exceptions import AuditSinkError
from serenity.domain.models.audit_event import CrisisAuditEvent
from serenity.infrastructure.audit.sink import AuditSink
from serenity.infrastructure.metrics.prometheus_metrics import track_audit_failure

logger = get_logger(__name__)


class AuditDispatcher:
    """
    Non-blocking audit event dispatcher.

    Usage:
        dispatcher = AuditDispatcher(LoggingAuditSink())
        dispatcher.dispatch(event)   # returns immediately
        ...
        dispatcher.close()           # at shutdown
    """

    DEFAULT_TIMEOUT_SECONDS: float = 2.0

    def __init__(
        self,
        sink: AuditSink,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        max_workers: int = 2,
    ) -> None:
        """
        Initialize dispatcher.

        Args:
            sink: Destination for audit events
            timeout_seconds: Upper bound for one delivery, retries included
            max_workers: Worker threads used when no event loop is running
        """
        self._sink = sink
        self._timeout = timeout_seconds
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="serenity-audit",
        )
        self._pending_tasks: set[asyncio.Task] = set()
        self._pending_futures: set[Future] = set()

    @property
    def sink(self) -> AuditSink:
        return self._sink

    def dispatch(self, event: CrisisAuditEvent) -> None:
        """
        Schedule delivery of an audit event without waiting for it.

        Args:
            event: Audit event to deliver
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        try:
            if loop is not None:
                task = loop.create_task(self.deliver(event))
                self._pending_tasks.add(task)
                task.add_done_callback(self._pending_tasks.discard)
            else:
                future = self._executor.submit(self._deliver_in_thread, event)
                self._pending_futures.add(future)
                future.add_done_callback(self._pending_futures.discard)
        except RuntimeError as e:
            # Executor already shut down
            self._record_failure(
                event,
                AuditSinkError(f"Audit dispatch failed: {e}", sink=self._sink.name, original_error=e),
                reason="dispatch",
            )

    async def deliver(self, event: CrisisAuditEvent) -> bool:
        """
        Deliver one event under the dispatcher timeout.

        Returns:
            True if the sink accepted the event, False otherwise
        """
        try:
            await asyncio.wait_for(self._emit_with_retry(event), timeout=self._timeout)
        except asyncio.TimeoutError as e:
            self._record_failure(
                event,
                AuditSinkError(
                    f"Audit sink timed out after {self._timeout}s",
                    sink=self._sink.name,
                    original_error=e,
                ),
                reason="timeout",
            )
            return False
        except Exception as e:
            self._record_failure(
                event,
                AuditSinkError(f"Audit sink failed: {e}", sink=self._sink.name, original_error=e),
                reason="error",
            )
            return False

        logger.debug(
            "Audit event delivered",
            event_id=str(event.event_id),
            sink=self._sink.name,
        )
        return True

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.05, min=0.05, max=0.5),
        reraise=True,
    )
    async def _emit_with_retry(self, event: CrisisAuditEvent) -> None:
        await self._sink.emit(event)

    def _deliver_in_thread(self, event: CrisisAuditEvent) -> bool:
        return asyncio.run(self.deliver(event))

    def _record_failure(
        self,
        event: CrisisAuditEvent,
        error: AuditSinkError,
        reason: str,
    ) -> None:
        logger.error(
            "Audit event delivery failed",
            event_id=str(event.event_id),
            sink=error.sink,
            reason=reason,
            error_type=type(error.original_error).__name__ if error.original_error else None,
            error_message=str(error),
        )
        track_audit_failure(reason)

    async def drain(self) -> None:
        """Wait for deliveries scheduled on the running event loop."""
        if self._pending_tasks:
            await asyncio.gather(*list(self._pending_tasks), return_exceptions=True)

    def close(self, wait: bool = True) -> None:
        """
        Stop the worker pool.

        Args:
            wait: Block until queued thread deliveries finish
        """
        self._executor.shutdown(wait=wait)
