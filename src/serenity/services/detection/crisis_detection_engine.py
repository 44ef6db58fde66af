"""
Crisis Detection Engine

Scans patient-authored text for crisis indicators and returns a
structured, confidence-scored CrisisDetectionResult.

Pipeline:
1. Enforce the input length limit
2. Normalize text
3. Match registry keywords (whole word / whole phrase)
4. Adjust each candidate's confidence from context, drop weak ones
5. Aggregate survivors into a result
6. Emit a metadata-only audit event when a crisis is detected

SAFETY-CRITICAL: This engine drives escalation in the hosting
application. It is deterministic and rule-based; it makes no claim
of clinical validation beyond the cited heuristics.

ARCHITECTURE: The engine holds no per-call state. The registry is
immutable, so analyze_text() is safe to call concurrently without
locks. Audit emission is fire-and-forget and can never fail or delay
classification.
"""

import threading
import time
from typing import Optional

from serenity.config import DetectionSettings, Settings, get_settings
from serenity.config.logging_config import get_logger
from serenity.domain.exceptions import EngineNotInitializedError, InputTooLargeError
from serenity.domain.models.audit_event import CrisisAuditEvent
from serenity.domain.models.detection_result import CrisisDetectionResult, KeywordMatch
from serenity.domain.models.patient_context import PatientContext
from serenity.infrastructure.audit.dispatcher import AuditDispatcher
from serenity.infrastructure.audit.sink import LoggingAuditSink
from serenity.infrastructure.metrics.prometheus_metrics import (
    track_analysis,
    track_oversize_input,
    update_system_info,
)
from serenity.services.detection.context_analyzer import ContextAnalyzer, is_accepted
from serenity.services.detection.keyword_matcher import KeywordMatcher
from serenity.services.detection.keyword_registry import (
    KeywordRegistry,
    get_default_registry,
    load_registry,
)
from serenity.services.detection.risk_aggregator import RiskAggregator
from serenity.services.detection.text_normalizer import normalize_text

logger = get_logger(__name__)


class CrisisDetectionEngine:
    """
    Rule-based crisis text classifier.

    Usage:
        engine = CrisisDetectionEngine()
        result = engine.analyze_text("...", user_id="patient-123")
        if result.requires_crisis_workflow:
            start_crisis_workflow(result)
    """

    def __init__(
        self,
        registry: Optional[KeywordRegistry] = None,
        settings: Optional[Settings] = None,
        audit_dispatcher: Optional[AuditDispatcher] = None,
        context_analyzer: Optional[ContextAnalyzer] = None,
        aggregator: Optional[RiskAggregator] = None,
    ) -> None:
        """
        Initialize the engine.

        Args:
            registry: Keyword registry (defaults to the process-wide registry)
            settings: Application settings (defaults to get_settings())
            audit_dispatcher: Audit dispatcher (defaults to a logging sink
                when auditing is enabled)
            context_analyzer: Confidence adjustment rules
            aggregator: Risk aggregation rules
        """
        settings = settings or get_settings()
        self._detection: DetectionSettings = settings.detection
        self._registry = registry if registry is not None else get_default_registry()
        self._matcher = KeywordMatcher(self._registry)
        self._context_analyzer = context_analyzer or ContextAnalyzer()
        self._aggregator = aggregator or RiskAggregator()

        if audit_dispatcher is None and settings.audit.enabled:
            audit_dispatcher = AuditDispatcher(
                LoggingAuditSink(),
                timeout_seconds=settings.audit.timeout_seconds,
                max_workers=settings.audit.max_workers,
            )
        self._audit = audit_dispatcher

        update_system_info(registry_version=self._registry.version)

    @property
    def registry(self) -> KeywordRegistry:
        return self._registry

    @property
    def acceptance_threshold(self) -> float:
        return self._detection.acceptance_threshold

    def analyze_text(
        self,
        text: str,
        user_id: Optional[str] = None,
        patient_context: Optional[PatientContext] = None,
    ) -> CrisisDetectionResult:
        """
        Analyze text for crisis indicators.

        Args:
            text: Patient-authored free text
            user_id: Optional user identifier for the audit event
            patient_context: Optional read-only patient history

        Returns:
            Fresh CrisisDetectionResult owned by the caller

        Raises:
            InputTooLargeError: If text exceeds the configured maximum
                and the oversize policy is "reject"
        """
        start_time = time.perf_counter()
        text = text or ""
        original_length = len(text)
        scanned = self._enforce_input_limit(text)

        survivors = self._find_survivors(scanned)
        result = self._aggregator.aggregate(
            survivors,
            patient_context=patient_context,
            registry_version=self._registry.version,
        )

        duration = time.perf_counter() - start_time
        track_analysis(result, duration)

        if result.detected:
            logger.warning(
                "Crisis indicators detected",
                user_id=user_id,
                severity=result.severity.name,
                categories=sorted(c.value for c in result.categories),
                keyword_ids=[k.entry_id for k in result.triggered_keywords],
                confidence=round(result.confidence_score, 3),
                recommended_action=result.recommended_action.value,
                duration_ms=round(duration * 1000, 3),
            )
            self._emit_audit(result, original_length, user_id)
        else:
            logger.debug(
                "No crisis indicators detected",
                text_length=original_length,
                duration_ms=round(duration * 1000, 3),
            )

        return result

    def _enforce_input_limit(self, text: str) -> str:
        """Reject or truncate input longer than max_input_length."""
        limit = self._detection.max_input_length
        if len(text) <= limit:
            return text

        track_oversize_input(self._detection.oversize_policy)

        if self._detection.oversize_policy == "truncate":
            logger.info("Oversize input truncated", text_length=len(text), limit=limit)
            return text[:limit]

        logger.warning("Oversize input rejected", text_length=len(text), limit=limit)
        raise InputTooLargeError(length=len(text), limit=limit)

    def _find_survivors(self, text: str) -> list[KeywordMatch]:
        """Match keywords and keep those whose adjusted confidence is accepted."""
        candidates = self._matcher.match(normalize_text(text))
        survivors: list[KeywordMatch] = []

        for entry in candidates:
            confidence = self._context_analyzer.adjust_confidence(text, entry)
            if is_accepted(confidence, self.acceptance_threshold):
                survivors.append(KeywordMatch.from_entry(entry, confidence))
            else:
                logger.debug(
                    "Keyword suppressed by context",
                    entry_id=entry.id,
                    confidence=round(confidence, 3),
                    rules=self._context_analyzer.matched_rules(text),
                )

        return survivors

    def _emit_audit(
        self,
        result: CrisisDetectionResult,
        text_length: int,
        user_id: Optional[str],
    ) -> None:
        if self._audit is None:
            return

        event = CrisisAuditEvent.from_result(result, text_length=text_length, user_id=user_id)
        self._audit.dispatch(event)

    def close(self) -> None:
        """Flush pending audit deliveries and stop the audit worker pool."""
        if self._audit is not None:
            self._audit.close()


# Process-wide engine, built by initialize() at application startup
_engine: Optional[CrisisDetectionEngine] = None
_engine_lock = threading.Lock()


def initialize(
    settings: Optional[Settings] = None,
    audit_dispatcher: Optional[AuditDispatcher] = None,
) -> CrisisDetectionEngine:
    """
    Load the keyword registry and build the process-wide engine.

    Must be called once during application startup, before the first
    analyze_text() call. Registry errors surface here and nowhere else.
    Calling it again replaces the engine; a failed call leaves the
    current engine in place.

    Args:
        settings: Application settings (defaults to get_settings())
        audit_dispatcher: Audit dispatcher for the engine

    Returns:
        The process-wide engine

    Raises:
        ConfigurationError: If the keyword registry is missing or invalid
    """
    global _engine
    settings = settings or get_settings()
    registry = load_registry(settings.detection.registry_path)
    engine = CrisisDetectionEngine(
        registry=registry,
        settings=settings,
        audit_dispatcher=audit_dispatcher,
    )

    with _engine_lock:
        previous, _engine = _engine, engine

    if previous is not None:
        previous.close()

    logger.info(
        "Crisis detection engine initialized",
        registry_version=registry.version,
        entry_count=len(registry),
    )
    return engine


def get_engine() -> CrisisDetectionEngine:
    """
    Get the process-wide engine.

    Raises:
        EngineNotInitializedError: If initialize() has not been called
    """
    engine = _engine
    if engine is None:
        raise EngineNotInitializedError()
    return engine


def shutdown() -> None:
    """Close the process-wide engine (call at application shutdown)."""
    global _engine
    with _engine_lock:
        engine, _engine = _engine, None

    if engine is not None:
        engine.close()


def analyze_text(
    text: str,
    user_id: Optional[str] = None,
    patient_context: Optional[PatientContext] = None,
) -> CrisisDetectionResult:
    """
    Analyze text with the process-wide engine.

    Raises:
        EngineNotInitializedError: If initialize() has not been called
        InputTooLargeError: If text exceeds the configured maximum
    """
    return get_engine().analyze_text(text, user_id=user_id, patient_context=patient_context)
