"""
Prometheus Metrics

Counters and histograms for crisis detection observability.
Registered on the default prometheus_client registry; the hosting
application decides how to expose them.

ARCHITECTURE: Metrics are decoupled from business logic.
Only increment/observe; never block on metrics operations.
"""

from prometheus_client import Counter, Histogram, Info

from serenity.domain.models.detection_result import CrisisDetectionResult

# =============================================================================
# DETECTION METRICS
# =============================================================================

CRISIS_ANALYSES_TOTAL = Counter(
    "serenity_crisis_analyses_total",
    "Texts analyzed by the crisis detection engine",
    ["detected"],  # true, false
)

CRISIS_DETECTIONS_TOTAL = Counter(
    "serenity_crisis_detections_total",
    "Positive detections by crisis category",
    ["category"],
)

RECOMMENDED_ACTIONS_TOTAL = Counter(
    "serenity_recommended_actions_total",
    "Recommended actions issued",
    ["action"],
)

ANALYSIS_DURATION = Histogram(
    "serenity_crisis_analysis_duration_seconds",
    "Time spent classifying a single text",
    buckets=[0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1],
)

INPUT_REJECTED_TOTAL = Counter(
    "serenity_input_rejected_total",
    "Oversize inputs by handling policy",
    ["policy"],  # reject, truncate
)

# =============================================================================
# AUDIT METRICS
# =============================================================================

AUDIT_DELIVERY_FAILURES_TOTAL = Counter(
    "serenity_audit_delivery_failures_total",
    "Audit events that could not be delivered",
    ["reason"],  # timeout, error, dispatch
)

# =============================================================================
# SYSTEM INFO
# =============================================================================

SYSTEM_INFO = Info(
    "serenity_crisis_engine",
    "Crisis detection engine information",
)


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def track_analysis(result: CrisisDetectionResult, duration_seconds: float) -> None:
    """Record the outcome of one analysis."""
    CRISIS_ANALYSES_TOTAL.labels(detected=str(result.detected).lower()).inc()
    ANALYSIS_DURATION.observe(duration_seconds)

    if result.detected:
        for category in result.categories:
            CRISIS_DETECTIONS_TOTAL.labels(category=category.value).inc()
        RECOMMENDED_ACTIONS_TOTAL.labels(action=result.recommended_action.value).inc()


def track_oversize_input(policy: str) -> None:
    """Record an oversize input."""
    INPUT_REJECTED_TOTAL.labels(policy=policy).inc()


def track_audit_failure(reason: str) -> None:
    """Record an undeliverable audit event."""
    AUDIT_DELIVERY_FAILURES_TOTAL.labels(reason=reason).inc()


def update_system_info(registry_version: str, version: str = "0.1.0") -> None:
    """Publish engine and registry versions."""
    SYSTEM_INFO.info({
        "version": version,
        "registry_version": registry_version,
    })
