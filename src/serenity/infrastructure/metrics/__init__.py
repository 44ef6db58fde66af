"""Metrics infrastructure package."""

from serenity.infrastructure.metrics.prometheus_metrics import (
    # Detection metrics
    CRISIS_ANALYSES_TOTAL,
    CRISIS_DETECTIONS_TOTAL,
    RECOMMENDED_ACTIONS_TOTAL,
    ANALYSIS_DURATION,
    INPUT_REJECTED_TOTAL,
    # Audit metrics
    AUDIT_DELIVERY_FAILURES_TOTAL,
    # Helpers
    track_analysis,
    track_oversize_input,
    track_audit_failure,
    update_system_info,
)

__all__ = [
    "CRISIS_ANALYSES_TOTAL",
    "CRISIS_DETECTIONS_TOTAL",
    "RECOMMENDED_ACTIONS_TOTAL",
    "ANALYSIS_DURATION",
    "INPUT_REJECTED_TOTAL",
    "AUDIT_DELIVERY_FAILURES_TOTAL",
    "track_analysis",
    "track_oversize_input",
    "track_audit_failure",
    "update_system_info",
]
