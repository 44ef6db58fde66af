"""Domain models package."""

from serenity.domain.models.keyword_entry import KeywordEntry
from serenity.domain.models.patient_context import PatientContext
from serenity.domain.models.detection_result import CrisisDetectionResult, KeywordMatch
from serenity.domain.models.audit_event import CRISIS_ALERT, CrisisAuditEvent

__all__ = [
    # Registry
    "KeywordEntry",
    # Caller input
    "PatientContext",
    # Results
    "CrisisDetectionResult",
    "KeywordMatch",
    # Audit
    "CRISIS_ALERT",
    "CrisisAuditEvent",
]
