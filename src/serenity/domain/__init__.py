"""
Serenity Domain Layer

Core entities, value objects and errors for crisis detection.
Independent of configuration and infrastructure.
"""

from serenity.domain.enums.crisis import (
    CrisisCategory,
    CrisisContext,
    CrisisSeverity,
    RecommendedAction,
    SupportSystem,
)
from serenity.domain.models.keyword_entry import KeywordEntry
from serenity.domain.models.patient_context import PatientContext
from serenity.domain.models.detection_result import CrisisDetectionResult, KeywordMatch
from serenity.domain.models.audit_event import CrisisAuditEvent
from serenity.domain.exceptions import (
    SerenityError,
    ConfigurationError,
    InputTooLargeError,
    AuditSinkError,
    EngineNotInitializedError,
)

__all__ = [
    # Enums
    "CrisisCategory",
    "CrisisContext",
    "CrisisSeverity",
    "RecommendedAction",
    "SupportSystem",
    # Models
    "KeywordEntry",
    "PatientContext",
    "CrisisDetectionResult",
    "KeywordMatch",
    "CrisisAuditEvent",
    # Errors
    "SerenityError",
    "ConfigurationError",
    "InputTooLargeError",
    "AuditSinkError",
    "EngineNotInitializedError",
]
