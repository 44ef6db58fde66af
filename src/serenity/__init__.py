"""
Serenity - Crisis Text Detection Engine

Deterministic, rule-based detection of clinically significant risk
indicators in patient-authored text, producing confidence-scored
assessments that drive escalation in the Serenity platform.

Call initialize() once at application startup; registry errors are
raised there, never from analyze_text().

IMPORTANT: This is a safety-critical healthcare component. It is not
a machine-learning classifier and makes no claim of clinical
validation beyond its cited heuristics.
"""

__version__ = "0.1.0"
__author__ = "Serenity Engineering Team"

from serenity.domain import (
    CrisisCategory,
    CrisisDetectionResult,
    CrisisSeverity,
    PatientContext,
    RecommendedAction,
)
from serenity.services.detection import (
    CrisisDetectionEngine,
    analyze_text,
    initialize,
    shutdown,
)

__all__ = [
    "CrisisCategory",
    "CrisisDetectionResult",
    "CrisisSeverity",
    "PatientContext",
    "RecommendedAction",
    "CrisisDetectionEngine",
    "analyze_text",
    "initialize",
    "shutdown",
]
