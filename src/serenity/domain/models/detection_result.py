"""
Detection Result Models

Per-call output of the crisis detection engine.

ARCHITECTURE: Results are built fresh for every call and owned by the
caller. KeywordMatch copies the entry values it needs so that nothing
is ever written back to the shared registry.
"""

from dataclasses import dataclass, field
from typing import Optional

from serenity.domain.enums.crisis import CrisisCategory, CrisisSeverity, RecommendedAction
from serenity.domain.models.keyword_entry import KeywordEntry


@dataclass(frozen=True)
class KeywordMatch:
    """
    A keyword that survived context analysis.

    Attributes:
        entry_id: Registry entry identifier
        resolved_confidence: Context-adjusted confidence (0.0-1.0)
        category: Entry category
        severity: Entry severity
        false_positive_rate: Entry false positive rate
        clinical_evidence: Entry clinical citation
        requires_immediate_response: Entry urgency flag
    """

    entry_id: str
    resolved_confidence: float
    category: CrisisCategory
    severity: CrisisSeverity
    false_positive_rate: float
    clinical_evidence: str
    requires_immediate_response: bool = False

    @classmethod
    def from_entry(cls, entry: KeywordEntry, confidence: float) -> "KeywordMatch":
        return cls(
            entry_id=entry.id,
            resolved_confidence=confidence,
            category=entry.category,
            severity=entry.severity,
            false_positive_rate=entry.false_positive_rate,
            clinical_evidence=entry.clinical_evidence,
            requires_immediate_response=entry.requires_immediate_response,
        )

    def to_dict(self) -> dict:
        return {
            "entry_id": self.entry_id,
            "resolved_confidence": round(self.resolved_confidence, 3),
        }


@dataclass
class CrisisDetectionResult:
    """
    Structured, confidence-scored crisis assessment.

    SAFETY_NOTE: recommended_action in {IMMEDIATE_INTERVENTION,
    URGENT_FOLLOWUP} must trigger the hosting application's
    human-facing crisis workflow.

    Attributes:
        detected: Whether any keyword survived context analysis
        severity: Highest severity among surviving keywords
        categories: Deduplicated categories of surviving keywords
        triggered_keywords: Surviving keyword matches
        confidence_score: Final confidence (0.0-1.0)
        recommended_action: Suggested escalation tier
        clinical_notes: Ordered notes for clinical review
        false_positive_likelihood: Mean false positive rate (0.0-1.0)
        requires_immediate_response: Any surviving entry flagged urgent
        registry_version: Keyword registry version used
    """

    detected: bool = False
    severity: CrisisSeverity = CrisisSeverity.LOW
    categories: set[CrisisCategory] = field(default_factory=set)
    triggered_keywords: list[KeywordMatch] = field(default_factory=list)
    confidence_score: float = 0.0
    recommended_action: RecommendedAction = RecommendedAction.STANDARD_CARE
    clinical_notes: list[str] = field(default_factory=list)
    false_positive_likelihood: float = 0.0
    requires_immediate_response: bool = False
    registry_version: Optional[str] = None

    @property
    def keyword_count(self) -> int:
        return len(self.triggered_keywords)

    @property
    def requires_crisis_workflow(self) -> bool:
        """Whether the hosting application must start a crisis workflow."""
        return self.recommended_action.requires_crisis_workflow

    def to_dict(self) -> dict:
        return {
            "detected": self.detected,
            "severity": self.severity.name,
            "categories": sorted(c.value for c in self.categories),
            "triggered_keywords": [k.to_dict() for k in self.triggered_keywords],
            "confidence_score": round(self.confidence_score, 3),
            "recommended_action": self.recommended_action.value,
            "clinical_notes": list(self.clinical_notes),
            "false_positive_likelihood": round(self.false_positive_likelihood, 3),
            "requires_immediate_response": self.requires_immediate_response,
            "registry_version": self.registry_version,
        }
