"""
Crisis Audit Event

Metadata-only record emitted when a crisis is detected.

SECURITY: This model has no field capable of carrying the patient's
text. Only its length is recorded. Persistence and retention are
owned by the receiving audit sink.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

from serenity.domain.enums.crisis import CrisisCategory, CrisisSeverity, RecommendedAction
from serenity.domain.models.detection_result import CrisisDetectionResult

CRISIS_ALERT = "CRISIS_ALERT"


@dataclass(frozen=True)
class CrisisAuditEvent:
    """
    Audit record for a positive crisis detection.

    Attributes:
        severity: Detected severity
        categories: Detected categories
        confidence_score: Final confidence
        recommended_action: Suggested escalation tier
        keyword_count: Number of surviving keywords
        false_positive_likelihood: Mean false positive rate
        text_length: Length of the analyzed input in characters
        user_id: Optional user identifier supplied by the caller
        registry_version: Keyword registry version used
    """

    severity: CrisisSeverity
    categories: tuple[CrisisCategory, ...]
    confidence_score: float
    recommended_action: RecommendedAction
    keyword_count: int
    false_positive_likelihood: float
    text_length: int
    user_id: Optional[str] = None
    registry_version: Optional[str] = None
    event_type: str = CRISIS_ALERT
    event_id: UUID = field(default_factory=uuid4)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_result(
        cls,
        result: CrisisDetectionResult,
        text_length: int,
        user_id: Optional[str] = None,
    ) -> "CrisisAuditEvent":
        return cls(
            severity=result.severity,
            categories=tuple(sorted(result.categories)),
            confidence_score=result.confidence_score,
            recommended_action=result.recommended_action,
            keyword_count=result.keyword_count,
            false_positive_likelihood=result.false_positive_likelihood,
            text_length=text_length,
            user_id=user_id,
            registry_version=result.registry_version,
        )

    def to_dict(self) -> dict:
        return {
            "event_id": str(self.event_id),
            "event_type": self.event_type,
            "user_id": self.user_id,
            "severity": self.severity.name,
            "categories": [c.value for c in self.categories],
            "confidence_score": round(self.confidence_score, 3),
            "recommended_action": self.recommended_action.value,
            "keyword_count": self.keyword_count,
            "false_positive_likelihood": round(self.false_positive_likelihood, 3),
            "text_length": self.text_length,
            "registry_version": self.registry_version,
            "timestamp": self.timestamp.isoformat(),
        }
