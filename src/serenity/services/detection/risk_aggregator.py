"""
Risk Aggregator

Combines surviving keyword matches into a single CrisisDetectionResult.

ARCHITECTURE: A pure function of (matches, patient context). The
severity-to-action decision is an ordered rule table, first match
wins, so clinical reviewers can audit and adjust thresholds without
touching control flow.

CLINICAL_REVIEW_REQUIRED: Action thresholds, high-risk factor list
and the context adjustment cap need clinical validation.
"""

import math
from dataclasses import dataclass
from statistics import fmean
from typing import Callable, Optional, Sequence

from serenity.domain.enums.crisis import CrisisSeverity, RecommendedAction
from serenity.domain.models.detection_result import CrisisDetectionResult, KeywordMatch
from serenity.domain.models.patient_context import PatientContext

# Risk factors that raise confidence when present in patient history
HIGH_RISK_FACTORS: frozenset[str] = frozenset({
    "previous_attempt",
    "family_history",
    "recent_loss",
    "substance_use",
})

RISK_FACTOR_INCREMENT: float = 0.1
MAX_CONTEXT_ADJUSTMENT: float = 1.5


@dataclass(frozen=True)
class ActionRule:
    """
    One row of the recommended-action decision table.

    Attributes:
        name: Rule identifier
        predicate: (severity, confidence) -> bool
        action: Action recommended when the predicate holds
    """

    name: str
    predicate: Callable[[CrisisSeverity, float], bool]
    action: RecommendedAction


# Evaluated top to bottom; the first matching rule wins.
ACTION_RULES: tuple[ActionRule, ...] = (
    ActionRule(
        name="imminent_high_confidence",
        predicate=lambda severity, confidence: (
            severity == CrisisSeverity.IMMINENT and confidence > 0.8
        ),
        action=RecommendedAction.IMMEDIATE_INTERVENTION,
    ),
    ActionRule(
        name="critical_high_confidence",
        predicate=lambda severity, confidence: (
            severity == CrisisSeverity.CRITICAL and confidence > 0.7
        ),
        action=RecommendedAction.IMMEDIATE_INTERVENTION,
    ),
    ActionRule(
        name="high_moderate_confidence",
        predicate=lambda severity, confidence: (
            severity == CrisisSeverity.HIGH and confidence > 0.6
        ),
        action=RecommendedAction.URGENT_FOLLOWUP,
    ),
    ActionRule(
        name="moderate_or_confident",
        predicate=lambda severity, confidence: (
            severity == CrisisSeverity.MODERATE or confidence > 0.5
        ),
        action=RecommendedAction.CLINICAL_REVIEW,
    ),
    ActionRule(
        name="fallback",
        predicate=lambda severity, confidence: True,
        action=RecommendedAction.MONITOR_CLOSELY,
    ),
)


def round_percent(confidence: float) -> int:
    """Confidence as a whole percentage, rounding halves up."""
    return math.floor(confidence * 100 + 0.5)


def context_adjustment(patient_context: Optional[PatientContext]) -> float:
    """
    Confidence multiplier from patient risk factors.

    1.0 plus 0.1 per high-risk factor present, capped at 1.5.
    """
    if patient_context is None:
        return 1.0

    present = patient_context.risk_factors & HIGH_RISK_FACTORS
    return min(1.0 + RISK_FACTOR_INCREMENT * len(present), MAX_CONTEXT_ADJUSTMENT)


class RiskAggregator:
    """
    Aggregates keyword matches into a risk assessment.

    Usage:
        aggregator = RiskAggregator()
        result = aggregator.aggregate(matches, patient_context)
    """

    def __init__(self, action_rules: Sequence[ActionRule] = ACTION_RULES) -> None:
        self._action_rules = tuple(action_rules)

    def aggregate(
        self,
        survivors: Sequence[KeywordMatch],
        patient_context: Optional[PatientContext] = None,
        registry_version: Optional[str] = None,
    ) -> CrisisDetectionResult:
        """
        Build a CrisisDetectionResult from surviving matches.

        Args:
            survivors: Matches that passed the acceptance threshold
            patient_context: Optional patient history
            registry_version: Registry version to stamp on the result

        Returns:
            Fresh CrisisDetectionResult owned by the caller
        """
        if not survivors:
            return CrisisDetectionResult(registry_version=registry_version)

        severity = max(match.severity for match in survivors)
        avg_confidence = fmean(match.resolved_confidence for match in survivors)
        final_confidence = min(avg_confidence * context_adjustment(patient_context), 1.0)

        return CrisisDetectionResult(
            detected=True,
            severity=severity,
            categories={match.category for match in survivors},
            triggered_keywords=list(survivors),
            confidence_score=final_confidence,
            recommended_action=self.determine_action(severity, final_confidence),
            clinical_notes=self.clinical_notes(survivors, patient_context),
            false_positive_likelihood=fmean(m.false_positive_rate for m in survivors),
            requires_immediate_response=any(
                m.requires_immediate_response for m in survivors
            ),
            registry_version=registry_version,
        )

    def determine_action(
        self,
        severity: CrisisSeverity,
        confidence: float,
    ) -> RecommendedAction:
        """First matching rule in the decision table wins."""
        for rule in self._action_rules:
            if rule.predicate(severity, confidence):
                return rule.action
        return RecommendedAction.MONITOR_CLOSELY

    def clinical_notes(
        self,
        survivors: Sequence[KeywordMatch],
        patient_context: Optional[PatientContext] = None,
    ) -> list[str]:
        """One note per match, plus a risk factor line when context is supplied."""
        notes = [
            f"{match.clinical_evidence} (Confidence: {round_percent(match.resolved_confidence)}%)"
            for match in survivors
        ]

        if patient_context is not None:
            factors = ", ".join(sorted(patient_context.risk_factors)) or "none"
            notes.append(f"Patient risk factors present: {factors}")

        return notes
