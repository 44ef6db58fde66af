"""
Unit Tests for Risk Aggregator

Tests severity aggregation, the action decision table, patient
context adjustment and clinical note formatting.
"""

import pytest

from serenity.domain.enums.crisis import (
    CrisisCategory,
    CrisisSeverity,
    RecommendedAction,
    SupportSystem,
)
from serenity.domain.models.detection_result import KeywordMatch
from serenity.domain.models.patient_context import PatientContext
from serenity.services.detection.risk_aggregator import (
    ACTION_RULES,
    RiskAggregator,
    context_adjustment,
    round_percent,
)


def make_match(
    entry_id: str = "test-001",
    confidence: float = 0.8,
    category: CrisisCategory = CrisisCategory.SEVERE_DEPRESSION,
    severity: CrisisSeverity = CrisisSeverity.HIGH,
    false_positive_rate: float = 0.1,
    evidence: str = "Test evidence",
    immediate: bool = False,
) -> KeywordMatch:
    return KeywordMatch(
        entry_id=entry_id,
        resolved_confidence=confidence,
        category=category,
        severity=severity,
        false_positive_rate=false_positive_rate,
        clinical_evidence=evidence,
        requires_immediate_response=immediate,
    )


@pytest.fixture
def aggregator() -> RiskAggregator:
    return RiskAggregator()


class TestAggregate:
    """Tests for RiskAggregator.aggregate."""

    def test_no_survivors(self, aggregator: RiskAggregator) -> None:
        result = aggregator.aggregate([], registry_version="v1")

        assert not result.detected
        assert result.severity == CrisisSeverity.LOW
        assert result.categories == set()
        assert result.triggered_keywords == []
        assert result.confidence_score == 0.0
        assert result.recommended_action == RecommendedAction.STANDARD_CARE
        assert result.clinical_notes == []
        assert result.false_positive_likelihood == 0.0
        assert not result.requires_immediate_response
        assert result.registry_version == "v1"

    def test_no_survivors_ignores_patient_context(self, aggregator: RiskAggregator) -> None:
        context = PatientContext(risk_factors=frozenset({"previous_attempt"}))
        result = aggregator.aggregate([], patient_context=context)

        assert not result.detected
        assert result.clinical_notes == []

    def test_single_match(self, aggregator: RiskAggregator) -> None:
        match = make_match(
            confidence=0.95,
            category=CrisisCategory.SUICIDAL_IDEATION,
            severity=CrisisSeverity.CRITICAL,
            false_positive_rate=0.05,
            immediate=True,
        )
        result = aggregator.aggregate([match])

        assert result.detected
        assert result.severity == CrisisSeverity.CRITICAL
        assert result.categories == {CrisisCategory.SUICIDAL_IDEATION}
        assert result.confidence_score == pytest.approx(0.95)
        assert result.recommended_action == RecommendedAction.IMMEDIATE_INTERVENTION
        assert result.false_positive_likelihood == pytest.approx(0.05)
        assert result.requires_immediate_response

    def test_severity_is_maximum(self, aggregator: RiskAggregator) -> None:
        result = aggregator.aggregate([
            make_match(severity=CrisisSeverity.MODERATE),
            make_match(severity=CrisisSeverity.IMMINENT),
            make_match(severity=CrisisSeverity.HIGH),
        ])
        assert result.severity == CrisisSeverity.IMMINENT

    def test_confidence_and_false_positive_are_means(self, aggregator) -> None:
        result = aggregator.aggregate([
            make_match(confidence=0.75, false_positive_rate=0.12),
            make_match(confidence=0.78, false_positive_rate=0.20),
        ])

        assert result.confidence_score == pytest.approx(0.765)
        assert result.false_positive_likelihood == pytest.approx(0.16)

    def test_categories_deduplicated(self, aggregator: RiskAggregator) -> None:
        result = aggregator.aggregate([
            make_match(category=CrisisCategory.SELF_HARM),
            make_match(category=CrisisCategory.SELF_HARM),
            make_match(category=CrisisCategory.VIOLENCE),
        ])
        assert result.categories == {CrisisCategory.SELF_HARM, CrisisCategory.VIOLENCE}

    def test_immediate_response_if_any(self, aggregator: RiskAggregator) -> None:
        result = aggregator.aggregate([make_match(), make_match(immediate=True)])
        assert result.requires_immediate_response

    def test_triggered_keywords_preserve_order(self, aggregator) -> None:
        matches = [make_match(entry_id="b"), make_match(entry_id="a")]
        result = aggregator.aggregate(matches)
        assert [m.entry_id for m in result.triggered_keywords] == ["b", "a"]

    def test_fresh_result_per_call(self, aggregator: RiskAggregator) -> None:
        matches = [make_match()]
        first = aggregator.aggregate(matches)
        first.clinical_notes.append("caller note")

        second = aggregator.aggregate(matches)

        assert "caller note" not in second.clinical_notes
        assert first.triggered_keywords is not second.triggered_keywords


class TestPatientContextAdjustment:
    """Tests for risk factor confidence adjustment."""

    def test_no_context(self) -> None:
        assert context_adjustment(None) == 1.0

    def test_unrecognized_factors_ignored(self) -> None:
        context = PatientContext(risk_factors=frozenset({"insomnia", "unemployment"}))
        assert context_adjustment(context) == 1.0

    def test_increment_per_factor(self) -> None:
        context = PatientContext(
            risk_factors=frozenset({"previous_attempt", "family_history", "insomnia"})
        )
        assert context_adjustment(context) == pytest.approx(1.2)

    def test_all_factors(self) -> None:
        context = PatientContext(risk_factors=frozenset({
            "previous_attempt", "family_history", "recent_loss", "substance_use",
        }))
        assert context_adjustment(context) == pytest.approx(1.4)
        assert context_adjustment(context) <= 1.5

    def test_adjusted_confidence(self, aggregator: RiskAggregator) -> None:
        context = PatientContext(
            risk_factors=frozenset({"previous_attempt", "family_history"})
        )
        result = aggregator.aggregate([make_match(confidence=0.78)], patient_context=context)
        assert result.confidence_score == pytest.approx(0.936)

    def test_adjusted_confidence_clamped(self, aggregator: RiskAggregator) -> None:
        context = PatientContext(risk_factors=frozenset({
            "previous_attempt", "family_history", "recent_loss",
        }))
        result = aggregator.aggregate([make_match(confidence=0.95)], patient_context=context)
        assert result.confidence_score == 1.0

    def test_context_can_escalate_action(self, aggregator: RiskAggregator) -> None:
        match = make_match(confidence=0.55, severity=CrisisSeverity.HIGH)

        without = aggregator.aggregate([match])
        with_context = aggregator.aggregate(
            [match],
            patient_context=PatientContext(risk_factors=frozenset({"recent_loss"})),
        )

        assert without.recommended_action == RecommendedAction.CLINICAL_REVIEW
        assert with_context.recommended_action == RecommendedAction.URGENT_FOLLOWUP


class TestDetermineAction:
    """The decision table is evaluated top to bottom."""

    @pytest.mark.parametrize(
        ("severity", "confidence", "expected"),
        [
            (CrisisSeverity.IMMINENT, 0.81, RecommendedAction.IMMEDIATE_INTERVENTION),
            (CrisisSeverity.IMMINENT, 0.8, RecommendedAction.CLINICAL_REVIEW),
            (CrisisSeverity.IMMINENT, 0.4, RecommendedAction.MONITOR_CLOSELY),
            (CrisisSeverity.CRITICAL, 0.71, RecommendedAction.IMMEDIATE_INTERVENTION),
            (CrisisSeverity.CRITICAL, 0.7, RecommendedAction.CLINICAL_REVIEW),
            (CrisisSeverity.HIGH, 0.61, RecommendedAction.URGENT_FOLLOWUP),
            (CrisisSeverity.HIGH, 0.6, RecommendedAction.CLINICAL_REVIEW),
            (CrisisSeverity.HIGH, 0.45, RecommendedAction.MONITOR_CLOSELY),
            (CrisisSeverity.MODERATE, 0.31, RecommendedAction.CLINICAL_REVIEW),
            (CrisisSeverity.MODERATE, 0.99, RecommendedAction.CLINICAL_REVIEW),
            (CrisisSeverity.LOW, 0.51, RecommendedAction.CLINICAL_REVIEW),
            (CrisisSeverity.LOW, 0.5, RecommendedAction.MONITOR_CLOSELY),
        ],
    )
    def test_decision_table(
        self,
        aggregator: RiskAggregator,
        severity: CrisisSeverity,
        confidence: float,
        expected: RecommendedAction,
    ) -> None:
        assert aggregator.determine_action(severity, confidence) == expected

    def test_table_ends_with_fallback(self) -> None:
        fallback = ACTION_RULES[-1]
        assert fallback.action == RecommendedAction.MONITOR_CLOSELY
        assert fallback.predicate(CrisisSeverity.LOW, 0.0)


class TestClinicalNotes:
    """Tests for clinical note formatting."""

    def test_one_note_per_match(self, aggregator: RiskAggregator) -> None:
        notes = aggregator.clinical_notes([
            make_match(evidence="Evidence A", confidence=0.75),
            make_match(evidence="Evidence B", confidence=0.78),
        ])
        assert notes == [
            "Evidence A (Confidence: 75%)",
            "Evidence B (Confidence: 78%)",
        ]

    def test_percent_rounds_half_up(self) -> None:
        assert round_percent(0.125) == 13
        assert round_percent(0.875) == 88
        assert round_percent(0.124) == 12
        assert round_percent(1.0) == 100

    def test_risk_factor_line_sorted(self, aggregator: RiskAggregator) -> None:
        context = PatientContext(
            risk_factors=frozenset({"recent_loss", "insomnia", "family_history"})
        )
        notes = aggregator.clinical_notes([make_match()], context)
        assert notes[-1] == "Patient risk factors present: family_history, insomnia, recent_loss"

    def test_risk_factor_line_when_empty(self, aggregator: RiskAggregator) -> None:
        notes = aggregator.clinical_notes([make_match()], PatientContext())
        assert notes[-1] == "Patient risk factors present: none"

    def test_no_risk_factor_line_without_context(self, aggregator) -> None:
        notes = aggregator.clinical_notes([make_match()])
        assert len(notes) == 1


class TestPatientContextFromDict:
    """Tests for PatientContext.from_dict."""

    def test_snake_case(self) -> None:
        context = PatientContext.from_dict({
            "risk_factors": ["previous_attempt"],
            "previous_crises": True,
            "current_medications": ["sertraline"],
            "therapy_history": True,
            "support_system": "weak",
        })

        assert context.risk_factors == frozenset({"previous_attempt"})
        assert context.previous_crises
        assert context.current_medications == ("sertraline",)
        assert context.therapy_history
        assert context.support_system == SupportSystem.WEAK

    def test_camel_case(self) -> None:
        context = PatientContext.from_dict({
            "riskFactors": ["family_history", "recent_loss"],
            "supportSystem": "none",
        })

        assert context.risk_factors == frozenset({"family_history", "recent_loss"})
        assert context.support_system == SupportSystem.NONE
        assert not context.previous_crises

    def test_empty_mapping(self) -> None:
        assert PatientContext.from_dict({}) == PatientContext()

    def test_invalid_support_system(self) -> None:
        with pytest.raises(ValueError):
            PatientContext.from_dict({"support_system": "excellent"})


class TestPatientContextConstruction:
    """Direct construction accepts plain lists and strings."""

    def test_list_fields_coerced(self) -> None:
        context = PatientContext(
            risk_factors=["previous_attempt", "family_history", "previous_attempt"],
            current_medications=["sertraline"],
            support_system="weak",
        )

        assert context.risk_factors == frozenset({"previous_attempt", "family_history"})
        assert context.current_medications == ("sertraline",)
        assert context.support_system == SupportSystem.WEAK

    def test_list_risk_factors_adjust_confidence(self, aggregator: RiskAggregator) -> None:
        context = PatientContext(risk_factors=["previous_attempt", "family_history"])

        result = aggregator.aggregate([make_match(confidence=0.78)], patient_context=context)

        assert context_adjustment(context) == pytest.approx(1.2)
        assert result.confidence_score == pytest.approx(0.936)

    def test_still_hashable(self) -> None:
        context = PatientContext(risk_factors=["recent_loss"])
        assert hash(context) == hash(PatientContext(risk_factors=frozenset({"recent_loss"})))
