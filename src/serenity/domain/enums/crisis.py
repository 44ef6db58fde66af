"""
Crisis Enumerations

Closed vocabularies for crisis keyword classification and the
escalation tiers the detection engine can recommend.

CLINICAL_REVIEW_REQUIRED: Severity ordinals and action tiers
drive escalation. Changes require clinical sign-off.
"""

from enum import IntEnum, StrEnum


class CrisisCategory(StrEnum):
    """Clinical domain a crisis keyword maps to."""

    SUICIDAL_IDEATION = "SUICIDAL_IDEATION"
    SELF_HARM = "SELF_HARM"
    SUBSTANCE_ABUSE = "SUBSTANCE_ABUSE"
    VIOLENCE = "VIOLENCE"
    SEVERE_DEPRESSION = "SEVERE_DEPRESSION"
    PSYCHOSIS = "PSYCHOSIS"
    PANIC_ATTACK = "PANIC_ATTACK"
    EATING_DISORDER = "EATING_DISORDER"


class CrisisSeverity(IntEnum):
    """
    Ordinal crisis severity.

    Higher values indicate more acute risk. Calibrated in part
    against the Columbia Suicide Severity Rating Scale (C-SSRS).
    """

    LOW = 1
    """No actionable crisis indicators."""

    MODERATE = 2
    """Distress indicators that warrant clinical review."""

    HIGH = 3
    """Serious risk indicators requiring prompt follow-up."""

    CRITICAL = 4
    """
    Active crisis language (e.g. suicidal ideation with intent).

    SAFETY_NOTE: Paired with sufficient confidence this level
    recommends immediate intervention.
    """

    IMMINENT = 5
    """Active ideation with plan or method. Highest acuity."""


class CrisisContext(StrEnum):
    """Linguistic context a keyword is typically used in."""

    DIRECT_STATEMENT = "DIRECT_STATEMENT"
    METAPHORICAL = "METAPHORICAL"
    PLANNING = "PLANNING"
    PAST_REFERENCE = "PAST_REFERENCE"
    HYPOTHETICAL = "HYPOTHETICAL"
    LITERATURE_MEDIA = "LITERATURE_MEDIA"


class RecommendedAction(StrEnum):
    """
    Escalation tier suggested to the hosting clinical workflow.

    SAFETY_NOTE: Hosting applications must treat IMMEDIATE_INTERVENTION
    and URGENT_FOLLOWUP as mandatory triggers for a human-facing
    crisis workflow. The engine itself never contacts the patient.
    """

    IMMEDIATE_INTERVENTION = "IMMEDIATE_INTERVENTION"
    URGENT_FOLLOWUP = "URGENT_FOLLOWUP"
    CLINICAL_REVIEW = "CLINICAL_REVIEW"
    MONITOR_CLOSELY = "MONITOR_CLOSELY"
    STANDARD_CARE = "STANDARD_CARE"

    @property
    def requires_crisis_workflow(self) -> bool:
        """Whether this tier mandates a human-facing crisis workflow."""
        return self in (
            RecommendedAction.IMMEDIATE_INTERVENTION,
            RecommendedAction.URGENT_FOLLOWUP,
        )


class SupportSystem(StrEnum):
    """Strength of a patient's personal support network."""

    STRONG = "strong"
    MODERATE = "moderate"
    WEAK = "weak"
    NONE = "none"
