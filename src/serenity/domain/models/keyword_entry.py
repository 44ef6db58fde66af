"""
Keyword Entry Model

Schema for a single clinically-sourced crisis keyword definition.

ARCHITECTURE: Entries are frozen once validated. Per-match confidence
lives in KeywordMatch records, never on the entry itself, so a single
registry can be shared across concurrent requests.

CLINICAL_REVIEW_REQUIRED: Baseline confidences and false positive
rates are clinically tuned values.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from serenity.domain.enums.crisis import CrisisCategory, CrisisContext, CrisisSeverity


class KeywordEntry(BaseModel):
    """
    Crisis keyword definition with clinical metadata.

    Attributes:
        id: Stable identifier (e.g. "suicide-direct-001")
        term: Primary phrase to match
        category: Clinical domain
        severity: Ordinal severity (LOW..IMMINENT)
        context: Typical linguistic context of the phrase
        clinical_evidence: Citation or rationale for the entry
        false_positive_rate: Estimated probability a match is not a crisis
        variations: Alternate phrasings matched like the term
        requires_immediate_response: Clinical flag for urgent handling
        baseline_confidence: Confidence before context adjustment
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(min_length=1)
    term: str = Field(min_length=1)
    category: CrisisCategory
    severity: CrisisSeverity
    context: CrisisContext
    clinical_evidence: str = Field(min_length=1)
    false_positive_rate: float = Field(ge=0.0, le=1.0)
    variations: tuple[str, ...] = ()
    requires_immediate_response: bool
    baseline_confidence: float = Field(ge=0.0, le=1.0)

    @field_validator("severity", mode="before")
    @classmethod
    def parse_severity_name(cls, value: Any) -> Any:
        """Accept severity by name ("CRITICAL") as well as ordinal."""
        if isinstance(value, str):
            try:
                return CrisisSeverity[value.strip().upper()]
            except KeyError:
                raise ValueError(f"Unknown severity: {value!r}")
        return value

    @field_validator("term")
    @classmethod
    def term_not_blank(cls, value: str) -> str:
        if not any(ch.isalnum() for ch in value):
            raise ValueError("term must contain at least one letter or digit")
        return value

    @field_validator("variations")
    @classmethod
    def dedupe_variations(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        """Reject variations without letters or digits; drop duplicates, keeping order."""
        for variation in value:
            if not any(ch.isalnum() for ch in variation):
                raise ValueError(
                    f"variation {variation!r} must contain at least one letter or digit"
                )
        return tuple(dict.fromkeys(value))

    @property
    def match_terms(self) -> tuple[str, ...]:
        """Primary term followed by its variations."""
        return (self.term, *self.variations)
