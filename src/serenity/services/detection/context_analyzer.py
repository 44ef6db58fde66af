"""
Context Analyzer

Adjusts a keyword's confidence from the surrounding language of the
original (non-normalized) text. Each rule is an independent
multiplier applied in table order; the result is clamped to 1.0.

Candidates whose adjusted confidence does not exceed
ACCEPTANCE_THRESHOLD are dropped before aggregation. This is the
engine's primary false positive suppressor.

CLINICAL_REVIEW_REQUIRED: Multipliers (0.6 / 0.4 / 0.3 / 1.3) and the
0.3 threshold are clinically tuned. The threshold also suppresses
hedged phrasing such as "what if I killed myself"; this trade-off is
open for clinical review.
"""

from dataclasses import dataclass
from typing import Sequence

from serenity.domain.models.keyword_entry import KeywordEntry

ACCEPTANCE_THRESHOLD: float = 0.3

MAX_CONFIDENCE: float = 1.0


@dataclass(frozen=True)
class ContextRule:
    """
    A confidence multiplier triggered by indicator phrases.

    Attributes:
        name: Rule identifier (for logs and review)
        indicators: Lowercase phrases searched as substrings
        multiplier: Factor applied when any indicator is present
    """

    name: str
    indicators: tuple[str, ...]
    multiplier: float

    def applies_to(self, text_lower: str) -> bool:
        return any(indicator in text_lower for indicator in self.indicators)


# Evaluated top to bottom. Order is part of the clinical contract.
CONTEXT_RULES: tuple[ContextRule, ...] = (
    ContextRule(
        name="past_reference",
        indicators=("used to", "before", "last time", "previously", "in the past"),
        multiplier=0.6,
    ),
    ContextRule(
        name="hypothetical",
        indicators=("if i", "what if", "imagine", "suppose", "hypothetically"),
        multiplier=0.4,
    ),
    ContextRule(
        name="literary_reference",
        indicators=("in the book", "the movie", "the show", "character", "story"),
        multiplier=0.3,
    ),
    ContextRule(
        name="planning_language",
        indicators=("plan to", "going to", "will", "decided to", "ready to"),
        multiplier=1.3,
    ),
)


class ContextAnalyzer:
    """
    Rule-table confidence adjustment.

    Stateless; safe to share across threads.

    Usage:
        analyzer = ContextAnalyzer()
        confidence = analyzer.adjust_confidence(text, entry)
    """

    def __init__(self, rules: Sequence[ContextRule] = CONTEXT_RULES) -> None:
        self._rules = tuple(rules)

    @property
    def rules(self) -> tuple[ContextRule, ...]:
        return self._rules

    def matched_rules(self, original_text: str) -> list[str]:
        """Names of rules whose indicators appear in the text."""
        text_lower = (original_text or "").lower()
        return [rule.name for rule in self._rules if rule.applies_to(text_lower)]

    def adjust_confidence(self, original_text: str, entry: KeywordEntry) -> float:
        """
        Adjust an entry's baseline confidence for context.

        Args:
            original_text: Text as supplied by the caller (not normalized)
            entry: Matched registry entry

        Returns:
            Adjusted confidence, at most 1.0
        """
        text_lower = (original_text or "").lower()
        confidence = entry.baseline_confidence

        for rule in self._rules:
            if rule.applies_to(text_lower):
                confidence *= rule.multiplier

        return min(confidence, MAX_CONFIDENCE)


def is_accepted(confidence: float, threshold: float = ACCEPTANCE_THRESHOLD) -> bool:
    """Whether an adjusted confidence survives the acceptance threshold."""
    return confidence > threshold
