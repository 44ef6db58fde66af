"""
Keyword Matcher

Scans normalized text for registry terms and variations using
whole-word (or whole-phrase) matching.

Match terms pass through the same normalizer as the input so that
punctuated terms such as "can't breathe" line up with normalized
text ("can t breathe"). Terms are regex-escaped before compilation.
"""

import re
from typing import Iterable

from serenity.domain.models.keyword_entry import KeywordEntry
from serenity.services.detection.text_normalizer import normalize_text


def compile_entry_pattern(entry: KeywordEntry) -> re.Pattern:
    """
    Build one whole-word pattern covering an entry's term and variations.

    Args:
        entry: Registry entry

    Returns:
        Case-insensitive compiled pattern
    """
    terms = [normalize_text(term) for term in entry.match_terms]
    alternatives = "|".join(re.escape(term) for term in dict.fromkeys(terms) if term)
    return re.compile(rf"\b(?:{alternatives})\b", re.IGNORECASE)


class KeywordMatcher:
    """
    Whole-word keyword matcher over an immutable registry.

    Patterns are compiled once at construction; match() is
    read-only and safe to call concurrently.

    Usage:
        matcher = KeywordMatcher(registry)
        candidates = matcher.match(normalize_text(text))
    """

    def __init__(self, entries: Iterable[KeywordEntry]) -> None:
        self._patterns: tuple[tuple[KeywordEntry, re.Pattern], ...] = tuple(
            (entry, compile_entry_pattern(entry)) for entry in entries
        )

    def match(self, normalized_text: str) -> list[KeywordEntry]:
        """
        Find registry entries present in normalized text.

        Args:
            normalized_text: Output of normalize_text()

        Returns:
            Matching entries, unmodified, in registry order
        """
        if not normalized_text:
            return []

        return [
            entry
            for entry, pattern in self._patterns
            if pattern.search(normalized_text)
        ]


def match_keywords(
    normalized_text: str,
    registry: Iterable[KeywordEntry],
) -> list[KeywordEntry]:
    """One-off match without keeping a compiled matcher around."""
    return KeywordMatcher(registry).match(normalized_text)
