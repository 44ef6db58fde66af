"""
Text Normalizer

Canonical form of patient text for keyword matching:
lowercase, punctuation replaced by spaces, whitespace collapsed.

Pure and total: never raises, empty input gives empty output.
"""

import re
from typing import Optional

# Anything that is not a letter, digit or whitespace (underscore counts as punctuation)
_NON_WORD = re.compile(r"[^\w\s]|_")
_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: Optional[str]) -> str:
    """
    Normalize text for consistent matching.

    Args:
        text: Raw input text

    Returns:
        Lowercase text with punctuation replaced by single spaces,
        whitespace runs collapsed and ends trimmed
    """
    if not text:
        return ""

    lowered = text.lower()
    spaced = _NON_WORD.sub(" ", lowered)
    return _WHITESPACE.sub(" ", spaced).strip()
