"""Domain enums package."""

from serenity.domain.enums.crisis import (
    CrisisCategory,
    CrisisContext,
    CrisisSeverity,
    RecommendedAction,
    SupportSystem,
)

__all__ = [
    "CrisisCategory",
    "CrisisContext",
    "CrisisSeverity",
    "RecommendedAction",
    "SupportSystem",
]
