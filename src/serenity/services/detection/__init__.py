"""Crisis text detection services."""

from serenity.services.detection.text_normalizer import normalize_text
from serenity.services.detection.keyword_registry import (
    KeywordRegistry,
    get_default_registry,
    load_registry,
)
from serenity.services.detection.keyword_matcher import KeywordMatcher, match_keywords
from serenity.services.detection.context_analyzer import (
    ACCEPTANCE_THRESHOLD,
    CONTEXT_RULES,
    ContextAnalyzer,
    ContextRule,
)
from serenity.services.detection.risk_aggregator import (
    ACTION_RULES,
    HIGH_RISK_FACTORS,
    ActionRule,
    RiskAggregator,
)
from serenity.services.detection.crisis_detection_engine import (
    CrisisDetectionEngine,
    analyze_text,
    get_engine,
    initialize,
    shutdown,
)

__all__ = [
    # Normalization
    "normalize_text",
    # Registry
    "KeywordRegistry",
    "get_default_registry",
    "load_registry",
    # Matching
    "KeywordMatcher",
    "match_keywords",
    # Context
    "ACCEPTANCE_THRESHOLD",
    "CONTEXT_RULES",
    "ContextAnalyzer",
    "ContextRule",
    # Aggregation
    "ACTION_RULES",
    "HIGH_RISK_FACTORS",
    "ActionRule",
    "RiskAggregator",
    # Engine
    "CrisisDetectionEngine",
    "analyze_text",
    "get_engine",
    "initialize",
    "shutdown",
]
