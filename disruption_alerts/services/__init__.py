"""Service layer modules grouping business logic by concern.

This module provides convenience re-exports so that callers can simply do for
example `from disruption_alerts.services import ConfidenceScorer` without
having to know which underlying module provides the symbol.
"""

from .similarity import text_similarity  # noqa: F401
from .clustering import DisruptionClusterer  # noqa: F401
from .confidence import ConfidenceScore, ConfidenceScorer, deduplicate_sources  # noqa: F401
from .impact import ImpactCalculator  # noqa: F401
from .enrichment import Enrichment, LLMEnricher, when_text  # noqa: F401
from .storage import AlertRepository, DateWindow, MongoAlertRepository  # noqa: F401
from .discovery import scout_disruptions  # noqa: F401
from .newsfeed import fetch_news_reports  # noqa: F401

__all__ = [
    "text_similarity",
    "DisruptionClusterer",
    "ConfidenceScore",
    "ConfidenceScorer",
    "deduplicate_sources",
    "ImpactCalculator",
    "Enrichment",
    "LLMEnricher",
    "when_text",
    "AlertRepository",
    "DateWindow",
    "MongoAlertRepository",
    "scout_disruptions",
    "fetch_news_reports",
]
