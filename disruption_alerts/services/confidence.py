"""Multi-source confidence scoring.

Confidence is always recomputed from the complete list of sources behind an
alert; it is never averaged incrementally, so repeated merges cannot drift.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from ..constants import CONFIDENCE_SCORING, SOURCE_CONFIDENCE
from ..models.alert import ConfidenceSource
from ..models.disruption import CredibilityTier, DisruptionReport
from ..utils.rounding import round_half_up

logger = logging.getLogger(__name__)

# Counts at or above this use the "2+" bucket
_BUCKET_OVERFLOW = 3


@dataclass(frozen=True, slots=True)
class ConfidenceScore:
    score: float = 0.0
    source_count: int = 0
    breakdown: Dict[CredibilityTier, int] = field(default_factory=dict)


def deduplicate_sources(sources: Iterable[ConfidenceSource]) -> List[ConfidenceSource]:
    """Keep the first occurrence of every ``(source, url)`` pair, in order."""
    seen = set()
    unique: List[ConfidenceSource] = []
    for source in sources:
        if source.key in seen:
            continue
        seen.add(source.key)
        unique.append(source)
    return unique


class ConfidenceScorer:
    """Turn source credibility tiers into a 0-1 confidence score."""

    def __init__(
        self,
        scoring: Mapping[CredibilityTier, Mapping[object, float]] = CONFIDENCE_SCORING,
        source_confidence: Mapping[CredibilityTier, float] = SOURCE_CONFIDENCE,
    ) -> None:
        self.scoring = scoring
        self.source_confidence = source_confidence

    def tier_score(self, tier: CredibilityTier, count: int) -> Optional[float]:
        """Table value for *count* occurrences of *tier*, or ``None`` if unscored."""
        table = self.scoring.get(tier)
        if not table:
            return None
        bucket = "2+" if count >= _BUCKET_OVERFLOW else count
        value = table.get(bucket)
        if value is None:
            value = table.get("2+")
        return value

    def score(self, sources: Sequence[ConfidenceSource]) -> ConfidenceScore:
        """Weighted mean of per-tier scores, weighted by each tier's count."""
        breakdown: Dict[CredibilityTier, int] = dict(
            Counter(source.credibility_tier for source in sources)
        )

        total_score = 0.0
        total_sources = 0
        for tier, count in breakdown.items():
            tier_score = self.tier_score(tier, count)
            if tier_score is None:
                logger.warning("No score for credibility tier '%s'; ignoring", tier.value)
                continue
            total_score += tier_score * count
            total_sources += count

        average = total_score / total_sources if total_sources else 0.0
        return ConfidenceScore(
            score=round_half_up(average, 2),
            source_count=total_sources,
            breakdown=breakdown,
        )

    def source_from_report(
        self, report: DisruptionReport, fallback_title: str = ""
    ) -> ConfidenceSource:
        tier = report.source_credibility
        return ConfidenceSource(
            source=report.source,
            credibility_tier=tier,
            confidence_value=self.source_confidence.get(tier, 0.5),
            url=report.url,
            title=report.title or fallback_title,
            published_at=report.published_at,
        )

    def sources_from_reports(self, reports: Sequence[DisruptionReport]) -> List[ConfidenceSource]:
        fallback_title = reports[0].title if reports else ""
        return [self.source_from_report(report, fallback_title) for report in reports]

    def score_reports(self, reports: Sequence[DisruptionReport]) -> ConfidenceScore:
        """Score a cluster of reports directly (one source per report)."""
        return self.score(self.sources_from_reports(reports))


__all__ = ["ConfidenceScore", "ConfidenceScorer", "deduplicate_sources"]
