"""Greedy grouping of raw disruption reports into per-event clusters."""

from __future__ import annotations

import logging
from typing import Iterable, List

from ..constants import CLUSTER_SIMILARITY_THRESHOLD
from ..models.disruption import DisruptionCluster, DisruptionReport
from .similarity import text_similarity

logger = logging.getLogger(__name__)


class DisruptionClusterer:
    """Single left-to-right pass; a report joins the *first* matching cluster.

    A cluster matches when its representative (first-inserted report) shares
    the report's city and main type and their title similarity is strictly
    above ``threshold``. Ties resolve to the earliest cluster, not the closest
    one, which keeps results reproducible for a given input order.
    """

    def __init__(self, threshold: float = CLUSTER_SIMILARITY_THRESHOLD) -> None:
        self.threshold = threshold

    def is_similar(self, representative: DisruptionReport, report: DisruptionReport) -> bool:
        if representative.city != report.city:
            return False
        if representative.main_type != report.main_type:
            return False
        return text_similarity(representative.title, report.title) > self.threshold

    def cluster(self, reports: Iterable[DisruptionReport]) -> List[DisruptionCluster]:
        clusters: List[DisruptionCluster] = []

        for report in reports:
            for cluster in clusters:
                if self.is_similar(cluster[0], report):
                    cluster.append(report)
                    break
            else:
                clusters.append([report])

        logger.debug("Grouped reports into %d clusters", len(clusters))
        return clusters


__all__ = ["DisruptionClusterer"]
