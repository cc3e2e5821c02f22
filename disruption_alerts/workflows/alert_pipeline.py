"""Alert lifecycle: cluster reports, score them, create or merge alerts.

`run()` is the scheduled entry point: it gathers reports from the scout and
the news feed, hands them to :class:`AlertLifecycleOrchestrator` and archives
alerts that have ended.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from datetime import date, timedelta
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from ..logging_config import logging as _  # noqa: F401  # ensure config applied early
from ..config import CITIES, SCOUT_HORIZON_DAYS
from ..constants import (
    ACTION_PLANS,
    ALERT_MATCH_THRESHOLD,
    APPROVAL_THRESHOLD,
    CONFIDENCE_CHANGE_THRESHOLD,
    DEFAULT_TONE,
    GENERAL_ACTION_PLAN,
    GENERAL_WHATS_IMPACTED,
    RECOVERY_EXPECTED,
    SECTORS_BY_TYPE,
    WHATS_IMPACTED,
)
from ..models.alert import Alert, AlertStatus
from ..models.disruption import DisruptionCluster, DisruptionReport
from ..models.hotel import DisruptionWindow, HotelProfile
from ..services.clustering import DisruptionClusterer
from ..services.confidence import ConfidenceScorer, deduplicate_sources
from ..services.discovery import scout_disruptions
from ..services.enrichment import Enrichment, LLMEnricher
from ..services.impact import ImpactCalculator
from ..services.newsfeed import fetch_news_reports
from ..services.similarity import text_similarity
from ..services.storage import AlertRepository, DateWindow, MongoAlertRepository
from ..utils.datetime_utils import today

logger = logging.getLogger(__name__)


class AlertLifecycleOrchestrator:
    """Turn batches of disruption reports into created or updated alerts.

    Matching is two-stage: new reports are clustered loosely among
    themselves, then each cluster is matched against existing alerts with a
    stricter title-similarity threshold.

    Parameters
    ----------
    repository
        Where alerts are looked up and persisted.
    enricher
        LLM tone/header generator; called only when an alert is approved.
    reference_hotel
        Optional profile used to put rooms and pounds into generated headers.
        Without it the header is the alert title.
    clock
        Returns "today"; injectable for tests.
    """

    def __init__(
        self,
        repository: AlertRepository,
        enricher: Optional[LLMEnricher] = None,
        clusterer: Optional[DisruptionClusterer] = None,
        scorer: Optional[ConfidenceScorer] = None,
        impact_calculator: Optional[ImpactCalculator] = None,
        reference_hotel: Optional[HotelProfile] = None,
        approval_threshold: float = APPROVAL_THRESHOLD,
        match_threshold: float = ALERT_MATCH_THRESHOLD,
        horizon_days: int = SCOUT_HORIZON_DAYS,
        clock: Callable[[], date] = today,
    ) -> None:
        self.repository = repository
        self.enricher = enricher or LLMEnricher()
        self.clusterer = clusterer or DisruptionClusterer()
        self.scorer = scorer or ConfidenceScorer()
        self.impact_calculator = impact_calculator or ImpactCalculator()
        self.reference_hotel = reference_hotel
        self.approval_threshold = approval_threshold
        self.match_threshold = match_threshold
        self.horizon_days = horizon_days
        self.clock = clock

        self._locks: Dict[tuple, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def process(self, reports: Iterable[DisruptionReport]) -> List[Alert]:
        """Cluster *reports* and create or update one alert per cluster.

        A failing cluster is logged and skipped; the rest of the batch still
        goes through.
        """
        clusters = self.clusterer.cluster(reports)
        logger.info("Processing %d clusters", len(clusters))

        processed: List[Alert] = []
        for cluster in clusters:
            try:
                processed.append(self.create_or_update(cluster))
            except Exception:
                logger.exception("Error processing cluster '%s'", cluster[0].title)
        return processed

    def create_or_update(self, cluster: DisruptionCluster) -> Alert:
        representative = cluster[0]
        with self._lock_for(representative.key):
            existing = self.find_existing_alert(representative)
            if existing is not None:
                return self.merge_into_existing(existing, cluster)
            return self.create_alert(cluster)

    def find_existing_alert(self, report: DisruptionReport) -> Optional[Alert]:
        """First live alert of the same city and type whose title is close enough."""
        start = self.clock()
        window = DateWindow(start=start, end=start + timedelta(days=self.horizon_days))
        candidates = self.repository.find_candidate_alerts(report.city, report.main_type, window)

        for alert in candidates:
            if text_similarity(alert.title, report.title) > self.match_threshold:
                return alert
        return None

    def merge_into_existing(self, alert: Alert, new_reports: Sequence[DisruptionReport]) -> Alert:
        """Add *new_reports* as sources of *alert* and recompute its confidence."""
        sources = deduplicate_sources(
            [*alert.confidence_sources, *self.scorer.sources_from_reports(new_reports)]
        )
        scored = self.scorer.score(sources)
        patch: Dict[str, object] = {"confidence": scored.score, "confidence_sources": sources}

        confidence_changed = abs(scored.score - alert.confidence) > CONFIDENCE_CHANGE_THRESHOLD
        if alert.status is AlertStatus.PENDING and scored.score >= self.approval_threshold:
            patch["status"] = AlertStatus.APPROVED
            if alert.tone is None or confidence_changed:
                enrichment = self._enrich(replace(alert, **patch))
                patch["tone"] = enrichment.tone
                patch["header"] = enrichment.header

        updated = self.repository.update(alert, patch)
        logger.info("Updated alert: %s (confidence: %.2f)", alert.title, scored.score)
        return updated

    def create_alert(self, cluster: DisruptionCluster) -> Alert:
        """New alert from the cluster's representative (first) report."""
        representative = cluster[0]
        sources = deduplicate_sources(self.scorer.sources_from_reports(cluster))
        scored = self.scorer.score(sources)
        approved = scored.score >= self.approval_threshold

        alert = Alert(
            city=representative.city,
            main_type=representative.main_type,
            sub_type=representative.sub_type,
            title=representative.title,
            summary=representative.summary,
            start_date=representative.start_date,
            end_date=representative.end_date,
            source=representative.source,
            url=representative.url,
            status=AlertStatus.APPROVED if approved else AlertStatus.PENDING,
            confidence=scored.score,
            confidence_sources=sources,
            sectors=list(SECTORS_BY_TYPE.get(representative.main_type, ())),
            recovery_expected=RECOVERY_EXPECTED.get(representative.main_type, "Variable"),
            whats_impacted=list(
                WHATS_IMPACTED.get(representative.main_type, GENERAL_WHATS_IMPACTED)
            ),
            action_plan=list(ACTION_PLANS.get(representative.main_type, GENERAL_ACTION_PLAN)),
            origin_city=representative.city,
        )

        if approved:
            enrichment = self._enrich(alert)
            alert.tone = enrichment.tone
            alert.header = enrichment.header

        saved = self.repository.save(alert)
        logger.info("Created new alert: %s (confidence: %.2f)", saved.title, saved.confidence)
        return saved

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _lock_for(self, key: tuple) -> threading.Lock:
        with self._locks_guard:
            return self._locks.setdefault(key, threading.Lock())

    def _enrich(self, alert: Alert) -> Enrichment:
        impact = None
        if self.reference_hotel is not None:
            impact = self.impact_calculator.calculate_impact(
                self.reference_hotel,
                DisruptionWindow(alert.main_type, alert.start_date, alert.end_date),
            )
        try:
            return self.enricher.enrich(alert, impact, reference=self.clock())
        except Exception as exc:  # enrichment must never block an alert
            logger.error("Error generating LLM content for '%s': %s", alert.title, exc)
            return Enrichment(tone=DEFAULT_TONE, header=alert.title)


def run(
    news_only: bool = False,
    cities: Sequence[str] = CITIES,
    repository: Optional[MongoAlertRepository] = None,
) -> List[Alert]:
    """Execute one scheduled fetch.

    The full fetch asks the scout about every city and reads the news feed;
    ``news_only`` skips the scout.
    """
    logger.info("Starting %s alert fetch", "news-only" if news_only else "full")
    repository = repository or MongoAlertRepository()
    orchestrator = AlertLifecycleOrchestrator(repository)

    reports: List[DisruptionReport] = []
    if not news_only:
        start = today()
        window = DateWindow(start=start, end=start + timedelta(days=SCOUT_HORIZON_DAYS))
        for city in cities:
            try:
                known_titles = repository.find_active_titles(city, window)
                reports.extend(scout_disruptions(city, known_titles))
            except Exception as exc:
                logger.error("Scout failed for %s: %s", city, exc)

    try:
        reports.extend(fetch_news_reports())
    except Exception as exc:
        logger.error("News feed failed: %s", exc)

    alerts = orchestrator.process(reports) if reports else []

    archived = 0
    try:
        archived = repository.archive_expired()
    except Exception as exc:
        logger.error("Archiving expired alerts failed: %s", exc)

    _log_stats(len(reports), len(alerts), archived)
    return alerts


def _log_stats(reports: int, alerts: int, archived: int) -> None:
    logger.info("=== Alert Fetch Statistics ===")
    logger.info("Reports received: %d", reports)
    logger.info("Alerts created or updated: %d", alerts)
    logger.info("Alerts archived: %d", archived)
    logger.info("==============================")


__all__ = ["AlertLifecycleOrchestrator", "run"]
