"""Persistence layer: the repository the orchestrator talks to, plus MongoDB."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Protocol

from pymongo.collection import Collection

from ..clients.mongodb_client import get_alerts_collection
from ..models.alert import Alert, AlertStatus
from ..models.disruption import MainType
from ..utils.datetime_utils import get_current_timestamp, to_datetime, today

logger = logging.getLogger(__name__)

# Alert attribute -> MongoDB field, for partial updates
_FIELD_NAMES: Dict[str, str] = {
    "status": "status",
    "confidence": "confidence",
    "confidence_sources": "confidenceSources",
    "tone": "tone",
    "header": "header",
    "summary": "summary",
    "end_date": "endDate",
}


@dataclass(frozen=True, slots=True)
class DateWindow:
    """Alerts overlapping ``[start, end]`` are candidates for a match."""

    start: date
    end: date


class AlertRepository(Protocol):
    """What the orchestrator needs from storage. Callers own the schema."""

    def find_candidate_alerts(
        self, city: str, main_type: MainType, window: DateWindow
    ) -> List[Alert]: ...

    def save(self, alert: Alert) -> Alert: ...

    def update(self, alert: Alert, patch: Mapping[str, Any]) -> Alert: ...


def _patch_document(patch: Mapping[str, Any]) -> Dict[str, Any]:
    """Translate an attribute patch into a ``$set`` document."""
    doc: Dict[str, Any] = {}
    for attr, value in patch.items():
        field_name = _FIELD_NAMES.get(attr)
        if field_name is None:
            raise KeyError(f"Unsupported alert field in patch: {attr}")
        if attr == "confidence_sources":
            value = [source.to_document() for source in value]
        elif attr == "end_date":
            value = to_datetime(value)
        elif hasattr(value, "value"):
            value = value.value
        doc[field_name] = value
    return doc


class MongoAlertRepository:
    """:class:`AlertRepository` backed by a pymongo collection."""

    def __init__(self, collection: Optional[Collection] = None) -> None:
        self._collection = collection

    @property
    def collection(self) -> Collection:
        if self._collection is None:
            self._collection = get_alerts_collection()
        return self._collection

    def find_candidate_alerts(
        self, city: str, main_type: MainType, window: DateWindow
    ) -> List[Alert]:
        query = {
            "city": city,
            "mainType": MainType.parse(main_type).value,
            "startDate": {"$lte": to_datetime(window.end)},
            "endDate": {"$gte": to_datetime(window.start)},
            "status": {"$ne": AlertStatus.EXPIRED.value},
        }
        return [Alert.from_document(doc) for doc in self.collection.find(query)]

    def find_active_titles(self, city: str, window: DateWindow) -> List[str]:
        """Titles of live alerts for *city*, fed to the scout to avoid repeats."""
        cursor = self.collection.find(
            {
                "city": city,
                "startDate": {"$lte": to_datetime(window.end)},
                "endDate": {"$gte": to_datetime(window.start)},
                "status": {"$ne": AlertStatus.EXPIRED.value},
            },
            {"title": 1},
        )
        return [doc["title"] for doc in cursor if doc.get("title")]

    def save(self, alert: Alert) -> Alert:
        doc = alert.to_document()
        now = get_current_timestamp()
        doc["createdAt"] = now
        doc["updatedAt"] = now
        result = self.collection.insert_one(doc)
        logger.info("Stored alert to MongoDB with _id=%s", result.inserted_id)
        return replace(alert, id=result.inserted_id)

    def update(self, alert: Alert, patch: Mapping[str, Any]) -> Alert:
        doc = _patch_document(patch)
        doc["updatedAt"] = get_current_timestamp()
        self.collection.update_one({"_id": alert.id}, {"$set": doc})
        logger.info("Updated alert %s (%s)", alert.id, ", ".join(sorted(patch)))
        return replace(alert, **patch)

    def archive_expired(self, reference: Optional[date] = None) -> int:
        """Mark alerts whose end date has passed as expired; return how many."""
        result = self.collection.update_many(
            {
                "endDate": {"$lt": to_datetime(reference or today())},
                "status": {"$ne": AlertStatus.EXPIRED.value},
            },
            {"$set": {"status": AlertStatus.EXPIRED.value, "updatedAt": get_current_timestamp()}},
        )
        logger.info("Archived %d expired alerts", result.modified_count)
        return result.modified_count


__all__ = ["DateWindow", "AlertRepository", "MongoAlertRepository"]
