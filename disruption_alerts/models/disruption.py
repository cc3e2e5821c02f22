"""Raw disruption reports as delivered by the scout and the news feed."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from ..exceptions import InvalidReportError
from ..utils.datetime_utils import parse_date


class MainType(str, Enum):
    """Closed set of disruption categories; unknown values become ``OTHER``."""

    STRIKE = "strike"
    WEATHER = "weather"
    PROTEST = "protest"
    FLIGHT_ISSUES = "flight_issues"
    STAFF_SHORTAGE = "staff_shortage"
    SUPPLY_CHAIN = "supply_chain"
    SYSTEM_FAILURE = "system_failure"
    POLICY = "policy"
    ECONOMY = "economy"
    OTHER = "other"

    @classmethod
    def parse(cls, value: Any) -> "MainType":
        if isinstance(value, cls):
            return value
        key = str(value or "").strip().lower().replace(" ", "_")
        key = _MAIN_TYPE_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            return cls.OTHER


# Short names used by the news feed classifier and older alert records
_MAIN_TYPE_ALIASES: Dict[str, str] = {
    "flight": "flight_issues",
    "staff": "staff_shortage",
    "supply": "supply_chain",
    "system": "system_failure",
}


class CredibilityTier(str, Enum):
    """How trustworthy a source is; unknown values count as ``OTHER_NEWS``."""

    OFFICIAL = "official"  # BBC, MET, Gov.uk
    MAJOR_NEWS = "major_news"  # Sky, Reuters, Guardian
    OTHER_NEWS = "other_news"  # local papers, blogs
    SOCIAL = "social"  # X, forums

    @classmethod
    def parse(cls, value: Any) -> "CredibilityTier":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or "").strip().lower())
        except ValueError:
            return cls.OTHER_NEWS


_REQUIRED_FIELDS: Dict[str, tuple] = {
    "city": ("city",),
    "main_type": ("main_type", "mainType"),
    "title": ("title",),
    "start_date": ("start_date", "startDate"),
    "end_date": ("end_date", "endDate"),
    "source": ("source",),
}


def _lookup(payload: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = payload.get(key)
        if value not in (None, ""):
            return value
    return None


@dataclass(frozen=True, slots=True)
class DisruptionReport:
    """A single report of a real-world disruption. Immutable once received."""

    city: str
    main_type: MainType
    title: str
    start_date: date
    end_date: date
    source: str
    sub_type: str = ""
    summary: str = ""
    url: str = ""
    source_credibility: CredibilityTier = CredibilityTier.OTHER_NEWS
    published_at: Optional[str] = None

    @property
    def key(self) -> tuple:
        """Alerts for the same ``(city, main_type)`` are matched and merged one at a time."""
        return (self.city, self.main_type)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "DisruptionReport":
        """Build a report from a scout (snake_case) or feed (camelCase) payload.

        Raises :class:`InvalidReportError` when a required field is missing or
        a date cannot be parsed.
        """
        missing: List[str] = [
            name for name, keys in _REQUIRED_FIELDS.items() if _lookup(payload, *keys) is None
        ]
        if missing:
            raise InvalidReportError(f"Missing required field(s): {', '.join(missing)}")

        try:
            start = parse_date(_lookup(payload, "start_date", "startDate"))
            end = parse_date(_lookup(payload, "end_date", "endDate"))
        except ValueError as exc:
            raise InvalidReportError(f"Invalid date in report '{payload.get('title')}': {exc}") from exc

        return cls(
            city=str(payload["city"]).strip(),
            main_type=MainType.parse(_lookup(payload, "main_type", "mainType")),
            sub_type=str(_lookup(payload, "sub_type", "subType") or ""),
            title=str(payload["title"]).strip(),
            summary=str(payload.get("summary") or ""),
            start_date=start,
            end_date=end,
            source=str(payload["source"]),
            url=str(payload.get("url") or ""),
            source_credibility=CredibilityTier.parse(
                _lookup(payload, "source_credibility", "sourceCredibility")
            ),
            published_at=_lookup(payload, "published_at", "pubDate"),
        )


# A provisional group of reports believed to describe one event
DisruptionCluster = List[DisruptionReport]

__all__ = ["MainType", "CredibilityTier", "DisruptionReport", "DisruptionCluster"]
