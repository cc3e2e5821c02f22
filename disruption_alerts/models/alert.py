"""The durable alert record and the sources backing its confidence."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..utils.datetime_utils import parse_date, to_datetime
from .disruption import CredibilityTier, MainType


class AlertStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    EXPIRED = "expired"


class Tone(str, Enum):
    EARLY = "Early"
    DEVELOPING = "Developing"
    CONFIRMED = "Confirmed"

    @classmethod
    def parse(cls, value: Any) -> Optional["Tone"]:
        """Match *value* case-insensitively, returning ``None`` if it is no tone."""
        text = str(value or "").strip().strip("\"'.").lower()
        for tone in cls:
            if tone.value.lower() == text:
                return tone
        return None


@dataclass(slots=True)
class ConfidenceSource:
    """One report contributing to an alert's confidence."""

    source: str
    credibility_tier: CredibilityTier = CredibilityTier.OTHER_NEWS
    confidence_value: float = 0.5
    url: str = ""
    title: str = ""
    published_at: Optional[str] = None

    @property
    def key(self) -> tuple:
        """Identity used for de-duplication."""
        return (self.source, self.url)

    def to_document(self) -> Dict[str, Any]:
        return {
            "source": self.source,
            "type": self.credibility_tier.value,
            "confidence": self.confidence_value,
            "url": self.url,
            "title": self.title,
            "publishedAt": self.published_at,
        }

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "ConfidenceSource":
        return cls(
            source=str(doc.get("source") or ""),
            credibility_tier=CredibilityTier.parse(doc.get("type") or doc.get("credibility")),
            confidence_value=float(doc.get("confidence") or 0.0),
            url=str(doc.get("url") or ""),
            title=str(doc.get("title") or ""),
            published_at=doc.get("publishedAt"),
        )


@dataclass(frozen=True, slots=True)
class GuidanceItem:
    title: str
    description: str = ""


@dataclass(frozen=True, slots=True)
class GuidanceGroup:
    """A titled block of items shown under "What's impacted" or "Action plan"."""

    category: str
    description: str = ""
    icon: str = ""
    items: Tuple[GuidanceItem, ...] = ()

    def to_document(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "description": self.description,
            "icon": self.icon,
            "items": [{"title": i.title, "description": i.description} for i in self.items],
        }

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "GuidanceGroup":
        return cls(
            category=str(doc.get("category") or ""),
            description=str(doc.get("description") or ""),
            icon=str(doc.get("icon") or ""),
            items=tuple(
                GuidanceItem(title=str(i.get("title") or ""), description=str(i.get("description") or ""))
                for i in doc.get("items") or []
            ),
        )


def _clamp_unit(value: float) -> float:
    return max(0.0, min(1.0, float(value)))


@dataclass(slots=True)
class Alert:
    """User-facing record derived from one or more disruption reports."""

    city: str
    main_type: MainType
    title: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    sub_type: str = ""
    summary: str = ""
    source: str = ""
    url: str = ""
    status: AlertStatus = AlertStatus.PENDING
    confidence: float = 0.0
    confidence_sources: List[ConfidenceSource] = field(default_factory=list)
    sectors: List[str] = field(default_factory=list)
    recovery_expected: str = ""
    whats_impacted: List[GuidanceGroup] = field(default_factory=list)
    action_plan: List[GuidanceGroup] = field(default_factory=list)
    origin_city: str = ""
    tone: Optional[Tone] = None
    header: Optional[str] = None
    id: Any = None

    def __post_init__(self) -> None:
        self.confidence = _clamp_unit(self.confidence)

    def to_document(self) -> Dict[str, Any]:
        """Return the MongoDB document for this alert (without ``_id``)."""
        return {
            "city": self.city,
            "mainType": self.main_type.value,
            "subType": self.sub_type,
            "title": self.title,
            "summary": self.summary,
            "startDate": to_datetime(self.start_date),
            "endDate": to_datetime(self.end_date),
            "source": self.source,
            "url": self.url,
            "status": self.status.value,
            "confidence": self.confidence,
            "confidenceSources": [s.to_document() for s in self.confidence_sources],
            "sectors": list(self.sectors),
            "recoveryExpected": self.recovery_expected,
            "whatsImpacted": [g.to_document() for g in self.whats_impacted],
            "actionPlan": [g.to_document() for g in self.action_plan],
            "originCity": self.origin_city,
            "tone": self.tone.value if self.tone else None,
            "header": self.header,
        }

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "Alert":
        start = doc.get("startDate")
        end = doc.get("endDate")
        return cls(
            id=doc.get("_id"),
            city=str(doc.get("city") or ""),
            main_type=MainType.parse(doc.get("mainType")),
            sub_type=str(doc.get("subType") or ""),
            title=str(doc.get("title") or ""),
            summary=str(doc.get("summary") or ""),
            start_date=parse_date(start) if start else None,
            end_date=parse_date(end) if end else None,
            source=str(doc.get("source") or ""),
            url=str(doc.get("url") or ""),
            status=AlertStatus(doc.get("status") or AlertStatus.PENDING.value),
            confidence=float(doc.get("confidence") or 0.0),
            confidence_sources=[
                ConfidenceSource.from_document(s) for s in doc.get("confidenceSources") or []
            ],
            sectors=list(doc.get("sectors") or []),
            recovery_expected=str(doc.get("recoveryExpected") or ""),
            whats_impacted=[GuidanceGroup.from_document(g) for g in doc.get("whatsImpacted") or []],
            action_plan=[GuidanceGroup.from_document(g) for g in doc.get("actionPlan") or []],
            origin_city=str(doc.get("originCity") or ""),
            tone=Tone.parse(doc.get("tone")),
            header=doc.get("header"),
        )


__all__ = ["AlertStatus", "Tone", "ConfidenceSource", "GuidanceItem", "GuidanceGroup", "Alert"]
