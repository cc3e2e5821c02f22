"""Hotel profiles and the revenue-risk figures computed for them."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Optional

from .disruption import MainType


class SizeCategory(str, Enum):
    MICRO = "micro"  # up to 15 rooms
    SMALL = "small"  # 16-50 rooms
    MEDIUM = "medium"  # 51-150 rooms


@dataclass(frozen=True, slots=True)
class HotelProfile:
    """Caller-owned description of a hotel. Read-only input to the calculator.

    ``size_category`` is kept as the raw value so that an unrecognised
    category reaches the calculator and is reported there.
    """

    size_category: Any
    avg_nightly_rate: float
    room_count: Optional[int] = None
    occupancy_rate: Optional[float] = None
    has_incentive_program: bool = False
    incentive_count: int = 0
    hotel_id: Any = None
    name: str = ""


@dataclass(frozen=True, slots=True)
class DisruptionWindow:
    """The part of an alert the impact calculation needs."""

    main_type: MainType
    start_date: Optional[date] = None
    end_date: Optional[date] = None


@dataclass(frozen=True, slots=True)
class NightsSaved:
    exact: float = 0.0
    min: int = 0
    max: int = 0


@dataclass(frozen=True, slots=True)
class PoundsSaved:
    min: float = 0.0
    max: float = 0.0


@dataclass(frozen=True, slots=True)
class ImpactResult:
    """Revenue at risk for one (hotel, disruption) pair. Never persisted here."""

    nights_at_risk: int = 0
    pounds_at_risk: float = 0.0
    recovery_rate: float = 0.0
    nights_saved: NightsSaved = field(default_factory=NightsSaved)
    pounds_saved: PoundsSaved = field(default_factory=PoundsSaved)
    incentive_bonus: float = 0.0
    disruption_percent: float = 0.0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True, slots=True)
class HotelImpact:
    """Result row of a bulk calculation across many hotels."""

    hotel_id: Any
    hotel_name: str
    impact: ImpactResult


__all__ = [
    "SizeCategory",
    "HotelProfile",
    "DisruptionWindow",
    "NightsSaved",
    "PoundsSaved",
    "ImpactResult",
    "HotelImpact",
]
