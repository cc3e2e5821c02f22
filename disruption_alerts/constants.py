"""Scoring and impact tables.

All tables are read-only mappings. Components take them as constructor
arguments and default to the values below, so alternative tables (per market,
per tenant, in tests) can be swapped in without touching module state.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Tuple

from .models.alert import GuidanceGroup, GuidanceItem, Tone
from .models.disruption import CredibilityTier, MainType
from .models.hotel import SizeCategory

# ---------------------------------------------------------------------------
# Confidence scoring
# ---------------------------------------------------------------------------
# Per-tier score keyed by occurrence count; three or more use the "2+" bucket
CONFIDENCE_SCORING: Mapping[CredibilityTier, Mapping[object, float]] = MappingProxyType(
    {
        CredibilityTier.OFFICIAL: MappingProxyType({1: 0.8, 2: 0.9, "2+": 1.0}),
        CredibilityTier.MAJOR_NEWS: MappingProxyType({1: 0.7, 2: 0.8, "2+": 0.9}),
        CredibilityTier.OTHER_NEWS: MappingProxyType({1: 0.5, 2: 0.6, "2+": 0.7}),
        CredibilityTier.SOCIAL: MappingProxyType({1: 0.3, 2: 0.3, "2+": 0.4}),
    }
)

# Value stored on each individual confidence source
SOURCE_CONFIDENCE: Mapping[CredibilityTier, float] = MappingProxyType(
    {
        CredibilityTier.OFFICIAL: 0.9,
        CredibilityTier.MAJOR_NEWS: 0.7,
        CredibilityTier.OTHER_NEWS: 0.5,
        CredibilityTier.SOCIAL: 0.3,
    }
)

# Below this an alert is held as pending; at or above it is approved
APPROVAL_THRESHOLD: float = 0.6

# Title similarity needed to join a new-report cluster / an existing alert
CLUSTER_SIMILARITY_THRESHOLD: float = 0.6
ALERT_MATCH_THRESHOLD: float = 0.7

# A merge that moves confidence further than this refreshes LLM content
CONFIDENCE_CHANGE_THRESHOLD: float = 0.1

# ---------------------------------------------------------------------------
# Impact calculation
# ---------------------------------------------------------------------------
BASE_RECOVERY_RATES: Mapping[MainType, float] = MappingProxyType(
    {
        MainType.STRIKE: 0.70,
        MainType.WEATHER: 0.60,
        MainType.PROTEST: 0.65,
        MainType.FLIGHT_ISSUES: 0.55,
        MainType.STAFF_SHORTAGE: 0.50,
        MainType.SUPPLY_CHAIN: 0.45,
        MainType.SYSTEM_FAILURE: 0.40,
        MainType.POLICY: 0.35,
        MainType.ECONOMY: 0.30,
        MainType.OTHER: 0.55,
    }
)

# A flat 25% of occupied rooms is at risk whatever the disruption type
DISRUPTION_PERCENTAGES: Mapping[MainType, float] = MappingProxyType(
    {main_type: 0.25 for main_type in MainType}
)

INCENTIVE_BONUS: float = 0.05
MAX_NIGHTS_AT_RISK_SHARE: float = 0.5
MAX_RECOVERY_RATE: float = 1.0

# Default (rooms, occupancy) per size, used when the profile omits them
HOTEL_CONFIGS: Mapping[SizeCategory, Tuple[int, float]] = MappingProxyType(
    {
        SizeCategory.MICRO: (8, 0.60),
        SizeCategory.SMALL: (35, 0.65),
        SizeCategory.MEDIUM: (80, 0.70),
    }
)

# ---------------------------------------------------------------------------
# Alert metadata
# ---------------------------------------------------------------------------
SECTORS_BY_TYPE: Mapping[MainType, Tuple[str, ...]] = MappingProxyType(
    {
        MainType.STRIKE: ("Airlines", "Transportation", "Travel"),
        MainType.WEATHER: ("Airlines", "Transportation", "Tourism", "Hospitality"),
        MainType.PROTEST: ("Transportation", "Tourism", "Business Travel"),
        MainType.FLIGHT_ISSUES: ("Airlines", "Transportation", "Travel"),
        MainType.STAFF_SHORTAGE: ("Airlines", "Hospitality", "Transportation"),
        MainType.SUPPLY_CHAIN: ("Airlines", "Hospitality", "Transportation"),
        MainType.SYSTEM_FAILURE: ("Airlines", "Transportation", "Technology"),
        MainType.POLICY: ("Travel", "Tourism", "International Business"),
        MainType.ECONOMY: ("Tourism", "Hospitality", "Business Travel"),
        MainType.OTHER: ("Transportation", "Travel"),
    }
)

RECOVERY_EXPECTED: Mapping[MainType, str] = MappingProxyType(
    {
        MainType.STRIKE: "2-7 days",
        MainType.WEATHER: "1-3 days",
        MainType.PROTEST: "1-2 days",
        MainType.FLIGHT_ISSUES: "1-5 days",
        MainType.STAFF_SHORTAGE: "3-7 days",
        MainType.SUPPLY_CHAIN: "3-10 days",
        MainType.SYSTEM_FAILURE: "1-24 hours",
        MainType.POLICY: "Variable",
        MainType.ECONOMY: "Weeks to months",
        MainType.OTHER: "Variable",
    }
)


def _group(category: str, description: str, icon: str, *items: Tuple[str, str]) -> GuidanceGroup:
    return GuidanceGroup(
        category=category,
        description=description,
        icon=icon,
        items=tuple(GuidanceItem(title, detail) for title, detail in items),
    )


# "What's impacted" blocks; types without an entry use the general block
WHATS_IMPACTED: Mapping[MainType, Tuple[GuidanceGroup, ...]] = MappingProxyType(
    {
        MainType.STRIKE: (
            _group(
                "Airports & Flights", "Flight operations affected", "plane",
                ("Flight cancellations", "Multiple routes impacted"),
                ("Passenger delays", "Long queues and waiting times"),
                ("Connection disruptions", "Transfer passengers affected"),
            ),
            _group(
                "Ground Transportation", "Rail and road access affected", "train",
                ("Rail services", "Train schedules disrupted"),
                ("Taxi availability", "Increased demand at airports"),
            ),
        ),
        MainType.WEATHER: (
            _group(
                "Flight Operations", "Weather-related flight disruptions", "cloud-snow",
                ("Flight cancellations", "Due to safety concerns"),
                ("Delays and diversions", "Weather-dependent routing"),
            ),
            _group(
                "Ground Transport", "Road and rail conditions", "car",
                ("Road closures", "Unsafe driving conditions"),
                ("Rail delays", "Signal and track issues"),
            ),
        ),
    }
)

GENERAL_WHATS_IMPACTED: Tuple[GuidanceGroup, ...] = (
    _group(
        "General Impact", "Disruption affecting travel", "alert-triangle",
        ("Travel disruptions", "Various travel services affected"),
    ),
)

ACTION_PLANS: Mapping[MainType, Tuple[GuidanceGroup, ...]] = MappingProxyType(
    {
        MainType.STRIKE: (
            _group(
                "Immediate Actions", "Steps to take right now", "zap",
                ("Monitor flight status", "Check airline websites and apps"),
                ("Contact airline directly", "Confirm booking status"),
                ("Consider alternative routes", "Look for connecting flights"),
            ),
            _group(
                "Contingency Planning", "Prepare for extended disruption", "calendar",
                ("Book alternative flights", "If cancellation confirmed"),
                ("Arrange ground transport", "Plan for airport transfers"),
                ("Update travel insurance", "Document any changes"),
            ),
        ),
        MainType.WEATHER: (
            _group(
                "Weather Monitoring", "Stay informed about conditions", "eye",
                ("Check weather forecasts", "Monitor updates regularly"),
                ("Follow airline communications", "Stay updated on flight status"),
            ),
            _group(
                "Flexible Planning", "Prepare for changes", "refresh-cw",
                ("Have backup travel dates", "Consider flexible booking options"),
                ("Monitor road conditions", "Check for alternative routes"),
            ),
        ),
    }
)

GENERAL_ACTION_PLAN: Tuple[GuidanceGroup, ...] = (
    _group(
        "General Actions", "Recommended steps", "list",
        ("Monitor situation", "Stay updated on developments"),
        ("Contact service providers", "Confirm your arrangements"),
        ("Prepare contingency plans", "Have backup options ready"),
    ),
)

DEFAULT_TONE: Tone = Tone.DEVELOPING

__all__ = [
    "CONFIDENCE_SCORING",
    "SOURCE_CONFIDENCE",
    "APPROVAL_THRESHOLD",
    "CLUSTER_SIMILARITY_THRESHOLD",
    "ALERT_MATCH_THRESHOLD",
    "CONFIDENCE_CHANGE_THRESHOLD",
    "BASE_RECOVERY_RATES",
    "DISRUPTION_PERCENTAGES",
    "INCENTIVE_BONUS",
    "MAX_NIGHTS_AT_RISK_SHARE",
    "MAX_RECOVERY_RATE",
    "HOTEL_CONFIGS",
    "SECTORS_BY_TYPE",
    "RECOVERY_EXPECTED",
    "WHATS_IMPACTED",
    "GENERAL_WHATS_IMPACTED",
    "ACTION_PLANS",
    "GENERAL_ACTION_PLAN",
    "DEFAULT_TONE",
]
