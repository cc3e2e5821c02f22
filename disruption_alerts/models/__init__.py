"""Domain models used across the project."""

from .alert import (  # noqa: F401
    Alert,
    AlertStatus,
    ConfidenceSource,
    GuidanceGroup,
    GuidanceItem,
    Tone,
)
from .disruption import (  # noqa: F401
    CredibilityTier,
    DisruptionCluster,
    DisruptionReport,
    MainType,
)
from .hotel import (  # noqa: F401
    DisruptionWindow,
    HotelImpact,
    HotelProfile,
    ImpactResult,
    NightsSaved,
    PoundsSaved,
    SizeCategory,
)

__all__ = [
    "Alert",
    "AlertStatus",
    "ConfidenceSource",
    "GuidanceGroup",
    "GuidanceItem",
    "Tone",
    "CredibilityTier",
    "DisruptionCluster",
    "DisruptionReport",
    "MainType",
    "DisruptionWindow",
    "HotelImpact",
    "HotelProfile",
    "ImpactResult",
    "NightsSaved",
    "PoundsSaved",
    "SizeCategory",
]
