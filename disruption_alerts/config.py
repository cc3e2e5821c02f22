"""Centralised configuration for disruption_alerts.

Environment variables are loaded once and all related constants are
grouped by service for easier maintenance.
"""

from __future__ import annotations

import os
from typing import Tuple

from dotenv import load_dotenv

# ---------------------------------------------------------------------------
# Load environment variables from `.env` (if present)
# ---------------------------------------------------------------------------
load_dotenv()

# ---------------------------------------------------------------------------
# Core credentials (from environment)
# ---------------------------------------------------------------------------
GROK_API_KEY: str | None = os.getenv("GROK_API_KEY")
NEWSDATA_API_KEY: str | None = os.getenv("NEWSDATA_API_KEY")
MONGODB_URI: str | None = os.getenv("MONGODB_URI")

# ---------------------------------------------------------------------------
# Service endpoints
# ---------------------------------------------------------------------------
GROK_BASE_URL: str = os.getenv("GROK_BASE_URL", "https://api.x.ai/v1")
GROK_MODEL: str = os.getenv("GROK_MODEL", "grok-4-1-fast-reasoning")
NEWSDATA_BASE_URL: str = "https://newsdata.io/api/1"

# ---------------------------------------------------------------------------
# Cross-cutting settings
# (referenced in more than one component)
# ---------------------------------------------------------------------------
MONGODB_DATABASE: str = os.getenv("MONGODB_DATABASE", "disruptions")
ALERTS_COLLECTION: str = "alerts"

CITIES: Tuple[str, ...] = ("Edinburgh", "London")

# Scout and alert matching both look this many days ahead
SCOUT_HORIZON_DAYS: int = int(os.getenv("SCOUT_HORIZON_DAYS", "30"))

# ---------------------------------------------------------------------------
# Re-exported names
# ---------------------------------------------------------------------------
__all__ = [
    # credentials
    "GROK_API_KEY",
    "NEWSDATA_API_KEY",
    "MONGODB_URI",
    # endpoints
    "GROK_BASE_URL",
    "GROK_MODEL",
    "NEWSDATA_BASE_URL",
    # shared
    "MONGODB_DATABASE",
    "ALERTS_COLLECTION",
    "CITIES",
    "SCOUT_HORIZON_DAYS",
]
