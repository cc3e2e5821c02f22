"""Disruption reports from the NewsData.io news feed.

Articles carry no structured disruption data, so city, type and source
credibility are inferred from keywords.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..clients.newsdata_client import get_newsdata_session
from ..config import NEWSDATA_API_KEY, NEWSDATA_BASE_URL, SCOUT_HORIZON_DAYS
from ..models.disruption import CredibilityTier, DisruptionReport, MainType
from ..utils.datetime_utils import today

# ---------------------------------------------------------------------------
# Local NewsData settings (only used by this service)
# ---------------------------------------------------------------------------
NEWSDATA_COUNTRIES: str = "gb,it,fr,nl,de,es,ie,pl,pt,se,no,us,ca"
NEWSDATA_CATEGORIES: str = "politics,environment,travel,business,technology,economy"
NEWSDATA_PAGE_SIZE: int = 50
NEWSDATA_TIMEOUT: int = 30

_PLACES = (
    'Edinburgh OR London OR Heathrow OR Gatwick OR "Edinburgh Airport" OR ScotRail OR LNER'
    ' OR Avanti OR Eurostar OR Ryanair OR EasyJet OR "British Airways" OR KLM'
)
_KEYWORDS = (
    '"strike" OR "walkout" OR "industrial action" OR "pilot strike" OR "ATC strike"'
    ' OR "weather disruption" OR "snow" OR "flood" OR "storm" OR "fog" OR "heatwave"'
    ' OR "protest" OR "blockade" OR "demonstration" OR "riot"'
    ' OR "flight delay" OR "flight cancellation" OR "grounding" OR "runway closure"'
    ' OR "staff shortage" OR "pilot shortage" OR "fuel shortage" OR "outage"'
    ' OR "travel ban" OR "visa restriction" OR "road closure" OR "festival chaos"'
)
DISRUPTION_QUERY: str = f"({_PLACES}) AND ({_KEYWORDS})"

# Substring checks, first match wins
_MAJOR_SOURCES = ("bbc", "reuters", "sky", "guardian")
_CREDIBLE_SOURCES = _MAJOR_SOURCES + ("independent", "telegraph")
_SOCIAL_SOURCES = ("twitter", "reddit")

_CITY_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("Edinburgh", ("edinburgh",)),
    ("London", ("london", "heathrow", "gatwick")),
)

logger = logging.getLogger(__name__)


def extract_city(text: str) -> Optional[str]:
    lowered = text.lower()
    for city, keywords in _CITY_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return city
    return None


def _first_match(text: str, options: Tuple[Tuple[Tuple[str, ...], str], ...], default: str) -> str:
    for keywords, sub_type in options:
        if any(keyword in text for keyword in keywords):
            return sub_type
    return default


def classify_disruption(text: str) -> Tuple[MainType, str]:
    """Infer ``(main_type, sub_type)`` from article text; defaults to OTHER."""
    t = text.lower()

    if any(k in t for k in ("strike", "walkout", "industrial action")):
        return MainType.STRIKE, _first_match(
            t,
            (
                (("pilot",), "airline_pilot"),
                (("crew",), "crew"),
                (("atc", "air traffic"), "atc"),
                (("ferry",), "ferry"),
                (("ground", "baggage"), "ground_staff"),
                (("rail", "train"), "rail"),
            ),
            "general_strike",
        )

    if any(k in t for k in ("snow", "flood", "storm", "fog", "ice", "hurricane", "heatwave", "cold snap")):
        return MainType.WEATHER, _first_match(
            t,
            (
                (("snow", "ice"), "snow"),
                (("flood",), "flood"),
                (("storm", "hurricane"), "storm"),
                (("fog",), "fog"),
                (("heatwave",), "heatwave"),
                (("cold snap",), "cold_snap"),
            ),
            "extreme_weather",
        )

    if any(k in t for k in ("protest", "march", "blockade", "demonstration", "rally", "riot")):
        return MainType.PROTEST, "civil_unrest"

    if any(k in t for k in ("flight delay", "flight cancellation", "grounding", "runway closure")):
        return MainType.FLIGHT_ISSUES, _first_match(
            t,
            (
                (("delay",), "delay"),
                (("cancellation",), "cancellation"),
                (("grounding",), "grounding"),
                (("runway",), "runway_closure"),
                (("airspace",), "airspace_restriction"),
            ),
            "flight_issue",
        )

    if any(k in t for k in ("staff shortage", "labor shortage", "pilot shortage", "crew absence")):
        return MainType.STAFF_SHORTAGE, _first_match(
            t,
            (
                (("pilot",), "pilot_shortage"),
                (("crew",), "crew_absence"),
                (("check-in", "airport"), "airport_check_in"),
                (("hotel", "cleaning"), "hotel_cleaning"),
            ),
            "staff_shortage",
        )

    return MainType.OTHER, "general_disruption"


def classify_source_credibility(source_id: Optional[str]) -> CredibilityTier:
    source = (source_id or "").lower()
    if any(name in source for name in _MAJOR_SOURCES):
        return CredibilityTier.MAJOR_NEWS
    if any(name in source for name in _CREDIBLE_SOURCES):
        return CredibilityTier.OTHER_NEWS
    if any(name in source for name in _SOCIAL_SOURCES):
        return CredibilityTier.SOCIAL
    return CredibilityTier.OTHER_NEWS


def transform_article(article: Mapping[str, Any]) -> Optional[DisruptionReport]:
    """Turn one NewsData article into a report, or ``None`` if it names no city."""
    title = article.get("title") or ""
    text = f"{title} {article.get('description') or ''}"

    city = extract_city(text)
    if not city or not title:
        return None

    main_type, sub_type = classify_disruption(text)
    # Articles rarely state a date range; assume the whole horizon
    start = today()
    source_id = article.get("source_id") or article.get("source_name") or "NewsData"

    return DisruptionReport(
        city=city,
        main_type=main_type,
        sub_type=sub_type,
        title=title,
        summary=article.get("description") or title,
        start_date=start,
        end_date=start + timedelta(days=SCOUT_HORIZON_DAYS),
        source=source_id,
        url=article.get("link") or "",
        source_credibility=classify_source_credibility(article.get("source_id")),
        published_at=article.get("pubDate"),
    )


def fetch_news_reports(params: Optional[Dict[str, Any]] = None) -> List[DisruptionReport]:
    """Query NewsData for disruption news and transform the articles."""
    if not NEWSDATA_API_KEY:
        raise EnvironmentError("NEWSDATA_API_KEY is not set in environment variables")

    request_params: Dict[str, Any] = {
        "apikey": NEWSDATA_API_KEY,
        "country": NEWSDATA_COUNTRIES,
        "category": NEWSDATA_CATEGORIES,
        "language": "en",
        "size": NEWSDATA_PAGE_SIZE,
        "q": DISRUPTION_QUERY,
        **(params or {}),
    }
    logger.info("Fetching news from NewsData.io…")

    response = get_newsdata_session().get(
        f"{NEWSDATA_BASE_URL}/news", params=request_params, timeout=NEWSDATA_TIMEOUT
    )
    if response.status_code != 200:
        logger.error("Error from NewsData API: %s - %s", response.status_code, response.text)
        raise RuntimeError(f"NewsData API error: {response.status_code}")

    body = response.json()
    if body.get("status") != "success":
        raise RuntimeError(f"NewsData API error: {body.get('message') or 'Unknown error'}")

    articles = body.get("results") or []
    reports = [r for r in (transform_article(a) for a in articles) if r is not None]
    logger.info("Fetched %d articles, transformed to %d reports", len(articles), len(reports))
    return reports


__all__ = [
    "extract_city",
    "classify_disruption",
    "classify_source_credibility",
    "transform_article",
    "fetch_news_reports",
]
