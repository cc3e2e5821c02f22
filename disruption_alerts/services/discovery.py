"""Disruption discovery via the Grok LLM scout.

The scout is asked for one disruption at a time so every answer can be
validated on its own and the titles found so far can be excluded from the
next prompt.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Iterable, List, Optional

from openai import OpenAI

from ..clients.grok_client import get_grok_client
from ..config import GROK_MODEL, SCOUT_HORIZON_DAYS
from ..exceptions import InvalidReportError
from ..models.disruption import DisruptionReport
from ..utils.datetime_utils import today as _today
from ..utils.llm_parsing import extract_json_object

# ---------------------------------------------------------------------------
# Local scout settings (only used by this service)
# ---------------------------------------------------------------------------
SCOUT_MAX_REPORTS: int = 25
SCOUT_MAX_TOKENS: int = 20000

SCOUT_REQUIRED_FIELDS = (
    "city",
    "main_type",
    "sub_type",
    "title",
    "start_date",
    "end_date",
    "source",
    "url",
    "summary",
)

logger = logging.getLogger(__name__)


def _build_prompt(city: str, known_titles: Iterable[str], start: date, end: date) -> str:
    example_start = start + timedelta(days=7)
    example_end = start + timedelta(days=8)
    excluded = "\n".join(f'- "{title}"' for title in known_titles) or "- (none)"
    return (
        f"You are a hotel disruption scout for {city}. Your task: Find ONE specific disruption"
        " that could prevent guests from arriving or checking in within the next"
        f" {SCOUT_HORIZON_DAYS} days.\n\n"
        f"CURRENT DATE: {start.isoformat()} (YYYY-MM-DD format)\n"
        f"VALID DATE RANGE: {start.isoformat()} to {end.isoformat()}\n\n"
        "VALID CATEGORIES (use exactly these):\n"
        "Main Types: strike, weather, protest, flight_issues, staff_shortage, supply_chain,"
        " system_failure, policy, economy, other\n\n"
        "Sub Types by Main Type:\n"
        "- strike: airline_pilot, rail, ferry, ground_staff, baggage_handlers\n"
        "- weather: snow, flood, storm, fog, ice, hurricane, heatwave, cold_snap\n"
        "- protest: march, blockade, sit_in, demonstration, rally, riot, civil_unrest\n"
        "- flight_issues: delay, cancellation, grounding, overbooking, airspace_restriction,"
        " runway_closure\n"
        "- staff_shortage: airport_check_in, hotel_cleaning, pilot_shortage, crew_absence\n"
        "- supply_chain: jet_fuel_shortage, catering_delay, laundry_crisis, toiletries_shortage\n"
        "- system_failure: it_crash, border_control_outage, booking_system_down,"
        " e_gates_failure, atm_failure\n"
        "- policy: travel_ban, visa_change, quarantine_rule, advisory, embargo\n"
        "- economy: pound_surge, recession, tourist_drop, exchange_rate_crash, fx_volatility,"
        " inflation_hit\n"
        "- other: road_closure, festival_chaos, construction_delay, mechanical_failure\n\n"
        "CRITICAL RULES:\n"
        f"1. Must affect {city} arrivals specifically. Global events only if they directly"
        f" affect {city}.\n"
        "2. Use realistic, specific sub-events in the title.\n"
        f"3. start_date and end_date MUST be between {start.isoformat()} and {end.isoformat()}.\n"
        "4. Use EXACT category names from the lists above.\n"
        "5. The title must be unique, not similar to any existing title.\n"
        "6. Use credible sources only (Reuters, BBC, local news) with a plausible URL.\n"
        "7. The summary must describe how it affects arrivals or check-ins.\n\n"
        f"DO NOT GENERATE THESE EXISTING ALERTS:\n{excluded}\n\n"
        "OUTPUT INSTRUCTIONS:\n"
        "- Respond only with a single valid JSON object, no markdown, no commentary.\n"
        "- Keys in this order: " + ", ".join(SCOUT_REQUIRED_FIELDS) + "\n\n"
        "EXAMPLE:\n"
        "{"
        f'"city":"{city}","main_type":"strike","sub_type":"airline_pilot",'
        f'"title":"Ryanair Rome-{city} pilot strike",'
        f'"start_date":"{example_start.isoformat()}","end_date":"{example_end.isoformat()}",'
        '"source":"Reuters",'
        '"url":"https://www.reuters.com/business/aerospace-defense/ryanair-pilot-strike-rome/",'
        f'"summary":"All Ryanair flights from Rome to {city} cancelled due to pilot strike.'
        ' Guests may not arrive."'
        "}"
    )


def validate_scout_report(
    payload: dict,
    city: str,
    known_titles: Iterable[str],
    start: date,
    end: date,
) -> DisruptionReport:
    """Check a scout answer against the prompt's rules and build the report.

    Raises :class:`InvalidReportError` describing the first broken rule.
    """
    for field_name in SCOUT_REQUIRED_FIELDS:
        if not payload.get(field_name):
            raise InvalidReportError(f"Missing required field: {field_name}")

    if payload["city"] != city:
        raise InvalidReportError(
            f'Generated disruption city "{payload["city"]}" does not match requested city "{city}"'
        )
    if payload["title"] in set(known_titles):
        raise InvalidReportError(f'Generated title "{payload["title"]}" already exists')

    # Ungraded scout sources fall back to other_news
    report = DisruptionReport.from_dict(payload)

    if report.start_date < start:
        raise InvalidReportError(f'start_date "{report.start_date}" is in the past')
    if report.start_date > end:
        raise InvalidReportError(
            f'start_date "{report.start_date}" is more than {SCOUT_HORIZON_DAYS} days ahead'
        )
    if report.end_date < report.start_date:
        raise InvalidReportError(
            f'end_date "{report.end_date}" is before start_date "{report.start_date}"'
        )
    if report.end_date > end:
        raise InvalidReportError(
            f'end_date "{report.end_date}" is more than {SCOUT_HORIZON_DAYS} days ahead'
        )
    return report


def _generate_single_disruption(
    client: OpenAI, city: str, known_titles: List[str], start: date, end: date
) -> DisruptionReport:
    resp = client.chat.completions.create(
        model=GROK_MODEL,
        messages=[{"role": "user", "content": _build_prompt(city, known_titles, start, end)}],
        temperature=0,
        max_tokens=SCOUT_MAX_TOKENS,
    )
    content: Optional[str] = resp.choices[0].message.content
    if not content:
        raise ValueError("No content received from Grok API")

    logger.debug("Raw scout response: %s", content[:150])
    payload = extract_json_object(content)
    return validate_scout_report(payload, city, known_titles, start, end)


def scout_disruptions(
    city: str,
    existing_titles: Iterable[str] = (),
    max_reports: int = SCOUT_MAX_REPORTS,
    client: Optional[OpenAI] = None,
) -> List[DisruptionReport]:
    """Ask Grok for up to *max_reports* disruptions affecting *city*.

    Each attempt is independent: a failed call or an invalid answer is logged
    and skipped.
    """
    client = client or get_grok_client()
    start = _today()
    end = start + timedelta(days=SCOUT_HORIZON_DAYS)
    known_titles: List[str] = list(existing_titles)
    logger.info("Scouting disruptions for %s (%d known alerts)", city, len(known_titles))

    reports: List[DisruptionReport] = []
    for attempt in range(1, max_reports + 1):
        try:
            report = _generate_single_disruption(client, city, known_titles, start, end)
        except Exception as exc:  # network failure or rejected answer
            logger.warning("Scout attempt %d/%d for %s failed: %s", attempt, max_reports, city, exc)
            continue
        reports.append(report)
        known_titles.append(report.title)
        logger.info("Scouted: %s", report.title)

    logger.info("Grok generated %d valid disruptions for %s", len(reports), city)
    return reports


__all__ = ["scout_disruptions", "validate_scout_report"]
