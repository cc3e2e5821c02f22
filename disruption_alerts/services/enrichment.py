"""Alert enrichment – tone label and revenue header from Grok.

Both calls are best-effort: a failed or unusable response falls back to the
default tone and to the alert title as header, and never blocks an alert from
being created or approved.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from openai import OpenAI

from ..clients.grok_client import get_grok_client
from ..config import GROK_MODEL
from ..constants import DEFAULT_TONE
from ..models.alert import Alert, Tone
from ..models.disruption import MainType
from ..models.hotel import ImpactResult
from ..utils.datetime_utils import today as _today
from ..utils.text_cleaning import clean_llm_line

# ---------------------------------------------------------------------------
# Local prompt settings (only used by this service)
# ---------------------------------------------------------------------------
TONE_PROMPT: str = (
    "Say ONE word: Early, Developing, or Confirmed.\n\n"
    "Event: {title}\n\n"
    "Sources: {sources}\n\n"
    "Return only one word: Early, Developing, or Confirmed."
)

HEADER_PROMPT: str = (
    "Write ONE line:\n\n"
    '"[Event] could empty X rooms [when] impacting £Y"\n\n'
    "Event: {event}\n"
    "Rooms: {rooms}\n"
    "Value: £{value}\n"
    "When: {when}\n\n"
    "Rules:\n"
    "- Keep it short and real\n"
    "- No symbols, no jargon\n"
    "- Never repeat the same phrase\n"
    '- Use natural words (e.g. "this weekend", "Friday", "overnight")\n'
    "- X = number of rooms at risk\n"
    "- Y = total £ value at risk"
)

TONE_MAX_TOKENS: int = 10
HEADER_MAX_TOKENS: int = 60

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Enrichment:
    tone: Tone
    header: str


def when_text(start_date: Optional[date], reference: Optional[date] = None) -> str:
    """Describe how soon *start_date* is, in the words used by headers."""
    if start_date is None:
        return "this weekend"

    diff_days = (start_date - (reference or _today())).days
    if diff_days <= 0:
        return "today"
    if diff_days == 1:
        return "tomorrow"
    if diff_days <= 7:
        return "this weekend"
    if diff_days <= 14:
        return "next week"
    return "this weekend"


class LLMEnricher:
    """Generate tone and header text for approved alerts."""

    def __init__(self, client: Optional[OpenAI] = None, model: str = GROK_MODEL) -> None:
        self._client = client
        self.model = model

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            self._client = get_grok_client()
        return self._client

    def _complete(self, prompt: str, *, temperature: float, max_tokens: int) -> str:
        resp = self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=temperature,
            max_tokens=max_tokens,
        )
        content = resp.choices[0].message.content
        if not content:
            raise ValueError("No content received from Grok API")
        return clean_llm_line(content)

    def generate_tone(self, title: str, sources: Sequence[str]) -> Tone:
        """Ask for Early / Developing / Confirmed; anything else is the default tone."""
        prompt = TONE_PROMPT.format(title=title, sources=", ".join(sources))
        try:
            answer = self._complete(prompt, temperature=0.0, max_tokens=TONE_MAX_TOKENS)
        except Exception as exc:  # network or API failure
            logger.warning("Tone generation failed for '%s': %s – using default", title, exc)
            return DEFAULT_TONE

        tone = Tone.parse(answer)
        if tone is None:
            logger.warning("Unexpected tone '%s' for '%s' – using default", answer, title)
            return DEFAULT_TONE
        return tone

    def generate_header(
        self,
        main_type: MainType,
        nights_at_risk: int,
        pounds_at_risk: float,
        when: str,
        *,
        fallback: str = "",
    ) -> str:
        """One-line "could empty X rooms ... impacting £Y" header, or *fallback*."""
        prompt = HEADER_PROMPT.format(
            event=MainType.parse(main_type).value.replace("_", " "),
            rooms=nights_at_risk,
            value=f"{pounds_at_risk:,.0f}",
            when=when,
        )
        try:
            header = self._complete(prompt, temperature=0.7, max_tokens=HEADER_MAX_TOKENS)
        except Exception as exc:  # network or API failure
            logger.warning("Header generation failed: %s – using fallback", exc)
            return fallback
        return header or fallback

    def enrich(
        self,
        alert: Alert,
        impact: Optional[ImpactResult] = None,
        reference: Optional[date] = None,
    ) -> Enrichment:
        """Tone plus header for *alert*.

        The header needs impact figures; without them (or with a zero impact)
        the alert title is used.
        """
        sources = [s.source for s in alert.confidence_sources]
        tone = self.generate_tone(alert.title, sources)

        header = alert.title
        if impact is not None and impact.ok and impact.nights_at_risk and impact.pounds_at_risk:
            header = self.generate_header(
                alert.main_type,
                impact.nights_at_risk,
                impact.pounds_at_risk,
                when_text(alert.start_date, reference),
                fallback=alert.title,
            )

        logger.info("Enriched alert '%s' with tone %s", alert.title, tone.value)
        return Enrichment(tone=tone, header=header)


__all__ = ["Enrichment", "LLMEnricher", "when_text"]
