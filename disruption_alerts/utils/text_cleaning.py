"""Shared helpers for tidying raw LLM output."""

from __future__ import annotations

import re
from typing import Final

# ---------------------------------------------------------------------------
# Public helpers
# ---------------------------------------------------------------------------

def strip_think_blocks(text: str) -> str:
    """Extract content after the closing </think> tag from an LLM response.

    Handles missing tags and safely removes code fences if present.
    """
    if not text:
        return (text or "").strip()

    marker: Final[str] = "</think>"
    idx: int = text.rfind(marker)

    # Fallback to full text if marker is missing
    after: str = text if idx == -1 else text[idx + len(marker) :]

    cleaned: str = after.strip()

    # Remove code fences if present
    cleaned = re.sub(r"^```[a-zA-Z]*\s*", "", cleaned)
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3].strip()

    return cleaned


def clean_llm_line(text: str) -> str:
    """Reduce a one-line LLM answer to its bare text.

    Strips think blocks and fences, surrounding quotes, trailing punctuation
    and collapses inner whitespace.
    """
    cleaned: str = strip_think_blocks(text)
    # First non-empty line only
    for line in cleaned.splitlines():
        if line.strip():
            cleaned = line.strip()
            break
    cleaned = cleaned.strip("\"'“”‘’` ")
    cleaned = re.sub(r"[.,;:!?]+$", "", cleaned)
    return re.sub(r"\s+", " ", cleaned).strip()

__all__ = ["strip_think_blocks", "clean_llm_line"]
