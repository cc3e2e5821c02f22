"""Utilities for parsing structured outputs returned by LLM calls.

The scout asks Grok for a single JSON object per disruption, but models still
wrap it in prose, fences or reasoning blocks now and then.
"""

from __future__ import annotations

import json
import re
from typing import Any, Dict

from .text_cleaning import strip_think_blocks

__all__ = ["extract_json_object"]


def extract_json_object(response_text: str) -> Dict[str, Any]:
    """Robustly extract a single JSON object from an LLM response.

    Parameters
    ----------
    response_text
        The raw message content returned by the model.

    Returns
    -------
    dict[str, Any]
        The parsed object.

    Raises
    ------
    ValueError
        If no JSON object can be located in *response_text*, or the payload
        is a JSON value other than an object (e.g. an array).
    """

    cleaned: str = strip_think_blocks(response_text).strip()

    # 1. Try to parse the whole string first (fast path)
    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError:
        parsed = None

    # 2. Outermost {...} span
    if parsed is None:
        match = re.search(r"\{.*\}", cleaned, flags=re.DOTALL)
        if not match:
            raise ValueError("Could not locate JSON object in LLM response")
        try:
            parsed = json.loads(match.group(0))
        except json.JSONDecodeError as exc:
            raise ValueError(f"Malformed JSON object in LLM response: {exc}") from exc

    if not isinstance(parsed, dict):
        raise ValueError("Response is not a valid JSON object")
    return parsed
