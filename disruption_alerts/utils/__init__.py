"""Utility functions for the disruption alerts project.

Re-exports the text-cleaning, parsing, rounding and datetime helpers so that
imports like `from ..utils import round_half_up` work as expected.
"""

from .text_cleaning import strip_think_blocks, clean_llm_line  # noqa: F401
from .datetime_utils import get_current_timestamp, parse_date, to_datetime, today  # noqa: F401
from .llm_parsing import extract_json_object  # noqa: F401
from .rounding import round_half_up  # noqa: F401

__all__ = [
    "strip_think_blocks",
    "clean_llm_line",
    "get_current_timestamp",
    "parse_date",
    "to_datetime",
    "today",
    "extract_json_object",
    "round_half_up",
]
