"""Half-up rounding.

Python's built-in ``round`` uses banker's rounding (``round(2.5) == 2``); the
published scoring and impact figures round halves up.
"""

from __future__ import annotations

import math

__all__ = ["round_half_up"]


def round_half_up(value: float, digits: int = 0) -> float:
    """Round *value* to *digits* decimals, halves rounded upwards."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor
