"""Currency rounding helpers.

Python's built-in ``round`` uses banker's rounding (``round(2.5) == 2``).
Quoted amounts round halves upwards instead, so ``22 050.5`` becomes
``22 051``.
"""

from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves upwards. Non-finite values give 0."""
    if not math.isfinite(value):
        return 0
    return int(math.floor(value + 0.5))


def round_to_tenth(value: float) -> float:
    """Round to one decimal place, halves upwards. Non-finite values give 0.0."""
    if not math.isfinite(value):
        return 0.0
    return math.floor(value * 10.0 + 0.5) / 10.0
