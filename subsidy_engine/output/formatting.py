"""Number and currency formatting helpers for output CSVs and stdout.

All functions return strings suitable for writing to CSV files or printing
to the terminal. None values are represented as an empty string.

Rupee amounts shown to people use Indian digit grouping (lakh/crore):
the last three digits form one group and the rest are grouped in pairs,
so 12345678 is written ``1,23,45,678``.

Public API
----------
group_indian – Group an integer's digits the Indian way.
fmt_inr      – Format a rupee amount for display (no decimals).
fmt_float    – Format a float with configurable decimal places.
fmt_currency – Format a monetary value for CSV output.
fmt_kwh      – Format an energy value in kWh.
fmt_years    – Format a duration in years.
fmt_pct      – Format a percentage value.
"""

from __future__ import annotations

from subsidy_engine.config.defaults import (
    CURRENCY_PRECISION,
    CURRENCY_SYMBOL,
    FLOAT_PRECISION,
)
from subsidy_engine.finance.rounding import round_half_up


def group_indian(value: int) -> str:
    """Group the digits of *value* in the Indian numbering system.

    Parameters
    ----------
    value:
        Integer to format. The sign is preserved.

    Returns
    -------
    str
        E.g. ``"1,00,00,000"`` for 10 000 000 or ``"-12,345"`` for −12 345.
    """
    sign = "-" if value < 0 else ""
    digits = str(abs(int(value)))
    if len(digits) <= 3:
        return sign + digits

    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return sign + ",".join(pairs) + "," + tail


def fmt_inr(
    value: float | None,
    symbol: str = CURRENCY_SYMBOL,
) -> str:
    """Format a rupee amount with Indian grouping and no fractional digits.

    Parameters
    ----------
    value:
        Amount in INR. None is returned as an empty string.
    symbol:
        Prefix, ``"₹"`` by default. Use ``"Rs "`` where the rupee glyph
        cannot be rendered.

    Returns
    -------
    str
        E.g. ``"₹1,47,000"`` or ``"-₹500"``.
    """
    if value is None:
        return ""
    amount = round_half_up(value)
    if amount < 0:
        return f"-{symbol}{group_indian(-amount)}"
    return f"{symbol}{group_indian(amount)}"


def fmt_float(
    value: float | None,
    precision: int = FLOAT_PRECISION,
) -> str:
    """Format a float to a fixed number of decimal places.

    Parameters
    ----------
    value:
        The value to format. None is returned as an empty string.
    precision:
        Number of decimal places.

    Returns
    -------
    str
        Formatted string, e.g. ``"3.1416"``.
    """
    if value is None:
        return ""
    return f"{value:.{precision}f}"


def fmt_currency(
    value: float | None,
    precision: int = CURRENCY_PRECISION,
) -> str:
    """Format a monetary value for CSV output (no grouping, fixed decimals)."""
    if value is None:
        return ""
    return f"{value:.{precision}f}"


def fmt_kwh(value: float | None) -> str:
    """Format an energy value as whole kWh, e.g. ``"360 kWh"``."""
    if value is None:
        return ""
    return f"{round_half_up(value)} kWh"


def fmt_years(value: float | None) -> str:
    """Format a payback period, e.g. ``"4.9 years"``."""
    if value is None:
        return ""
    return f"{value:.1f} years"


def fmt_pct(
    value: float | None,
    precision: int = 2,
) -> str:
    """Format a value already expressed in percent (without the % sign)."""
    if value is None:
        return ""
    return f"{value:.{precision}f}"
