"""Energy generation, bill savings and simple payback period.

    daily_kWh    = capacity_kW × 4
    monthly_kWh  = daily_kWh × 30
    monthly_INR  = monthly_kWh × unit_rate
    annual_INR   = monthly_INR × 12
    lifetime_INR = annual_INR × 25          (panel service life)
    payback_yrs  = net_cost / annual_INR   (0 when annual_INR ≤ 0)
    effective    = max(0, EMI − monthly_INR)
"""

from __future__ import annotations

from dataclasses import dataclass

from subsidy_engine.config.defaults import (
    DAYS_PER_MONTH,
    GENERATION_KWH_PER_KW_PER_DAY,
    MONTHS_PER_YEAR,
    PANEL_LIFETIME_YEARS,
)
from subsidy_engine.finance.rounding import round_to_tenth


@dataclass(frozen=True)
class EnergySavings:
    """Generation and savings projection for one system."""

    daily_generation_kwh: float
    monthly_generation_kwh: float
    monthly_savings: float
    annual_savings: float
    lifetime_savings: float


def calculate_energy_savings(capacity_kw: float, unit_rate: float) -> EnergySavings:
    """Project generation and bill savings.

    Args:
        capacity_kw: Installed capacity in kW.
        unit_rate: Electricity tariff in INR/kWh.

    Returns:
        :class:`EnergySavings` for the system.
    """
    daily = capacity_kw * GENERATION_KWH_PER_KW_PER_DAY
    monthly = daily * DAYS_PER_MONTH
    monthly_savings = monthly * unit_rate
    annual_savings = monthly_savings * MONTHS_PER_YEAR
    return EnergySavings(
        daily_generation_kwh=daily,
        monthly_generation_kwh=monthly,
        monthly_savings=monthly_savings,
        annual_savings=annual_savings,
        lifetime_savings=annual_savings * PANEL_LIFETIME_YEARS,
    )


def calculate_payback_years(net_cost: float, annual_savings: float) -> float:
    """Simple payback period in years, rounded to one decimal.

    Returns 0.0 when *annual_savings* is not positive.
    """
    if annual_savings <= 0.0:
        return 0.0
    return round_to_tenth(net_cost / annual_savings)


def effective_monthly_payment(emi: float, monthly_savings: float) -> float:
    """Out-of-pocket monthly payment once bill savings offset the EMI.

    Never negative; 0.0 means the savings cover the whole EMI.
    """
    return max(emi - monthly_savings, 0.0)
