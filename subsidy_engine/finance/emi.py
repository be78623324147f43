"""EMI (equated monthly instalment) and reducing-balance loan schedule.

For principal P, annual rate R (percent) and tenure N (months)::

    r   = R / 12 / 100
    EMI = P × r × (1 + r)^N / ((1 + r)^N − 1)

EMIs are rounded half-up to whole rupees. Degenerate inputs (P ≤ 0, N ≤ 0,
non-finite results) yield 0 instead of raising; R = 0 yields P / N.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
import numpy_financial as npf

from subsidy_engine.config.defaults import (
    MONTHS_PER_YEAR,
    PERCENT,
    STANDARD_TENURES_MONTHS,
)
from subsidy_engine.finance.rounding import round_half_up


@dataclass(frozen=True)
class EmiSchedule:
    """Month-by-month reducing-balance schedule.

    Attributes:
        principal: Loan principal in INR.
        annual_rate_pct: Annual interest rate in percent.
        tenure_months: Number of monthly instalments.
        monthly_payment: Exact (unrounded) monthly instalment.
        emi: Monthly instalment rounded to whole rupees.
        interest_payments: Interest portion per month (length = tenure).
        principal_payments: Principal portion per month (length = tenure).
        remaining_balance: Outstanding balance after each month (length = tenure).
    """

    principal: float
    annual_rate_pct: float
    tenure_months: int
    monthly_payment: float
    emi: int
    interest_payments: list[float]
    principal_payments: list[float]
    remaining_balance: list[float]

    @property
    def total_paid(self) -> float:
        """Sum of all instalments."""
        return self.monthly_payment * len(self.interest_payments)

    @property
    def total_interest(self) -> float:
        """Sum of all interest portions."""
        return float(sum(self.interest_payments))


def monthly_rate(annual_rate_pct: float) -> float:
    """Convert an annual percentage rate to a monthly fraction."""
    return annual_rate_pct / MONTHS_PER_YEAR / PERCENT


def _exact_payment(
    principal: float,
    annual_rate_pct: float,
    tenure_months: int,
) -> float:
    """Unrounded monthly payment, 0.0 for degenerate inputs."""
    if principal <= 0.0 or tenure_months <= 0:
        return 0.0
    rate = monthly_rate(annual_rate_pct)
    if rate == 0.0:
        return principal / tenure_months
    payment = -float(npf.pmt(rate, tenure_months, principal))
    if not math.isfinite(payment):
        return 0.0
    return payment


def calculate_emi(
    principal: float,
    annual_rate_pct: float,
    tenure_months: int,
) -> int:
    """Calculate the rounded monthly EMI for a loan.

    Args:
        principal: Loan principal in INR.
        annual_rate_pct: Annual interest rate in percent (e.g. 10.0).
        tenure_months: Loan tenure in months.

    Returns:
        EMI in whole rupees (0 for non-positive principal or tenure).
    """
    return max(round_half_up(_exact_payment(principal, annual_rate_pct, tenure_months)), 0)


def emi_for_tenures(
    principal: float,
    annual_rate_pct: float,
    tenures: tuple[int, ...] = STANDARD_TENURES_MONTHS,
) -> dict[int, int]:
    """Calculate the EMI for each tenure at the same principal and rate.

    Args:
        principal: Loan principal in INR.
        annual_rate_pct: Annual interest rate in percent.
        tenures: Tenures in months.

    Returns:
        Mapping tenure → EMI in whole rupees, in the order of *tenures*.
    """
    if principal <= 0.0:
        return {int(n): 0 for n in tenures}

    rate = monthly_rate(annual_rate_pct)
    nper = np.asarray(tenures, dtype=float)
    if rate == 0.0:
        payments = np.where(nper > 0, principal / np.where(nper > 0, nper, 1.0), 0.0)
    else:
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            payments = -npf.pmt(rate, nper, principal)
        payments = np.where(nper > 0, payments, 0.0)

    return {
        int(n): max(round_half_up(float(p)), 0)
        for n, p in zip(tenures, payments)
    }


def build_emi_schedule(
    principal: float,
    annual_rate_pct: float,
    tenure_months: int,
) -> EmiSchedule:
    """Build the full month-by-month repayment schedule.

    Args:
        principal: Loan principal in INR.
        annual_rate_pct: Annual interest rate in percent.
        tenure_months: Loan tenure in months.

    Returns:
        :class:`EmiSchedule` with the per-month interest/principal split.
        Empty lists when the principal or tenure is not positive.
    """
    payment = _exact_payment(principal, annual_rate_pct, tenure_months)

    if payment <= 0.0:
        return EmiSchedule(
            principal=max(principal, 0.0),
            annual_rate_pct=annual_rate_pct,
            tenure_months=max(tenure_months, 0),
            monthly_payment=0.0,
            emi=0,
            interest_payments=[],
            principal_payments=[],
            remaining_balance=[],
        )

    rate = monthly_rate(annual_rate_pct)
    interest_payments: list[float] = []
    principal_payments: list[float] = []
    remaining_balance: list[float] = []
    balance = principal

    for _ in range(tenure_months):
        interest = balance * rate
        repaid = payment - interest
        balance = balance - repaid

        interest_payments.append(interest)
        principal_payments.append(repaid)
        remaining_balance.append(max(balance, 0.0))

    return EmiSchedule(
        principal=principal,
        annual_rate_pct=annual_rate_pct,
        tenure_months=tenure_months,
        monthly_payment=payment,
        emi=round_half_up(payment),
        interest_payments=interest_payments,
        principal_payments=principal_payments,
        remaining_balance=remaining_balance,
    )
