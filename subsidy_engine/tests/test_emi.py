"""Tests for finance/emi.py – EMI and reducing-balance loan schedule.

Reference: 1 00 000 at 10 % for 60 months → EMI 2 124.70… → 2 125.
"""

from __future__ import annotations

import math

import numpy_financial as npf
import pytest

from subsidy_engine.finance.emi import (
    build_emi_schedule,
    calculate_emi,
    emi_for_tenures,
    monthly_rate,
)

REFERENCE_PRINCIPAL = 100_000.0
REFERENCE_RATE_PCT = 10.0
REFERENCE_TENURE = 60
REFERENCE_EMI = 2125


def _closed_form(principal: float, rate_pct: float, n: int) -> float:
    r = rate_pct / 12 / 100
    return principal * r * (1 + r) ** n / ((1 + r) ** n - 1)


# ---------------------------------------------------------------------------
# calculate_emi
# ---------------------------------------------------------------------------


class TestCalculateEmi:
    """Tests for the standalone EMI formula."""

    def test_reference_emi(self) -> None:
        """1 lakh at 10 % over 60 months rounds to 2 125."""
        assert calculate_emi(REFERENCE_PRINCIPAL, REFERENCE_RATE_PCT, REFERENCE_TENURE) == REFERENCE_EMI

    def test_matches_closed_form(self) -> None:
        exact = _closed_form(REFERENCE_PRINCIPAL, REFERENCE_RATE_PCT, REFERENCE_TENURE)
        assert math.isclose(exact, 2124.70, abs_tol=0.1)
        assert calculate_emi(REFERENCE_PRINCIPAL, REFERENCE_RATE_PCT, REFERENCE_TENURE) == math.floor(exact + 0.5)

    def test_matches_numpy_financial(self) -> None:
        expected = -npf.pmt(0.12 / 12, 36, 250_000.0)
        assert calculate_emi(250_000.0, 12.0, 36) == math.floor(expected + 0.5)

    def test_returns_int(self) -> None:
        assert isinstance(calculate_emi(124_950.0, 10.0, 48), int)

    def test_zero_principal(self) -> None:
        assert calculate_emi(0.0, 10.0, 60) == 0

    def test_negative_principal(self) -> None:
        assert calculate_emi(-50_000.0, 10.0, 60) == 0

    def test_zero_tenure(self) -> None:
        assert calculate_emi(REFERENCE_PRINCIPAL, 10.0, 0) == 0

    def test_zero_rate_is_straight_line(self) -> None:
        """0 % interest → principal / tenure, no division by zero."""
        assert calculate_emi(120_000.0, 0.0, 60) == 2000

    def test_uses_caller_rate(self) -> None:
        """A higher rate always gives a higher EMI."""
        assert calculate_emi(REFERENCE_PRINCIPAL, 15.0, 60) > calculate_emi(
            REFERENCE_PRINCIPAL, 10.0, 60
        )

    def test_monthly_rate(self) -> None:
        assert math.isclose(monthly_rate(12.0), 0.01)


# ---------------------------------------------------------------------------
# emi_for_tenures
# ---------------------------------------------------------------------------


class TestEmiForTenures:
    """Tests for the multi-tenure EMI table."""

    def test_standard_tenures(self) -> None:
        emis = emi_for_tenures(124_950.0, 10.0)
        assert list(emis) == [36, 48, 60, 72, 84]

    def test_agrees_with_single_calculation(self) -> None:
        emis = emi_for_tenures(124_950.0, 10.0)
        for tenure, emi in emis.items():
            assert emi == calculate_emi(124_950.0, 10.0, tenure)

    def test_strictly_decreasing_with_tenure(self) -> None:
        """Longer tenure → lower EMI for a positive principal and rate."""
        for principal in (25_000.0, 124_950.0, 1_000_000.0):
            for rate in (1.0, 10.0, 25.0):
                values = list(emi_for_tenures(principal, rate).values())
                assert all(a > b for a, b in zip(values, values[1:]))

    def test_zero_principal_all_zero(self) -> None:
        assert emi_for_tenures(0.0, 10.0) == {36: 0, 48: 0, 60: 0, 72: 0, 84: 0}

    def test_zero_rate(self) -> None:
        emis = emi_for_tenures(84_000.0, 0.0, (12, 84))
        assert emis == {12: 7000, 84: 1000}

    def test_custom_tenures(self) -> None:
        emis = emi_for_tenures(REFERENCE_PRINCIPAL, REFERENCE_RATE_PCT, (60,))
        assert emis == {60: REFERENCE_EMI}


# ---------------------------------------------------------------------------
# build_emi_schedule
# ---------------------------------------------------------------------------


class TestBuildEmiSchedule:
    """Tests for the month-by-month schedule builder."""

    @pytest.fixture
    def schedule(self):
        return build_emi_schedule(REFERENCE_PRINCIPAL, REFERENCE_RATE_PCT, REFERENCE_TENURE)

    def test_schedule_length(self, schedule) -> None:
        assert len(schedule.interest_payments) == REFERENCE_TENURE
        assert len(schedule.principal_payments) == REFERENCE_TENURE
        assert len(schedule.remaining_balance) == REFERENCE_TENURE

    def test_rounded_emi(self, schedule) -> None:
        assert schedule.emi == REFERENCE_EMI

    def test_principal_sum_equals_loan(self, schedule) -> None:
        assert math.isclose(sum(schedule.principal_payments), REFERENCE_PRINCIPAL, rel_tol=1e-9)

    def test_final_balance_near_zero(self, schedule) -> None:
        assert schedule.remaining_balance[-1] < 0.01

    def test_interest_plus_principal_equals_payment(self, schedule) -> None:
        for i in range(REFERENCE_TENURE):
            total = schedule.interest_payments[i] + schedule.principal_payments[i]
            assert math.isclose(total, schedule.monthly_payment, rel_tol=1e-9)

    def test_first_month_interest(self, schedule) -> None:
        assert math.isclose(schedule.interest_payments[0], REFERENCE_PRINCIPAL * 0.10 / 12)

    def test_interest_decreases_over_time(self, schedule) -> None:
        for i in range(1, REFERENCE_TENURE):
            assert schedule.interest_payments[i] < schedule.interest_payments[i - 1]

    def test_totals(self, schedule) -> None:
        assert math.isclose(schedule.total_paid, schedule.monthly_payment * REFERENCE_TENURE)
        assert math.isclose(
            schedule.total_interest, schedule.total_paid - REFERENCE_PRINCIPAL, rel_tol=1e-9
        )

    def test_zero_principal_empty(self) -> None:
        sched = build_emi_schedule(0.0, 10.0, 60)
        assert sched.emi == 0
        assert sched.interest_payments == []
        assert sched.total_paid == 0.0
        assert sched.total_interest == 0.0

    def test_zero_tenure_empty(self) -> None:
        sched = build_emi_schedule(REFERENCE_PRINCIPAL, 10.0, 0)
        assert sched.monthly_payment == 0.0
        assert sched.remaining_balance == []

    def test_zero_rate_no_interest(self) -> None:
        sched = build_emi_schedule(60_000.0, 0.0, 12)
        assert sched.emi == 5000
        assert sched.total_interest == 0.0
