"""Tests for finance/subsidy.py – central and state subsidy schedule.

Central schedule (eligible systems):
  1 kW → 30 000, 2 kW → 60 000, 2.5 kW → 69 000, 3 kW → 78 000, > 3 kW → 78 000
State schedule:
  Odisha        20 000/kW up to 3 kW, cap 60 000
  Uttar Pradesh 10 000/kW up to 3 kW, cap 30 000
"""

from __future__ import annotations

import math

import pytest

from subsidy_engine.finance.categories import CustomerCategory, PanelCategory
from subsidy_engine.finance.subsidy import (
    calculate_central_subsidy,
    calculate_state_subsidy,
    calculate_subsidy,
    is_subsidy_eligible,
)


class TestEligibility:
    def test_residential_dcr_eligible(self) -> None:
        assert is_subsidy_eligible(PanelCategory.DCR, CustomerCategory.RESIDENTIAL)

    def test_accepts_wire_strings(self) -> None:
        assert is_subsidy_eligible("dcr", "residential")

    @pytest.mark.parametrize("customer", ["commercial", "industrial"])
    def test_non_residential_not_eligible(self, customer: str) -> None:
        assert not is_subsidy_eligible("dcr", customer)

    @pytest.mark.parametrize("customer", ["residential", "commercial", "industrial"])
    def test_non_dcr_never_eligible(self, customer: str) -> None:
        assert not is_subsidy_eligible("non_dcr", customer)


class TestCentralSubsidy:
    @pytest.mark.parametrize(
        ("capacity", "expected"),
        [
            (1.0, 30_000.0),
            (2.0, 60_000.0),
            (2.5, 69_000.0),
            (3.0, 78_000.0),
        ],
    )
    def test_piecewise_schedule(self, capacity: float, expected: float) -> None:
        assert math.isclose(calculate_central_subsidy(capacity), expected)

    @pytest.mark.parametrize("capacity", [3.0, 3.01, 4.0, 5.0, 10.0, 100.0])
    def test_capped_at_78000_from_3kw(self, capacity: float) -> None:
        assert calculate_central_subsidy(capacity) == 78_000.0

    def test_continuous_at_band_edges(self) -> None:
        assert math.isclose(calculate_central_subsidy(2.0), calculate_central_subsidy(2.0 + 1e-9), abs_tol=1e-3)
        assert math.isclose(calculate_central_subsidy(3.0), calculate_central_subsidy(3.0 + 1e-9), abs_tol=1e-3)

    @pytest.mark.parametrize("capacity", [0.0, -1.0])
    def test_non_positive_capacity(self, capacity: float) -> None:
        assert calculate_central_subsidy(capacity) == 0.0


class TestStateSubsidy:
    def test_odisha_5kw_capped(self) -> None:
        assert calculate_state_subsidy(5.0, "Odisha") == 60_000.0

    def test_odisha_2kw(self) -> None:
        assert calculate_state_subsidy(2.0, "Odisha") == 40_000.0

    def test_uttar_pradesh(self) -> None:
        assert calculate_state_subsidy(1.5, "Uttar Pradesh") == 15_000.0
        assert calculate_state_subsidy(8.0, "Uttar Pradesh") == 30_000.0

    @pytest.mark.parametrize("state", ["", None, "Kerala", "Atlantis"])
    def test_unlisted_state_zero(self, state) -> None:
        assert calculate_state_subsidy(3.0, state) == 0.0

    def test_non_positive_capacity(self) -> None:
        assert calculate_state_subsidy(0.0, "Odisha") == 0.0


class TestCalculateSubsidy:
    def test_eligible_with_state(self) -> None:
        s = calculate_subsidy(5.0, "Odisha", "dcr", "residential")
        assert s.eligible
        assert s.central == 78_000.0
        assert s.state == 60_000.0
        assert s.total == 138_000.0
        assert s.state_label == "Odisha State Subsidy"

    def test_eligible_without_state(self) -> None:
        s = calculate_subsidy(3.0, "", "dcr", "residential")
        assert s.total == 78_000.0
        assert s.state_label == ""

    @pytest.mark.parametrize(
        ("panel", "customer"),
        [
            ("non_dcr", "residential"),
            ("dcr", "commercial"),
            ("dcr", "industrial"),
            ("non_dcr", "industrial"),
        ],
    )
    def test_ineligible_zero(self, panel: str, customer: str) -> None:
        s = calculate_subsidy(3.0, "Odisha", panel, customer)
        assert not s.eligible
        assert s.central == 0.0
        assert s.state == 0.0
        assert s.total == 0.0
