"""Shared pytest fixtures for the subsidy_engine test suite.

All fixtures provide synthetic, deterministic data. Numerical reference
fixtures document expected results for key calculations to enable
regression testing.

Reference quote A (3 kW, DCR + hybrid, residential, no state)
-------------------------------------------------------------
Cost     = 3 × 75 × 1 000                    = 2 25 000
Central  = 2 × 30 000 + 1 × 18 000          =   78 000
Net      = 225 000 − 78 000                  = 1 47 000
Down     = round(147 000 × 0.15)             =   22 050
Loan     = 147 000 − 22 050                  = 1 24 950
Energy   = 3 × 4 = 12 kWh/day → 360 kWh/month
Savings  = 360 × 7 = 2 520 /month → 30 240 /year
Payback  = 147 000 / 30 240 = 4.86 → 4.9 years

Reference quote B (5 kW, DCR + hybrid, residential, Odisha)
-----------------------------------------------------------
Cost     = 5 × 75 × 1 000                    = 3 75 000
Central  = 78 000 (capped)
State    = min(min(5, 3) × 20 000, 60 000)   =   60 000
Net      = 375 000 − 138 000                 = 2 37 000

Reference EMI: 1 00 000 at 10 % for 60 months
  r = 0.10 / 12, EMI = 2 124.70… → 2 125
"""

from __future__ import annotations

import copy

import pytest

# ---------------------------------------------------------------------------
# Pricing argument fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def scenario_a_args() -> dict:
    """3 kW residential DCR hybrid system, no state subsidy."""
    return {
        "capacity_kw": 3.0,
        "state": "",
        "panel_category": "dcr",
        "inverter_category": "hybrid",
        "customer_category": "residential",
        "interest_rate_pct": 10.0,
        "unit_rate": 7.0,
        "down_payment_pct": 15.0,
    }


@pytest.fixture
def scenario_b_args(scenario_a_args: dict) -> dict:
    """5 kW residential DCR hybrid system in Odisha."""
    args = dict(scenario_a_args)
    args.update(capacity_kw=5.0, state="Odisha")
    return args


@pytest.fixture
def scenario_c_args(scenario_a_args: dict) -> dict:
    """5 kW residential non-DCR system (not subsidy eligible)."""
    args = dict(scenario_a_args)
    args.update(capacity_kw=5.0, panel_category="non_dcr")
    return args


# ---------------------------------------------------------------------------
# Quote request fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_request() -> dict:
    """Complete, valid quote request dictionary (reference quote B)."""
    return {
        "quote": {
            "name": "sharma_residence",
            "customer_name": "R. Sharma",
            "selected_tenure_months": 60,
            "partner": {"name": "Suryodaya Energy", "phone": "9876543210"},
            "installation_address": "Plot 12, Saheed Nagar, Bhubaneswar",
            "output": {"directory": "output", "export_emi_schedule": True},
        },
        "pricing": {
            "capacity_kw": 5,
            "state": "Odisha",
            "panel_type": "dcr",
            "inverter_type": "hybrid",
            "customer_type": "residential",
            "interest_rate_pct": 10,
            "electricity_unit_rate": 7,
            "down_payment_pct": 15,
        },
    }


@pytest.fixture
def minimal_request() -> dict:
    """Smallest valid request: only the required fields."""
    return {
        "quote": {"name": "minimal"},
        "pricing": {"capacity_kw": 3, "panel_type": "dcr"},
    }


@pytest.fixture
def request_factory(sample_request: dict):
    """Return a function producing deep copies of the sample request with pricing overrides."""

    def _make(**pricing_overrides) -> dict:
        data = copy.deepcopy(sample_request)
        data["pricing"].update(pricing_overrides)
        return data

    return _make
