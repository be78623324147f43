"""Central and state government subsidy schedule.

Only residential customers buying DCR panels are eligible. For eligible
systems:

    central = cap × 30 000                          (cap ≤ 2 kW)
            = 2 × 30 000 + (cap − 2) × 18 000       (2 < cap ≤ 3 kW)
            = 78 000                                (cap > 3 kW)

    state   = min(min(cap, 3) × rate_per_kw, max_subsidy)   (listed states only)
"""

from __future__ import annotations

from dataclasses import dataclass

from subsidy_engine.config.defaults import (
    CENTRAL_SUBSIDY_CAP,
    CENTRAL_SUBSIDY_FIRST_TIER_KW,
    CENTRAL_SUBSIDY_FIRST_TIER_PER_KW,
    CENTRAL_SUBSIDY_SECOND_TIER_KW,
    CENTRAL_SUBSIDY_SECOND_TIER_PER_KW,
    STATE_SUBSIDIES,
    STATE_SUBSIDY_MAX_KW,
)
from subsidy_engine.finance.categories import CustomerCategory, PanelCategory


@dataclass(frozen=True)
class SubsidyBreakdown:
    """Subsidy amounts for one system.

    Attributes:
        eligible: Whether the system qualifies for any subsidy.
        central: Central government subsidy in INR.
        state: State government subsidy in INR.
        total: ``central + state``.
        state_label: Display label of the state scheme ("" if none applies).
    """

    eligible: bool
    central: float
    state: float
    total: float
    state_label: str = ""


def is_subsidy_eligible(panel_category, customer_category) -> bool:
    """Residential customers with DCR panels are eligible; nobody else is."""
    return (
        CustomerCategory.parse(customer_category) is CustomerCategory.RESIDENTIAL
        and PanelCategory.parse(panel_category) is PanelCategory.DCR
    )


def calculate_central_subsidy(capacity_kw: float) -> float:
    """Central subsidy for an eligible system of *capacity_kw*.

    Args:
        capacity_kw: Installed capacity in kW.

    Returns:
        Subsidy in INR, 0.0 for non-positive capacity.
    """
    if capacity_kw <= 0.0:
        return 0.0
    if capacity_kw <= CENTRAL_SUBSIDY_FIRST_TIER_KW:
        return capacity_kw * CENTRAL_SUBSIDY_FIRST_TIER_PER_KW
    if capacity_kw <= CENTRAL_SUBSIDY_SECOND_TIER_KW:
        return (
            CENTRAL_SUBSIDY_FIRST_TIER_KW * CENTRAL_SUBSIDY_FIRST_TIER_PER_KW
            + (capacity_kw - CENTRAL_SUBSIDY_FIRST_TIER_KW)
            * CENTRAL_SUBSIDY_SECOND_TIER_PER_KW
        )
    return CENTRAL_SUBSIDY_CAP


def calculate_state_subsidy(capacity_kw: float, state: str | None) -> float:
    """State top-up subsidy for an eligible system.

    Args:
        capacity_kw: Installed capacity in kW.
        state: State name; empty, ``None`` or unlisted states contribute 0.

    Returns:
        Subsidy in INR.
    """
    scheme = STATE_SUBSIDIES.get(state or "")
    if scheme is None or capacity_kw <= 0.0:
        return 0.0
    subsidised_kw = min(capacity_kw, STATE_SUBSIDY_MAX_KW)
    return min(subsidised_kw * scheme["rate_per_kw"], scheme["max_subsidy"])


def calculate_subsidy(
    capacity_kw: float,
    state: str | None,
    panel_category,
    customer_category,
) -> SubsidyBreakdown:
    """Combine eligibility, central and state subsidy for one system."""
    if not is_subsidy_eligible(panel_category, customer_category):
        return SubsidyBreakdown(eligible=False, central=0.0, state=0.0, total=0.0)

    central = calculate_central_subsidy(capacity_kw)
    state_amount = calculate_state_subsidy(capacity_kw, state)
    label = STATE_SUBSIDIES[state]["label"] if state_amount > 0.0 else ""
    return SubsidyBreakdown(
        eligible=True,
        central=central,
        state=state_amount,
        total=central + state_amount,
        state_label=label,
    )
