"""Two-tier partner commission (DDP primary, BDP secondary).

DCR panels:
    3 kW exactly   → 20 000 / 10 000
    5 kW exactly   → 35 000 / 15 000
    any other size → 6 000 × kW / 3 000 × kW

Non-DCR panels:
    any size       → 4 000 × kW / 2 000 × kW

Commission is not gated on subsidy eligibility.
"""

from __future__ import annotations

from dataclasses import dataclass

from subsidy_engine.config.defaults import (
    DCR_COMMISSION_PER_KW,
    DCR_FIXED_COMMISSION,
    NON_DCR_COMMISSION_PER_KW,
)
from subsidy_engine.finance.categories import PanelCategory


@dataclass(frozen=True)
class CommissionResult:
    """Commission amounts in INR for one sale."""

    primary: float
    secondary: float
    total: float

    def to_dict(self) -> dict:
        return {
            "ddpCommission": self.primary,
            "bdpCommission": self.secondary,
            "totalCommission": self.total,
        }


def compute_commission(capacity_kw: float, panel_category) -> CommissionResult:
    """Compute DDP and BDP commission for a sale.

    Args:
        capacity_kw: Installed capacity in kW.
        panel_category: :class:`PanelCategory` or its wire string.

    Returns:
        :class:`CommissionResult`; zero amounts for non-positive capacity.

    Raises:
        ValueError: When *panel_category* is not recognised.
    """
    panel = PanelCategory.parse(panel_category)
    if capacity_kw <= 0.0:
        return CommissionResult(primary=0.0, secondary=0.0, total=0.0)

    if panel is PanelCategory.DCR:
        fixed = DCR_FIXED_COMMISSION.get(float(capacity_kw))
        if fixed is not None:
            primary, secondary = fixed
        else:
            primary = DCR_COMMISSION_PER_KW[0] * capacity_kw
            secondary = DCR_COMMISSION_PER_KW[1] * capacity_kw
    else:
        primary = NON_DCR_COMMISSION_PER_KW[0] * capacity_kw
        secondary = NON_DCR_COMMISSION_PER_KW[1] * capacity_kw

    return CommissionResult(primary=primary, secondary=secondary, total=primary + secondary)
