"""System price, subsidy, loan split and EMI quote for one installation.

    total_cost   = capacity_kW × rate_per_watt × 1000
    net_cost     = max(0, total_cost − central_subsidy − state_subsidy)
    down_payment = round(net_cost × down_payment_pct / 100)
    loan_amount  = net_cost − down_payment
    effective    = max(0, EMI − monthly_savings)   per quoted tenure

Rate per watt: DCR + hybrid 75, DCR + on-grid 66, non-DCR 55 (INR/W).

The calculation does not range-limit its inputs; clamping happens where the
inputs are collected (see :mod:`subsidy_engine.config.loader`). Every branch
is total over the numeric domain, so no input raises.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from subsidy_engine.config.defaults import (
    DEFAULT_DOWN_PAYMENT_PCT,
    DEFAULT_INTEREST_RATE_PCT,
    DEFAULT_UNIT_RATE,
    MAX_DOWN_PAYMENT_PCT,
    MIN_DOWN_PAYMENT_PCT,
    PERCENT,
    RATE_PER_WATT_DCR_HYBRID,
    RATE_PER_WATT_DCR_ONGRID,
    RATE_PER_WATT_NON_DCR,
    STANDARD_TENURES_MONTHS,
    WATTS_PER_KW,
)
from subsidy_engine.finance.categories import (
    CustomerCategory,
    InverterCategory,
    PanelCategory,
)
from subsidy_engine.finance.emi import emi_for_tenures
from subsidy_engine.finance.rounding import round_half_up
from subsidy_engine.finance.savings import (
    calculate_energy_savings,
    calculate_payback_years,
    effective_monthly_payment,
)
from subsidy_engine.finance.subsidy import calculate_subsidy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PricingResult:
    """Complete price quote for one system. All amounts in INR."""

    capacity_kw: float
    state: str
    panel_category: PanelCategory
    inverter_category: InverterCategory
    customer_category: CustomerCategory
    interest_rate_pct: float
    unit_rate: float
    down_payment_pct: float
    rate_per_watt: float
    total_cost: float
    central_subsidy: float
    state_subsidy: float
    total_subsidy: float
    net_cost: float
    down_payment: int
    loan_amount: float
    daily_generation_kwh: float
    monthly_generation_kwh: float
    monthly_savings: float
    annual_savings: float
    lifetime_savings: float
    payback_years: float
    subsidy_eligible: bool
    emi: dict[int, int] = field(default_factory=dict)
    effective_emi: dict[int, float] = field(default_factory=dict)
    state_subsidy_label: str = ""

    def emi_for(self, tenure_months: int) -> int:
        """EMI for one of the quoted tenures.

        Raises
        ------
        KeyError
            If *tenure_months* was not quoted.
        """
        if tenure_months not in self.emi:
            quoted = ", ".join(str(t) for t in self.emi)
            raise KeyError(
                f"No EMI quoted for {tenure_months} months. Quoted tenures: {quoted}"
            )
        return self.emi[tenure_months]

    def savings_cover_emi(self, tenure_months: int) -> bool:
        """True when monthly bill savings pay the whole EMI for *tenure_months*.

        Raises
        ------
        KeyError
            If *tenure_months* was not quoted.
        """
        return self.monthly_savings >= self.emi_for(tenure_months)

    def to_dict(self) -> dict:
        """Flat, JSON-serialisable record of the quote."""
        record = {
            "capacity": self.capacity_kw,
            "state": self.state,
            "panelType": self.panel_category.value,
            "inverterType": self.inverter_category.value,
            "customerType": self.customer_category.value,
            "interestRate": self.interest_rate_pct,
            "electricityUnitRate": self.unit_rate,
            "downPaymentPercent": self.down_payment_pct,
            "ratePerWatt": self.rate_per_watt,
            "totalCost": self.total_cost,
            "centralSubsidy": self.central_subsidy,
            "stateSubsidy": self.state_subsidy,
            "totalSubsidy": self.total_subsidy,
            "netCost": self.net_cost,
            "downPayment": self.down_payment,
            "loanAmount": self.loan_amount,
            "dailyGeneration": self.daily_generation_kwh,
            "monthlyGeneration": self.monthly_generation_kwh,
            "monthlySavings": self.monthly_savings,
            "annualSavings": self.annual_savings,
            "lifetimeSavings": self.lifetime_savings,
            "paybackYears": self.payback_years,
            "subsidyEligible": self.subsidy_eligible,
        }
        for tenure, amount in self.emi.items():
            record[f"emi{tenure}"] = amount
        for tenure, amount in self.effective_emi.items():
            record[f"effectiveEmi{tenure}"] = amount
        return record


def rate_per_watt(panel_category, inverter_category) -> float:
    """Look up the system price per watt.

    Args:
        panel_category: :class:`PanelCategory` or its wire string.
        inverter_category: :class:`InverterCategory` or its wire string.
            Ignored for non-DCR panels.

    Returns:
        Price in INR per watt.
    """
    panel = PanelCategory.parse(panel_category)
    if panel is PanelCategory.NON_DCR:
        return RATE_PER_WATT_NON_DCR
    if InverterCategory.parse(inverter_category) is InverterCategory.HYBRID:
        return RATE_PER_WATT_DCR_HYBRID
    return RATE_PER_WATT_DCR_ONGRID


def calculate_total_cost(capacity_kw: float, price_per_watt: float) -> float:
    """System cost = capacity (kW) × price per watt × 1000."""
    return capacity_kw * price_per_watt * WATTS_PER_KW


def split_down_payment(net_cost: float, down_payment_pct: float) -> tuple[int, float]:
    """Split the net cost into down payment and loan principal.

    The percentage is clamped to [0, 100] so the loan is never negative.

    Returns:
        ``(down_payment, loan_amount)``.
    """
    pct = min(max(down_payment_pct, MIN_DOWN_PAYMENT_PCT), MAX_DOWN_PAYMENT_PCT)
    down_payment = round_half_up(net_cost * pct / PERCENT)
    loan_amount = max(net_cost - down_payment, 0.0)
    return down_payment, loan_amount


def compute_pricing(
    capacity_kw: float,
    state: str | None,
    panel_category,
    inverter_category,
    customer_category,
    interest_rate_pct: float = DEFAULT_INTEREST_RATE_PCT,
    unit_rate: float = DEFAULT_UNIT_RATE,
    down_payment_pct: float = DEFAULT_DOWN_PAYMENT_PCT,
) -> PricingResult:
    """Compute the full price, subsidy, savings and EMI quote.

    Args:
        capacity_kw: Installed capacity in kW.
        state: Indian state name, or ``""``/``None`` for no state subsidy.
        panel_category: ``"dcr"`` / ``"non_dcr"`` or :class:`PanelCategory`.
        inverter_category: ``"hybrid"`` / ``"ongrid"`` or :class:`InverterCategory`.
        customer_category: ``"residential"`` / ``"commercial"`` /
            ``"industrial"`` or :class:`CustomerCategory`.
        interest_rate_pct: Annual loan interest rate in percent.
        unit_rate: Electricity tariff in INR/kWh.
        down_payment_pct: Down payment as a percentage of the net cost.

    Returns:
        :class:`PricingResult`.

    Raises:
        ValueError: Only when a category string is not recognised.
    """
    panel = PanelCategory.parse(panel_category)
    inverter = InverterCategory.parse(inverter_category)
    customer = CustomerCategory.parse(customer_category)
    state = state or ""

    price_per_watt = rate_per_watt(panel, inverter)
    total_cost = calculate_total_cost(capacity_kw, price_per_watt)

    subsidy = calculate_subsidy(capacity_kw, state, panel, customer)
    net_cost = max(0.0, total_cost - subsidy.total)
    down_payment, loan_amount = split_down_payment(net_cost, down_payment_pct)

    energy = calculate_energy_savings(capacity_kw, unit_rate)
    payback = calculate_payback_years(net_cost, energy.annual_savings)
    emis = emi_for_tenures(loan_amount, interest_rate_pct, STANDARD_TENURES_MONTHS)

    logger.debug(
        "Priced %.2f kW %s/%s (%s, state=%r): cost=%.0f subsidy=%.0f net=%.0f loan=%.0f",
        capacity_kw,
        panel.value,
        inverter.value,
        customer.value,
        state,
        total_cost,
        subsidy.total,
        net_cost,
        loan_amount,
    )

    return PricingResult(
        capacity_kw=capacity_kw,
        state=state,
        panel_category=panel,
        inverter_category=inverter,
        customer_category=customer,
        interest_rate_pct=interest_rate_pct,
        unit_rate=unit_rate,
        down_payment_pct=down_payment_pct,
        rate_per_watt=price_per_watt,
        total_cost=total_cost,
        central_subsidy=subsidy.central,
        state_subsidy=subsidy.state,
        total_subsidy=subsidy.total,
        net_cost=net_cost,
        down_payment=down_payment,
        loan_amount=loan_amount,
        daily_generation_kwh=energy.daily_generation_kwh,
        monthly_generation_kwh=energy.monthly_generation_kwh,
        monthly_savings=energy.monthly_savings,
        annual_savings=energy.annual_savings,
        lifetime_savings=energy.lifetime_savings,
        payback_years=payback,
        subsidy_eligible=subsidy.eligible,
        emi=emis,
        effective_emi={
            tenure: effective_monthly_payment(emi, energy.monthly_savings)
            for tenure, emi in emis.items()
        },
        state_subsidy_label=subsidy.state_label,
    )
