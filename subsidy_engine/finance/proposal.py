"""Customer proposal data assembled from a price quote.

The proposal is the flat record a document renderer turns into the
customer-facing PDF. Rendering itself lives outside this package.
"""

from __future__ import annotations

from dataclasses import dataclass

from subsidy_engine.config.defaults import DEFAULT_SELECTED_TENURE_MONTHS
from subsidy_engine.finance.pricing import PricingResult


@dataclass(frozen=True)
class Proposal:
    """Everything printed on a customer proposal. Amounts in INR."""

    customer_name: str
    capacity_kw: float
    panel_label: str
    inverter_label: str
    total_cost: float
    central_subsidy: float
    state_subsidy: float
    total_subsidy: float
    net_cost: float
    down_payment: int
    down_payment_pct: float
    loan_amount: float
    selected_tenure: int
    selected_emi: int
    monthly_savings: float
    annual_savings: float
    monthly_generation_kwh: float
    payback_years: float
    state: str = ""
    partner_name: str = ""
    partner_phone: str = ""
    installation_address: str = ""

    @property
    def has_financing(self) -> bool:
        """True when the proposal carries a down payment or an EMI."""
        return bool(self.down_payment or self.selected_emi)

    def to_dict(self) -> dict:
        """Flat record keyed by the proposal document's field names."""
        return {
            "customerName": self.customer_name,
            "capacity": self.capacity_kw,
            "panelType": self.panel_label,
            "inverterType": self.inverter_label,
            "totalCost": self.total_cost,
            "centralSubsidy": self.central_subsidy,
            "stateSubsidy": self.state_subsidy,
            "totalSubsidy": self.total_subsidy,
            "netCost": self.net_cost,
            "downPayment": self.down_payment,
            "downPaymentPercent": self.down_payment_pct,
            "loanAmount": self.loan_amount,
            "selectedTenure": self.selected_tenure,
            "selectedEmi": self.selected_emi,
            "monthlySavings": self.monthly_savings,
            "annualSavings": self.annual_savings,
            "monthlyGeneration": self.monthly_generation_kwh,
            "paybackYears": self.payback_years,
            "state": self.state,
            "partnerName": self.partner_name,
            "partnerPhone": self.partner_phone,
            "installationAddress": self.installation_address,
        }


def build_proposal(
    pricing: PricingResult,
    selected_tenure: int = DEFAULT_SELECTED_TENURE_MONTHS,
    customer_name: str = "",
    partner_name: str = "",
    partner_phone: str = "",
    installation_address: str = "",
) -> Proposal:
    """Build the proposal for a quote.

    Args:
        pricing: Quote produced by :func:`~subsidy_engine.finance.pricing.compute_pricing`.
        selected_tenure: Loan tenure in months shown on the proposal.
        customer_name: Customer name ("" renders as a generic greeting).
        partner_name: Selling partner's name.
        partner_phone: Selling partner's phone number.
        installation_address: Site address.

    Returns:
        :class:`Proposal`.

    Raises:
        ValueError: When *selected_tenure* is not one of the quoted tenures.
    """
    if selected_tenure not in pricing.emi:
        quoted = ", ".join(str(t) for t in pricing.emi)
        raise ValueError(
            f"Selected tenure {selected_tenure} months is not quoted. "
            f"Choose one of: {quoted}."
        )

    return Proposal(
        customer_name=customer_name,
        capacity_kw=pricing.capacity_kw,
        panel_label=pricing.panel_category.label,
        inverter_label=pricing.inverter_category.label,
        total_cost=pricing.total_cost,
        central_subsidy=pricing.central_subsidy,
        state_subsidy=pricing.state_subsidy,
        total_subsidy=pricing.total_subsidy,
        net_cost=pricing.net_cost,
        down_payment=pricing.down_payment,
        down_payment_pct=pricing.down_payment_pct,
        loan_amount=pricing.loan_amount,
        selected_tenure=selected_tenure,
        selected_emi=pricing.emi[selected_tenure],
        monthly_savings=pricing.monthly_savings,
        annual_savings=pricing.annual_savings,
        monthly_generation_kwh=pricing.monthly_generation_kwh,
        payback_years=pricing.payback_years,
        state=pricing.state,
        partner_name=partner_name,
        partner_phone=partner_phone,
        installation_address=installation_address,
    )
