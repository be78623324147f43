"""Write quote results to CSV files.

Up to five output files are produced per quote run:

1. ``{name}_summary.csv``       – Single row: inputs, price, subsidy, savings, commission.
2. ``{name}_emi_options.csv``   – One row per standard loan tenure.
3. ``{name}_proposal.csv``      – The customer proposal as section/item/value rows.
4. ``{name}_emi_schedule.csv``  – One row per month for the selected tenure (optional).
5. ``{name}_batch.csv``         – One row per batch quote (only with ``--batch``).

All monetary values are in INR, energy in kWh, tariffs in INR/kWh.
None values are written as empty strings.

Public API
----------
write_quote_summary_csv – Write the single-row summary file.
write_emi_options_csv   – Write the per-tenure EMI table.
write_proposal_csv      – Write the customer proposal.
write_emi_schedule_csv  – Write the month-by-month repayment schedule.
write_batch_csv         – Write one row per batch quote.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path

from subsidy_engine.config.defaults import CSV_DELIMITER, CURRENCY_SYMBOL_ASCII
from subsidy_engine.finance.commission import CommissionResult
from subsidy_engine.finance.emi import EmiSchedule
from subsidy_engine.finance.pricing import PricingResult
from subsidy_engine.finance.proposal import Proposal
from subsidy_engine.output.formatting import (
    fmt_currency,
    fmt_float,
    fmt_inr,
    fmt_kwh,
    fmt_pct,
    fmt_years,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Summary CSV
# ---------------------------------------------------------------------------


def _pricing_row(pricing: PricingResult) -> dict:
    """Flatten a pricing result into CSV column → string."""
    row = {
        "capacity_kw": fmt_float(pricing.capacity_kw),
        "state": pricing.state,
        "panel_type": pricing.panel_category.value,
        "inverter_type": pricing.inverter_category.value,
        "customer_type": pricing.customer_category.value,
        "interest_rate_pct": fmt_pct(pricing.interest_rate_pct),
        "electricity_unit_rate": fmt_float(pricing.unit_rate),
        "down_payment_pct": fmt_pct(pricing.down_payment_pct),
        "rate_per_watt_inr": fmt_currency(pricing.rate_per_watt),
        "total_cost_inr": fmt_currency(pricing.total_cost),
        "central_subsidy_inr": fmt_currency(pricing.central_subsidy),
        "state_subsidy_inr": fmt_currency(pricing.state_subsidy),
        "total_subsidy_inr": fmt_currency(pricing.total_subsidy),
        "net_cost_inr": fmt_currency(pricing.net_cost),
        "down_payment_inr": fmt_currency(pricing.down_payment),
        "loan_amount_inr": fmt_currency(pricing.loan_amount),
        "daily_generation_kwh": fmt_float(pricing.daily_generation_kwh),
        "monthly_generation_kwh": fmt_float(pricing.monthly_generation_kwh),
        "monthly_savings_inr": fmt_currency(pricing.monthly_savings),
        "annual_savings_inr": fmt_currency(pricing.annual_savings),
        "lifetime_savings_inr": fmt_currency(pricing.lifetime_savings),
        "payback_years": fmt_float(pricing.payback_years, precision=1),
        "subsidy_eligible": str(pricing.subsidy_eligible).lower(),
    }
    for tenure, emi in pricing.emi.items():
        row[f"emi_{tenure}m_inr"] = str(emi)
    for tenure, amount in pricing.effective_emi.items():
        row[f"effective_emi_{tenure}m_inr"] = fmt_currency(amount)
    return row


def write_quote_summary_csv(
    path: Path | str,
    request_name: str,
    pricing: PricingResult,
    commission: CommissionResult,
) -> None:
    """Write the single-row quote summary CSV.

    Parameters
    ----------
    path:
        Destination file path.
    request_name:
        Name of the quote request.
    pricing:
        Pricing result for the request.
    commission:
        Partner commission for the same capacity and panel type.
    """
    row = {"request_name": request_name}
    row.update(_pricing_row(pricing))
    row.update({
        "ddp_commission_inr": fmt_currency(commission.primary),
        "bdp_commission_inr": fmt_currency(commission.secondary),
        "total_commission_inr": fmt_currency(commission.total),
    })

    _write_dicts(path, [row])
    logger.info("Wrote summary CSV: %s", path)


# ---------------------------------------------------------------------------
# EMI CSVs
# ---------------------------------------------------------------------------


def write_emi_options_csv(
    path: Path | str,
    pricing: PricingResult,
) -> None:
    """Write one row per quoted tenure.

    Total paid is ``EMI × tenure`` and total interest is total paid minus
    the loan amount, both using the rounded EMI the customer actually pays.
    """
    rows = []
    for tenure, emi in pricing.emi.items():
        total_paid = emi * tenure
        rows.append({
            "tenure_months": str(tenure),
            "emi_inr": str(emi),
            "loan_amount_inr": fmt_currency(pricing.loan_amount),
            "total_paid_inr": fmt_currency(total_paid),
            "total_interest_inr": fmt_currency(max(total_paid - pricing.loan_amount, 0.0)),
            "effective_payment_inr": fmt_currency(pricing.effective_emi.get(tenure)),
            "savings_cover_emi": str(pricing.savings_cover_emi(tenure)).lower(),
        })

    _write_dicts(path, rows)
    logger.info("Wrote EMI options CSV (%d rows): %s", len(rows), path)


def write_emi_schedule_csv(
    path: Path | str,
    schedule: EmiSchedule,
) -> None:
    """Write the month-by-month repayment schedule.

    Parameters
    ----------
    path:
        Destination file path.
    schedule:
        Schedule built by :func:`~subsidy_engine.finance.emi.build_emi_schedule`.
    """
    rows = []
    for i in range(len(schedule.interest_payments)):
        rows.append({
            "month": str(i + 1),
            "payment_inr": fmt_currency(schedule.monthly_payment),
            "interest_inr": fmt_currency(schedule.interest_payments[i]),
            "principal_inr": fmt_currency(schedule.principal_payments[i]),
            "remaining_balance_inr": fmt_currency(schedule.remaining_balance[i]),
        })

    _write_dicts(path, rows)
    logger.info("Wrote EMI schedule CSV (%d rows): %s", len(rows), path)


# ---------------------------------------------------------------------------
# Proposal CSV
# ---------------------------------------------------------------------------


def _rs(value: float) -> str:
    return fmt_inr(value, symbol=CURRENCY_SYMBOL_ASCII)


def write_proposal_csv(
    path: Path | str,
    proposal: Proposal,
) -> None:
    """Write the customer proposal as ``section, item, value`` rows.

    Rows follow the order of the printed proposal. Amounts use Indian digit
    grouping with the ``"Rs "`` prefix. The payment structure is written only
    when the proposal carries a down payment or an EMI; the installation site
    and partner rows only when those details are present.

    Parameters
    ----------
    path:
        Destination file path.
    proposal:
        Proposal built by :func:`~subsidy_engine.finance.proposal.build_proposal`.
    """
    p = proposal
    items = [
        ("Customer", "Prepared for", p.customer_name or "Valued Customer"),
        ("System Details", "Capacity", f"{p.capacity_kw:g} kWp"),
        ("System Details", "Panel Type", p.panel_label),
        ("System Details", "Inverter", p.inverter_label),
        ("System Details", "Monthly Generation", fmt_kwh(p.monthly_generation_kwh)),
        ("Investment Summary", "Total System Cost", _rs(p.total_cost)),
        ("Investment Summary", "Central Subsidy", _rs(p.central_subsidy)),
    ]
    if p.state_subsidy > 0.0:
        items.append(("Investment Summary", f"{p.state} State Subsidy", _rs(p.state_subsidy)))
    items += [
        ("Investment Summary", "Government Subsidy", _rs(p.total_subsidy)),
        ("Investment Summary", "Net Investment", _rs(p.net_cost)),
    ]
    if p.has_financing:
        items += [
            (
                "Payment Structure",
                f"Down Payment ({p.down_payment_pct:g}%)",
                _rs(p.down_payment),
            ),
            ("Payment Structure", "Loan Amount", _rs(p.loan_amount)),
            (
                "Payment Structure",
                f"Monthly EMI ({p.selected_tenure} months)",
                f"{_rs(p.selected_emi)}/month",
            ),
        ]
    items += [
        ("Your Savings", "Monthly Savings", _rs(p.monthly_savings)),
        ("Your Savings", "Annual Savings", _rs(p.annual_savings)),
        ("Your Savings", "Payback Period", fmt_years(p.payback_years)),
    ]
    if p.installation_address:
        items.append(("Installation Site", "Address", p.installation_address))
    if p.partner_name:
        items.append(("Your District Partner", "Name", p.partner_name))
    if p.partner_phone:
        items.append(("Your District Partner", "Phone", f"+91-{p.partner_phone}"))

    rows = [{"section": s, "item": i, "value": v} for s, i, v in items]
    _write_dicts(path, rows)
    logger.info("Wrote proposal CSV (%d rows): %s", len(rows), path)


# ---------------------------------------------------------------------------
# Batch CSV
# ---------------------------------------------------------------------------


def write_batch_csv(
    path: Path | str,
    results: list[tuple[PricingResult, CommissionResult]],
) -> None:
    """Write one row per batch quote.

    Parameters
    ----------
    path:
        Destination file path.
    results:
        ``(pricing, commission)`` pairs in input order.
    """
    rows = []
    for i, (pricing, commission) in enumerate(results, start=1):
        row = {"row": str(i)}
        row.update(_pricing_row(pricing))
        row.update({
            "ddp_commission_inr": fmt_currency(commission.primary),
            "bdp_commission_inr": fmt_currency(commission.secondary),
            "total_commission_inr": fmt_currency(commission.total),
        })
        rows.append(row)

    _write_dicts(path, rows)
    logger.info("Wrote batch CSV (%d rows): %s", len(rows), path)


# ---------------------------------------------------------------------------
# Internal helper
# ---------------------------------------------------------------------------


def _write_dicts(path: Path | str, rows: list[dict]) -> None:
    """Write a list of dicts to a CSV file, creating parent directories.

    Parameters
    ----------
    path:
        Destination file path.
    rows:
        List of row dicts.  All dicts must have the same keys; the first
        dict determines the column order.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    if not rows:
        path.write_text("", encoding="utf-8")
        return

    fieldnames = list(rows[0].keys())
    with path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=fieldnames, delimiter=CSV_DELIMITER)
        writer.writeheader()
        writer.writerows(rows)
