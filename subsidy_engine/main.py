"""CLI entrypoint and orchestrator for the solar subsidy quote engine.

Execution flow
--------------
1.  Load & validate the quote request JSON (inputs are clamped to range).
2.  Compute price, subsidy, savings and EMI quote.
3.  Compute partner commission.
4.  Build the customer proposal for the selected tenure.
5.  Write output CSVs (summary, EMI options, proposal, schedule).
6.  Quote every row of a batch CSV (if given).
7.  Print summary to stdout.

Usage
-----
    python -m subsidy_engine.main --request requests/sharma.json
    python -m subsidy_engine.main --request my.json --tenure 84
    python -m subsidy_engine.main --request my.json --batch leads.csv
    python -m subsidy_engine.main --request my.json --dry-run
    python -m subsidy_engine.main --request my.json -v
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from subsidy_engine.config.defaults import CURRENCY_SYMBOL, STANDARD_TENURES_MONTHS
from subsidy_engine.config.loader import load_batch_csv, load_request
from subsidy_engine.finance.commission import CommissionResult, compute_commission
from subsidy_engine.finance.emi import build_emi_schedule
from subsidy_engine.finance.pricing import PricingResult, compute_pricing
from subsidy_engine.finance.proposal import Proposal, build_proposal
from subsidy_engine.output.csv_writer import (
    write_batch_csv,
    write_emi_options_csv,
    write_emi_schedule_csv,
    write_proposal_csv,
    write_quote_summary_csv,
)
from subsidy_engine.output.formatting import fmt_inr, fmt_kwh, fmt_years

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# CLI argument parsing
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    p = argparse.ArgumentParser(
        prog="python -m subsidy_engine.main",
        description="Solar subsidy, EMI and commission quote engine",
    )
    p.add_argument(
        "--request",
        required=True,
        metavar="PATH",
        help="Path to quote request JSON file.",
    )
    p.add_argument(
        "--output",
        metavar="DIR",
        default=None,
        help="Output directory (overrides the request JSON setting).",
    )
    p.add_argument(
        "--tenure",
        type=int,
        default=None,
        choices=STANDARD_TENURES_MONTHS,
        metavar="MONTHS",
        help="Loan tenure shown on the proposal (overrides the request JSON).",
    )
    p.add_argument(
        "--batch",
        metavar="CSV",
        default=None,
        help="CSV of pricing inputs to quote in addition to the request.",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Enable DEBUG logging.",
    )
    p.add_argument(
        "--dry-run",
        action="store_true",
        default=False,
        help="Validate the request JSON, then exit without quoting.",
    )
    return p


# ---------------------------------------------------------------------------
# Main orchestration
# ---------------------------------------------------------------------------


def run(args: argparse.Namespace) -> int:
    """Execute the full quote run.

    Parameters
    ----------
    args:
        Parsed CLI arguments.

    Returns
    -------
    int
        Exit code (0 = success, 1 = error).
    """
    # ------------------------------------------------------------------
    # Step 1: Load & validate request JSON
    # ------------------------------------------------------------------
    logger.info("Loading quote request: %s", args.request)
    try:
        request = load_request(args.request)
    except Exception as exc:
        logger.error("Failed to load quote request: %s", exc)
        return 1

    if args.dry_run:
        print(f"Dry run: quote request '{request.name}' validated successfully.")
        return 0

    output_base = Path(args.output) if args.output else Path(request.output_directory)
    output_dir = output_base / request.name
    output_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Output directory: %s", output_dir)

    # ------------------------------------------------------------------
    # Steps 2–4: Price, commission, proposal
    # ------------------------------------------------------------------
    pricing = compute_pricing(**request.pricing.as_kwargs())
    commission = compute_commission(pricing.capacity_kw, pricing.panel_category)

    selected_tenure = args.tenure or request.selected_tenure
    proposal = build_proposal(
        pricing,
        selected_tenure=selected_tenure,
        customer_name=request.customer_name,
        partner_name=request.partner_name,
        partner_phone=request.partner_phone,
        installation_address=request.installation_address,
    )

    # ------------------------------------------------------------------
    # Step 5: Write output CSVs
    # ------------------------------------------------------------------
    write_quote_summary_csv(
        path=output_dir / f"{request.name}_summary.csv",
        request_name=request.name,
        pricing=pricing,
        commission=commission,
    )
    write_emi_options_csv(
        path=output_dir / f"{request.name}_emi_options.csv",
        pricing=pricing,
    )
    write_proposal_csv(
        path=output_dir / f"{request.name}_proposal.csv",
        proposal=proposal,
    )
    if request.export_emi_schedule:
        schedule = build_emi_schedule(
            pricing.loan_amount, pricing.interest_rate_pct, selected_tenure
        )
        write_emi_schedule_csv(
            path=output_dir / f"{request.name}_emi_schedule.csv",
            schedule=schedule,
        )

    # ------------------------------------------------------------------
    # Step 6: Batch quotes
    # ------------------------------------------------------------------
    if args.batch:
        try:
            batch_inputs = load_batch_csv(args.batch)
        except Exception as exc:
            logger.error("Batch CSV load failed: %s", exc)
            return 1
        batch_results = [_quote(inputs.as_kwargs()) for inputs in batch_inputs]
        write_batch_csv(
            path=output_dir / f"{request.name}_batch.csv",
            results=batch_results,
        )

    # ------------------------------------------------------------------
    # Step 7: Print summary
    # ------------------------------------------------------------------
    _print_summary(request.name, pricing, commission, proposal)

    return 0


def _quote(pricing_kwargs: dict) -> tuple[PricingResult, CommissionResult]:
    """Price one system and its commission."""
    pricing = compute_pricing(**pricing_kwargs)
    return pricing, compute_commission(pricing.capacity_kw, pricing.panel_category)


def _print_summary(
    request_name: str,
    pricing: PricingResult,
    commission: CommissionResult,
    proposal: Proposal,
) -> None:
    """Print a concise quote summary to stdout."""
    rs = CURRENCY_SYMBOL
    print()
    print("=" * 60)
    print(f"  Quote: {request_name}")
    if proposal.customer_name:
        print(f"  Customer: {proposal.customer_name}")
    print("=" * 60)
    print(f"  Capacity:              {pricing.capacity_kw:g} kW")
    print(f"  Panel:                 {proposal.panel_label}")
    print(f"  Inverter:              {proposal.inverter_label}")
    print(f"  Rate:                  {rs}{pricing.rate_per_watt:g}/W")
    print(f"  Total cost:            {fmt_inr(pricing.total_cost)}")
    if pricing.subsidy_eligible:
        print(f"  Central subsidy:       {fmt_inr(pricing.central_subsidy)}")
        if pricing.state_subsidy > 0.0:
            print(
                f"  {pricing.state_subsidy_label + ':':<22} {fmt_inr(pricing.state_subsidy)}"
            )
    else:
        print("  Subsidy:               not eligible")
    print(f"  Net cost:              {fmt_inr(pricing.net_cost)}")
    print()
    print(
        f"  Down payment ({pricing.down_payment_pct:g} %):  {fmt_inr(pricing.down_payment)}"
    )
    print(f"  Loan amount:           {fmt_inr(pricing.loan_amount)}")
    for tenure, emi in pricing.emi.items():
        marker = "  <" if tenure == proposal.selected_tenure else ""
        print(f"  EMI {tenure} months:        {fmt_inr(emi)}/month{marker}")
    tenure = proposal.selected_tenure
    effective = fmt_inr(pricing.effective_emi[tenure])
    if pricing.savings_cover_emi(tenure):
        effective += " (savings cover the EMI)"
    print(f"  After power savings:   {effective}/month")
    print()
    print(f"  Monthly generation:    {fmt_kwh(pricing.monthly_generation_kwh)}")
    print(f"  Monthly savings:       {fmt_inr(pricing.monthly_savings)}")
    print(f"  Annual savings:        {fmt_inr(pricing.annual_savings)}")
    print(f"  Lifetime savings:      {fmt_inr(pricing.lifetime_savings)}")
    print(f"  Payback:               {fmt_years(pricing.payback_years)}")
    print()
    print(f"  DDP commission:        {fmt_inr(commission.primary)}")
    print(f"  BDP commission:        {fmt_inr(commission.secondary)}")
    print("=" * 60)
    print()


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main() -> None:
    """Parse CLI arguments and run the quote."""
    parser = _build_parser()
    args = parser.parse_args()

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    sys.exit(run(args))


if __name__ == "__main__":
    main()
