"""Load and validate quote request JSON files and batch quote CSVs.

Public API
----------
load_request(path)        – Parse + validate a quote request JSON file.
load_request_dict(data)   – Validate an already-parsed request dictionary.
load_batch_csv(path)      – Load a CSV of pricing inputs for batch quoting.
load_pricing_record(rec)  – Pricing inputs from a camelCase quote record.
clamp_pricing_inputs(...) – Range-limit raw pricing inputs.

Request JSON and batch CSVs use snake_case keys (``panel_type``,
``interest_rate_pct``). Quote records produced by ``PricingResult.to_dict``
use camelCase keys (``panelType``, ``interestRate``); ``load_pricing_record``
reads those back so a stored quote can be priced again.

The calculation core does not range-limit its inputs. This module is the
boundary where slider and form values are clamped to their allowed ranges,
with a warning for every value that had to be adjusted.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pandas as pd

from subsidy_engine.config.defaults import (
    CSV_DELIMITER,
    DEFAULT_DOWN_PAYMENT_PCT,
    DEFAULT_INTEREST_RATE_PCT,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_SELECTED_TENURE_MONTHS,
    DEFAULT_UNIT_RATE,
    INDIAN_STATES,
    MAX_CAPACITY_KW_NON_RESIDENTIAL,
    MAX_CAPACITY_KW_RESIDENTIAL,
    MAX_DOWN_PAYMENT_PCT,
    MAX_INTEREST_RATE_PCT,
    MAX_UNIT_RATE,
    MIN_CAPACITY_KW,
    MIN_DOWN_PAYMENT_PCT,
    MIN_INTEREST_RATE_PCT,
    MIN_UNIT_RATE,
)
from subsidy_engine.config.schema import validate_request
from subsidy_engine.finance.categories import (
    CustomerCategory,
    InverterCategory,
    PanelCategory,
)

logger = logging.getLogger(__name__)

BATCH_REQUIRED_COLUMNS: tuple[str, ...] = ("capacity_kw", "panel_type")
"""Columns every batch CSV must contain."""


# ---------------------------------------------------------------------------
# Typed result containers
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PricingInputs:
    """Clamped, typed arguments for :func:`~subsidy_engine.finance.pricing.compute_pricing`."""

    capacity_kw: float
    state: str
    panel_category: PanelCategory
    inverter_category: InverterCategory
    customer_category: CustomerCategory
    interest_rate_pct: float = DEFAULT_INTEREST_RATE_PCT
    unit_rate: float = DEFAULT_UNIT_RATE
    down_payment_pct: float = DEFAULT_DOWN_PAYMENT_PCT

    def as_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``compute_pricing``."""
        return {
            "capacity_kw": self.capacity_kw,
            "state": self.state,
            "panel_category": self.panel_category,
            "inverter_category": self.inverter_category,
            "customer_category": self.customer_category,
            "interest_rate_pct": self.interest_rate_pct,
            "unit_rate": self.unit_rate,
            "down_payment_pct": self.down_payment_pct,
        }


@dataclass
class QuoteRequest:
    """Fully validated, parsed quote request.

    Attributes
    ----------
    raw:
        The validated dictionary as loaded from JSON.
    name:
        Request name (``quote.name``); used for output file names.
    pricing:
        Clamped pricing inputs.
    selected_tenure:
        Tenure in months shown on the proposal.
    path:
        Absolute path to the source JSON file (``None`` if loaded from a dict).
    """

    raw: dict[str, Any]
    name: str
    pricing: PricingInputs
    selected_tenure: int = DEFAULT_SELECTED_TENURE_MONTHS
    customer_name: str = ""
    partner_name: str = ""
    partner_phone: str = ""
    installation_address: str = ""
    path: Path | None = field(default=None, repr=False)

    @property
    def output(self) -> dict:
        """Shortcut to ``raw["quote"]["output"]`` (empty dict if absent)."""
        return self.raw["quote"].get("output", {})

    @property
    def output_directory(self) -> str:
        """Root output directory configured in the request."""
        return self.output.get("directory", DEFAULT_OUTPUT_DIR)

    @property
    def export_emi_schedule(self) -> bool:
        """``True`` if the month-by-month schedule CSV should be written."""
        return bool(self.output.get("export_emi_schedule", False))


# ---------------------------------------------------------------------------
# Clamping
# ---------------------------------------------------------------------------


def _clamp(name: str, value: float, lower: float, upper: float) -> float:
    """Clamp *value* into [lower, upper], warning when it changes."""
    clamped = min(max(value, lower), upper)
    if clamped != value:
        logger.warning(
            "%s=%s is outside [%s, %s]; clamped to %s", name, value, lower, upper, clamped
        )
    return clamped


def max_capacity_kw(customer_category) -> float:
    """Largest capacity accepted for a customer category."""
    if CustomerCategory.parse(customer_category) is CustomerCategory.RESIDENTIAL:
        return MAX_CAPACITY_KW_RESIDENTIAL
    return MAX_CAPACITY_KW_NON_RESIDENTIAL


def clamp_pricing_inputs(
    capacity_kw: float,
    state: str | None = "",
    panel_type="dcr",
    inverter_type="hybrid",
    customer_type="residential",
    interest_rate_pct: float = DEFAULT_INTEREST_RATE_PCT,
    unit_rate: float = DEFAULT_UNIT_RATE,
    down_payment_pct: float = DEFAULT_DOWN_PAYMENT_PCT,
) -> PricingInputs:
    """Parse categories and range-limit numeric pricing inputs.

    Parameters
    ----------
    capacity_kw:
        Requested capacity; clamped to [1, 10] kW for residential and
        [1, 100] kW for commercial/industrial customers.
    state:
        State name; ``None`` becomes ``""``.
    panel_type, inverter_type, customer_type:
        Wire strings or category members.
    interest_rate_pct:
        Clamped to [1, 25].
    unit_rate:
        Clamped to [1, 20].
    down_payment_pct:
        Clamped to [0, 100].

    Returns
    -------
    PricingInputs

    Raises
    ------
    ValueError
        When a category string is not recognised.
    """
    customer = CustomerCategory.parse(customer_type)
    return PricingInputs(
        capacity_kw=_clamp(
            "capacity_kw", float(capacity_kw), MIN_CAPACITY_KW, max_capacity_kw(customer)
        ),
        state=state or "",
        panel_category=PanelCategory.parse(panel_type),
        inverter_category=InverterCategory.parse(inverter_type),
        customer_category=customer,
        interest_rate_pct=_clamp(
            "interest_rate_pct",
            float(interest_rate_pct),
            MIN_INTEREST_RATE_PCT,
            MAX_INTEREST_RATE_PCT,
        ),
        unit_rate=_clamp(
            "electricity_unit_rate", float(unit_rate), MIN_UNIT_RATE, MAX_UNIT_RATE
        ),
        down_payment_pct=_clamp(
            "down_payment_pct",
            float(down_payment_pct),
            MIN_DOWN_PAYMENT_PCT,
            MAX_DOWN_PAYMENT_PCT,
        ),
    )


# ---------------------------------------------------------------------------
# Public functions
# ---------------------------------------------------------------------------


def load_request(path: str | Path) -> QuoteRequest:
    """Load and validate a quote request JSON file.

    Parameters
    ----------
    path:
        Path to the request ``.json`` file.

    Returns
    -------
    QuoteRequest
        Validated, clamped request.

    Raises
    ------
    FileNotFoundError
        When *path* does not exist.
    json.JSONDecodeError
        When the file contains invalid JSON.
    jsonschema.ValidationError
        When the JSON does not conform to the request schema.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(
            f"Quote request file not found: '{path}'. "
            "Check that the path is correct and the file exists."
        )

    logger.debug("Loading quote request from '%s'", path)

    try:
        with path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
    except json.JSONDecodeError as exc:
        raise json.JSONDecodeError(
            f"Invalid JSON in quote request file '{path}': {exc.msg}",
            exc.doc,
            exc.pos,
        ) from exc

    request = load_request_dict(data)
    request.path = path.resolve()

    logger.info(
        "Loaded quote request '%s' (%.2f kW %s, %s) from '%s'",
        request.name,
        request.pricing.capacity_kw,
        request.pricing.panel_category.value,
        request.pricing.customer_category.value,
        path,
    )
    return request


def load_request_dict(data: dict) -> QuoteRequest:
    """Validate and wrap an already-parsed quote request dictionary.

    Parameters
    ----------
    data:
        Parsed request dictionary.

    Returns
    -------
    QuoteRequest
        Validated request (``path=None``).

    Raises
    ------
    jsonschema.ValidationError
        When *data* does not conform to the request schema.
    """
    validate_request(data)

    quote = data["quote"]
    p = data["pricing"]
    pricing = clamp_pricing_inputs(
        capacity_kw=p["capacity_kw"],
        state=p.get("state", ""),
        panel_type=p["panel_type"],
        inverter_type=p.get("inverter_type", InverterCategory.HYBRID.value),
        customer_type=p.get("customer_type", CustomerCategory.RESIDENTIAL.value),
        interest_rate_pct=p.get("interest_rate_pct", DEFAULT_INTEREST_RATE_PCT),
        unit_rate=p.get("electricity_unit_rate", DEFAULT_UNIT_RATE),
        down_payment_pct=p.get("down_payment_pct", DEFAULT_DOWN_PAYMENT_PCT),
    )
    partner = quote.get("partner", {})
    return QuoteRequest(
        raw=data,
        name=quote["name"],
        pricing=pricing,
        selected_tenure=int(
            quote.get("selected_tenure_months", DEFAULT_SELECTED_TENURE_MONTHS)
        ),
        customer_name=quote.get("customer_name", ""),
        partner_name=partner.get("name", ""),
        partner_phone=partner.get("phone", ""),
        installation_address=quote.get("installation_address", ""),
        path=None,
    )


RECORD_REQUIRED_KEYS: tuple[str, ...] = ("capacity", "panelType")
"""Keys a camelCase quote record must contain."""


def load_pricing_record(record: dict) -> PricingInputs:
    """Read pricing inputs back from a camelCase quote record.

    Only the input keys (``capacity``, ``state``, ``panelType``,
    ``inverterType``, ``customerType``, ``interestRate``,
    ``electricityUnitRate``, ``downPaymentPercent``) are read; computed
    amounts in the record are ignored. Missing optional keys take their
    defaults, and values are clamped like any other input.

    Raises
    ------
    ValueError
        When a required key is missing or a category is not recognised.
    """
    missing = [k for k in RECORD_REQUIRED_KEYS if k not in record]
    if missing:
        raise ValueError(f"Quote record is missing required key(s): {missing}.")

    return clamp_pricing_inputs(
        capacity_kw=record["capacity"],
        state=record.get("state", ""),
        panel_type=record["panelType"],
        inverter_type=record.get("inverterType", InverterCategory.HYBRID.value),
        customer_type=record.get("customerType", CustomerCategory.RESIDENTIAL.value),
        interest_rate_pct=record.get("interestRate", DEFAULT_INTEREST_RATE_PCT),
        unit_rate=record.get("electricityUnitRate", DEFAULT_UNIT_RATE),
        down_payment_pct=record.get("downPaymentPercent", DEFAULT_DOWN_PAYMENT_PCT),
    )


def load_batch_csv(path: str | Path) -> list[PricingInputs]:
    """Load a CSV of pricing inputs, one quote per row.

    Required columns are ``capacity_kw`` and ``panel_type``. The optional
    columns ``state``, ``inverter_type``, ``customer_type``,
    ``interest_rate_pct``, ``electricity_unit_rate`` and ``down_payment_pct``
    fall back to their defaults when absent or blank.

    Parameters
    ----------
    path:
        Path to the batch CSV file.

    Returns
    -------
    list[PricingInputs]
        Clamped inputs in file order.

    Raises
    ------
    FileNotFoundError
        When *path* does not exist.
    ValueError
        When a required column is missing, a capacity is blank or not
        numeric, or a category value is not recognised. The message names
        the offending row (1-based data row).
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Batch CSV file not found: '{path}'.")

    logger.debug("Loading batch CSV from '%s'", path)

    try:
        df = pd.read_csv(path, sep=CSV_DELIMITER, dtype={"state": str})
    except Exception as exc:
        raise ValueError(f"Failed to parse batch CSV '{path}': {exc}") from exc

    missing = [c for c in BATCH_REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(
            f"Batch CSV '{path}' is missing required column(s): {missing}. "
            f"Available columns: {sorted(df.columns)}."
        )

    capacities = pd.to_numeric(df["capacity_kw"], errors="coerce")
    bad_rows = [int(i) + 1 for i in capacities.index[capacities.isna()]]
    if bad_rows:
        raise ValueError(
            f"Batch CSV '{path}' has blank or non-numeric 'capacity_kw' "
            f"in row(s) {bad_rows}."
        )

    inputs: list[PricingInputs] = []
    for i, row in enumerate(df.to_dict(orient="records"), start=1):
        try:
            inputs.append(
                clamp_pricing_inputs(
                    capacity_kw=float(capacities.iloc[i - 1]),
                    state=_cell(row, "state", ""),
                    panel_type=row["panel_type"],
                    inverter_type=_cell(row, "inverter_type", InverterCategory.HYBRID.value),
                    customer_type=_cell(
                        row, "customer_type", CustomerCategory.RESIDENTIAL.value
                    ),
                    interest_rate_pct=float(
                        _cell(row, "interest_rate_pct", DEFAULT_INTEREST_RATE_PCT)
                    ),
                    unit_rate=float(_cell(row, "electricity_unit_rate", DEFAULT_UNIT_RATE)),
                    down_payment_pct=float(
                        _cell(row, "down_payment_pct", DEFAULT_DOWN_PAYMENT_PCT)
                    ),
                )
            )
        except ValueError as exc:
            raise ValueError(f"Batch CSV '{path}' row {i}: {exc}") from exc

    unknown_states = sorted({p.state for p in inputs if p.state and p.state not in INDIAN_STATES})
    if unknown_states:
        logger.warning(
            "Batch CSV '%s' names unknown state(s) %s; no state subsidy applies",
            path,
            unknown_states,
        )

    logger.info("Loaded batch CSV '%s': %d quote(s)", path, len(inputs))
    return inputs


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _cell(row: dict, column: str, default):
    """Return ``row[column]``, or *default* when the column is absent or blank."""
    value = row.get(column, default)
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return default
    if isinstance(value, str) and not value.strip():
        return default
    return value
