"""JSON schema definition and validation for quote request files.

Validation uses the ``jsonschema`` library (Draft 7). Numeric inputs are only
type-checked here; range limiting (interest rate, tariff, down payment,
capacity) is applied by :mod:`subsidy_engine.config.loader` so that
out-of-range slider values are clamped rather than rejected.

Usage::

    from subsidy_engine.config.schema import validate_request
    validate_request(data)   # raises jsonschema.ValidationError on failure
"""

from __future__ import annotations

import jsonschema

from subsidy_engine.config.defaults import INDIAN_STATES, STANDARD_TENURES_MONTHS

# ---------------------------------------------------------------------------
# Re-usable sub-schemas
# ---------------------------------------------------------------------------

_NUMBER = {"type": "number"}

_PANEL_TYPES = ["dcr", "non_dcr"]
_INVERTER_TYPES = ["hybrid", "ongrid"]
_CUSTOMER_TYPES = ["residential", "commercial", "industrial"]

_PARTNER = {
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "phone": {"type": "string"},
    },
    "additionalProperties": False,
}

_OUTPUT = {
    "type": "object",
    "required": ["directory"],
    "properties": {
        "directory": {"type": "string", "minLength": 1},
        "export_emi_schedule": {"type": "boolean"},
    },
    "additionalProperties": False,
}

# ---------------------------------------------------------------------------
# quote block
# ---------------------------------------------------------------------------

_QUOTE_BLOCK = {
    "type": "object",
    "required": ["name"],
    "properties": {
        "name": {"type": "string", "minLength": 1},
        "customer_name": {"type": "string"},
        "selected_tenure_months": {
            "type": "integer",
            "enum": list(STANDARD_TENURES_MONTHS),
        },
        "partner": _PARTNER,
        "installation_address": {"type": "string"},
        "output": _OUTPUT,
    },
    "additionalProperties": False,
}

# ---------------------------------------------------------------------------
# pricing block
# ---------------------------------------------------------------------------

_PRICING_BLOCK = {
    "type": "object",
    "required": ["capacity_kw", "panel_type"],
    "properties": {
        "capacity_kw": {"type": "number", "exclusiveMinimum": 0},
        "state": {"type": "string", "enum": ["", *INDIAN_STATES]},
        "panel_type": {"type": "string", "enum": _PANEL_TYPES},
        "inverter_type": {"type": "string", "enum": _INVERTER_TYPES},
        "customer_type": {"type": "string", "enum": _CUSTOMER_TYPES},
        "interest_rate_pct": _NUMBER,
        "electricity_unit_rate": _NUMBER,
        "down_payment_pct": _NUMBER,
    },
    "additionalProperties": False,
}

# ---------------------------------------------------------------------------
# Top-level schema
# ---------------------------------------------------------------------------

REQUEST_SCHEMA: dict = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "Solar Quote Request",
    "type": "object",
    "required": ["quote", "pricing"],
    "properties": {
        "quote": _QUOTE_BLOCK,
        "pricing": _PRICING_BLOCK,
    },
    "additionalProperties": False,
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def validate_request(data: dict) -> None:
    """Validate a quote request dictionary against the JSON schema.

    Raises a ``jsonschema.ValidationError`` with a descriptive message
    (including the JSON path to the failing field) if validation fails.

    Parameters
    ----------
    data:
        Parsed request dictionary (e.g. from ``json.load``).

    Raises
    ------
    jsonschema.ValidationError
        When *data* does not conform to the request schema.
    """
    validator = jsonschema.Draft7Validator(REQUEST_SCHEMA)
    errors = sorted(validator.iter_errors(data), key=lambda e: list(e.absolute_path))

    if errors:
        first = errors[0]
        path_str = " → ".join(str(p) for p in first.absolute_path) or "(root)"
        raise jsonschema.ValidationError(
            f"Quote request validation failed at '{path_str}': {first.message}",
            path=first.absolute_path,
            schema_path=first.absolute_schema_path,
            validator=first.validator,
            validator_value=first.validator_value,
            instance=first.instance,
            schema=first.schema,
            cause=first.cause,
        )


def get_schema() -> dict:
    """Return a copy of the quote request JSON schema dictionary."""
    return REQUEST_SCHEMA.copy()
