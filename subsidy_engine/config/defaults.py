"""Global default values and constants.

All numeric constants used throughout the subsidy_engine package must be
defined here rather than as inline literals. Import from this module wherever
a constant is needed to ensure a single source of truth and full traceability.

Monetary values are in Indian rupees (INR).
"""

# ---------------------------------------------------------------------------
# Unit conversion
# ---------------------------------------------------------------------------

WATTS_PER_KW: int = 1000
"""Watts per kilowatt (per-watt rate × capacity_kW × this = system cost)."""

MONTHS_PER_YEAR: int = 12
"""Months per year, used for annual savings and monthly interest rate."""

DAYS_PER_MONTH: int = 30
"""Days per month used by the generation model."""

PERCENT: float = 100.0
"""Divisor converting a percentage to a fraction."""

# ---------------------------------------------------------------------------
# System pricing (INR per watt)
# ---------------------------------------------------------------------------

RATE_PER_WATT_DCR_HYBRID: float = 75.0
"""DCR panels with a 3-in-1 hybrid inverter."""

RATE_PER_WATT_DCR_ONGRID: float = 66.0
"""DCR panels with an on-grid inverter."""

RATE_PER_WATT_NON_DCR: float = 55.0
"""Non-DCR panels (inverter type does not affect the rate)."""

# ---------------------------------------------------------------------------
# Central government subsidy
# ---------------------------------------------------------------------------

CENTRAL_SUBSIDY_FIRST_TIER_KW: float = 2.0
"""Capacity up to which the first-tier per-kW rate applies."""

CENTRAL_SUBSIDY_FIRST_TIER_PER_KW: float = 30_000.0
"""Central subsidy per kW for the first 2 kW."""

CENTRAL_SUBSIDY_SECOND_TIER_KW: float = 3.0
"""Capacity up to which the second-tier per-kW rate applies."""

CENTRAL_SUBSIDY_SECOND_TIER_PER_KW: float = 18_000.0
"""Central subsidy per kW between 2 kW and 3 kW."""

CENTRAL_SUBSIDY_CAP: float = 78_000.0
"""Flat central subsidy for any capacity above 3 kW (2 × 30 000 + 18 000)."""

# ---------------------------------------------------------------------------
# State government subsidy
# ---------------------------------------------------------------------------

STATE_SUBSIDY_MAX_KW: float = 3.0
"""Capacity above which no additional state subsidy is paid."""

STATE_SUBSIDIES: dict[str, dict] = {
    "Odisha": {
        "rate_per_kw": 20_000.0,
        "max_subsidy": 60_000.0,
        "label": "Odisha State Subsidy",
    },
    "Uttar Pradesh": {
        "rate_per_kw": 10_000.0,
        "max_subsidy": 30_000.0,
        "label": "UP State Subsidy",
    },
}
"""Per-state top-up subsidy. States not listed here contribute 0."""

INDIAN_STATES: tuple[str, ...] = (
    "Andhra Pradesh", "Arunachal Pradesh", "Assam", "Bihar", "Chhattisgarh",
    "Goa", "Gujarat", "Haryana", "Himachal Pradesh", "Jharkhand", "Karnataka",
    "Kerala", "Madhya Pradesh", "Maharashtra", "Manipur", "Meghalaya", "Mizoram",
    "Nagaland", "Odisha", "Punjab", "Rajasthan", "Sikkim", "Tamil Nadu",
    "Telangana", "Tripura", "Uttar Pradesh", "Uttarakhand", "West Bengal",
    "Delhi", "Jammu and Kashmir", "Ladakh", "Puducherry", "Chandigarh",
)
"""States and union territories accepted in a quote request."""

# ---------------------------------------------------------------------------
# Energy / savings model
# ---------------------------------------------------------------------------

GENERATION_KWH_PER_KW_PER_DAY: float = 4.0
"""Fixed daily generation factor (kWh per installed kW per day)."""

PANEL_LIFETIME_YEARS: int = 25
"""Panel service life used for the lifetime savings figure."""

# ---------------------------------------------------------------------------
# Loan / EMI
# ---------------------------------------------------------------------------

STANDARD_TENURES_MONTHS: tuple[int, ...] = (36, 48, 60, 72, 84)
"""Loan tenures for which an EMI is always quoted."""

DEFAULT_SELECTED_TENURE_MONTHS: int = 60
"""Tenure shown on the proposal when the caller does not choose one."""

# ---------------------------------------------------------------------------
# Pricing input defaults and clamp ranges
# ---------------------------------------------------------------------------

DEFAULT_INTEREST_RATE_PCT: float = 10.0
"""Default annual loan interest rate (10 %)."""

MIN_INTEREST_RATE_PCT: float = 1.0
MAX_INTEREST_RATE_PCT: float = 25.0

DEFAULT_UNIT_RATE: float = 7.0
"""Default electricity tariff in INR/kWh."""

MIN_UNIT_RATE: float = 1.0
MAX_UNIT_RATE: float = 20.0

DEFAULT_DOWN_PAYMENT_PCT: float = 15.0
"""Default down payment as a percentage of the net cost."""

MIN_DOWN_PAYMENT_PCT: float = 0.0
MAX_DOWN_PAYMENT_PCT: float = 100.0

MIN_CAPACITY_KW: float = 1.0
"""Smallest capacity accepted at the input boundary."""

MAX_CAPACITY_KW_RESIDENTIAL: float = 10.0
"""Largest capacity accepted for residential customers."""

MAX_CAPACITY_KW_NON_RESIDENTIAL: float = 100.0
"""Largest capacity accepted for commercial and industrial customers."""

# ---------------------------------------------------------------------------
# Partner commission
# ---------------------------------------------------------------------------

DCR_FIXED_COMMISSION: dict[float, tuple[float, float]] = {
    3.0: (20_000.0, 10_000.0),
    5.0: (35_000.0, 15_000.0),
}
"""Exact-capacity DCR tiers: capacity_kW → (DDP amount, BDP amount)."""

DCR_COMMISSION_PER_KW: tuple[float, float] = (6_000.0, 3_000.0)
"""DCR per-kW commission (DDP, BDP) for every capacity without a fixed tier."""

NON_DCR_COMMISSION_PER_KW: tuple[float, float] = (4_000.0, 2_000.0)
"""Non-DCR per-kW commission (DDP, BDP), independent of capacity."""

# ---------------------------------------------------------------------------
# Output defaults
# ---------------------------------------------------------------------------

DEFAULT_OUTPUT_DIR: str = "output"
"""Default root directory for quote result files."""

CSV_DELIMITER: str = ","
"""Delimiter used in all input and output CSV files."""

FLOAT_PRECISION: int = 4
"""Number of decimal places for floating-point values in output CSVs."""

CURRENCY_PRECISION: int = 2
"""Number of decimal places for monetary values in output CSVs."""

CURRENCY_SYMBOL: str = "₹"
"""Rupee sign used for on-screen currency formatting."""

CURRENCY_SYMBOL_ASCII: str = "Rs "
"""Prefix used where the rupee glyph is unavailable (standard PDF fonts)."""
