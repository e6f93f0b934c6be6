"""
Export Freight Data

Reference data and loaders for rate bands and charge configuration.

Structure:
    - reference/rates.csv       - weight bands per destination
    - reference/billable_weight - volumetric divisor
    - reference/charges         - delivery, clearance and quote terms

New destinations are added to rates.csv only; the engine reads whatever
the table contains.
"""

import polars as pl
from pathlib import Path

from .reference.billable_weight import DIM_FACTOR, FACTOR_FIELD
from .reference.charges import (
    CURRENCY_SYMBOL,
    DELIVERY_RATES,
    VEHICLE_LABELS,
    CLEARANCE_CHARGE,
    CLEARANCE_VAT_RATE,
    QUOTE_VALIDITY_DAYS,
    STRICT_CHARGES,
)


REFERENCE_DIR = Path(__file__).parent / "reference"

DEFAULT_DESTINATION = "swiss"


def load_rates(path: Path | None = None) -> pl.DataFrame:
    """
    Load rate bands in long format, ready for joining.

    Returns:
        DataFrame with columns:
            - destination: Stable destination key (e.g. "swiss")
            - destination_name: Display name
            - band: Band order within the destination (1 = lightest)
            - weight_kg_min: Lower bound of weight band (inclusive)
            - weight_kg_max: Upper bound of weight band (inclusive)
            - rate: Freight rate per kg
    """
    return pl.read_csv(
        path or REFERENCE_DIR / "rates.csv",
        schema_overrides={
            "destination": pl.Utf8,
            "destination_name": pl.Utf8,
            "band": pl.Int64,
            "weight_kg_min": pl.Float64,
            "weight_kg_max": pl.Float64,
            "rate": pl.Float64,
        },
    )


__all__ = [
    "load_rates",
    "REFERENCE_DIR",
    "DEFAULT_DESTINATION",
    # Billable weight config
    "DIM_FACTOR",
    "FACTOR_FIELD",
    # Charge config
    "CURRENCY_SYMBOL",
    "DELIVERY_RATES",
    "VEHICLE_LABELS",
    "CLEARANCE_CHARGE",
    "CLEARANCE_VAT_RATE",
    "QUOTE_VALIDITY_DAYS",
    "STRICT_CHARGES",
]
