"""
Export Freight Shipping Cost Calculator

DataFrame in, DataFrame out. The input can come from any source (CSV,
manual creation, a form session) as long as it contains the required
columns. The output is the same DataFrame with calculation columns and costs
appended. Row-for-row it produces the same numbers as quote.compute_total_cost.

REQUIRED INPUT COLUMNS
----------------------
    length_cm           - Pallet length in centimeters
    width_cm            - Pallet width in centimeters
    height_cm           - Pallet height in centimeters
    pallet_count        - Number of pallets
    weight_kg           - Actual weight per pallet in kilograms
    destination         - Destination key from rates.csv (e.g. "swiss")

OPTIONAL INPUT COLUMNS
----------------------
    delivery_vehicle    - "4wheel", "6wheel" or null for no delivery
    cost_additional     - Sum of free-text additional charges (default 0)

OUTPUT COLUMNS ADDED
--------------------
    supplement_shipments() adds:
        - cubic_cm
        - volume_weight_kg, total_volume_weight_kg, total_actual_weight_kg
        - uses_volume_weight, chargeable_weight_kg

    calculate() adds:
        - destination_name, applied_rate, cost_freight
        - surcharge_* flags and cost_* amounts (delivery, clearance)
        - cost_additional, cost_total
        - calculator_version

USAGE
-----
    from carriers.export_freight.calculate_costs import calculate_costs
    result = calculate_costs(df)
"""

import logging

import polars as pl

from .version import VERSION
from .data import load_rates, DIM_FACTOR, FACTOR_FIELD
from .surcharges import (
    ALL,
    get_exclusivity_group,
    get_unique_exclusivity_groups,
)

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = [
    "length_cm",
    "width_cm",
    "height_cm",
    "pallet_count",
    "weight_kg",
    "destination",
]


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================

def calculate_costs(
    df: pl.DataFrame,
    rates: pl.DataFrame | None = None
) -> pl.DataFrame:
    """
    Calculate export freight costs for a shipment DataFrame.

    This is the main entry point. Takes raw shipment data and returns
    the same DataFrame with all calculation columns and costs appended.

    Args:
        df: Raw shipment DataFrame with required columns (see module docstring)
        rates: Rate band DataFrame (loaded from rates.csv if not provided)

    Returns:
        DataFrame with supplemented data, surcharge flags, and costs
    """
    df = supplement_shipments(df)
    df = calculate(df, rates)
    return df


# =============================================================================
# SUPPLEMENT SHIPMENTS
# =============================================================================

def supplement_shipments(df: pl.DataFrame) -> pl.DataFrame:
    """
    Supplement shipment data with volumetric and chargeable weights.

    Args:
        df: Raw shipment DataFrame

    Returns:
        DataFrame with added columns:
            - cubic_cm
            - volume_weight_kg, total_volume_weight_kg, total_actual_weight_kg
            - uses_volume_weight, chargeable_weight_kg
    """
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required column(s): {', '.join(missing)}")

    df = _add_optional_columns(df)
    df = _add_calculated_dimensions(df)
    df = _add_chargeable_weight(df)

    return df


def _add_optional_columns(df: pl.DataFrame) -> pl.DataFrame:
    """Fill in optional inputs so later phases can rely on them."""
    if "delivery_vehicle" not in df.columns:
        df = df.with_columns(pl.lit(None, dtype=pl.Utf8).alias("delivery_vehicle"))
    if "cost_additional" not in df.columns:
        df = df.with_columns(pl.lit(0.0).alias("cost_additional"))

    # Permissive input: nulls, unparseable cells and negatives count as zero
    return df.with_columns([
        pl.col("length_cm", "width_cm", "height_cm", "weight_kg")
        .cast(pl.Float64, strict=False)
        .fill_null(0.0)
        .fill_nan(0.0)
        .clip(lower_bound=0.0),
        pl.col("pallet_count")
        .cast(pl.Float64, strict=False)
        .fill_null(0.0)
        .fill_nan(0.0)
        .clip(lower_bound=0.0)
        .cast(pl.Int64),
        pl.col("delivery_vehicle").cast(pl.Utf8),
        pl.col("cost_additional")
        .cast(pl.Float64, strict=False)
        .fill_null(0.0)
        .fill_nan(0.0),
    ])


def _add_calculated_dimensions(df: pl.DataFrame) -> pl.DataFrame:
    """Add pallet volume in cubic centimeters."""
    return df.with_columns(
        (pl.col("length_cm") * pl.col("width_cm") * pl.col("height_cm"))
        .alias("cubic_cm")
    )


def _add_chargeable_weight(df: pl.DataFrame) -> pl.DataFrame:
    """
    Calculate volumetric weight and chargeable weight.

    Volumetric weight is computed per pallet and rounded up to a whole kg
    before multiplying by the pallet count. Chargeable weight is the greater
    of total volumetric and total actual weight.
    """
    df = df.with_columns(
        (pl.col(FACTOR_FIELD) / DIM_FACTOR).ceil().alias("volume_weight_kg")
    )

    df = df.with_columns([
        (pl.col("volume_weight_kg") * pl.col("pallet_count")).alias("total_volume_weight_kg"),
        (pl.col("weight_kg") * pl.col("pallet_count")).alias("total_actual_weight_kg"),
    ])

    df = df.with_columns([
        (pl.col("total_volume_weight_kg") > pl.col("total_actual_weight_kg")).alias("uses_volume_weight"),
        pl.max_horizontal("total_volume_weight_kg", "total_actual_weight_kg").alias("chargeable_weight_kg"),
    ])

    return df


# =============================================================================
# CALCULATE COSTS
# =============================================================================

def calculate(df: pl.DataFrame, rates: pl.DataFrame | None = None) -> pl.DataFrame:
    """
    Calculate export freight costs for supplemented shipments.

    Args:
        df: Supplemented shipment DataFrame from supplement_shipments
        rates: Rate band DataFrame (loaded from rates.csv if not provided)

    Returns:
        DataFrame with applied rate, surcharge flags, costs and totals

    Processing order:
        1. Rate lookup  - per-kg rate by destination and chargeable weight
        2. Freight      - chargeable weight x applied rate
        3. Surcharges   - delivery (exclusive by vehicle) and clearance
        4. Totals       - sum up all costs
    """
    if rates is None:
        rates = load_rates()

    df = _lookup_rate(df, rates)
    df = _calculate_freight(df)
    df = _apply_surcharges(df, ALL)
    df = _calculate_total(df)
    df = _stamp_version(df)

    logger.debug("Calculated costs for %d shipment(s)", len(df))
    return df


def _lookup_rate(df: pl.DataFrame, rates: pl.DataFrame) -> pl.DataFrame:
    """
    Look up the per-kg rate by destination and chargeable weight.

    The first band (by band order) whose inclusive range contains the
    chargeable weight wins. Weights outside every band fall back to the
    destination's last band.
    """
    unknown = (
        df.select(pl.col("destination").unique())
        .join(rates.select("destination").unique(), on="destination", how="anti")
        ["destination"]
        .to_list()
    )
    if unknown:
        missing_count = df.filter(
            pl.col("destination").is_null()
            | pl.col("destination").is_in([u for u in unknown if u is not None])
        ).height
        raise ValueError(
            f"{missing_count} shipment(s) have no matching destination. "
            f"Unknown destination(s): {', '.join(str(u) for u in unknown)}. "
            f"Check destination values against rates.csv."
        )

    df = df.with_row_index("_row_id")

    matched = (
        df.select("_row_id", "destination", "chargeable_weight_kg")
        .join(rates, on="destination", how="inner")
        .filter(
            (pl.col("chargeable_weight_kg") >= pl.col("weight_kg_min")) &
            (pl.col("chargeable_weight_kg") <= pl.col("weight_kg_max"))
        )
        .sort(["_row_id", "band"])
        .group_by("_row_id", maintain_order=True)
        .first()
        .select("_row_id", pl.col("rate").alias("_matched_rate"))
    )

    destination_info = (
        rates.sort(["destination", "band"])
        .group_by("destination", maintain_order=True)
        .agg([
            pl.col("destination_name").first(),
            pl.col("rate").last().alias("_fallback_rate"),
        ])
    )

    df = (
        df
        .join(matched, on="_row_id", how="left")
        .join(destination_info, on="destination", how="left")
        .with_columns(
            pl.coalesce(["_matched_rate", "_fallback_rate"]).alias("applied_rate")
        )
    )

    df = df.drop(["_matched_rate", "_fallback_rate"])
    df = df.sort("_row_id").drop("_row_id")

    return df


def _calculate_freight(df: pl.DataFrame) -> pl.DataFrame:
    """Freight cost = chargeable weight x applied rate."""
    return df.with_columns(
        (pl.col("chargeable_weight_kg") * pl.col("applied_rate")).alias("cost_freight")
    )


def _apply_surcharges(df: pl.DataFrame, surcharges: list) -> pl.DataFrame:
    """
    Apply surcharges, handling mutual exclusivity within exclusivity groups.

    Surcharges with the same exclusivity_group compete - only highest priority wins.
    Surcharges without exclusivity_group are applied independently.
    """
    # Separate standalone vs exclusive surcharges
    standalone = [s for s in surcharges if s.exclusivity_group is None]
    exclusive = [s for s in surcharges if s.exclusivity_group is not None]

    # Apply standalone surcharges (no competition)
    for s in standalone:
        df = _apply_single_surcharge(df, s, pl.lit(False))

    # Apply exclusive surcharges by group
    for group_name in sorted(get_unique_exclusivity_groups(exclusive)):
        exclusion_mask = pl.lit(False)
        for s in get_exclusivity_group(group_name):
            df = _apply_single_surcharge(df, s, exclusion_mask)
            # If this one matched, exclude the rest of the group
            exclusion_mask = exclusion_mask | pl.col(f"surcharge_{s.name.lower()}")

    return df


def _apply_single_surcharge(
    df: pl.DataFrame,
    surcharge,
    exclusion_mask: pl.Expr
) -> pl.DataFrame:
    """Apply one surcharge unless a higher priority one already matched."""
    flag_col = f"surcharge_{surcharge.name.lower()}"
    cost_col = f"cost_{surcharge.name.lower()}"

    df = df.with_columns((surcharge.conditions() & ~exclusion_mask).alias(flag_col))

    # Handle both fixed cost and expression-based cost
    cost_expr = surcharge.cost()
    if not isinstance(cost_expr, pl.Expr):
        cost_expr = pl.lit(cost_expr)

    return df.with_columns(
        pl.when(pl.col(flag_col))
        .then(cost_expr)
        .otherwise(pl.lit(0.0))
        .cast(pl.Float64)
        .alias(cost_col)
    )


def _calculate_total(df: pl.DataFrame) -> pl.DataFrame:
    """Calculate cost_total as freight + surcharges + additional charges."""
    cost_cols = (
        ["cost_freight"]
        + [f"cost_{s.name.lower()}" for s in ALL]
        + ["cost_additional"]
    )
    return df.with_columns(pl.sum_horizontal(cost_cols).alias("cost_total"))


def _stamp_version(df: pl.DataFrame) -> pl.DataFrame:
    """Stamp calculator version on output."""
    return df.with_columns(pl.lit(VERSION).alias("calculator_version"))


__all__ = [
    "calculate_costs",
    "supplement_shipments",
    "calculate",
    "REQUIRED_COLUMNS",
]
