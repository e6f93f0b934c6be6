"""
Export Freight Quote Engine

Pure functions from a ShipmentRequest to a QuoteResult. Single-quote
counterpart of calculate_costs(), which does the same over a DataFrame.

    volume weight / pallet  = ceil(L x W x H / 6000)
    chargeable weight       = max(volume / pallet, actual / pallet) x pallets
    applied rate            = first rate band containing the chargeable weight
    total                   = freight + delivery + clearance + additional

USAGE
-----
    from carriers.export_freight.quote import compute_total_cost
    result = compute_total_cost(request)
"""

import math

import polars as pl

from .data import load_rates, DIM_FACTOR, STRICT_CHARGES
from .errors import InvalidChargeError, UnknownDestinationError
from .models import Destination, Dimensions, QuoteResult, RateBand, ShipmentRequest
from .surcharges import CLEARANCE, DELIVERY


# =============================================================================
# INPUT COERCION
# =============================================================================

def coerce_float(value) -> float:
    """Coerce raw form input to a float; anything non-numeric becomes 0.0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def coerce_int(value) -> int:
    """Coerce raw form input to an int (truncating decimals); invalid becomes 0."""
    return int(coerce_float(value))


# =============================================================================
# DESTINATIONS
# =============================================================================

def load_destinations(rates: pl.DataFrame | None = None) -> dict[str, Destination]:
    """
    Build Destination objects from the rate table.

    Destinations keep the order they first appear in the table; bands are
    ordered by the band column.
    """
    if rates is None:
        rates = load_rates()

    destinations = {}
    for key in rates["destination"].unique(maintain_order=True).to_list():
        rows = rates.filter(pl.col("destination") == key).sort("band")
        bands = tuple(
            RateBand(
                min_weight=row["weight_kg_min"],
                max_weight=row["weight_kg_max"],
                rate=row["rate"],
            )
            for row in rows.iter_rows(named=True)
        )
        destinations[key] = Destination(key=key, name=rows["destination_name"][0], bands=bands)
    return destinations


def get_destination(
    key: str,
    destinations: dict[str, Destination] | None = None
) -> Destination:
    """Look up a destination by key, raising UnknownDestinationError if missing."""
    if destinations is None:
        destinations = load_destinations()
    try:
        return destinations[key]
    except KeyError:
        raise UnknownDestinationError(key, list(destinations)) from None


# =============================================================================
# WEIGHTS
# =============================================================================

def compute_volumetric_weight_per_pallet(dimensions: Dimensions) -> int:
    """Volumetric weight of one pallet in kg, rounded up to the billable kg."""
    return math.ceil(dimensions.cubic_cm / DIM_FACTOR)


def compute_chargeable_weight(request: ShipmentRequest) -> float:
    """Greater of total volumetric and total actual weight."""
    total_volume = compute_volumetric_weight_per_pallet(request.dimensions) * request.pallet_count
    total_actual = request.actual_weight * request.pallet_count
    return max(total_volume, total_actual)


# =============================================================================
# RATE LOOKUP
# =============================================================================

def resolve_applicable_rate(destination: Destination, weight: float) -> float:
    """
    Per-kg rate for a chargeable weight.

    Bands are scanned in order and the first band with
    min_weight <= weight <= max_weight wins, so overlapping bands resolve
    to the earlier one. A weight outside every band (heavier than the last
    maximum, or lighter than the first minimum) is billed at the last
    band's rate.
    """
    if not destination.bands:
        raise ValueError(f"Destination '{destination.key}' has no rate bands")

    for band in destination.bands:
        if band.contains(weight):
            return band.rate
    return destination.bands[-1].rate


# =============================================================================
# TOTAL COST
# =============================================================================

def compute_additional_total(request: ShipmentRequest, strict: bool = STRICT_CHARGES) -> float:
    """
    Sum of free-text additional charges.

    Negative amounts are treated as discounts unless strict is set, in which
    case they raise InvalidChargeError.
    """
    if strict:
        negative = [c for c in request.additional_charges if c.amount < 0]
        if negative:
            names = ", ".join(repr(c.name) for c in negative)
            raise InvalidChargeError(f"{len(negative)} additional charge(s) are negative: {names}")
    return sum((c.amount for c in request.additional_charges), 0.0)


def compute_total_cost(
    request: ShipmentRequest,
    destinations: dict[str, Destination] | None = None,
    strict: bool = STRICT_CHARGES,
) -> QuoteResult:
    """
    Calculate the full cost breakdown for a single shipment.

    Args:
        request: Shipment snapshot
        destinations: Rate table (loaded from rates.csv if not provided)
        strict: Reject negative additional charges

    Returns:
        QuoteResult with derived weights, applied rate and costs
    """
    destination = get_destination(request.destination, destinations)

    volume_per_pallet = compute_volumetric_weight_per_pallet(request.dimensions)
    total_volume = volume_per_pallet * request.pallet_count
    total_actual = request.actual_weight * request.pallet_count
    chargeable = compute_chargeable_weight(request)

    rate = resolve_applicable_rate(destination, chargeable)
    freight = chargeable * rate
    delivery = sum(s.amount(request) for s in DELIVERY)
    clearance = CLEARANCE.amount(request)
    additional = compute_additional_total(request, strict=strict)

    return QuoteResult(
        destination_name=destination.name,
        volume_weight_per_pallet=volume_per_pallet,
        total_volume_weight=total_volume,
        total_actual_weight=total_actual,
        chargeable_weight=chargeable,
        applied_rate=rate,
        freight_cost=freight,
        delivery_cost=delivery,
        clearance_cost=clearance,
        additional_total=additional,
        total_cost=freight + delivery + clearance + additional,
    )


__all__ = [
    "coerce_float",
    "coerce_int",
    "load_destinations",
    "get_destination",
    "compute_volumetric_weight_per_pallet",
    "compute_chargeable_weight",
    "resolve_applicable_rate",
    "compute_additional_total",
    "compute_total_cost",
]
