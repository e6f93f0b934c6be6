"""
Export Freight Data Model

Immutable value objects passed between the form, the cost engine and the
quote presenter. Nothing here is persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from .data.reference.charges import CLEARANCE_CHARGE, DELIVERY_RATES
from .errors import InvalidChargeError


@dataclass(frozen=True)
class Dimensions:
    """Pallet dimensions in centimeters."""

    length: float
    width: float
    height: float

    @property
    def cubic_cm(self) -> float:
        return self.length * self.width * self.height


@dataclass(frozen=True)
class RateBand:
    """Weight range (inclusive, kg) billed at a flat per-kg rate."""

    min_weight: float
    max_weight: float
    rate: float

    def contains(self, weight: float) -> bool:
        return self.min_weight <= weight <= self.max_weight


@dataclass(frozen=True)
class Destination:
    """Destination with its ordered rate bands (lightest band first)."""

    key: str
    name: str
    bands: tuple[RateBand, ...]


@dataclass(frozen=True)
class DeliveryCharge:
    """
    Local delivery by truck.

    The vehicle only matters when delivery is required. A required delivery
    with no vehicle selected costs nothing.

    Only the vehicle classes in DELIVERY_RATES ("4wheel", "6wheel") can be
    selected; each has its own delivery surcharge. `rates` may re-price
    those classes but cannot add new ones.
    """

    required: bool = False
    vehicle: str | None = None
    rates: Mapping[str, float] = field(
        default_factory=lambda: MappingProxyType(dict(DELIVERY_RATES))
    )

    def __post_init__(self):
        if self.vehicle and self.vehicle not in DELIVERY_RATES:
            raise InvalidChargeError(
                f"Unsupported delivery vehicle '{self.vehicle}'. "
                f"Supported vehicles: {', '.join(DELIVERY_RATES)}"
            )

    @property
    def is_chargeable(self) -> bool:
        return self.required and bool(self.vehicle)


@dataclass(frozen=True)
class AdditionalCharge:
    """Free-text charge line. Amount may be zero or negative (a discount)."""

    name: str = ""
    amount: float = 0.0


@dataclass(frozen=True)
class CompanyInfo:
    """Customer details printed on the quote document."""

    company_name: str = ""
    contact_person: str = ""
    contact_no: str = ""


@dataclass(frozen=True)
class ShipmentRequest:
    """Everything the cost engine needs for one quote."""

    dimensions: Dimensions
    pallet_count: int
    actual_weight: float  # kg per pallet
    destination: str
    delivery: DeliveryCharge = field(default_factory=DeliveryCharge)
    clearance_charge: float = CLEARANCE_CHARGE
    additional_charges: tuple[AdditionalCharge, ...] = ()


@dataclass(frozen=True)
class QuoteResult:
    """Derived weights and cost breakdown for one ShipmentRequest."""

    destination_name: str
    volume_weight_per_pallet: int
    total_volume_weight: float
    total_actual_weight: float
    chargeable_weight: float
    applied_rate: float
    freight_cost: float
    delivery_cost: float
    clearance_cost: float
    additional_total: float
    total_cost: float

    @property
    def uses_volume_weight(self) -> bool:
        return self.total_volume_weight > self.total_actual_weight


__all__ = [
    "Dimensions",
    "RateBand",
    "Destination",
    "DeliveryCharge",
    "AdditionalCharge",
    "CompanyInfo",
    "ShipmentRequest",
    "QuoteResult",
]
