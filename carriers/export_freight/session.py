"""
Quote Session

Form state for one user editing one quote. Each setter replaces a single
field; `request` hands the engine an immutable ShipmentRequest snapshot, so
nothing the engine or presenter holds can change under it.

Raw form values go straight into the setters. Numeric fields are coerced
(non-numeric input becomes zero) and clamped at zero before they are
stored, so a negative count or weight never reaches the engine.
"""

from __future__ import annotations

from dataclasses import replace

from .data import CLEARANCE_CHARGE, DEFAULT_DESTINATION, DELIVERY_RATES, STRICT_CHARGES
from .errors import UnknownDestinationError
from .models import (
    AdditionalCharge,
    CompanyInfo,
    DeliveryCharge,
    Destination,
    Dimensions,
    QuoteResult,
    ShipmentRequest,
)
from .quote import coerce_float, coerce_int, compute_total_cost, load_destinations

DEFAULT_DIMENSIONS = Dimensions(length=135.0, width=110.0, height=110.0)
DEFAULT_PALLET_COUNT = 3


def _non_negative(value):
    """Clamp a coerced form value at zero."""
    return max(value, 0)


class QuoteSession:
    """Mutable builder producing immutable ShipmentRequest snapshots."""

    def __init__(
        self,
        destinations: dict[str, Destination] | None = None,
        strict: bool = STRICT_CHARGES,
    ):
        self.destinations = destinations if destinations is not None else load_destinations()
        self.strict = strict

        destination = DEFAULT_DESTINATION
        if destination not in self.destinations:
            destination = next(iter(self.destinations))

        self._dimensions = DEFAULT_DIMENSIONS
        self._pallet_count = DEFAULT_PALLET_COUNT
        self._actual_weight = 0.0
        self._destination = destination
        self._delivery = DeliveryCharge(rates=dict(DELIVERY_RATES))
        self._clearance = CLEARANCE_CHARGE
        self._additional: tuple[AdditionalCharge, ...] = ()
        self._company = CompanyInfo()

    # -------------------------------------------------------------------------
    # SNAPSHOTS
    # -------------------------------------------------------------------------

    @property
    def request(self) -> ShipmentRequest:
        return ShipmentRequest(
            dimensions=self._dimensions,
            pallet_count=self._pallet_count,
            actual_weight=self._actual_weight,
            destination=self._destination,
            delivery=self._delivery,
            clearance_charge=self._clearance,
            additional_charges=self._additional,
        )

    @property
    def company(self) -> CompanyInfo:
        return self._company

    @property
    def destination(self) -> Destination:
        return self.destinations[self._destination]

    def quote(self) -> QuoteResult:
        """Cost breakdown for the current snapshot."""
        return compute_total_cost(self.request, self.destinations, strict=self.strict)

    # -------------------------------------------------------------------------
    # COMPANY / CONTACT
    # -------------------------------------------------------------------------

    def set_company_name(self, value: str) -> None:
        self._company = replace(self._company, company_name=value or "")

    def set_contact_person(self, value: str) -> None:
        self._company = replace(self._company, contact_person=value or "")

    def set_contact_no(self, value: str) -> None:
        self._company = replace(self._company, contact_no=value or "")

    # -------------------------------------------------------------------------
    # SHIPMENT
    # -------------------------------------------------------------------------

    def set_length(self, value) -> None:
        self._dimensions = replace(self._dimensions, length=_non_negative(coerce_float(value)))

    def set_width(self, value) -> None:
        self._dimensions = replace(self._dimensions, width=_non_negative(coerce_float(value)))

    def set_height(self, value) -> None:
        self._dimensions = replace(self._dimensions, height=_non_negative(coerce_float(value)))

    def set_pallet_count(self, value) -> None:
        self._pallet_count = _non_negative(coerce_int(value))

    def set_actual_weight(self, value) -> None:
        self._actual_weight = _non_negative(coerce_float(value))

    def set_destination(self, key: str) -> None:
        if key not in self.destinations:
            raise UnknownDestinationError(key, list(self.destinations))
        self._destination = key

    # -------------------------------------------------------------------------
    # DELIVERY
    # -------------------------------------------------------------------------

    def set_delivery_required(self, required: bool) -> None:
        """Toggling delivery always clears the vehicle selection."""
        self._delivery = replace(self._delivery, required=bool(required), vehicle=None)

    def set_vehicle(self, vehicle: str | None) -> None:
        """Select a vehicle class; empty or unknown keys clear the selection."""
        if vehicle not in self._delivery.rates:
            vehicle = None
        self._delivery = replace(self._delivery, vehicle=vehicle)

    # -------------------------------------------------------------------------
    # ADDITIONAL CHARGES
    # -------------------------------------------------------------------------

    def add_charge(self, name: str = "", amount=0.0) -> int:
        """Append a charge line and return its index."""
        self._additional = self._additional + (
            AdditionalCharge(name=name or "", amount=coerce_float(amount)),
        )
        return len(self._additional) - 1

    def set_charge_name(self, index: int, name: str) -> None:
        self._replace_charge(index, name=name or "")

    def set_charge_amount(self, index: int, amount) -> None:
        self._replace_charge(index, amount=coerce_float(amount))

    def remove_charge(self, index: int) -> None:
        self._check_index(index)
        self._additional = self._additional[:index] + self._additional[index + 1:]

    def _replace_charge(self, index: int, **changes) -> None:
        self._check_index(index)
        charges = list(self._additional)
        charges[index] = replace(charges[index], **changes)
        self._additional = tuple(charges)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._additional):
            raise IndexError(f"No additional charge at index {index}")


__all__ = [
    "QuoteSession",
    "DEFAULT_DIMENSIONS",
    "DEFAULT_PALLET_COUNT",
]
