"""
Delivery Surcharges

Local truck delivery, billed as a flat amount per shipment by vehicle class.
The two vehicle classes are mutually exclusive: a shipment is delivered by
one truck or not at all.
"""

import polars as pl
from shared.surcharges import Surcharge

from ..data.reference.charges import DELIVERY_RATES, VEHICLE_LABELS


class _Delivery(Surcharge):
    """Common logic for delivery by a single vehicle class."""

    VEHICLE: str

    exclusivity_group = "delivery"

    @classmethod
    def conditions(cls) -> pl.Expr:
        return (pl.col("delivery_vehicle") == cls.VEHICLE).fill_null(False)

    @classmethod
    def applies(cls, request) -> bool:
        delivery = request.delivery
        return delivery.is_chargeable and delivery.vehicle == cls.VEHICLE

    @classmethod
    def amount(cls, request) -> float:
        """Use the rate carried on the request so quotes can override the table."""
        if not cls.applies(request):
            return 0.0
        return float(request.delivery.rates.get(cls.VEHICLE, cls.net_price()))


class DELIVERY_4W(_Delivery):
    """Delivery by 4-wheel truck."""

    name = "DELIVERY_4W"
    VEHICLE = "4wheel"
    label = f"Delivery Charge ({VEHICLE_LABELS[VEHICLE]})"

    list_price = DELIVERY_RATES[VEHICLE]
    discount = 0.0

    priority = 1


class DELIVERY_6W(_Delivery):
    """Delivery by 6-wheel truck."""

    name = "DELIVERY_6W"
    VEHICLE = "6wheel"
    label = f"Delivery Charge ({VEHICLE_LABELS[VEHICLE]})"

    list_price = DELIVERY_RATES[VEHICLE]
    discount = 0.0

    priority = 2
