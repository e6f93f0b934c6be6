"""
Clearance Surcharge

Customs clearance at origin. Applies to every export shipment as a fixed
fee that already includes 7% VAT.
"""

from shared.surcharges import Surcharge

from ..data.reference.charges import CLEARANCE_CHARGE, CLEARANCE_VAT_RATE


class CLEARANCE(Surcharge):
    """Customs clearance - flat fee on every shipment."""

    name = "CLEARANCE"
    label = f"Clearance Charge (Include {CLEARANCE_VAT_RATE:.0%} VAT)"

    list_price = CLEARANCE_CHARGE
    discount = 0.0

    @classmethod
    def amount(cls, request) -> float:
        """The request carries the quoted figure; the table value is only the default."""
        return float(request.clearance_charge)
