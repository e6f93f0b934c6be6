"""
Surcharge Base Class

Shared base class for flat-fee charges added on top of the freight cost.

Every surcharge can be evaluated two ways:
    - scalar:  applies(request) / amount(request) for a single quote
    - batch:   conditions() / cost() as polars expressions over a DataFrame
Both paths must agree; the carrier tests check them against each other.
"""

from abc import ABC
import polars as pl


# =============================================================================
# BASE CLASS
# =============================================================================

class Surcharge(ABC):
    """
    Base class for all surcharges.

    Attributes:
        IDENTITY
            name            - Short code (e.g., "DELIVERY_4W", "CLEARANCE")
            label           - Human readable label for quote documents

        PRICING
            list_price      - Published amount before discount
            discount        - Decimal discount (0.10 = 10% off)

        EXCLUSIVITY (for mutually exclusive surcharges)
            exclusivity_group - Group name (e.g., "delivery")
            priority          - Rank within group (1 = highest, wins ties)
    """

    # -------------------------------------------------------------------------
    # IDENTITY
    # -------------------------------------------------------------------------
    name: str
    label: str = ""

    # -------------------------------------------------------------------------
    # PRICING
    # -------------------------------------------------------------------------
    list_price: float
    discount: float = 0.0

    # -------------------------------------------------------------------------
    # EXCLUSIVITY
    # -------------------------------------------------------------------------
    exclusivity_group: str | None = None
    priority: int | None = None

    # -------------------------------------------------------------------------
    # METHODS
    # -------------------------------------------------------------------------

    @classmethod
    def net_price(cls) -> float:
        """Price after discount."""
        return cls.list_price * (1 - cls.discount)

    @classmethod
    def cost(cls) -> float | pl.Expr:
        """Cost per shipment. Override to return an expression for variable costs."""
        return cls.net_price()

    @classmethod
    def conditions(cls) -> pl.Expr:
        """
        Polars expression for when this surcharge triggers.

        Default returns True (surcharge applies to every shipment).
        """
        return pl.lit(True)

    @classmethod
    def applies(cls, request) -> bool:
        """Scalar counterpart of conditions() for a single request."""
        return True

    @classmethod
    def amount(cls, request) -> float:
        """Amount charged on a single request (0.0 when it does not apply)."""
        if not cls.applies(request):
            return 0.0
        return cls.net_price()
