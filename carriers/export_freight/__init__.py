"""
Export Freight Carrier Module

Export shipping cost quotation for palletised export freight: chargeable
weight, weight-banded rates, delivery and clearance charges, and printable
quote documents.
"""

from .calculate_costs import calculate_costs
from .quote import compute_total_cost
from .session import QuoteSession
from .version import VERSION

__all__ = ["calculate_costs", "compute_total_cost", "QuoteSession", "VERSION"]
