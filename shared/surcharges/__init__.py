"""
Shared Surcharges

Base class for carrier surcharges.
"""

from .base import Surcharge

__all__ = [
    "Surcharge",
]
