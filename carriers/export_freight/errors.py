"""
Export Freight Exceptions

Input coercion means almost nothing in the calculator can fail; these cover
the few cases that must be reported instead of silently zeroed.
"""


class QuoteError(Exception):
    """Base class for export freight quoting errors."""


class UnknownDestinationError(QuoteError, KeyError):
    """Destination key is not in the rate table."""

    def __init__(self, key: str, known: list[str] | None = None):
        self.key = key
        self.known = sorted(known or [])
        super().__init__(key)

    def __str__(self) -> str:
        return f"Unknown destination '{self.key}'. Known destinations: {', '.join(self.known) or 'none'}"


class InvalidChargeError(QuoteError, ValueError):
    """Charge rejected: unsupported delivery vehicle, or a negative
    additional charge in strict mode."""


class QuoteExportError(QuoteError, RuntimeError):
    """PDF export could not be loaded or failed while writing."""


__all__ = [
    "QuoteError",
    "UnknownDestinationError",
    "InvalidChargeError",
    "QuoteExportError",
]
