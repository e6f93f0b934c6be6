"""
Quote Rendering

Renders a QuoteResult and its ShipmentRequest into a fixed-layout HTML quote
document with Jinja2. The quote number and timestamp come from injectable
sources so a render can be reproduced exactly.
"""

import itertools
import random
import string
from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable, Iterator

import jinja2

from ..data import CURRENCY_SYMBOL, QUOTE_VALIDITY_DAYS
from ..models import CompanyInfo, QuoteResult, ShipmentRequest
from ..surcharges import CLEARANCE, get_delivery_surcharge

TEMPLATES_DIR = Path(__file__).parent / "templates"

QUOTE_ID_LENGTH = 9
_QUOTE_ID_ALPHABET = string.ascii_uppercase + string.digits


# =============================================================================
# QUOTE NUMBERS
# =============================================================================

def random_quote_id() -> str:
    """Display-only quote number: 9 random uppercase letters and digits."""
    return "".join(random.choices(_QUOTE_ID_ALPHABET, k=QUOTE_ID_LENGTH))


def sequential_quote_ids(prefix: str = "Q", start: int = 1) -> Callable[[], str]:
    """Quote number source yielding Q000001, Q000002, ..."""
    counter: Iterator[int] = itertools.count(start)
    return lambda: f"{prefix}{next(counter):06d}"


# =============================================================================
# FORMATTING
# =============================================================================

def format_number(value: float) -> str:
    """Thousands separators, up to two decimals, no trailing zeros."""
    text = f"{value:,.2f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def format_money(value: float) -> str:
    if value < 0:
        return f"-{CURRENCY_SYMBOL}{format_number(-value)}"
    return f"{CURRENCY_SYMBOL}{format_number(value)}"


# =============================================================================
# RENDERER
# =============================================================================

@dataclass(frozen=True)
class RenderedQuote:
    """Output of one render: the HTML plus the identity it was stamped with."""

    quote_id: str
    generated_at: datetime
    html: str


class QuoteRenderer:
    """Render quote documents from engine output."""

    def __init__(
        self,
        templates_dir: Path = TEMPLATES_DIR,
        quote_id_factory: Callable[[], str] = random_quote_id,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.quote_id_factory = quote_id_factory
        self.clock = clock
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(templates_dir)),
            autoescape=True,
        )
        self.jinja_env.filters["number"] = format_number
        self.jinja_env.filters["money"] = format_money

    def render(
        self,
        request: ShipmentRequest,
        result: QuoteResult,
        company: CompanyInfo | None = None,
    ) -> RenderedQuote:
        """Render one quote. Every call draws a new quote number and timestamp."""
        quote_id = self.quote_id_factory()
        generated_at = self.clock()

        template_data = self._prepare_template_data(
            request, result, company or CompanyInfo(), quote_id, generated_at
        )
        html = self.jinja_env.get_template("quote.html").render(**template_data)

        return RenderedQuote(quote_id=quote_id, generated_at=generated_at, html=html)

    def _prepare_template_data(
        self,
        request: ShipmentRequest,
        result: QuoteResult,
        company: CompanyInfo,
        quote_id: str,
        generated_at: datetime,
    ) -> dict:
        valid_until = generated_at + timedelta(days=QUOTE_VALIDITY_DAYS)

        cost_lines = [(
            f"Freight Cost ({format_number(result.applied_rate)}/kg × "
            f"{format_number(result.chargeable_weight)}kg)",
            result.freight_cost,
        )]
        delivery = get_delivery_surcharge(request.delivery.vehicle)
        if delivery is not None and delivery.applies(request):
            cost_lines.append((delivery.label, result.delivery_cost))
        cost_lines.append((CLEARANCE.label, result.clearance_cost))
        cost_lines.extend((c.name, c.amount) for c in request.additional_charges)

        return {
            "company": company,
            "destination": result.destination_name,
            "quote_id": quote_id,
            "date": generated_at.strftime("%d/%m/%Y"),
            "valid_until": valid_until.strftime("%d/%m/%Y"),
            "validity_days": QUOTE_VALIDITY_DAYS,
            "dimensions": request.dimensions,
            "pallet_count": request.pallet_count,
            "actual_weight": request.actual_weight,
            "result": result,
            "cost_lines": cost_lines,
        }


__all__ = [
    "QuoteRenderer",
    "RenderedQuote",
    "random_quote_id",
    "sequential_quote_ids",
    "format_number",
    "format_money",
]
