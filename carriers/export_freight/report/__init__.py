"""
Export Freight Quote Report

Renders quotes to HTML and exports them to PDF.

Usage:
    from carriers.export_freight.report import QuoteRenderer, export_pdf
    rendered = QuoteRenderer().render(request, result, company)
    path = export_pdf(rendered, "quotes/")
"""

from .render import (
    QuoteRenderer,
    RenderedQuote,
    random_quote_id,
    sequential_quote_ids,
    format_number,
    format_money,
)
from .export import export_pdf, export_pdf_bytes, export_filename

__all__ = [
    "QuoteRenderer",
    "RenderedQuote",
    "random_quote_id",
    "sequential_quote_ids",
    "format_number",
    "format_money",
    "export_pdf",
    "export_pdf_bytes",
    "export_filename",
]
