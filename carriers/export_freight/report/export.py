"""
Quote PDF Export

Converts a RenderedQuote to an A4 PDF with WeasyPrint. WeasyPrint needs
native Pango/Cairo libraries, so it is imported only when an export is
requested; a missing or broken install surfaces as QuoteExportError and
leaves the rendered quote untouched.
"""

import importlib
import logging
from pathlib import Path

from ..errors import QuoteExportError
from .render import RenderedQuote

logger = logging.getLogger(__name__)

# A4 portrait, no margin: the template carries its own padding
PAGE_CSS = """
    @page {
        size: A4 portrait;
        margin: 0;
    }
    .quote {
        page-break-inside: avoid;
    }
"""

EXPORT_DPI = 192  # 2x CSS pixel density
JPEG_QUALITY = 98

FILENAME_PREFIX = "shipping-quote"


def export_filename(rendered: RenderedQuote) -> str:
    """shipping-quote-<timestamp>.pdf, timestamp in ISO-8601 basic format (no colons)."""
    stamp = rendered.generated_at.strftime("%Y%m%dT%H%M%S")
    return f"{FILENAME_PREFIX}-{stamp}.pdf"


def _load_weasyprint():
    try:
        return importlib.import_module("weasyprint")
    except (ImportError, OSError) as e:
        # OSError: Python package present but native libraries missing
        logger.exception("Could not load WeasyPrint for PDF export")
        raise QuoteExportError(f"PDF export is unavailable: {e}") from e


def export_pdf_bytes(rendered: RenderedQuote) -> bytes:
    """Render the quote HTML to PDF bytes."""
    weasyprint = _load_weasyprint()
    try:
        html_doc = weasyprint.HTML(string=rendered.html)
        return html_doc.write_pdf(
            stylesheets=[weasyprint.CSS(string=PAGE_CSS)],
            dpi=EXPORT_DPI,
            jpeg_quality=JPEG_QUALITY,
        )
    except Exception as e:
        logger.exception("PDF export failed for quote %s", rendered.quote_id)
        raise QuoteExportError(f"PDF export failed for quote {rendered.quote_id}: {e}") from e


def export_pdf(rendered: RenderedQuote, directory: Path | str = ".") -> Path:
    """
    Write the quote PDF into a directory.

    Args:
        rendered: Output of QuoteRenderer.render
        directory: Target directory (created if missing)

    Returns:
        Path of the written PDF
    """
    pdf_bytes = export_pdf_bytes(rendered)

    path = Path(directory) / export_filename(rendered)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(pdf_bytes)
    except OSError as e:
        logger.exception("Could not write %s", path)
        raise QuoteExportError(f"Could not write {path}: {e}") from e

    logger.info("Exported quote %s to %s", rendered.quote_id, path)
    return path


__all__ = [
    "export_pdf",
    "export_pdf_bytes",
    "export_filename",
    "PAGE_CSS",
]
