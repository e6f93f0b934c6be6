"""
Unit Tests for Quote Rendering and PDF Export

Rendering uses the real Jinja2 template. Export swaps WeasyPrint for a fake
module so no native libraries are needed.

Run with: pytest carriers/export_freight/tests/test_report.py -v
"""

import sys
import types
from datetime import datetime

import pytest

from carriers.export_freight.errors import QuoteExportError
from carriers.export_freight.models import AdditionalCharge, CompanyInfo
from carriers.export_freight.report import (
    QuoteRenderer,
    RenderedQuote,
    export_filename,
    export_pdf,
    export_pdf_bytes,
    format_money,
    format_number,
    random_quote_id,
    sequential_quote_ids,
)
from carriers.export_freight.session import QuoteSession


FIXED_TIME = datetime(2026, 10, 19, 14, 30, 5)


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def renderer():
    return QuoteRenderer(quote_id_factory=sequential_quote_ids(), clock=lambda: FIXED_TIME)


@pytest.fixture
def session():
    session = QuoteSession()
    session.set_company_name("Siam Export Co.")
    session.set_contact_person("K. Somchai")
    session.set_contact_no("02-123-4567")
    return session


@pytest.fixture
def rendered(renderer, session):
    return renderer.render(session.request, session.quote(), session.company)


@pytest.fixture
def fake_weasyprint(monkeypatch):
    """Stand-in for the weasyprint module recording what it was asked to do."""
    calls = {}

    class HTML:
        def __init__(self, string):
            calls["html"] = string

        def write_pdf(self, stylesheets=None, **options):
            calls["stylesheets"] = stylesheets
            calls["options"] = options
            return b"%PDF-1.7 fake"

    class CSS:
        def __init__(self, string):
            self.string = string

    module = types.ModuleType("weasyprint")
    module.HTML = HTML
    module.CSS = CSS
    monkeypatch.setitem(sys.modules, "weasyprint", module)
    return calls


# =============================================================================
# QUOTE NUMBER TESTS
# =============================================================================

class TestQuoteIds:
    """Tests for quote number sources."""

    def test_random_quote_id_shape(self):
        quote_id = random_quote_id()
        assert len(quote_id) == 9
        assert quote_id.isalnum()
        assert quote_id == quote_id.upper()

    def test_sequential_quote_ids(self):
        next_id = sequential_quote_ids()
        assert [next_id(), next_id(), next_id()] == ["Q000001", "Q000002", "Q000003"]

    def test_sequential_prefix_and_start(self):
        next_id = sequential_quote_ids(prefix="EX-", start=42)
        assert next_id() == "EX-000042"


# =============================================================================
# FORMATTING TESTS
# =============================================================================

class TestFormatting:

    @pytest.mark.parametrize("value,text", [
        (221949, "221,949"),
        (227299.0, "227,299"),
        (272.25, "272.25"),
        (0.5, "0.5"),
        (0, "0"),
        (-0.0, "0"),
    ])
    def test_format_number(self, value, text):
        assert format_number(value) == text

    def test_format_money(self):
        assert format_money(5350) == "฿5,350"
        assert format_money(-1299) == "-฿1,299"


# =============================================================================
# RENDER TESTS
# =============================================================================

class TestRender:
    """Tests for the HTML quote document."""

    def test_identity_from_injected_sources(self, rendered):
        assert rendered.quote_id == "Q000001"
        assert rendered.generated_at == FIXED_TIME

    def test_each_render_gets_new_id(self, renderer, session):
        first = renderer.render(session.request, session.quote(), session.company)
        second = renderer.render(session.request, session.quote(), session.company)
        assert first.quote_id != second.quote_id

    def test_header(self, rendered):
        html = rendered.html
        assert "Export Shipping Cost Quote" in html
        assert "Siam Export Co." in html
        assert "K. Somchai" in html
        assert "02-123-4567" in html
        assert "Switzerland" in html
        assert "Q000001" in html
        assert "19/10/2026" in html

    def test_weights_and_costs(self, rendered):
        html = rendered.html
        assert "Length: 135cm" in html
        assert "273 kg" in html
        assert "819 kg" in html
        assert "Freight Cost (271/kg × 819kg):" in html
        assert "฿221,949" in html
        assert "Clearance Charge (Include 7% VAT):" in html
        assert "฿5,350" in html
        assert "฿227,299" in html

    def test_validity_footer(self, rendered):
        assert "Rate validity: 30 days from quote date" in rendered.html
        assert "18/11/2026" in rendered.html
        assert "exclusive of VAT" in rendered.html

    def test_no_delivery_line_when_not_required(self, rendered):
        assert "Delivery Charge" not in rendered.html

    def test_delivery_line_when_selected(self, renderer, session):
        session.set_delivery_required(True)
        session.set_vehicle("6wheel")
        rendered = renderer.render(session.request, session.quote(), session.company)
        assert "Delivery Charge (6 Wheels):" in rendered.html
        assert "฿6,500" in rendered.html
        assert "฿233,799" in rendered.html

    def test_no_delivery_line_without_vehicle(self, renderer, session):
        session.set_delivery_required(True)
        rendered = renderer.render(session.request, session.quote(), session.company)
        assert "Delivery Charge" not in rendered.html

    def test_additional_charge_lines(self, renderer, session):
        session.add_charge("Fumigation", 1200)
        session.add_charge("Discount", -500)
        rendered = renderer.render(session.request, session.quote(), session.company)
        assert "Fumigation:" in rendered.html
        assert "฿1,200" in rendered.html
        assert "-฿500" in rendered.html
        assert "฿227,999" in rendered.html

    def test_user_text_is_escaped(self, renderer, session):
        session.set_company_name("<script>alert(1)</script>")
        rendered = renderer.render(session.request, session.quote(), session.company)
        assert "<script>alert" not in rendered.html
        assert "&lt;script&gt;" in rendered.html

    def test_company_optional(self, renderer, session):
        rendered = renderer.render(session.request, session.quote())
        assert "Company Name:" in rendered.html


# =============================================================================
# EXPORT TESTS
# =============================================================================

class TestExport:
    """Tests for PDF export."""

    def test_filename_from_timestamp(self, rendered):
        assert export_filename(rendered) == "shipping-quote-20261019T143005.pdf"

    def test_export_bytes(self, rendered, fake_weasyprint):
        assert export_pdf_bytes(rendered) == b"%PDF-1.7 fake"
        assert fake_weasyprint["html"] == rendered.html
        assert "size: A4 portrait" in fake_weasyprint["stylesheets"][0].string
        assert fake_weasyprint["options"]["dpi"] == 192

    def test_export_writes_file(self, rendered, fake_weasyprint, tmp_path):
        path = export_pdf(rendered, tmp_path / "quotes")
        assert path == tmp_path / "quotes" / "shipping-quote-20261019T143005.pdf"
        assert path.read_bytes() == b"%PDF-1.7 fake"

    def test_missing_exporter(self, rendered, monkeypatch, tmp_path):
        monkeypatch.setitem(sys.modules, "weasyprint", None)
        with pytest.raises(QuoteExportError, match="unavailable"):
            export_pdf(rendered, tmp_path)
        assert list(tmp_path.iterdir()) == []

    def test_exporter_failure_keeps_quote(self, rendered, fake_weasyprint, monkeypatch):
        def broken_write_pdf(self, **options):
            raise RuntimeError("cairo exploded")

        monkeypatch.setattr(sys.modules["weasyprint"].HTML, "write_pdf", broken_write_pdf)
        html_before = rendered.html
        with pytest.raises(QuoteExportError, match="cairo exploded"):
            export_pdf_bytes(rendered)
        assert rendered.html == html_before
        assert rendered.quote_id == "Q000001"

    def test_repeated_exports_independent(self, rendered, fake_weasyprint, tmp_path):
        first = export_pdf(rendered, tmp_path)
        second = export_pdf(rendered, tmp_path)
        assert first == second
        assert first.read_bytes() == b"%PDF-1.7 fake"

    def test_rendered_quote_is_frozen(self):
        quote = RenderedQuote(quote_id="X", generated_at=FIXED_TIME, html="")
        with pytest.raises(AttributeError):
            quote.html = "changed"
