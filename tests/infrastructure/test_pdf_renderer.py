"""Tests for PDF rendering of bill documents."""

from io import BytesIO

import pytest
from pypdf import PdfReader

from bizdesk.core.bill_document import BillDocument, Table, build_bill_document
from bizdesk.core.domain_types import Language
from bizdesk.core.errors import DocumentRenderError
from bizdesk.infrastructure import pdf_renderer
from bizdesk.infrastructure.pdf_renderer import (
    PdfBillRenderer, render_bill_pdf, resolve_font_path,
)

RECEIPT = {
    "bill_type": "receipt_only", "bill_number": "RCT-2026-00001",
    "payments": [{"payment_type": "cash", "amount": 500}],
}

unicode_font = pytest.mark.skipif(
    resolve_font_path() is None, reason="no Unicode TTF installed",
)


def _page_text(pdf: bytes) -> str:
    return PdfReader(BytesIO(pdf)).pages[0].extract_text()


@pytest.fixture
def no_system_fonts(monkeypatch):
    monkeypatch.setattr(pdf_renderer, "FONT_CANDIDATES", ())


def test_renders_pdf_bytes():
    doc = build_bill_document(
        RECEIPT, language="en", company={"name": "Auto Ltd", "phone": "03-555"}, currency="ILS ",
    )
    pdf = render_bill_pdf(doc)
    assert pdf.startswith(b"%PDF")


def test_english_text_is_extractable(no_system_fonts):
    doc = build_bill_document(RECEIPT, language="en", currency="ILS ")
    text = _page_text(render_bill_pdf(doc))
    assert "Receipt" in text
    assert "RCT-2026-00001" in text
    assert "ILS 500.00" in text


def test_long_tables_break_pages():
    doc = BillDocument(
        title="Receipt", language=Language.EN, rtl=False, company={},
        tables=[Table(headers=["a", "b"], rows=[[str(i), "x"] for i in range(200)])],
    )
    renderer = PdfBillRenderer()
    assert renderer.render(doc).startswith(b"%PDF")
    assert renderer.c.getPageNumber() > 2


@unicode_font
def test_hebrew_title_is_drawn_with_real_glyphs():
    doc = build_bill_document(RECEIPT, language="he")
    text = _page_text(render_bill_pdf(doc))
    assert "קבלה" in text or "קבלה"[::-1] in text
    assert "■" not in text


@unicode_font
def test_shekel_sign_survives_in_english_documents():
    doc = build_bill_document(RECEIPT, language="en")
    assert "₪500.00" in _page_text(render_bill_pdf(doc))


def test_hebrew_without_unicode_font_is_refused(no_system_fonts):
    doc = build_bill_document(RECEIPT, language="he")
    with pytest.raises(DocumentRenderError, match="Unicode font"):
        render_bill_pdf(doc)


def test_shekel_sign_without_unicode_font_is_refused(no_system_fonts):
    doc = build_bill_document(RECEIPT, language="en", currency="₪")
    with pytest.raises(DocumentRenderError, match="Unicode font"):
        render_bill_pdf(doc)


def test_rtl_text_is_reordered_for_drawing():
    renderer = PdfBillRenderer()
    renderer.rtl = True
    assert renderer.visual("שלום") == "םולש"
    assert renderer.visual("RCT-1") == "RCT-1"


def test_arabic_letters_are_joined():
    renderer = PdfBillRenderer()
    renderer.rtl = True
    drawn = renderer.visual("إيصال")
    assert drawn != "إيصال"[::-1]
    assert len(drawn) <= len("إيصال")


def test_configured_font_wins(no_system_fonts):
    assert resolve_font_path("/fonts/custom.ttf") == "/fonts/custom.ttf"
    assert resolve_font_path(None) is None


def test_missing_font_file_raises_render_error():
    doc = build_bill_document({"bill_type": "general", "bill_amount": 100}, language="en")
    with pytest.raises(DocumentRenderError):
        render_bill_pdf(doc, font_path="/nonexistent/font.ttf")
