"""PDF Renderer - draws a BillDocument onto A4 pages with the reportlab canvas.

Invariants:
    - render() returns complete PDF bytes or raises DocumentRenderError
    - Right-to-left documents are right-aligned; left-to-right ones left-aligned
    - A new page starts whenever the cursor would cross the bottom margin
    - Hebrew and Arabic runs are drawn in visual order (bidi reordering, Arabic
      letters reshaped into their joined forms)
    - A document is never drawn with a font that lacks its glyphs: without a
      Unicode TTF only cp1252 text renders, anything else raises DocumentRenderError

Design Decisions:
    - A configured font path wins; otherwise common system TTFs are tried
"""

import logging
import os
import unicodedata
from io import BytesIO
from typing import Iterator

import arabic_reshaper
from bidi.algorithm import get_display
from reportlab.lib.colors import HexColor
from reportlab.lib.pagesizes import A4
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen import canvas

from bizdesk.core.bill_document import BillDocument, Table
from bizdesk.core.errors import DocumentRenderError

logger = logging.getLogger(__name__)

W, H = A4
MARGIN = 45
CONTENT_W = W - 2 * MARGIN
LEADING = 16

NAVY = HexColor("#1a2941")
GREY = HexColor("#666666")
LIGHT = HexColor("#f8f9fa")

BUILTIN_FONT = "Helvetica"
# Encoding of the built-in Type 1 fonts
_BUILTIN_ENCODING = "cp1252"

FONT_CANDIDATES = (
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/TTF/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/freefont/FreeSans.ttf",
    "/usr/share/fonts/gnu-free/FreeSans.ttf",
    "/Library/Fonts/Arial Unicode.ttf",
    "C:\\Windows\\Fonts\\arial.ttf",
)


def resolve_font_path(configured: str | None = None) -> str | None:
    """Font file to embed: the configured one, else the first installed candidate."""
    if configured:
        return configured
    for candidate in FONT_CANDIDATES:
        if os.path.isfile(candidate):
            return candidate
    return None


def register_font(path: str | None) -> str:
    """Register a TTF for non-Latin scripts; Helvetica without one."""
    if not path:
        return BUILTIN_FONT
    name = f"BizDesk-{os.path.splitext(os.path.basename(path))[0]}"
    if name not in pdfmetrics.getRegisteredFontNames():
        pdfmetrics.registerFont(TTFont(name, path))
    return name


def _is_rtl_char(ch: str) -> bool:
    return unicodedata.bidirectional(ch) in ("R", "AL")


def document_text(doc: BillDocument) -> Iterator[str]:
    """Every string render() draws."""
    yield doc.title
    yield from (str(value) for value in doc.company.values() if value)
    for section in doc.sections:
        yield section.title
        for label, value in section.items:
            yield f"{label}: {value}"
    for table in doc.tables:
        if table.title:
            yield table.title
        yield from table.headers
        for row in table.rows:
            yield from (str(cell) for cell in row)
    for row in doc.summary:
        yield f"{row.label}: {row.value}"
    yield from doc.signature_labels
    yield doc.footer


def check_font_coverage(doc: BillDocument, font: str) -> None:
    """Raise DocumentRenderError when the built-in font cannot draw doc."""
    if font != BUILTIN_FONT:
        return
    if doc.rtl:
        raise DocumentRenderError(
            f"No Unicode font available for '{doc.language.value}' documents; set PDF_FONT_PATH",
        )
    for text in document_text(doc):
        try:
            text.encode(_BUILTIN_ENCODING)
        except UnicodeEncodeError as e:
            raise DocumentRenderError(
                f"'{text}' needs a Unicode font; set PDF_FONT_PATH",
            ) from e


class PdfBillRenderer:
    """Stateful drawing cursor over one document. Use render() for one-shot output."""

    def __init__(self, font: str = BUILTIN_FONT):
        self.font = font
        self.c = None
        self.y = H - MARGIN
        self.rtl = False

    # ─── Primitives ──────────────────────────────────────────────

    def visual(self, text: str) -> str:
        """Logical-order text as it must be laid out left to right on the page."""
        if not any(_is_rtl_char(ch) for ch in text):
            return text
        return get_display(arabic_reshaper.reshape(text), base_dir="R" if self.rtl else "L")

    def _text(self, text: str, size: int = 10, color=NAVY, x: float | None = None) -> None:
        self.c.setFont(self.font, size)
        self.c.setFillColor(color)
        text = self.visual(text)
        if self.rtl:
            self.c.drawRightString(W - MARGIN if x is None else x, self.y, text)
        else:
            self.c.drawString(MARGIN if x is None else x, self.y, text)

    def _ensure_space(self, needed: float) -> None:
        if self.y - needed < MARGIN:
            self.c.showPage()
            self.y = H - MARGIN

    def _rule(self) -> None:
        self.c.setStrokeColor(NAVY)
        self.c.setLineWidth(0.8)
        self.c.line(MARGIN, self.y, W - MARGIN, self.y)
        self.y -= LEADING

    def _column_x(self, index: int, count: int) -> float:
        width = CONTENT_W / count
        if self.rtl:
            return W - MARGIN - index * width
        return MARGIN + index * width

    # ─── Blocks ──────────────────────────────────────────────────

    def _header(self, doc: BillDocument) -> None:
        company = doc.company
        if company.get("name"):
            self._text(company["name"], size=14)
            self.y -= LEADING
        for key in ("address", "phone", "tax_number"):
            if company.get(key):
                self._text(str(company[key]), size=9, color=GREY)
                self.y -= 12
        self.y -= 6
        self._text(doc.title, size=20)
        self.y -= LEADING
        self._rule()

    def _sections(self, doc: BillDocument) -> None:
        for section in doc.sections:
            self._ensure_space(LEADING * (len(section.items) + 2))
            self._text(section.title, size=12)
            self.y -= LEADING
            for label, value in section.items:
                self._text(f"{label}: {value}", size=10, color=GREY)
                self.y -= 14
            self.y -= 6

    def _table(self, table: Table) -> None:
        count = max(len(table.headers), 1)
        self._ensure_space(LEADING * 3)
        if table.title:
            self._text(table.title, size=12)
            self.y -= LEADING
        self.c.setFillColor(LIGHT)
        self.c.rect(MARGIN, self.y - 4, CONTENT_W, LEADING, fill=1, stroke=0)
        for i, header in enumerate(table.headers):
            self._text(header, size=9, x=self._column_x(i, count))
        self.y -= LEADING
        for row in table.rows:
            self._ensure_space(LEADING)
            for i, cell in enumerate(row):
                self._text(str(cell), size=9, color=GREY, x=self._column_x(i, count))
            self.y -= 14
        self.y -= 10

    def _summary(self, doc: BillDocument) -> None:
        if not doc.summary:
            return
        self._ensure_space(LEADING * (len(doc.summary) + 1))
        self._rule()
        for row in doc.summary:
            self._text(f"{row.label}: {row.value}", size=12 if row.emphasis else 10)
            self.y -= LEADING

    def _signature(self, doc: BillDocument) -> None:
        if not doc.signature:
            return
        self._ensure_space(LEADING * 4)
        self.y -= LEADING * 2
        half = CONTENT_W / 2
        for i, label in enumerate(doc.signature_labels):
            x = MARGIN + i * half
            self.c.setStrokeColor(GREY)
            self.c.line(x, self.y + 12, x + half - 20, self.y + 12)
            self.c.setFont(self.font, 9)
            self.c.setFillColor(GREY)
            self.c.drawString(x, self.y, self.visual(label))
        self.y -= LEADING

    def _footer(self, doc: BillDocument) -> None:
        if doc.footer:
            self.c.setFont(self.font, 8)
            self.c.setFillColor(GREY)
            self.c.drawCentredString(W / 2, MARGIN / 2, self.visual(doc.footer))

    # ─── Entry point ─────────────────────────────────────────────

    def render(self, doc: BillDocument) -> bytes:
        buf = BytesIO()
        try:
            self.c = canvas.Canvas(buf, pagesize=A4)
            self.c.setTitle(doc.title)
            self.y = H - MARGIN
            self.rtl = doc.rtl
            self._header(doc)
            self._sections(doc)
            for table in doc.tables:
                self._table(table)
            self._summary(doc)
            self._signature(doc)
            self._footer(doc)
            self.c.showPage()
            self.c.save()
        except Exception as e:
            logger.error(f"PDF rendering failed: {e}", exc_info=True)
            raise DocumentRenderError(f"Failed to render {doc.title}: {e}") from e
        return buf.getvalue()


def render_bill_pdf(doc: BillDocument, font_path: str | None = None) -> bytes:
    """Render doc to PDF bytes with font_path, or the first installed Unicode font."""
    path = resolve_font_path(font_path)
    try:
        font = register_font(path)
    except Exception as e:
        raise DocumentRenderError(f"Cannot load font {path}: {e}") from e
    check_font_coverage(doc, font)
    logger.debug(f"Rendering {doc.title} with font {font}")
    return PdfBillRenderer(font).render(doc)
