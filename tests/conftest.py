# tests/conftest.py
# ============================================================
# Shared Test Fixtures
# ============================================================
# Builds real documents in memory so extraction runs against
# genuine file formats:
#   - text PDFs: minimal hand-assembled PDF with a Helvetica text layer
#   - image PDFs: Pillow-saved PDFs with no text layer
#   - docx / xlsx: python-docx / openpyxl documents
#   - xls: BIFF workbooks written with xlwt
# Rasterization goes through FakeRenderer (no poppler needed).
# ============================================================

import datetime
import io
from typing import Optional

import pytest
import xlwt
from docx import Document
from openpyxl import Workbook
from PIL import Image

from docingest.errors import PageRenderError
from docingest.pdf.renderer import PageRenderer

LONG_TEXT = (
    "Quarterly records review: all incoming correspondence was logged, "
    "classified and forwarded to the responsible departments within two working days."
)


# ============================================================
# Document Builders
# ============================================================

def _pdf_escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def make_text_pdf(page_texts: list[str]) -> bytes:
    """Assemble a PDF with one line of Helvetica text per page."""
    page_ids = [4 + 2 * i for i in range(len(page_texts))]
    objects: dict[int, str] = {
        1: "<< /Type /Catalog /Pages 2 0 R >>",
        2: (
            f"<< /Type /Pages /Kids [{' '.join(f'{p} 0 R' for p in page_ids)}] "
            f"/Count {len(page_texts)} >>"
        ),
        3: "<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    }
    for page_id, text in zip(page_ids, page_texts):
        stream = f"BT /F1 12 Tf 72 720 Td ({_pdf_escape(text)}) Tj ET"
        objects[page_id] = (
            "<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
            f"/Resources << /Font << /F1 3 0 R >> >> /Contents {page_id + 1} 0 R >>"
        )
        objects[page_id + 1] = f"<< /Length {len(stream)} >>\nstream\n{stream}\nendstream"

    out = bytearray(b"%PDF-1.4\n")
    offsets = {}
    for num in sorted(objects):
        offsets[num] = len(out)
        out += f"{num} 0 obj\n{objects[num]}\nendobj\n".encode("latin-1")

    xref_at = len(out)
    size = max(objects) + 1
    out += f"xref\n0 {size}\n".encode()
    out += b"0000000000 65535 f \n"
    for num in range(1, size):
        out += f"{offsets[num]:010d} 00000 n \n".encode()
    out += f"trailer\n<< /Size {size} /Root 1 0 R >>\nstartxref\n{xref_at}\n%%EOF\n".encode()
    return bytes(out)


def make_image_pdf(page_count: int) -> bytes:
    """A scanned-style PDF: every page is a bitmap, no text layer."""
    pages = [Image.new("RGB", (200, 260), color=(255, 255 - i * 20, 255)) for i in range(page_count)]
    buffer = io.BytesIO()
    pages[0].save(buffer, format="PDF", save_all=True, append_images=pages[1:])
    return buffer.getvalue()


def make_docx(blocks: list) -> bytes:
    """Blocks are strings (paragraphs) or lists of rows (tables)."""
    document = Document()
    for block in blocks:
        if isinstance(block, str):
            document.add_paragraph(block)
        else:
            table = document.add_table(rows=len(block), cols=len(block[0]))
            for r, row in enumerate(block):
                for c, value in enumerate(row):
                    table.cell(r, c).text = value
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


def make_xlsx(sheets: dict[str, list[list]]) -> bytes:
    workbook = Workbook()
    workbook.remove(workbook.active)
    for name, rows in sheets.items():
        sheet = workbook.create_sheet(name)
        for row in rows:
            sheet.append(row)
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def make_xls(sheets: dict[str, list[list]]) -> bytes:
    """Legacy BIFF workbook; None leaves a cell unwritten, dates get a date format."""
    workbook = xlwt.Workbook()
    date_style = xlwt.easyxf(num_format_str="YYYY-MM-DD")
    for name, rows in sheets.items():
        sheet = workbook.add_sheet(name)
        for r, row in enumerate(rows):
            for c, value in enumerate(row):
                if value is None:
                    continue
                if isinstance(value, datetime.date):
                    sheet.write(r, c, value, date_style)
                else:
                    sheet.write(r, c, value)
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


# ============================================================
# Fake Renderer
# ============================================================

class FakeRenderer(PageRenderer):
    """Draws a flat page per call; optionally fails chosen pages."""

    def __init__(self, fail_pages: Optional[set[int]] = None):
        self.fail_pages = fail_pages or set()
        self.calls: list[tuple[int, float]] = []

    def backend_id(self) -> str:
        return "fake"

    def render_page(self, pdf_data: bytes, page_num: int, scale: float) -> Image.Image:
        self.calls.append((page_num, scale))
        if page_num in self.fail_pages:
            raise PageRenderError(page_num, "no drawing surface")
        shade = (page_num * 40) % 256
        return Image.new("RGB", (int(100 * scale), int(130 * scale)), color=(shade, shade, shade))


# ============================================================
# Fixtures
# ============================================================

@pytest.fixture
def fake_renderer():
    return FakeRenderer()


@pytest.fixture
def text_pdf():
    return make_text_pdf([LONG_TEXT, "Second page: action items follow."])


@pytest.fixture
def image_pdf():
    return make_image_pdf(3)


@pytest.fixture
def zero_page_pdf():
    return make_text_pdf([])
