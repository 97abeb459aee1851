"""
Pytest configuration and fixtures shared by the test suite.
"""
import io
import os

# Must be set before any Qt module is imported
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import fitz  # PyMuPDF
import pytest
from PyQt5.QtCore import Qt
from PyQt5.QtGui import QColor, QImage
from PyQt5.QtWidgets import QApplication

from docmark.core.document.models import DocumentHandle, PaginatedViewport
from docmark.core.export.base import encode_png

PAGE_WIDTH = 612
PAGE_HEIGHT = 792
ZOOM = 1.5


@pytest.fixture(scope="session", autouse=True)
def qapp():
    """One offscreen QApplication for the whole session."""
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def pdf_bytes():
    """Two US Letter pages with a line of text each."""
    doc = fitz.open()
    for i in range(2):
        page = doc.new_page(width=PAGE_WIDTH, height=PAGE_HEIGHT)
        page.insert_text((72, 72), f"Page {i + 1} body text", fontsize=12)
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def pdf_viewport():
    """Viewport of page 1 rendered at 1.5x."""
    return PaginatedViewport(
        page_width=PAGE_WIDTH,
        page_height=PAGE_HEIGHT,
        display_width=PAGE_WIDTH * ZOOM,
        display_height=PAGE_HEIGHT * ZOOM,
        current_page_index=0,
        total_pages=2,
    )


@pytest.fixture
def png_bytes():
    """A plain white 200x100 PNG."""
    image = QImage(200, 100, QImage.Format_ARGB32)
    image.fill(QColor(Qt.white))
    return encode_png(image)


@pytest.fixture
def docx_bytes():
    from docx import Document

    document = Document()
    document.add_heading("Quarterly Report", level=1)
    paragraph = document.add_paragraph("Revenue was ")
    paragraph.add_run("up").bold = True
    paragraph.add_run(" this quarter.")
    table = document.add_table(rows=2, cols=2)
    table.cell(0, 0).text = "Region"
    table.cell(0, 1).text = "Total"
    table.cell(1, 0).text = "North"
    table.cell(1, 1).text = "42"

    output = io.BytesIO()
    document.save(output)
    return output.getvalue()


@pytest.fixture
def xlsx_bytes():
    from openpyxl import Workbook

    workbook = Workbook()
    sheet = workbook.active
    sheet.append(["Name", "Score"])
    sheet.append(["Ada", 97])
    sheet.append(["Linus", None])
    second = workbook.create_sheet("Hidden")
    second.append(["not shown"])

    output = io.BytesIO()
    workbook.save(output)
    return output.getvalue()


@pytest.fixture
def make_handle():
    """Factory for DocumentHandle objects."""
    def _make(name, data, mime_type=""):
        return DocumentHandle(name=name, mime_type=mime_type, raw_bytes=data)
    return _make
