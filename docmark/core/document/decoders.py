"""
Decoder collaborators: PDF page access and document-to-HTML conversion.
"""
import html
import io
import logging
from typing import Iterable, List, Optional, Sequence

import fitz  # PyMuPDF
from PyQt5.QtGui import QImage

from docmark.core.errors import DecodeError, RenderError

logger = logging.getLogger(__name__)

NO_CONTENT_HTML = "<p>No content available.</p>"

OLE_SIGNATURE = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"
ZIP_SIGNATURE = b"PK\x03\x04"


class PdfDecoder:
    """Handles PDF document loading and page rasterization."""

    def __init__(self):
        self.doc: Optional[fitz.Document] = None
        self.total_pages: int = 0

    def load_pdf(self, data: bytes) -> int:
        """
        Load a PDF document from memory.

        Args:
            data: Raw PDF bytes

        Returns:
            Number of pages

        Raises:
            DecodeError: If PyMuPDF cannot open the bytes as a PDF
        """
        if self.doc:
            self.close_document()

        try:
            self.doc = fitz.open(stream=data, filetype="pdf")
        except Exception as e:
            raise DecodeError(f"Error loading PDF: {e}") from e

        if self.doc.page_count == 0:
            self.close_document()
            raise DecodeError("The PDF has no pages.")

        self.total_pages = self.doc.page_count
        return self.total_pages

    def close_document(self) -> None:
        """Close the current PDF document and clear all state."""
        if self.doc:
            self.doc.close()
            self.doc = None
        self.total_pages = 0

    def get_page_size(self, page_index: int) -> tuple:
        """
        Get the size of a page in points.

        Args:
            page_index: 0-based index of the page

        Returns:
            Tuple of (width, height) in points
        """
        page = self._load_page(page_index)
        rect = page.rect
        return rect.width, rect.height

    def render_page(self, page_index: int, zoom_level: float) -> QImage:
        """
        Rasterize a single page.

        Args:
            page_index: 0-based index of the page
            zoom_level: Zoom factor for rendering

        Returns:
            The page as an RGB image owning its pixel buffer

        Raises:
            RenderError: If the page cannot be rasterized
        """
        try:
            page = self._load_page(page_index)
            pix = page.get_pixmap(matrix=fitz.Matrix(zoom_level, zoom_level), alpha=False)
            img = QImage(
                pix.samples, pix.width, pix.height, pix.stride, QImage.Format_RGB888
            )
            # samples is released with pix
            return img.copy()
        except RenderError:
            raise
        except Exception as e:
            raise RenderError(f"Error rendering page {page_index + 1}: {e}") from e

    def _load_page(self, page_index: int) -> fitz.Page:
        if not self.doc or not 0 <= page_index < self.total_pages:
            raise RenderError(f"Page {page_index + 1} is not available.")
        return self.doc.load_page(page_index)

    def is_loaded(self) -> bool:
        """Check if a document is currently loaded."""
        return self.doc is not None


class WordHtmlConverter:
    """Converts DOCX bytes to simple HTML with python-docx."""

    def to_html(self, data: bytes) -> str:
        from docx import Document
        from docx.table import Table

        try:
            document = Document(io.BytesIO(data))
        except Exception as e:
            if data.startswith(OLE_SIGNATURE):
                raise DecodeError(
                    "Legacy .doc files cannot be previewed. Save the document as .docx and try again."
                ) from e
            raise DecodeError(f"Error converting Word document: {e}") from e

        parts = []
        for block in document.iter_inner_content():
            if isinstance(block, Table):
                parts.append(self._table_html(block))
            else:
                parts.append(self._paragraph_html(block))

        body = "\n".join(p for p in parts if p)
        return body or NO_CONTENT_HTML

    def _paragraph_html(self, paragraph) -> str:
        runs = []
        for run in paragraph.runs:
            text = html.escape(run.text)
            if not text:
                continue
            if run.bold:
                text = f"<b>{text}</b>"
            if run.italic:
                text = f"<i>{text}</i>"
            if run.underline:
                text = f"<u>{text}</u>"
            runs.append(text)

        content = "".join(runs)
        style_name = paragraph.style.name if paragraph.style is not None else ""
        if style_name.startswith("Heading"):
            level = style_name.replace("Heading", "").strip()
            level = level if level.isdigit() and 1 <= int(level) <= 6 else "1"
            return f"<h{level}>{content}</h{level}>"
        if style_name == "Title":
            return f"<h1>{content}</h1>"
        return f"<p>{content}</p>"

    def _table_html(self, table) -> str:
        rows = [[cell.text for cell in row.cells] for row in table.rows]
        return rows_to_html(rows)


class SpreadsheetHtmlConverter:
    """Converts the first worksheet of an XLSX or XLS workbook to an HTML table."""

    def to_html(self, data: bytes) -> str:
        if data.startswith(OLE_SIGNATURE):
            rows = self._xls_rows(data)
        elif data.startswith(ZIP_SIGNATURE):
            rows = self._xlsx_rows(data)
        else:
            raise DecodeError("The file is not an Excel workbook.")
        return rows_to_html(rows) if rows else NO_CONTENT_HTML

    def _xlsx_rows(self, data: bytes) -> List[list]:
        from openpyxl import load_workbook

        try:
            workbook = load_workbook(io.BytesIO(data), read_only=True, data_only=True)
        except Exception as e:
            raise DecodeError(f"Error converting Excel file: {e}") from e

        try:
            sheet = workbook.worksheets[0]
            return [list(row) for row in sheet.iter_rows(values_only=True)]
        finally:
            workbook.close()

    def _xls_rows(self, data: bytes) -> List[list]:
        import xlrd

        try:
            book = xlrd.open_workbook(file_contents=data)
        except Exception as e:
            raise DecodeError(f"Error converting Excel file: {e}") from e

        sheet = book.sheet_by_index(0)
        return [sheet.row_values(i) for i in range(sheet.nrows)]


class MailMessageDecoder:
    """Extracts the body of an Outlook .msg file with extract-msg."""

    def to_html(self, data: bytes) -> str:
        import extract_msg

        try:
            message = extract_msg.Message(data)
        except Exception as e:
            raise DecodeError(
                f"Failed to parse the .msg file. Please check the file and try again. ({e})"
            ) from e

        try:
            return message_body_html(message.htmlBody, message.body)
        except Exception as e:
            raise DecodeError(f"Failed to read the .msg body: {e}") from e
        finally:
            message.close()


def message_body_html(html_body, plain_body: Optional[str]) -> str:
    """
    Pick the preview markup for a mail body.

    Args:
        html_body: HTML body as bytes or str, if the message has one
        plain_body: Plain text body, if the message has one

    Returns:
        The HTML body, the escaped plain body, or a placeholder
    """
    if isinstance(html_body, bytes):
        html_body = html_body.decode("utf-8", errors="replace")
    if html_body and html_body.strip():
        return html_body
    if plain_body and plain_body.strip():
        return f"<pre>{html.escape(plain_body)}</pre>"
    return NO_CONTENT_HTML


def rows_to_html(rows: Iterable[Sequence]) -> str:
    """Render rows of cell values as a bordered HTML table."""
    lines = ['<table border="1" cellspacing="0" cellpadding="4">']
    for row in rows:
        cells = "".join(
            f"<td>{html.escape('' if value is None else str(value))}</td>"
            for value in row
        )
        lines.append(f"<tr>{cells}</tr>")
    lines.append("</table>")
    return "\n".join(lines)
