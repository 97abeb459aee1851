"""
Tests for the PDF, Word, Excel and Outlook decoders.
"""
import pytest

from docmark.core.document.decoders import (
    NO_CONTENT_HTML,
    OLE_SIGNATURE,
    MailMessageDecoder,
    PdfDecoder,
    SpreadsheetHtmlConverter,
    WordHtmlConverter,
    message_body_html,
    rows_to_html,
)
from docmark.core.errors import DecodeError, RenderError


class TestPdfDecoder:
    def test_load_counts_pages(self, pdf_bytes):
        decoder = PdfDecoder()
        assert decoder.load_pdf(pdf_bytes) == 2
        assert decoder.is_loaded()
        assert decoder.get_page_size(1) == (612, 792)
        decoder.close_document()
        assert not decoder.is_loaded()

    def test_render_page_at_zoom(self, pdf_bytes):
        decoder = PdfDecoder()
        decoder.load_pdf(pdf_bytes)
        try:
            image = decoder.render_page(0, 1.5)
            assert (image.width(), image.height()) == (918, 1188)
        finally:
            decoder.close_document()

    def test_missing_page(self, pdf_bytes):
        decoder = PdfDecoder()
        decoder.load_pdf(pdf_bytes)
        try:
            with pytest.raises(RenderError):
                decoder.render_page(5, 1.0)
        finally:
            decoder.close_document()

    def test_corrupt_bytes(self):
        with pytest.raises(DecodeError):
            PdfDecoder().load_pdf(b"%PDF-garbage")


class TestWordHtmlConverter:
    def test_headings_runs_and_tables(self, docx_bytes):
        markup = WordHtmlConverter().to_html(docx_bytes)

        assert "<h1>Quarterly Report</h1>" in markup
        assert "<b>up</b>" in markup
        assert "<table" in markup
        assert "<td>North</td>" in markup
        # body order follows the document
        assert markup.index("Quarterly") < markup.index("Revenue") < markup.index("Region")

    def test_escapes_text(self):
        import io
        from docx import Document

        document = Document()
        document.add_paragraph("a < b & c")
        output = io.BytesIO()
        document.save(output)

        assert "a &lt; b &amp; c" in WordHtmlConverter().to_html(output.getvalue())

    def test_legacy_doc_reported(self):
        with pytest.raises(DecodeError) as exc_info:
            WordHtmlConverter().to_html(OLE_SIGNATURE + b"\x00" * 512)
        assert ".docx" in str(exc_info.value)

    def test_garbage(self):
        with pytest.raises(DecodeError):
            WordHtmlConverter().to_html(b"plain text")


class TestSpreadsheetHtmlConverter:
    def test_first_sheet_only(self, xlsx_bytes):
        markup = SpreadsheetHtmlConverter().to_html(xlsx_bytes)

        assert "<td>Name</td><td>Score</td>" in markup
        assert "<td>Ada</td><td>97</td>" in markup
        assert "<td>Linus</td><td></td>" in markup
        assert "not shown" not in markup

    def test_not_a_workbook(self):
        with pytest.raises(DecodeError):
            SpreadsheetHtmlConverter().to_html(b"hello")

    def test_corrupt_zip(self):
        with pytest.raises(DecodeError):
            SpreadsheetHtmlConverter().to_html(b"PK\x03\x04broken")


class TestMailBody:
    def test_corrupt_message(self):
        with pytest.raises(DecodeError):
            MailMessageDecoder().to_html(b"not an outlook message")

    def test_html_body_preferred(self):
        assert message_body_html(b"<p>Hi</p>", "Hi") == "<p>Hi</p>"

    def test_plain_body_escaped(self):
        assert message_body_html(None, "1 < 2") == "<pre>1 &lt; 2</pre>"

    def test_no_body(self):
        assert message_body_html("  ", "") == NO_CONTENT_HTML
        assert NO_CONTENT_HTML == "<p>No content available.</p>"


class TestRowsToHtml:
    def test_escapes_and_blanks(self):
        markup = rows_to_html([["<x>", None, 3]])
        assert "<tr><td>&lt;x&gt;</td><td></td><td>3</td></tr>" in markup
