"""
Tests for burning annotations into PDFs as vector content.
"""
import fitz  # PyMuPDF
import pytest

from docmark.core.annotations import Annotation, AnnotationKind
from docmark.core.document.models import RasterViewport
from docmark.core.errors import ExportError
from docmark.core.export import ExportTarget, PDFExporter


def _open(data):
    return fitz.open(stream=data, filetype="pdf")


@pytest.fixture
def pdf_handle(make_handle, pdf_bytes):
    return make_handle("contract.pdf", pdf_bytes, "application/pdf")


class TestPdfRoundTrip:
    """Exporting keeps the document intact."""

    def test_no_annotations_keeps_pages_and_text(self, pdf_handle, pdf_bytes, pdf_viewport):
        result = PDFExporter().export(pdf_handle, [], pdf_viewport)

        source, exported = _open(pdf_bytes), _open(result.data)
        try:
            assert len(exported) == len(source) == 2
            for i in range(2):
                assert exported[i].rect == source[i].rect
                assert exported[i].get_text() == source[i].get_text()
                assert exported[i].get_drawings() == []
        finally:
            source.close()
            exported.close()

    def test_no_annotations_keeps_page_dimensions(self, make_handle, pdf_viewport):
        """Pages of different sizes come back with their own dimensions."""
        doc = fitz.open()
        doc.new_page(width=612, height=792)
        doc.new_page(width=842, height=595)
        data = doc.tobytes()
        doc.close()

        result = PDFExporter().export(make_handle("mixed.pdf", data), [], pdf_viewport)

        source, exported = _open(data), _open(result.data)
        try:
            assert len(exported) == len(source) == 2
            for i in range(2):
                assert exported[i].rect == source[i].rect
            assert exported[1].rect == fitz.Rect(0, 0, 842, 595)
        finally:
            source.close()
            exported.close()

    def test_result_metadata(self, pdf_handle, pdf_viewport):
        result = PDFExporter().export(pdf_handle, [], pdf_viewport)
        assert result.filename == "contract_annotated.pdf"
        assert result.mime_type == "application/pdf"


class TestPdfAnnotations:
    """Annotations land on their page, where they were drawn."""

    def test_rectangle_position_and_other_page_untouched(self, pdf_handle, pdf_bytes, pdf_viewport):
        ann = Annotation.shape(1, AnnotationKind.RECTANGLE, (10, 10), (50, 40))

        result = PDFExporter().export(pdf_handle, [ann], pdf_viewport)

        exported, source = _open(result.data), _open(pdf_bytes)
        try:
            drawings = exported[0].get_drawings()
            assert len(drawings) == 1
            rect = drawings[0]["rect"]
            assert (rect.x0, rect.y0, rect.x1, rect.y1) == pytest.approx(
                (6.67, 6.67, 33.33, 26.67), abs=1.5
            )
            assert drawings[0]["color"] == pytest.approx((0, 0, 1))

            assert exported[1].get_text() == source[1].get_text()
            assert exported[1].get_drawings() == []
        finally:
            exported.close()
            source.close()

    def test_opaque_box_is_black_fill(self, pdf_handle, pdf_viewport):
        ann = Annotation.shape(1, AnnotationKind.OPAQUE, (90, 90), (150, 120))

        result = PDFExporter().export(pdf_handle, [ann], pdf_viewport)

        exported = _open(result.data)
        try:
            (drawing,) = exported[0].get_drawings()
            assert drawing["fill"] == pytest.approx((0, 0, 0))
            rect = drawing["rect"]
            assert (rect.x0, rect.y0, rect.x1, rect.y1) == pytest.approx(
                (60, 60, 100, 80), abs=1.5
            )
        finally:
            exported.close()

    def test_circle_uses_scaled_radius(self, pdf_handle, pdf_viewport):
        ann = Annotation.shape(1, AnnotationKind.CIRCLE, (150, 150), (180, 190))

        result = PDFExporter().export(pdf_handle, [ann], pdf_viewport)

        exported = _open(result.data)
        try:
            (drawing,) = exported[0].get_drawings()
            rect = drawing["rect"]
            radius = 50 / 1.5
            assert (rect.x0, rect.y0, rect.x1, rect.y1) == pytest.approx(
                (100 - radius, 100 - radius, 100 + radius, 100 + radius), abs=1.5
            )
            assert drawing["color"] == pytest.approx((0, 1, 0))
        finally:
            exported.close()

    def test_text_baseline_position(self, pdf_handle, pdf_viewport):
        ann = Annotation.text_mark(1, (15, 300), "Approved")

        result = PDFExporter().export(pdf_handle, [ann], pdf_viewport)

        exported = _open(result.data)
        try:
            (hit,) = exported[0].search_for("Approved")
            assert hit.x0 == pytest.approx(10, abs=1.5)
            # baseline at y = 200, glyphs sit above it
            assert hit.y0 < 200 < hit.y1 + 5
        finally:
            exported.close()

    def test_annotation_on_second_page(self, pdf_handle, pdf_viewport):
        ann = Annotation.shape(1, AnnotationKind.LINE, (0, 0), (90, 90), page_index=1)

        result = PDFExporter().export(pdf_handle, [ann], pdf_viewport)

        exported = _open(result.data)
        try:
            assert exported[0].get_drawings() == []
            (drawing,) = exported[1].get_drawings()
            assert drawing["color"] == pytest.approx((1, 0, 0))
        finally:
            exported.close()

    def test_commit_order_is_z_order(self, pdf_handle, pdf_viewport):
        """A later opaque box is drawn after (above) an earlier highlight."""
        highlight = Annotation.shape(1, AnnotationKind.HIGHLIGHT, (10, 10), (60, 60))
        opaque = Annotation.shape(2, AnnotationKind.OPAQUE, (10, 10), (60, 60))

        result = PDFExporter().export(pdf_handle, [highlight, opaque], pdf_viewport)

        exported = _open(result.data)
        try:
            fills = [d["fill"] for d in exported[0].get_drawings()]
            assert fills[0] == pytest.approx((1, 1, 0.8))
            assert fills[-1] == pytest.approx((0, 0, 0))
        finally:
            exported.close()


class TestPdfExportErrors:
    def test_rejects_other_targets(self, pdf_handle, pdf_viewport):
        with pytest.raises(ExportError):
            PDFExporter().export(pdf_handle, [], pdf_viewport, ExportTarget.DOCX)

    def test_needs_paginated_viewport(self, pdf_handle):
        with pytest.raises(ExportError):
            PDFExporter().export(pdf_handle, [], RasterViewport(100, 100))

    def test_corrupt_bytes(self, make_handle, pdf_viewport):
        handle = make_handle("broken.pdf", b"not a pdf")
        with pytest.raises(ExportError):
            PDFExporter().export(handle, [], pdf_viewport)
