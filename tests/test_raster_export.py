"""
Tests for compositing annotations into image pixels.
"""
import pytest
from PyQt5.QtGui import QColor, QImage

from docmark.core.annotations import Annotation, AnnotationKind
from docmark.core.document.models import PaginatedViewport, RasterViewport
from docmark.core.errors import ExportError
from docmark.core.export import ExportTarget, ImageExporter


@pytest.fixture
def image_handle(make_handle, png_bytes):
    return make_handle("scan.png", png_bytes, "image/png")


def _decode(result) -> QImage:
    image = QImage.fromData(result.data)
    assert not image.isNull()
    return image


def _rgb(image, x, y):
    color = QColor(image.pixel(x, y))
    return color.red(), color.green(), color.blue()


class TestImageExport:
    """The exported PNG is the image with annotations on top."""

    def test_output_matches_display_size(self, image_handle):
        result = ImageExporter().export(image_handle, [], RasterViewport(200, 100))

        image = _decode(result)
        assert (image.width(), image.height()) == (200, 100)
        assert result.filename == "scan_annotated.png"
        assert result.mime_type == "image/png"

    def test_no_annotations_keeps_pixels(self, image_handle):
        image = _decode(ImageExporter().export(image_handle, [], RasterViewport(200, 100)))
        assert _rgb(image, 50, 50) == (255, 255, 255)

    def test_opaque_over_highlight_is_black(self, image_handle):
        """Later annotations draw on top: the opaque box hides the highlight."""
        annotations = [
            Annotation.shape(1, AnnotationKind.HIGHLIGHT, (10, 10), (60, 60)),
            Annotation.shape(2, AnnotationKind.OPAQUE, (10, 10), (60, 60)),
        ]
        image = _decode(ImageExporter().export(image_handle, annotations, RasterViewport(200, 100)))

        assert _rgb(image, 30, 30) == (0, 0, 0)
        assert _rgb(image, 100, 80) == (255, 255, 255)

    def test_highlight_over_opaque_tints_black(self, image_handle):
        annotations = [
            Annotation.shape(1, AnnotationKind.OPAQUE, (10, 10), (60, 60)),
            Annotation.shape(2, AnnotationKind.HIGHLIGHT, (10, 10), (60, 60)),
        ]
        image = _decode(ImageExporter().export(image_handle, annotations, RasterViewport(200, 100)))

        red, green, blue = _rgb(image, 30, 30)
        assert 60 <= red <= 95
        assert 60 <= green <= 95
        assert blue <= 10

    def test_highlight_is_translucent_yellow(self, image_handle):
        annotations = [Annotation.shape(1, AnnotationKind.HIGHLIGHT, (60, 10), (10, 60))]
        image = _decode(ImageExporter().export(image_handle, annotations, RasterViewport(200, 100)))

        red, green, blue = _rgb(image, 30, 30)
        assert (red, green) == (255, 255)
        assert 160 <= blue <= 200

    def test_line_is_red(self, image_handle):
        annotations = [Annotation.shape(1, AnnotationKind.LINE, (0, 50), (200, 50))]
        image = _decode(ImageExporter().export(image_handle, annotations, RasterViewport(200, 100)))

        red, green, blue = _rgb(image, 100, 50)
        assert red > 200
        assert green < 80 and blue < 80


class TestImageExportErrors:
    def test_rejects_other_targets(self, image_handle):
        with pytest.raises(ExportError):
            ImageExporter().export(image_handle, [], RasterViewport(200, 100), ExportTarget.PDF)

    def test_needs_raster_viewport(self, image_handle):
        with pytest.raises(ExportError):
            ImageExporter().export(image_handle, [], PaginatedViewport(1, 1, 1, 1))

    def test_undecodable_image(self, make_handle):
        with pytest.raises(ExportError):
            ImageExporter().export(make_handle("bad.png", b"nope"), [], RasterViewport(10, 10))
