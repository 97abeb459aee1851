"""
Export for documents previewed as HTML.

The composited container (HTML content plus the annotation overlay) is
captured as one image and wrapped in a container for the target format.
Annotations lose their vector form at this point.
"""
import logging
from typing import Optional

from PyQt5.QtGui import QPainter

from docmark.core.document.models import DocumentFamily, RasterViewport
from docmark.core.errors import DecodeError, ExportError
from docmark.core.render.flowed_renderer import build_text_document, rasterize_container
from docmark.core.render.painter import paint_annotations
from .base import ExportCompositor, ExportTarget, encode_png
from .containers import build_mail_envelope, build_word_document, build_workbook

logger = logging.getLogger(__name__)

NATIVE_TARGETS = {
    DocumentFamily.WORD: ExportTarget.DOCX,
    DocumentFamily.SPREADSHEET: ExportTarget.XLSX,
    DocumentFamily.MAIL: ExportTarget.EML,
}

FLOWED_TARGETS = (ExportTarget.DOCX, ExportTarget.XLSX, ExportTarget.EML, ExportTarget.PNG)

MAIL_SUGGESTION = "Try saving it as a Word document or PNG image instead."


def export_targets(family: DocumentFamily):
    """Native target of a flowed family first, then the alternates."""
    native = NATIVE_TARGETS[family]
    return [native] + [t for t in FLOWED_TARGETS if t is not native]


class FlowedExporter(ExportCompositor):
    """
    Rasterizes the annotated HTML container and embeds it in a new file.

    Args:
        family: Family of the source document, selects the native target
        converter: HTML converter used when no cached markup is available
        renderer: Optional FlowedPreviewRenderer whose cached markup is reused
    """

    def __init__(self, family: DocumentFamily, converter, renderer=None):
        self.family = family
        self.target = NATIVE_TARGETS[family]
        self.converter = converter
        self.renderer = renderer

    def targets(self):
        return export_targets(self.family)

    def export(self, handle, annotations, viewport, target: Optional[ExportTarget] = None):
        target = target or self.target
        if target not in FLOWED_TARGETS:
            raise ExportError(f"This document cannot be exported as {target.label}.")
        if not isinstance(viewport, RasterViewport):
            raise ExportError("The document preview has not finished loading yet.")

        png = self.capture(handle, annotations, viewport)
        width = int(round(viewport.display_width))

        try:
            if target is ExportTarget.XLSX:
                data = build_workbook(png)
            elif target is ExportTarget.DOCX:
                data = build_word_document(png, width)
            elif target is ExportTarget.EML:
                data = build_mail_envelope(png)
            else:
                data = png
        except Exception as e:
            suggestion = MAIL_SUGGESTION if target is ExportTarget.EML else None
            raise ExportError(
                f"Failed to build the {target.label.lower()}: {e}", suggestion
            ) from e

        logger.info("Exported %s as %s", handle.name, target.extension)
        return self._result(handle, data, target)

    def capture(self, handle, annotations, viewport: RasterViewport) -> bytes:
        """
        Rasterize the container with the annotation overlay on top.

        Returns:
            PNG bytes of the composited container
        """
        markup = self._markup(handle)
        width = int(round(viewport.display_width))
        height = int(round(viewport.display_height))

        document = build_text_document(markup, width)
        image = rasterize_container(document, width, height)

        painter = QPainter(image)
        try:
            painter.setRenderHint(QPainter.Antialiasing)
            paint_annotations(painter, annotations)
        finally:
            painter.end()

        return encode_png(image)

    def _markup(self, handle) -> str:
        if self.renderer is not None and self.renderer.html is not None:
            return self.renderer.html
        try:
            return self.converter.to_html(handle.raw_bytes)
        except DecodeError as e:
            suggestion = MAIL_SUGGESTION if self.family is DocumentFamily.MAIL else None
            raise ExportError(str(e), suggestion) from e
