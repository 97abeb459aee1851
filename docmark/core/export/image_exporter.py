"""
Raster export: composite annotations onto the source image.
"""
import logging
from typing import Iterable

from PyQt5.QtCore import QRectF, Qt
from PyQt5.QtGui import QImage, QPainter

from docmark.core.annotations import Annotation
from docmark.core.document.models import RasterViewport
from docmark.core.errors import ExportError
from docmark.core.render.painter import paint_annotations
from .base import ExportCompositor, ExportTarget, encode_png

logger = logging.getLogger(__name__)


def composite(base: QImage, annotations: Iterable[Annotation],
              width: int, height: int) -> QImage:
    """
    Draw the base image at the display size, then every annotation on top.

    Args:
        base: Source image
        annotations: Annotations in commit order
        width: Canvas width in pixels
        height: Canvas height in pixels
    """
    canvas = QImage(width, height, QImage.Format_ARGB32)
    canvas.fill(Qt.transparent)

    painter = QPainter(canvas)
    try:
        painter.setRenderHint(QPainter.SmoothPixmapTransform)
        painter.drawImage(QRectF(0, 0, width, height), base)
        painter.setRenderHint(QPainter.Antialiasing)
        paint_annotations(painter, annotations)
    finally:
        painter.end()
    return canvas


class ImageExporter(ExportCompositor):
    """Exports images as PNG with annotations burned into the pixels."""

    target = ExportTarget.PNG

    def export(self, handle, annotations, viewport, target=None):
        if target not in (None, ExportTarget.PNG):
            raise ExportError(f"Images cannot be exported as {target.label}.")
        if not isinstance(viewport, RasterViewport):
            raise ExportError("The image has not finished loading yet.")

        base = QImage.fromData(handle.raw_bytes)
        if base.isNull():
            raise ExportError("Failed to load the image.")

        width, height = int(round(viewport.display_width)), int(round(viewport.display_height))
        canvas = composite(base, annotations, width, height)
        data = encode_png(canvas)

        logger.info("Exported %s as %dx%d PNG", handle.name, width, height)
        return self._result(handle, data, ExportTarget.PNG)
