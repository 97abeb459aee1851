"""
Preview renderer for raster images.
"""
import logging

from PyQt5.QtGui import QImage

from docmark.core.document.models import RasterViewport
from docmark.core.errors import DecodeError
from .base import PreviewRenderer

logger = logging.getLogger(__name__)


class ImagePreviewRenderer(PreviewRenderer):
    """Shows an image at its natural size; overlay pixels equal image pixels."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.image = None

    def load(self, handle):
        self.close()

        image = QImage.fromData(handle.raw_bytes)
        if image.isNull():
            raise DecodeError(f"Failed to load the image {handle.name}.")

        self.image = image
        logger.info("Loaded image %s (%dx%d)", handle.name, image.width(), image.height())

        # UNLOADED -> LOADED(dimensions)
        self._set_viewport(RasterViewport(image.width(), image.height()))
        self.image_ready.emit(image)
        return float(image.width()), float(image.height())

    def close(self) -> None:
        self.image = None
        super().close()
