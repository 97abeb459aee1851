"""
Preview renderer for documents converted to reflowable HTML
(word-processing, spreadsheet and mail-message files).
"""
import logging
import math
from typing import Optional

from PyQt5.QtCore import QRectF, QSizeF, Qt
from PyQt5.QtGui import QColor, QImage, QPainter, QTextDocument

from docmark.core.document.models import RasterViewport
from .base import PreviewRenderer

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_WIDTH = 800
CONTAINER_MARGIN = 16


def build_text_document(markup: str, width: float) -> QTextDocument:
    """Lay out HTML at a fixed container width."""
    document = QTextDocument()
    document.setDocumentMargin(CONTAINER_MARGIN)
    document.setHtml(markup)
    document.setTextWidth(width)
    return document


def container_size(document: QTextDocument):
    size: QSizeF = document.size()
    return int(math.ceil(size.width())), int(math.ceil(size.height()))


def rasterize_container(document: QTextDocument, width: int, height: int) -> QImage:
    """
    Capture the laid-out container as an image.

    Args:
        document: Laid-out HTML document
        width: Image width in pixels
        height: Image height in pixels

    Returns:
        ARGB image with a white background and the document drawn on top
    """
    image = QImage(max(width, 1), max(height, 1), QImage.Format_ARGB32)
    image.fill(QColor(Qt.white))

    painter = QPainter(image)
    try:
        painter.setRenderHint(QPainter.Antialiasing)
        painter.setRenderHint(QPainter.TextAntialiasing)
        document.drawContents(painter, QRectF(0, 0, width, height))
    finally:
        painter.end()
    return image


class FlowedPreviewRenderer(PreviewRenderer):
    """
    Converts the document to HTML once, caches the markup and shows it in a
    container the overlay covers at 100% width and height.
    """

    def __init__(self, converter, content_width: int = DEFAULT_CONTENT_WIDTH, parent=None):
        super().__init__(parent)
        self.converter = converter
        self.content_width = content_width
        self._handle = None
        self._html: Optional[str] = None
        self._converting = False
        self.conversion_count = 0
        self.document: Optional[QTextDocument] = None
        self.image: Optional[QImage] = None

    @property
    def html(self) -> Optional[str]:
        return self._html

    def load(self, handle):
        self.close()
        self._handle = handle
        self.request_conversion()
        return None

    def request_conversion(self) -> Optional[str]:
        """
        Convert the document to HTML unless it is cached or already converting.

        Returns:
            The cached markup, or None while a conversion is pending
        """
        if self._html is not None or self._converting or self._handle is None:
            return self._html

        self._converting = True
        try:
            markup = self.converter.to_html(self._handle.raw_bytes)
            self.conversion_count += 1
        finally:
            self._converting = False

        self._html = markup
        logger.info("Converted %s to HTML (%d chars)", self._handle.name, len(markup))
        self._layout()
        return markup

    def _layout(self) -> None:
        self.document = build_text_document(self._html, self.content_width)
        width, height = container_size(self.document)
        width = max(width, self.content_width)

        self.image = rasterize_container(self.document, width, height)
        self._set_viewport(RasterViewport(width, height))
        self.image_ready.emit(self.image)

    def close(self) -> None:
        self._handle = None
        self._html = None
        self.document = None
        self.image = None
        super().close()
