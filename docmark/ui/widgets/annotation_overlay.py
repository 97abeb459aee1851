"""
Transparent drawing surface stacked over the document preview.
"""
from typing import List, Optional, Tuple

from PyQt5.QtCore import QPoint, Qt, pyqtSignal
from PyQt5.QtGui import QMouseEvent, QPainter
from PyQt5.QtWidgets import QWidget

from docmark.core.annotations import Annotation
from docmark.core.render import paint_annotations


class AnnotationOverlay(QWidget):
    """
    Paints committed annotations plus the transient preview, and forwards
    pointer input in global screen coordinates.

    The overlay is sized to the renderer's viewport, so overlay pixels are
    display pixels.
    """

    # Signals, all carrying (x, y) in global screen coordinates
    pointer_pressed = pyqtSignal(object)
    pointer_moved = pyqtSignal(object)
    pointer_released = pyqtSignal(object)
    clicked = pyqtSignal(object)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setAttribute(Qt.WA_TranslucentBackground)
        self.setAttribute(Qt.WA_NoSystemBackground)
        self.setMouseTracking(True)
        self.annotations: List[Annotation] = []
        self.preview: Optional[Annotation] = None

    def bounding_rect(self) -> Tuple[float, float, float, float]:
        """Current (left, top, width, height) of the overlay on screen."""
        origin = self.mapToGlobal(QPoint(0, 0))
        return float(origin.x()), float(origin.y()), float(self.width()), float(self.height())

    def set_annotations(self, annotations) -> None:
        self.annotations = list(annotations)
        self.update()

    def set_preview(self, preview: Optional[Annotation]) -> None:
        self.preview = preview
        self.update()

    def set_tool_cursor(self, active: bool) -> None:
        self.setCursor(Qt.CrossCursor if active else Qt.ArrowCursor)

    # Mouse event handlers

    def mousePressEvent(self, event: QMouseEvent):
        if event.button() != Qt.LeftButton:
            return super().mousePressEvent(event)
        self.pointer_pressed.emit(self._global_point(event))

    def mouseMoveEvent(self, event: QMouseEvent):
        if event.buttons() & Qt.LeftButton:
            self.pointer_moved.emit(self._global_point(event))

    def mouseReleaseEvent(self, event: QMouseEvent):
        if event.button() != Qt.LeftButton:
            return super().mouseReleaseEvent(event)
        point = self._global_point(event)
        self.pointer_released.emit(point)
        self.clicked.emit(point)

    @staticmethod
    def _global_point(event: QMouseEvent) -> Tuple[float, float]:
        pos = event.globalPos()
        return float(pos.x()), float(pos.y())

    def paintEvent(self, event):
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.Antialiasing)
            paint_annotations(painter, self.annotations)
            if self.preview is not None:
                paint_annotations(painter, [self.preview])
        finally:
            painter.end()
