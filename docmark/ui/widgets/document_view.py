"""
Scrollable preview: the rendered base layer with the overlay on top.
"""
from PyQt5.QtCore import Qt
from PyQt5.QtGui import QImage, QPixmap
from PyQt5.QtWidgets import QLabel, QScrollArea, QWidget

from .annotation_overlay import AnnotationOverlay


class DocumentView(QScrollArea):
    """Stacks the base layer label and the annotation overlay at the same origin."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setAlignment(Qt.AlignCenter)
        self.setWidgetResizable(False)

        self.container = QWidget()
        self.base_label = QLabel(self.container)
        self.base_label.setAlignment(Qt.AlignLeft | Qt.AlignTop)
        self.base_label.move(0, 0)
        self.overlay = AnnotationOverlay(self.container)
        self.overlay.move(0, 0)
        self.overlay.raise_()

        self.setWidget(self.container)
        self.clear()

    def set_image(self, image: QImage) -> None:
        pixmap = QPixmap.fromImage(image)
        self.base_label.setPixmap(pixmap)
        self.base_label.setFixedSize(pixmap.size())
        self._fit_container()

    def set_viewport(self, viewport) -> None:
        """Size the overlay to the viewport's display surface."""
        if viewport is None:
            return
        self.overlay.setFixedSize(
            int(round(viewport.display_width)), int(round(viewport.display_height))
        )
        self.overlay.show()
        self._fit_container()

    def clear(self) -> None:
        self.base_label.clear()
        self.base_label.setFixedSize(0, 0)
        self.overlay.set_annotations([])
        self.overlay.set_preview(None)
        self.overlay.setFixedSize(0, 0)
        self.overlay.hide()
        self.container.setFixedSize(0, 0)

    def _fit_container(self) -> None:
        width = max(self.base_label.width(), self.overlay.width())
        height = max(self.base_label.height(), self.overlay.height())
        self.container.setFixedSize(width, height)
