"""
Common contract of the per-format preview renderers.
"""
from enum import Enum
from typing import Optional, Tuple

from PyQt5.QtCore import QObject, pyqtSignal
from PyQt5.QtGui import QImage


class RenderState(Enum):
    UNLOADED = "unloaded"
    LOADED = "loaded"


class PreviewRenderer(QObject):
    """
    Renders a document to a display surface and publishes its viewport.

    The viewport is None until the renderer reaches LOADED; overlay sizing
    waits for ``viewport_changed``.
    """

    # Signals
    viewport_changed = pyqtSignal(object)  # RasterViewport / PaginatedViewport
    image_ready = pyqtSignal(QImage)  # base layer under the overlay
    render_failed = pyqtSignal(str)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.state = RenderState.UNLOADED
        self._viewport = None
        self.surface = None  # overlay surface, set by the view

    @property
    def viewport(self):
        return self._viewport

    @property
    def is_loaded(self) -> bool:
        return self.state is RenderState.LOADED

    def load(self, handle) -> Optional[Tuple[float, float]]:
        """
        Decode and display a document, replacing anything shown before.

        Returns:
            Native dimensions of the document, if the format has any
        """
        raise NotImplementedError

    def close(self) -> None:
        """Release the render target and return to UNLOADED."""
        self.state = RenderState.UNLOADED
        self._viewport = None

    def _set_viewport(self, viewport) -> None:
        self._viewport = viewport
        self.state = RenderState.LOADED
        self.viewport_changed.emit(viewport)
