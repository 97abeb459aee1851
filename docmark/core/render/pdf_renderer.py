"""
Preview renderer for PDF documents, one page at a time.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from PyQt5.QtCore import QThread, pyqtSignal
from PyQt5.QtGui import QImage

from docmark.core.document.decoders import PdfDecoder
from docmark.core.document.models import PaginatedViewport
from docmark.core.errors import RenderError
from .base import PreviewRenderer

logger = logging.getLogger(__name__)

DEFAULT_ZOOM = 1.5


@dataclass
class RenderTask:
    """One requested page render. Cancelled tasks never reach the surface."""
    page_index: int
    generation: int
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


class PageRenderWorker(QThread):
    """Worker thread rasterizing a page without freezing the UI."""

    # Signals
    rendered = pyqtSignal(object, QImage)  # task, image
    failed = pyqtSignal(object, str)  # task, error message

    def __init__(self, decoder: PdfDecoder, task: RenderTask, zoom: float, parent=None):
        super().__init__(parent)
        self._decoder = decoder
        self.task = task
        self._zoom = zoom

    def cancel(self):
        """Cancel the render; a result produced anyway is dropped."""
        self.task.cancel()

    def run(self):
        if self.task.cancelled:
            return

        try:
            image = self._decoder.render_page(self.task.page_index, self._zoom)
        except RenderError as e:
            if not self.task.cancelled:
                self.failed.emit(self.task, str(e))
            return

        if not self.task.cancelled:
            self.rendered.emit(self.task, image)


class PdfPreviewRenderer(PreviewRenderer):
    """
    Renders the current page of a PDF at a fixed zoom.

    Only one render may be pending: requesting a page cancels the previous
    render and joins its thread before the next one starts, so two renders
    never write to the same surface or touch the document concurrently.
    """

    def __init__(self, zoom: float = DEFAULT_ZOOM, parent=None):
        super().__init__(parent)
        self.zoom = zoom
        self.decoder = PdfDecoder()
        self._worker: Optional[PageRenderWorker] = None
        self._task: Optional[RenderTask] = None
        self._generation = 0

    def load(self, handle):
        self.close()

        total = self.decoder.load_pdf(handle.raw_bytes)
        logger.info("Loaded PDF %s with %d page(s)", handle.name, total)

        dims = self.decoder.get_page_size(0)
        self.show_page(0)
        return dims

    @property
    def total_pages(self) -> int:
        return self.decoder.total_pages

    @property
    def current_page_index(self) -> int:
        return self._viewport.current_page_index if self._viewport else 0

    @property
    def pending_task(self) -> Optional[RenderTask]:
        return self._task

    def show_page(self, page_index: int) -> RenderTask:
        """
        Publish the viewport of a page and start rasterizing it.

        Args:
            page_index: 0-based page index, clamped to the document

        Returns:
            The render task now pending
        """
        if not self.decoder.is_loaded():
            raise RenderError("No PDF document is loaded.")

        page_index = max(0, min(page_index, self.total_pages - 1))
        self._cancel_pending()

        width, height = self.decoder.get_page_size(page_index)
        self._set_viewport(PaginatedViewport(
            page_width=width,
            page_height=height,
            display_width=width * self.zoom,
            display_height=height * self.zoom,
            current_page_index=page_index,
            total_pages=self.total_pages,
        ))

        self._generation += 1
        task = RenderTask(page_index=page_index, generation=self._generation)
        self._task = task

        worker = PageRenderWorker(self.decoder, task, self.zoom)
        worker.rendered.connect(self._on_page_rendered)
        worker.failed.connect(self._on_render_failed)
        self._worker = worker
        worker.start()
        return task

    def next_page(self) -> Optional[RenderTask]:
        if self.current_page_index + 1 < self.total_pages:
            return self.show_page(self.current_page_index + 1)
        return None

    def previous_page(self) -> Optional[RenderTask]:
        if self.current_page_index > 0:
            return self.show_page(self.current_page_index - 1)
        return None

    def accepts(self, task: RenderTask) -> bool:
        """Whether a finished task may still write to the surface."""
        return task is self._task and not task.cancelled

    def wait_for_render(self, timeout_ms: int = 10000) -> bool:
        """Block until the pending render thread has finished."""
        if self._worker is None:
            return True
        return self._worker.wait(timeout_ms)

    def _on_page_rendered(self, task: RenderTask, image: QImage) -> bool:
        if not self.accepts(task):
            logger.debug("Dropped stale render of page %d", task.page_index + 1)
            return False

        self._task = None
        self.image_ready.emit(image)
        return True

    def _on_render_failed(self, task: RenderTask, message: str) -> None:
        if not self.accepts(task):
            return
        self._task = None
        logger.error("Render failed: %s", message)
        self.render_failed.emit(message)

    def _cancel_pending(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None
        if self._worker is not None:
            self._worker.cancel()
            self._worker.wait()
            self._worker = None

    def close(self) -> None:
        self._cancel_pending()
        self.decoder.close_document()
        super().close()
