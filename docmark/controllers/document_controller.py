"""
Controller tying the document session to the main window.
"""
import logging
import os
from typing import List, Optional

from PyQt5.QtCore import QObject, pyqtSignal
from PyQt5.QtGui import QImage

from docmark.core.document.models import DocumentHandle
from docmark.core.errors import DecodeError, ExportError, UnsupportedFormatError
from docmark.core.export import ExportTarget, ExportWorker, suggested_filename
from .session import DocumentSession

logger = logging.getLogger(__name__)


class DocumentController(QObject):
    """Handles loading, page navigation and background export for the window."""

    # Signals
    document_loaded = pyqtSignal(object)  # DocumentHandle, also sent when decoding failed
    document_closed = pyqtSignal()
    image_ready = pyqtSignal(QImage)  # base layer of the preview
    viewport_changed = pyqtSignal(object)
    annotations_changed = pyqtSignal()
    preview_changed = pyqtSignal(object)  # transient Annotation or None
    text_entry_requested = pyqtSignal(object)  # screen point of the click
    export_progress = pyqtSignal(str)
    export_finished = pyqtSignal(bool, str)  # success, message
    error_occurred = pyqtSignal(str, str)  # title, message

    def __init__(self, settings=None, session: Optional[DocumentSession] = None, parent=None):
        super().__init__(parent)
        self.settings = settings
        self.session = session or DocumentSession(settings)
        self.export_worker: Optional[ExportWorker] = None
        self._retired_workers: List[ExportWorker] = []

    # --- Loading ---

    def open_file(self, file_path: str) -> bool:
        """
        Read a file from disk and make it the current document.

        Returns:
            True if the document was decoded and is being shown
        """
        try:
            handle = DocumentHandle.from_path(file_path)
        except OSError as e:
            logger.error("Could not read %s: %s", file_path, e)
            self.error_occurred.emit("Open Failed", f"Could not read {os.path.basename(file_path)}: {e.strerror or e}")
            return False

        if self.settings is not None:
            self.settings.last_open_dir = os.path.dirname(os.path.abspath(file_path))
        return self.load_handle(handle)

    def load_handle(self, handle: DocumentHandle) -> bool:
        """
        Replace the current document with ``handle``.

        An unsupported file leaves the current document untouched. A running
        export belongs to the previous document and is cancelled.
        """
        try:
            self.session.load(handle, on_bound=self._connect_renderer)
        except UnsupportedFormatError as e:
            logger.warning("Rejected %s: %s", handle.name, e)
            self.error_occurred.emit(e.title, str(e))
            return False
        except DecodeError as e:
            self._cancel_export()
            self.annotations_changed.emit()
            self.document_loaded.emit(self.session.document)
            self.error_occurred.emit(e.title, str(e))
            return False

        self._cancel_export()
        self.annotations_changed.emit()
        self.document_loaded.emit(self.session.document)
        return True

    def close_document(self) -> None:
        self._cancel_export()
        self.session.close()
        self.annotations_changed.emit()
        self.document_closed.emit()

    @property
    def document(self) -> Optional[DocumentHandle]:
        return self.session.document

    @property
    def has_annotations(self) -> bool:
        return len(self.session.annotations) > 0

    def _connect_renderer(self, binding) -> None:
        renderer = binding.renderer
        renderer.image_ready.connect(self.image_ready)
        renderer.viewport_changed.connect(self.viewport_changed)
        renderer.render_failed.connect(self._on_render_failed)

    def _on_render_failed(self, message: str) -> None:
        self.error_occurred.emit("Render Error", message)

    # --- Pages ---

    def next_page(self) -> None:
        if self._can_paginate():
            self.session.renderer.next_page()

    def previous_page(self) -> None:
        if self._can_paginate():
            self.session.renderer.previous_page()

    def go_to_page(self, page_number: int) -> None:
        """Show a 1-based page number."""
        if self._can_paginate():
            self.session.renderer.show_page(page_number - 1)

    def _can_paginate(self) -> bool:
        return self.session.is_paginated and self.session.renderer.is_loaded

    # --- Pointer input ---

    def attach_surface(self, surface) -> None:
        self.session.interaction.attach_surface(surface)

    def select_tool(self, tool) -> None:
        self.session.interaction.select_tool(tool)
        self.preview_changed.emit(None)

    def pointer_down(self, screen_point) -> None:
        self.session.interaction.pointer_down(screen_point)

    def pointer_move(self, screen_point) -> None:
        preview = self.session.interaction.pointer_move(screen_point)
        if preview is not None:
            self.preview_changed.emit(preview)

    def pointer_up(self, screen_point) -> None:
        if self.session.interaction.pointer_up(screen_point) is not None:
            self.preview_changed.emit(None)
            self.annotations_changed.emit()

    def click(self, screen_point) -> None:
        if self.session.interaction.click(screen_point):
            self.text_entry_requested.emit(screen_point)

    def submit_text(self, text: str) -> None:
        if self.session.interaction.submit_text(text) is not None:
            self.annotations_changed.emit()

    def cancel_text(self) -> None:
        self.session.interaction.cancel_text()

    # --- Export ---

    def export_targets(self) -> List[ExportTarget]:
        return self.session.export_targets()

    def default_export_path(self, target: ExportTarget, directory: str = "") -> str:
        name = suggested_filename(self.session.document.name, target.extension)
        return os.path.join(directory, name) if directory else name

    @property
    def is_exporting(self) -> bool:
        return self.export_worker is not None and self.export_worker.isRunning()

    def export_to(self, output_path: str, target: Optional[ExportTarget] = None) -> Optional[ExportWorker]:
        """
        Start a background export of the current document.

        Returns:
            The running worker, or None if the export could not start
        """
        if self.is_exporting:
            self.error_occurred.emit("Export Busy", "An export is already running.")
            return None

        try:
            job = self.session.export_job(target)
        except ExportError as e:
            self.error_occurred.emit(e.title, e.user_message())
            return None

        worker = ExportWorker(job, output_path, self.session.generation)
        worker.progress.connect(self.export_progress)
        worker.finished_export.connect(
            lambda success, message, w=worker: self._on_export_finished(w, success, message)
        )
        self.export_worker = worker
        worker.start()
        logger.info("Exporting %s to %s", self.session.document.name, output_path)
        return worker

    def wait_for_export(self, timeout_ms: int = 30000) -> bool:
        if self.export_worker is None:
            return True
        return self.export_worker.wait(timeout_ms)

    def _on_export_finished(self, worker: ExportWorker, success: bool, message: str) -> None:
        if worker in self._retired_workers:
            self._retired_workers.remove(worker)
            worker.deleteLater()
            logger.debug("Discarded export result of a previous document")
            return

        if worker is self.export_worker:
            self.export_worker = None
        worker.deleteLater()

        if not self.session.is_current(worker.generation):
            return
        self.export_finished.emit(success, message)

    def _cancel_export(self) -> None:
        worker = self.export_worker
        if worker is None:
            return
        self.export_worker = None
        worker.cancel()
        # Kept referenced until its finished signal arrives
        self._retired_workers.append(worker)
        logger.info("Cancelled export of the previous document")

    def shutdown(self, timeout_ms: int = 30000) -> None:
        """Cancel and join every export thread, then drop the document."""
        self._cancel_export()
        for worker in list(self._retired_workers):
            worker.wait(timeout_ms)
        self.session.close()
