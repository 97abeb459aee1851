import logging
import os
import shutil
import tempfile

from PyQt5.QtCore import QThread, pyqtSignal

from docmark.core.errors import ExportError

logger = logging.getLogger(__name__)


class ExportWorker(QThread):
    """
    Worker thread running an export without freezing the UI.

    The document is written to a temp file next to the destination and moved
    into place only when complete, so a failed or cancelled export never
    leaves a partial file behind.
    """

    # Signals
    finished_export = pyqtSignal(bool, str)  # success, message
    progress = pyqtSignal(str)  # status message

    def __init__(self, export_job, output_path: str, generation: int = 0, parent=None):
        """
        Args:
            export_job: Callable returning an ExportResult
            output_path: Destination file path
            generation: Session load generation the export belongs to
        """
        super().__init__(parent)
        self.export_job = export_job
        self.output_path = output_path
        self.generation = generation
        self.temp_path = None
        self.error = None
        self._cancelled = False

    def cancel(self):
        """Cancel the export; nothing is written after this."""
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def run(self):
        """Execute the export in a background thread."""
        try:
            self.progress.emit("Exporting annotations...")
            result = self.export_job()

            if self._cancelled:
                self.finished_export.emit(False, "Export cancelled.")
                return

            self.progress.emit("Finalizing...")
            output_dir = os.path.dirname(os.path.abspath(self.output_path))
            temp_fd, self.temp_path = tempfile.mkstemp(
                suffix=os.path.splitext(self.output_path)[1], dir=output_dir
            )
            with os.fdopen(temp_fd, 'wb') as f:
                f.write(result.data)

            if self._cancelled:
                self._remove_temp_file()
                self.finished_export.emit(False, "Export cancelled.")
                return

            shutil.move(self.temp_path, self.output_path)
            self.temp_path = None
            self.finished_export.emit(True, f"Saved {os.path.basename(self.output_path)}")

        except ExportError as e:
            self.error = e
            self._remove_temp_file()
            logger.error("Export failed: %s", e)
            self.finished_export.emit(False, e.user_message())
        except Exception as e:
            self.error = e
            self._remove_temp_file()
            logger.exception("Unexpected error during export")
            self.finished_export.emit(False, f"Error during export: {str(e)}")

    def _remove_temp_file(self):
        if self.temp_path and os.path.exists(self.temp_path):
            os.remove(self.temp_path)
        self.temp_path = None
