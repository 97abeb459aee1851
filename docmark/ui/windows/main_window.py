import logging
import os

from PyQt5.QtCore import Qt
from PyQt5.QtWidgets import (
    QFileDialog, QFrame, QHBoxLayout, QLabel, QMainWindow, QMenu,
    QMessageBox, QProgressDialog, QPushButton, QToolButton, QVBoxLayout, QWidget
)

from docmark.controllers import DocumentController
from docmark.core.document.dispatcher import OPEN_FILE_FILTER
from docmark.core.export import ExportTarget
from docmark.styles import ThemeManager
from docmark.ui.toolbars import AnnotationToolbar
from docmark.ui.widgets import AnnotationListPanel, DocumentView, TextInputPopup
from docmark.utils import AppSettings, WarningType, warning_manager

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, file_path=None, settings: AppSettings = None):
        super().__init__()
        self.setWindowTitle("Docmark")
        self.setAcceptDrops(True)

        self.settings = settings or AppSettings()
        self.controller = DocumentController(self.settings, parent=self)
        self.progress_dialog = None

        self.setup_ui()
        self._connect_controller()
        self.apply_style()
        self._update_document_state()

        if file_path:
            self.load_document(file_path)

    def setup_ui(self):
        # TOP BAR
        self.top_frame = QFrame()
        self.top_frame.setObjectName("TopFrame")
        top_layout = QHBoxLayout(self.top_frame)
        top_layout.setContentsMargins(10, 8, 10, 8)
        top_layout.setSpacing(8)

        self.open_button = QPushButton("Open", self.top_frame)
        self.open_button.setToolTip("Open a document (Ctrl+O)")
        self.open_button.setShortcut("Ctrl+O")
        self.open_button.clicked.connect(self.open_document)
        top_layout.addWidget(self.open_button)

        self.file_name_label = QLabel("No Document Loaded", self.top_frame)
        self.file_name_label.setStyleSheet("font-weight: bold;")
        top_layout.addWidget(self.file_name_label)

        self.metadata_label = QLabel("", self.top_frame)
        self.metadata_label.setObjectName("metadataLabel")
        top_layout.addWidget(self.metadata_label)

        top_layout.addStretch()

        # Page navigation, PDFs only
        self.prev_button = QToolButton(self.top_frame)
        self.prev_button.setText("<")
        self.prev_button.setToolTip("Previous page")
        self.prev_button.clicked.connect(self.controller.previous_page)
        top_layout.addWidget(self.prev_button)

        self.page_label = QLabel("", self.top_frame)
        top_layout.addWidget(self.page_label)

        self.next_button = QToolButton(self.top_frame)
        self.next_button.setText(">")
        self.next_button.setToolTip("Next page")
        self.next_button.clicked.connect(self.controller.next_page)
        top_layout.addWidget(self.next_button)

        top_layout.addStretch()

        self.save_button = QPushButton("Save", self.top_frame)
        self.save_button.setToolTip("Save the annotated document (Ctrl+S)")
        self.save_button.setShortcut("Ctrl+S")
        self.save_button.clicked.connect(self.save_document)
        top_layout.addWidget(self.save_button)

        self.save_as_button = QPushButton("Save As", self.top_frame)
        self.save_as_menu = QMenu(self.save_as_button)
        self.save_as_button.setMenu(self.save_as_menu)
        top_layout.addWidget(self.save_as_button)

        self.theme_button = QToolButton(self.top_frame)
        self.theme_button.setToolTip("Toggle dark mode")
        self.theme_button.clicked.connect(self.toggle_mode)
        top_layout.addWidget(self.theme_button)

        # TOOLS
        self.annotation_toolbar = AnnotationToolbar()
        self.annotation_toolbar.tool_changed.connect(self._on_tool_changed)

        # PREVIEW + LIST
        self.drop_frame = QFrame()
        self.drop_frame.setObjectName("DropFrame")
        drop_layout = QVBoxLayout(self.drop_frame)
        drop_layout.setContentsMargins(2, 2, 2, 2)

        self.document_view = DocumentView(self.drop_frame)
        drop_layout.addWidget(self.document_view)

        self.drop_hint = QLabel("Drop a PDF, Word, Excel, image or Outlook file here", self.drop_frame)
        self.drop_hint.setObjectName("statusLabel")
        self.drop_hint.setAlignment(Qt.AlignCenter)
        drop_layout.addWidget(self.drop_hint)

        self.annotation_list = AnnotationListPanel()

        content = QWidget()
        content_layout = QHBoxLayout(content)
        content_layout.setContentsMargins(0, 0, 0, 0)
        content_layout.setSpacing(0)
        content_layout.addWidget(self.drop_frame, 1)
        content_layout.addWidget(self.annotation_list)

        central = QWidget()
        main_layout = QVBoxLayout(central)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)
        main_layout.addWidget(self.top_frame)
        main_layout.addWidget(self.annotation_toolbar)
        main_layout.addWidget(content, 1)
        self.setCentralWidget(central)

        self.text_popup = TextInputPopup(self)
        self.text_popup.submitted.connect(self.controller.submit_text)
        self.text_popup.cancelled.connect(self.controller.cancel_text)

        overlay = self.document_view.overlay
        self.controller.attach_surface(overlay)
        overlay.pointer_pressed.connect(self.controller.pointer_down)
        overlay.pointer_moved.connect(self.controller.pointer_move)
        overlay.pointer_released.connect(self.controller.pointer_up)
        overlay.clicked.connect(self.controller.click)

    def _connect_controller(self):
        c = self.controller
        c.document_loaded.connect(self._on_document_loaded)
        c.document_closed.connect(self._update_document_state)
        c.image_ready.connect(self.document_view.set_image)
        c.viewport_changed.connect(self._on_viewport_changed)
        c.annotations_changed.connect(self._refresh_annotations)
        c.preview_changed.connect(self.document_view.overlay.set_preview)
        c.text_entry_requested.connect(self.text_popup.show_at)
        c.export_progress.connect(self._on_export_progress)
        c.export_finished.connect(self._on_export_finished)
        c.error_occurred.connect(self._show_error)

    # --- Loading ---

    def open_document(self):
        file_path, _ = QFileDialog.getOpenFileName(
            self, "Open Document", self.settings.last_open_dir, OPEN_FILE_FILTER
        )
        if file_path:
            self.load_document(file_path)

    def load_document(self, file_path: str) -> bool:
        if self.controller.has_annotations and not warning_manager.show_confirmation(
            self,
            WarningType.DISCARD_ANNOTATIONS,
            "Discard Annotations",
            "Opening another document discards the current annotations. Continue?",
        ):
            return False

        self.text_popup.hide()
        return self.controller.open_file(file_path)

    def _on_document_loaded(self, handle):
        if self.controller.session.viewport is None:
            self.document_view.clear()
        self.file_name_label.setText(handle.name)
        parts = [handle.mime_type or "unknown type", f"{len(handle.raw_bytes) / 1024:.1f} KB"]
        if handle.native_dimensions:
            w, h = handle.native_dimensions
            parts.append(f"{w:g} x {h:g}")
        self.metadata_label.setText(" | ".join(parts))
        self._update_document_state()

    def _update_document_state(self):
        """Enable the controls that depend on a loaded document."""
        loaded = self.controller.document is not None
        targets = self.controller.export_targets() if loaded else []
        paginated = self.controller.session.is_paginated

        if not loaded:
            self.file_name_label.setText("No Document Loaded")
            self.metadata_label.setText("")
            self.document_view.clear()

        self.drop_hint.setVisible(not loaded)
        self.save_button.setEnabled(bool(targets))
        if targets:
            self.save_button.setText(f"Save {targets[0].extension.upper()}")

        self.save_as_menu.clear()
        for target in targets[1:]:
            action = self.save_as_menu.addAction(f"{target.label} (.{target.extension})")
            action.triggered.connect(lambda checked=False, t=target: self.export_document(t))
        self.save_as_button.setVisible(len(targets) > 1)

        for widget in (self.prev_button, self.page_label, self.next_button):
            widget.setVisible(paginated)

    # --- Preview ---

    def _on_viewport_changed(self, viewport):
        self.document_view.set_viewport(viewport)
        total = getattr(viewport, 'total_pages', None)
        if total:
            index = viewport.current_page_index
            self.page_label.setText(f"{index + 1} / {total}")
            self.prev_button.setEnabled(index > 0)
            self.next_button.setEnabled(index + 1 < total)
        self._refresh_annotations()

    def _refresh_annotations(self):
        session = self.controller.session
        if session.is_paginated:
            visible = session.annotations.for_page(session.current_page_index())
        else:
            visible = session.annotations.annotations
        self.document_view.overlay.set_annotations(visible)
        self.annotation_list.set_annotations(session.annotations.annotations)

    def _on_tool_changed(self, tool):
        # hide() emits no cancelled signal
        self.text_popup.hide()
        self.controller.cancel_text()
        self.controller.select_tool(tool)
        self.document_view.overlay.set_tool_cursor(tool is not None)

    # --- Export ---

    def save_document(self):
        targets = self.controller.export_targets()
        if targets:
            self.export_document(targets[0])

    def export_document(self, target: ExportTarget) -> bool:
        """Ask for a destination and export in the background."""
        if self.controller.document is None:
            QMessageBox.warning(self, "No Document", "No document is currently loaded.")
            return False

        default_path = self.controller.default_export_path(target, self.settings.last_open_dir)
        output_path, _ = QFileDialog.getSaveFileName(
            self,
            f"Save {target.label}",
            default_path,
            f"{target.label} (*.{target.extension})"
        )
        if not output_path:
            return False

        if self.controller.export_to(output_path, target) is None:
            return False

        self.progress_dialog = QProgressDialog("Preparing export...", None, 0, 0, self)
        self.progress_dialog.setWindowTitle("Saving")
        self.progress_dialog.setWindowModality(Qt.WindowModal)
        self.progress_dialog.setMinimumDuration(0)
        self.progress_dialog.setCancelButton(None)
        self.progress_dialog.show()
        return True

    def _on_export_progress(self, message: str):
        if self.progress_dialog is not None:
            self.progress_dialog.setLabelText(message)

    def _on_export_finished(self, success: bool, message: str):
        if self.progress_dialog is not None:
            self.progress_dialog.close()
            self.progress_dialog = None

        if success:
            QMessageBox.information(self, "Export Complete", message)
        else:
            QMessageBox.critical(self, "Export Failed", message)

    def _show_error(self, title: str, message: str):
        if self.progress_dialog is not None:
            self.progress_dialog.close()
            self.progress_dialog = None
        QMessageBox.critical(self, title, message)

    # --- Drag and drop ---

    def dragEnterEvent(self, event):
        if event.mimeData().hasUrls():
            event.acceptProposedAction()
            self._set_drag_active(True)
        else:
            event.ignore()

    def dragLeaveEvent(self, event):
        self._set_drag_active(False)
        super().dragLeaveEvent(event)

    def dropEvent(self, event):
        self._set_drag_active(False)
        paths = [url.toLocalFile() for url in event.mimeData().urls() if url.isLocalFile()]
        if not paths:
            event.ignore()
            return
        event.acceptProposedAction()
        if len(paths) > 1:
            logger.info("Dropped %d files, opening only %s", len(paths), os.path.basename(paths[0]))
        self.load_document(paths[0])

    def _set_drag_active(self, active: bool):
        self.drop_frame.setProperty("dragActive", "true" if active else "false")
        self.drop_frame.style().unpolish(self.drop_frame)
        self.drop_frame.style().polish(self.drop_frame)

    # --- Window ---

    def keyPressEvent(self, event):
        if event.key() == Qt.Key_Escape:
            self.annotation_toolbar.set_tool(None)
        elif event.key() in (Qt.Key_Right, Qt.Key_PageDown):
            self.controller.next_page()
        elif event.key() in (Qt.Key_Left, Qt.Key_PageUp):
            self.controller.previous_page()
        else:
            super().keyPressEvent(event)
            return
        event.accept()

    def toggle_mode(self):
        self.settings.dark_mode = not self.settings.dark_mode
        self.apply_style()

    def apply_style(self):
        ThemeManager.apply_theme(self, self.settings.dark_mode)
        self.theme_button.setText("Light" if self.settings.dark_mode else "Dark")

    def closeEvent(self, event):
        """Join background threads and persist settings before closing."""
        self.controller.shutdown()
        try:
            self.settings.save()
        except OSError as e:
            logger.warning("Could not save settings: %s", e)
        event.accept()
