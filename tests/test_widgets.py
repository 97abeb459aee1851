"""
Offscreen smoke tests for the main window and its widgets.
"""
import pytest

from docmark.core.annotations import Annotation, AnnotationKind
from docmark.styles import ThemeManager
from docmark.ui import MainWindow
from docmark.ui.toolbars import AnnotationToolbar
from docmark.ui.widgets import AnnotationListPanel
from docmark.utils import AppSettings


@pytest.fixture
def window(tmp_path, png_bytes):
    path = tmp_path / "scan.png"
    path.write_bytes(png_bytes)
    window = MainWindow(str(path), AppSettings())
    yield window
    window.controller.shutdown()
    window.deleteLater()


class TestMainWindow:
    def test_loaded_image_sizes_overlay(self, window):
        overlay = window.document_view.overlay
        assert (overlay.width(), overlay.height()) == (200, 100)
        assert window.file_name_label.text() == "scan.png"
        assert window.save_button.isEnabled()
        assert not window.save_as_button.isVisibleTo(window)

    def test_tool_selection_reaches_interaction(self, window):
        window.annotation_toolbar.set_tool(AnnotationKind.HIGHLIGHT)
        assert window.controller.session.interaction.tool is AnnotationKind.HIGHLIGHT

    def test_drawing_after_abandoned_text_entry(self, window):
        """Switching away from the text tool with the popup open still lets shapes draw."""
        overlay = window.document_view.overlay
        left, top, _, _ = overlay.bounding_rect()

        window.annotation_toolbar.set_tool(AnnotationKind.TEXT)
        overlay.clicked.emit((left + 70, top + 35))
        window.annotation_toolbar.set_tool(AnnotationKind.RECTANGLE)

        assert not window.text_popup.isVisible()
        assert not window.controller.session.interaction.is_text_pending

        overlay.pointer_pressed.emit((left + 10, top + 10))
        overlay.pointer_released.emit((left + 50, top + 40))

        annotations = window.controller.session.annotations.annotations
        assert len(annotations) == 1
        assert annotations[0].kind is AnnotationKind.RECTANGLE

    def test_committed_annotations_listed(self, window):
        session = window.controller.session
        session.annotations.add(
            Annotation.shape(session.id_generator.next_id(), AnnotationKind.LINE, (0, 0), (5, 5))
        )
        window.controller.annotations_changed.emit()

        assert window.annotation_list.list_widget.count() == 1
        assert len(window.document_view.overlay.annotations) == 1


class TestAnnotationToolbar:
    def test_clicking_active_tool_turns_it_off(self):
        toolbar = AnnotationToolbar()
        changes = []
        toolbar.tool_changed.connect(changes.append)

        toolbar.buttons[AnnotationKind.CIRCLE].click()
        toolbar.buttons[AnnotationKind.CIRCLE].click()

        assert changes == [AnnotationKind.CIRCLE, None]
        assert toolbar.current_tool is None

    def test_only_one_tool_checked(self):
        toolbar = AnnotationToolbar()
        toolbar.buttons[AnnotationKind.LINE].click()
        toolbar.buttons[AnnotationKind.TEXT].click()

        checked = [k for k, b in toolbar.buttons.items() if b.isChecked()]
        assert checked == [AnnotationKind.TEXT]


class TestAnnotationListPanel:
    def test_summary_text(self):
        panel = AnnotationListPanel()
        panel.set_annotations([
            Annotation.text_mark(1, (5, 6), "hi"),
            Annotation.shape(2, AnnotationKind.LINE, (0, 0), (1, 1), page_index=1),
        ])

        assert panel.summary_text() == 'Text: "hi" at (5, 6)\np2 line from (0, 0) to (1, 1)'
        assert panel.copy_button.isEnabled()


class TestTheme:
    def test_toggle_switches_stylesheet(self, window):
        dark = window.styleSheet()
        assert ThemeManager.DARK_THEME.drop_highlight in dark

        window.toggle_mode()

        light = window.styleSheet()
        assert light != dark
        assert ThemeManager.LIGHT_THEME.drop_highlight in light
        assert not window.settings.dark_mode

    def test_stylesheet_targets_docmark_widgets(self):
        stylesheet = ThemeManager._generate_stylesheet(ThemeManager.LIGHT_THEME)
        for name in ("#TopFrame", "#AnnotationToolbar", "#DropFrame", "#TextInputPopup", "#AnnotationListPanel"):
            assert name in stylesheet
