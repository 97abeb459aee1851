from typing import Dict, Optional

from PyQt5.QtCore import pyqtSignal
from PyQt5.QtWidgets import QFrame, QHBoxLayout, QLabel, QToolButton

from docmark.core.annotations import AnnotationKind


class AnnotationToolbar(QFrame):
    """Row of the six annotation tools. At most one is active."""

    tool_changed = pyqtSignal(object)  # AnnotationKind or None

    TOOLS = (
        (AnnotationKind.LINE, "Line", "Draw a line"),
        (AnnotationKind.RECTANGLE, "Rectangle", "Draw a rectangle outline"),
        (AnnotationKind.CIRCLE, "Circle", "Draw a circle from its center"),
        (AnnotationKind.TEXT, "Text", "Click to place text"),
        (AnnotationKind.HIGHLIGHT, "Highlight", "Drag a translucent yellow box"),
        (AnnotationKind.OPAQUE, "Redact", "Drag an opaque black box"),
    )

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("AnnotationToolbar")
        self.current_tool: Optional[AnnotationKind] = None
        self.buttons: Dict[AnnotationKind, QToolButton] = {}
        self.setup_ui()

    def setup_ui(self):
        layout = QHBoxLayout(self)
        layout.setContentsMargins(10, 6, 10, 6)
        layout.setSpacing(4)

        label = QLabel("Tools:", self)
        label.setStyleSheet("color: #8899AA;")
        layout.addWidget(label)

        for kind, text, tooltip in self.TOOLS:
            button = QToolButton(self)
            button.setText(text)
            button.setToolTip(tooltip)
            button.setCheckable(True)
            button.clicked.connect(lambda checked, k=kind: self._on_tool_clicked(k, checked))
            layout.addWidget(button)
            self.buttons[kind] = button

        layout.addStretch()

    def set_tool(self, tool: Optional[AnnotationKind]) -> None:
        """Activate a tool (None deactivates) and notify listeners."""
        for kind, button in self.buttons.items():
            button.setChecked(kind is tool)
        if tool is not self.current_tool:
            self.current_tool = tool
            self.tool_changed.emit(tool)

    def _on_tool_clicked(self, kind: AnnotationKind, checked: bool):
        # Clicking the active tool again turns it off
        self.set_tool(kind if checked else None)
