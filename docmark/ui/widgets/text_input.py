from PyQt5.QtCore import QPoint, Qt, pyqtSignal
from PyQt5.QtWidgets import QFrame, QHBoxLayout, QLineEdit, QPushButton


class TextInputPopup(QFrame):
    """Inline entry shown at the click point of the text tool."""

    submitted = pyqtSignal(str)
    cancelled = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("TextInputPopup")

        layout = QHBoxLayout(self)
        layout.setContentsMargins(8, 6, 8, 6)
        layout.setSpacing(6)

        self.line_edit = QLineEdit(self)
        self.line_edit.setPlaceholderText("Enter text")
        self.line_edit.setMinimumWidth(180)
        self.line_edit.returnPressed.connect(self._submit)
        layout.addWidget(self.line_edit)

        self.add_button = QPushButton("Add", self)
        self.add_button.clicked.connect(self._submit)
        layout.addWidget(self.add_button)

        self.adjustSize()
        self.hide()

    def show_at(self, screen_point) -> None:
        """Open the popup with its top-left at a global screen point."""
        local = self.parentWidget().mapFromGlobal(
            QPoint(int(screen_point[0]), int(screen_point[1]))
        )
        self.line_edit.clear()
        self.move(local)
        self.show()
        self.raise_()
        self.line_edit.setFocus()

    def keyPressEvent(self, event):
        if event.key() == Qt.Key_Escape:
            self.hide()
            self.cancelled.emit()
            return
        super().keyPressEvent(event)

    def _submit(self):
        text = self.line_edit.text()
        self.hide()
        self.submitted.emit(text)
