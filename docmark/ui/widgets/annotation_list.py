"""
Side panel listing the committed annotations.
"""
import pyperclip
from PyQt5.QtWidgets import QFrame, QHBoxLayout, QLabel, QListWidget, QPushButton, QVBoxLayout


class AnnotationListPanel(QFrame):
    """Shows one line per annotation, newest last, with copy-to-clipboard."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("AnnotationListPanel")
        self.setMinimumWidth(240)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(8, 8, 8, 8)
        layout.setSpacing(6)

        header = QHBoxLayout()
        self.count_label = QLabel("Annotations (0)", self)
        self.count_label.setStyleSheet("font-weight: bold;")
        header.addWidget(self.count_label)
        header.addStretch()

        self.copy_button = QPushButton("Copy", self)
        self.copy_button.setToolTip("Copy the annotation list to the clipboard")
        self.copy_button.clicked.connect(self.copy_to_clipboard)
        header.addWidget(self.copy_button)
        layout.addLayout(header)

        self.list_widget = QListWidget(self)
        layout.addWidget(self.list_widget)

        self.set_annotations([])

    def set_annotations(self, annotations) -> None:
        self.list_widget.clear()
        for ann in annotations:
            label = ann.describe()
            if ann.page_index:
                label = f"p{ann.page_index + 1} {label}"
            self.list_widget.addItem(label)
        count = self.list_widget.count()
        self.count_label.setText(f"Annotations ({count})")
        self.copy_button.setEnabled(count > 0)

    def summary_text(self) -> str:
        return "\n".join(
            self.list_widget.item(i).text() for i in range(self.list_widget.count())
        )

    def copy_to_clipboard(self) -> None:
        text = self.summary_text()
        if text:
            pyperclip.copy(text)
