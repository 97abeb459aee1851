"""
Dark and light stylesheets for the Docmark window.
"""
from PyQt5.QtWidgets import QWidget

from .models import ThemeColors


class ThemeManager:
    """Builds the stylesheet for the top bar, tool strip, preview and annotation list."""

    DARK_THEME = ThemeColors(
        window="#2e2e2e",
        panel="#3e3e3e",
        control="#4e4e4e",
        control_hover="#5a5a5a",
        text="#f0f0f0",
        text_muted="#8899AA",
        accent="#4a9eff",
        accent_hover="#3a8eef",
        border="#555555",
        drop_highlight="#4a9eff",
    )

    LIGHT_THEME = ThemeColors(
        window="#f0f0f0",
        panel="#ffffff",
        control="#e0e0e0",
        control_hover="#d0d0d0",
        text="#2e2e2e",
        text_muted="#7A899C",
        accent="#4a9eff",
        accent_hover="#3a8eef",
        border="#cccccc",
        drop_highlight="#0059c3",
    )

    @classmethod
    def get_theme_colors(cls, dark_mode: bool) -> ThemeColors:
        return cls.DARK_THEME if dark_mode else cls.LIGHT_THEME

    @classmethod
    def apply_theme(cls, widget: QWidget, dark_mode: bool) -> None:
        """
        Apply theme to a widget and its children.

        Args:
            widget: Widget to style
            dark_mode: Whether to use dark theme
        """
        widget.setStyleSheet(cls._generate_stylesheet(cls.get_theme_colors(dark_mode)))

    @classmethod
    def _generate_stylesheet(cls, theme: ThemeColors) -> str:
        return f"""
            QWidget {{
                background-color: {theme.window};
                color: {theme.text};
            }}
            QLabel {{
                background-color: transparent;
            }}
            #metadataLabel, #statusLabel {{
                color: {theme.text_muted};
            }}

            /* Top bar: open, page navigation, save and theme toggle */
            #TopFrame {{
                background-color: {theme.panel};
                border-bottom: 1px solid {theme.border};
            }}
            #TopFrame QPushButton, #TopFrame QToolButton, #TextInputPopup QPushButton,
            #AnnotationListPanel QPushButton {{
                background-color: {theme.control};
                border: none;
                border-radius: 6px;
                padding: 6px 14px;
            }}
            #TopFrame QPushButton:hover, #TopFrame QToolButton:hover,
            #TextInputPopup QPushButton:hover, #AnnotationListPanel QPushButton:hover {{
                background-color: {theme.control_hover};
            }}
            #TopFrame QPushButton:disabled, #TopFrame QToolButton:disabled {{
                color: {theme.text_muted};
            }}
            QMenu {{
                background-color: {theme.panel};
                border: 1px solid {theme.border};
            }}
            QMenu::item:selected {{
                background-color: {theme.accent};
                color: white;
            }}

            /* Annotation tools, one checked at a time */
            #AnnotationToolbar {{
                border: 1px solid {theme.border};
                border-radius: 8px;
            }}
            #AnnotationToolbar QToolButton {{
                background-color: transparent;
                border-radius: 4px;
                padding: 4px 10px;
            }}
            #AnnotationToolbar QToolButton:checked {{
                background-color: {theme.accent};
                color: white;
            }}
            #AnnotationToolbar QToolButton:checked:hover {{
                background-color: {theme.accent_hover};
            }}

            /* Preview and drop target */
            #DropFrame {{
                border: 2px solid transparent;
            }}
            #DropFrame[dragActive="true"] {{
                border: 2px dashed {theme.drop_highlight};
            }}

            /* Text annotation entry */
            #TextInputPopup {{
                background-color: {theme.panel};
                border: 1px solid {theme.border};
                border-radius: 8px;
            }}
            #TextInputPopup QLineEdit {{
                background-color: {theme.window};
                border: 1px solid {theme.border};
                border-radius: 4px;
                padding: 4px 8px;
            }}
            #TextInputPopup QLineEdit:focus {{
                border-color: {theme.accent};
            }}

            /* Annotation list */
            #AnnotationListPanel QListWidget {{
                background-color: {theme.panel};
                border: 1px solid {theme.border};
            }}
            #AnnotationListPanel QListWidget::item:selected {{
                background-color: {theme.accent};
                color: white;
            }}
        """
