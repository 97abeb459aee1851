from dataclasses import dataclass


@dataclass(frozen=True)
class ThemeColors:
    """Color roles used by the Docmark stylesheet."""
    # Surfaces
    window: str
    panel: str
    control: str
    control_hover: str

    # Text
    text: str
    text_muted: str

    # Checked tool and list selection
    accent: str
    accent_hover: str

    border: str
    # Outline of the preview while a file is dragged over the window
    drop_highlight: str
