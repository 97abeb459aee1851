"""
Error taxonomy shared by the decoding, rendering and export layers.
"""
from typing import Optional


class DocmarkError(Exception):
    """Base class for all errors surfaced to the user."""

    title = "Error"


class UnsupportedFormatError(DocmarkError):
    """Raised at intake when a file is outside the supported allowlist."""

    title = "Unsupported File"


class DecodeError(DocmarkError):
    """Raised when a decoder collaborator cannot parse the source bytes."""

    title = "Could Not Open Document"


class RenderError(DocmarkError):
    """Raised when a page or container fails to rasterize."""

    title = "Render Failed"


class ExportError(DocmarkError):
    """
    Raised when re-encoding or serializing an export fails.

    Args:
        message: Description of the failure
        suggestion: Optional hint pointing the user at another export format
    """

    title = "Export Failed"

    def __init__(self, message: str, suggestion: Optional[str] = None):
        super().__init__(message)
        self.suggestion = suggestion

    def user_message(self) -> str:
        """Message shown in the alert, including the suggestion if any."""
        if self.suggestion:
            return f"{self} {self.suggestion}"
        return str(self)


class InvalidAnnotationError(DocmarkError):
    """Raised when an annotation would break the collection invariants."""

    title = "Invalid Annotation"
