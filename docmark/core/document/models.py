"""
Document handle and viewport models.
"""
import mimetypes
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class DocumentFamily(Enum):
    IMAGE = "image"
    PDF = "pdf"
    WORD = "word"
    SPREADSHEET = "spreadsheet"
    MAIL = "mail"


class DocumentKind(Enum):
    """How a family is previewed and exported."""
    RASTER = "raster"        # ImageDoc
    PAGINATED = "paginated"  # VectorDoc
    FLOWED = "flowed"        # FlowedDoc


FAMILY_KINDS = {
    DocumentFamily.IMAGE: DocumentKind.RASTER,
    DocumentFamily.PDF: DocumentKind.PAGINATED,
    DocumentFamily.WORD: DocumentKind.FLOWED,
    DocumentFamily.SPREADSHEET: DocumentKind.FLOWED,
    DocumentFamily.MAIL: DocumentKind.FLOWED,
}


@dataclass(frozen=True)
class DocumentHandle:
    """An uploaded document. Immutable; the next upload replaces it."""
    name: str
    mime_type: str
    raw_bytes: bytes = field(repr=False)
    family: Optional[DocumentFamily] = None
    native_dimensions: Optional[Tuple[float, float]] = None

    @property
    def kind(self) -> Optional[DocumentKind]:
        return FAMILY_KINDS.get(self.family) if self.family else None

    @property
    def extension(self) -> str:
        return os.path.splitext(self.name)[1].lower().lstrip('.')

    @classmethod
    def from_path(cls, file_path: str) -> "DocumentHandle":
        """
        Read a file from disk into a handle.

        Args:
            file_path: Path to the file

        Returns:
            Handle with the file name, guessed MIME type and bytes
        """
        with open(file_path, 'rb') as f:
            raw = f.read()
        mime_type, _ = mimetypes.guess_type(file_path)
        return cls(
            name=os.path.basename(file_path),
            mime_type=mime_type or "",
            raw_bytes=raw,
        )


@dataclass(frozen=True)
class RasterViewport:
    """Display surface of an image or a flowed HTML container."""
    display_width: float
    display_height: float


@dataclass(frozen=True)
class PaginatedViewport:
    """Display surface of the current page of a paginated document."""
    page_width: float
    page_height: float
    display_width: float
    display_height: float
    current_page_index: int = 0
    total_pages: int = 1

    @property
    def zoom(self) -> float:
        return self.display_width / self.page_width if self.page_width else 1.0

    def for_page(self, page_index: int, page_width: float,
                 page_height: float) -> "PaginatedViewport":
        """
        Viewport another page would have at the same zoom.

        Args:
            page_index: 0-based page index
            page_width: Page width in points
            page_height: Page height in points
        """
        zoom = self.zoom
        return PaginatedViewport(
            page_width=page_width,
            page_height=page_height,
            display_width=page_width * zoom,
            display_height=page_height * zoom,
            current_page_index=page_index,
            total_pages=self.total_pages,
        )
