"""
Common export contract and output naming.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

from PyQt5.QtCore import QBuffer, QByteArray, QIODevice
from PyQt5.QtGui import QImage

from docmark.core.errors import ExportError


class ExportTarget(Enum):
    PDF = ("pdf", "application/pdf")
    PNG = ("png", "image/png")
    DOCX = ("docx", "application/vnd.openxmlformats-officedocument.wordprocessingml.document")
    XLSX = ("xlsx", "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet")
    EML = ("eml", "message/rfc822")

    @property
    def extension(self) -> str:
        return self.value[0]

    @property
    def mime_type(self) -> str:
        return self.value[1]

    @property
    def label(self) -> str:
        return {
            ExportTarget.PDF: "PDF Document",
            ExportTarget.PNG: "PNG Image",
            ExportTarget.DOCX: "Word Document",
            ExportTarget.XLSX: "Excel Workbook",
            ExportTarget.EML: "Mail Message",
        }[self]


@dataclass(frozen=True)
class ExportResult:
    """Bytes of an exported document, ready to be written out."""
    data: bytes = field(repr=False)
    mime_type: str
    filename: str


def suggested_filename(name: str, extension: str) -> str:
    """
    Output file name for an export.

    The last extension is stripped unless the dot is the first character,
    then ``_annotated.<extension>`` is appended.

    Args:
        name: Original file name
        extension: Extension of the target format, without the dot
    """
    ext_index = name.rfind('.')
    base = name[:ext_index] if ext_index > 0 else name
    return f"{base}_annotated.{extension}"


def encode_png(image: QImage) -> bytes:
    """Encode an image as PNG bytes."""
    buffer_bytes = QByteArray()
    buffer = QBuffer(buffer_bytes)
    buffer.open(QIODevice.WriteOnly)
    try:
        if not image.save(buffer, "PNG"):
            raise ExportError("Failed to encode the annotated image.")
    finally:
        buffer.close()
    return bytes(buffer_bytes)


class ExportCompositor:
    """Burns an annotation collection into a new document of one family."""

    target = ExportTarget.PNG

    def export(self, handle, annotations: Iterable, viewport,
               target: Optional[ExportTarget] = None) -> ExportResult:
        """
        Produce the annotated document.

        Args:
            handle: The loaded DocumentHandle
            annotations: Annotations in commit order
            viewport: Viewport the annotations were authored against
            target: Output format, defaults to the compositor's native target

        Returns:
            ExportResult with bytes, MIME type and suggested file name

        Raises:
            ExportError: If decoding or re-encoding fails
        """
        raise NotImplementedError

    def targets(self):
        """Formats this compositor can produce, native target first."""
        return [self.target]

    def _result(self, handle, data: bytes, target: ExportTarget) -> ExportResult:
        return ExportResult(
            data=data,
            mime_type=target.mime_type,
            filename=suggested_filename(handle.name, target.extension),
        )
