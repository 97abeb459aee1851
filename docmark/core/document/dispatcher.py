"""
Classifies uploads and wires the matching renderer/exporter pair.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from docmark.core.errors import UnsupportedFormatError
from .decoders import MailMessageDecoder, SpreadsheetHtmlConverter, WordHtmlConverter
from .models import FAMILY_KINDS, DocumentFamily, DocumentKind

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = {
    'pdf': DocumentFamily.PDF,
    'doc': DocumentFamily.WORD,
    'docx': DocumentFamily.WORD,
    'xls': DocumentFamily.SPREADSHEET,
    'xlsx': DocumentFamily.SPREADSHEET,
    'jpg': DocumentFamily.IMAGE,
    'jpeg': DocumentFamily.IMAGE,
    'png': DocumentFamily.IMAGE,
    'msg': DocumentFamily.MAIL,
}

SUPPORTED_MIME_TYPES = {
    'application/pdf': DocumentFamily.PDF,
    'application/msword': DocumentFamily.WORD,
    'application/vnd.openxmlformats-officedocument.wordprocessingml.document': DocumentFamily.WORD,
    'application/vnd.ms-excel': DocumentFamily.SPREADSHEET,
    'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet': DocumentFamily.SPREADSHEET,
    'image/jpeg': DocumentFamily.IMAGE,
    'image/png': DocumentFamily.IMAGE,
    'application/vnd.ms-outlook': DocumentFamily.MAIL,
}

UNSUPPORTED_MESSAGE = (
    "File type not supported. Please upload PDF, DOC, DOCX, XLS, XLSX, JPG, PNG, or MSG files."
)

OPEN_FILE_FILTER = (
    "Documents (*.pdf *.doc *.docx *.xls *.xlsx *.jpg *.jpeg *.png *.msg);;All Files (*)"
)


def classify(name: str, mime_type: Optional[str] = None) -> DocumentFamily:
    """
    Map an upload to one of the supported families.

    The extension wins over the MIME type, since .msg and Excel files often
    arrive with a generic or missing type.

    Args:
        name: File name
        mime_type: MIME type reported for the file, if any

    Raises:
        UnsupportedFormatError: If neither the extension nor the MIME type is
            in the allowlist
    """
    ext_index = name.rfind('.')
    extension = name[ext_index + 1:].lower() if ext_index >= 0 else ""

    family = SUPPORTED_EXTENSIONS.get(extension)
    if family is None and mime_type:
        family = SUPPORTED_MIME_TYPES.get(mime_type.lower())
    if family is None:
        raise UnsupportedFormatError(UNSUPPORTED_MESSAGE)
    return family


@dataclass
class FormatBinding:
    """Renderer/exporter pair chosen once per upload."""
    family: DocumentFamily
    kind: DocumentKind
    renderer: object
    exporter: object


def converter_for(family: DocumentFamily):
    """HTML converter for a flowed family."""
    return {
        DocumentFamily.WORD: WordHtmlConverter,
        DocumentFamily.SPREADSHEET: SpreadsheetHtmlConverter,
        DocumentFamily.MAIL: MailMessageDecoder,
    }[family]()


def dispatch(family: DocumentFamily, settings=None) -> FormatBinding:
    """
    Build the renderer/exporter pair for a family.

    Args:
        family: Classified document family
        settings: Optional AppSettings (render zoom, flowed width)
    """
    from docmark.core.export import FlowedExporter, ImageExporter, PDFExporter
    from docmark.core.render import (
        FlowedPreviewRenderer,
        ImagePreviewRenderer,
        PdfPreviewRenderer,
    )

    kind = FAMILY_KINDS[family]

    if kind is DocumentKind.RASTER:
        renderer, exporter = ImagePreviewRenderer(), ImageExporter()
    elif kind is DocumentKind.PAGINATED:
        zoom = settings.render_zoom if settings else None
        renderer = PdfPreviewRenderer(zoom) if zoom else PdfPreviewRenderer()
        exporter = PDFExporter()
    else:
        converter = converter_for(family)
        width = settings.flowed_width if settings else None
        if width:
            renderer = FlowedPreviewRenderer(converter, width)
        else:
            renderer = FlowedPreviewRenderer(converter)
        exporter = FlowedExporter(family, converter, renderer)

    logger.debug("Dispatched %s to %s", family.value, type(renderer).__name__)
    return FormatBinding(family=family, kind=kind, renderer=renderer, exporter=exporter)
