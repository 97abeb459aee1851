"""
Document handles, viewports and decoder collaborators.
"""
from .decoders import (
    MailMessageDecoder,
    PdfDecoder,
    SpreadsheetHtmlConverter,
    WordHtmlConverter,
)
from .models import (
    DocumentFamily,
    DocumentHandle,
    DocumentKind,
    PaginatedViewport,
    RasterViewport,
)

__all__ = [
    'DocumentFamily',
    'DocumentHandle',
    'DocumentKind',
    'PaginatedViewport',
    'RasterViewport',
    'PdfDecoder',
    'WordHtmlConverter',
    'SpreadsheetHtmlConverter',
    'MailMessageDecoder',
]
