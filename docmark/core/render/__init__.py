"""
Preview renderers and the shared annotation painter.
"""
from .base import PreviewRenderer, RenderState
from .flowed_renderer import FlowedPreviewRenderer
from .image_renderer import ImagePreviewRenderer
from .painter import paint_annotation, paint_annotations
from .pdf_renderer import PageRenderWorker, PdfPreviewRenderer, RenderTask

__all__ = [
    'PreviewRenderer',
    'RenderState',
    'ImagePreviewRenderer',
    'PdfPreviewRenderer',
    'FlowedPreviewRenderer',
    'PageRenderWorker',
    'RenderTask',
    'paint_annotation',
    'paint_annotations',
]
