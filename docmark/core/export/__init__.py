"""
Export compositors: burn annotations into a new document.
"""
from .base import ExportCompositor, ExportResult, ExportTarget, suggested_filename
from .export_worker import ExportWorker
from .flowed_exporter import FlowedExporter, export_targets
from .image_exporter import ImageExporter
from .pdf_exporter import PDFExporter

__all__ = [
    'ExportCompositor',
    'ExportResult',
    'ExportTarget',
    'ExportWorker',
    'FlowedExporter',
    'ImageExporter',
    'PDFExporter',
    'export_targets',
    'suggested_filename',
]
