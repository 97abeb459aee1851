import logging
from typing import Dict, Iterable, List

import fitz  # PyMuPDF

from docmark.core.annotations import BOX_KINDS, Annotation, AnnotationKind
from docmark.core.annotations.styles import TEXT_SIZE, VECTOR_FONT_NAME, VECTOR_STYLES
from docmark.core.document.models import PaginatedViewport
from docmark.core.errors import ExportError
from docmark.core.geometry import (
    native_rect_to_page_space,
    native_to_page_space,
    to_native_point,
    to_native_radius,
    to_native_rect,
)
from .base import ExportCompositor, ExportTarget

logger = logging.getLogger(__name__)


class PDFExporter(ExportCompositor):
    """Draws annotations into a PDF as native vector content."""

    target = ExportTarget.PDF

    def export(self, handle, annotations: Iterable[Annotation], viewport,
               target=None):
        """
        Export annotations into a copy of the PDF.

        Each annotation goes onto the page it was drawn on; other pages are
        left untouched and the whole document is re-serialized.

        Args:
            handle: DocumentHandle holding the original PDF bytes
            annotations: Annotations in commit order
            viewport: PaginatedViewport of the page shown while annotating

        Returns:
            ExportResult with the new PDF bytes
        """
        if target not in (None, ExportTarget.PDF):
            raise ExportError(f"PDF documents cannot be exported as {target.label}.")
        if not isinstance(viewport, PaginatedViewport):
            raise ExportError("The PDF page has not been rendered yet.")

        try:
            doc = fitz.open(stream=handle.raw_bytes, filetype="pdf")
        except Exception as e:
            raise ExportError(f"Failed to open the PDF for export: {e}") from e

        try:
            # Group annotations by page, keeping commit order within a page
            annotations_by_page: Dict[int, List[Annotation]] = {}
            for ann in annotations:
                annotations_by_page.setdefault(ann.page_index, []).append(ann)

            for page_idx, page_annotations in annotations_by_page.items():
                if page_idx >= len(doc):
                    logger.warning("Skipping annotations for missing page %d", page_idx + 1)
                    continue

                page = doc[page_idx]
                page_viewport = viewport.for_page(
                    page_idx, page.rect.width, page.rect.height
                )
                for ann in page_annotations:
                    self._add_annotation_to_page(page, ann, page_viewport)

            data = doc.tobytes(garbage=3, deflate=True)
        except ExportError:
            raise
        except Exception as e:
            raise ExportError(f"Failed to export annotations to PDF: {e}") from e
        finally:
            doc.close()

        logger.info("Exported %d page(s) with annotations", len(annotations_by_page))
        return self._result(handle, data, ExportTarget.PDF)

    def _add_annotation_to_page(self, page: fitz.Page, annotation: Annotation,
                                viewport: PaginatedViewport):
        """Add a single annotation to a PDF page."""
        style = VECTOR_STYLES[annotation.kind]
        page_height = viewport.page_height

        # One shape per annotation so z-order follows commit order
        shape = page.new_shape()

        if annotation.kind is AnnotationKind.LINE:
            start = native_to_page_space(to_native_point(annotation.start, viewport), page_height)
            end = native_to_page_space(to_native_point(annotation.end, viewport), page_height)
            shape.draw_line(fitz.Point(*start), fitz.Point(*end))
            shape.finish(color=style.stroke, width=style.width)

        elif annotation.kind is AnnotationKind.CIRCLE:
            center = native_to_page_space(to_native_point(annotation.start, viewport), page_height)
            radius = to_native_radius(annotation.start, annotation.end, viewport)
            shape.draw_circle(fitz.Point(*center), radius)
            shape.finish(color=style.stroke, width=style.width)

        elif annotation.kind is AnnotationKind.TEXT:
            baseline = native_to_page_space(
                to_native_point((annotation.x, annotation.y), viewport), page_height
            )
            shape.insert_text(
                fitz.Point(*baseline),
                annotation.text,
                fontsize=TEXT_SIZE,
                fontname=VECTOR_FONT_NAME,
                color=style.fill,
            )

        elif annotation.kind in BOX_KINDS:
            native = to_native_rect(annotation.start, annotation.end, viewport)
            rect = fitz.Rect(*native_rect_to_page_space(native, page_height))
            shape.draw_rect(rect)
            if annotation.kind is AnnotationKind.RECTANGLE:
                shape.finish(color=style.stroke, width=style.width)
            else:
                shape.finish(color=None, fill=style.fill, width=0)

        shape.commit()
