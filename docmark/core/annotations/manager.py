"""
Insertion-ordered annotation collection for the loaded document.
"""
import logging
from typing import Iterator, List, Optional, Tuple

from docmark.core.errors import InvalidAnnotationError
from .models import Annotation, AnnotationKind

logger = logging.getLogger(__name__)


class AnnotationManager:
    """
    Holds every committed annotation of the current document.

    Order is z-order: later annotations are drawn on top, both in the preview
    and in the exported document. Annotations are never edited in place.
    """

    def __init__(self):
        self._annotations: List[Annotation] = []

    def add(self, annotation: Annotation) -> None:
        """
        Commit an annotation.

        Args:
            annotation: Annotation to append

        Raises:
            InvalidAnnotationError: If the annotation is an empty text mark or
                its id does not follow the last committed id
        """
        if annotation.kind is AnnotationKind.TEXT and not annotation.text.strip():
            raise InvalidAnnotationError("Text annotations need non-empty text.")

        last = self.last
        if last is not None and annotation.id <= last.id:
            raise InvalidAnnotationError(
                f"Annotation id {annotation.id} does not follow {last.id}."
            )

        self._annotations.append(annotation)
        logger.debug("Committed %s", annotation.describe())

    @property
    def annotations(self) -> Tuple[Annotation, ...]:
        """Snapshot of all annotations in commit order."""
        return tuple(self._annotations)

    @property
    def last(self) -> Optional[Annotation]:
        return self._annotations[-1] if self._annotations else None

    def for_page(self, page_index: int) -> List[Annotation]:
        """
        Get all annotations authored on a page.

        Args:
            page_index: 0-based page index

        Returns:
            Annotations on that page, in commit order
        """
        return [ann for ann in self._annotations if ann.page_index == page_index]

    def pages(self) -> List[int]:
        """Sorted indexes of the pages that carry at least one annotation."""
        return sorted({ann.page_index for ann in self._annotations})

    @property
    def count(self) -> int:
        return len(self._annotations)

    def clear(self) -> None:
        """Drop every annotation (document switch)."""
        if self._annotations:
            logger.info("Discarding %d annotation(s)", len(self._annotations))
        self._annotations.clear()

    def __len__(self) -> int:
        return len(self._annotations)

    def __iter__(self) -> Iterator[Annotation]:
        return iter(tuple(self._annotations))
