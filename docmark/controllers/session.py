"""
Session context: the one live document, its annotations and its
renderer/exporter pair.
"""
import dataclasses
import functools
import logging
from typing import Callable, Optional

from docmark.core.annotations import AnnotationIdGenerator, AnnotationManager
from docmark.core.document.dispatcher import FormatBinding, classify, dispatch
from docmark.core.document.models import DocumentHandle, DocumentKind
from docmark.core.errors import DecodeError, ExportError
from .interaction_controller import InteractionController

logger = logging.getLogger(__name__)


class DocumentSession:
    """
    Owns the current DocumentHandle, the annotation collection and the
    interaction state. Loading a document is a hard reset of all three.
    """

    def __init__(self, settings=None, id_generator: Optional[AnnotationIdGenerator] = None):
        self.settings = settings
        self.document: Optional[DocumentHandle] = None
        self.binding: Optional[FormatBinding] = None
        self.annotations = AnnotationManager()
        self.id_generator = id_generator or AnnotationIdGenerator()
        self.interaction = InteractionController(
            self.annotations, self.id_generator, self.current_page_index
        )
        self.generation = 0

    @property
    def renderer(self):
        return self.binding.renderer if self.binding else None

    @property
    def exporter(self):
        return self.binding.exporter if self.binding else None

    @property
    def viewport(self):
        return self.renderer.viewport if self.renderer else None

    def current_page_index(self) -> int:
        viewport = self.viewport
        return getattr(viewport, 'current_page_index', 0) if viewport else 0

    def load(self, handle: DocumentHandle,
             on_bound: Optional[Callable[[FormatBinding], None]] = None) -> DocumentHandle:
        """
        Replace the current document.

        Annotations, interaction state and the previous renderer are dropped
        before decoding starts. If decoding fails the new handle is kept (its
        metadata is still shown) and the DecodeError propagates.

        Args:
            handle: Freshly uploaded document
            on_bound: Called with the new renderer/exporter pair before decoding
                starts, so listeners see the first frame

        Returns:
            The stored handle, with family and native dimensions filled in

        Raises:
            UnsupportedFormatError: If the file is outside the allowlist; the
                session is left unchanged
            DecodeError: If the document cannot be decoded
        """
        family = classify(handle.name, handle.mime_type)

        self.close()
        self.generation += 1

        handle = dataclasses.replace(handle, family=family)
        self.document = handle
        self.binding = dispatch(family, self.settings)
        if on_bound is not None:
            on_bound(self.binding)

        try:
            dims = self.binding.renderer.load(handle)
        except DecodeError:
            logger.error("Could not decode %s", handle.name)
            raise

        if dims is not None:
            handle = dataclasses.replace(handle, native_dimensions=dims)
            self.document = handle

        logger.info("Loaded %s as %s", handle.name, family.value)
        return handle

    def close(self) -> None:
        """Discard the document, its annotations and its render target."""
        self.interaction.reset()
        self.annotations.clear()
        if self.binding is not None:
            self.binding.renderer.close()
        self.binding = None
        self.document = None

    def is_current(self, generation: int) -> bool:
        """Whether work started at ``generation`` still belongs to this document."""
        return generation == self.generation and self.document is not None

    @property
    def is_paginated(self) -> bool:
        return self.binding is not None and self.binding.kind is DocumentKind.PAGINATED

    def export_targets(self):
        return self.exporter.targets() if self.exporter else []

    def export_job(self, target=None) -> Callable:
        """
        Snapshot the document, annotations and viewport for an export.

        The returned callable can run on a worker thread; annotations added
        afterwards are not part of it.

        Raises:
            ExportError: If no document is loaded or the preview is not ready
        """
        if self.document is None or self.binding is None:
            raise ExportError("No document is loaded.")
        if self.viewport is None:
            raise ExportError("The document preview has not finished loading yet.")

        return functools.partial(
            self.exporter.export,
            self.document, self.annotations.annotations, self.viewport, target
        )

    def export(self, target=None):
        """
        Export the current document with its annotations.

        The annotation collection is only read; a failed export leaves it as
        it was.

        Raises:
            ExportError: If no document is loaded or the compositor fails
        """
        return self.export_job(target)()
