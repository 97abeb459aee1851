"""
Pointer-to-annotation state machine for one overlay surface.
"""
import logging
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from docmark.core.annotations import (
    Annotation,
    AnnotationIdGenerator,
    AnnotationKind,
    AnnotationManager,
)
from docmark.core.geometry import screen_to_overlay

logger = logging.getLogger(__name__)

Point = Tuple[float, float]

# Preview annotations carry a placeholder id; they are never committed
PREVIEW_ID = -1


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Drawing:
    tool: AnnotationKind
    anchor: Point  # overlay space


@dataclass(frozen=True)
class TextPending:
    screen_point: Point


class InteractionController:
    """
    Turns pointer input into annotation commits.

    States: Idle, Drawing(tool, anchor) and TextPending(screen_point).
    Pointer positions arrive in screen coordinates and are resolved against
    the surface's bounding rectangle, which must provide
    ``bounding_rect() -> (left, top, width, height)``.

    Args:
        annotations: Collection receiving committed annotations
        id_generator: Source of annotation ids
        page_provider: Returns the page index new annotations belong to
    """

    def __init__(self, annotations: AnnotationManager,
                 id_generator: Optional[AnnotationIdGenerator] = None,
                 page_provider: Optional[Callable[[], int]] = None):
        self.annotations = annotations
        self.id_generator = id_generator or AnnotationIdGenerator()
        self.page_provider = page_provider or (lambda: 0)
        self.surface = None
        self.tool: Optional[AnnotationKind] = None
        self.state = Idle()
        self.preview: Optional[Annotation] = None

    def attach_surface(self, surface) -> None:
        """Set the overlay surface used for coordinate resolution."""
        self.surface = surface

    def select_tool(self, tool: Optional[AnnotationKind]) -> None:
        """
        Set the active tool. Switching while drawing cancels the draw
        without committing anything, and switching while text entry is
        open drops the pending text.
        """
        if isinstance(self.state, Drawing):
            logger.debug("Tool switched mid-draw, cancelling %s", self.state.tool.value)
            self._to_idle()
        elif isinstance(self.state, TextPending):
            logger.debug("Tool switched with text entry open, dropping it")
            self._to_idle()
        self.tool = tool

    def pointer_down(self, screen_point: Point) -> bool:
        """
        Start drawing with the active shape tool.

        Returns:
            True if a drawing was started
        """
        if self.tool is None or not self.tool.is_shape or self.surface is None:
            return False
        if not isinstance(self.state, Idle):
            return False

        anchor = self._to_overlay(screen_point)
        self.state = Drawing(self.tool, anchor)
        self.preview = None
        return True

    def pointer_move(self, screen_point: Point) -> Optional[Annotation]:
        """
        Update the transient preview while drawing.

        Returns:
            The preview annotation, or None when not drawing
        """
        if not isinstance(self.state, Drawing):
            return None

        self.preview = Annotation.shape(
            PREVIEW_ID,
            self.state.tool,
            self.state.anchor,
            self._to_overlay(screen_point),
            page_index=self.page_provider(),
        )
        return self.preview

    def pointer_up(self, screen_point: Point) -> Optional[Annotation]:
        """
        Commit the shape being drawn.

        Returns:
            The committed annotation, or None when not drawing
        """
        if not isinstance(self.state, Drawing):
            return None

        annotation = Annotation.shape(
            self.id_generator.next_id(),
            self.state.tool,
            self.state.anchor,
            self._to_overlay(screen_point),
            page_index=self.page_provider(),
        )
        self.annotations.add(annotation)
        self._to_idle()
        return annotation

    def click(self, screen_point: Point) -> bool:
        """
        Open text entry at a screen point when the text tool is active.

        Returns:
            True if text entry is now pending
        """
        if self.tool is not AnnotationKind.TEXT:
            return False
        if isinstance(self.state, Drawing):
            return False

        self.state = TextPending(screen_point)
        return True

    def submit_text(self, text: str) -> Optional[Annotation]:
        """
        Commit a text annotation for the pending click.

        The click point is resolved against the surface's bounding rectangle
        as it is now, not as it was when the user clicked. Empty input is
        discarded silently. Always returns to Idle.

        Returns:
            The committed annotation, or None if nothing was committed
        """
        if not isinstance(self.state, TextPending):
            return None

        screen_point = self.state.screen_point
        self._to_idle()

        if not text.strip() or self.surface is None:
            return None

        annotation = Annotation.text_mark(
            self.id_generator.next_id(),
            self._to_overlay(screen_point),
            text,
            page_index=self.page_provider(),
        )
        self.annotations.add(annotation)
        return annotation

    def cancel_text(self) -> None:
        if isinstance(self.state, TextPending):
            self._to_idle()

    def reset(self) -> None:
        """Return to Idle and drop any preview (document switch)."""
        self._to_idle()

    @property
    def is_drawing(self) -> bool:
        return isinstance(self.state, Drawing)

    @property
    def is_text_pending(self) -> bool:
        return isinstance(self.state, TextPending)

    def _to_idle(self) -> None:
        self.state = Idle()
        self.preview = None

    def _to_overlay(self, screen_point: Point) -> Point:
        return screen_to_overlay(screen_point, self.surface.bounding_rect())
