"""
Mapping between overlay pixel space and each format's native space.

Paginated (PDF) native space has its origin at the bottom-left of the page
with Y pointing up; overlay space has its origin at the top-left with Y
pointing down. Raster space is the identity. Flowed HTML documents are
captured visually at 1:1 pixel parity, so they never go through here.
"""
import math
from dataclasses import dataclass
from typing import Tuple

from docmark.core.document.models import PaginatedViewport

Point = Tuple[float, float]
Rect = Tuple[float, float, float, float]  # left, top, width, height


@dataclass(frozen=True)
class NativeRect:
    """Rectangle in PDF point space, anchored at its bottom-left corner."""
    x: float
    y: float
    width: float
    height: float


def _scales(viewport: PaginatedViewport) -> Tuple[float, float]:
    if not viewport.display_width or not viewport.display_height:
        raise ValueError("Viewport has no display size")
    return (
        viewport.page_width / viewport.display_width,
        viewport.page_height / viewport.display_height,
    )


def to_native_point(point: Point, viewport: PaginatedViewport) -> Point:
    """Overlay point to PDF point space (Y flipped)."""
    scale_x, scale_y = _scales(viewport)
    x, y = point
    return x * scale_x, viewport.page_height - y * scale_y


def to_overlay_point(point: Point, viewport: PaginatedViewport) -> Point:
    """PDF point space back to overlay pixels."""
    scale_x, scale_y = _scales(viewport)
    x, y = point
    return x / scale_x, (viewport.page_height - y) / scale_y


def to_native_rect(start: Point, end: Point,
                   viewport: PaginatedViewport) -> NativeRect:
    """
    Map a dragged box to PDF space.

    The top-left corner is flipped first and the height subtracted after, so
    filled regions land where they were drawn instead of mirrored about their
    top edge.

    Args:
        start: Overlay point where the drag started
        end: Overlay point where the drag ended
        viewport: Viewport of the page the box was drawn on

    Returns:
        Rectangle anchored at its bottom-left corner in PDF space
    """
    scale_x, scale_y = _scales(viewport)
    height = (end[1] - start[1]) * scale_y
    return NativeRect(
        x=start[0] * scale_x,
        y=viewport.page_height - start[1] * scale_y - height,
        width=(end[0] - start[0]) * scale_x,
        height=height,
    )


def to_native_radius(center: Point, handle: Point,
                     viewport: PaginatedViewport) -> float:
    """Circle radius in points from its center and radius handle."""
    scale_x, scale_y = _scales(viewport)
    return math.hypot(
        (handle[0] - center[0]) * scale_x,
        (handle[1] - center[1]) * scale_y,
    )


def raster_to_native(point: Point) -> Point:
    """Overlay pixels equal canvas pixels for raster images."""
    return point


def native_to_page_space(point: Point, page_height: float) -> Point:
    """
    PDF point space to PyMuPDF page space (origin top-left, Y down).

    Equivalent to applying ``page.transformation_matrix`` for a page whose
    mediabox starts at the origin.
    """
    return point[0], page_height - point[1]


def native_rect_to_page_space(rect: NativeRect, page_height: float) -> Rect:
    """
    Convert a PDF-space rectangle to a normalized page-space rectangle.

    Returns:
        (x0, y0, x1, y1) with x0 <= x1 and y0 <= y1
    """
    x0, x1 = sorted((rect.x, rect.x + rect.width))
    y_low, y_high = sorted((rect.y, rect.y + rect.height))
    return x0, page_height - y_high, x1, page_height - y_low


def screen_to_overlay(screen_point: Point, bounding_rect: Rect) -> Point:
    """
    Screen coordinates relative to a surface's bounding rectangle.

    Args:
        screen_point: Point in screen (global) coordinates
        bounding_rect: (left, top, width, height) of the surface on screen
    """
    return screen_point[0] - bounding_rect[0], screen_point[1] - bounding_rect[1]
