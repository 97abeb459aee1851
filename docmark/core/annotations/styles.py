"""
Fixed drawing styles for each annotation kind.

Vector styles use PyMuPDF's 0-1 color range, raster styles use 0-255 RGBA.
"""
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from .models import AnnotationKind

STROKE_WIDTH = 2.0
TEXT_SIZE = 16
RASTER_FONT_FAMILY = "sans-serif"
VECTOR_FONT_NAME = "helv"


@dataclass(frozen=True)
class VectorStyle:
    stroke: Optional[Tuple[float, float, float]] = None
    fill: Optional[Tuple[float, float, float]] = None
    width: float = STROKE_WIDTH


@dataclass(frozen=True)
class RasterStyle:
    stroke: Optional[Tuple[int, int, int, int]] = None
    fill: Optional[Tuple[int, int, int, int]] = None
    width: float = STROKE_WIDTH


RED = (1.0, 0.0, 0.0)
GREEN = (0.0, 1.0, 0.0)
BLUE = (0.0, 0.0, 1.0)
PALE_YELLOW = (1.0, 1.0, 0.8)
BLACK = (0.0, 0.0, 0.0)

VECTOR_STYLES: Dict[AnnotationKind, VectorStyle] = {
    AnnotationKind.LINE: VectorStyle(stroke=RED),
    AnnotationKind.RECTANGLE: VectorStyle(stroke=BLUE),
    AnnotationKind.CIRCLE: VectorStyle(stroke=GREEN),
    AnnotationKind.TEXT: VectorStyle(fill=RED),
    AnnotationKind.HIGHLIGHT: VectorStyle(fill=PALE_YELLOW, width=0),
    AnnotationKind.OPAQUE: VectorStyle(fill=BLACK, width=0),
}

RASTER_STYLES: Dict[AnnotationKind, RasterStyle] = {
    AnnotationKind.LINE: RasterStyle(stroke=(255, 0, 0, 255)),
    AnnotationKind.RECTANGLE: RasterStyle(stroke=(0, 0, 255, 255)),
    AnnotationKind.CIRCLE: RasterStyle(stroke=(0, 128, 0, 255)),
    AnnotationKind.TEXT: RasterStyle(fill=(255, 0, 0, 255)),
    # 0.3 alpha
    AnnotationKind.HIGHLIGHT: RasterStyle(fill=(255, 255, 0, 77), width=0),
    AnnotationKind.OPAQUE: RasterStyle(fill=(0, 0, 0, 255), width=0),
}
