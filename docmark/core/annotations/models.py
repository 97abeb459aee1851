import math
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Tuple


class AnnotationKind(Enum):
    LINE = "line"
    RECTANGLE = "rectangle"
    CIRCLE = "circle"
    TEXT = "text"
    HIGHLIGHT = "highlight"
    OPAQUE = "opaque"

    @property
    def is_shape(self) -> bool:
        return self is not AnnotationKind.TEXT


SHAPE_KINDS = frozenset(kind for kind in AnnotationKind if kind.is_shape)

# Kinds drawn as an axis-aligned box between start and end
BOX_KINDS = frozenset(
    (AnnotationKind.RECTANGLE, AnnotationKind.HIGHLIGHT, AnnotationKind.OPAQUE)
)


@dataclass(frozen=True)
class Annotation:
    """
    A single user-drawn mark in overlay-pixel space.

    Shape kinds use start/end; a circle's start is its center and its end is
    the radius handle. Text annotations use x, y and text.
    """
    id: int
    kind: AnnotationKind
    page_index: int = 0

    # Shape geometry
    start_x: float = 0.0
    start_y: float = 0.0
    end_x: float = 0.0
    end_y: float = 0.0

    # Text geometry
    x: float = 0.0
    y: float = 0.0
    text: str = ""

    @classmethod
    def shape(cls, annotation_id: int, kind: AnnotationKind,
              start: Tuple[float, float], end: Tuple[float, float],
              page_index: int = 0) -> "Annotation":
        if not kind.is_shape:
            raise ValueError(f"{kind.value} is not a shape kind")
        return cls(
            id=annotation_id,
            kind=kind,
            page_index=page_index,
            start_x=float(start[0]),
            start_y=float(start[1]),
            end_x=float(end[0]),
            end_y=float(end[1]),
        )

    @classmethod
    def text_mark(cls, annotation_id: int, position: Tuple[float, float],
                  text: str, page_index: int = 0) -> "Annotation":
        return cls(
            id=annotation_id,
            kind=AnnotationKind.TEXT,
            page_index=page_index,
            x=float(position[0]),
            y=float(position[1]),
            text=text,
        )

    @property
    def start(self) -> Tuple[float, float]:
        return self.start_x, self.start_y

    @property
    def end(self) -> Tuple[float, float]:
        return self.end_x, self.end_y

    @property
    def width(self) -> float:
        return self.end_x - self.start_x

    @property
    def height(self) -> float:
        return self.end_y - self.start_y

    @property
    def radius(self) -> float:
        """Distance between the circle center and its radius handle."""
        return math.hypot(self.end_x - self.start_x, self.end_y - self.start_y)

    def describe(self) -> str:
        """One-line summary for the annotation list."""
        if self.kind is AnnotationKind.TEXT:
            return f'Text: "{self.text}" at ({round(self.x)}, {round(self.y)})'
        return (
            f"{self.kind.value} from ({round(self.start_x)}, {round(self.start_y)}) "
            f"to ({round(self.end_x)}, {round(self.end_y)})"
        )

    def to_dict(self):
        """Convert annotation to a plain dictionary."""
        data = {
            'id': self.id,
            'type': self.kind.value,
            'page_index': self.page_index,
        }
        if self.kind is AnnotationKind.TEXT:
            data.update({'x': self.x, 'y': self.y, 'text': self.text})
        else:
            data.update({
                'startX': self.start_x,
                'startY': self.start_y,
                'endX': self.end_x,
                'endY': self.end_y,
            })
        return data


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class AnnotationIdGenerator:
    """
    Hands out creation timestamps (milliseconds) as annotation ids.

    Two annotations committed within the same millisecond still get
    distinct, strictly increasing ids.
    """

    def __init__(self, clock: Optional[Callable[[], int]] = None):
        self._clock = clock or _now_ms
        self._last: Optional[int] = None

    def next_id(self) -> int:
        candidate = int(self._clock())
        if self._last is not None and candidate <= self._last:
            candidate = self._last + 1
        self._last = candidate
        return candidate

    @property
    def last_id(self) -> Optional[int]:
        return self._last
