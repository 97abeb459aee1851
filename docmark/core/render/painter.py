"""
QPainter drawing of annotations in overlay/raster pixel space.

Used by the live overlay widget and by the raster export compositors, so the
preview and the exported pixels come from the same code.
"""
from typing import Iterable

from PyQt5.QtCore import QLineF, QPointF, QRectF, Qt
from PyQt5.QtGui import QBrush, QColor, QFont, QPainter, QPen

from docmark.core.annotations import BOX_KINDS, Annotation, AnnotationKind
from docmark.core.annotations.styles import (
    RASTER_FONT_FAMILY,
    RASTER_STYLES,
    TEXT_SIZE,
)


def _color(rgba) -> QColor:
    return QColor(rgba[0], rgba[1], rgba[2], rgba[3])


def _text_font() -> QFont:
    font = QFont(RASTER_FONT_FAMILY)
    font.setStyleHint(QFont.SansSerif)
    font.setPixelSize(TEXT_SIZE)
    return font


def paint_annotations(painter: QPainter, annotations: Iterable[Annotation]) -> None:
    """Paint annotations in order, later ones on top."""
    for ann in annotations:
        paint_annotation(painter, ann)


def paint_annotation(painter: QPainter, ann: Annotation) -> None:
    """Paint a single annotation with its kind's fixed style."""
    style = RASTER_STYLES[ann.kind]

    painter.save()
    try:
        if style.stroke:
            painter.setPen(QPen(_color(style.stroke), style.width))
        else:
            painter.setPen(Qt.NoPen)
        if style.fill and ann.kind is not AnnotationKind.TEXT:
            painter.setBrush(QBrush(_color(style.fill)))
        else:
            painter.setBrush(Qt.NoBrush)

        if ann.kind is AnnotationKind.LINE:
            painter.drawLine(QLineF(ann.start_x, ann.start_y, ann.end_x, ann.end_y))

        elif ann.kind is AnnotationKind.CIRCLE:
            radius = ann.radius
            painter.drawEllipse(QPointF(ann.start_x, ann.start_y), radius, radius)

        elif ann.kind is AnnotationKind.TEXT:
            # y is the text baseline
            painter.setPen(QPen(_color(style.fill)))
            painter.setFont(_text_font())
            painter.drawText(QPointF(ann.x, ann.y), ann.text)

        elif ann.kind in BOX_KINDS:
            rect = QRectF(ann.start_x, ann.start_y, ann.width, ann.height).normalized()
            if ann.kind is AnnotationKind.RECTANGLE:
                painter.drawRect(rect)
            else:
                painter.fillRect(rect, _color(style.fill))
    finally:
        painter.restore()
