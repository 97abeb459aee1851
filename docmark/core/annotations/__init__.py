"""
Format-independent annotation model.
"""
from .models import (
    BOX_KINDS,
    SHAPE_KINDS,
    Annotation,
    AnnotationIdGenerator,
    AnnotationKind,
)
from .manager import AnnotationManager

__all__ = [
    'Annotation',
    'AnnotationKind',
    'AnnotationIdGenerator',
    'AnnotationManager',
    'SHAPE_KINDS',
    'BOX_KINDS',
]
