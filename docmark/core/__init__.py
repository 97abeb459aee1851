"""
Core business logic for Docmark.
"""
from .annotations import Annotation, AnnotationKind, AnnotationManager

__all__ = ['Annotation', 'AnnotationKind', 'AnnotationManager']
