from .annotation_toolbar import AnnotationToolbar

__all__ = ['AnnotationToolbar']
