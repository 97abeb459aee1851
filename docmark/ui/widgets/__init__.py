from .annotation_list import AnnotationListPanel
from .annotation_overlay import AnnotationOverlay
from .document_view import DocumentView
from .text_input import TextInputPopup

__all__ = ['AnnotationListPanel', 'AnnotationOverlay', 'DocumentView', 'TextInputPopup']
