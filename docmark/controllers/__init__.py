"""
Controllers between the document session and the widgets.
"""
from .document_controller import DocumentController
from .interaction_controller import InteractionController
from .session import DocumentSession

__all__ = ['DocumentController', 'DocumentSession', 'InteractionController']
