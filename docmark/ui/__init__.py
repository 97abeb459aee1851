"""
PyQt5 widgets and the main window.
"""
from .windows import MainWindow

__all__ = ['MainWindow']
