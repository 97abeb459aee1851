"""
Docmark - annotate images, PDFs and office documents and export them
with the annotations burned in.
"""

__version__ = "0.3.0"
