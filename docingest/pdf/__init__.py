# docingest/pdf/__init__.py
# ============================================================
# PDF Processing Package
# ============================================================
# Key classes:
#   - PdfExtractor: text layer extraction with OCR image fallback
#   - PageRenderer: rendering backend interface
#   - Pdf2ImageRenderer: poppler-backed renderer (pdf2image)
# ============================================================

from docingest.pdf.extractor import PdfExtractor, PdfState
from docingest.pdf.renderer import PageRenderer, Pdf2ImageRenderer, bootstrap_renderer

__all__ = [
    "PdfExtractor",
    "PdfState",
    "PageRenderer",
    "Pdf2ImageRenderer",
    "bootstrap_renderer",
]
