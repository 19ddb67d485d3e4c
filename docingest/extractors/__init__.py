# docingest/extractors/__init__.py
# ============================================================
# Format Extractors Package
# ============================================================
# Routing plus the non-PDF extractors:
#   - router: extension -> DocumentFormat
#   - text: plain text decoding
#   - docx: Word package text (python-docx)
#   - spreadsheet: workbook rendering (openpyxl / xlrd)
#
# The PDF extractor lives in docingest.pdf.
# ============================================================

from docingest.extractors.docx import extract_docx
from docingest.extractors.router import DocumentFormat, detect_format, get_extension
from docingest.extractors.spreadsheet import extract_spreadsheet
from docingest.extractors.text import extract_text

__all__ = [
    "DocumentFormat",
    "detect_format",
    "get_extension",
    "extract_docx",
    "extract_spreadsheet",
    "extract_text",
]
