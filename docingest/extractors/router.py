# docingest/extractors/router.py
# ============================================================
# Format Router — extension-driven extractor selection
# ============================================================
# Maps an upload's filename extension to a DocumentFormat.
# Routing never looks at the bytes: no magic-number sniffing.
#
# Usage:
#   from docingest.extractors.router import detect_format
#   detect_format("Report.PDF")   # DocumentFormat.PDF
# ============================================================

from enum import Enum


class DocumentFormat(str, Enum):
    PLAIN_TEXT = "plain_text"
    PDF = "pdf"
    DOCX = "docx"
    SPREADSHEET = "spreadsheet"
    LEGACY_DOC = "legacy_doc"
    UNKNOWN = "unknown"


# "text/plain" is the generic tag some upload widgets report in place of an extension
PLAIN_TEXT_EXTENSIONS = {"txt", "md", "text/plain"}

_EXTENSION_FORMATS: dict[str, DocumentFormat] = {
    **{ext: DocumentFormat.PLAIN_TEXT for ext in PLAIN_TEXT_EXTENSIONS},
    "pdf": DocumentFormat.PDF,
    "docx": DocumentFormat.DOCX,
    "xlsx": DocumentFormat.SPREADSHEET,
    "xls": DocumentFormat.SPREADSHEET,
    "doc": DocumentFormat.LEGACY_DOC,
}


def get_extension(filename: str) -> str:
    """
    Return the lower-cased text after the last '.' in filename.

    A name without a dot is its own extension ("README" -> "readme"),
    which routes as unknown.
    """
    return filename.rsplit(".", 1)[-1].strip().lower()


def detect_format(filename: str) -> DocumentFormat:
    """Select the document format for an upload by its extension."""
    return _EXTENSION_FORMATS.get(get_extension(filename), DocumentFormat.UNKNOWN)
