# docingest/pipeline/assembler.py
# ============================================================
# Content Assembler — the single choke point before output
# ============================================================
# Wraps an extractor's raw output (text, or a list of page
# images) into a CanonicalDocument and enforces its invariants:
#   - text must be non-empty after trimming
#   - page images must be non-empty, 1-indexed, unique, ascending
# Unclassified extractor exceptions are mapped to a classified
# ExtractionError here as well.
# ============================================================

from typing import Sequence, Union

from docingest.document.models import CanonicalDocument, ImagePages, PageImage, TextContent
from docingest.errors import CorruptDocumentError, EmptyDocumentError, ExtractionError

RawContent = Union[str, Sequence[PageImage]]


def assemble(raw: RawContent) -> CanonicalDocument:
    """
    Build the canonical document from raw extractor output.

    Raises:
        EmptyDocumentError: Blank text or no page images.
        CorruptDocumentError: Page images with invalid or duplicate indices.
    """
    if isinstance(raw, str):
        if not raw.strip():
            raise EmptyDocumentError("Extracted text is empty")
        return TextContent(content=raw)

    pages = sorted(raw, key=lambda p: p.index)
    if not pages:
        raise EmptyDocumentError("No page images were produced")

    indices = [p.index for p in pages]
    if len(set(indices)) != len(indices):
        raise CorruptDocumentError(
            "Duplicate page indices in rendered output",
            details={"indices": indices},
        )
    return ImagePages(pages=tuple(pages))


def classify_failure(error: Exception, format_name: str = "document") -> ExtractionError:
    """Map any extractor failure onto the classified error taxonomy."""
    if isinstance(error, ExtractionError):
        return error
    return CorruptDocumentError(
        f"{type(error).__name__}: {error}",
        format_name=format_name,
    )
