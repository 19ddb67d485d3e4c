# docingest/errors.py
# ============================================================
# Error Taxonomy for Document Ingestion
# ============================================================
# Every extraction failure reaches the caller as exactly one
# ExtractionError subclass. Each carries a short user-facing
# message so a UI can tell "unsupported format" apart from
# "file damaged" and "nothing could be extracted".
#
# Usage:
#   from docingest.errors import ExtractionError
#   try:
#       document = await ingestor.extract(data, filename)
#   except ExtractionError as e:
#       show(e.user_message)
# ============================================================

from enum import Enum
from typing import Any, Optional

SUPPORTED_EXTENSIONS_HINT = ".txt, .md, .pdf, .docx, or .xlsx"


class ErrorKind(str, Enum):
    """Classified failure kinds reported to the caller."""
    UNSUPPORTED_FORMAT = "unsupported_format"
    LEGACY_FORMAT_UNSUPPORTED = "legacy_format_unsupported"
    CORRUPT_DOCUMENT = "corrupt_document"
    EMPTY_DOCUMENT = "empty_document"


class IngestError(Exception):
    """Base exception for all docingest errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# Extraction Errors (classified, reported to the caller)
# =============================================================================


class ExtractionError(IngestError):
    """Base class for classified extraction failures."""

    kind: ErrorKind

    @property
    def user_message(self) -> str:
        return self.message


class UnsupportedFormatError(ExtractionError):
    """Unknown extension whose plain-text fallback decode also failed."""

    kind = ErrorKind.UNSUPPORTED_FORMAT

    def __init__(self, extension: str) -> None:
        message = f"Unsupported file type: .{extension}. Please use {SUPPORTED_EXTENSIONS_HINT}."
        super().__init__(message, {"extension": extension})
        self.extension = extension


class LegacyFormatUnsupportedError(ExtractionError):
    """Legacy .doc upload, rejected without inspecting its bytes."""

    kind = ErrorKind.LEGACY_FORMAT_UNSUPPORTED

    def __init__(self) -> None:
        super().__init__(
            ".doc files are not supported. Please save as .docx and try again.",
            {"extension": "doc"},
        )


class CorruptDocumentError(ExtractionError):
    """Bytes could not be parsed as their claimed format."""

    kind = ErrorKind.CORRUPT_DOCUMENT

    def __init__(
        self,
        message: str,
        format_name: str = "document",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, {"format": format_name, **(details or {})})
        self.format_name = format_name

    @property
    def user_message(self) -> str:
        return f"The file appears to be damaged or is not a valid {self.format_name} file."


class EmptyDocumentError(ExtractionError):
    """Well-formed container with no usable pages, sheets, or content."""

    kind = ErrorKind.EMPTY_DOCUMENT

    @property
    def user_message(self) -> str:
        return "No content could be extracted from the document."


# =============================================================================
# Rendering Errors
# =============================================================================


class PageRenderError(IngestError):
    """A single page could not be rasterized. Non-fatal: the page is skipped."""

    def __init__(self, page_num: int, reason: str) -> None:
        super().__init__(f"Could not render page {page_num}: {reason}", {"page_num": page_num})
        self.page_num = page_num


class RendererUnavailableError(IngestError):
    """The rendering backend is not installed or not reachable."""

    pass


# =============================================================================
# Generation Client Errors
# =============================================================================


class GenerationError(IngestError):
    """The generative-content service call failed or returned bad data."""

    pass
