# docingest/pipeline/ingestor.py
# ============================================================
# Document Ingestor — End-to-End Upload Normalization
# ============================================================
# Ties routing, extraction and assembly together:
#   bytes + filename -> extractor -> CanonicalDocument
#
# Design Decisions:
#   1. Extension-driven routing: the filename picks the extractor,
#      the bytes are never sniffed.
#   2. Blocking decoders run in worker threads (asyncio.to_thread)
#      so an event loop serving other requests is never stalled.
#   3. One classified error per failure: anything an extractor
#      raises leaves this module as an ExtractionError subclass.
#   4. No state is kept between calls; the same instance can serve
#      concurrent uploads and every call recomputes from scratch.
#
# Usage:
#   from docingest.pipeline.ingestor import DocumentIngestor
#   ingestor = DocumentIngestor(renderer=bootstrap_renderer())
#   document = await ingestor.extract(data, "report.pdf")
# ============================================================

import asyncio
import time
from pathlib import Path
from typing import Optional, Union

from rich.markup import escape

from config.settings import settings
from docingest.document.models import CanonicalDocument, ImagePages, TextContent
from docingest.errors import (
    CorruptDocumentError,
    LegacyFormatUnsupportedError,
    UnsupportedFormatError,
)
from docingest.extractors.docx import extract_docx
from docingest.extractors.router import DocumentFormat, detect_format, get_extension
from docingest.extractors.spreadsheet import extract_spreadsheet
from docingest.extractors.text import extract_text
from docingest.pdf.extractor import PdfExtractor
from docingest.pdf.renderer import PageRenderer
from docingest.pipeline.assembler import RawContent, assemble, classify_failure
from docingest.utils.logger import get_logger

logger = get_logger(__name__)


def read_upload(path: Union[str, Path]) -> tuple[bytes, str]:
    """
    Read an upload from disk.

    Returns:
        (raw bytes, file name) ready for DocumentIngestor.extract().

    Raises:
        FileNotFoundError: If the path does not exist or is not a file.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Input file not found: {path}")
    return path.read_bytes(), path.name


class DocumentIngestor:
    """
    Normalizes an uploaded document into a CanonicalDocument.

    Flow:
        1. detect_format(filename) → DocumentFormat
        2. The matching extractor → raw text or page images
        3. assemble() → TextContent | ImagePages

    Example:
        >>> ingestor = DocumentIngestor(renderer=bootstrap_renderer())
        >>> document = await ingestor.extract_file("scan.pdf")
        >>> match document:
        ...     case TextContent(content=text): ...
        ...     case ImagePages(pages=pages): ...
    """

    def __init__(
        self,
        renderer: Optional[PageRenderer] = None,
        min_text_chars: Optional[int] = None,
        render_scale: Optional[float] = None,
        text_encoding: Optional[str] = None,
        pdf_extractor: Optional[PdfExtractor] = None,
    ):
        """
        Args:
            renderer: Page renderer for image-based PDFs. Without one, a PDF
                that needs rasterization fails as a corrupt document.
            min_text_chars: PDF text sufficiency threshold. Default: from settings.
            render_scale: PDF rasterization upscale factor. Default: from settings.
            text_encoding: Codec for plain-text uploads. Default: from settings.
            pdf_extractor: Pre-configured PdfExtractor (overrides the above).
        """
        self.text_encoding = text_encoding or settings.text_encoding
        self.pdf_extractor = pdf_extractor or PdfExtractor(
            renderer=renderer,
            min_text_chars=min_text_chars,
            render_scale=render_scale,
        )

        logger.debug(
            f"DocumentIngestor initialized — threshold: {self.pdf_extractor.min_text_chars} chars, "
            f"scale: {self.pdf_extractor.render_scale}x, "
            f"renderer: {self.pdf_extractor.renderer.backend_id() if self.pdf_extractor.renderer else 'none'}"
        )

    async def extract(self, data: bytes, filename: str) -> CanonicalDocument:
        """
        Extract one upload into its canonical form.

        Args:
            data: Raw file bytes.
            filename: Original file name (or bare extension) used for routing.

        Returns:
            TextContent or ImagePages.

        Raises:
            LegacyFormatUnsupportedError: For .doc uploads, whatever the bytes.
            UnsupportedFormatError: Unknown extension that does not decode as text.
            CorruptDocumentError: Bytes do not parse as the claimed format.
            EmptyDocumentError: Nothing usable was extracted.
        """
        doc_format = detect_format(filename)
        extension = get_extension(filename)
        start = time.perf_counter()

        logger.info(
            f"Extracting [bold]{escape(filename)}[/bold] — format: {doc_format.value}, "
            f"{len(data)} bytes"
        )

        if doc_format == DocumentFormat.LEGACY_DOC:
            error = LegacyFormatUnsupportedError()
            logger.warning(f"Rejected {escape(filename)}: {error.kind.value}")
            raise error

        try:
            raw = await self._run_extractor(doc_format, extension, data)
            document = assemble(raw)
        except Exception as e:
            error = classify_failure(e, format_name=extension)
            logger.warning(
                f"Extraction failed for {escape(filename)}: "
                f"{error.kind.value} — {escape(error.message)}"
            )
            if error is e:
                raise
            raise error from e

        elapsed = (time.perf_counter() - start) * 1000
        match document:
            case TextContent():
                logger.info(f"Extracted text — {document.char_count} chars in {elapsed:.0f}ms")
            case ImagePages():
                logger.info(f"Extracted page images — {document.page_count} pages in {elapsed:.0f}ms")

        return document

    async def extract_file(self, path: Union[str, Path]) -> CanonicalDocument:
        """Read a file from disk and extract it."""
        data, filename = await asyncio.to_thread(read_upload, path)
        return await self.extract(data, filename)

    async def _run_extractor(
        self, doc_format: DocumentFormat, extension: str, data: bytes
    ) -> RawContent:
        if doc_format == DocumentFormat.PLAIN_TEXT:
            return extract_text(data, self.text_encoding)
        if doc_format == DocumentFormat.PDF:
            return await self.pdf_extractor.extract(data)
        if doc_format == DocumentFormat.DOCX:
            return await asyncio.to_thread(extract_docx, data)
        if doc_format == DocumentFormat.SPREADSHEET:
            return await asyncio.to_thread(extract_spreadsheet, data)

        # Unknown extension: best-effort plain text
        try:
            return extract_text(data, self.text_encoding)
        except CorruptDocumentError as e:
            raise UnsupportedFormatError(extension) from e
