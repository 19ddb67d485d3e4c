# docingest/pdf/extractor.py
# ============================================================
# PDF Extractor — text layer first, page images as fallback
# ============================================================
# State machine per document:
#
#   DETECTING -> EXTRACTING_TEXT -> DECIDING_FALLBACK
#       -> DONE                         (text is sufficient)
#       -> RENDERING_IMAGES -> DONE     (text too sparse)
#   any state -> FAILED
#
# A scanned PDF has an empty or near-empty text layer. Rather
# than hand back that useless text, the extractor rasterizes
# every page so an OCR-capable consumer can read the images.
# The two outcomes are exclusive: sufficient text is returned
# as-is and never rendered, sparse text is never returned.
#
# Usage:
#   extractor = PdfExtractor(renderer=bootstrap_renderer())
#   result = await extractor.extract(pdf_bytes)
#   # -> str, or list[PageImage] in ascending page order
# ============================================================

import asyncio
import io
import time
from enum import Enum
from typing import Optional, Union

from pypdf import PdfReader
from pypdf.errors import PdfReadError
from rich.markup import escape

from config.settings import settings
from docingest.document.models import PageImage
from docingest.errors import CorruptDocumentError, EmptyDocumentError
from docingest.pdf.renderer import PageRenderer
from docingest.utils.image import encode_image, get_image_info, mime_type_for, resize_if_needed
from docingest.utils.logger import get_logger

logger = get_logger(__name__)

PAGE_SEPARATOR = "\n\n"

_FORMAT_NAME = "PDF"


class PdfState(str, Enum):
    DETECTING = "detecting"
    EXTRACTING_TEXT = "extracting_text"
    DECIDING_FALLBACK = "deciding_fallback"
    RENDERING_IMAGES = "rendering_images"
    DONE = "done"
    FAILED = "failed"


def _enter(state: PdfState) -> PdfState:
    logger.debug(f"PDF extraction state -> {state.value}")
    return state


def _open_reader(data: bytes) -> PdfReader:
    try:
        reader = PdfReader(io.BytesIO(data))
        if reader.is_encrypted and not reader.decrypt(""):
            raise CorruptDocumentError(
                "PDF is password protected", format_name=_FORMAT_NAME
            )
        return reader
    except CorruptDocumentError:
        raise
    except (PdfReadError, ValueError, KeyError, TypeError, NotImplementedError) as e:
        raise CorruptDocumentError(f"Could not parse PDF: {e}", format_name=_FORMAT_NAME) from e


def read_text_layer(data: bytes) -> list[str]:
    """
    Return the text layer of every page, in page order.

    A page whose text cannot be extracted yields "" instead of failing
    the document.

    Raises:
        CorruptDocumentError: If the bytes are not a readable PDF.
    """
    reader = _open_reader(data)
    try:
        page_count = len(reader.pages)
    except (PdfReadError, ValueError, KeyError, TypeError) as e:
        raise CorruptDocumentError(f"Could not read PDF page tree: {e}", format_name=_FORMAT_NAME) from e

    texts = []
    for page_num in range(1, page_count + 1):
        try:
            texts.append(reader.pages[page_num - 1].extract_text() or "")
        except Exception as e:
            logger.warning(f"No text extracted from page {page_num}: {escape(str(e))}")
            texts.append("")
    return texts


def join_page_texts(texts: list[str]) -> str:
    """Join page texts with a blank line; pages without text contribute nothing."""
    return PAGE_SEPARATOR.join(t for t in texts if t)


class PdfExtractor:
    """
    Extracts a PDF as text, or as page images when the text layer is sparse.

    Stateless between calls: one instance may serve concurrent extractions.

    Example:
        >>> extractor = PdfExtractor(renderer=renderer, min_text_chars=100)
        >>> result = await extractor.extract(data)
    """

    def __init__(
        self,
        renderer: Optional[PageRenderer] = None,
        min_text_chars: Optional[int] = None,
        render_scale: Optional[float] = None,
        image_format: Optional[str] = None,
        image_quality: Optional[int] = None,
        max_image_dim: Optional[int] = None,
        render_concurrency: Optional[int] = None,
    ):
        """
        Args:
            renderer: Page rendering backend. Only needed for image-based PDFs.
            min_text_chars: Sufficiency threshold for the trimmed text layer.
            render_scale: Upscaling factor used when rasterizing pages.
            image_format: Pillow format for encoded pages (JPEG, PNG, WEBP).
            image_quality: Encoder quality for lossy formats.
            max_image_dim: Rendered pages larger than this are downscaled.
            render_concurrency: Pages rendered at the same time.
        """
        self.renderer = renderer
        self.min_text_chars = (
            min_text_chars if min_text_chars is not None else settings.ocr_fallback_min_chars
        )
        self.render_scale = (
            render_scale if render_scale is not None else settings.pdf_render_scale
        )
        self.image_format = (image_format or settings.page_image_format).upper()
        self.image_quality = image_quality or settings.page_image_quality
        self.max_image_dim = max_image_dim or settings.max_image_dim
        self.render_concurrency = render_concurrency or settings.render_concurrency
        self.mime_type = mime_type_for(self.image_format)

        if self.min_text_chars < 0:
            raise ValueError("min_text_chars must be >= 0")
        if self.render_scale <= 0:
            raise ValueError("render_scale must be positive")

    def needs_rasterization(self, text: str, page_count: int) -> bool:
        """True when the text layer is too sparse to be worth returning."""
        return page_count > 0 and len(text.strip()) < self.min_text_chars

    async def extract(self, data: bytes) -> Union[str, list[PageImage]]:
        """
        Run the text-then-images policy on one PDF.

        Returns:
            The joined page text, or page images in ascending page order.

        Raises:
            CorruptDocumentError: Unparseable PDF, or no page could be rendered
                (including when no renderer is configured).
            EmptyDocumentError: The PDF has no pages.
        """
        state = _enter(PdfState.DETECTING)
        start = time.perf_counter()
        try:
            state = _enter(PdfState.EXTRACTING_TEXT)
            page_texts = await asyncio.to_thread(read_text_layer, data)
            page_count = len(page_texts)
            if page_count == 0:
                raise EmptyDocumentError("PDF contains no pages", {"format": "pdf"})

            state = _enter(PdfState.DECIDING_FALLBACK)
            text = join_page_texts(page_texts)
            if not self.needs_rasterization(text, page_count):
                _enter(PdfState.DONE)
                logger.info(
                    f"PDF text layer sufficient — {page_count} pages, "
                    f"{len(text)} chars in {(time.perf_counter() - start) * 1000:.0f}ms"
                )
                return text

            logger.info(
                f"Minimal text found in PDF ({len(text.strip())} < {self.min_text_chars} chars), "
                f"rasterizing {page_count} pages for OCR"
            )
            state = _enter(PdfState.RENDERING_IMAGES)
            pages = await self._render_pages(data, page_count)
            if not pages:
                raise CorruptDocumentError(
                    "Could not extract text from the PDF. The document might be "
                    "image-based or unreadable.",
                    format_name=_FORMAT_NAME,
                    details={"page_count": page_count},
                )

            _enter(PdfState.DONE)
            logger.info(
                f"Rasterized [green]{len(pages)}[/green]/{page_count} pages "
                f"in {(time.perf_counter() - start) * 1000:.0f}ms"
            )
            return pages

        except Exception:
            logger.debug(f"PDF extraction failed in state {state.value}")
            _enter(PdfState.FAILED)
            raise

    async def _render_pages(self, data: bytes, page_count: int) -> list[PageImage]:
        if self.renderer is None:
            logger.warning(
                f"No page renderer configured, none of {page_count} pages can be rendered. "
                "Call bootstrap_renderer() at startup."
            )
            return []

        semaphore = asyncio.Semaphore(self.render_concurrency)

        async def _render(page_num: int) -> Optional[PageImage]:
            async with semaphore:
                try:
                    return await asyncio.to_thread(self._render_page, data, page_num)
                except Exception as e:
                    logger.warning(f"Could not render page {page_num}, skipping: {escape(str(e))}")
                    return None

        results = await asyncio.gather(*[_render(n) for n in range(1, page_count + 1)])

        # Ascending page order
        return sorted((p for p in results if p is not None), key=lambda p: p.index)

    def _render_page(self, data: bytes, page_num: int) -> PageImage:
        image = self.renderer.render_page(data, page_num, self.render_scale)
        processed = image
        try:
            processed = resize_if_needed(image, self.max_image_dim)
            info = get_image_info(processed)
            logger.debug(
                f"  PDF page {page_num}: {info['width']}x{info['height']} "
                f"({info['estimated_size_mb']}MB)"
            )
            encoded = encode_image(processed, fmt=self.image_format, quality=self.image_quality)
        finally:
            if processed is not image:
                processed.close()
            image.close()

        return PageImage(index=page_num, mime_type=self.mime_type, data=encoded)
