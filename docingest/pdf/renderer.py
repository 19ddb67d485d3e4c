# docingest/pdf/renderer.py
# ============================================================
# Page Rasterizer — pluggable rendering backends
# ============================================================
# The PDF extractor only needs one capability from a rendering
# backend: turn page N of a PDF into a PIL Image at a given
# upscaling factor. Backends implement PageRenderer; the default
# uses pdf2image (poppler). Tests plug in a fake renderer.
#
# Backend setup is explicit and happens once per process:
#
#   from docingest.pdf.renderer import bootstrap_renderer
#   renderer = bootstrap_renderer()      # raises if poppler is missing
#   ingestor = DocumentIngestor(renderer=renderer)
# ============================================================

import shutil
from abc import ABC, abstractmethod
from typing import Optional

from PIL import Image
from pdf2image import convert_from_bytes
from pdf2image.exceptions import PDFPageCountError, PDFPopplerTimeoutError, PDFSyntaxError
from rich.markup import escape

from config.settings import settings
from docingest.errors import PageRenderError, RendererUnavailableError
from docingest.utils.logger import get_logger

logger = get_logger(__name__)

# PDF user space is 72 points per inch
PDF_POINTS_PER_INCH = 72

POPPLER_BINARIES = ("pdfinfo", "pdftoppm")


class PageRenderer(ABC):
    """
    Rendering backend abstraction.

    Backends must:
    - Render exactly one page per call (1-indexed page_num)
    - Be deterministic for a given input + scale
    - Raise PageRenderError (or any exception) when a page cannot be drawn
    """

    @abstractmethod
    def backend_id(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def render_page(self, pdf_data: bytes, page_num: int, scale: float) -> Image.Image:
        raise NotImplementedError


class Pdf2ImageRenderer(PageRenderer):
    """Render pages with poppler's pdftoppm through pdf2image."""

    def __init__(self, poppler_path: Optional[str] = None, timeout_s: Optional[float] = None):
        self.poppler_path = poppler_path
        self.timeout_s = timeout_s

    def backend_id(self) -> str:
        return "pdf2image"

    def render_page(self, pdf_data: bytes, page_num: int, scale: float) -> Image.Image:
        dpi = round(PDF_POINTS_PER_INCH * scale)
        try:
            images = convert_from_bytes(
                pdf_data,
                dpi=dpi,
                first_page=page_num,
                last_page=page_num,
                poppler_path=self.poppler_path,
                timeout=self.timeout_s,
            )
        except (PDFPageCountError, PDFSyntaxError, PDFPopplerTimeoutError) as e:
            raise PageRenderError(page_num, str(e)) from e

        if not images:
            raise PageRenderError(page_num, "backend produced no image")

        # Only one page was requested
        for extra in images[1:]:
            extra.close()
        return images[0]


def bootstrap_renderer(poppler_path: Optional[str] = None) -> Pdf2ImageRenderer:
    """
    One-time rendering backend setup.

    Verifies the poppler binaries pdf2image shells out to are reachable
    and returns a renderer bound to them. Call once at process start.

    Raises:
        RendererUnavailableError: If pdfinfo or pdftoppm cannot be found.
    """
    poppler_path = poppler_path or settings.poppler_path
    missing = [b for b in POPPLER_BINARIES if shutil.which(b, path=poppler_path) is None]
    if missing:
        raise RendererUnavailableError(
            "Poppler is not installed or not on PATH. "
            "Install poppler-utils (apt-get install poppler-utils) "
            "or set POPPLER_PATH.",
            {"missing": missing, "poppler_path": poppler_path},
        )

    logger.info(
        f"Page renderer ready — backend: [bold]pdf2image[/bold], "
        f"poppler: {escape(poppler_path or 'PATH')}"
    )
    return Pdf2ImageRenderer(poppler_path=poppler_path)
