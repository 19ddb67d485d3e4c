# docingest/document/models.py
# ============================================================
# Canonical Document Model
# ============================================================
# The normalized output of the ingestion pipeline. Exactly one
# of two shapes:
#   - TextContent: extracted text (non-empty after trimming)
#   - ImagePages:  ordered page images for an OCR-capable consumer
#
# Consumers dispatch with structural pattern matching:
#
#   match document:
#       case TextContent(content=text):
#           ...
#       case ImagePages(pages=pages):
#           ...
# ============================================================

from dataclasses import dataclass
from typing import Union

from docingest.utils.image import encode_image_base64


@dataclass(frozen=True)
class PageImage:
    """
    A single rasterized PDF page.

    Attributes:
        index: 1-indexed page number within the source document.
        mime_type: MIME type of the encoded image (e.g. "image/jpeg").
        data: Encoded image bytes.
    """
    index: int
    mime_type: str
    data: bytes

    def __post_init__(self) -> None:
        if self.index < 1:
            raise ValueError(f"page index must be >= 1, got {self.index}")

    def to_payload(self) -> dict:
        return {"mimeType": self.mime_type, "data": encode_image_base64(self.data)}


@dataclass(frozen=True)
class TextContent:
    """Extracted document text."""
    content: str

    @property
    def char_count(self) -> int:
        return len(self.content)

    def to_payload(self) -> str:
        return self.content


@dataclass(frozen=True)
class ImagePages:
    """Page images in ascending page order, starting at page 1."""
    pages: tuple[PageImage, ...]

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def to_payload(self) -> list[dict]:
        return [page.to_payload() for page in self.pages]


CanonicalDocument = Union[TextContent, ImagePages]
