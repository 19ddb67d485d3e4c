# tests/test_models.py
# ============================================================
# Unit Tests — Canonical Document Model & Image Utilities
# ============================================================
# Run:
#   pytest tests/test_models.py -v
# ============================================================

import base64
import io

import pytest
from PIL import Image

from docingest.document.models import ImagePages, PageImage, TextContent
from docingest.utils.image import (
    encode_image,
    encode_image_base64,
    get_image_info,
    mime_type_for,
    resize_if_needed,
)


# ============================================================
# Canonical Document
# ============================================================

class TestTextContent:
    """Test the text variant."""

    def test_payload_is_the_string(self):
        assert TextContent(content="Hello").to_payload() == "Hello"

    def test_char_count(self):
        assert TextContent(content="abc").char_count == 3

    def test_is_immutable(self):
        document = TextContent(content="fixed")
        with pytest.raises(AttributeError):
            document.content = "changed"


class TestImagePages:
    """Test the page image variant and its transport shape."""

    def test_page_payload_shape(self):
        page = PageImage(index=1, mime_type="image/jpeg", data=b"\xff\xd8raw")
        payload = page.to_payload()

        assert set(payload) == {"mimeType", "data"}
        assert payload["mimeType"] == "image/jpeg"
        assert base64.b64decode(payload["data"]) == b"\xff\xd8raw"

    def test_pages_payload_keeps_order(self):
        pages = tuple(PageImage(index=i, mime_type="image/png", data=bytes([i])) for i in (1, 2, 3))
        payload = ImagePages(pages=pages).to_payload()
        assert [base64.b64decode(p["data"]) for p in payload] == [b"\x01", b"\x02", b"\x03"]

    def test_page_count(self):
        pages = (PageImage(index=1, mime_type="image/jpeg", data=b"x"),)
        assert ImagePages(pages=pages).page_count == 1

    @pytest.mark.parametrize("index", [0, -1])
    def test_page_index_starts_at_one(self, index):
        with pytest.raises(ValueError):
            PageImage(index=index, mime_type="image/jpeg", data=b"x")

    def test_equal_pages_compare_equal(self):
        a = PageImage(index=2, mime_type="image/jpeg", data=b"same")
        b = PageImage(index=2, mime_type="image/jpeg", data=b"same")
        assert a == b


# ============================================================
# Image Utilities
# ============================================================

class TestImageUtils:
    """Test encoding and resizing helpers."""

    def test_mime_types(self):
        assert mime_type_for("jpeg") == "image/jpeg"
        assert mime_type_for("PNG") == "image/png"

    def test_unknown_format_rejected(self):
        with pytest.raises(ValueError, match="Unsupported page image format"):
            mime_type_for("BMP")

    def test_jpeg_encoding_converts_rgba(self):
        image = Image.new("RGBA", (10, 10), color=(255, 0, 0, 128))
        data = encode_image(image, fmt="JPEG")
        decoded = Image.open(io.BytesIO(data))
        assert decoded.format == "JPEG"
        assert decoded.mode == "RGB"

    def test_png_encoding(self):
        data = encode_image(Image.new("L", (8, 8)), fmt="png")
        assert Image.open(io.BytesIO(data)).format == "PNG"

    def test_base64(self):
        assert encode_image_base64(b"abc") == "YWJj"

    def test_small_image_is_not_resized(self):
        image = Image.new("RGB", (100, 50))
        assert resize_if_needed(image, max_dim=200) is image

    def test_large_image_keeps_aspect_ratio(self):
        resized = resize_if_needed(Image.new("RGB", (400, 200)), max_dim=100)
        assert resized.size == (100, 50)

    def test_image_info(self):
        info = get_image_info(Image.new("RGB", (1224, 1584)))
        assert info["width"] == 1224
        assert info["height"] == 1584
        assert info["channels"] == 3
