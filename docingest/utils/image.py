# docingest/utils/image.py
# ============================================================
# Image Utility Functions
# ============================================================
# Shared image helpers used by the page rasterizer and the
# transport serializer. Handles encoding, resizing, and metadata
# extraction for PIL Images.
#
# Usage:
#   from docingest.utils.image import encode_image, resize_if_needed
#   img = resize_if_needed(page_image, max_dim=4096)
#   data = encode_image(img, fmt="JPEG", quality=85)
# ============================================================

import base64
import io
import time

from PIL import Image

from docingest.utils.logger import get_logger

logger = get_logger(__name__)

# Pillow format name -> MIME type for the formats we emit
_MIME_TYPES = {
    "JPEG": "image/jpeg",
    "PNG": "image/png",
    "WEBP": "image/webp",
}

# Formats whose encoder takes a quality parameter
_LOSSY_FORMATS = {"JPEG", "WEBP"}


def mime_type_for(fmt: str) -> str:
    """Return the MIME type for a Pillow format name."""
    try:
        return _MIME_TYPES[fmt.upper()]
    except KeyError:
        raise ValueError(
            f"Unsupported page image format: '{fmt}'. "
            f"Supported: {', '.join(sorted(_MIME_TYPES))}"
        ) from None


def encode_image(image: Image.Image, fmt: str = "JPEG", quality: int = 85) -> bytes:
    """
    Encode a PIL Image into bytes of the given format.

    JPEG has no alpha channel, so non-RGB images are converted first.
    """
    start = time.perf_counter()
    fmt = fmt.upper()
    mime_type_for(fmt)

    if fmt == "JPEG" and image.mode not in ("RGB", "L"):
        image = image.convert("RGB")

    buffer = io.BytesIO()
    if fmt in _LOSSY_FORMATS:
        image.save(buffer, format=fmt, quality=quality)
    else:
        image.save(buffer, format=fmt)
    data = buffer.getvalue()

    duration = (time.perf_counter() - start) * 1000
    logger.debug(f"Image encoding ({fmt}, {len(data)} bytes) took {duration:.2f}ms")
    return data


def encode_image_base64(data: bytes) -> str:
    """Base64-encode already encoded image bytes for JSON transport."""
    return base64.b64encode(data).decode("ascii")


def resize_if_needed(image: Image.Image, max_dim: int = 4096) -> Image.Image:
    """
    Resize an image if its largest dimension exceeds max_dim.
    """
    width, height = image.size

    if width <= max_dim and height <= max_dim:
        return image

    start = time.perf_counter()
    scale = max_dim / max(width, height)
    new_width = max(1, int(width * scale))
    new_height = max(1, int(height * scale))

    resized = image.resize((new_width, new_height), Image.Resampling.LANCZOS)

    duration = (time.perf_counter() - start) * 1000
    logger.debug(f"Image resizing ({width}x{height} -> {new_width}x{new_height}) took {duration:.2f}ms")
    return resized


def get_image_info(image: Image.Image) -> dict:
    """
    Extract metadata from a PIL Image for logging and diagnostics.

    Args:
        image: PIL Image to inspect.

    Returns:
        Dictionary with width, height, mode (RGB/RGBA/L), and
        estimated uncompressed size in MB.

    Example:
        >>> info = get_image_info(Image.new("RGB", (1224, 1584)))
        >>> info["width"]
        1224
    """
    width, height = image.size
    channels = len(image.getbands())
    estimated_mb = round(width * height * channels / (1024 * 1024), 2)

    return {
        "width": width,
        "height": height,
        "mode": image.mode,
        "channels": channels,
        "estimated_size_mb": estimated_mb,
    }
