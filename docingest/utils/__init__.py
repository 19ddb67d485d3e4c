# docingest/utils/__init__.py
# ============================================================
# Shared Utilities Package
# ============================================================
# Provides reusable helpers used across the pipeline:
#   - logger: Structured logging with Rich formatting
#   - image: Image encoding, resizing, metadata extraction
# ============================================================

from docingest.utils.image import encode_image, encode_image_base64, get_image_info, resize_if_needed
from docingest.utils.logger import get_logger, set_log_level

__all__ = [
    "get_logger",
    "set_log_level",
    "encode_image",
    "encode_image_base64",
    "resize_if_needed",
    "get_image_info",
]
