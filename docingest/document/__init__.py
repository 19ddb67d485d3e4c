# docingest/document/__init__.py
# ============================================================
# Canonical Document Package
# ============================================================
# Key classes:
#   - TextContent: extracted text variant
#   - ImagePages: ordered page-image variant
#   - PageImage: a single encoded page image
# ============================================================

from docingest.document.models import CanonicalDocument, ImagePages, PageImage, TextContent

__all__ = ["CanonicalDocument", "ImagePages", "PageImage", "TextContent"]
