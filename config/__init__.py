# config/__init__.py
# ============================================================
# Configuration package for the document ingestion pipeline.
# Provides centralized, validated settings loaded from .env file.
#
# Usage:
#   from config.settings import settings
#   print(settings.ocr_fallback_min_chars)
# ============================================================

from config.settings import Settings, settings

__all__ = ["Settings", "settings"]
