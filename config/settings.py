# config/settings.py
# ============================================================
# Centralized Configuration for the Document Ingestion Pipeline
# ============================================================
# All settings are loaded from environment variables (or .env file).
# Pydantic validates types and provides sensible defaults.
#
# Usage:
#   from config.settings import settings
#   extractor = PdfExtractor(min_text_chars=settings.ocr_fallback_min_chars)
# ============================================================

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application-wide settings. Values are loaded from environment variables
    or a .env file. Every setting has a typed default so the pipeline can run
    out-of-the-box with zero configuration.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- PDF text / OCR fallback ---
    ocr_fallback_min_chars: int = Field(
        default=100,
        ge=0,
        description=(
            "Minimum trimmed text-layer length of a PDF. Below this, pages are "
            "rasterized for an OCR-capable consumer instead of returning text."
        ),
    )
    pdf_render_scale: float = Field(
        default=2.0,
        gt=0,
        description="Upscaling factor for page rasterization (1.0 = 72 DPI).",
    )

    # --- Page images ---
    page_image_format: str = Field(
        default="JPEG",
        description="Pillow format name used to encode rasterized pages.",
    )
    page_image_quality: int = Field(
        default=85,
        ge=1,
        le=95,
        description="Encoder quality for lossy page image formats.",
    )
    max_image_dim: int = Field(
        default=4096,
        gt=0,
        description="Maximum image dimension (px). Larger pages are downscaled.",
    )

    # --- Rendering backend ---
    render_concurrency: int = Field(
        default=4,
        ge=1,
        description="Maximum number of pages rasterized concurrently.",
    )
    poppler_path: Optional[str] = Field(
        default=None,
        description="Directory holding the poppler binaries, if not on PATH.",
    )

    # --- Plain text ---
    text_encoding: str = Field(
        default="utf-8-sig",
        description="Codec used to decode plain-text uploads.",
    )

    # --- Generation endpoint ---
    generation_api_url: str = Field(
        default="http://localhost:8080",
        description="Base URL of the generative-content service.",
    )
    generation_timeout_s: float = Field(
        default=120.0,
        gt=0,
        description="Timeout for a single generation request, in seconds.",
    )

    # --- Logging ---
    log_level: str = Field(
        default="INFO",
        description="Logging level: DEBUG | INFO | WARNING | ERROR.",
    )


# ============================================================
# Singleton instance — import this everywhere:
#   from config.settings import settings
# ============================================================
settings = Settings()
