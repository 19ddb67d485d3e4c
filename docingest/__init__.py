# docingest/__init__.py
# ============================================================
# docingest — Document Ingestion & Normalization
# ============================================================
# Root package. Sub-packages:
#   - docingest.extractors → routing + text/docx/spreadsheet extraction
#   - docingest.pdf        → PDF text layer + page rasterization
#   - docingest.document   → CanonicalDocument model
#   - docingest.pipeline   → Ingestor and content assembler
#   - docingest.generation → client for the generative service
#   - docingest.utils      → logging, image helpers
# ============================================================

__version__ = "0.1.0"
