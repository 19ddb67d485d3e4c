# docingest/pipeline/__init__.py
# ============================================================
# Pipeline Package
# ============================================================
# Key classes:
#   - DocumentIngestor: bytes + filename -> CanonicalDocument
#   - assemble: raw extractor output -> CanonicalDocument
# ============================================================

from docingest.pipeline.assembler import assemble, classify_failure
from docingest.pipeline.ingestor import DocumentIngestor, read_upload

__all__ = ["DocumentIngestor", "assemble", "classify_failure", "read_upload"]
