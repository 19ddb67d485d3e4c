# docingest/generation/__init__.py
# ============================================================
# Generation Client Package
# ============================================================
# Request shape and HTTP client for the external
# generative-content service.
# ============================================================

from docingest.generation.client import GenerationClient, OutputType, build_generation_request

__all__ = ["GenerationClient", "OutputType", "build_generation_request"]
