# docingest/extractors/text.py
# ============================================================
# Plain Text Extractor
# ============================================================

from docingest.errors import CorruptDocumentError


def extract_text(data: bytes, encoding: str = "utf-8-sig") -> str:
    """
    Decode raw bytes as text.

    Decoding is strict: invalid byte sequences raise CorruptDocumentError
    rather than being replaced. No sufficiency check happens here.
    """
    try:
        return data.decode(encoding)
    except UnicodeDecodeError as e:
        raise CorruptDocumentError(
            f"Could not decode text as {encoding}: {e.reason} at byte {e.start}",
            format_name="text",
            details={"encoding": encoding},
        ) from e
