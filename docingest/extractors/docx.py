# docingest/extractors/docx.py
# ============================================================
# Word-Processor Extractor (.docx)
# ============================================================
# Pulls the raw text out of a WordprocessingML package in
# reading order. Body paragraphs and table cell paragraphs are
# emitted as they appear; formatting and images are ignored.
# ============================================================

import io
import zipfile

from docx import Document
from docx.opc.exceptions import PackageNotFoundError
from docx.table import Table

from docingest.errors import CorruptDocumentError


def _table_lines(table: Table) -> list[str]:
    lines = []
    for row in table.rows:
        seen = set()
        for cell in row.cells:
            # Horizontally merged cells come back once per grid column
            if id(cell._tc) in seen:
                continue
            seen.add(id(cell._tc))
            lines.extend(p.text for p in cell.paragraphs)
    return lines


def extract_docx(data: bytes) -> str:
    """Extract the text of a .docx package, one paragraph per line."""
    try:
        document = Document(io.BytesIO(data))
    except (zipfile.BadZipFile, PackageNotFoundError, KeyError, ValueError) as e:
        raise CorruptDocumentError(
            f"Could not open Word document: {e}",
            format_name="Word (.docx)",
        ) from e

    lines: list[str] = []
    for block in document.iter_inner_content():
        if isinstance(block, Table):
            lines.extend(_table_lines(block))
        else:
            lines.append(block.text)

    return "\n".join(lines)
