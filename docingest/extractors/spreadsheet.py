# docingest/extractors/spreadsheet.py
# ============================================================
# Spreadsheet Extractor (.xlsx / .xls)
# ============================================================
# Renders a workbook as one text blob:
#
#   Sheet: Budget
#
#   Item, Cost
#   Paper, 12
#
#   ---
#
# Sheets keep their stored order. Each row becomes one line of
# cell values joined by ", "; empty cells stay as empty strings
# so columns keep their positions.
#
# Reader selection happens inside the extractor: zip containers
# (OOXML packages, including .xlsx files saved as .xls) use
# openpyxl, everything else is handed to xlrd as BIFF.
# ============================================================

import datetime
import io
import zipfile
from typing import Any, Iterable, Iterator

import xlrd
from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException
from xlrd.compdoc import CompDocError
from xlrd.sheet import Cell, Sheet
from xlrd.xldate import XLDateError

from docingest.errors import CorruptDocumentError, EmptyDocumentError

CELL_DELIMITER = ", "
SHEET_SEPARATOR = "\n---\n\n"

_FORMAT_NAME = "Excel spreadsheet"


def format_cell(value: Any) -> str:
    """Render a cell value as its display string."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime.datetime):
        if value.time() == datetime.time(0, 0):
            return value.date().isoformat()
        return value.isoformat(sep=" ")
    if isinstance(value, (datetime.date, datetime.time)):
        return value.isoformat()
    return str(value)


def format_row(values: Iterable[Any]) -> str:
    cells = [format_cell(v) for v in values]
    while cells and cells[-1] == "":
        cells.pop()
    return CELL_DELIMITER.join(cells)


def render_sheets(sheets: Iterable[tuple[str, Iterable[Iterable[Any]]]]) -> str:
    """Render (sheet name, rows) pairs in the order given."""
    parts = []
    for name, rows in sheets:
        parts.append(f"Sheet: {name}\n\n")
        for row in rows:
            parts.append(format_row(row) + "\n")
        parts.append(SHEET_SEPARATOR)
    return "".join(parts)


def _openpyxl_sheets(data: bytes) -> list[tuple[str, list[tuple]]]:
    try:
        workbook = load_workbook(io.BytesIO(data), data_only=True)
    except (zipfile.BadZipFile, InvalidFileException, KeyError, ValueError, OSError) as e:
        raise CorruptDocumentError(
            f"Could not open workbook: {e}", format_name=_FORMAT_NAME
        ) from e

    try:
        return [
            (ws.title, list(ws.iter_rows(values_only=True)))
            for ws in workbook.worksheets
        ]
    finally:
        workbook.close()


def _xlrd_cell_value(cell: Cell, datemode: int) -> Any:
    if cell.ctype in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK):
        return None
    if cell.ctype == xlrd.XL_CELL_BOOLEAN:
        return bool(cell.value)
    if cell.ctype == xlrd.XL_CELL_DATE:
        try:
            return xlrd.xldate_as_datetime(cell.value, datemode)
        except XLDateError:
            return cell.value
    if cell.ctype == xlrd.XL_CELL_ERROR:
        return xlrd.error_text_from_code.get(cell.value, "#ERR")
    return cell.value


def _xlrd_rows(sheet: Sheet, datemode: int) -> Iterator[list[Any]]:
    for rowx in range(sheet.nrows):
        yield [_xlrd_cell_value(cell, datemode) for cell in sheet.row(rowx)]


def _xlrd_sheets(data: bytes) -> list[tuple[str, list[list[Any]]]]:
    try:
        workbook = xlrd.open_workbook(file_contents=data, on_demand=True)
    except (xlrd.XLRDError, CompDocError, zipfile.BadZipFile, ValueError, IndexError) as e:
        raise CorruptDocumentError(
            f"Could not open workbook: {e}", format_name=_FORMAT_NAME
        ) from e

    try:
        sheets = []
        for index in range(workbook.nsheets):
            sheet = workbook.sheet_by_index(index)
            sheets.append((sheet.name, list(_xlrd_rows(sheet, workbook.datemode))))
        return sheets
    finally:
        workbook.release_resources()


def extract_spreadsheet(data: bytes) -> str:
    """Extract a workbook as text, one header line per sheet."""
    if zipfile.is_zipfile(io.BytesIO(data)):
        sheets = _openpyxl_sheets(data)
    else:
        sheets = _xlrd_sheets(data)

    if not sheets:
        raise EmptyDocumentError("Workbook contains no worksheets", {"format": "spreadsheet"})

    return render_sheets(sheets)
