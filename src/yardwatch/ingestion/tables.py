"""Readers for uploaded spreadsheets.

Uploads are either CSV or an Excel workbook. Only the first worksheet of
a workbook is read, and its first row names the columns. Cell values are
handed on untouched; parsing happens in :mod:`yardwatch.ingestion.batch`.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Any

import openpyxl

from yardwatch.exceptions import YardIngestError

_logger = logging.getLogger(__name__)

_EXCEL_SUFFIXES = frozenset({".xlsx", ".xlsm"})


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _read_csv(path: Path) -> list[dict[str, Any]]:
    # utf-8-sig strips the BOM that spreadsheet exports tend to add.
    with path.open(newline="", encoding="utf-8-sig") as handle:
        reader = csv.DictReader(handle)
        rows: list[dict[str, Any]] = []
        for raw in reader:
            row = {key.strip(): value for key, value in raw.items() if key is not None}
            if all(_is_blank(value) for value in row.values()):
                continue
            rows.append(row)
    return rows


def _read_excel(path: Path) -> list[dict[str, Any]]:
    workbook = openpyxl.load_workbook(path, read_only=True, data_only=True)
    try:
        if not workbook.worksheets:
            return []
        sheet = workbook.worksheets[0]
        values = sheet.iter_rows(values_only=True)
        header_row = next(values, None)
        if header_row is None:
            return []
        header = [str(cell).strip() if cell is not None else "" for cell in header_row]

        rows: list[dict[str, Any]] = []
        for cells in values:
            row = {name: cell for name, cell in zip(header, cells, strict=False) if name and not _is_blank(cell)}
            if not row:
                continue
            rows.append(row)
        return rows
    finally:
        workbook.close()


def read_rows(path: str | Path) -> list[dict[str, Any]]:
    """Read an uploaded CSV or Excel file into row dicts.

    Raises
    ------
    YardIngestError
        If the file type is unsupported or the file cannot be read.
    """
    source = Path(path)
    suffix = source.suffix.lower()
    try:
        if suffix == ".csv":
            rows = _read_csv(source)
        elif suffix in _EXCEL_SUFFIXES:
            rows = _read_excel(source)
        else:
            raise YardIngestError(f"Unsupported upload type: {source.name}")
    except YardIngestError:
        raise
    except (OSError, UnicodeDecodeError, csv.Error) as exc:
        raise YardIngestError(f"Could not read {source.name}: {exc}") from exc
    except Exception as exc:
        # openpyxl raises a variety of zipfile/XML errors for corrupt workbooks.
        raise YardIngestError(f"Could not read workbook {source.name}: {exc}") from exc

    _logger.debug("Read %d row(s) from %s", len(rows), source.name)
    return rows
