from __future__ import annotations

import csv
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd

from ..constants import HEADER_MIN_MATCHES
from .header import find_header_row, header_found

"""Spreadsheet decoding adapter.

The resolution core only consumes raw rows (lists of cell strings) and
records (column name -> value). This module turns .xlsx/.xls/.csv files into
those shapes:

- Excel: pandas with header=None and dtype=str so postal codes keep their
  leading zeros; only the first sheet is read.
- CSV: csv.reader, because title rows above the header are usually shorter
  than data rows and pandas rejects ragged input.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "SheetReadError",
    "SheetData",
    "read_raw_rows",
    "build_records",
    "load_records",
]

EXCEL_SUFFIXES = {".xlsx", ".xls"}
CSV_SUFFIXES = {".csv"}


class SheetReadError(Exception):
    """Raised when a spreadsheet file cannot be read."""


@dataclass
class SheetData:
    header_index: int
    header_detected: bool  # False -> row 0 fallback was used
    columns: list[str]
    records: list[dict[str, Any]]


def read_raw_rows(path: Path) -> list[list[str]]:
    """Read a spreadsheet into rows of cell strings (blank cells -> "")."""
    if not path.exists():
        raise SheetReadError(f"file not found: {path}")
    suffix = path.suffix.lower()
    if suffix in EXCEL_SUFFIXES:
        try:
            df = pd.read_excel(path, sheet_name=0, header=None, dtype=str, keep_default_na=False)
        except (ValueError, OSError) as e:
            raise SheetReadError(f"cannot read {path.name}: {e}") from e
        df = df.fillna("")
        return [[str(v) for v in row] for row in df.itertuples(index=False, name=None)]
    if suffix in CSV_SUFFIXES:
        try:
            # utf-8-sig: Excel 由来 CSV の BOM を除去
            with path.open("r", encoding="utf-8-sig", newline="") as f:
                return [list(row) for row in csv.reader(f)]
        except (UnicodeDecodeError, csv.Error, OSError) as e:
            raise SheetReadError(f"cannot read {path.name}: {e}") from e
    raise SheetReadError(f"unsupported file type: {path.suffix or '(none)'}")


def _dedupe_header(header: list[str]) -> list[str]:
    taken = {name for name in header if name}
    seen: set[str] = set()
    out: list[str] = []
    for name in header:
        if not name or name not in seen:
            seen.add(name)
            out.append(name)
            continue
        n = 1
        while f"{name}_{n}" in taken:
            n += 1
        renamed = f"{name}_{n}"
        taken.add(renamed)
        out.append(renamed)
    return out


def build_records(raw_rows: Sequence[Sequence[Any]], header_index: int) -> tuple[list[str], list[dict[str, Any]]]:
    """Use raw_rows[header_index] as column names for the rows after it.

    Blank header cells are dropped, fully blank data rows are skipped and
    short rows are padded with "". A repeated column name keeps its first
    column; later ones become Name_1, Name_2, ...
    """
    if not raw_rows:
        return [], []
    header = _dedupe_header([str(c).strip() if c is not None else "" for c in raw_rows[header_index]])
    columns = [c for c in header if c]
    records: list[dict[str, Any]] = []
    for raw in raw_rows[header_index + 1:]:
        cells = ["" if v is None else v for v in raw]
        if all(str(v).strip() == "" for v in cells):
            continue
        row: dict[str, Any] = {}
        for i, col in enumerate(header):
            if not col:
                continue
            row[col] = cells[i] if i < len(cells) else ""
        records.append(row)
    return columns, records


def load_records(
    path: Path,
    canonical: frozenset[str] | set[str],
    min_matches: int = HEADER_MIN_MATCHES,
) -> SheetData:
    """Read a file, detect its header row and build records."""
    raw_rows = read_raw_rows(path)
    index = find_header_row(raw_rows, canonical, min_matches)
    detected = header_found(raw_rows, canonical, min_matches)
    if not detected and raw_rows:
        logger.warning(f"{path.name}: no header row with {min_matches}+ known columns, using row 1")
    columns, records = build_records(raw_rows, index)
    logger.debug(f"{path.name}: header_row={index} columns={columns} rows={len(records)}")
    return SheetData(header_index=index, header_detected=detected, columns=columns, records=records)
