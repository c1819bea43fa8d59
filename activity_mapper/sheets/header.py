from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from ..constants import HEADER_MIN_MATCHES
from .fields import ACTIVITIES_HEADER_CANONICAL, INDIVIDUALS_HEADER_CANONICAL, normalize_header_cell

"""Header row detection.

Uploaded sheets often carry titles, export metadata or blank lines above the
real column labels. The header is the first row containing at least
min_matches cells from a canonical vocabulary; when no row qualifies, row 0
is assumed (silent fallback, columns that do not match simply resolve to "").
"""

__all__ = [
    "find_header_row",
    "find_individuals_header_row",
    "find_activities_header_row",
    "header_found",
]


def _count_matches(row: Sequence[Any], canonical: frozenset[str] | set[str]) -> int:
    matches = 0
    for cell in row:
        norm = normalize_header_cell(cell)
        if norm and norm in canonical:
            matches += 1
    return matches


def find_header_row(
    raw_rows: Sequence[Sequence[Any]],
    canonical: frozenset[str] | set[str],
    min_matches: int = HEADER_MIN_MATCHES,
) -> int:
    """Return the index of the first row with >= min_matches canonical cells (0 if none)."""
    if raw_rows is None:
        raise TypeError("raw_rows must be a sequence of rows, got None")
    for i, row in enumerate(raw_rows):
        if not isinstance(row, (list, tuple)):
            continue
        if _count_matches(row, canonical) >= min_matches:
            return i
    return 0


def header_found(
    raw_rows: Sequence[Sequence[Any]],
    canonical: frozenset[str] | set[str],
    min_matches: int = HEADER_MIN_MATCHES,
) -> bool:
    """True when some row actually meets the threshold (i.e. no fallback was used)."""
    return any(
        isinstance(row, (list, tuple)) and _count_matches(row, canonical) >= min_matches
        for row in raw_rows
    )


def find_individuals_header_row(raw_rows: Sequence[Sequence[Any]], min_matches: int = HEADER_MIN_MATCHES) -> int:
    return find_header_row(raw_rows, INDIVIDUALS_HEADER_CANONICAL, min_matches)


def find_activities_header_row(raw_rows: Sequence[Sequence[Any]], min_matches: int = HEADER_MIN_MATCHES) -> int:
    return find_header_row(raw_rows, ACTIVITIES_HEADER_CANONICAL, min_matches)
