"""Spreadsheet shape handling: header detection, field resolution, normalization."""

from .fields import ACTIVITIES_HEADER_CANONICAL, INDIVIDUALS_HEADER_CANONICAL, Field, get_field
from .header import find_activities_header_row, find_header_row, find_individuals_header_row
from .normalize import normalize_activity, normalize_individual, normalize_name

__all__ = [
    "Field",
    "get_field",
    "INDIVIDUALS_HEADER_CANONICAL",
    "ACTIVITIES_HEADER_CANONICAL",
    "find_header_row",
    "find_individuals_header_row",
    "find_activities_header_row",
    "normalize_individual",
    "normalize_activity",
    "normalize_name",
]
