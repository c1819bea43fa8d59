from __future__ import annotations

import math
import re
from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any

"""Canonical fields and the field resolver.

Spreadsheet columns arrive under many spellings ("First Name", "first_name",
"FirstName"...). Each canonical field owns an ordered synonym tuple and all
column reads go through get_field(), so parsing, sorting and display use the
same matching rules.
"""

__all__ = [
    "Field",
    "normalize_header_cell",
    "get_field",
    "cell_text",
    "INDIVIDUALS_HEADER_CANONICAL",
    "ACTIVITIES_HEADER_CANONICAL",
    "COORDINATES_HEADER_CANONICAL",
]

_STRIP_PAT = re.compile(r"[\s_]")


class Field(Enum):
    """Canonical attribute -> ordered synonym list (first match wins)."""

    FIRST_NAME = ("First Name", "FirstName", "Firstname", "first_name", "firstname", "First Name(s)")
    LAST_NAME = ("Last Name", "LastName", "Lastname", "last_name", "lastname", "Family Name")
    ADDRESS = ("Address", "Street Address", "addr")
    ADDRESS_LINE_1 = ("Address Line 1", "Address 1")
    ADDRESS_LINE_2 = ("Address Line 2", "Address 2")
    NEIGHBORHOOD = ("Focus Neighbourhood", "Focus Neighborhood", "Neighbourhood", "Neighborhood")
    POSTAL_CODE = ("Postal Code", "Postal", "Postcode", "Zip", "ZIP Code", "Zip Code")
    LOCALITY = ("Locality", "City")
    REGION = ("Region", "State", "Province")
    NATIONAL_COMMUNITY = ("National Community", "Country")
    ACTIVITY_TYPE = ("Activity Type", "Type")
    ACTIVITY_NAME = ("Name", "Activity Name")
    FACILITATORS = ("Facilitators", "Facilitator")
    LATITUDE = ("Latitude", "Lat")
    LONGITUDE = ("Longitude", "Lng", "Lon")

    @property
    def keys(self) -> tuple[str, ...]:
        return self.value


def normalize_header_cell(cell: Any) -> str:
    """Trim, drop whitespace/underscores, lowercase."""
    if cell is None:
        return ""
    return _STRIP_PAT.sub("", str(cell).strip()).lower()


INDIVIDUALS_HEADER_CANONICAL: frozenset[str] = frozenset({
    "firstname", "lastname", "address", "addressline1", "addressline2",
    "focusneighbourhood", "focusneighborhood", "neighbourhood", "neighborhood",
    "locality", "region", "nationalcommunity", "postal", "postalcode", "postcode", "zip", "zipcode",
})

ACTIVITIES_HEADER_CANONICAL: frozenset[str] = frozenset({
    "activitytype", "type", "name", "facilitators", "facilitator",
})

COORDINATES_HEADER_CANONICAL: frozenset[str] = frozenset({
    "latitude", "lat", "longitude", "lng", "lon", "activity", "activitytype", "type",
})


def get_field(record: Mapping[str, Any], keys: Field | Sequence[str]) -> Any:
    """Return the value of the first record column matching a candidate key.

    Candidates are tried in order; for each candidate the record's own keys
    are scanned in insertion order. Blank cells (None / NaN) read as "".

    Args:
        record: column name -> value mapping for one row
        keys: a Field or an ordered list of synonym spellings

    Returns:
        The matched value, or "" when no candidate matches.
    """
    if record is None:
        raise TypeError("record must be a mapping, got None")
    candidates = keys.keys if isinstance(keys, Field) else keys
    for key in candidates:
        wanted = normalize_header_cell(key)
        for column, value in record.items():
            if normalize_header_cell(column) == wanted:
                return _blank_to_empty(value)
    return ""


def cell_text(value: Any) -> str:
    """Cell value as stripped text ("" for blanks)."""
    value = _blank_to_empty(value)
    return str(value).strip()


def _blank_to_empty(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    return value
