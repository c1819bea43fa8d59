from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from typing import Any

from ..models.activity import CoordinateMarker
from ..sheets.fields import Field, cell_text, get_field

"""Markers from a latitude/longitude file (no geocoding involved).

Rows whose latitude or longitude is not numeric are skipped.
"""

__all__ = [
    "parse_coordinate",
    "load_coordinate_markers",
]

_ACTIVITY_KEYS = ("Activity", "Activity Type", "Type")


def parse_coordinate(value: Any) -> float | None:
    text = cell_text(value)
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def load_coordinate_markers(records: Sequence[Mapping[str, Any]]) -> list[CoordinateMarker]:
    if records is None:
        raise TypeError("records must be a list of records, got None")
    markers: list[CoordinateMarker] = []
    for record in records:
        lat = parse_coordinate(get_field(record, Field.LATITUDE))
        lng = parse_coordinate(get_field(record, Field.LONGITUDE))
        if lat is None or lng is None:
            continue
        activity = cell_text(get_field(record, _ACTIVITY_KEYS)).upper()
        markers.append(CoordinateMarker(lat=lat, lng=lng, activity=activity))
    return markers
