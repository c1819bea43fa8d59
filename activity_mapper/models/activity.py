from __future__ import annotations

from dataclasses import dataclass
from typing import Any

"""Activity models.

ActivityRecord is the canonical projection of one activities-file row.
Assignment pairs an activity with one matched facilitator, and
ActivityMarker is the positioned result handed to the map renderer.
One ActivityRecord naming two facilitators yields two markers.
"""

__all__ = [
    "ActivityRecord",
    "Assignment",
    "ActivityMarker",
    "CoordinateMarker",
]


@dataclass(frozen=True)
class ActivityRecord:
    record: dict[str, Any]  # original column name -> value
    activity_type_raw: str
    activity_type_code: str | None  # None when the type is not in the vocabulary
    activity_name: str
    facilitators_raw: str

    @property
    def unique_key(self) -> tuple[str, str, str]:
        """Identity used when counting unique activities per type."""
        return (self.activity_name, self.activity_type_code or "", self.facilitators_raw)


@dataclass(frozen=True)
class Assignment:
    """One (facilitator, activity) pairing."""
    activity: ActivityRecord
    facilitator_name: str  # display name of the matched individual


@dataclass(frozen=True)
class ActivityMarker:
    id: str
    lat: float
    lng: float
    activity_type_code: str
    facilitator_name: str
    address: str
    activity_name: str
    facilitators_raw: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "lat": self.lat,
            "lng": self.lng,
            "activityTypeCode": self.activity_type_code,
            "facilitatorName": self.facilitator_name,
            "address": self.address,
            "activityName": self.activity_name,
            "facilitatorsRaw": self.facilitators_raw,
        }


@dataclass(frozen=True)
class CoordinateMarker:
    """Marker read straight from a latitude/longitude file (no geocoding)."""
    lat: float
    lng: float
    activity: str  # upper-cased activity code, may be ""

    def to_dict(self) -> dict[str, Any]:
        return {"lat": self.lat, "lng": self.lng, "activity": self.activity}
