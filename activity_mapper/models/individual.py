from __future__ import annotations

from dataclasses import dataclass
from typing import Any

"""Individual model: a spreadsheet row whose address was geocoded."""

__all__ = [
    "LatLng",
    "Individual",
]


@dataclass(frozen=True)
class LatLng:
    lat: float
    lng: float


@dataclass(frozen=True)
class Individual:
    """A resolved individual with a home coordinate.

    Only created when geocoding for the row's address succeeded. The id is
    derived from coordinates, name and row index so re-rendering the same
    input yields the same id.
    """
    id: str
    first_name: str
    last_name: str
    lat: float
    lng: float
    address: str  # human-readable geocode query
    record: dict[str, Any]  # original column name -> value

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def to_dict(self) -> dict[str, Any]:
        """Original record fields plus the resolved attributes."""
        out = dict(self.record)
        out.update(
            id=self.id,
            firstName=self.first_name,
            lastName=self.last_name,
            lat=self.lat,
            lng=self.lng,
            address=self.address,
        )
        return out

    @staticmethod
    def make_id(lat: float, lng: float, first_name: str, last_name: str, index: int) -> str:
        return f"{lat}-{lng}-{first_name} {last_name}-{index}"
