from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..constants import ACTIVITY_CODES
from .activity import ActivityMarker
from .individual import Individual

"""Result models returned by the resolution services.

Data-quality problems are folded into these structures (counts and
classification lists) instead of being raised.
"""

__all__ = [
    "AddressResolution",
    "ActivityResolution",
]


@dataclass(frozen=True)
class AddressResolution:
    """Output of address deduplication + geocoding."""
    individuals: list[Individual]
    failed_count: int  # number of unique addresses that failed
    failed_addresses: list[str] = field(default_factory=list)
    unique_addresses: int = 0


@dataclass(frozen=True)
class ActivityResolution:
    """Output of facilitator resolution + marker layout."""
    markers: list[ActivityMarker]
    no_facilitators: list[dict[str, Any]]
    facilitator_not_found: list[dict[str, Any]]
    type_counts: dict[str, int]

    @staticmethod
    def empty() -> ActivityResolution:
        return ActivityResolution(
            markers=[],
            no_facilitators=[],
            facilitator_not_found=[],
            type_counts={code: 0 for code in ACTIVITY_CODES},
        )
