from __future__ import annotations

import math
from collections.abc import Mapping, Sequence

from ..constants import ACTIVITY_MARKER_RADIUS_DEG
from ..models.activity import ActivityMarker, Assignment
from ..models.individual import Individual

"""Marker layout: spread a facilitator's activities on a ring around their home.

Assignment i of N is placed at angle 2*pi*i/N on a circle of radius R
degrees:
    lat = home.lat + sin(angle) * R
    lng = home.lng + cos(angle) * R
With N == 1 the single marker sits at angle 0, i.e. offset east of the home
marker rather than on top of it.
"""

__all__ = [
    "ring_offsets",
    "marker_id",
    "layout_markers",
]


def ring_offsets(count: int, radius: float = ACTIVITY_MARKER_RADIUS_DEG) -> list[tuple[float, float]]:
    """(dlat, dlng) offsets for `count` markers evenly spaced on the ring."""
    offsets: list[tuple[float, float]] = []
    for i in range(count):
        angle = 2 * math.pi * i / count
        offsets.append((math.sin(angle) * radius, math.cos(angle) * radius))
    return offsets


def marker_id(normalized_name: str, display_name: str, activity_name: str, index: int) -> str:
    return f"{normalized_name}-{display_name}-{activity_name}-{index}"


def layout_markers(
    facilitator_activities: Mapping[str, Sequence[Assignment]],
    home_lookup: Mapping[str, Individual],
    radius: float = ACTIVITY_MARKER_RADIUS_DEG,
) -> list[ActivityMarker]:
    """Position every assignment around its facilitator's home coordinate.

    Args:
        facilitator_activities: normalized facilitator name -> ordered assignments
        home_lookup: normalized facilitator name -> Individual (home coordinate)
        radius: ring radius in degrees

    Returns:
        One ActivityMarker per assignment; facilitators without a home entry
        are skipped.
    """
    markers: list[ActivityMarker] = []
    for name, assignments in facilitator_activities.items():
        home = home_lookup.get(name)
        if home is None or not assignments:
            continue
        for i, ((dlat, dlng), assignment) in enumerate(zip(ring_offsets(len(assignments), radius), assignments)):
            activity = assignment.activity
            markers.append(
                ActivityMarker(
                    id=marker_id(name, assignment.facilitator_name, activity.activity_name, i),
                    lat=home.lat + dlat,
                    lng=home.lng + dlng,
                    activity_type_code=activity.activity_type_code or "",
                    facilitator_name=assignment.facilitator_name,
                    address=home.address,
                    activity_name=activity.activity_name,
                    facilitators_raw=activity.facilitators_raw,
                )
            )
    return markers
