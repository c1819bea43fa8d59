from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from ..constants import ACTIVITY_MARKER_RADIUS_DEG, FACILITATOR_SEPARATOR
from ..models.activity import ActivityRecord, Assignment
from ..models.individual import Individual
from ..models.resolution_result import ActivityResolution
from ..sheets.normalize import normalize_activity, normalize_name
from .aggregate import count_unique_activities
from .layout import layout_markers

"""Facilitator resolution: activity rows -> facilitator buckets -> markers.

For each activity row:
- unrecognized activity type: skipped silently (debug log only)
- blank facilitators: classified as no-facilitators
- facilitators listed but none matched: classified as facilitator-not-found
- otherwise every matched name contributes one Assignment to that
  facilitator's bucket (partial matches are not reported as not-found)

Names are matched on the normalized "first last" form of resolved
individuals (trim, collapse whitespace, lowercase).
"""

logger = logging.getLogger(__name__)

__all__ = [
    "build_name_lookup",
    "split_facilitators",
    "resolve_activities",
]


def build_name_lookup(individuals: Sequence[Individual]) -> dict[str, Individual]:
    """normalized full name -> Individual (first occurrence wins)."""
    lookup: dict[str, Individual] = {}
    for ind in individuals:
        key = normalize_name(f"{ind.first_name} {ind.last_name}")
        if key:
            lookup.setdefault(key, ind)
    return lookup


def split_facilitators(raw: str) -> list[str]:
    """Split a ';' delimited list into normalized, de-duplicated names."""
    names: list[str] = []
    for part in raw.split(FACILITATOR_SEPARATOR):
        name = normalize_name(part)
        if name and name not in names:
            names.append(name)
    return names


def resolve_activities(
    activity_rows: Sequence[Mapping[str, Any]],
    individuals: Sequence[Individual],
    *,
    radius: float = ACTIVITY_MARKER_RADIUS_DEG,
) -> ActivityResolution:
    """Match activity rows against resolved individuals and lay out markers.

    Args:
        activity_rows: records from the activities file
        individuals: the most recently resolved individuals
        radius: marker ring radius in degrees

    Returns:
        ActivityResolution with markers, both classification lists and the
        unique activity count per type code.
    """
    if activity_rows is None:
        raise TypeError("activity_rows must be a list of records, got None")
    if individuals is None:
        raise TypeError("individuals must be a list, got None")

    lookup = build_name_lookup(individuals)
    buckets: dict[str, list[Assignment]] = {}
    no_facilitators: list[dict[str, Any]] = []
    not_found: list[dict[str, Any]] = []
    skipped = 0

    for row in activity_rows:
        activity: ActivityRecord = normalize_activity(row)
        if activity.activity_type_code is None:
            skipped += 1
            logger.debug(f"skipping activity '{activity.activity_name}': unknown type '{activity.activity_type_raw}'")
            continue
        if not activity.facilitators_raw:
            no_facilitators.append(dict(row))
            continue

        matched = 0
        for name in split_facilitators(activity.facilitators_raw):
            ind = lookup.get(name)
            if ind is None:
                continue
            matched += 1
            buckets.setdefault(name, []).append(Assignment(activity=activity, facilitator_name=ind.full_name))
        if matched == 0:
            not_found.append(dict(row))

    markers = layout_markers(buckets, lookup, radius)
    type_counts = count_unique_activities(a for bucket in buckets.values() for a in bucket)

    logger.info(
        f"activities rows={len(activity_rows)} markers={len(markers)} "
        f"no_facilitators={len(no_facilitators)} facilitator_not_found={len(not_found)}"
    )
    if skipped:
        logger.debug(f"skipped {skipped} activities with unrecognized type")
    return ActivityResolution(
        markers=markers,
        no_facilitators=no_facilitators,
        facilitator_not_found=not_found,
        type_counts=type_counts,
    )
