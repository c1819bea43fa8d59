from __future__ import annotations

from collections.abc import Iterable, Sequence

from ..constants import ACTIVITY_CODES, OTHER_NEIGHBORHOOD
from ..models.activity import ActivityRecord, Assignment
from ..models.individual import Individual
from ..sheets.normalize import neighborhood_of

"""Neighborhood and activity-type aggregation.

Neighborhood list: distinct spellings, blank -> "Other", alphabetical with
"Other" always last. Type counts: unique activities per code, counting only
activities that were mapped to at least one facilitator.
"""

__all__ = [
    "collect_neighborhoods",
    "aggregate_neighborhoods",
    "filter_by_neighborhood",
    "count_unique_activities",
]


def collect_neighborhoods(values: Iterable[str | None]) -> list[str]:
    """Distinct neighborhoods sorted, blanks folded into a trailing "Other"."""
    named: set[str] = set()
    has_other = False
    for value in values:
        text = "" if value is None else str(value).strip()
        if not text or text == OTHER_NEIGHBORHOOD:
            has_other = True
        else:
            named.add(text)
    result = sorted(named)
    if has_other:
        result.append(OTHER_NEIGHBORHOOD)
    return result


def aggregate_neighborhoods(individuals: Sequence[Individual]) -> list[str]:
    return collect_neighborhoods(neighborhood_of(ind.record) for ind in individuals)


def filter_by_neighborhood(individuals: Sequence[Individual], neighborhood: str) -> list[Individual]:
    """Individuals in `neighborhood`; "Other" selects blank neighborhoods."""
    return [ind for ind in individuals if neighborhood_of(ind.record) == neighborhood]


def count_unique_activities(
    assignments: Iterable[Assignment] | Iterable[ActivityRecord],
) -> dict[str, int]:
    """Count unique mapped activities per type code.

    Identity is (activity name, type, facilitators raw) so an activity shared
    by several facilitators is counted once. Every known code is present.
    """
    counts = {code: 0 for code in ACTIVITY_CODES}
    seen: set[tuple[str, str, str]] = set()
    for item in assignments:
        activity = item.activity if isinstance(item, Assignment) else item
        code = activity.activity_type_code
        if code is None or activity.unique_key in seen:
            continue
        seen.add(activity.unique_key)
        counts[code] = counts.get(code, 0) + 1
    return counts
