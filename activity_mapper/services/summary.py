from __future__ import annotations

from ..constants import ACTIVITY_CODES
from ..models.resolution_result import ActivityResolution, AddressResolution

"""SUMMARY line and user-facing failure message.

Format:
SUMMARY individuals={n} failed_addresses={n} markers={n} no_facilitators={n}
facilitator_not_found={n} CC={n} DM={n} JY={n} SC={n}
"""

__all__ = [
    "render_summary_line",
    "failed_geocode_message",
]


def render_summary_line(addresses: AddressResolution, activities: ActivityResolution | None = None) -> str:
    """Render the SUMMARY line for one run.

    Args:
        addresses: result of address resolution
        activities: result of activity resolution (None when no activities file)

    Returns:
        Single line starting with "SUMMARY ".

    Examples:
        >>> from activity_mapper.models import AddressResolution
        >>> render_summary_line(AddressResolution(individuals=[], failed_count=1))
        'SUMMARY individuals=0 failed_addresses=1 markers=0 no_facilitators=0 facilitator_not_found=0 CC=0 DM=0 JY=0 SC=0'
    """
    activities = activities or ActivityResolution.empty()
    parts = [
        f"individuals={len(addresses.individuals)}",
        f"failed_addresses={addresses.failed_count}",
        f"markers={len(activities.markers)}",
        f"no_facilitators={len(activities.no_facilitators)}",
        f"facilitator_not_found={len(activities.facilitator_not_found)}",
    ]
    parts.extend(f"{code}={activities.type_counts.get(code, 0)}" for code in ACTIVITY_CODES)
    return "SUMMARY " + " ".join(parts)


def failed_geocode_message(failed_count: int) -> str | None:
    """The one error-like message shown to end users, None when nothing failed."""
    if failed_count <= 0:
        return None
    noun = "address" if failed_count == 1 else "addresses"
    return f"{failed_count} {noun} could not be geocoded"
