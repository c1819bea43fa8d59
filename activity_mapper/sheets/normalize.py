from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ..constants import ACTIVITY_TYPE_CODES, ADDRESS_KEY_SEPARATOR, OTHER_NEIGHBORHOOD
from ..models.activity import ActivityRecord
from .fields import Field, cell_text, get_field

"""Row normalizer: raw records -> canonical attributes.

Pure functions of (record, synonym tables); nothing here touches the network
or mutates its input.
"""

__all__ = [
    "IndividualRow",
    "normalize_individual",
    "normalize_activity",
    "activity_type_code",
    "normalize_name",
    "neighborhood_of",
]


@dataclass(frozen=True)
class IndividualRow:
    first_name: str
    last_name: str
    address: str
    address_line1: str
    address_line2: str
    neighborhood: str
    postal_code: str
    locality: str
    region: str
    national_community: str

    def address_parts(self) -> tuple[str, ...]:
        # 固定順: street -> neighborhood -> postal -> locality -> region -> national community
        return (
            self.address,
            self.address_line1,
            self.address_line2,
            self.neighborhood,
            self.postal_code,
            self.locality,
            self.region,
            self.national_community,
        )

    @property
    def address_key(self) -> str:
        """Deterministic dedup key; identical keys share one geocode lookup."""
        return ADDRESS_KEY_SEPARATOR.join(self.address_parts())

    @property
    def query(self) -> str:
        """Human readable geocode query (blanks dropped, comma joined)."""
        return ", ".join(p for p in self.address_parts() if p)


def normalize_individual(record: Mapping[str, Any]) -> IndividualRow:
    return IndividualRow(
        first_name=cell_text(get_field(record, Field.FIRST_NAME)),
        last_name=cell_text(get_field(record, Field.LAST_NAME)),
        address=cell_text(get_field(record, Field.ADDRESS)),
        address_line1=cell_text(get_field(record, Field.ADDRESS_LINE_1)),
        address_line2=cell_text(get_field(record, Field.ADDRESS_LINE_2)),
        neighborhood=cell_text(get_field(record, Field.NEIGHBORHOOD)),
        postal_code=cell_text(get_field(record, Field.POSTAL_CODE)),
        locality=cell_text(get_field(record, Field.LOCALITY)),
        region=cell_text(get_field(record, Field.REGION)),
        national_community=cell_text(get_field(record, Field.NATIONAL_COMMUNITY)),
    )


def activity_type_code(raw: str) -> str | None:
    """Map a free-text activity type onto its code, None when unrecognized."""
    key = raw.strip().lower().replace("’", "'")
    return ACTIVITY_TYPE_CODES.get(key)


def normalize_activity(record: Mapping[str, Any]) -> ActivityRecord:
    type_raw = cell_text(get_field(record, Field.ACTIVITY_TYPE))
    return ActivityRecord(
        record=dict(record),
        activity_type_raw=type_raw,
        activity_type_code=activity_type_code(type_raw),
        activity_name=cell_text(get_field(record, Field.ACTIVITY_NAME)),
        facilitators_raw=cell_text(get_field(record, Field.FACILITATORS)),
    )


def normalize_name(name: str) -> str:
    """Trim, collapse internal whitespace, lowercase."""
    return " ".join(str(name).split()).lower()


def neighborhood_of(record: Mapping[str, Any]) -> str:
    """Neighborhood value of a record, "Other" when blank."""
    return cell_text(get_field(record, Field.NEIGHBORHOOD)) or OTHER_NEIGHBORHOOD
