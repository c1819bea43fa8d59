from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for the JSON Lines error log.

Records the data-quality issues that are reported to the user as lists
rather than raised: failed geocodes, activities without facilitators and
activities whose facilitators could not be matched.
"""

__all__ = [
    "ErrorRecord",
    "GEOCODE_FAILED",
    "NO_FACILITATORS",
    "FACILITATOR_NOT_FOUND",
]

GEOCODE_FAILED = "GEOCODE_FAILED"
NO_FACILITATORS = "NO_FACILITATORS"
FACILITATOR_NOT_FOUND = "FACILITATOR_NOT_FOUND"


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: Source spreadsheet name ("" when unknown)
        error_type: Classification in UPPER_SNAKE_CASE
        subject: Address query or activity name the record is about
        detail: Free-text description
    """
    timestamp: str
    file: str
    error_type: str
    subject: str
    detail: str

    @staticmethod
    def create(file: str, error_type: str, subject: str, detail: str) -> ErrorRecord:
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            file=file,
            error_type=error_type,
            subject=subject,
            detail=detail,
        )

    def to_json_line(self) -> str:
        # 追加キー阻止: dataclass -> dict して json.dumps
        return json.dumps(asdict(self), ensure_ascii=False)
