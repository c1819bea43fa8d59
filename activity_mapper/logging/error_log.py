from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from ..models.error_record import (
    FACILITATOR_NOT_FOUND,
    GEOCODE_FAILED,
    NO_FACILITATORS,
    ErrorRecord,
)
from ..models.resolution_result import ActivityResolution, AddressResolution
from ..sheets.fields import Field, cell_text, get_field

"""Error log buffering (JSON Lines).

One file per run: `<logs_dir>/errors-YYYYMMDD-HHMMSS.log` (UTC), created on
the first non-empty flush. Records are buffered in memory; the run is single
threaded so no locking is done.
"""

__all__ = [
    "ErrorRecord",
    "ErrorLogBuffer",
]

TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class ErrorLogBuffer:
    """In-memory buffer for error records. Flush writes JSON Lines."""

    def __init__(self, logs_dir: Path | str = Path("./logs")) -> None:
        self.logs_dir = Path(logs_dir)
        self._records: list[ErrorRecord] = []
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self.logs_dir / f"errors-{stamp}.log"
        return self._file_path

    def append(self, record: ErrorRecord) -> None:
        self._records.append(record)

    def __len__(self) -> int:  # pragma: no cover (trivial)
        return len(self._records)

    def add_address_failures(self, file: str, result: AddressResolution) -> None:
        for query in result.failed_addresses:
            self.append(ErrorRecord.create(file, GEOCODE_FAILED, query, "address could not be geocoded"))

    def add_activity_issues(self, file: str, result: ActivityResolution) -> None:
        for row in result.no_facilitators:
            self.append(ErrorRecord.create(file, NO_FACILITATORS, _activity_name(row), "no facilitators listed"))
        for row in result.facilitator_not_found:
            facilitators = cell_text(get_field(row, Field.FACILITATORS))
            self.append(
                ErrorRecord.create(
                    file, FACILITATOR_NOT_FOUND, _activity_name(row), f"no match for: {facilitators}"
                )
            )

    def flush(self) -> Path | None:
        """Append buffered records to the log file. None when nothing was buffered."""
        if not self._records:
            return None
        fp = self.file_path
        fp.parent.mkdir(parents=True, exist_ok=True)
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp


def _activity_name(row: Mapping[str, Any]) -> str:
    return cell_text(get_field(row, Field.ACTIVITY_NAME))
