from __future__ import annotations

import json
from pathlib import Path

from activity_mapper.logging.error_log import ErrorLogBuffer
from activity_mapper.models.error_record import ErrorRecord
from activity_mapper.models.resolution_result import ActivityResolution, AddressResolution


def test_flush_writes_json_lines(tmp_path: Path):
    buf = ErrorLogBuffer(tmp_path / "logs")
    buf.append(ErrorRecord.create("people.xlsx", "GEOCODE_FAILED", "1 Main St", "address could not be geocoded"))
    fp = buf.flush()

    assert fp is not None and fp.parent == tmp_path / "logs"
    assert fp.name.startswith("errors-") and fp.suffix == ".log"
    (line,) = fp.read_text(encoding="utf-8").splitlines()
    data = json.loads(line)
    assert data["error_type"] == "GEOCODE_FAILED"
    assert data["timestamp"].endswith("Z")


def test_empty_flush_creates_nothing(tmp_path: Path):
    buf = ErrorLogBuffer(tmp_path / "logs")
    assert buf.flush() is None
    assert not (tmp_path / "logs").exists()


def test_collects_resolution_issues(tmp_path: Path):
    buf = ErrorLogBuffer(tmp_path)
    buf.add_address_failures(
        "people.csv", AddressResolution(individuals=[], failed_count=1, failed_addresses=["99 Nowhere Rd"])
    )
    buf.add_activity_issues(
        "activities.csv",
        ActivityResolution(
            markers=[],
            no_facilitators=[{"Name": "Grade 1", "Facilitators": ""}],
            facilitator_not_found=[{"Name": "JY 1", "Facilitators": "Nobody"}],
            type_counts={},
        ),
    )
    fp = buf.flush()
    records = [json.loads(x) for x in fp.read_text(encoding="utf-8").splitlines()]

    assert [(r["error_type"], r["subject"]) for r in records] == [
        ("GEOCODE_FAILED", "99 Nowhere Rd"),
        ("NO_FACILITATORS", "Grade 1"),
        ("FACILITATOR_NOT_FOUND", "JY 1"),
    ]
    assert records[2]["detail"] == "no match for: Nobody"
