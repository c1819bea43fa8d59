from __future__ import annotations

from unittest.mock import patch

from activity_mapper.models.config_models import MapperConfig
from activity_mapper.models.individual import LatLng
from activity_mapper.services import session as session_module
from activity_mapper.services.session import MapperSession, VersionedCell

INDIVIDUALS = [
    {"First Name": "Jane", "Last Name": "Doe", "Address": "1 Main St", "Neighbourhood": "Downtown"},
    {"First Name": "John", "Last Name": "Smith", "Address": "2 Side St", "Neighbourhood": ""},
]
ACTIVITIES = [
    {"Type": "Study Circle", "Name": "Circle A", "Facilitators": "Jane Doe; John Smith"},
]


class TestVersionedCell:
    def test_commit_in_order(self):
        cell: VersionedCell[str] = VersionedCell("initial")
        t1 = cell.reserve()
        assert cell.commit(t1, "first") is True
        assert cell.snapshot() == (t1, "first")

    def test_stale_commit_is_rejected(self):
        cell: VersionedCell[str] = VersionedCell("initial")
        older = cell.reserve()
        newer = cell.reserve()
        assert cell.commit(newer, "newer") is True
        assert cell.commit(older, "older") is False
        assert cell.value == "newer"
        assert cell.version == newer

    def test_replace_keeps_version(self):
        cell: VersionedCell[int] = VersionedCell(0)
        t = cell.reserve()
        cell.commit(t, 1)
        cell.replace(2)
        assert cell.snapshot() == (t, 2)


def _session(fake_geocoder, allow_limiter, no_sleep) -> MapperSession:
    return MapperSession(fake_geocoder, MapperConfig(), limiter=allow_limiter, sleep=no_sleep)


def test_activities_before_individuals_are_recomputed(fake_geocoder, allow_limiter, no_sleep):
    session = _session(fake_geocoder, allow_limiter, no_sleep)

    early = session.load_activities(ACTIVITIES)
    assert early.markers == []
    assert len(early.facilitator_not_found) == 1

    session.load_individuals(INDIVIDUALS)
    assert len(session.activities.markers) == 2
    assert session.activities.facilitator_not_found == []
    assert session.activities.type_counts["SC"] == 1


def test_new_individuals_upload_replaces_table(make_geocoder, allow_limiter, no_sleep):
    geocoder = make_geocoder(default=LatLng(1.0, 1.0))
    session = MapperSession(geocoder, limiter=allow_limiter, sleep=no_sleep)
    session.load_individuals(INDIVIDUALS)
    session.load_activities(ACTIVITIES)

    session.load_individuals(INDIVIDUALS[:1])
    assert [i.first_name for i in session.individuals] == ["Jane"]
    assert [m.facilitator_name for m in session.activities.markers] == ["Jane Doe"]


def test_remove_individual_recomputes_markers(fake_geocoder, allow_limiter, no_sleep):
    session = _session(fake_geocoder, allow_limiter, no_sleep)
    session.load_individuals(INDIVIDUALS)
    session.load_activities(ACTIVITIES)
    john = next(i for i in session.individuals if i.first_name == "John")

    assert session.remove_individual(john.id) is True
    assert [m.facilitator_name for m in session.activities.markers] == ["Jane Doe"]
    assert session.remove_individual("missing") is False


def test_neighborhoods_and_failed_count(make_geocoder, allow_limiter, no_sleep):
    geocoder = make_geocoder(results={"1 Main St, Downtown": LatLng(1.0, 1.0)})
    session = MapperSession(geocoder, limiter=allow_limiter, sleep=no_sleep)
    result = session.load_individuals(INDIVIDUALS)

    assert result.failed_count == 1
    assert session.failed_count == 1
    assert session.neighborhoods == ["Downtown"]


def test_stale_individuals_result_is_discarded(fake_geocoder, allow_limiter, no_sleep):
    session = _session(fake_geocoder, allow_limiter, no_sleep)
    real = session_module.resolve_addresses
    calls: list[int] = []

    def superseded_while_in_flight(records, *args, **kwargs):
        calls.append(len(records))
        if len(calls) == 1:
            # a later upload finishes while the first one is still geocoding
            session.load_individuals(INDIVIDUALS[:1])
        return real(records, *args, **kwargs)

    with patch("activity_mapper.services.session.resolve_addresses", side_effect=superseded_while_in_flight):
        session.load_individuals(INDIVIDUALS)

    assert calls == [2, 1]
    assert [i.first_name for i in session.individuals] == ["Jane"]
