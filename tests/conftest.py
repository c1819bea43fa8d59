# Shared pytest fixtures
from __future__ import annotations

import tempfile
from pathlib import Path

import pytest

from activity_mapper.logging.init import reset_logging
from activity_mapper.models.individual import LatLng


class FakeGeocoder:
    """Geocoder returning canned coordinates; records every query."""

    def __init__(self, results: dict[str, LatLng | None] | None = None, default: LatLng | None = None) -> None:
        self.results = results or {}
        self.default = default
        self.calls: list[str] = []

    def geocode(self, query: str) -> LatLng | None:
        self.calls.append(query)
        return self.results.get(query, self.default)


class AllowLimiter:
    def __init__(self) -> None:
        self.calls = 0

    def try_acquire(self) -> bool:
        self.calls += 1
        return True


class DenyLimiter:
    def __init__(self) -> None:
        self.calls = 0

    def try_acquire(self) -> bool:
        self.calls += 1
        return False


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """geocoder:
  provider: nominatim
  user_agent: test-agent
  timeout: 5
  min_delay_seconds: 0
rate_limit:
  capacity: 10
  window_seconds: 1
  max_retries: 2
  backoff_seconds: 0.5
header_min_matches: 2
marker_radius_deg: 0.001
logs_directory: ./logs
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "mapper.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def fake_geocoder() -> FakeGeocoder:
    return FakeGeocoder(default=LatLng(lat=44.65, lng=-63.57))


@pytest.fixture()
def allow_limiter() -> AllowLimiter:
    return AllowLimiter()


@pytest.fixture()
def deny_limiter() -> DenyLimiter:
    return DenyLimiter()


@pytest.fixture()
def no_sleep():
    waits: list[float] = []

    def _sleep(seconds: float) -> None:
        waits.append(seconds)

    _sleep.waits = waits  # type: ignore[attr-defined]
    return _sleep


@pytest.fixture()
def make_geocoder():
    return FakeGeocoder


@pytest.fixture(autouse=True)
def _clean_logging():
    yield
    reset_logging()
