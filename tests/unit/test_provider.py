from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
from geopy.exc import GeocoderServiceError, GeocoderTimedOut

from activity_mapper.geocoding.provider import GeopyGeocoder, ProviderError, build_geocoder
from activity_mapper.models.config_models import GeocoderConfig
from activity_mapper.models.individual import LatLng


def _client(result=None, side_effect=None):
    client = MagicMock()
    client.geocode.return_value = result
    client.geocode.side_effect = side_effect
    return client


def test_geocode_success():
    client = _client(SimpleNamespace(latitude=44.6, longitude=-63.5))
    geocoder = GeopyGeocoder(client, timeout=3)

    assert geocoder.geocode("1 Main St") == LatLng(44.6, -63.5)
    client.geocode.assert_called_once_with("1 Main St", exactly_one=True, timeout=3)


def test_geocode_not_found():
    assert GeopyGeocoder(_client(None)).geocode("nowhere") is None


@pytest.mark.parametrize("error", [GeocoderTimedOut("slow"), GeocoderServiceError("HTTP 500")])
def test_provider_errors_become_none(error):
    assert GeopyGeocoder(_client(side_effect=error)).geocode("1 Main St") is None


def test_location_without_usable_coordinate():
    client = _client(SimpleNamespace(latitude=float("nan"), longitude=1.0))
    assert GeopyGeocoder(client).geocode("x") is None


def test_empty_query_skips_client():
    client = _client()
    assert GeopyGeocoder(client).geocode("") is None
    client.geocode.assert_not_called()


def test_build_nominatim():
    with patch("activity_mapper.geocoding.provider.Nominatim") as nominatim:
        geocoder = build_geocoder(GeocoderConfig(provider="nominatim", user_agent="ua", timeout=4))
    nominatim.assert_called_once_with(user_agent="ua", timeout=4)
    assert geocoder.timeout == 4


def test_build_google_requires_key():
    with pytest.raises(ProviderError):
        build_geocoder(GeocoderConfig(provider="google"))


def test_build_google_with_key():
    with patch("activity_mapper.geocoding.provider.GoogleV3") as google:
        build_geocoder(GeocoderConfig(provider="google", api_key="k"))
    google.assert_called_once_with(api_key="k", timeout=10.0)


def test_build_unknown_provider():
    with pytest.raises(ProviderError):
        build_geocoder(GeocoderConfig(provider="mapquest"))
