from __future__ import annotations

import logging
import math
from typing import Any, Protocol

from geopy.exc import GeopyError
from geopy.extra.rate_limiter import RateLimiter as GeopyRateLimiter
from geopy.geocoders import GoogleV3, Nominatim

from ..models.config_models import GeocoderConfig
from ..models.individual import LatLng

"""Geocoding collaborator.

The core only needs `geocode(query) -> LatLng | None`. GeopyGeocoder adapts
a geopy backend to that contract: provider errors (timeouts, unavailable
service, quota, bad key) and results without usable coordinates all come back
as None instead of raising.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "Geocoder",
    "GeopyGeocoder",
    "ProviderError",
    "build_geocoder",
]

PROVIDERS = ("nominatim", "google")


class ProviderError(Exception):
    """Raised when the configured provider cannot be constructed."""


class Geocoder(Protocol):
    def geocode(self, query: str) -> LatLng | None: ...


def _usable(value: Any) -> bool:
    return isinstance(value, (int, float)) and math.isfinite(value)


class GeopyGeocoder:
    """geopy-backed geocoder.

    A geopy RateLimiter enforces min_delay_seconds between calls (Nominatim's
    usage policy asks for at most one request per second). Retries are not
    done here; the token bucket loop owns the retry budget.
    """

    def __init__(self, client: Any, *, timeout: float = 10.0, min_delay_seconds: float = 0.0) -> None:
        self.client = client
        self.timeout = timeout
        self._geocode = GeopyRateLimiter(
            client.geocode,
            min_delay_seconds=min_delay_seconds,
            max_retries=0,
            swallow_exceptions=False,
        )

    def geocode(self, query: str) -> LatLng | None:
        if not query:
            return None
        try:
            location = self._geocode(query, exactly_one=True, timeout=self.timeout)
        except GeopyError as e:
            logger.warning(f"geocode failed for '{query}': {e.__class__.__name__}: {e}")
            return None
        if location is None:
            return None
        lat = getattr(location, "latitude", None)
        lng = getattr(location, "longitude", None)
        if not (_usable(lat) and _usable(lng)):
            return None
        return LatLng(lat=float(lat), lng=float(lng))


def build_geocoder(config: GeocoderConfig) -> GeopyGeocoder:
    """Construct the geopy client selected by config.provider."""
    provider = config.provider.lower()
    if provider == "nominatim":
        client = Nominatim(user_agent=config.user_agent, timeout=config.timeout)
    elif provider == "google":
        if not config.api_key:
            raise ProviderError("google provider requires an api_key (set GEOCODER_API_KEY)")
        client = GoogleV3(api_key=config.api_key, timeout=config.timeout)
    else:
        raise ProviderError(f"unknown geocoder provider: {config.provider} (expected one of {PROVIDERS})")
    return GeopyGeocoder(client, timeout=config.timeout, min_delay_seconds=config.min_delay_seconds)
