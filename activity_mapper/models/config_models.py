from __future__ import annotations

from dataclasses import dataclass, field

from ..constants import (
    ACTIVITY_MARKER_RADIUS_DEG,
    GEOCODE_BACKOFF_SECONDS,
    GEOCODE_MAX_RETRIES,
    GEOCODE_RATE_CAPACITY,
    GEOCODE_RATE_WINDOW_SECONDS,
    HEADER_MIN_MATCHES,
)

"""Config dataclasses for the activity mapper.

These are the typed counterparts of config/mapper.yml. Every field has a
default so MapperConfig() is a usable configuration without any file.
"""

__all__ = [
    "GeocoderConfig",
    "RateLimitConfig",
    "MapperConfig",
]


@dataclass(frozen=True)
class GeocoderConfig:
    """Geocoding provider settings.

    provider selects the geopy backend ("nominatim" or "google"). The api_key
    is only required by the google provider and is normally supplied through
    the GEOCODER_API_KEY environment variable.
    """
    provider: str = "nominatim"
    user_agent: str = "activity-mapper"
    api_key: str | None = None
    timeout: float = 10.0
    min_delay_seconds: float = 1.0  # geopy RateLimiter の最小間隔


@dataclass(frozen=True)
class RateLimitConfig:
    """Token bucket and retry policy for outbound geocode requests."""
    capacity: int = GEOCODE_RATE_CAPACITY
    window_seconds: float = GEOCODE_RATE_WINDOW_SECONDS
    max_retries: int = GEOCODE_MAX_RETRIES
    backoff_seconds: float = GEOCODE_BACKOFF_SECONDS


@dataclass(frozen=True)
class MapperConfig:
    """Root configuration object."""
    geocoder: GeocoderConfig = field(default_factory=GeocoderConfig)
    rate_limit: RateLimitConfig = field(default_factory=RateLimitConfig)
    header_min_matches: int = HEADER_MIN_MATCHES
    marker_radius_deg: float = ACTIVITY_MARKER_RADIUS_DEG
    logs_directory: str = "./logs"
