"""Geocoding collaborator and rate limiting."""

from .limiter import RateLimiter, TokenBucket
from .provider import Geocoder, GeopyGeocoder, ProviderError, build_geocoder

__all__ = [
    "RateLimiter",
    "TokenBucket",
    "Geocoder",
    "GeopyGeocoder",
    "ProviderError",
    "build_geocoder",
]
