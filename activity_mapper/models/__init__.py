"""Domain models for the activity mapper.

Frozen dataclasses only; behaviour lives in activity_mapper.services.
"""

from .activity import ActivityMarker, ActivityRecord, Assignment, CoordinateMarker
from .config_models import GeocoderConfig, MapperConfig, RateLimitConfig
from .error_record import ErrorRecord
from .individual import Individual, LatLng
from .resolution_result import ActivityResolution, AddressResolution

__all__ = [
    # Configuration models
    "GeocoderConfig",
    "MapperConfig",
    "RateLimitConfig",
    # Entities
    "Individual",
    "LatLng",
    "ActivityRecord",
    "Assignment",
    "ActivityMarker",
    "CoordinateMarker",
    # Results
    "AddressResolution",
    "ActivityResolution",
    "ErrorRecord",
]
