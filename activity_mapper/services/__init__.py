"""Resolution services: geocoding, facilitator matching, layout, aggregation."""

from .addresses import address_key, geocode_address, resolve_addresses
from .aggregate import aggregate_neighborhoods, collect_neighborhoods, count_unique_activities, filter_by_neighborhood
from .coordinates import load_coordinate_markers
from .facilitators import resolve_activities
from .layout import layout_markers
from .session import MapperSession, VersionedCell

__all__ = [
    "address_key",
    "geocode_address",
    "resolve_addresses",
    "resolve_activities",
    "layout_markers",
    "collect_neighborhoods",
    "aggregate_neighborhoods",
    "filter_by_neighborhood",
    "count_unique_activities",
    "load_coordinate_markers",
    "MapperSession",
    "VersionedCell",
]
