from __future__ import annotations

"""Policy constants shared across the mapper.

Codes and labels follow the legend shown next to the map; numeric values are
tuning knobs (defaults for MapperConfig), not part of any wire contract.
"""

# Activity type vocabulary (normalized label -> code)
ACTIVITY_TYPE_CODES: dict[str, str] = {
    "children's class": "CC",
    "junior youth group": "JY",
    "study circle": "SC",
    "devotional": "DM",
}

ACTIVITY_LABELS: dict[str, str] = {
    "CC": "Children's Class",
    "DM": "Devotional",
    "JY": "Junior Youth",
    "SC": "Study Circle",
}

ICON_COLORS: dict[str, str] = {
    "CC": "#4CAF50",
    "DM": "#F44336",
    "JY": "#2196F3",
    "SC": "#9C27B0",
}

# Sorted code order used for type_counts / SUMMARY output
ACTIVITY_CODES: tuple[str, ...] = tuple(sorted(ACTIVITY_LABELS))

OTHER_NEIGHBORHOOD = "Other"
ADDRESS_KEY_SEPARATOR = "|"
FACILITATOR_SEPARATOR = ";"

HEADER_MIN_MATCHES = 2
ACTIVITY_MARKER_RADIUS_DEG = 0.0005

# Geocoding rate limit: 1000 requests / 60 s token bucket
GEOCODE_RATE_CAPACITY = 1000
GEOCODE_RATE_WINDOW_SECONDS = 60.0
GEOCODE_MAX_RETRIES = 3
GEOCODE_BACKOFF_SECONDS = 1.0
