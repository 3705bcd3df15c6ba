"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_GRACE_MINUTES = 30

EARTH_RADIUS_METERS = 6_371_000.0

DEFAULT_WORK_START = "08:00"
DEFAULT_WORK_END = "23:00"

DEFAULT_LATE_PENALTY_RATE = 100
DEFAULT_ABSENCE_PENALTY = 630

DEFAULT_LOCATION_TIMEOUT_SECONDS = 10.0
DEFAULT_SHIFT_CACHE_TTL_SECONDS = 120.0
