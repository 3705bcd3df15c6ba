from __future__ import annotations

import math
from dataclasses import dataclass

from ..core.constants import EARTH_RADIUS_METERS
from ..core.exceptions import InvalidCoordinate


@dataclass(frozen=True)
class Coordinate:
    latitude: float
    longitude: float

    def to_dict(self) -> dict:
        return {"latitude": self.latitude, "longitude": self.longitude}


def _validated(point: Coordinate) -> tuple[float, float]:
    try:
        lat = float(point.latitude)
        lon = float(point.longitude)
    except (AttributeError, TypeError, ValueError):
        raise InvalidCoordinate(f"Invalid coordinate {point!r}")
    if not (math.isfinite(lat) and math.isfinite(lon)):
        raise InvalidCoordinate(f"Coordinate must be finite: {point!r}")
    if not (-90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0):
        raise InvalidCoordinate(f"Coordinate out of range: {point!r}")
    return lat, lon


def validate_coordinate(point: Coordinate) -> Coordinate:
    """Raise ``InvalidCoordinate`` unless ``point`` is finite and in range."""
    _validated(point)
    return point


def distance_meters(a: Coordinate, b: Coordinate) -> float:
    """Great-circle (haversine) distance in meters on a sphere of mean earth radius."""
    lat1, lon1 = _validated(a)
    lat2, lon2 = _validated(b)
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)
    h = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    # clamp against float drift for antipodal points
    h = min(1.0, max(0.0, h))
    return EARTH_RADIUS_METERS * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
