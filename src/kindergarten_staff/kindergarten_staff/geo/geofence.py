from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..common.validators import require_finite
from ..core.exceptions import LocationUnavailable, OutOfGeofence, ValidationError
from .distance import Coordinate, distance_meters

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeofenceConfig:
    """Circular permitted area for attendance actions."""

    enabled: bool
    center: Optional[Coordinate] = None
    radius_meters: float = 100.0

    def __post_init__(self):
        if self.enabled:
            if self.center is None:
                raise ValidationError("Geofence center is required when geofencing is enabled")
            if require_finite(self.radius_meters, "Geofence radius") < 0:
                raise ValidationError("Geofence radius must be >= 0")

    @classmethod
    def disabled(cls) -> "GeofenceConfig":
        return cls(enabled=False)


def is_within_fence(point: Optional[Coordinate], config: GeofenceConfig) -> bool:
    if not config.enabled:
        return True
    if point is None:
        raise LocationUnavailable("Location is required while geofencing is enabled")
    return distance_meters(point, config.center) <= config.radius_meters


class GeofencePolicy:
    def __init__(self, config: GeofenceConfig):
        self._config = config

    @property
    def enabled(self) -> bool:
        return self._config.enabled

    def check(self, point: Optional[Coordinate]) -> None:
        """Raise ``OutOfGeofence`` (or ``LocationUnavailable``) unless the point is allowed."""
        if is_within_fence(point, self._config):
            return
        distance = distance_meters(point, self._config.center)
        logger.info("geofence rejected point at %.1f m (radius %.1f m)", distance, self._config.radius_meters)
        raise OutOfGeofence(distance, self._config.radius_meters)
