from __future__ import annotations

from typing import Protocol

from ..geo.geofence import GeofenceConfig
from ..shifts.model import WorkingHoursConfig


class SettingsRepository(Protocol):
    def get_geofence_config(self) -> GeofenceConfig:
        raise NotImplementedError

    def get_working_hours_config(self) -> WorkingHoursConfig:
        raise NotImplementedError
