from __future__ import annotations

import logging

from ..common.cache import TTLCache
from ..core.exceptions import DomainError, LocationUnavailable
from ..geo.geofence import GeofenceConfig
from ..shifts.model import WorkingHoursConfig
from .repository import SettingsRepository

logger = logging.getLogger(__name__)


class SessionSettings:
    """Geofence and working-hours settings, read once per session.

    If the geofence settings cannot be read the session falls back to a
    disabled geofence (fail-open) unless ``fail_closed`` is set, in which case
    attendance actions are refused with ``LocationUnavailable``.
    """

    def __init__(self, settings: SettingsRepository, cache: TTLCache, *, fail_closed: bool = False):
        self._settings = settings
        self._cache = cache
        self._fail_closed = fail_closed

    def geofence(self) -> GeofenceConfig:
        config = self._cache.get_or_load("geofence", self._load_geofence)
        if config is None:
            raise LocationUnavailable("Geofence settings are unavailable, attendance actions are blocked")
        return config

    def working_hours(self) -> WorkingHoursConfig:
        return self._cache.get_or_load("working_hours", self._load_working_hours)

    def refresh(self) -> None:
        self._cache.clear()

    def _load_geofence(self):
        try:
            return self._settings.get_geofence_config()
        except DomainError as exc:
            if self._fail_closed:
                logger.error("geofence settings unavailable, failing closed: %s", exc)
                return None
            logger.warning("geofence settings unavailable, geofencing disabled: %s", exc)
            return GeofenceConfig.disabled()

    def _load_working_hours(self) -> WorkingHoursConfig:
        try:
            return self._settings.get_working_hours_config()
        except DomainError as exc:
            logger.warning("working hours unavailable, using defaults: %s", exc)
            return WorkingHoursConfig.default()
