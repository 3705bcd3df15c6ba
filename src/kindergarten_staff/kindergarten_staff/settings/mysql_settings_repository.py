from __future__ import annotations

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, normalize_mysql_time
from ..core.exceptions import ValidationError
from ..geo.distance import Coordinate, validate_coordinate
from ..geo.geofence import GeofenceConfig
from ..shifts.model import WorkingHoursConfig

_SETTINGS_ID = 1


class MySQLSettingsRepository:
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _row(self):
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT * FROM kindergarten_settings WHERE settings_id=%s", (_SETTINGS_ID,))
            return fetchone(cur)

    def get_geofence_config(self) -> GeofenceConfig:
        r = self._row()
        if not r or not r.get("geofence_enabled"):
            return GeofenceConfig.disabled()
        try:
            center = Coordinate(
                latitude=float(r["geofence_latitude"]),
                longitude=float(r["geofence_longitude"]),
            )
            radius = float(r["geofence_radius_m"])
        except (KeyError, TypeError, ValueError):
            raise ValidationError("Geofence is enabled but its center or radius is missing")
        validate_coordinate(center)
        return GeofenceConfig(enabled=True, center=center, radius_meters=radius)

    def get_working_hours_config(self) -> WorkingHoursConfig:
        r = self._row() or {}
        default = WorkingHoursConfig.default()
        return WorkingHoursConfig(
            default_start=normalize_mysql_time(r.get("work_start")) or default.default_start,
            default_end=normalize_mysql_time(r.get("work_end")) or default.default_end,
        )
