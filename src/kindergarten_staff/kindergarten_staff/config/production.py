import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "kindergarten_db"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

GRACE_MINUTES = int(os.getenv("GRACE_MINUTES", "30"))
LOCATION_TIMEOUT_SECONDS = float(os.getenv("LOCATION_TIMEOUT_SECONDS", "10"))
SHIFT_CACHE_TTL_SECONDS = float(os.getenv("SHIFT_CACHE_TTL_SECONDS", "120"))
GEOFENCE_FAIL_CLOSED = bool(int(os.getenv("GEOFENCE_FAIL_CLOSED", "0")))

PENALTY_POLICY = {
    "late_penalty_type": os.getenv("LATE_PENALTY_TYPE", "per_5_minutes"),
    "late_penalty_rate": int(os.getenv("LATE_PENALTY_RATE", "100")),
    "absence_penalty": int(os.getenv("ABSENCE_PENALTY", "630")),
}
