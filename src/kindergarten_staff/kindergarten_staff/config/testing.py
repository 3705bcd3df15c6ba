import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "kindergarten_test_db"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

GRACE_MINUTES = 30
LOCATION_TIMEOUT_SECONDS = 1.0
# no caching under test, every read goes to the repository
SHIFT_CACHE_TTL_SECONDS = 0
GEOFENCE_FAIL_CLOSED = False

PENALTY_POLICY = {
    "late_penalty_type": "per_5_minutes",
    "late_penalty_rate": 100,
    "absence_penalty": 630,
}
