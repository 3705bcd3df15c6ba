from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv
from flask import Flask

from .config import get_settings_module
from .container import build_container
from .database.bootstrap import apply_schema
from .attendance.controller import register as register_attendance
from .payroll.controller import register as register_payroll

logger = logging.getLogger(__name__)

_OPTION_NAMES = (
    "GRACE_MINUTES",
    "LOCATION_TIMEOUT_SECONDS",
    "SHIFT_CACHE_TTL_SECONDS",
    "GEOFENCE_FAIL_CLOSED",
    "PENALTY_POLICY",
)


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config)

    options = {name: getattr(settings, name) for name in _OPTION_NAMES if hasattr(settings, name)}
    container = build_container(db_config=db_config, options=options)
    app.extensions["kindergarten_staff"] = container

    register_attendance(app, container)
    register_payroll(app, container)

    return app
