import os


def get_settings_module() -> str:
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "kindergarten_staff.config.production"

    if env in {"test", "testing"}:
        return "kindergarten_staff.config.testing"

    return "kindergarten_staff.config.development"
