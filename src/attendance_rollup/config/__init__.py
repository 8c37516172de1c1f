import os


def get_settings_module() -> str:
    # Settings module is chosen by APP_ENV, development by default.
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "attendance_rollup.config.production"

    if env in {"test", "testing"}:
        return "attendance_rollup.config.testing"

    return "attendance_rollup.config.development"
