from __future__ import annotations

import importlib
import logging
from typing import Any, Optional

from dotenv import load_dotenv
from flask import Flask

from .config import get_settings_module
from .container import Container, build_container
from .database.bootstrap import apply_schema
from .monthly_settings.controller import register as register_monthly_settings
from .reports.controller import register as register_reports

logger = logging.getLogger("attendance_rollup")


def create_app(*, settings: Any = None, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    if settings is None:
        settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if container is None:
        container = build_container(settings)
        logger.info(
            "settings=%s records_api=%s monthly_settings=%s",
            getattr(settings, "__name__", settings_module),
            getattr(settings, "RECORDS_API_BASE", ""),
            getattr(settings, "MONTHLY_SETTINGS_BACKEND", "mysql"),
        )
        if container.settings_db is not None and bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(container.settings_db)

    app.extensions["attendance_rollup"] = container

    register_reports(app, container)
    register_monthly_settings(app, container)

    return app
