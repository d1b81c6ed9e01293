from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import build_container
from .database.bootstrap import apply_schema, list_tables


def _load_settings(overrides: Optional[dict]) -> dict:
    settings_module = get_settings_module()
    module = importlib.import_module(settings_module)
    settings = {name: getattr(module, name) for name in dir(module) if name.isupper()}
    settings["SETTINGS_MODULE"] = settings_module
    settings.update(overrides or {})
    return settings


def create_app(overrides: Optional[dict] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings = _load_settings(overrides)
    app.secret_key = settings["SECRET_KEY"]
    app.config["DEBUG"] = bool(settings.get("DEBUG", False))
    app.config["TESTING"] = bool(settings.get("TESTING", False))

    logging.basicConfig(format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    level = str(settings.get("LOG_LEVEL", "INFO")).upper()
    logging.getLogger(__package__).setLevel(level)
    app.logger.setLevel(level)

    backend = str(settings.get("STORAGE_BACKEND", "file")).lower()
    db_config = settings.get("DB_CONFIG")
    app.logger.debug(
        "settings=%s storage=%s zone=%s",
        settings["SETTINGS_MODULE"], backend, settings.get("ZONE"),
    )

    if backend == "mysql" and bool(settings.get("AUTO_INIT_DB", False)):
        apply_schema(db_config)
        app.logger.debug("schema ready (tables=%d)", len(list_tables(db_config)))

    container = build_container(
        zone_config=settings["ZONE"],
        storage_backend=backend,
        storage_path=settings.get("STORAGE_PATH"),
        db_config=db_config,
        location_options=settings.get("LOCATION_OPTIONS"),
    )
    app.extensions["location_attendance"] = container

    register_attendance(app, container)

    return app
