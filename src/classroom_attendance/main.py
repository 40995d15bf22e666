from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import build_container
from .core.constants import STREAM_HEARTBEAT_SECONDS
from .roster.controller import register as register_roster
from .sessions.controller import register as register_sessions
from .store.base import DocumentStore

logger = logging.getLogger(__name__)


def create_app(*, store: DocumentStore | None = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["STREAM_HEARTBEAT_SECONDS"] = float(
        getattr(settings, "STREAM_HEARTBEAT_SECONDS", STREAM_HEARTBEAT_SECONDS)
    )
    store_config = getattr(settings, "STORE_CONFIG")

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger.info(
        "settings=%s store=%s",
        settings_module, "injected" if store is not None else store_config.get("backend"),
    )

    container = build_container(store_config=store_config, store=store)
    app.extensions["container"] = container

    register_roster(app, container)
    register_sessions(app, container)
    register_attendance(app, container)

    return app
