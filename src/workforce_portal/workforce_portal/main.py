from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .attendance.controller import register as register_attendance
from .common.logging_setup import setup_logging
from .company.controller import register as register_company
from .container import Container, build_container
from .core.constants import DEFAULT_UPLOAD_CLIENT
from .database.bootstrap import apply_schema, ensure_demo_users, list_tables
from .errors.controller import register as register_errors
from .session.controller import register as register_session
from .settings import get_settings_module
from .uploads.controller import register as register_uploads
from .users.controller import register as register_users

log = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    setup_logging(getattr(settings, "LOG_LEVEL", None))

    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["MAX_UPLOAD_BYTES"] = int(getattr(settings, "MAX_UPLOAD_BYTES"))
    # Leave headroom for the multipart envelope; the route reports oversize images itself.
    app.config["MAX_CONTENT_LENGTH"] = app.config["MAX_UPLOAD_BYTES"] * 2

    log.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if container is None:
        container = build_container(
            db_config=db_config,
            secret_key=app.secret_key,
            upload_endpoint=getattr(settings, "UPLOAD_ENDPOINT"),
            upload_client_name=getattr(settings, "UPLOAD_CLIENT", DEFAULT_UPLOAD_CLIENT),
        )

        if getattr(settings, "AUTO_INIT_DB", False):
            apply_schema(container.conn)
            log.info("schema ready (tables=%d)", len(list_tables(container.conn)))
        if getattr(settings, "AUTO_SEED_DB", False):
            ensure_demo_users(container.conn)
            log.info("demo seed ready")

    # The session provider must be mounted before any gated view runs.
    register_session(app, container)
    register_users(app, container)
    register_company(app, container)
    register_attendance(app, container)
    register_uploads(app, container)
    register_errors(app, container)

    return app
