from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from flask_cors import CORS

from config import get_settings_module

from .common.datetime_utils import now_local
from .common.errors import register_error_handlers
from .common.log import configure_logging
from .container import build_container
from .database.bootstrap import apply_schema, list_tables
from .identities.demo import seed_demo_identities
from .attendance.controller import register as register_attendance
from .dashboard.controller import register as register_dashboard
from .identities.controller import register as register_identities
from .sessions.controller import register as register_sessions

logger = logging.getLogger(__name__)


def create_app(settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["PORT"] = int(getattr(settings, "PORT", 3050))

    CORS(app, resources={r"/api/*": {"origins": list(getattr(settings, "CORS_ORIGINS", []))}})

    storage_backend = getattr(settings, "STORAGE_BACKEND", "mysql")
    db_config = getattr(settings, "DB_CONFIG", None)
    logger.info("Starting with settings=%s storage=%s", settings_module, storage_backend)

    if storage_backend == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config)
        logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))

    container = build_container(
        jwt_secret=getattr(settings, "JWT_SECRET"),
        storage_backend=storage_backend,
        db_config=db_config,
        session_ttl_hours=int(getattr(settings, "SESSION_TTL_HOURS", 24)),
    )
    app.extensions["campus_access"] = container

    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        added = seed_demo_identities(container.identity_service)
        logger.info("Demo seed ready (%d identities added)", added)

    register_error_handlers(app)

    @app.route("/api/health", endpoint="health")
    def health():
        return jsonify({"status": "ok", "storage": storage_backend, "timestamp": now_local().isoformat()})

    register_identities(app, container)
    register_sessions(app, container)
    register_attendance(app, container)
    register_dashboard(app, container)

    return app
