from __future__ import annotations

import importlib
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .admins.controller import register as register_admins
from .attendance.controller import register as register_attendance
from .common.errors import register_error_handlers
from .common.logger import configure_logging
from .container import Container, build_container
from .database.bootstrap import apply_schema, ensure_admin_account, list_tables
from .members.controller import register as register_members
from .photos.controller import register as register_photos
from .stats.controller import register as register_stats

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def create_app(*, container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["COOKIE_SECURE"] = bool(getattr(settings, "COOKIE_SECURE", True))
    app.config["ADMIN_SESSION_SLIDING"] = bool(getattr(settings, "ADMIN_SESSION_SLIDING", True))
    app.config["MAX_CONTENT_LENGTH"] = int(getattr(settings, "MAX_UPLOAD_BYTES", 10 * 1024 * 1024))

    log = configure_logging(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        log_dir=getattr(settings, "LOG_DIR", None),
    )
    log.info("starting with settings=%s", settings_module)

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        log.info(
            "db=%s@%s:%s/%s",
            db_config.get("user"), db_config.get("host"), db_config.get("port", 3306), db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            log.info("schema ready (tables=%d)", len(list_tables(db_config)))

        admin_username = getattr(settings, "ADMIN_USERNAME", None)
        admin_password = getattr(settings, "ADMIN_PASSWORD", None)
        if bool(getattr(settings, "AUTO_SEED_DB", False)) and admin_username and admin_password:
            ensure_admin_account(db_config, username=admin_username, password=admin_password)

        container = build_container(
            db_config=db_config,
            storage_config={
                "url": getattr(settings, "SUPABASE_URL", None),
                "key": getattr(settings, "SUPABASE_KEY", None),
                "bucket": getattr(settings, "SUPABASE_BUCKET", "member-photos"),
            },
        )

    app.extensions["attendance_board"] = container

    register_error_handlers(app)
    register_admins(app, container)
    register_attendance(app, container)
    register_members(app, container)
    register_stats(app, container)
    register_photos(app, container)

    @app.route("/health", endpoint="health")
    def health():
        return jsonify({"status": "ok"})

    return app
