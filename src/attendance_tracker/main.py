from __future__ import annotations

import importlib
import logging
import os
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from . import http_errors
from .checkins.controller import register as register_checkins
from .config import get_settings_module
from .container import build_container, db_config_from
from .database.bootstrap import apply_schema
from .logs.controller import register as register_logs
from .sessions.controller import register as register_sessions

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logging.getLogger("attendance_tracker").setLevel(str(level).upper())


def create_app(settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["JWT_SECRET"] = getattr(settings, "JWT_SECRET")
    app.config["JWT_ALGORITHM"] = getattr(settings, "JWT_ALGORITHM", "HS256")

    container = build_container(settings)
    logger.info("settings=%s store=%s", settings_module, container.store_backend)

    if container.store_backend == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config_from(settings))

    app.extensions["attendance_container"] = container

    http_errors.register(app)
    register_sessions(app, container)
    register_checkins(app, container)
    register_logs(app, container)

    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({
            "ok": True,
            "status": "ok",
            "service": "attendance-tracker",
            "time": container.clock().isoformat(),
            "store": container.store_backend,
        })

    return app


def run() -> None:
    app = create_app()
    app.run(
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "5000")),
        debug=bool(app.config["DEBUG"]),
    )


if __name__ == "__main__":
    run()
