# staycore_backend/__init__.py
from __future__ import annotations

import logging
import os
from datetime import datetime
from typing import Any, Optional

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix
from werkzeug.security import generate_password_hash

from .errors import register_error_handlers
from .extensions import db, jwt

DEFAULT_ORIGINS = [
    "http://localhost:5173",
    "http://localhost:5174",
    "http://127.0.0.1:5173",
    "http://127.0.0.1:5174",
]


def _get_allowed_origins(app: Flask) -> list[str]:
    """Default dev origins plus the comma-separated CORS_ALLOWED_ORIGINS setting."""
    extra = app.config.get("CORS_ALLOWED_ORIGINS") or ""
    extra_list = [o.strip() for o in extra.split(",") if o.strip()]
    return sorted(set(DEFAULT_ORIGINS + extra_list))


def _configure_logging(app: Flask) -> None:
    """JSON logs to stdout."""
    level = str(app.config.get("LOG_LEVEL", "INFO")).upper()
    app.logger.setLevel(level)
    root = logging.getLogger()
    root.setLevel(level)

    # avoid duplicate handlers in reloaders
    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt='{"ts":"%(asctime)s","level":"%(levelname)s","msg":"%(message)s","name":"%(name)s"}',
            datefmt="%Y-%m-%dT%H:%M:%S%z",
        )
        handler.setFormatter(formatter)
        root.addHandler(handler)


def _configure_cors(app: Flask) -> None:
    CORS(
        app,
        resources={r"/api/*": {"origins": _get_allowed_origins(app)}},
        supports_credentials=True,
        methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
        expose_headers=["Content-Type"],
        max_age=86400,
    )


def _configure_proxy(app: Flask) -> None:
    """Respect X-Forwarded-* from the hosting proxy."""
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_port=1)  # type: ignore


def _configure_admin(app: Flask) -> None:
    # a plain ADMIN_PASSWORD is only hashed when no hash was provided
    if not app.config.get("ADMIN_PASSWORD_HASH") and app.config.get("ADMIN_PASSWORD"):
        app.config["ADMIN_PASSWORD_HASH"] = generate_password_hash(app.config["ADMIN_PASSWORD"])
    if not app.config.get("ADMIN_PASSWORD_HASH"):
        app.logger.warning("No admin password configured; admin login is disabled")


def _load_config(app: Flask, config_object: Optional[str | Any]) -> None:
    if config_object is None:
        config_object = os.getenv("CONFIG_CLASS", "staycore_backend.config.Config")
    app.config.from_object(config_object)

    if not app.config.get("SQLALCHEMY_DATABASE_URI"):
        app.config["SQLALCHEMY_DATABASE_URI"] = "sqlite:///" + os.path.join(app.instance_path, "staycore.db")


def _register_blueprints(app: Flask) -> None:
    """Register all API blueprints under /api."""
    from .routes import (
        auth_bp,
        buildings_bp,
        guests_bp,
        inquiries_bp,
        maintenance_bp,
        payments_bp,
        receipts_bp,
        reports_bp,
        rooms_bp,
    )

    for bp in (auth_bp, buildings_bp, rooms_bp, guests_bp, payments_bp,
               receipts_bp, maintenance_bp, inquiries_bp, reports_bp):
        app.register_blueprint(bp)
        app.logger.debug("Registered blueprint %s", bp.name)


# --- Application Factory ------------------------------------------------------
def create_app(config_object: Optional[str | Any] = None) -> Flask:
    """
    Standard Flask application factory.

    `config_object` may be:
      - a config object
      - dotted path to a config class (e.g., "staycore_backend.config.DevelopmentConfig")
      - None (then CONFIG_CLASS env or staycore_backend.config.Config)
    """
    app = Flask(__name__, instance_relative_config=True)
    os.makedirs(app.instance_path, exist_ok=True)

    _load_config(app, config_object)
    _configure_admin(app)

    # Core middleware/logging/CORS
    _configure_logging(app)
    _configure_proxy(app)
    _configure_cors(app)

    db.init_app(app)
    jwt.init_app(app)
    _register_blueprints(app)
    register_error_handlers(app)

    with app.app_context():
        from . import models  # noqa: F401  register tables
        db.create_all()

    # --------- Health & root routes ----------
    @app.get("/api/health")
    def health():
        return jsonify(
            {
                "status": "ok",
                "time": datetime.utcnow().isoformat() + "Z",
                "service": "staycore-backend",
            }
        ), 200

    @app.get("/")
    def root():
        return jsonify({"service": "staycore-backend", "message": "See /api/health"}), 200

    return app
