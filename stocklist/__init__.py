import logging
import os
from typing import Any

import redis
from cachelib import FileSystemCache
from flask import Flask

from .blueprints_registry import register_blueprints
from .config import ENV_DIAGNOSTICS, Config, config_map, is_default_secret
from .error_tools import register_error_handlers
from .extensions import csrf, server_session
from .logging_config import configure_logging
from .middleware import register_middleware
from .utils.template_filters import register_template_filters

logger = logging.getLogger(__name__)


def create_app(config: dict[str, Any] | None = None) -> Flask:
    app = Flask(__name__, static_folder="static", static_url_path="/static")
    os.makedirs(app.instance_path, exist_ok=True)

    _load_base_config(app, config)
    _check_production_safety(app)

    csrf.init_app(app)
    _configure_sessions(app)

    register_middleware(app)
    register_blueprints(app)
    register_template_filters(app)
    register_error_handlers(app)
    configure_logging(app)

    logger.info(
        "Stocklist ready (env=%s, session_type=%s, categories=%s)",
        app.config.get("ENV"),
        app.config.get("SESSION_TYPE"),
        ", ".join(app.config["PRODUCT_CATEGORIES"]),
    )
    return app


def _load_base_config(app: Flask, config: dict[str, Any] | None) -> None:
    requested_env = (config or {}).get("FLASK_ENV")
    app.config.from_object(config_map.get(requested_env, Config))
    if config:
        app.config.update(config)
    app.config["ENV_DIAGNOSTICS"] = ENV_DIAGNOSTICS
    for warning in ENV_DIAGNOSTICS.get("warnings", ()):
        logger.warning("Environment configuration warning: %s", warning)

    app.config["PRODUCT_CATEGORIES"] = tuple(app.config.get("PRODUCT_CATEGORIES") or ())
    if not app.config["PRODUCT_CATEGORIES"]:
        raise RuntimeError("PRODUCT_CATEGORIES must name at least one category.")


def _check_production_safety(app: Flask) -> None:
    if app.config.get("ENV") != "production":
        return
    if is_default_secret(app.config.get("SECRET_KEY")):
        raise RuntimeError("FLASK_SECRET_KEY must be set in production.")


def _configure_sessions(app: Flask) -> None:
    redis_url = app.config.get("REDIS_URL")

    if redis_url and "SESSION_TYPE" not in app.config:
        app.config["SESSION_TYPE"] = "redis"
        app.config.setdefault("SESSION_REDIS", redis.Redis.from_url(redis_url))
    elif "SESSION_TYPE" not in app.config:
        if app.config.get("ENV") == "production":
            raise RuntimeError("Server-side sessions require Redis in production.")
        session_dir = os.path.join(app.instance_path, "session_files")
        os.makedirs(session_dir, exist_ok=True)
        app.config["SESSION_TYPE"] = "cachelib"
        app.config["SESSION_CACHELIB"] = FileSystemCache(cache_dir=session_dir, threshold=500)

    server_session.init_app(app)
