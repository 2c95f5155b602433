"""
project: Geomorph Dungeon Generator
module: __init__.py

Flask application factory.

Configuration is sourced from environment variables (optionally via a local
`.env`) with reasonable defaults for development. A local `instance/`
directory holds runtime data such as the server log.
"""

import logging
import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify

# Load .env if present so generation defaults and logging flags can be supplied
# without exporting shell variables during development.
load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logging.getLogger(__name__).warning("Ignoring non-integer %s=%r", name, raw)
        return default


def create_app(config: dict | None = None) -> Flask:
    """Build the Flask app and register the generation blueprint.

    ``config`` entries override the environment-derived defaults (tests use
    this to pin values).
    """
    from geomorph.dungeon.config import GENERATION_DEFAULTS

    app = Flask(__name__, instance_relative_config=True)
    try:
        os.makedirs(app.instance_path, exist_ok=True)
    except OSError:
        # Read-only installs can still serve requests; only the file log is lost
        pass

    app.config.update(
        SECRET_KEY=os.getenv("SECRET_KEY", "dev-secret-change-me"),
        GEOMORPH_ENABLE_GENERATION_METRICS=_env_flag("GEOMORPH_ENABLE_GENERATION_METRICS", "1"),
        GEOMORPH_DEFAULT_GRID_SIZE=_env_int("GEOMORPH_DEFAULT_GRID_SIZE", GENERATION_DEFAULTS["GRID_SIZE"]),
        GEOMORPH_DEFAULT_ROOM_COUNT=_env_int("GEOMORPH_DEFAULT_ROOM_COUNT", GENERATION_DEFAULTS["ROOM_COUNT"]),
    )
    if config:
        app.config.update(config)

    from geomorph.routes.generate_api import bp_generate

    app.register_blueprint(bp_generate)

    @app.errorhandler(500)
    def internal_error(e):
        error_id = uuid.uuid4().hex[:8]
        logging.exception("Unhandled exception (id=%s)", error_id)
        return jsonify({"error": "internal error", "error_id": error_id}), 500

    return app


__all__ = ["create_app"]
