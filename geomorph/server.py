"""
project: Geomorph Dungeon Generator
module: server.py

Server bootstrap: builds the Flask app, configures logging and runs the
development server.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from geomorph import create_app


def start_server(host="0.0.0.0", port=5000, debug: bool = False):  # pragma: no cover (runtime only)
    """Start the HTTP server.

    When debug=True, Flask's debugger and reloader provide verbose tracebacks.
    Also routes application logging to instance/geomorph.log and stderr.
    """
    app = create_app()
    _configure_logging(app)
    try:
        print(f"[INFO] Starting HTTP server on {host}:{port}")
        app.run(host=host, port=port, debug=debug)
    except KeyboardInterrupt:
        print("\n[INFO] Server stopped by user (Ctrl+C)")
        sys.exit(0)


_LEVELS = {"debug": logging.DEBUG, "info": logging.INFO, "warn": logging.WARNING, "error": logging.ERROR}


def _configure_logging(app, level_name=None):
    """Send stdlib logging (Flask, werkzeug) to the console and instance/geomorph.log.

    The level follows GEOMORPH_LOG_LEVEL so request logs and the structured
    generation events filter alike. Returns the log file path.
    """
    level_name = (level_name or os.getenv("GEOMORPH_LOG_LEVEL", "info")).lower()
    level = _LEVELS.get(level_name, logging.INFO)
    os.makedirs(app.instance_path, exist_ok=True)
    log_path = os.path.join(app.instance_path, "geomorph.log")

    fmt = logging.Formatter("%(asctime)s %(levelname)-7s %(name)s | %(message)s")
    handlers = [
        RotatingFileHandler(log_path, maxBytes=512_000, backupCount=5, encoding="utf-8"),
        logging.StreamHandler(sys.stderr),
    ]

    root = logging.getLogger()
    # Reconfiguring replaces handlers instead of stacking them
    for h in list(root.handlers):
        root.removeHandler(h)
    root.setLevel(level)
    for h in handlers:
        h.setLevel(level)
        h.setFormatter(fmt)
        root.addHandler(h)
    app.logger.info("Logging to %s at level %s", log_path, logging.getLevelName(level))
    return log_path
