"""
project: Facility
module: server.py
License: MIT

Server bootstrap: builds the Flask app, configures logging and runs the
development server.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from facility import create_app

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_FILE = "app.log"
LOG_MAX_BYTES = 1_000_000
LOG_BACKUPS = 3


def start_server(host="127.0.0.1", port=5000, debug: bool = False):  # pragma: no cover (runtime only)
    """Start the layout API server with console + rotating file logging."""
    app = create_app()
    _configure_logging(app, level=logging.DEBUG if debug else logging.INFO)
    try:
        print(f"[INFO] Starting layout server on {host}:{port}")
        app.run(host=host, port=port, debug=debug)
    except KeyboardInterrupt:
        print("\n[INFO] Server stopped by user (Ctrl+C)")
        sys.exit(0)


def _log_handlers(log_dir):
    handlers = [logging.StreamHandler()]
    try:
        os.makedirs(log_dir, exist_ok=True)
    except OSError:
        # Unwritable instance dir: console only.
        return handlers
    path = os.path.join(log_dir, LOG_FILE)
    handlers.insert(0, RotatingFileHandler(path, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUPS))
    return handlers


def _configure_logging(app, level=logging.INFO):
    """Route stdlib logging (Flask/werkzeug) to the console and ``<instance>/app.log``.

    Existing root handlers are replaced, so calling this again does not
    duplicate output.
    """
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()

    formatter = logging.Formatter(LOG_FORMAT)
    for handler in _log_handlers(app.instance_path):
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level)
