"""
project: Facility
module: __init__.py
License: MIT

Flask application factory for the layout service.

Configuration is sourced from environment variables (optionally via a local
``.env`` file) with defaults suitable for development. Generation settings use
the same ``LAYOUT_*`` keys as :class:`facility.layout.LayoutConfig`.
"""

import os

from dotenv import load_dotenv
from flask import Flask

# Load .env if present so LAYOUT_* settings can be supplied without exporting
# shell variables during development.
load_dotenv()


def create_app(config_overrides: dict | None = None) -> Flask:
    """Return a configured Flask app with the layout API registered."""
    from facility.layout import LayoutConfig
    from facility.routes.layout_api import bp_layout

    app = Flask(__name__, instance_relative_config=True)
    try:
        os.makedirs(app.instance_path, exist_ok=True)
    except OSError:
        # Read-only checkouts still serve the API; only file logging needs it.
        pass

    defaults = LayoutConfig.from_env()
    app.config.update(
        LAYOUT_WIDTH=defaults.width,
        LAYOUT_HEIGHT=defaults.height,
        LAYOUT_SCATTERED_ROOMS=defaults.scattered_rooms,
        LAYOUT_SEED=defaults.seed,
        LAYOUT_ENABLE_METRICS=defaults.enable_metrics,
        LAYOUT_CATALOG=defaults.catalog_path,
        LAYOUT_MAX_SIZE=int(os.getenv("LAYOUT_MAX_SIZE", "128")),
        LAYOUT_MAX_ROOMS=int(os.getenv("LAYOUT_MAX_ROOMS", "64")),
        JSON_SORT_KEYS=False,
    )
    if config_overrides:
        app.config.update(config_overrides)

    app.register_blueprint(bp_layout)
    return app


__all__ = ["create_app"]
