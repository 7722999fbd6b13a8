"""
project: Facility
module: layout_api.py
License: MIT

Layout generation HTTP routes.

    GET /api/layout            generate (or fetch cached) layout snapshot
    GET /api/layout/catalog    room catalog the service generates with

Query parameters for /api/layout (all optional, defaults from app config):
    width, height   grid size
    rooms           scattered room attempts
    seed            int or string; strings are hashed to a stable int.
                    Falls back to LAYOUT_SEED, then to a random seed.
"""

import hashlib
import os
import random
import threading

from flask import Blueprint, current_app, jsonify, request

from facility.layout import (
    ConfigurationError,
    UnconnectableMapError,
    catalog_to_dict,
    default_catalog,
    generate,
    load_catalog,
)
from facility.logging_utils import get_logger

log = get_logger("layout_api")

bp_layout = Blueprint("layout", __name__)

SEED_MAX = 2**31 - 1

# (seed, width, height, rooms, catalog) -> LayoutMap. Finished layouts are frozen so sharing is safe.
_layout_cache = {}
_layout_cache_lock = threading.Lock()
_LAYOUT_CACHE_MAX = 8

_catalog_cache = {}
_catalog_cache_lock = threading.Lock()


def _coerce_seed(raw):
    """Convert a provided seed (int or str) into a bounded non-negative int."""
    if raw is None:
        return random.randint(1, 1_000_000)
    s = str(raw).strip()
    if not s:
        return random.randint(1, 1_000_000)
    if s.isdigit():
        return int(s) % SEED_MAX
    h = hashlib.sha256(s.encode("utf-8")).digest()
    return int.from_bytes(h[:8], "big") % SEED_MAX


def active_catalog():
    """Catalog from LAYOUT_CATALOG (loaded once per path) or the built-in one."""
    path = current_app.config.get("LAYOUT_CATALOG")
    with _catalog_cache_lock:
        catalog = _catalog_cache.get(path)
        if catalog is None:
            catalog = load_catalog(path) if path else default_catalog()
            _catalog_cache[path] = catalog
    return catalog


def get_cached_layout(seed: int, width: int, height: int, rooms: int, catalog_key=None, catalog=None):
    if catalog is None:
        catalog = default_catalog()
    if os.environ.get("LAYOUT_DISABLE_CACHE") == "1":
        return generate(width, height, catalog, scattered_rooms=rooms, seed=seed)
    key = (seed, width, height, rooms, catalog_key)
    with _layout_cache_lock:
        layout = _layout_cache.get(key)
        if layout is not None:
            return layout
    layout = generate(width, height, catalog, scattered_rooms=rooms, seed=seed)
    with _layout_cache_lock:
        _layout_cache[key] = layout
        if len(_layout_cache) > _LAYOUT_CACHE_MAX:
            first_key = next(iter(_layout_cache.keys()))
            if first_key != key:
                _layout_cache.pop(first_key, None)
    return layout


def _int_arg(name, default, lo, hi):
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer") from None
    if not lo <= value <= hi:
        raise ConfigurationError(f"{name} must be between {lo} and {hi}")
    return value


@bp_layout.route("/api/layout")
def layout():
    """
    Generate a layout.
    Response: { 'width', 'height', 'seed', 'rooms': [...], 'hallways': [...], 'metrics': {...} }
    Errors: 400 for bad parameters / catalog, 422 when corridors cannot connect the map.
    """
    cfg = current_app.config
    try:
        width = _int_arg("width", cfg["LAYOUT_WIDTH"], 1, cfg["LAYOUT_MAX_SIZE"])
        height = _int_arg("height", cfg["LAYOUT_HEIGHT"], 1, cfg["LAYOUT_MAX_SIZE"])
        rooms = _int_arg("rooms", cfg["LAYOUT_SCATTERED_ROOMS"], 0, cfg["LAYOUT_MAX_ROOMS"])
        raw_seed = request.args.get("seed")
        if raw_seed is None or not raw_seed.strip():
            raw_seed = cfg.get("LAYOUT_SEED")
        seed = _coerce_seed(raw_seed)
        result = get_cached_layout(seed, width, height, rooms, cfg.get("LAYOUT_CATALOG"), active_catalog())
    except ConfigurationError as exc:
        log.warn(event="layout_rejected", reason=str(exc))
        return jsonify({"error": str(exc)}), 400
    except UnconnectableMapError as exc:
        log.warn(event="layout_unconnectable", seed=seed, reason=str(exc))
        return jsonify({"error": str(exc), "seed": seed}), 422
    data = result.to_dict()
    if cfg.get("LAYOUT_ENABLE_METRICS", True):
        data["metrics"] = result.metrics
    return jsonify(data)


@bp_layout.route("/api/layout/catalog")
def catalog():
    try:
        return jsonify(catalog_to_dict(active_catalog()))
    except ConfigurationError as exc:
        return jsonify({"error": str(exc)}), 400
