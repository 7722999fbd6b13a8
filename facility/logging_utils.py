"""Minimal structured logging helper.

Emits key=value pairs (or one JSON object per line) with a timestamp and
level, so generation runs can be grepped or piped into a log collector.

Usage:
    from facility.logging_utils import get_logger
    log = get_logger("layout")
    log.info(event="layout_generated", rooms=5)

Environment:
    FACILITY_LOG_LEVEL   debug|info|warn|error (default info)
    FACILITY_LOG_JSON    1/true/yes/on for JSON lines

Reserved keys: level, ts, logger.
"""

from __future__ import annotations

import json
import os
import sys
import time

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
_TRUTHY = ("1", "true", "TRUE", "yes", "on")

_state = {
    "level": LEVELS.get(os.getenv("FACILITY_LOG_LEVEL", "info").lower(), 20),
    "json": os.getenv("FACILITY_LOG_JSON", "0") in _TRUTHY,
}


def configure(level: str | None = None, json_mode: bool | None = None) -> None:
    """Override the environment-derived level / output mode (used by the CLI)."""
    if level is not None:
        if level.lower() not in LEVELS:
            raise ValueError(f"unknown log level {level!r}; expected one of {sorted(LEVELS)}")
        _state["level"] = LEVELS[level.lower()]
    if json_mode is not None:
        _state["json"] = bool(json_mode)


def _format(level: str, **fields) -> str:
    if _state["json"]:
        rec = {k: v for k, v in fields.items() if v is not None}
        rec["level"] = level
        rec["ts"] = int(time.time())
        return json.dumps(rec, separators=(",", ":"), default=str)
    parts = [f"level={level}", f"ts={int(time.time())}"]
    for k, v in fields.items():
        if v is None:
            continue
        if isinstance(v, (int, float)):
            parts.append(f"{k}={v}")
        else:
            parts.append(f"{k}={str(v).replace(' ', '')}")
    return " ".join(parts)


class _Logger:
    def __init__(self, name: str | None = None):
        self.name = name or "facility"

    def _log(self, lvl: str, **fields):
        if LEVELS[lvl] < _state["level"]:
            return
        fields.setdefault("logger", self.name)
        print(_format(lvl, **fields), file=sys.stderr)

    def debug(self, **fields):
        self._log("debug", **fields)

    def info(self, **fields):
        self._log("info", **fields)

    def warn(self, **fields):
        self._log("warn", **fields)

    def error(self, **fields):
        self._log("error", **fields)


_LOGGER_CACHE: dict[str, _Logger] = {}


def get_logger(name: str) -> _Logger:
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = _Logger(name)
    return _LOGGER_CACHE[name]


log = get_logger("facility")
