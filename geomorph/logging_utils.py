"""Minimal structured logging helper.

Emits key=value pairs (or one JSON object per line) with a timestamp and
level so generation runs can be grepped or shipped to a log collector without
configuring stdlib logging handlers.

Usage:
    from geomorph.logging_utils import get_logger
    log = get_logger("geomorph.dungeon.rooms")
    log.debug(event="room_placement_exhausted", placed=3, requested=5)

Reserved keys: level, ts, logger. Environment:
    GEOMORPH_LOG_LEVEL   debug|info|warn|error (default: info)
    GEOMORPH_LOG_JSON    1/true/yes/on for JSON lines
"""

from __future__ import annotations

import json
import os
import sys
import time

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}


def _current_level() -> int:
    return LEVELS.get(os.getenv("GEOMORPH_LOG_LEVEL", "info").lower(), 20)


def _json_mode() -> bool:
    return os.getenv("GEOMORPH_LOG_JSON", "0") in ("1", "true", "TRUE", "yes", "on")


def _format(level: str, **fields) -> str:
    if _json_mode():
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
            s = str(v).replace(" ", "_")
            parts.append(f"{k}={s}")
    return " ".join(parts)


class _Logger:
    def __init__(self, name: str | None = None):
        self.name = name or "geomorph"

    def _log(self, lvl: str, **fields):
        if LEVELS[lvl] < _current_level():
            return
        if "logger" not in fields:
            fields["logger"] = self.name
        # stderr keeps stdout free for JSON emitted by the CLI
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


log = get_logger("geomorph")
