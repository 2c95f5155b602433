from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

from ..validation import validate
from .errors import InvalidSettingsError

GENERATION_DEFAULTS = {
    "ROOM_COUNT": 8,
    "GRID_SIZE": 30,
    "ROOM_SPACING": 1,
    "MAX_EXITS_PER_ROOM": 4,
}

GENERATION_LIMITS = {
    "MIN_ROOMS_LIMIT": 1,
    "MAX_ROOMS_LIMIT": 50,
    "MIN_GRID_SIZE": 20,
    "MAX_GRID_SIZE": 50,
    "MIN_ROOM_SPACING": 1,
    "MAX_ROOM_SPACING": 5,
    "MIN_EXITS_PER_ROOM": 1,
    "MAX_EXITS_PER_ROOM": 8,
}

ROOM_GENERATION = {
    "ATTEMPTS_PER_ROOM": 10,
    "POSITION_ATTEMPTS": 50,
    "DEAD_END_MIN_LENGTH": 3,
    "DEAD_END_MAX_LENGTH": 7,
    "ENTRANCE_MAX_DISTANCE_RATIO": 0.7,
    "ENTRANCE_MAX_BLOCKED_RATIO": 0.3,
}

_L = GENERATION_LIMITS

SETTINGS_SCHEMA = {
    "room_count": ("int", False, {"aliases": ("roomCount",), "min": _L["MIN_ROOMS_LIMIT"], "max": _L["MAX_ROOMS_LIMIT"]}),
    "grid_size": ("int", False, {"aliases": ("gridSize",), "min": _L["MIN_GRID_SIZE"], "max": _L["MAX_GRID_SIZE"]}),
    "max_exits_per_room": (
        "int",
        False,
        {"aliases": ("maxExitsPerRoom",), "min": _L["MIN_EXITS_PER_ROOM"], "max": _L["MAX_EXITS_PER_ROOM"]},
    ),
    "room_spacing": (
        "int",
        False,
        {"aliases": ("roomSpacing",), "min": _L["MIN_ROOM_SPACING"], "max": _L["MAX_ROOM_SPACING"]},
    ),
    "seed": ("str", False, {"max_len": 128, "coerce_str": True, "allow_empty": True}),
    "min_rooms": ("int", False, {"aliases": ("minRooms",), "min": _L["MIN_ROOMS_LIMIT"], "max": _L["MAX_ROOMS_LIMIT"]}),
    "max_rooms": ("int", False, {"aliases": ("maxRooms",), "min": _L["MIN_ROOMS_LIMIT"], "max": _L["MAX_ROOMS_LIMIT"]}),
    "entrance_max_distance_ratio": ("float", False, {"aliases": ("entranceMaxDistanceRatio",), "min": 0.0, "max": 2.0}),
    "entrance_max_blocked_ratio": ("float", False, {"aliases": ("entranceMaxBlockedRatio",), "min": 0.0, "max": 1.0}),
    "dead_end_min_length": ("int", False, {"aliases": ("deadEndMinLength",), "min": 1, "max": 50}),
    "dead_end_max_length": ("int", False, {"aliases": ("deadEndMaxLength",), "min": 1, "max": 50}),
}


@dataclass
class GenerationSettings:
    room_count: int = GENERATION_DEFAULTS["ROOM_COUNT"]
    grid_size: int = GENERATION_DEFAULTS["GRID_SIZE"]
    max_exits_per_room: int = GENERATION_DEFAULTS["MAX_EXITS_PER_ROOM"]
    room_spacing: int = GENERATION_DEFAULTS["ROOM_SPACING"]
    seed: Optional[str] = None
    # Optional bounds; the placer draws its target from [min_rooms, max_rooms]
    min_rooms: Optional[int] = None
    max_rooms: Optional[int] = None
    entrance_max_distance_ratio: float = ROOM_GENERATION["ENTRANCE_MAX_DISTANCE_RATIO"]
    entrance_max_blocked_ratio: float = ROOM_GENERATION["ENTRANCE_MAX_BLOCKED_RATIO"]
    dead_end_min_length: int = ROOM_GENERATION["DEAD_END_MIN_LENGTH"]
    dead_end_max_length: int = ROOM_GENERATION["DEAD_END_MAX_LENGTH"]

    @property
    def room_range(self) -> tuple:
        lo = self.min_rooms if self.min_rooms is not None else self.room_count
        hi = self.max_rooms if self.max_rooms is not None else self.room_count
        return lo, hi

    def validate(self) -> "GenerationSettings":
        """Check limits; raises InvalidSettingsError on the first bad field."""
        ok, result = validate(
            {f.name: getattr(self, f.name) for f in fields(self)},
            SETTINGS_SCHEMA,
        )
        if not ok:
            raise InvalidSettingsError(result["field"], result["error"], result["code"])
        lo, hi = self.room_range
        if lo > hi:
            raise InvalidSettingsError("min_rooms", "min_rooms cannot exceed max_rooms", "range")
        if self.dead_end_min_length > self.dead_end_max_length:
            raise InvalidSettingsError("dead_end_min_length", "cannot exceed dead_end_max_length", "range")
        return self

    @classmethod
    def from_payload(cls, payload: Any, defaults: Optional[Dict[str, Any]] = None) -> "GenerationSettings":
        """Build settings from a camelCase or snake_case mapping (HTTP body, CLI args)."""
        ok, result = validate(payload, SETTINGS_SCHEMA)
        if not ok:
            raise InvalidSettingsError(result["field"], result["error"], result["code"])
        values = dict(defaults or {})
        values.update(result)
        if not values.get("seed"):
            values["seed"] = None
        return cls(**values).validate()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "roomCount": self.room_count,
            "gridSize": self.grid_size,
            "maxExitsPerRoom": self.max_exits_per_room,
            "roomSpacing": self.room_spacing,
            "seed": self.seed,
            "minRooms": self.min_rooms,
            "maxRooms": self.max_rooms,
        }


__all__ = ["GenerationSettings", "GENERATION_DEFAULTS", "GENERATION_LIMITS", "ROOM_GENERATION"]
