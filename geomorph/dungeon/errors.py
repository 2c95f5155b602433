"""Exception types raised by the generation core.

Everything except ``InvalidSettingsError`` signals a broken internal invariant
(a logic defect), so the pipeline never catches these; they propagate to the
caller as-is. Soft failures (rooms that did not fit, corridors that found no
path) are not exceptions at all and only show up in the map and metrics.
"""

from __future__ import annotations


class DungeonGenerationError(Exception):
    """Base class for all generation errors."""


class InvalidRangeError(DungeonGenerationError):
    def __init__(self, lo: int, hi: int):
        super().__init__(f"min cannot be greater than max ({lo} > {hi})")
        self.lo = lo
        self.hi = hi


class EmptyCollectionError(DungeonGenerationError):
    pass


class PathfindingError(DungeonGenerationError):
    pass


class MalformedPathError(DungeonGenerationError):
    pass


class ConnectionStateError(DungeonGenerationError):
    pass


class GridBoundsError(DungeonGenerationError):
    pass


class InvalidSettingsError(DungeonGenerationError, ValueError):
    def __init__(self, field: str, message: str, code: str = "invalid"):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message
        self.code = code

    def to_dict(self):
        return {"field": self.field, "error": self.message, "code": self.code}


__all__ = [
    "DungeonGenerationError",
    "InvalidRangeError",
    "EmptyCollectionError",
    "PathfindingError",
    "MalformedPathError",
    "ConnectionStateError",
    "GridBoundsError",
    "InvalidSettingsError",
]
