"""Public dungeon package interface.

Generation entry points, the map data model, settings and the template
catalog lookups.
"""

from .config import GenerationSettings, GENERATION_DEFAULTS, GENERATION_LIMITS  # noqa: F401
from .connections import connect_connection_point  # noqa: F401
from .errors import (  # noqa: F401
    DungeonGenerationError,
    InvalidRangeError,
    EmptyCollectionError,
    PathfindingError,
    MalformedPathError,
    ConnectionStateError,
    GridBoundsError,
    InvalidSettingsError,
)
from .merger import merge_adjacent_corridors  # noqa: F401
from .models import (  # noqa: F401
    ConnectionPoint,
    Corridor,
    DungeonMap,
    ExitDirection,
    ExteriorDoor,
    MergedCorridor,
    Position,
    Room,
    is_connection_point_connected,
)
from .pipeline import generate_dungeon, run_generation  # noqa: F401
from .rng import SeededRandom  # noqa: F401
from .templates import get_random_template, get_template_by_id, get_templates_by_type  # noqa: F401

__all__ = [
    "GenerationSettings",
    "GENERATION_DEFAULTS",
    "GENERATION_LIMITS",
    "connect_connection_point",
    "DungeonGenerationError",
    "InvalidRangeError",
    "EmptyCollectionError",
    "PathfindingError",
    "MalformedPathError",
    "ConnectionStateError",
    "GridBoundsError",
    "InvalidSettingsError",
    "merge_adjacent_corridors",
    "ConnectionPoint",
    "Corridor",
    "DungeonMap",
    "ExitDirection",
    "ExteriorDoor",
    "MergedCorridor",
    "Position",
    "Room",
    "is_connection_point_connected",
    "generate_dungeon",
    "run_generation",
    "SeededRandom",
    "get_random_template",
    "get_template_by_id",
    "get_templates_by_type",
]
