"""Static room template catalog.

Footprints are written as ``#``/space rows; connection point offsets are
local to the template's top-left corner. Placement reserves the whole
``width x height`` rectangle regardless of the pattern, the pattern only
describes the drawable shape.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .errors import EmptyCollectionError
from .models import ExitDirection, Position, RoomShape, RoomSize, RoomType

N, S, E, W = ExitDirection.NORTH, ExitDirection.SOUTH, ExitDirection.EAST, ExitDirection.WEST


@dataclass(frozen=True)
class TemplateConnection:
    direction: ExitDirection
    offset: Position


@dataclass(frozen=True)
class RoomTemplate:
    id: str
    name: str
    shape: RoomShape
    type: RoomType
    size: RoomSize
    width: int
    height: int
    connection_points: Tuple[TemplateConnection, ...]
    grid_pattern: Tuple[Tuple[bool, ...], ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "shape": self.shape.value,
            "type": self.type.value,
            "size": self.size.value,
            "width": self.width,
            "height": self.height,
            "connectionPoints": [
                {"direction": cp.direction.value, "position": cp.offset.to_dict()} for cp in self.connection_points
            ],
            "gridPattern": [list(row) for row in self.grid_pattern],
        }


def _pattern(width: int, height: int, rows: List[str]) -> Tuple[Tuple[bool, ...], ...]:
    grid = []
    for y in range(height):
        row = rows[y] if y < len(rows) else ""
        grid.append(tuple(x < len(row) and row[x] == "#" for x in range(width)))
    return tuple(grid)


def _template(id, name, shape, type_, size, width, height, points, rows) -> RoomTemplate:
    return RoomTemplate(
        id=id,
        name=name,
        shape=shape,
        type=type_,
        size=size,
        width=width,
        height=height,
        connection_points=tuple(TemplateConnection(d, Position(x, y)) for d, x, y in points),
        grid_pattern=_pattern(width, height, rows),
    )


ENTRANCE_ROOM_TEMPLATES: Tuple[RoomTemplate, ...] = (
    _template(
        "entrance-01", "Simple Entrance", RoomShape.RECTANGLE, RoomType.ENTRANCE, RoomSize.MEDIUM, 6, 4,
        [(N, 3, 0), (S, 3, 3)],
        ["######", "######", "######", "######"],
    ),
    _template(
        "entrance-02", "T-Entrance", RoomShape.T_SHAPE, RoomType.ENTRANCE, RoomSize.MEDIUM, 7, 5,
        [(N, 3, 0), (E, 6, 2), (W, 0, 2)],
        ["   #   ", "   #   ", "#######", "   #   ", "   #   "],
    ),
    _template(
        "entrance-03", "L-Entrance", RoomShape.L_SHAPE, RoomType.ENTRANCE, RoomSize.LARGE, 6, 6,
        [(N, 2, 0), (E, 5, 3), (S, 5, 5)],
        ["####  ", "####  ", "####  ", "######", "######", "######"],
    ),
)

STANDARD_ROOM_TEMPLATES: Tuple[RoomTemplate, ...] = (
    _template(
        "room-square-small", "Small Square Room", RoomShape.SQUARE, RoomType.STANDARD, RoomSize.SMALL, 4, 4,
        [(N, 2, 0), (S, 2, 3), (E, 3, 2), (W, 0, 2)],
        ["####", "####", "####", "####"],
    ),
    _template(
        "room-rectangle-medium", "Medium Rectangle Room", RoomShape.RECTANGLE, RoomType.STANDARD,
        RoomSize.MEDIUM, 6, 4,
        [(N, 3, 0), (S, 3, 3), (E, 5, 2), (W, 0, 2)],
        ["######", "######", "######", "######"],
    ),
    _template(
        "room-circle-medium", "Circular Room", RoomShape.CIRCLE, RoomType.STANDARD, RoomSize.MEDIUM, 5, 5,
        [(N, 2, 0), (S, 2, 4), (E, 4, 2), (W, 0, 2)],
        [" ### ", "#####", "#####", "#####", " ### "],
    ),
    _template(
        "room-l-large", "L-Shaped Room", RoomShape.L_SHAPE, RoomType.STANDARD, RoomSize.LARGE, 6, 6,
        [(N, 2, 0), (E, 5, 4), (S, 5, 5), (W, 0, 1)],
        ["####  ", "####  ", "####  ", "######", "######", "######"],
    ),
    _template(
        "room-t-large", "T-Shaped Room", RoomShape.T_SHAPE, RoomType.STANDARD, RoomSize.LARGE, 7, 5,
        [(N, 3, 0), (S, 3, 4), (E, 6, 2), (W, 0, 2)],
        ["  ###  ", "  ###  ", "#######", "  ###  ", "  ###  "],
    ),
    _template(
        "room-cross-large", "Cross-Shaped Room", RoomShape.CROSS, RoomType.STANDARD, RoomSize.LARGE, 7, 7,
        [(N, 3, 0), (S, 3, 6), (E, 6, 3), (W, 0, 3)],
        ["  ###  ", "  ###  ", "  ###  ", "#######", "  ###  ", "  ###  ", "  ###  "],
    ),
    _template(
        "room-octagon-large", "Octagonal Room", RoomShape.OCTAGON, RoomType.STANDARD, RoomSize.LARGE, 6, 6,
        [(N, 3, 0), (S, 3, 5), (E, 5, 3), (W, 0, 3)],
        [" #### ", "######", "######", "######", "######", " #### "],
    ),
)

JUNCTION_ROOM_TEMPLATES: Tuple[RoomTemplate, ...] = (
    _template(
        "junction-cross", "Cross Junction", RoomShape.CROSS, RoomType.JUNCTION, RoomSize.SMALL, 3, 3,
        [(N, 1, 0), (S, 1, 2), (E, 2, 1), (W, 0, 1)],
        [" # ", "###", " # "],
    ),
    _template(
        "junction-t", "T Junction", RoomShape.T_SHAPE, RoomType.JUNCTION, RoomSize.SMALL, 3, 3,
        [(N, 1, 0), (E, 2, 1), (W, 0, 1)],
        [" # ", "###", "   "],
    ),
)

ALL_ROOM_TEMPLATES: Tuple[RoomTemplate, ...] = (
    ENTRANCE_ROOM_TEMPLATES + STANDARD_ROOM_TEMPLATES + JUNCTION_ROOM_TEMPLATES
)

_BY_ID: Dict[str, RoomTemplate] = {t.id: t for t in ALL_ROOM_TEMPLATES}


def get_template_by_id(template_id: str) -> Optional[RoomTemplate]:
    return _BY_ID.get(template_id)


def get_templates_by_type(room_type: RoomType) -> List[RoomTemplate]:
    return [t for t in ALL_ROOM_TEMPLATES if t.type == room_type]


def get_random_template(room_type: RoomType, rng) -> RoomTemplate:
    templates = get_templates_by_type(room_type)
    if not templates:
        raise EmptyCollectionError(f"no templates of type {room_type.value}")
    return rng.choice(templates)


__all__ = [
    "TemplateConnection",
    "RoomTemplate",
    "ENTRANCE_ROOM_TEMPLATES",
    "STANDARD_ROOM_TEMPLATES",
    "JUNCTION_ROOM_TEMPLATES",
    "ALL_ROOM_TEMPLATES",
    "get_template_by_id",
    "get_templates_by_type",
    "get_random_template",
]
