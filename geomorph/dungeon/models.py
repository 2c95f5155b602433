"""Map data model and its JSON form.

Python attributes are snake_case; ``to_dict`` emits the camelCase keys that
rendering/export consumers read, and ``from_dict`` accepts exactly that
shape back. All derived values are stored, never computed lazily, so a map
serializes without surprises.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, NamedTuple, Optional


class RoomShape(str, Enum):
    SQUARE = "square"
    RECTANGLE = "rectangle"
    CIRCLE = "circle"
    L_SHAPE = "l-shape"
    T_SHAPE = "t-shape"
    CROSS = "cross"
    OCTAGON = "octagon"
    IRREGULAR = "irregular"


class RoomType(str, Enum):
    ENTRANCE = "entrance"
    STANDARD = "standard"
    JUNCTION = "junction"
    SPECIAL = "special"


class RoomSize(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    HUGE = "huge"


class ExitDirection(str, Enum):
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"
    NORTHEAST = "northeast"
    NORTHWEST = "northwest"
    SOUTHEAST = "southeast"
    SOUTHWEST = "southwest"


class CorridorType(str, Enum):
    STRAIGHT = "straight"
    CORNER = "corner"
    T_JUNCTION = "t-junction"
    CROSS_JUNCTION = "cross-junction"
    DEAD_END = "dead-end"


class CorridorDirection(str, Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    NORTHEAST = "northeast"
    NORTHWEST = "northwest"
    SOUTHEAST = "southeast"
    SOUTHWEST = "southwest"


class Position(NamedTuple):
    x: int
    y: int

    def offset(self, dx: int, dy: int) -> "Position":
        return Position(self.x + dx, self.y + dy)

    def manhattan(self, other: "Position") -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)

    def to_dict(self) -> Dict[str, int]:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Position":
        return cls(int(data["x"]), int(data["y"]))


# Unit steps for the four cardinal directions (y grows southwards).
CARDINAL_STEPS: Dict[ExitDirection, tuple] = {
    ExitDirection.NORTH: (0, -1),
    ExitDirection.EAST: (1, 0),
    ExitDirection.SOUTH: (0, 1),
    ExitDirection.WEST: (-1, 0),
}


@dataclass
class ConnectionPoint:
    direction: ExitDirection
    position: Position
    connected_element_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"direction": self.direction.value, "position": self.position.to_dict()}
        if self.connected_element_id is not None:
            out["connectedElementId"] = self.connected_element_id
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConnectionPoint":
        return cls(
            direction=ExitDirection(data["direction"]),
            position=Position.from_dict(data["position"]),
            connected_element_id=data.get("connectedElementId"),
        )


def is_connection_point_connected(cp: ConnectionPoint) -> bool:
    """Renderer predicate: a point is open until something is linked to it."""
    return bool(cp.connected_element_id)


@dataclass
class Room:
    id: str
    shape: RoomShape
    type: RoomType
    size: RoomSize
    position: Position
    width: int
    height: int
    connection_points: List[ConnectionPoint] = field(default_factory=list)
    template_id: Optional[str] = None

    @property
    def center(self) -> Position:
        return Position(self.position.x + self.width // 2, self.position.y + self.height // 2)

    def cells(self):
        for ix in range(self.position.x, self.position.x + self.width):
            for iy in range(self.position.y, self.position.y + self.height):
                yield Position(ix, iy)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.id,
            "shape": self.shape.value,
            "type": self.type.value,
            "size": self.size.value,
            "position": self.position.to_dict(),
            "width": self.width,
            "height": self.height,
            "connectionPoints": [cp.to_dict() for cp in self.connection_points],
        }
        if self.template_id is not None:
            out["templateId"] = self.template_id
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Room":
        return cls(
            id=data["id"],
            shape=RoomShape(data["shape"]),
            type=RoomType(data["type"]),
            size=RoomSize(data["size"]),
            position=Position.from_dict(data["position"]),
            width=int(data["width"]),
            height=int(data["height"]),
            connection_points=[ConnectionPoint.from_dict(cp) for cp in data.get("connectionPoints", [])],
            template_id=data.get("templateId"),
        )


@dataclass
class Corridor:
    id: str
    type: CorridorType
    direction: CorridorDirection
    position: Position
    length: int
    width: int
    connection_points: List[ConnectionPoint] = field(default_factory=list)
    path: List[Position] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "direction": self.direction.value,
            "position": self.position.to_dict(),
            "length": self.length,
            "width": self.width,
            "connectionPoints": [cp.to_dict() for cp in self.connection_points],
            "path": [p.to_dict() for p in self.path],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Corridor":
        return cls(
            id=data["id"],
            type=CorridorType(data["type"]),
            direction=CorridorDirection(data["direction"]),
            position=Position.from_dict(data["position"]),
            length=int(data["length"]),
            width=int(data["width"]),
            connection_points=[ConnectionPoint.from_dict(cp) for cp in data.get("connectionPoints", [])],
            path=[Position.from_dict(p) for p in data.get("path", [])],
        )


@dataclass
class BoundingBox:
    min_x: int
    min_y: int
    max_x: int
    max_y: int

    def to_dict(self) -> Dict[str, int]:
        return {"minX": self.min_x, "minY": self.min_y, "maxX": self.max_x, "maxY": self.max_y}


@dataclass
class MergedCorridor:
    id: str
    segments: List[Corridor]
    path: List[Position]
    connection_points: List[ConnectionPoint]
    total_length: int
    segment_count: int
    bounding_box: BoundingBox

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "segments": [c.to_dict() for c in self.segments],
            "path": [p.to_dict() for p in self.path],
            "connectionPoints": [cp.to_dict() for cp in self.connection_points],
            "totalLength": self.total_length,
            "segmentCount": self.segment_count,
            "boundingBox": self.bounding_box.to_dict(),
        }


@dataclass
class ExteriorDoor:
    position: Position
    direction: ExitDirection
    connected_element_id: Optional[str] = None
    forced: bool = False

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "position": self.position.to_dict(),
            "direction": self.direction.value,
            "forced": self.forced,
        }
        if self.connected_element_id is not None:
            out["connectedElementId"] = self.connected_element_id
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExteriorDoor":
        return cls(
            position=Position.from_dict(data["position"]),
            direction=ExitDirection(data["direction"]),
            connected_element_id=data.get("connectedElementId"),
            forced=bool(data.get("forced", False)),
        )


@dataclass
class DungeonMap:
    id: str
    name: str
    rooms: List[Room]
    corridors: List[Corridor]
    grid_size: int
    total_rooms: int
    seed: str
    created_at: datetime
    entrance_door: Optional[ExteriorDoor] = None

    def room_by_id(self, room_id: str) -> Optional[Room]:
        for room in self.rooms:
            if room.id == room_id:
                return room
        return None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "rooms": [r.to_dict() for r in self.rooms],
            "corridors": [c.to_dict() for c in self.corridors],
            "gridSize": self.grid_size,
            "totalRooms": self.total_rooms,
            "seed": self.seed,
            "createdAt": self.created_at.isoformat(),
        }
        if self.entrance_door is not None:
            out["entranceDoor"] = self.entrance_door.to_dict()
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DungeonMap":
        door = data.get("entranceDoor")
        return cls(
            id=data["id"],
            name=data["name"],
            rooms=[Room.from_dict(r) for r in data.get("rooms", [])],
            corridors=[Corridor.from_dict(c) for c in data.get("corridors", [])],
            grid_size=int(data["gridSize"]),
            total_rooms=int(data["totalRooms"]),
            seed=str(data["seed"]),
            created_at=datetime.fromisoformat(data["createdAt"]),
            entrance_door=ExteriorDoor.from_dict(door) if door else None,
        )

    def to_json(self, indent: Optional[int] = None) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, text: str) -> "DungeonMap":
        return cls.from_dict(json.loads(text))


__all__ = [
    "RoomShape",
    "RoomType",
    "RoomSize",
    "ExitDirection",
    "CorridorType",
    "CorridorDirection",
    "Position",
    "CARDINAL_STEPS",
    "ConnectionPoint",
    "is_connection_point_connected",
    "Room",
    "Corridor",
    "BoundingBox",
    "MergedCorridor",
    "ExteriorDoor",
    "DungeonMap",
]
