"""Connection point state changes.

Connection state only ever moves from open to connected within a run;
re-linking a point to a different element is treated as a logic defect.
"""

from __future__ import annotations

from typing import List, Optional

from .errors import ConnectionStateError
from .models import ConnectionPoint, Corridor, Position, Room, is_connection_point_connected


def connect_connection_point(cp: ConnectionPoint, element_id: str) -> None:
    if cp.connected_element_id and cp.connected_element_id != element_id:
        raise ConnectionStateError(
            f"connection point at {tuple(cp.position)} already linked to {cp.connected_element_id}, "
            f"refusing {element_id}"
        )
    cp.connected_element_id = element_id


def connect_corridor_end(corridor: Corridor, position: Position, element_id: str) -> bool:
    """Link the open corridor end point sitting on ``position`` to ``element_id``."""
    for cp in corridor.connection_points:
        if cp.position == position and not is_connection_point_connected(cp):
            connect_connection_point(cp, element_id)
            return True
    return False


def link_segments(segments: List[Corridor]) -> None:
    """Connect the shared turn points of consecutive segments to each other."""
    for current, nxt in zip(segments, segments[1:]):
        for cp1 in current.connection_points:
            for cp2 in nxt.connection_points:
                if cp1.position == cp2.position:
                    connect_connection_point(cp1, nxt.id)
                    connect_connection_point(cp2, current.id)


def open_points(room: Room) -> List[ConnectionPoint]:
    return [cp for cp in room.connection_points if not is_connection_point_connected(cp)]


def closest_connection_point(room: Room, position: Position) -> Optional[ConnectionPoint]:
    """Nearest open point to ``position``; nearest point of any state when all are taken."""
    best: Optional[ConnectionPoint] = None
    best_distance = None
    for cp in open_points(room) or room.connection_points:
        distance = position.manhattan(cp.position)
        if best_distance is None or distance < best_distance:
            best, best_distance = cp, distance
    return best


def attach_corridors(
    segments: List[Corridor],
    *,
    start_point: Optional[ConnectionPoint],
    start_element_id: str,
    start_position: Position,
    end_point: Optional[ConnectionPoint] = None,
    end_element_id: Optional[str] = None,
    end_position: Optional[Position] = None,
) -> None:
    """Wire a freshly segmented route into the connection graph.

    ``start_point``/``end_point`` are the room-side points the route leaves
    from and arrives at; either may be None (e.g. a dead end has no far side,
    the entrance door is not a connection point).
    """
    first, last = segments[0], segments[-1]
    if start_point is not None and not is_connection_point_connected(start_point):
        connect_connection_point(start_point, first.id)
    connect_corridor_end(first, start_position, start_element_id)
    if end_element_id is not None and end_position is not None:
        if end_point is not None and not is_connection_point_connected(end_point):
            connect_connection_point(end_point, last.id)
        connect_corridor_end(last, end_position, end_element_id)
    link_segments(segments)


__all__ = [
    "connect_connection_point",
    "connect_corridor_end",
    "link_segments",
    "open_points",
    "closest_connection_point",
    "attach_corridors",
    "is_connection_point_connected",
]
