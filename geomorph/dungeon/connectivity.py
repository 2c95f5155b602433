"""Room-to-room corridor connectivity.

Rooms are linked with a Prim-style spanning pass (nearest unconnected room
to the connected set, measured center to center) followed by a handful of
random extra links that add loops. A link that finds no free connection
points or no route is skipped and counted, never retried.
"""

from __future__ import annotations

from typing import List, Optional, Set, Tuple

from ..logging_utils import get_logger
from .connections import attach_corridors, open_points
from .models import ConnectionPoint, Corridor, Position, Room
from .pathfinding import find_path
from .segments import segment_path
from .state import GenerationContext

log = get_logger("geomorph.dungeon.connectivity")


def route_corridor(ctx: GenerationContext, start: Position, end: Position) -> List[Corridor]:
    """Pathfind ``start`` -> ``end`` around occupied cells and segment the route.

    Returns [] when no route exists; the corridors are not yet added to the map.
    """
    path = find_path(start, end, ctx.occupied, ctx.grid_size)
    if not path:
        return []
    return segment_path(path, ctx.occupied, ctx.next_id)


def closest_open_pair(room1: Room, room2: Room) -> Optional[Tuple[ConnectionPoint, ConnectionPoint]]:
    best = None
    best_distance = None
    for cp1 in open_points(room1):
        for cp2 in open_points(room2):
            distance = cp1.position.manhattan(cp2.position)
            if best_distance is None or distance < best_distance:
                best, best_distance = (cp1, cp2), distance
    return best


def connect_two_rooms(ctx: GenerationContext, room1: Room, room2: Room) -> bool:
    ctx.metrics["connections_attempted"] += 1
    pair = closest_open_pair(room1, room2)
    if pair is None:
        ctx.metrics["connections_failed"] += 1
        log.debug(event="connection_skipped", reason="no_open_points", a=room1.id, b=room2.id)
        return False
    point1, point2 = pair
    segments = route_corridor(ctx, point1.position, point2.position)
    if not segments:
        ctx.metrics["connections_failed"] += 1
        log.debug(event="connection_skipped", reason="no_path", a=room1.id, b=room2.id)
        return False
    ctx.add_corridors(segments)
    attach_corridors(
        segments,
        start_point=point1,
        start_element_id=room1.id,
        start_position=point1.position,
        end_point=point2,
        end_element_id=room2.id,
        end_position=point2.position,
    )
    return True


def build_spanning_connections(ctx: GenerationContext) -> List[Tuple[str, str]]:
    rooms = ctx.rooms
    linked: List[Tuple[str, str]] = []
    if len(rooms) < 2:
        return linked
    connected: Set[str] = {rooms[0].id}
    while len(connected) < len(rooms):
        best = None
        best_distance = None
        for candidate in rooms:
            if candidate.id in connected:
                continue
            for anchor in rooms:
                if anchor.id not in connected:
                    continue
                distance = candidate.center.manhattan(anchor.center)
                if best_distance is None or distance < best_distance:
                    best, best_distance = (anchor, candidate), distance
        if best is None:
            break
        anchor, candidate = best
        if connect_two_rooms(ctx, anchor, candidate):
            linked.append((anchor.id, candidate.id))
        connected.add(candidate.id)
    return linked


def add_extra_connections(ctx: GenerationContext, linked: List[Tuple[str, str]]) -> int:
    rooms = ctx.rooms
    seen = {frozenset(pair) for pair in linked}
    added = 0
    for _ in range(len(rooms) // 3):
        room1 = rooms[ctx.rng.next_int_max(len(rooms))]
        room2 = rooms[ctx.rng.next_int_max(len(rooms))]
        key = frozenset((room1.id, room2.id))
        if room1.id == room2.id or key in seen:
            continue
        seen.add(key)
        if connect_two_rooms(ctx, room1, room2):
            added += 1
    ctx.metrics["extra_connections"] = added
    return added


def connect_rooms(ctx: GenerationContext) -> None:
    linked = build_spanning_connections(ctx)
    add_extra_connections(ctx, linked)


__all__ = [
    "route_corridor",
    "closest_open_pair",
    "connect_two_rooms",
    "build_spanning_connections",
    "add_extra_connections",
    "connect_rooms",
]
