"""Exterior entrance placement.

Candidates are the four map-edge cells lined up with each room's center.
A cheap straight-line occupancy sample weeds out hopeless candidates before
real pathfinding is attempted. If every candidate fails, the room nearest a
map edge gets a forced L-shaped corridor that ignores existing geometry.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..logging_utils import get_logger
from .connections import attach_corridors, closest_connection_point
from .connectivity import route_corridor
from .models import Corridor, ExitDirection, ExteriorDoor, Position, Room
from .segments import build_corridor
from .state import ENTRANCE_DOOR_ID, GenerationContext

log = get_logger("geomorph.dungeon.entrance")


@dataclass(frozen=True)
class EntranceCandidate:
    position: Position
    direction: ExitDirection


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def edge_candidates(room: Room, grid_size: int) -> List[EntranceCandidate]:
    """North, south, east, west edge cells aligned with the room center, facing inwards."""
    c = room.center
    last = grid_size - 1
    raw = [
        (c.x, 0, ExitDirection.SOUTH),
        (c.x, last, ExitDirection.NORTH),
        (last, c.y, ExitDirection.WEST),
        (0, c.y, ExitDirection.EAST),
    ]
    return [
        EntranceCandidate(Position(max(0, min(last, x)), max(0, min(last, y))), d)
        for x, y, d in raw
    ]


def has_reasonable_path(ctx: GenerationContext, origin: Position, room: Room) -> bool:
    """Sample the straight line towards the room center and tolerate a share of blocked cells."""
    center = room.center
    dx = center.x - origin.x
    dy = center.y - origin.y
    steps = max(abs(dx), abs(dy))
    if steps == 0:
        return True
    max_blocked = math.floor(steps * ctx.settings.entrance_max_blocked_ratio)
    blocked = 0
    for i in range(1, steps):
        t = i / steps
        if ctx.occupied.is_occupied(_round_half_up(origin.x + dx * t), _round_half_up(origin.y + dy * t)):
            blocked += 1
            if blocked > max_blocked:
                return False
    return True


def find_viable_entrance_positions(ctx: GenerationContext, room: Room) -> List[EntranceCandidate]:
    max_distance = ctx.grid_size * ctx.settings.entrance_max_distance_ratio
    viable = []
    for candidate in edge_candidates(room, ctx.grid_size):
        if candidate.position.manhattan(room.center) > max_distance:
            continue
        if has_reasonable_path(ctx, candidate.position, room):
            viable.append(candidate)
    return viable


def find_connectable_rooms(ctx: GenerationContext) -> List[Tuple[Room, List[EntranceCandidate]]]:
    results = []
    for room in ctx.rooms:
        positions = find_viable_entrance_positions(ctx, room)
        if positions:
            results.append((room, positions))
    results.sort(key=lambda item: len(item[1]), reverse=True)
    return results


def attempt_entrance_connection(ctx: GenerationContext, room: Room, candidate: EntranceCandidate) -> bool:
    target = closest_connection_point(room, candidate.position)
    if target is None:
        return False
    segments = route_corridor(ctx, candidate.position, target.position)
    if not segments:
        return False
    ctx.entrance_door = ExteriorDoor(
        position=candidate.position,
        direction=candidate.direction,
        connected_element_id=room.id,
    )
    ctx.add_corridors(segments)
    attach_corridors(
        segments,
        start_point=None,
        start_element_id=ENTRANCE_DOOR_ID,
        start_position=candidate.position,
        end_point=target,
        end_element_id=room.id,
        end_position=target.position,
    )
    return True


def _straight_run(start: Position, end: Position) -> List[Position]:
    if start.y == end.y:
        step = 1 if end.x >= start.x else -1
        return [Position(x, start.y) for x in range(start.x, end.x + step, step)]
    step = 1 if end.y >= start.y else -1
    return [Position(start.x, y) for y in range(start.y, end.y + step, step)]


def force_entrance_connection(ctx: GenerationContext, door: ExteriorDoor, room: Room) -> List[Corridor]:
    """Horizontal run along the door's row, then a vertical run into the target point."""
    target = closest_connection_point(room, door.position)
    if target is None:
        return []
    start, end = door.position, target.position
    segments: List[Corridor] = []
    if start.x != end.x:
        segments.append(build_corridor(ctx.next_id("corridor"), _straight_run(start, Position(end.x, start.y))))
    if start.y != end.y:
        segments.append(build_corridor(ctx.next_id("corridor"), _straight_run(Position(end.x, start.y), end)))
    if not segments:
        return []
    for segment in segments:
        ctx.occupied.add_many(segment.path)
    ctx.add_corridors(segments)
    attach_corridors(
        segments,
        start_point=None,
        start_element_id=ENTRANCE_DOOR_ID,
        start_position=start,
        end_point=target,
        end_element_id=room.id,
        end_position=end,
    )
    return segments


def _edge_distance(room: Room, grid_size: int) -> int:
    c = room.center
    return min(c.y, grid_size - 1 - c.y, c.x, grid_size - 1 - c.x)


def create_entrance_with_fallback(ctx: GenerationContext, rooms: List[Room]) -> Optional[ExteriorDoor]:
    if not rooms:
        return None
    closest = min(rooms, key=lambda r: _edge_distance(r, ctx.grid_size))
    c = closest.center
    last = ctx.grid_size - 1
    options = [
        EntranceCandidate(Position(c.x, 0), ExitDirection.SOUTH),
        EntranceCandidate(Position(c.x, last), ExitDirection.NORTH),
        EntranceCandidate(Position(0, c.y), ExitDirection.EAST),
        EntranceCandidate(Position(last, c.y), ExitDirection.WEST),
    ]
    options.sort(key=lambda o: o.position.manhattan(c))
    best = options[0]
    door = ExteriorDoor(
        position=best.position,
        direction=best.direction,
        connected_element_id=closest.id,
        forced=True,
    )
    ctx.entrance_door = door
    force_entrance_connection(ctx, door, closest)
    ctx.metrics["entrance_forced"] = True
    log.debug(event="entrance_forced", room=closest.id, x=door.position.x, y=door.position.y, seed=ctx.seed)
    return door


def place_entrance(ctx: GenerationContext) -> Optional[ExteriorDoor]:
    if not ctx.rooms:
        return None
    connectable = find_connectable_rooms(ctx)
    ctx.metrics["entrance_candidates"] = sum(len(c) for _, c in connectable)
    for room, candidates in connectable:
        for candidate in candidates:
            if attempt_entrance_connection(ctx, room, candidate):
                return ctx.entrance_door
    return create_entrance_with_fallback(ctx, list(ctx.rooms))


__all__ = [
    "EntranceCandidate",
    "edge_candidates",
    "has_reasonable_path",
    "find_viable_entrance_positions",
    "find_connectable_rooms",
    "attempt_entrance_connection",
    "force_entrance_connection",
    "create_entrance_with_fallback",
    "place_entrance",
]
