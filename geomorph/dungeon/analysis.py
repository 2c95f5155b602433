"""Structural checks over a finished map.

Used by the diagnose script, the HTTP API and the test-suite. Nothing here
mutates the map.
"""

from __future__ import annotations

from collections import deque
from typing import Any, Dict, List, Set, Tuple

from .models import DungeonMap, Position, Room
from .state import ENTRANCE_DOOR_ID


def _rects_overlap(a: Room, b: Room) -> bool:
    return (
        a.position.x < b.position.x + b.width
        and b.position.x < a.position.x + a.width
        and a.position.y < b.position.y + b.height
        and b.position.y < a.position.y + a.height
    )


def room_footprint_overlaps(dungeon: DungeonMap) -> List[Tuple[str, str]]:
    rooms = dungeon.rooms
    pairs = []
    for i, a in enumerate(rooms):
        for b in rooms[i + 1:]:
            if _rects_overlap(a, b):
                pairs.append((a.id, b.id))
    return pairs


def out_of_bounds_cells(dungeon: DungeonMap) -> List[Tuple[str, Position]]:
    size = dungeon.grid_size

    def outside(p: Position) -> bool:
        return not (0 <= p.x < size and 0 <= p.y < size)

    bad = []
    for room in dungeon.rooms:
        bad.extend((room.id, p) for p in room.cells() if outside(p))
    for corridor in dungeon.corridors:
        bad.extend((corridor.id, p) for p in corridor.path if outside(p))
    return bad


def _adjacency(dungeon: DungeonMap) -> Dict[str, Set[str]]:
    graph: Dict[str, Set[str]] = {}

    def link(a: str, b: str):
        graph.setdefault(a, set()).add(b)
        graph.setdefault(b, set()).add(a)

    for element in list(dungeon.rooms) + list(dungeon.corridors):
        graph.setdefault(element.id, set())
        for cp in element.connection_points:
            if cp.connected_element_id:
                link(element.id, cp.connected_element_id)
    return graph


def reachable_elements(dungeon: DungeonMap) -> Set[str]:
    """Ids reachable through connection points, starting at the entrance door.

    Without a door the walk starts at the first room.
    """
    graph = _adjacency(dungeon)
    if dungeon.entrance_door is not None:
        start = ENTRANCE_DOOR_ID
        graph.setdefault(start, set())
    elif dungeon.rooms:
        start = dungeon.rooms[0].id
    else:
        return set()
    seen = {start}
    queue = deque([start])
    while queue:
        node = queue.popleft()
        for nxt in graph.get(node, ()):
            if nxt not in seen:
                seen.add(nxt)
                queue.append(nxt)
    return seen


def unreachable_rooms(dungeon: DungeonMap) -> List[str]:
    seen = reachable_elements(dungeon)
    return [room.id for room in dungeon.rooms if room.id not in seen]


def analyze(dungeon: DungeonMap) -> Dict[str, Any]:
    overlaps = room_footprint_overlaps(dungeon)
    oob = out_of_bounds_cells(dungeon)
    unreachable = unreachable_rooms(dungeon)
    door = dungeon.entrance_door
    return {
        "seed": dungeon.seed,
        "rooms": len(dungeon.rooms),
        "corridors": len(dungeon.corridors),
        "has_entrance": door is not None,
        "entrance_forced": bool(door and door.forced),
        "overlapping_rooms": [list(p) for p in overlaps],
        "out_of_bounds": len(oob),
        "unreachable_rooms": unreachable,
        "ok": not overlaps and not oob and (door is not None or not dungeon.rooms),
    }


__all__ = [
    "room_footprint_overlaps",
    "out_of_bounds_cells",
    "reachable_elements",
    "unreachable_rooms",
    "analyze",
]
