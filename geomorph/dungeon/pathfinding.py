"""Grid A* used to route corridors.

4-directional moves only, unit step cost, Manhattan heuristic. Ties on ``f``
go to whichever node was discovered first, which keeps routes identical
between runs with the same occupancy. Start and goal are always enterable so
routes can leave from and arrive at door cells inside reserved room
footprints.
"""

from __future__ import annotations

import heapq
from typing import Container, Dict, List, Optional, Tuple

from .errors import PathfindingError
from .models import Position

Coord = Tuple[int, int]

# North, East, South, West; expansion order matters for tie-breaking.
NEIGHBOR_STEPS: Tuple[Coord, ...] = ((0, -1), (1, 0), (0, 1), (-1, 0))


def manhattan(a: Coord, b: Coord) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def _pop_lowest(frontier: list, open_keys: set, closed: set, g_cost: Dict[Coord, int], goal: Coord) -> Coord:
    while frontier:
        f, _seq, cell = heapq.heappop(frontier)
        if cell in closed or cell not in open_keys:
            continue
        if f != g_cost[cell] + manhattan(cell, goal):
            # superseded by a cheaper entry for the same cell
            continue
        return cell
    raise PathfindingError(f"open set lists {len(open_keys)} cells but the frontier heap is empty")


def find_path(
    start: Coord,
    end: Coord,
    occupied: Container,
    grid_size: int,
) -> List[Position]:
    """Return the cells from ``start`` to ``end`` inclusive, or [] if unreachable."""
    start = (start[0], start[1])
    end = (end[0], end[1])

    def in_bounds(c: Coord) -> bool:
        return 0 <= c[0] < grid_size and 0 <= c[1] < grid_size

    if not (in_bounds(start) and in_bounds(end)):
        return []

    g_cost: Dict[Coord, int] = {start: 0}
    parent: Dict[Coord, Optional[Coord]] = {start: None}
    discovered: Dict[Coord, int] = {start: 0}
    frontier = [(manhattan(start, end), 0, start)]
    open_keys = {start}
    closed: set = set()

    while open_keys:
        current = _pop_lowest(frontier, open_keys, closed, g_cost, end)
        open_keys.discard(current)
        closed.add(current)
        if current == end:
            return _reconstruct(parent, current)

        cx, cy = current
        for dx, dy in NEIGHBOR_STEPS:
            nxt = (cx + dx, cy + dy)
            if not in_bounds(nxt) or nxt in closed:
                continue
            if nxt != start and nxt != end and nxt in occupied:
                continue
            tentative = g_cost[current] + 1
            if nxt not in open_keys:
                discovered[nxt] = len(discovered)
                open_keys.add(nxt)
            elif tentative >= g_cost[nxt]:
                continue
            g_cost[nxt] = tentative
            parent[nxt] = current
            heapq.heappush(frontier, (tentative + manhattan(nxt, end), discovered[nxt], nxt))
    return []


def _reconstruct(parent: Dict[Coord, Optional[Coord]], node: Coord) -> List[Position]:
    path: List[Position] = []
    cur: Optional[Coord] = node
    while cur is not None:
        path.append(Position(cur[0], cur[1]))
        cur = parent[cur]
    path.reverse()
    return path


__all__ = ["find_path", "manhattan", "NEIGHBOR_STEPS"]
