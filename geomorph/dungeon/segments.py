"""Split a routed path into straight corridor segments.

A segment ends wherever the route switches between horizontal and vertical
movement; neighbouring segments share that turn cell.
"""

from __future__ import annotations

from typing import Callable, List, Sequence

from .errors import MalformedPathError
from .models import (
    ConnectionPoint,
    Corridor,
    CorridorDirection,
    CorridorType,
    ExitDirection,
    Position,
)
from .state import OccupancyGrid


def step_direction(a: Position, b: Position) -> CorridorDirection:
    if b.x != a.x:
        return CorridorDirection.HORIZONTAL
    if b.y != a.y:
        return CorridorDirection.VERTICAL
    return CorridorDirection.HORIZONTAL


def exit_direction(origin: Position, towards: Position) -> ExitDirection:
    dx = towards.x - origin.x
    dy = towards.y - origin.y
    if abs(dx) > abs(dy):
        return ExitDirection.EAST if dx > 0 else ExitDirection.WEST
    return ExitDirection.SOUTH if dy > 0 else ExitDirection.NORTH


def validate_path(path: Sequence[Position]) -> None:
    for i in range(1, len(path)):
        a, b = path[i - 1], path[i]
        if abs(a.x - b.x) + abs(a.y - b.y) != 1:
            raise MalformedPathError(f"step {i} from {tuple(a)} to {tuple(b)} is not a single cardinal move")


def build_corridor(corridor_id: str, run: List[Position]) -> Corridor:
    start, end = run[0], run[-1]
    return Corridor(
        id=corridor_id,
        type=CorridorType.STRAIGHT,
        direction=step_direction(start, end),
        position=start,
        length=len(run),
        width=1,
        connection_points=[
            ConnectionPoint(direction=exit_direction(start, end), position=start),
            ConnectionPoint(direction=exit_direction(end, start), position=end),
        ],
        path=list(run),
    )


def segment_path(
    path: Sequence[Position],
    occupied: OccupancyGrid,
    next_id: Callable[[str], str],
) -> List[Corridor]:
    """Turn ``path`` into corridors and reserve their cells in ``occupied``.

    Raises MalformedPathError before touching ``occupied`` when the path is
    not contiguous.
    """
    path = [Position(p[0], p[1]) for p in path]
    if len(path) < 2:
        return []
    validate_path(path)
    for p in path:
        if not occupied.in_bounds(p.x, p.y):
            raise MalformedPathError(f"cell {tuple(p)} lies outside the grid")

    corridors: List[Corridor] = []
    run_start = 0
    for i in range(1, len(path)):
        last = i + 1 >= len(path)
        if last or step_direction(path[i - 1], path[i]) != step_direction(path[i], path[i + 1]):
            run = path[run_start:i + 1]
            corridor = build_corridor(next_id("corridor"), run)
            occupied.add_many(run)
            corridors.append(corridor)
            run_start = i
    return corridors


__all__ = ["segment_path", "build_corridor", "exit_direction", "step_direction", "validate_path"]
