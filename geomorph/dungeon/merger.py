"""Group corridor segments that touch into merged corridors.

Two segments belong together when they share at least one cell. Input
corridors are never modified; connection points are copied.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, List, Set

from .models import BoundingBox, ConnectionPoint, Corridor, MergedCorridor, Position


def _cell_key(p: Position, size: int) -> int:
    return p.x * size + p.y


def _index_cells(corridors: List[Corridor], size: int) -> Dict[int, List[int]]:
    index: Dict[int, List[int]] = {}
    for i, corridor in enumerate(corridors):
        for p in corridor.path:
            owners = index.setdefault(_cell_key(p, size), [])
            if not owners or owners[-1] != i:
                owners.append(i)
    return index


def _components(corridors: List[Corridor]) -> List[List[int]]:
    # Any stride wider than the largest coordinate keeps the packed keys unique
    size = 1 + max((max(p.x, p.y) for c in corridors for p in c.path), default=0)
    index = _index_cells(corridors, size)
    neighbours: List[Set[int]] = [set() for _ in corridors]
    for owners in index.values():
        for i in owners:
            neighbours[i].update(o for o in owners if o != i)

    visited: Set[int] = set()
    groups: List[List[int]] = []
    for root in range(len(corridors)):
        if root in visited:
            continue
        group: List[int] = []
        stack = [root]
        while stack:
            i = stack.pop()
            if i in visited:
                continue
            visited.add(i)
            group.append(i)
            stack.extend(sorted(neighbours[i] - visited, reverse=True))
        groups.append(group)
    return groups


def merge_corridor_group(merged_id: str, segments: List[Corridor]) -> MergedCorridor:
    path: List[Position] = []
    seen_cells: Set[Position] = set()
    points: List[ConnectionPoint] = []
    seen_points: Set[tuple] = set()
    for segment in segments:
        for p in segment.path:
            if p not in seen_cells:
                seen_cells.add(p)
                path.append(p)
        for cp in segment.connection_points:
            key = (cp.position, cp.direction)
            if key not in seen_points:
                seen_points.add(key)
                points.append(replace(cp))

    xs = [p.x for p in path]
    ys = [p.y for p in path]
    box = BoundingBox(min(xs), min(ys), max(xs), max(ys)) if path else BoundingBox(0, 0, 0, 0)
    return MergedCorridor(
        id=merged_id,
        segments=list(segments),
        path=path,
        connection_points=points,
        total_length=len(path),
        segment_count=len(segments),
        bounding_box=box,
    )


def merge_adjacent_corridors(corridors: List[Corridor]) -> List[MergedCorridor]:
    """One merged corridor per set of segments connected through shared cells."""
    merged = []
    for n, group in enumerate(_components(corridors)):
        merged.append(merge_corridor_group(f"merged-corridor-{n}", [corridors[i] for i in group]))
    return merged


__all__ = ["merge_adjacent_corridors", "merge_corridor_group"]
