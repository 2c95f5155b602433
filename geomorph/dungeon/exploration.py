from __future__ import annotations

from typing import List, Tuple

from ..logging_utils import get_logger
from .connections import attach_corridors, open_points
from .connectivity import route_corridor
from .models import CARDINAL_STEPS, ConnectionPoint, Position, Room
from .state import GenerationContext

log = get_logger("geomorph.dungeon.exploration")

_STEPS = list(CARDINAL_STEPS.values())


def add_exploration_corridors(ctx: GenerationContext) -> int:
    """Grow short dead-end branches from open room doorways.

    Purely cosmetic: a branch that leaves the grid or finds no route is
    skipped. An endpoint on a reserved cell is still routed to.
    """
    settings = ctx.settings
    added = 0
    for _ in range(len(ctx.rooms) // 2):
        available: List[Tuple[Room, ConnectionPoint]] = [
            (room, cp) for room in ctx.rooms for cp in open_points(room)
        ]
        if not available:
            break
        room, point = ctx.rng.choice(available)
        length = ctx.rng.next_int(settings.dead_end_min_length, settings.dead_end_max_length)
        dx, dy = ctx.rng.choice(_STEPS)
        end = Position(point.position.x + dx * length, point.position.y + dy * length)
        if not ctx.in_bounds(end):
            ctx.metrics["dead_ends_skipped"] += 1
            log.debug(event="dead_end_skipped", reason="out_of_bounds", room=room.id, x=end.x, y=end.y)
            continue
        segments = route_corridor(ctx, point.position, end)
        if not segments:
            ctx.metrics["dead_ends_skipped"] += 1
            log.debug(event="dead_end_skipped", reason="no_path", room=room.id)
            continue
        ctx.add_corridors(segments)
        attach_corridors(
            segments,
            start_point=point,
            start_element_id=room.id,
            start_position=point.position,
        )
        added += 1
    ctx.metrics["dead_ends_added"] = added
    return added


__all__ = ["add_exploration_corridors"]
