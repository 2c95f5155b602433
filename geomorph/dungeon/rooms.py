from __future__ import annotations

from typing import List, Optional, Tuple

from ..logging_utils import get_logger
from .config import ROOM_GENERATION
from .models import ConnectionPoint, Position, Room, RoomType
from .state import GenerationContext
from .templates import RoomTemplate, get_random_template

log = get_logger("geomorph.dungeon.rooms")


def place_rooms(ctx: GenerationContext) -> Tuple[List[Room], int, int]:
    """Place non-overlapping template rooms onto the grid.

    Returns (rooms, target_attempted, placed_count). Running out of attempts
    is not an error; the map simply ends up with fewer rooms.
    """
    lo, hi = ctx.settings.room_range
    target = ctx.rng.next_int(lo, hi)
    attempts = target * ROOM_GENERATION["ATTEMPTS_PER_ROOM"]
    placed: List[Room] = []
    while len(placed) < target and attempts > 0:
        attempts -= 1
        template = get_random_template(RoomType.STANDARD, ctx.rng)
        position = find_valid_room_position(ctx, template)
        if position is None:
            continue
        room = create_room_from_template(ctx, template, position)
        ctx.add_room(room)
        placed.append(room)
    ctx.metrics["rooms_requested"] = target
    ctx.metrics["rooms_placed"] = len(placed)
    if len(placed) < target:
        log.debug(event="room_placement_exhausted", requested=target, placed=len(placed), seed=ctx.seed)
    return placed, target, len(placed)


def find_valid_room_position(ctx: GenerationContext, template: RoomTemplate) -> Optional[Position]:
    span_x = ctx.grid_size - template.width - 2
    span_y = ctx.grid_size - template.height - 2
    if span_x <= 0 or span_y <= 0:
        return None
    for _ in range(ROOM_GENERATION["POSITION_ATTEMPTS"]):
        position = Position(ctx.rng.next_int_max(span_x) + 1, ctx.rng.next_int_max(span_y) + 1)
        if is_valid_room_position(ctx, template, position):
            return position
    return None


def is_valid_room_position(ctx: GenerationContext, template: RoomTemplate, position: Position) -> bool:
    if position.x + template.width >= ctx.grid_size or position.y + template.height >= ctx.grid_size:
        return False
    pad = ctx.settings.room_spacing
    for ix in range(position.x - pad, position.x + template.width + pad):
        for iy in range(position.y - pad, position.y + template.height + pad):
            if ctx.occupied.is_occupied(ix, iy):
                return False
    return True


def create_room_from_template(ctx: GenerationContext, template: RoomTemplate, position: Position) -> Room:
    offsets = list(template.connection_points)
    limit = ctx.settings.max_exits_per_room
    if len(offsets) > limit:
        offsets = [offsets[i] for i in ctx.rng.sample_indices(len(offsets), limit)]
    return Room(
        id=ctx.next_id("room"),
        shape=template.shape,
        type=template.type,
        size=template.size,
        position=position,
        width=template.width,
        height=template.height,
        connection_points=[
            ConnectionPoint(direction=tc.direction, position=position.offset(tc.offset.x, tc.offset.y))
            for tc in offsets
        ],
        template_id=template.id,
    )
