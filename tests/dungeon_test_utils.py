"""Shared helpers for dungeon tests (hand-built contexts and geometry checks)."""

from geomorph.dungeon.config import GenerationSettings
from geomorph.dungeon.models import Position
from geomorph.dungeon.rooms import create_room_from_template
from geomorph.dungeon.state import GenerationContext
from geomorph.dungeon.templates import get_template_by_id


def make_context(grid_size=20, room_count=1, seed="test", **overrides):
    settings = GenerationSettings(grid_size=grid_size, room_count=room_count, seed=seed, **overrides)
    return GenerationContext(settings)


def add_template_room(ctx, template_id, x, y):
    """Place a catalog room at (x, y) without any placement checks."""
    room = create_room_from_template(ctx, get_template_by_id(template_id), Position(x, y))
    ctx.add_room(room)
    return room


def rects_within(a, b, gap):
    """True when room ``b`` intrudes into room ``a``'s footprint grown by ``gap`` cells."""
    return (
        a.position.x - gap < b.position.x + b.width
        and b.position.x < a.position.x + a.width + gap
        and a.position.y - gap < b.position.y + b.height
        and b.position.y < a.position.y + a.height + gap
    )


def is_contiguous(path):
    return all(abs(a.x - b.x) + abs(a.y - b.y) == 1 for a, b in zip(path, path[1:]))
