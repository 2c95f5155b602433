from datetime import datetime, timezone

from geomorph.dungeon.analysis import analyze, out_of_bounds_cells, room_footprint_overlaps, unreachable_rooms
from geomorph.dungeon.models import DungeonMap, Position
from geomorph.dungeon.segments import build_corridor

from dungeon_test_utils import add_template_room, make_context


def _map(ctx):
    return ctx.to_map(datetime(2024, 1, 1, tzinfo=timezone.utc))


def test_overlap_detection():
    ctx = make_context(grid_size=20)
    add_template_room(ctx, "room-square-small", 2, 2)
    add_template_room(ctx, "room-square-small", 4, 4)
    add_template_room(ctx, "room-square-small", 12, 12)
    assert room_footprint_overlaps(_map(ctx)) == [("room-1", "room-2")]


def test_out_of_bounds_detection():
    dungeon = DungeonMap(
        id="m", name="m", rooms=[], grid_size=10, total_rooms=0, seed="s",
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        corridors=[build_corridor("corridor-1", [Position(8, 0), Position(9, 0), Position(10, 0)])],
    )
    assert out_of_bounds_cells(dungeon) == [("corridor-1", Position(10, 0))]


def test_isolated_room_reported_unreachable():
    ctx = make_context(grid_size=20)
    add_template_room(ctx, "room-square-small", 2, 2)
    add_template_room(ctx, "room-square-small", 12, 12)
    dungeon = _map(ctx)
    assert unreachable_rooms(dungeon) == ["room-2"]
    summary = analyze(dungeon)
    assert summary["rooms"] == 2
    assert summary["has_entrance"] is False
    assert summary["ok"] is False
