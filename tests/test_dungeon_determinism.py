from dataclasses import replace
from datetime import datetime, timezone

from geomorph.dungeon import GenerationSettings, generate_dungeon, run_generation

PINNED = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def test_same_seed_same_json():
    settings = GenerationSettings(grid_size=40, room_count=12, seed="repeatable")
    a = generate_dungeon(settings, created_at=PINNED)
    b = generate_dungeon(settings, created_at=PINNED)
    assert a.to_json() == b.to_json()


def test_seed_changes_layout():
    base = GenerationSettings(grid_size=40, room_count=12)
    layouts = {
        tuple((r.template_id, r.position) for r in generate_dungeon(replace(base, seed=s)).rooms)
        for s in ("one", "two", "three")
    }
    assert len(layouts) > 1


def test_missing_seed_is_drawn_and_echoed():
    settings = GenerationSettings(grid_size=20, room_count=2)
    ctx = run_generation(settings)
    assert settings.seed is None
    assert ctx.seed and ctx.map.seed == ctx.seed
    again = generate_dungeon(replace(settings, seed=ctx.seed), created_at=ctx.map.created_at)
    assert again.to_json() == ctx.map.to_json()


def test_map_identity_from_seed():
    m = generate_dungeon(GenerationSettings(grid_size=20, room_count=1, seed="7"), created_at=PINNED)
    assert m.id == "geomorph-dungeon-7"
    assert m.name == "Geomorph Dungeon 7"
    assert m.created_at == PINNED


def test_metrics_can_be_disabled():
    ctx = run_generation(GenerationSettings(grid_size=20, room_count=2, seed="q"), enable_metrics=False)
    assert "phase_ms" not in ctx.metrics
    assert ctx.metrics["rooms_placed"] == len(ctx.map.rooms)


def test_integer_seed_replays_like_its_string_form():
    as_int = generate_dungeon(GenerationSettings(grid_size=20, room_count=3, seed=42), created_at=PINNED)
    as_str = generate_dungeon(GenerationSettings(grid_size=20, room_count=3, seed="42"), created_at=PINNED)
    assert as_int.seed == "42"
    assert as_int.to_json() == as_str.to_json()
    back = type(as_int).from_json(as_int.to_json())
    replay = generate_dungeon(GenerationSettings(grid_size=20, room_count=3, seed=back.seed), created_at=PINNED)
    assert back.seed == as_int.seed
    assert replay.to_json() == as_int.to_json()
