"""Pipeline orchestration for dungeon generation.

Runs the stages in their fixed order against one ``GenerationContext``:
room placement, room connectivity, exploration dead ends, entrance. Corridor
merging is a read-only view and is left to callers that want it.
"""
from __future__ import annotations

import os
import time
from datetime import datetime
from typing import Optional

from ..logging_utils import get_logger
from .config import GenerationSettings
from .connectivity import connect_rooms
from .entrance import place_entrance
from .exploration import add_exploration_corridors
from .models import DungeonMap
from .rooms import place_rooms
from .state import GenerationContext

log = get_logger("geomorph.dungeon.pipeline")


def _metrics_enabled_from_env() -> bool:
    val = os.getenv("GEOMORPH_ENABLE_GENERATION_METRICS", "1").lower()
    return val not in {"0", "false", "no", ""}


def run_generation(
    settings: GenerationSettings,
    *,
    enable_metrics: Optional[bool] = None,
    created_at: Optional[datetime] = None,
) -> GenerationContext:
    """Generate a map and return the whole context (map parts plus metrics).

    Settings are validated before any work; InvalidSettingsError is the only
    exception expected from a healthy run.
    """
    settings.validate()
    if enable_metrics is None:
        enable_metrics = _metrics_enabled_from_env()
    ctx = GenerationContext(settings, enable_metrics=enable_metrics)

    if enable_metrics:
        start = time.perf_counter()
        phase_times = {}

        def _phase(label, fn, *a, **k):
            ps = time.perf_counter(); r = fn(*a, **k); pe = time.perf_counter()
            phase_times[label] = round((pe - ps) * 1000, 3)
            return r
    else:
        def _phase(label, fn, *a, **k):
            return fn(*a, **k)

    _phase("place_rooms", place_rooms, ctx)
    _phase("connect_rooms", connect_rooms, ctx)
    _phase("exploration", add_exploration_corridors, ctx)
    _phase("entrance", place_entrance, ctx)
    ctx.map = ctx.to_map(created_at)

    if enable_metrics:
        ctx.metrics["runtime_ms"] = round((time.perf_counter() - start) * 1000, 3)
        ctx.metrics["phase_ms"] = phase_times
    log.info(
        event="dungeon_generated",
        seed=ctx.seed,
        grid=ctx.grid_size,
        rooms=len(ctx.rooms),
        corridors=len(ctx.corridors),
        failed=ctx.metrics["connections_failed"],
        forced_entrance=ctx.metrics["entrance_forced"],
        ms=ctx.metrics["runtime_ms"] if enable_metrics else None,
    )
    return ctx


def generate_dungeon(settings: GenerationSettings, *, created_at: Optional[datetime] = None) -> DungeonMap:
    """Generate a complete map; identical settings and seed give an identical map."""
    return run_generation(settings, created_at=created_at).map


__all__ = ["run_generation", "generate_dungeon"]
