"""Per-run generation state.

One ``GenerationContext`` is built per generation call and handed by
reference to every stage. Nothing here is module level, so independent runs
never share state.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from .config import GenerationSettings
from .errors import GridBoundsError
from .metrics import init_metrics
from .models import Corridor, DungeonMap, ExteriorDoor, Position, Room
from .rng import SeededRandom, generate_random_seed

Cell = Union[Position, Tuple[int, int]]

ENTRANCE_DOOR_ID = "entrance-door"


class OccupancyGrid:
    """Set of reserved cells keyed by ``x * grid_size + y``.

    Out-of-bounds cells are never stored and always report as free, which
    keeps the packed key collision free.
    """

    __slots__ = ("grid_size", "_cells")

    def __init__(self, grid_size: int, cells: Iterable[Cell] = ()):
        self.grid_size = grid_size
        self._cells: set[int] = set()
        for cell in cells:
            self.add(cell)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.grid_size and 0 <= y < self.grid_size

    def key(self, x: int, y: int) -> int:
        return x * self.grid_size + y

    def add(self, cell: Cell) -> None:
        x, y = cell
        if not self.in_bounds(x, y):
            raise GridBoundsError(f"cell ({x}, {y}) outside grid of size {self.grid_size}")
        self._cells.add(self.key(x, y))

    def add_many(self, cells: Iterable[Cell]) -> None:
        for cell in cells:
            self.add(cell)

    def is_occupied(self, x: int, y: int) -> bool:
        return self.in_bounds(x, y) and self.key(x, y) in self._cells

    def __contains__(self, cell: Cell) -> bool:
        x, y = cell
        return self.is_occupied(x, y)

    def __len__(self) -> int:
        return len(self._cells)


class GenerationContext:
    def __init__(self, settings: GenerationSettings, *, enable_metrics: bool = True):
        if settings.seed is None:
            # Echo the drawn seed so the run can be reproduced; the caller's settings stay untouched
            settings = replace(settings, seed=generate_random_seed())
        elif not isinstance(settings.seed, str):
            # Seed the stream from the same string the map records, so 42 and "42" replay alike
            settings = replace(settings, seed=str(settings.seed))
        self.settings = settings
        self.rng = SeededRandom(settings.seed)
        self.seed: str = settings.seed
        self.grid_size = settings.grid_size
        self.occupied = OccupancyGrid(settings.grid_size)
        self.rooms: List[Room] = []
        self.corridors: List[Corridor] = []
        self.entrance_door: Optional[ExteriorDoor] = None
        self.map: Optional[DungeonMap] = None
        self.enable_metrics = enable_metrics
        self.metrics: Dict[str, Any] = init_metrics()
        self._counters: Dict[str, int] = {}

    def next_id(self, prefix: str) -> str:
        n = self._counters.get(prefix, 0) + 1
        self._counters[prefix] = n
        return f"{prefix}-{n}"

    def add_room(self, room: Room) -> None:
        self.rooms.append(room)
        self.occupied.add_many(room.cells())

    def add_corridors(self, corridors: List[Corridor]) -> None:
        self.corridors.extend(corridors)
        self.metrics["corridor_segments"] += len(corridors)

    def in_bounds(self, pos: Cell) -> bool:
        return self.occupied.in_bounds(pos[0], pos[1])

    def to_map(self, created_at: Optional[datetime] = None) -> DungeonMap:
        return DungeonMap(
            id=f"geomorph-dungeon-{self.seed}",
            name=f"Geomorph Dungeon {self.seed}",
            rooms=self.rooms,
            corridors=self.corridors,
            entrance_door=self.entrance_door,
            grid_size=self.grid_size,
            total_rooms=len(self.rooms),
            seed=self.seed,
            created_at=created_at or datetime.now(timezone.utc),
        )


__all__ = ["OccupancyGrid", "GenerationContext", "ENTRANCE_DOOR_ID"]
