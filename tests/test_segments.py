import itertools

import pytest

from geomorph.dungeon.errors import MalformedPathError
from geomorph.dungeon.models import CorridorDirection, ExitDirection, Position
from geomorph.dungeon.segments import exit_direction, segment_path
from geomorph.dungeon.state import OccupancyGrid


def _ids():
    counter = itertools.count(1)
    return lambda prefix: f"{prefix}-{next(counter)}"


def _path(*cells):
    return [Position(x, y) for x, y in cells]


def test_l_path_splits_at_turn_with_shared_cell():
    occupied = OccupancyGrid(10)
    path = _path((0, 0), (1, 0), (2, 0), (2, 1), (2, 2))
    first, second = segment_path(path, occupied, _ids())

    assert first.id == "corridor-1" and second.id == "corridor-2"
    assert first.path == _path((0, 0), (1, 0), (2, 0))
    assert second.path == _path((2, 0), (2, 1), (2, 2))
    assert first.direction == CorridorDirection.HORIZONTAL
    assert second.direction == CorridorDirection.VERTICAL
    assert (first.length, second.length) == (3, 3)
    assert [cp.direction for cp in first.connection_points] == [ExitDirection.EAST, ExitDirection.WEST]
    assert [cp.direction for cp in second.connection_points] == [ExitDirection.SOUTH, ExitDirection.NORTH]
    assert len(occupied) == 5


def test_straight_path_is_single_segment():
    segments = segment_path(_path((3, 1), (3, 2), (3, 3), (3, 4)), OccupancyGrid(10), _ids())
    assert len(segments) == 1
    assert segments[0].position == Position(3, 1)
    assert segments[0].length == 4


def test_zigzag_produces_segment_per_leg():
    path = _path((0, 0), (1, 0), (1, 1), (2, 1), (2, 2))
    segments = segment_path(path, OccupancyGrid(10), _ids())
    assert len(segments) == 4
    for a, b in zip(segments, segments[1:]):
        assert a.path[-1] == b.path[0]


def test_short_paths_yield_nothing():
    occupied = OccupancyGrid(10)
    assert segment_path([], occupied, _ids()) == []
    assert segment_path(_path((1, 1)), occupied, _ids()) == []
    assert len(occupied) == 0


def test_non_contiguous_path_rejected_without_side_effects():
    occupied = OccupancyGrid(10)
    with pytest.raises(MalformedPathError):
        segment_path(_path((0, 0), (1, 0), (3, 0)), occupied, _ids())
    assert len(occupied) == 0


def test_out_of_grid_cell_rejected():
    with pytest.raises(MalformedPathError):
        segment_path(_path((8, 0), (9, 0), (10, 0)), OccupancyGrid(10), _ids())


def test_exit_direction_prefers_larger_axis():
    assert exit_direction(Position(0, 0), Position(5, 2)) == ExitDirection.EAST
    assert exit_direction(Position(5, 0), Position(0, 2)) == ExitDirection.WEST
    assert exit_direction(Position(0, 0), Position(2, 2)) == ExitDirection.SOUTH
    assert exit_direction(Position(0, 5), Position(0, 0)) == ExitDirection.NORTH
