import pytest

from geomorph.dungeon.models import Position
from geomorph.dungeon.pathfinding import find_path
from geomorph.dungeon.state import OccupancyGrid

from dungeon_test_utils import is_contiguous


def test_start_equals_end():
    assert find_path((4, 4), (4, 4), set(), 10) == [Position(4, 4)]


def test_straight_line_on_empty_grid():
    path = find_path((0, 0), (3, 0), set(), 10)
    assert path == [Position(0, 0), Position(1, 0), Position(2, 0), Position(3, 0)]


def test_enclosed_goal_unreachable():
    walls = OccupancyGrid(10, [(4, 5), (6, 5), (5, 4), (5, 6)])
    assert find_path((0, 0), (5, 5), walls, 10) == []


def test_out_of_bounds_endpoint_returns_empty():
    assert find_path((0, 0), (10, 3), set(), 10) == []
    assert find_path((-1, 0), (3, 3), set(), 10) == []


def test_routes_around_wall():
    # vertical wall at x=2 from y=0..3, gap at y=4
    wall = OccupancyGrid(6, [(2, y) for y in range(4)])
    path = find_path((0, 0), (4, 0), wall, 6)
    assert path[0] == (0, 0) and path[-1] == (4, 0)
    assert is_contiguous(path)
    assert not any(p in wall for p in path)
    # shortest detour: down to y=4, across, back up
    assert len(path) == 1 + 4 + 4 + 4


def test_occupied_endpoints_are_enterable():
    occupied = OccupancyGrid(8, [(1, 1), (5, 1)])
    path = find_path((1, 1), (5, 1), occupied, 8)
    assert path[0] == (1, 1) and path[-1] == (5, 1)
    assert len(path) == 5


def test_same_inputs_same_path():
    occupied = OccupancyGrid(12, [(x, 5) for x in range(1, 11)])
    a = find_path((0, 0), (11, 11), occupied, 12)
    b = find_path((0, 0), (11, 11), occupied, 12)
    assert a == b
    assert len(a) == 23


@pytest.mark.parametrize("start,end", [((0, 0), (9, 9)), ((9, 0), (0, 9)), ((3, 7), (8, 1))])
def test_open_grid_paths_are_shortest(start, end):
    path = find_path(start, end, set(), 10)
    assert len(path) == abs(start[0] - end[0]) + abs(start[1] - end[1]) + 1
    assert is_contiguous(path)
