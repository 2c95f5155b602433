from geomorph.dungeon.merger import merge_adjacent_corridors
from geomorph.dungeon.models import Position
from geomorph.dungeon.segments import build_corridor


def _corridor(cid, *cells):
    return build_corridor(cid, [Position(x, y) for x, y in cells])


def test_corridors_sharing_a_cell_merge():
    a = _corridor("a", (3, 5), (4, 5), (5, 5))
    b = _corridor("b", (5, 5), (5, 6), (5, 7))
    (merged,) = merge_adjacent_corridors([a, b])
    assert merged.id == "merged-corridor-0"
    assert [s.id for s in merged.segments] == ["a", "b"]
    assert merged.segment_count == 2
    assert merged.total_length == 5
    assert merged.path[0] == Position(3, 5) and merged.path[-1] == Position(5, 7)
    box = merged.bounding_box
    assert (box.min_x, box.min_y, box.max_x, box.max_y) == (3, 5, 5, 7)
    # (5,5) appears with two different directions, so all four points survive
    assert len(merged.connection_points) == 4


def test_disjoint_corridors_stay_separate():
    a = _corridor("a", (0, 0), (1, 0))
    b = _corridor("b", (5, 5), (5, 6))
    merged = merge_adjacent_corridors([a, b])
    assert [m.id for m in merged] == ["merged-corridor-0", "merged-corridor-1"]
    assert [m.segment_count for m in merged] == [1, 1]


def test_transitive_chain_is_one_group_in_traversal_order():
    a = _corridor("a", (0, 0), (1, 0), (2, 0))
    c = _corridor("c", (9, 9), (9, 8))
    b = _corridor("b", (2, 0), (2, 1), (2, 2))
    d = _corridor("d", (2, 2), (3, 2))
    merged = merge_adjacent_corridors([a, c, b, d])
    assert [[s.id for s in m.segments] for m in merged] == [["a", "b", "d"], ["c"]]


def test_duplicate_connection_points_collapse():
    a = _corridor("a", (0, 0), (1, 0), (2, 0))
    b = _corridor("b", (0, 0), (1, 0), (2, 0))
    (merged,) = merge_adjacent_corridors([a, b])
    assert len(merged.connection_points) == 2
    assert merged.total_length == 3


def test_merge_copies_connection_points():
    a = _corridor("a", (0, 0), (1, 0))
    (merged,) = merge_adjacent_corridors([a])
    merged.connection_points[0].connected_element_id = "x"
    assert a.connection_points[0].connected_element_id is None


def test_empty_input():
    assert merge_adjacent_corridors([]) == []


def test_merged_dict_uses_plain_values():
    a = _corridor("a", (3, 5), (4, 5), (5, 5))
    data = merge_adjacent_corridors([a])[0].to_dict()
    assert data["totalLength"] == 3
    assert data["segmentCount"] == 1
    assert data["boundingBox"] == {"minX": 3, "minY": 5, "maxX": 5, "maxY": 5}
