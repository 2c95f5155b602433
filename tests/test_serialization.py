import json
from datetime import datetime, timezone

from geomorph.dungeon import DungeonMap, GenerationSettings, generate_dungeon
from geomorph.dungeon.models import ConnectionPoint, ExitDirection, Position

PINNED = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _map():
    return generate_dungeon(GenerationSettings(grid_size=30, room_count=6, seed="export"), created_at=PINNED)


def test_json_round_trip_is_exact():
    m = _map()
    text = m.to_json()
    again = DungeonMap.from_json(text)
    assert again == m
    assert again.to_json() == text


def test_camel_case_keys():
    data = json.loads(_map().to_json())
    assert {"id", "name", "rooms", "corridors", "gridSize", "totalRooms", "seed", "createdAt", "entranceDoor"} <= set(data)
    room = data["rooms"][0]
    assert {"connectionPoints", "templateId", "width", "height", "position", "shape", "type", "size"} <= set(room)
    corridor = data["corridors"][0]
    assert {"connectionPoints", "path", "length", "width", "direction", "type"} <= set(corridor)
    assert data["createdAt"] == "2024-05-01T12:00:00+00:00"
    assert data["entranceDoor"]["forced"] in (True, False)


def test_open_connection_point_omits_link_key():
    cp = ConnectionPoint(ExitDirection.EAST, Position(2, 3))
    assert cp.to_dict() == {"direction": "east", "position": {"x": 2, "y": 3}}
    cp.connected_element_id = "corridor-4"
    assert cp.to_dict()["connectedElementId"] == "corridor-4"
    assert ConnectionPoint.from_dict(cp.to_dict()) == cp


def test_map_without_rooms_has_no_door_key():
    m = DungeonMap(id="x", name="x", rooms=[], corridors=[], grid_size=20, total_rooms=0, seed="s", created_at=PINNED)
    data = m.to_dict()
    assert "entranceDoor" not in data
    assert DungeonMap.from_dict(data) == m
