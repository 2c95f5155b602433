import pytest

from geomorph.dungeon import GenerationSettings, InvalidSettingsError, run_generation
from geomorph.validation import validate


def test_defaults():
    s = GenerationSettings()
    assert (s.room_count, s.grid_size, s.room_spacing, s.max_exits_per_room) == (8, 30, 1, 4)
    assert s.seed is None
    assert s.room_range == (8, 8)
    assert s.validate() is s


def test_from_payload_accepts_camel_and_snake_case():
    s = GenerationSettings.from_payload({"roomCount": 5, "grid_size": 25, "maxExitsPerRoom": 2, "seed": "abc"})
    assert (s.room_count, s.grid_size, s.max_exits_per_room, s.seed) == (5, 25, 2, "abc")


def test_from_payload_normalizes_seed():
    assert GenerationSettings.from_payload({"seed": ""}).seed is None
    assert GenerationSettings.from_payload({"seed": 42}).seed == "42"
    assert GenerationSettings.from_payload({"seed": None}).seed is None


def test_from_payload_defaults_are_overridable():
    s = GenerationSettings.from_payload({"roomCount": 3}, defaults={"grid_size": 45, "room_count": 9})
    assert s.grid_size == 45 and s.room_count == 3


@pytest.mark.parametrize(
    "payload,field,code",
    [
        ({"gridSize": 10}, "grid_size", "min"),
        ({"gridSize": 51}, "grid_size", "max"),
        ({"roomCount": 0}, "room_count", "min"),
        ({"roomCount": "many"}, "room_count", "type"),
        ({"roomCount": True}, "room_count", "type"),
        ({"roomSpacing": 6}, "room_spacing", "max"),
        ({"maxExitsPerRoom": 9}, "max_exits_per_room", "max"),
        ({"minRooms": 6, "maxRooms": 3}, "min_rooms", "range"),
    ],
)
def test_invalid_payloads(payload, field, code):
    with pytest.raises(InvalidSettingsError) as exc:
        GenerationSettings.from_payload(payload)
    assert exc.value.field == field
    assert exc.value.code == code
    assert exc.value.to_dict()["field"] == field


def test_invalid_settings_is_value_error():
    with pytest.raises(ValueError):
        run_generation(GenerationSettings(grid_size=5))


def test_non_object_payload_rejected():
    with pytest.raises(InvalidSettingsError) as exc:
        GenerationSettings.from_payload(["not", "a", "dict"])
    assert exc.value.code == "type"


def test_validator_reports_required_and_bounds():
    schema = {"name": ("str", True, {"max_len": 3}), "n": ("float", False, {"min": 0.5})}
    assert validate({}, schema) == (False, {"field": "name", "error": "missing required field", "code": "required"})
    assert validate({"name": "abcd"}, schema)[1]["code"] == "max_len"
    assert validate({"name": "ab", "n": 0.1}, schema)[1]["code"] == "min"
    assert validate({"name": " ab ", "n": 1}, schema) == (True, {"name": "ab", "n": 1.0})
