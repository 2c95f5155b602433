"""Lightweight payload validation utilities.

Provides minimal schema-like checking with clear, consistent error
responses for JSON bodies and CLI-assembled dicts. Not a general JSON Schema
implementation.

Schema Mini-Language (Python dict):
{
  'field_name': ('type', required: bool, extras: dict)
}
Supported types: 'str', 'int', 'float', 'bool', 'dict'
Extras:
  min / max       (int, float) inclusive numeric bounds
  min_len / max_len / allow_empty  (str)
  aliases         alternative payload keys, e.g. ('roomCount',)
  coerce_str      (str) accept ints and convert them with str()

If invalid: (False, {'field': 'room_count', 'error': 'must be >= 1', 'code': 'min'})
If valid: (True, normalized_data)
"""

from __future__ import annotations

from typing import Any, Dict, Tuple

PRIMITIVES = {
    "str": str,
    "int": int,
    "float": (int, float),
    "bool": bool,
    "dict": dict,
}


def _fail(field: str, message: str, code: str) -> Tuple[bool, Dict[str, Any]]:
    return False, {"field": field, "error": message, "code": code}


def _lookup(payload: Dict[str, Any], name: str, aliases) -> Tuple[bool, Any]:
    for key in (name, *aliases):
        if key in payload:
            return True, payload[key]
    return False, None


def validate(payload: Any, schema: Dict[str, tuple]) -> Tuple[bool, Dict[str, Any]]:
    if not isinstance(payload, dict):
        return _fail("__root__", "payload must be an object", "type")
    out: Dict[str, Any] = {}
    for name, spec in schema.items():
        if not isinstance(spec, tuple) or len(spec) < 2:
            return _fail("__schema__", f"invalid spec for {name}", "schema")
        type_name, required = spec[0], spec[1]
        extras = spec[2] if len(spec) > 2 else {}
        if type_name not in PRIMITIVES:
            return _fail("__schema__", f"unsupported type {type_name}", "schema")
        present, value = _lookup(payload, name, extras.get("aliases", ()))
        if not present or value is None:
            if required:
                return _fail(name, "missing required field", "required")
            continue
        if type_name == "str" and extras.get("coerce_str") and isinstance(value, int) and not isinstance(value, bool):
            value = str(value)
        py_type = PRIMITIVES[type_name]
        # bool is an int subclass; never let True pass as a room count
        if type_name != "bool" and isinstance(value, bool):
            return _fail(name, f"expected {type_name}", "type")
        if not isinstance(value, py_type):
            return _fail(name, f"expected {type_name}", "type")
        if type_name == "str":
            s = value if extras.get("allow_empty") else value.strip()
            if not extras.get("allow_empty") and len(s) == 0:
                return _fail(name, "must not be empty", "empty")
            if "max_len" in extras and len(s) > extras["max_len"]:
                return _fail(name, "too long", "max_len")
            if "min_len" in extras and len(s) < extras["min_len"]:
                return _fail(name, "too short", "min_len")
            out[name] = s
        elif type_name in ("int", "float"):
            if "min" in extras and value < extras["min"]:
                return _fail(name, f"must be >= {extras['min']}", "min")
            if "max" in extras and value > extras["max"]:
                return _fail(name, f"must be <= {extras['max']}", "max")
            out[name] = float(value) if type_name == "float" else value
        else:
            out[name] = value
    return True, out
