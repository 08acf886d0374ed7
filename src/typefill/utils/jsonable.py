"""Conversion of generated values into JSON-compatible data.

Structs become objects keyed by public field name, bytes become hex strings,
and sets become lists in a stable order so that output for a fixed seed is
byte-identical between runs.  Non-string map keys are rendered as compact
JSON text.
"""

from __future__ import annotations

import datetime
import enum
import json
import uuid
from typing import Any

from ..kinds import is_struct, struct_fields


def _sort_key(value: Any) -> str:
    return json.dumps(value, sort_keys=True, ensure_ascii=False)


def to_jsonable(value: Any) -> Any:
    """Return ``value`` converted into plain JSON types.

    Raises
    ------
    TypeError
        If ``value`` contains something with no JSON rendering.
    """

    if isinstance(value, enum.Enum):
        return to_jsonable(value.value)
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, (bytes, bytearray)):
        return value.hex()
    if isinstance(value, datetime.date):
        return value.isoformat()
    if isinstance(value, uuid.UUID):
        return str(value)
    if is_struct(type(value)):
        return {
            name: to_jsonable(getattr(value, name))
            for name, _ in struct_fields(type(value))
            if not name.startswith("_")
        }
    if isinstance(value, dict):
        return {
            key if isinstance(key, str) else _sort_key(to_jsonable(key)): to_jsonable(item)
            for key, item in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    if isinstance(value, (set, frozenset)):
        return sorted((to_jsonable(item) for item in value), key=_sort_key)
    raise TypeError(f"cannot convert {type(value).__qualname__} to JSON")


__all__ = ["to_jsonable"]
