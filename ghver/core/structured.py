"""Helpers for safely working with dynamic (untyped) structures.

GitHub API payloads and config.toml both arrive as untyped JSON/TOML.
These helpers validate at the boundary and narrow the static type.
"""

from __future__ import annotations

from typing import Mapping, TypeGuard, cast

StrDict = dict[str, object]
ObjList = list[object]


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    """Return True if obj is a dict with string keys."""
    if not isinstance(obj, dict):
        return False
    d = cast(dict[object, object], obj)
    return all(isinstance(k, str) for k in d.keys())


def as_str_dict(obj: object) -> StrDict | None:
    if is_str_dict(obj):
        return obj
    return None


def as_obj_list(obj: object) -> ObjList | None:
    if isinstance(obj, list):
        return cast(ObjList, obj)
    return None


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Get a string value from a mapping, stripping whitespace.

    Returns None if missing, not a str, or empty after stripping.
    """
    value = table.get(key)
    if not isinstance(value, str):
        return None
    s = value.strip()
    return s or None


def get_exact_str(table: Mapping[str, object], key: str) -> str | None:
    """Get a non-empty string value from a mapping, exactly as stored.

    Use this for identifiers (tag names, SHAs) that must not be normalized.
    """
    value = table.get(key)
    if not isinstance(value, str) or not value:
        return None
    return value


def get_float(table: Mapping[str, object], key: str) -> float | None:
    """Get a number as float. Booleans are rejected."""
    value = table.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    """Get a nested table (dict with string keys) from a mapping."""
    return as_str_dict(table.get(key))
