"""Narrowing helpers for untyped data (TOML tables, npm JSON output)."""

from __future__ import annotations

from typing import Mapping, TypeGuard, cast

StrDict = dict[str, object]
ObjList = list[object]


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    """Return True if obj is a dict whose keys are all strings."""
    if not isinstance(obj, dict):
        return False
    d = cast(dict[object, object], obj)
    return all(isinstance(k, str) for k in d.keys())


def as_str_dict(obj: object) -> StrDict | None:
    if is_str_dict(obj):
        return obj
    return None


def as_str_list(obj: object) -> list[str] | None:
    """Return obj as a list of strings, or None if any item is not a str."""
    if not isinstance(obj, list):
        return None
    items = cast(list[object], obj)
    out: list[str] = []
    for item in items:
        if not isinstance(item, str):
            return None
        out.append(item)
    return out


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Get a stripped, non-empty string value from a mapping."""
    value = table.get(key)
    if not isinstance(value, str):
        return None
    s = value.strip()
    return s or None


def get_float(table: Mapping[str, object], key: str) -> float | None:
    """Get a positive number from a mapping (ints are accepted)."""
    value = table.get(key)
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    if value <= 0:
        return None
    return float(value)


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    value = table.get(key)
    return as_str_dict(value)
