"""Narrowing for parsed TOML.

tomllib returns plain dicts and lists of ``object``. The config parser
narrows every value through these before it touches it.
"""

from __future__ import annotations

from typing import TypeGuard, cast

StrDict = dict[str, object]
ObjList = list[object]


def as_str_dict(obj: object) -> StrDict | None:
    """obj as a table, or None unless it is a dict with string keys."""
    if not isinstance(obj, dict):
        return None
    table = cast(dict[object, object], obj)
    if not all(isinstance(key, str) for key in table):
        return None
    return cast(StrDict, table)


def as_obj_list(obj: object) -> ObjList | None:
    if not isinstance(obj, list):
        return None
    return cast(ObjList, obj)


def is_str_list(obj: object) -> TypeGuard[list[str]]:
    items = as_obj_list(obj)
    return items is not None and all(isinstance(item, str) for item in items)
