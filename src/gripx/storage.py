"""Storage grips — string and JSON values kept in a key/value store.

The store is any MutableMapping[str, str]: a dict, a shelve handle, a
redis-backed mapping, or a test double. It is always passed in; there is no
process-wide default store.
"""

from __future__ import annotations

import json
from collections.abc import MutableMapping
from typing import Any, TypeVar

from gripx.manual import ManualGrip, manual_grip
from gripx.transform import TransformGrip, transform_grip

T = TypeVar("T")

Store = MutableMapping[str, str]


def storage_string_grip(key: str, default: str, store: Store) -> ManualGrip[str]:
    """Grip on store[key], reading default while the key is missing.

    Usage:
        prefs = {}
        lang = storage_string_grip("lang", "en", prefs)
        lang.value        # "en"
        lang.set("fr")
        prefs["lang"]     # "fr"
    """

    def _get(store: Store) -> str:
        value = store.get(key)
        return default if value is None else value

    def _set(value: str, store: Store) -> str:
        store[key] = value
        return value

    return manual_grip(_get, _set, store)


def storage_json_grip(key: str, default: Any, store: Store) -> TransformGrip[Any]:
    """Grip on a JSON-serializable value stored as text under key."""
    return transform_grip(
        storage_string_grip(key, json.dumps(default), store),
        cast_in=json.dumps,
        cast_out=json.loads,
    )
