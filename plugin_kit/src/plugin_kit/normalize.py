from __future__ import annotations

from collections.abc import Mapping
from copy import copy
from typing import Any


def remove_empty_values(payload: Any) -> Any:
    """
    Drop entries whose value is None, "" or an empty container.

    Non-mapping input is returned as a shallow copy. `0` and `False` are kept.
    """
    if not isinstance(payload, Mapping):
        return copy(payload)
    return {key: value for key, value in payload.items() if not is_empty_value(value)}


def is_empty_value(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (Mapping, list, tuple, set, frozenset)):
        return len(value) == 0
    return False
