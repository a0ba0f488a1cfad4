from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from plugin_kit.errors import (
    CoercionError,
    InvalidParameterListError,
    MissingNameError,
    MissingTypeError,
    UnresolvedTypeError,
)
from plugin_kit.parsers import ParserRegistry


def map_autocomplete_params_to_object(
    params: Any, *, parsers: ParserRegistry | None = None
) -> dict[str, Any]:
    """
    Flatten an autocomplete parameter list (`[{name, type|valueType, value}, ...]`) to a mapping.

    Entries without a value are skipped; no defaults, requirements or validation apply here.
    Later duplicates overwrite earlier entries.
    """
    if not isinstance(params, (list, tuple)):
        raise InvalidParameterListError(
            "Failed to map autocomplete parameters to object - params provided are not a list",
            value=params,
        )
    if not all(isinstance(entry, Mapping) for entry in params):
        raise InvalidParameterListError(
            "Failed to map autocomplete parameters to object - "
            "every item of params list needs to be a mapping",
            value=params,
        )

    registry = parsers or ParserRegistry.default()
    mapped: dict[str, Any] = {}
    for entry in params:
        name = entry.get("name")
        if name is None:
            raise MissingNameError(
                "Failed to map one of autocomplete parameters to object - "
                "`name` field is required",
                value=dict(entry),
            )
        type_name = entry.get("type") or entry.get("valueType")
        if type_name is None:
            raise MissingTypeError(
                "Failed to map one of autocomplete parameters to object - "
                "either `type` or `valueType` field is required",
                parameter=name,
                value=dict(entry),
            )

        value = entry.get("value")
        if value is None:
            continue

        try:
            mapped[name] = registry.get(type_name)(value)
        except (CoercionError, UnresolvedTypeError) as exc:
            exc.bind_parameter(name)
            raise
    return mapped
