from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class InvocationContext:
    """
    Raw inputs of a plugin method invocation, handed to the method next to its resolved params.

    Keep this stable: plugin methods should only depend on these fields.
    """

    action: Mapping[str, Any]
    settings: Mapping[str, Any] = field(default_factory=dict)

    @property
    def method_name(self) -> str:
        return str(self.action["method"]["name"])


@dataclass(frozen=True, slots=True)
class AutocompleteContext:
    """Raw parameter lists an autocomplete query was issued with."""

    plugin_settings: Sequence[Mapping[str, Any]] = field(default_factory=list)
    action_params: Sequence[Mapping[str, Any]] = field(default_factory=list)
