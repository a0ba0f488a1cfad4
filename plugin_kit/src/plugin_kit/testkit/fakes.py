from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from plugin_kit.configuration import parse_plugin_config
from plugin_kit.contracts import AccountDefinition, MethodDefinition, PluginConfig


@dataclass(frozen=True, slots=True)
class LookupCall:
    """Record of a lookup call for assertions in tests."""

    name: str
    args: tuple[Any, ...]


class RecordingConfiguration:
    """
    In-memory method/account lookup for unit tests.
    """

    def __init__(self, config: PluginConfig | Mapping[str, Any]) -> None:
        if isinstance(config, PluginConfig):
            self._config = config
        else:
            self._config = parse_plugin_config(config)
        self._calls: list[LookupCall] = []

    @property
    def calls(self) -> list[LookupCall]:
        """Return the recorded calls in order."""
        return list(self._calls)

    def load_method(self, method_name: str) -> MethodDefinition | None:
        self._calls.append(LookupCall(name="load_method", args=(method_name,)))
        return self._config.find_method(method_name)

    def load_account(self) -> AccountDefinition | None:
        self._calls.append(LookupCall(name="load_account", args=()))
        return self._config.auth
