from __future__ import annotations

from typing import Protocol, runtime_checkable

from plugin_kit.contracts.definitions import AccountDefinition, MethodDefinition


@runtime_checkable
class MethodLookup(Protocol):
    def load_method(self, method_name: str) -> MethodDefinition | None:
        """Return the method definition for a name, or None when it is not configured."""
        ...


@runtime_checkable
class AccountLookup(Protocol):
    def load_account(self) -> AccountDefinition | None:
        """Return the shared account definition, or None when the plugin has none."""
        ...
