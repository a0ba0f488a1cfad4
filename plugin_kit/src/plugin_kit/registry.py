from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Generic, TypeVar

from plugin_kit.errors import PluginKitError

EntryT = TypeVar("EntryT", bound=Callable)


class NamedRegistry(Generic[EntryT]):
    """
    Mapping from a configuration identifier to a callable.

    Lookups fail closed: unknown identifiers raise the error built by `_missing`.
    """

    def __init__(self, entries: Mapping[str, EntryT] | None = None) -> None:
        self._entries: dict[str, EntryT] = {}
        for name, entry in (entries or {}).items():
            self.register(name, entry)

    def register(self, name: str, entry: EntryT, *, replace: bool = False) -> None:
        if not name:
            raise ValueError("Registry names must be non-empty strings")
        if name in self._entries and not replace:
            raise ValueError(f"'{name}' is already registered")
        self._entries[name] = entry

    def get(self, name: str | None) -> EntryT:
        try:
            return self._entries[name]  # type: ignore[index]
        except (KeyError, TypeError) as e:
            raise self._missing(name) from e

    def names(self) -> Iterable[str]:
        return sorted(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def _missing(self, name: str | None) -> PluginKitError:
        return PluginKitError(f"Nothing registered under '{name}'")
