from __future__ import annotations

import os
import re
from collections.abc import Callable
from typing import Any

from plugin_kit.errors import (
    MissingKeyBeginError,
    MissingKeyEndError,
    MissingLineFeedError,
    ParameterValidationError,
    PluginKitError,
    UnresolvedValidationError,
)
from plugin_kit.registry import NamedRegistry

Validator = Callable[[Any], None]

LOCAL_LINE_FEED = os.linesep

_KEY_BEGIN = re.compile(r"-----BEGIN [\w\s]{1,50} KEY-----\n", re.ASCII)
_KEY_END = re.compile(r"-----END [\w\s]{1,50} KEY-----\n\s*\Z", re.ASCII)


def validate_ssh(ssh_key: Any) -> None:
    """Structural check of a PEM-style private key; raises on the first failed rule."""
    if not isinstance(ssh_key, str):
        raise ParameterValidationError("SSH key must be a string.", value=ssh_key)
    if not ssh_key.endswith(LOCAL_LINE_FEED):
        raise MissingLineFeedError("Missing line feed character at the end of the file.")
    if _KEY_BEGIN.match(ssh_key) is None:
        raise MissingKeyBeginError("Missing key beginning designation.")
    if _KEY_END.search(ssh_key) is None:
        raise MissingKeyEndError("Missing key end designation.")


BUILTIN_VALIDATORS: dict[str, Validator] = {
    "ssh": validate_ssh,
}


class ValidatorRegistry(NamedRegistry[Validator]):
    @classmethod
    def default(cls) -> ValidatorRegistry:
        return cls(BUILTIN_VALIDATORS)

    def _missing(self, name: str | None) -> PluginKitError:
        return UnresolvedValidationError(name)


_DEFAULT_REGISTRY = ValidatorRegistry.default()


def resolve_validation_function(validation_type: str | None) -> Validator:
    return _DEFAULT_REGISTRY.get(validation_type)
