"""Type coercion for raw parameter values, keyed by the declared parameter type."""

from __future__ import annotations

import json
import math
import re
from collections.abc import Callable, Mapping
from typing import Any

from plugin_kit.errors import (
    InvalidAutocompleteError,
    InvalidBooleanError,
    InvalidKeyValuePairsError,
    InvalidNumberError,
    InvalidObjectError,
    InvalidStringError,
    PluginKitError,
    UnresolvedTypeError,
    UnsupportedArrayFormatError,
)
from plugin_kit.registry import NamedRegistry

Parser = Callable[[Any], Any]

_FLOAT_PREFIX = re.compile(
    r"\s*(?P<literal>[+-]?(?:(?P<int>\d+)(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)",
    re.ASCII,
)


def parse_object(value: Any) -> Any:
    if isinstance(value, (Mapping, list, tuple)):
        return value
    if isinstance(value, str):
        try:
            return json.loads(value, parse_constant=_reject_constant)
        except (json.JSONDecodeError, _NonStandardConstant) as e:
            raise InvalidObjectError(
                f"Couldn't parse provided value as object: {value}", value=value
            ) from e
    raise InvalidObjectError(f"{value!r} is not a valid object", value=value)


def parse_number(value: Any) -> int | float:
    if _is_finite_number(value):
        return value
    if isinstance(value, str):
        match = _FLOAT_PREFIX.match(value)
        if match is not None:
            literal = match.group("literal")
            is_integral = match.group("int") is not None and literal.lstrip("+-").isdigit()
            try:
                number = int(literal) if is_integral else float(literal)
            except (ValueError, OverflowError) as e:
                # int() refuses literals past the interpreter's digit limit
                raise InvalidNumberError(
                    f"Value {value!r} is not a valid number", value=value
                ) from e
            if _is_finite_number(number):
                return number
    raise InvalidNumberError(f"Value {value!r} is not a valid number", value=value)


def parse_boolean(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in ("", "false"):
            return False
        if normalized == "true":
            return True
    raise InvalidBooleanError(f"Value {value!r} is not of type boolean", value=value)


def parse_string(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    raise InvalidStringError(f"Value {value!r} is not a valid string", value=value)


def parse_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    raise InvalidStringError(f"Value {value!r} is not a valid text", value=value)


def parse_autocomplete(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping) and "id" in value:
        return value["id"]
    raise InvalidAutocompleteError(
        f"Value {value!r} is not a valid autocomplete result nor string.", value=value
    )


def parse_array(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    if isinstance(value, tuple):
        return list(value)
    if isinstance(value, str):
        return [line.strip() for line in value.split("\n") if line.strip()]
    raise UnsupportedArrayFormatError("Unsupported array format", value=value)


def parse_key_value_pairs(value: Any) -> Mapping[str, Any]:
    if isinstance(value, Mapping):
        return value
    if not isinstance(value, str):
        raise InvalidKeyValuePairsError(
            f"Couldn't parse provided value as key-value pairs: {value!r}", value=value
        )
    pairs: dict[str, str] = {}
    for line in value.split("\n"):
        if not line.strip():
            continue
        key, _, rest = line.partition("=")
        pairs[key] = rest
    return pairs


def _is_finite_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # ints too large for a float
        return False


class _NonStandardConstant(ValueError):
    pass


def _reject_constant(token: str) -> Any:
    # NaN, Infinity and -Infinity are not JSON
    raise _NonStandardConstant(token)


BUILTIN_PARSERS: dict[str, Parser] = {
    "object": parse_object,
    "int": parse_number,
    "float": parse_number,
    "number": parse_number,
    "boolean": parse_boolean,
    "vault": parse_string,
    "options": parse_string,
    "string": parse_string,
    "sshKey": parse_string,
    "text": parse_text,
    "autocomplete": parse_autocomplete,
    "array": parse_array,
    "keyValuePairs": parse_key_value_pairs,
}


class ParserRegistry(NamedRegistry[Parser]):
    @classmethod
    def default(cls) -> ParserRegistry:
        return cls(BUILTIN_PARSERS)

    def _missing(self, name: str | None) -> PluginKitError:
        return UnresolvedTypeError(name)


_DEFAULT_REGISTRY = ParserRegistry.default()


def resolve_parser(type_name: str | None) -> Parser:
    """Return the built-in parser for a declared type or raise UnresolvedTypeError."""
    return _DEFAULT_REGISTRY.get(type_name)
