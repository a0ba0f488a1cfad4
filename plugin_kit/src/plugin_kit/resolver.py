"""
Resolution of declared method parameters into typed values.

Precedence per parameter is explicit action value, then stored setting, then the declared
default. The winning value is coerced by the parser registered for the declared type and then
checked by the optional validator. Resolution is all-or-nothing: the first failure raises.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from plugin_kit.contracts import (
    AccountDefinition,
    AccountLookup,
    MethodDefinition,
    MethodLookup,
    ParameterDefinition,
)
from plugin_kit.errors import (
    CoercionError,
    MissingRequiredParameterError,
    ParameterValidationError,
    UnknownMethodError,
    UnresolvedTypeError,
    UnresolvedValidationError,
)
from plugin_kit.normalize import remove_empty_values
from plugin_kit.parsers import ParserRegistry
from plugin_kit.validators import ValidatorRegistry


class ParameterResolver:
    def __init__(
        self,
        methods: MethodLookup,
        account: AccountLookup | None = None,
        *,
        parsers: ParserRegistry | None = None,
        validators: ValidatorRegistry | None = None,
    ) -> None:
        self._methods = methods
        self._account = account
        self._parsers = parsers or ParserRegistry.default()
        self._validators = validators or ValidatorRegistry.default()

    def resolve(self, method_name: str, action_params: Any, settings: Any) -> dict[str, Any]:
        """Resolve the parameters of `method_name` from raw action params and settings."""
        method = self._methods.load_method(method_name)
        if method is None:
            raise UnknownMethodError(method_name)
        account = self._account.load_account() if self._account is not None else None
        return resolve_parameters(
            method,
            account,
            action_params,
            settings,
            parsers=self._parsers,
            validators=self._validators,
        )


def resolve_parameters(
    method: MethodDefinition,
    account: AccountDefinition | None,
    action_values: Any,
    settings_values: Any,
    *,
    parsers: ParserRegistry | None = None,
    validators: ValidatorRegistry | None = None,
) -> dict[str, Any]:
    parsers = parsers or ParserRegistry.default()
    validators = validators or ValidatorRegistry.default()

    params = remove_empty_values(action_values)
    settings = remove_empty_values(settings_values)
    resolved: dict[str, Any] = dict(params) if isinstance(params, Mapping) else {}

    for definition in _iter_definitions(method, account):
        resolved[definition.name] = parse_method_parameter(
            definition,
            _lookup(params, definition.name),
            _lookup(settings, definition.name),
            parsers=parsers,
            validators=validators,
        )

    return remove_empty_values(resolved)


def parse_method_parameter(
    definition: ParameterDefinition,
    param_value: Any,
    settings_value: Any,
    *,
    parsers: ParserRegistry,
    validators: ValidatorRegistry,
) -> Any:
    value = _first_present(param_value, settings_value, definition.default)
    if value is None:
        if definition.required:
            raise MissingRequiredParameterError(definition.name)
        return None

    try:
        parsed = parsers.get(definition.coercion_type)(value)
        if definition.validation_type:
            validators.get(definition.validation_type)(parsed)
    except (
        CoercionError,
        ParameterValidationError,
        UnresolvedTypeError,
        UnresolvedValidationError,
    ) as exc:
        exc.bind_parameter(definition.name)
        raise
    return parsed


def _iter_definitions(
    method: MethodDefinition, account: AccountDefinition | None
) -> Iterable[ParameterDefinition]:
    yield from method.params
    if account is not None:
        yield from account.params


def _first_present(*candidates: Any) -> Any:
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return None


def _lookup(values: Any, name: str) -> Any:
    if isinstance(values, Mapping):
        return values.get(name)
    return None
