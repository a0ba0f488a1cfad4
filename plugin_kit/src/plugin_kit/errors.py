from __future__ import annotations

from typing import Any, ClassVar

_UNSET: Any = object()


class PluginKitError(ValueError):
    """
    Base error for parameter resolution.

    `kind` is the stable discriminant hosts should branch on; the message is for humans.
    """

    kind: ClassVar[str] = "plugin_kit"

    def __init__(self, message: str, *, parameter: str | None = None, value: Any = _UNSET) -> None:
        super().__init__(message)
        self.message = message
        self.parameter = parameter
        self._value = value

    @property
    def has_value(self) -> bool:
        return self._value is not _UNSET

    @property
    def value(self) -> Any:
        return None if self._value is _UNSET else self._value

    def bind_parameter(self, name: str) -> PluginKitError:
        """Attach the offending parameter name unless one is already bound."""
        if self.parameter is None:
            self.parameter = name
        return self

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"kind": self.kind, "message": self.message}
        if self.parameter is not None:
            payload["parameter"] = self.parameter
        if self.has_value:
            payload["value"] = self.value
        return payload

    def __str__(self) -> str:
        if self.parameter is None:
            return self.message
        return f'Parameter "{self.parameter}": {self.message}'


class ConfigurationError(PluginKitError):
    kind = "configuration"


class UnknownMethodError(ConfigurationError):
    def __init__(self, method_name: str) -> None:
        super().__init__(f'Could not find a method "{method_name}" in the plugin configuration')
        self.method_name = method_name


class ConfigLoadError(ConfigurationError):
    pass


class MissingRequiredParameterError(PluginKitError):
    kind = "missing_required_parameter"

    def __init__(self, parameter: str) -> None:
        super().__init__(f'Missing required "{parameter}" value', parameter=parameter)


class CoercionError(PluginKitError):
    kind = "coercion"


class InvalidObjectError(CoercionError):
    pass


class InvalidNumberError(CoercionError):
    pass


class InvalidBooleanError(CoercionError):
    pass


class InvalidStringError(CoercionError):
    pass


class UnsupportedArrayFormatError(CoercionError):
    pass


class InvalidAutocompleteError(CoercionError):
    pass


class InvalidKeyValuePairsError(CoercionError):
    pass


class UnresolvedTypeError(PluginKitError):
    kind = "unresolved_type"

    def __init__(self, type_name: str | None) -> None:
        super().__init__(f'Can\'t resolve parser of type "{type_name}"')
        self.type_name = type_name


class UnresolvedValidationError(PluginKitError):
    kind = "unresolved_validation"

    def __init__(self, validation_name: str | None) -> None:
        super().__init__(f"Unrecognized validation type: {validation_name}")
        self.validation_name = validation_name


class ParameterValidationError(PluginKitError):
    kind = "validation"


class MissingLineFeedError(ParameterValidationError):
    pass


class MissingKeyBeginError(ParameterValidationError):
    pass


class MissingKeyEndError(ParameterValidationError):
    pass


class MalformedParameterListError(PluginKitError):
    kind = "malformed_parameter_list"


class InvalidParameterListError(MalformedParameterListError):
    pass


class MissingNameError(MalformedParameterListError):
    pass


class MissingTypeError(MalformedParameterListError):
    pass
