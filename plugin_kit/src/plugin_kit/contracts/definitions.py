from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Raw values arrive from JSON-ish sources: settings documents, CLI-like action params.
RawValue = None | bool | int | float | str | list[Any] | dict[str, Any]


class ParameterDefinition(BaseModel):
    """One declared parameter of a method or of the shared account."""

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    name: str = Field(min_length=1)
    type: str | None = None
    value_type: str | None = Field(default=None, alias="valueType")
    parser_type: str | None = Field(default=None, alias="parserType")
    validation_type: str | None = Field(default=None, alias="validationType")
    required: bool = False
    default: Any = None

    @property
    def coercion_type(self) -> str | None:
        """Identifier used to pick a parser: parserType, then type, then valueType."""
        return self.parser_type or self.type or self.value_type


class MethodDefinition(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True)

    name: str = Field(min_length=1)
    params: tuple[ParameterDefinition, ...] = ()

    @field_validator("params", mode="before")
    @classmethod
    def _coerce_params(cls, value: Any) -> Any:
        return () if value is None else value

    @field_validator("params")
    @classmethod
    def _validate_unique_names(
        cls, value: tuple[ParameterDefinition, ...]
    ) -> tuple[ParameterDefinition, ...]:
        _ensure_unique("parameter", (param.name for param in value))
        return value


class AccountDefinition(BaseModel):
    """Credentials/settings parameters shared by every method of a plugin."""

    model_config = ConfigDict(extra="allow", frozen=True)

    params: tuple[ParameterDefinition, ...] = ()

    @field_validator("params", mode="before")
    @classmethod
    def _coerce_params(cls, value: Any) -> Any:
        return () if value is None else value

    @field_validator("params")
    @classmethod
    def _validate_unique_names(
        cls, value: tuple[ParameterDefinition, ...]
    ) -> tuple[ParameterDefinition, ...]:
        _ensure_unique("parameter", (param.name for param in value))
        return value


class PluginConfig(BaseModel):
    """Root of a plugin configuration document."""

    model_config = ConfigDict(extra="allow", frozen=True)

    methods: tuple[MethodDefinition, ...] = ()
    auth: AccountDefinition | None = None

    @field_validator("methods", mode="before")
    @classmethod
    def _coerce_methods(cls, value: Any) -> Any:
        return () if value is None else value

    @field_validator("methods")
    @classmethod
    def _validate_unique_names(
        cls, value: tuple[MethodDefinition, ...]
    ) -> tuple[MethodDefinition, ...]:
        _ensure_unique("method", (method.name for method in value))
        return value

    def find_method(self, method_name: str) -> MethodDefinition | None:
        for method in self.methods:
            if method.name == method_name:
                return method
        return None


def _ensure_unique(label: str, names: Iterable[str]) -> None:
    duplicates = sorted(name for name, count in Counter(names).items() if count > 1)
    if duplicates:
        raise ValueError(f"duplicate {label} names: {duplicates}")
