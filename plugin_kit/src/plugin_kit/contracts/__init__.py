from .context import AutocompleteContext, InvocationContext
from .definitions import (
    AccountDefinition,
    MethodDefinition,
    ParameterDefinition,
    PluginConfig,
    RawValue,
)
from .lookup import AccountLookup, MethodLookup

__all__ = [
    "AccountDefinition",
    "AccountLookup",
    "AutocompleteContext",
    "InvocationContext",
    "MethodDefinition",
    "MethodLookup",
    "ParameterDefinition",
    "PluginConfig",
    "RawValue",
]
