from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from plugin_kit.autocomplete import map_autocomplete_params_to_object
from plugin_kit.configuration import PluginConfiguration
from plugin_kit.contracts import AutocompleteContext, InvocationContext
from plugin_kit.normalize import is_empty_value
from plugin_kit.resolver import ParameterResolver

OPERATION_FINISHED_SUCCESSFULLY_MESSAGE = "Operation finished successfully!"

PluginMethod = Callable[[dict[str, Any], InvocationContext], Any]
AutocompleteFunction = Callable[[str, dict[str, Any], AutocompleteContext], Any]

logger = logging.getLogger(__name__)


class _LazyConfiguration:
    """Discovers the configuration document on first use and keeps it for later calls."""

    def __init__(self, configuration: PluginConfiguration | None) -> None:
        self._configuration = configuration

    def get(self) -> PluginConfiguration:
        if self._configuration is None:
            self._configuration = PluginConfiguration.discover()
        return self._configuration


def bootstrap(
    plugin_methods: Mapping[str, PluginMethod],
    autocomplete_functions: Mapping[str, AutocompleteFunction] | None = None,
    *,
    configuration: PluginConfiguration | None = None,
) -> dict[str, Callable[..., Any]]:
    """
    Wrap plugin methods and autocomplete functions into the callables the host invokes.

    Methods become `wrapper(action, settings)`; autocomplete functions become
    `wrapper(query, plugin_settings, action_params)`.
    """
    autocomplete_functions = autocomplete_functions or {}
    collisions = sorted(set(plugin_methods) & set(autocomplete_functions))
    if collisions:
        raise ValueError(f"Names used by both methods and autocomplete functions: {collisions}")

    lazy_configuration = _LazyConfiguration(configuration)
    wrapped: dict[str, Callable[..., Any]] = {}
    for method_name, method in plugin_methods.items():
        wrapped[method_name] = generate_plugin_method(method, lazy_configuration.get)
    for function_name, function in autocomplete_functions.items():
        wrapped[function_name] = generate_autocomplete_function(function)
    return wrapped


def generate_plugin_method(
    method: PluginMethod,
    configuration: Callable[[], PluginConfiguration],
) -> Callable[[Mapping[str, Any], Mapping[str, Any] | None], Any]:
    def run_method(action: Mapping[str, Any], settings: Mapping[str, Any] | None = None) -> Any:
        settings = settings or {}
        method_name = action["method"]["name"]
        plugin_configuration = configuration()
        resolver = ParameterResolver(plugin_configuration, plugin_configuration)
        parameters = resolver.resolve(method_name, action.get("params"), settings)

        logger.debug("Invoking plugin method %s", method_name)
        try:
            result = method(parameters, InvocationContext(action=action, settings=settings))
        except Exception:
            logger.warning("Plugin method %s failed", method_name, exc_info=True)
            raise

        if is_empty_value(result):
            return OPERATION_FINISHED_SUCCESSFULLY_MESSAGE
        return result

    run_method.__name__ = getattr(method, "__name__", "run_method")
    run_method.__doc__ = getattr(method, "__doc__", None)
    return run_method


def generate_autocomplete_function(
    function: AutocompleteFunction,
) -> Callable[[str, Sequence[Mapping[str, Any]], Sequence[Mapping[str, Any]]], Any]:
    def run_autocomplete(
        query: str,
        plugin_settings: Sequence[Mapping[str, Any]],
        action_params: Sequence[Mapping[str, Any]],
    ) -> Any:
        params = map_autocomplete_params_to_object(action_params)
        settings = map_autocomplete_params_to_object(plugin_settings)
        for key, value in settings.items():
            if is_empty_value(params.get(key)):
                params[key] = value

        context = AutocompleteContext(plugin_settings=plugin_settings, action_params=action_params)
        return function(query, params, context)

    run_autocomplete.__name__ = getattr(function, "__name__", "run_autocomplete")
    run_autocomplete.__doc__ = getattr(function, "__doc__", None)
    return run_autocomplete
