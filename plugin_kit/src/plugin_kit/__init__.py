"""Parameter resolution and helper toolkit for workflow-automation plugins."""

from plugin_kit.autocomplete import map_autocomplete_params_to_object
from plugin_kit.bootstrap import OPERATION_FINISHED_SUCCESSFULLY_MESSAGE, bootstrap
from plugin_kit.configuration import PluginConfiguration, load_plugin_config
from plugin_kit.normalize import remove_empty_values
from plugin_kit.parsers import ParserRegistry, resolve_parser
from plugin_kit.resolver import ParameterResolver, resolve_parameters
from plugin_kit.validators import ValidatorRegistry, resolve_validation_function

__all__ = [
    "OPERATION_FINISHED_SUCCESSFULLY_MESSAGE",
    "ParameterResolver",
    "ParserRegistry",
    "PluginConfiguration",
    "ValidatorRegistry",
    "bootstrap",
    "load_plugin_config",
    "map_autocomplete_params_to_object",
    "remove_empty_values",
    "resolve_parameters",
    "resolve_parser",
    "resolve_validation_function",
]
