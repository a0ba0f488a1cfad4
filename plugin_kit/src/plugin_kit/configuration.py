from __future__ import annotations

import json
import logging
import os
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from plugin_kit.contracts import AccountDefinition, MethodDefinition, PluginConfig
from plugin_kit.errors import ConfigLoadError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.json"
_ENV_CONFIG_PATH = "PLUGIN_KIT_CONFIG"
_YAML_SUFFIXES = {".yml", ".yaml"}


def load_document(path: str | Path) -> dict[str, Any]:
    """Read a JSON or YAML configuration document whose root must be a mapping."""
    source = Path(path)
    try:
        with source.open("r", encoding="utf-8") as handle:
            if source.suffix.lower() in _YAML_SUFFIXES:
                payload = yaml.safe_load(handle) or {}
            else:
                payload = json.load(handle)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as exc:
        logger.error("Failed to read plugin configuration %s", source, exc_info=True)
        raise ConfigLoadError(f"Could not retrieve the plugin configuration: {source}") from exc
    if not isinstance(payload, dict):
        raise ConfigLoadError(f"Configuration root must be a mapping: {source}")
    return payload


def load_plugin_config(path: str | Path) -> PluginConfig:
    return parse_plugin_config(load_document(path), source=str(path))


def parse_plugin_config(payload: Mapping[str, Any], *, source: str = "<mapping>") -> PluginConfig:
    try:
        return PluginConfig.model_validate(dict(payload))
    except ValidationError as exc:
        logger.error("Invalid plugin configuration %s", source)
        raise ConfigLoadError(_format_validation_error("config", exc)) from exc


def resolve_config_path(plugin_module_path: str | Path | None = None) -> Path:
    """Locate the plugin's configuration document."""
    candidates: list[Path] = []

    env_value = os.environ.get(_ENV_CONFIG_PATH)
    if env_value:
        candidates.append(Path(env_value).expanduser())

    if plugin_module_path is not None:
        candidates.append(Path(plugin_module_path).resolve().parent / CONFIG_FILENAME)
    if len(sys.argv) > 1 and sys.argv[1]:
        candidates.append(Path(sys.argv[1]).resolve().parent / CONFIG_FILENAME)

    candidates.append(Path.cwd() / CONFIG_FILENAME)

    for candidate in candidates:
        if candidate.is_file():
            logger.debug("Using plugin configuration %s", candidate)
            return candidate

    searched = ", ".join(str(candidate) for candidate in candidates)
    raise ConfigLoadError(f"Could not find the plugin configuration (searched: {searched})")


class PluginConfiguration:
    """
    Method and account lookup backed by a parsed configuration document.
    """

    def __init__(self, config: PluginConfig) -> None:
        self._config = config

    @classmethod
    def from_path(cls, path: str | Path) -> PluginConfiguration:
        return cls(load_plugin_config(path))

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> PluginConfiguration:
        return cls(parse_plugin_config(payload))

    @classmethod
    def discover(cls, plugin_module_path: str | Path | None = None) -> PluginConfiguration:
        return cls.from_path(resolve_config_path(plugin_module_path))

    @property
    def config(self) -> PluginConfig:
        return self._config

    def load_method(self, method_name: str) -> MethodDefinition | None:
        return self._config.find_method(method_name)

    def load_account(self) -> AccountDefinition | None:
        return self._config.auth

    def method_names(self) -> list[str]:
        return [method.name for method in self._config.methods]


def _format_validation_error(prefix: str, exc: ValidationError) -> str:
    details: list[str] = []
    for error in exc.errors(include_url=False):
        loc = ".".join(str(part) for part in error["loc"])
        details.append(f"{prefix}.{loc}: {error['msg']}")
    return "; ".join(details)
