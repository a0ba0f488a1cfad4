from __future__ import annotations

import re
from pathlib import Path
from typing import Any

from plugin_kit import PluginConfiguration, bootstrap
from plugin_kit.contracts import AutocompleteContext, InvocationContext
from plugin_kit.docker import (
    build_docker_command,
    create_volume_config,
    extract_environment_variables_from_volume_configs,
    sanitize_command,
)
from plugin_kit.helpers import extract_paths_from_command, temporary_file_sentinel

CONFIG_PATH = Path(__file__).with_name("config.json")

KNOWN_IMAGES = ("alpine:3.20", "busybox:1.36", "python:3.12-slim", "ubuntu:24.04")

_KEY_LABEL = re.compile(r"^-----BEGIN (?P<label>[\w\s]{1,50}) KEY-----")


def run_command(params: dict[str, Any], context: InvocationContext) -> dict[str, Any]:
    volume_configs = [create_volume_config(path) for path in params.get("mountPaths", [])]
    volume_variables = extract_environment_variables_from_volume_configs(volume_configs)
    user_variables = dict(params.get("environmentVariables", {}))

    docker_command = build_docker_command(
        command=sanitize_command(params["command"]),
        image=params["image"],
        environment_variables=[*user_variables, *volume_variables.docker],
        volume_configs=volume_configs,
        working_directory=params.get("workingDirectory"),
        user=params.get("user"),
    )
    return {
        "dockerCommand": docker_command,
        "environment": {**volume_variables.shell, **user_variables},
        "dryRun": params["dryRun"],
    }


def describe_key(params: dict[str, Any], context: InvocationContext) -> dict[str, Any]:
    with temporary_file_sentinel([params["sshKey"]]) as key_path:
        size = key_path.stat().st_size
    match = _KEY_LABEL.match(params["sshKey"])
    return {"label": match.group("label") if match else None, "bytes": size}


def check_command_paths(params: dict[str, Any], context: InvocationContext) -> list[str]:
    return [found.path for found in extract_paths_from_command(params["command"])]


def list_images(query: str, params: dict[str, Any], context: AutocompleteContext) -> list[dict]:
    needle = (query or "").lower()
    return [{"id": image, "value": image} for image in KNOWN_IMAGES if needle in image]


def build_plugin(configuration: PluginConfiguration | None = None) -> dict[str, Any]:
    return bootstrap(
        {
            "runCommand": run_command,
            "describeKey": describe_key,
            "checkCommandPaths": check_command_paths,
        },
        {"listImages": list_images},
        configuration=configuration or PluginConfiguration.from_path(CONFIG_PATH),
    )
