"""
Helpers for assembling `docker run` command lines.

Host paths are never interpolated into the command: each mounted path travels through a
random environment variable, and the container side gets a random mount point under /tmp.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from plugin_kit.helpers import (
    generate_random_environment_variable_name,
    generate_random_temporary_path,
)

VolumeConfig = dict[str, Any]

_VOLUME_CONFIGS_ERROR = "Volume Configs parameter must be a list of mappings."


@dataclass(frozen=True, slots=True)
class VolumeEnvironmentVariables:
    # Only the mount point variables are passed to `docker run -e`.
    docker: Mapping[str, str] = field(default_factory=dict)
    # The shell running `docker` also needs the host path variables.
    shell: Mapping[str, str] = field(default_factory=dict)


def create_volume_config(path: str) -> VolumeConfig:
    if path is None or path == "":
        raise ValueError("Path is required to create Volume Config.")
    if not isinstance(path, str):
        raise TypeError("Path parameter must be a string.")

    path_variable = generate_random_environment_variable_name()
    mount_point_variable = generate_random_environment_variable_name()
    mount_point = generate_random_temporary_path()

    return {
        "path": {
            "environmentVariable": {"name": path_variable, "value": path},
            "value": f"${path_variable}",
        },
        "mountPoint": {
            "environmentVariable": {"name": mount_point_variable, "value": mount_point},
            "value": f"${mount_point_variable}",
        },
    }


def sanitize_command(command: str, command_prefix: str | None = None) -> str:
    """Wrap a command in `sh -c "<json-escaped command>"`, prepending `command_prefix` once."""
    if not command or not isinstance(command, str):
        raise TypeError("Command parameter must be a string.")

    prefixed = command
    if command_prefix and not command.startswith(f"{command_prefix} "):
        prefixed = f"{command_prefix} {command}"
    return f"sh -c {json.dumps(prefixed, ensure_ascii=False)}"


def extract_environment_variables_from_volume_configs(
    volume_configs: Sequence[Mapping[str, Any]],
) -> VolumeEnvironmentVariables:
    _ensure_volume_config_list(volume_configs)

    docker_variables: dict[str, str] = {}
    for volume_config in volume_configs:
        assert_volume_config_properties(
            volume_config,
            ["mountPoint.environmentVariable.name", "mountPoint.environmentVariable.value"],
        )
        variable = volume_config["mountPoint"]["environmentVariable"]
        docker_variables[variable["name"]] = variable["value"]

    shell_variables = dict(docker_variables)
    for volume_config in volume_configs:
        assert_volume_config_properties(
            volume_config,
            ["path.environmentVariable.name", "path.environmentVariable.value"],
        )
        variable = volume_config["path"]["environmentVariable"]
        shell_variables[variable["name"]] = variable["value"]

    return VolumeEnvironmentVariables(docker=docker_variables, shell=shell_variables)


def build_docker_command(
    *,
    command: str,
    image: str,
    environment_variables: Iterable[str] = (),
    volume_configs: Sequence[Mapping[str, Any]] = (),
    additional_arguments: Sequence[str] | None = (),
    working_directory: str | None = None,
    user: str | None = None,
) -> str:
    if not image:
        raise ValueError("No Docker image provided.")
    if not command:
        raise ValueError("No command provided for Docker container.")
    additional_arguments = additional_arguments or ()
    if isinstance(additional_arguments, str) or not all(
        isinstance(argument, str) for argument in additional_arguments
    ):
        raise TypeError("Additional Arguments must be a list of strings.")

    arguments = ["docker", "run", "--rm"]
    arguments.extend(build_environment_variable_arguments(environment_variables))
    arguments.extend(build_mount_volume_arguments(volume_configs))
    arguments.extend(additional_arguments)
    if user:
        arguments.extend(["--user", user])
    if working_directory:
        arguments.extend(["-w", working_directory])
    arguments.extend([image, command])
    return " ".join(arguments)


def build_environment_variable_arguments(environment_variable_names: Iterable[str]) -> list[str]:
    if environment_variable_names is None or isinstance(environment_variable_names, (str, Mapping)):
        raise TypeError("Environment Variable Names parameter must be a list of strings.")
    names = list(environment_variable_names)
    if not all(isinstance(name, str) for name in names):
        raise TypeError("Environment Variable Names parameter must be a list of strings.")

    arguments: list[str] = []
    for name in names:
        arguments.extend(["-e", name])
    return arguments


def build_mount_volume_arguments(volume_configs: Sequence[Mapping[str, Any]]) -> list[str]:
    _ensure_volume_config_list(volume_configs)

    arguments: list[str] = []
    for volume_config in volume_configs:
        assert_volume_config_properties(volume_config, ["path.value", "mountPoint.value"])
        arguments.extend(
            ["-v", f"{volume_config['path']['value']}:{volume_config['mountPoint']['value']}"]
        )
    return arguments


def assert_volume_config_properties(
    volume_config: Mapping[str, Any], property_paths: Iterable[str]
) -> None:
    for property_path in property_paths:
        if not _has_dotpath(volume_config, property_path):
            raise ValueError(
                f'Volume Config property "{property_path}" is missing on: '
                f"{json.dumps(volume_config, default=str)}"
            )


def _has_dotpath(payload: Any, path: str) -> bool:
    cursor = payload
    for part in path.split("."):
        if not isinstance(cursor, Mapping) or part not in cursor:
            return False
        cursor = cursor[part]
    return True


def _ensure_volume_config_list(volume_configs: Any) -> None:
    if not isinstance(volume_configs, (list, tuple)):
        raise TypeError(_VOLUME_CONFIGS_ERROR)
