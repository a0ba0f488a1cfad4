from __future__ import annotations

import logging
import os
import posixpath
import re
import tempfile
import uuid
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

ENVIRONMENT_VARIABLE_PREFIX = "PLUGIN_KIT_ENV_VAR_"
TEMPORARY_PATH_PREFIX = "plugin_kit_tmp_path_"
# Mount points live inside the container, so they are always POSIX paths.
CONTAINER_TEMPORARY_DIR = "/tmp"

_PATH_START = r"(?:fileb?://|\.{0,2}/|~/)"
_PATH_ARGUMENT_PATTERN = re.compile(
    rf"""
    (?:^|(?<=\s)|(?<==))
    (?P<argument>
        "(?P<double>{_PATH_START}[^"]*)"
      | '(?P<single>{_PATH_START}[^']*)'
      | (?P<bare>{_PATH_START}[^\s"']*)
    )
    """,
    re.VERBOSE,
)
_FILE_URI_PREFIX = re.compile(r"^fileb?://")


@dataclass(frozen=True, slots=True)
class CommandPath:
    """A path argument found in a shell command; `end_index` is inclusive."""

    path: str
    argument: str
    start_index: int
    end_index: int


def extract_paths_from_command(command: str) -> list[CommandPath]:
    if not isinstance(command, str):
        raise TypeError("Command parameter must be a string.")

    paths: list[CommandPath] = []
    for match in _PATH_ARGUMENT_PATTERN.finditer(command):
        raw_path = match.group("double") or match.group("single") or match.group("bare")
        paths.append(
            CommandPath(
                path=_FILE_URI_PREFIX.sub("", raw_path),
                argument=match.group("argument"),
                start_index=match.start("argument"),
                end_index=match.end("argument") - 1,
            )
        )
    return paths


@contextmanager
def temporary_file_sentinel(file_data: Iterable[str] = ()) -> Iterator[Path]:
    """
    Write `file_data` lines to a fresh temporary file and yield its path.

    The file is removed on every exit path, including exceptions raised by the caller.
    """
    fd, raw_path = tempfile.mkstemp(prefix=TEMPORARY_PATH_PREFIX)
    path = Path(raw_path)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write("\n".join(file_data))
        yield path
    finally:
        try:
            path.unlink(missing_ok=True)
        except OSError:
            logger.warning("Failed to remove temporary file %s", path, exc_info=True)


def generate_random_string(length: int = 12) -> str:
    return uuid.uuid4().hex[:length]


def generate_random_environment_variable_name() -> str:
    return f"{ENVIRONMENT_VARIABLE_PREFIX}{generate_random_string().upper()}"


def generate_random_temporary_path() -> str:
    return posixpath.join(CONTAINER_TEMPORARY_DIR, f"{TEMPORARY_PATH_PREFIX}{generate_random_string()}")
