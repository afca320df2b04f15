"""Config file path resolution from optional (directory, file name) arguments."""

from __future__ import annotations

from typing import NamedTuple

from envconf.errors import InvalidParametersError

DEFAULT_DIR = "."
DEFAULT_FILE = ".env"


class ConfigLocation(NamedTuple):
    directory: str
    filename: str
    path: str


def resolve_config_path(*path: str) -> ConfigLocation:
    """
    Resolve where the config file should be read from.

    No args -> ./.env; one arg -> <dir>/.env; two args -> <dir>/<file>.
    A trailing '/' on the directory is not doubled.

    Raises:
        InvalidParametersError: More than two arguments.
    """
    if len(path) > 2:
        raise InvalidParametersError("invalid set of parameters are provided")
    directory = path[0] if path else DEFAULT_DIR
    filename = path[1] if len(path) == 2 else DEFAULT_FILE
    if directory.endswith("/"):
        return ConfigLocation(directory, filename, f"{directory}{filename}")
    return ConfigLocation(directory, filename, f"{directory}/{filename}")
