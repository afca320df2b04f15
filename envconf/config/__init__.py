"""Configuration loading: path resolution, env/file population, validation."""

from envconf.config.environ import environ
from envconf.config.loader import load, load_or_exit, report_fatal, validate
from envconf.config.mapper import FieldDescriptor, describe_fields, map_environ
from envconf.config.paths import ConfigLocation, resolve_config_path
from envconf.config.schemas import EnvSettings

__all__ = [
    "ConfigLocation",
    "EnvSettings",
    "FieldDescriptor",
    "describe_fields",
    "environ",
    "load",
    "load_or_exit",
    "map_environ",
    "report_fatal",
    "resolve_config_path",
    "validate",
]
