"""
Config loader: resolve the config file path, populate a settings model, validate it.

- If the resolved file exists it is parsed and unmarshalled onto the model.
- Otherwise the process environment is mapped onto the model's tagged fields.
- Either way the populated model is validated against its pydantic constraints.
- load() raises ConfigError subclasses; load_or_exit() is the entry-point helper
  that reports the error and exits.
"""

import os
from typing import Callable, Mapping, NoReturn, TypeVar

import structlog
from pydantic import BaseModel, ValidationError

from envconf.config.environ import environ as build_environ
from envconf.config.files import load_file
from envconf.config.mapper import ensure_model, map_environ
from envconf.config.paths import resolve_config_path
from envconf.errors import ConfigError, ConfigFileAccessError, ConfigValidationError

logger = structlog.get_logger(__name__)

T = TypeVar("T", bound=BaseModel)

Reporter = Callable[[ConfigError], None]


def validate(target: T) -> T:
    """
    Check target against its model's declared constraints (does not modify target).

    Raises:
        ConfigValidationError: Any constraint or validator fails.
    """
    model_cls = type(target)
    data = dict(target.model_extra or {})
    for name in model_cls.model_fields:
        # required fields left unset by model_construct() are reported as missing
        if name in target.__dict__:
            data[name] = target.__dict__[name]
    try:
        model_cls.model_validate(data, by_alias=True, by_name=True)
    except ValidationError as e:
        raise ConfigValidationError(model_cls.__name__, e.errors()) from e
    logger.info("config_validated", model=model_cls.__name__)
    return target


def load(
    target: T,
    *path: str,
    environ: Mapping[str, str] | None = None,
    case_sensitive: bool = False,
) -> T:
    """
    Populate target from a config file or, when the file is missing, from the environment.

    Args:
        target: Settings model instance; mutated in place.
        *path: Optional directory and file name (default ./.env).
        environ: Env map to use instead of the live process environment.
        case_sensitive: Match config file keys case-sensitively.

    Returns:
        The same target, populated and validated.

    Raises:
        ConfigError: Any resolution, read, conversion or validation failure.
    """
    ensure_model(target)
    location = resolve_config_path(*path)
    logger.info("config_path_resolved", path=location.path)
    try:
        os.stat(location.path)
    except FileNotFoundError:
        logger.info("config_file_missing", path=location.path, fallback="environ")
        env = dict(environ) if environ is not None else build_environ()
        map_environ(env, target)
    except OSError as e:
        raise ConfigFileAccessError(location.path, e) from e
    else:
        load_file(location.path, target, case_sensitive=case_sensitive)
    return validate(target)


def report_fatal(err: ConfigError) -> NoReturn:
    """Log the failed stage and cause, then exit with status 1."""
    logger.error(
        "config_load_failed",
        stage=err.stage,
        error=str(err),
        error_type=type(err).__name__,
        cause=repr(err.__cause__) if err.__cause__ else None,
    )
    raise SystemExit(1)


def load_or_exit(
    target: T,
    *path: str,
    environ: Mapping[str, str] | None = None,
    case_sensitive: bool = False,
    reporter: Reporter = report_fatal,
) -> T:
    """
    load() for program entry points: any ConfigError goes to reporter.

    The default reporter logs and exits; a custom reporter that returns lets
    the caller continue with whatever was populated.
    """
    try:
        return load(target, *path, environ=environ, case_sensitive=case_sensitive)
    except ConfigError as e:
        reporter(e)
    return target
