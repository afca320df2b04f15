"""
Config file loading: read .env / YAML / JSON files and unmarshal them onto a settings model.

- Config type comes from the file extension (.env, .dotenv, .yaml, .yml, .json).
- Keys are matched to fields case-insensitively by alias, falling back to field name.
- Values are coerced leniently with pydantic (e.g. "8080" -> 8080); constraints are
  left to validation.
"""

import json
import os
from pathlib import Path
from typing import Any

import structlog
import yaml
from dotenv import dotenv_values
from pydantic import BaseModel, TypeAdapter, ValidationError

from envconf.config.mapper import assign, describe_fields, ensure_model
from envconf.errors import FileLoadError, UnmarshalError, UnsupportedConfigTypeError

logger = structlog.get_logger(__name__)

_ADAPTERS: dict[Any, TypeAdapter] = {}


def config_type(path: str) -> str:
    """Extension without the dot, lowercased; '.env' -> 'env', 'custom' -> ''."""
    name = os.path.basename(path)
    if name.startswith(".") and name.count(".") == 1:
        return name[1:].lower()
    return os.path.splitext(name)[1].lstrip(".").lower()


def _read_dotenv(path: Path) -> dict[str, Any]:
    return {k: v for k, v in dotenv_values(path).items() if v is not None}


def _read_yaml(path: Path) -> dict[str, Any]:
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"top-level YAML value must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"top-level JSON value must be an object, got {type(data).__name__}")
    return data


_READERS = {
    "env": _read_dotenv,
    "dotenv": _read_dotenv,
    "yaml": _read_yaml,
    "yml": _read_yaml,
    "json": _read_json,
}


def read_config_file(path: str) -> dict[str, Any]:
    """
    Parse a config file into a flat key -> value dict.

    Raises:
        UnsupportedConfigTypeError: Extension is not a known config type.
        FileLoadError: File cannot be read or parsed.
    """
    kind = config_type(path)
    reader = _READERS.get(kind)
    if reader is None:
        raise UnsupportedConfigTypeError(path, kind)
    try:
        return reader(Path(path))
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise FileLoadError(path, e) from e


def _adapter(annotation: Any) -> TypeAdapter:
    adapter = _ADAPTERS.get(annotation)
    if adapter is None:
        adapter = TypeAdapter(annotation)
        _ADAPTERS[annotation] = adapter
    return adapter


def unmarshal(values: dict[str, Any], target: BaseModel, case_sensitive: bool = False) -> BaseModel:
    """
    Assign file values onto target's fields; unmatched fields keep their values.

    Raises:
        UnmarshalError: A value cannot be coerced to its field's type.
        FieldNotAssignableError: Target model or field is frozen.
    """
    ensure_model(target)
    lookup = values if case_sensitive else {str(k).lower(): v for k, v in values.items()}
    for field in describe_fields(type(target)):
        key = field.key or field.name
        wanted = key if case_sensitive else key.lower()
        if wanted not in lookup:
            continue
        raw = lookup[wanted]
        if field.kind == "text" and isinstance(raw, (int, float)) and not isinstance(raw, bool):
            raw = str(raw)
        try:
            value = _adapter(field.annotation).validate_python(raw)
        except ValidationError as e:
            raise UnmarshalError(key, e) from e
        assign(target, field, value)
    return target


def load_file(path: str, target: BaseModel, case_sensitive: bool = False) -> BaseModel:
    """Read the config file at path and unmarshal it onto target."""
    values = read_config_file(path)
    unmarshal(values, target, case_sensitive=case_sensitive)
    logger.info("config_file_loaded", path=path, keys=len(values))
    return target
