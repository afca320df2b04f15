"""Configuration load errors. Every failure the loader can raise derives from ConfigError."""

from __future__ import annotations

from typing import Any


class ConfigError(Exception):
    """Base error; `stage` names the load step that failed."""

    stage = "config"


class InvalidParametersError(ConfigError):
    stage = "arguments"


class ConfigFileAccessError(ConfigError):
    """Config file exists (or may exist) but could not be inspected, e.g. permission denied."""

    stage = "stat"

    def __init__(self, path: str, cause: OSError) -> None:
        super().__init__(f"cannot access config file {path}: {cause}")
        self.path = path


class UnsupportedConfigTypeError(ConfigError):
    stage = "file"

    def __init__(self, path: str, config_type: str) -> None:
        super().__init__(f"unsupported config type {config_type!r} for file {path}")
        self.path = path
        self.config_type = config_type


class FileLoadError(ConfigError):
    stage = "file"

    def __init__(self, path: str, cause: Exception) -> None:
        super().__init__(f"failed to read config file {path}: {cause}")
        self.path = path


class UnmarshalError(ConfigError):
    stage = "unmarshal"

    def __init__(self, key: str, cause: Exception) -> None:
        super().__init__(f"failed to unmarshal {key}: {cause}")
        self.key = key


class MalformedEnvironmentError(ConfigError):
    """An environment entry has no '=' separator."""

    stage = "environ"

    def __init__(self, entry: str) -> None:
        super().__init__(f"malformed environment entry {entry!r}: missing '='")
        self.entry = entry


class FieldNotAssignableError(ConfigError):
    stage = "mapping"

    def __init__(self, field: str, detail: str | None = None) -> None:
        super().__init__(f"field {field} is not settable" + (f": {detail}" if detail else ""))
        self.field = field


class ConversionError(ConfigError):
    stage = "mapping"

    def __init__(self, key: str, kind: str, cause: Exception) -> None:
        super().__init__(f"failed to parse {key} as {kind}: {cause}")
        self.key = key
        self.kind = kind


class UnsupportedTypeError(ConfigError):
    stage = "mapping"

    def __init__(self, field: str) -> None:
        super().__init__(f"unsupported type for field {field}")
        self.field = field


class ConfigValidationError(ConfigError):
    """Populated settings violate their declared constraints; `errors` is pydantic's error list."""

    stage = "validation"

    def __init__(self, model: str, errors: list[dict[str, Any]]) -> None:
        locs = ", ".join(".".join(str(p) for p in e.get("loc", ())) or model for e in errors)
        super().__init__(f"{model} failed validation ({len(errors)} error(s)): {locs}")
        self.model = model
        self.errors = errors
