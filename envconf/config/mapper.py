"""
Field mapper: copy environment strings into a settings model's fields.

- Fields are introspected once per model class (describe_fields, cached).
- A field's env key is its pydantic alias, or a plain-string validation_alias.
- Supported kinds: text, integer, float, boolean, timestamp (RFC 3339).
- Fields are processed in declaration order; the first failure aborts the walk
  and fields already assigned keep their new values.
"""

from __future__ import annotations

import math
import re
import types
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Annotated, Any, Callable, Mapping, NamedTuple, Union, get_args, get_origin

import structlog
from pydantic import BaseModel, ValidationError
from pydantic.fields import FieldInfo

from envconf.errors import (
    ConfigValidationError,
    ConversionError,
    FieldNotAssignableError,
    UnsupportedTypeError,
)

logger = structlog.get_logger(__name__)

_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_INF_WORDS = {"inf", "infinity"}
_BOOLS = {
    "1": True, "t": True, "T": True, "TRUE": True, "true": True, "True": True,
    "0": False, "f": False, "F": False, "FALSE": False, "false": False, "False": False,
}
_RFC3339_RE = re.compile(
    r"([0-9]{4})-([0-9]{2})-([0-9]{2})T([0-9]{2}):([0-9]{2}):([0-9]{2})(?:\.([0-9]+))?(Z|([+-])([0-9]{2}):([0-9]{2}))"
)


def parse_int(value: str) -> int:
    """Base-10 signed integer in the 64-bit range; no whitespace or underscores."""
    if not _INT_RE.fullmatch(value):
        raise ValueError(f"invalid syntax {value!r}")
    n = int(value)
    if not _INT64_MIN <= n <= _INT64_MAX:
        raise ValueError(f"value out of range {value!r}")
    return n


def parse_float(value: str) -> float:
    if not value or not value.isascii() or value != value.strip() or "_" in value:
        raise ValueError(f"invalid syntax {value!r}")
    try:
        f = float(value)
    except ValueError:
        raise ValueError(f"invalid syntax {value!r}") from None
    if math.isinf(f) and value.lstrip("+-").lower() not in _INF_WORDS:
        raise ValueError(f"value out of range {value!r}")
    return f


def parse_bool(value: str) -> bool:
    try:
        return _BOOLS[value]
    except KeyError:
        raise ValueError(f"invalid syntax {value!r}") from None


def parse_timestamp(value: str) -> datetime:
    """RFC 3339 timestamp -> aware datetime; sub-microsecond digits are truncated."""
    m = _RFC3339_RE.fullmatch(value)
    if not m:
        raise ValueError(f"cannot parse {value!r} as RFC3339")
    year, month, day, hour, minute, second, frac, zone, sign, off_h, off_m = m.groups()
    if zone == "Z":
        tz = timezone.utc
    else:
        offset = timedelta(hours=int(off_h), minutes=int(off_m))
        tz = timezone(-offset if sign == "-" else offset)
    micro = int((frac or "0")[:6].ljust(6, "0"))
    return datetime(
        int(year), int(month), int(day), int(hour), int(minute), int(second), micro, tzinfo=tz
    )


def _text(value: str) -> str:
    return value


_DECODERS: dict[Any, tuple[str, Callable[[str], Any]]] = {
    str: ("text", _text),
    bool: ("boolean", parse_bool),
    int: ("integer", parse_int),
    float: ("float", parse_float),
    datetime: ("timestamp", parse_timestamp),
}


class FieldDescriptor(NamedTuple):
    name: str
    key: str | None
    kind: str | None
    decoder: Callable[[str], Any] | None
    annotation: Any


def _unwrap(annotation: Any) -> Any:
    """Strip Annotated[...] and Optional[...] down to the concrete type."""
    while True:
        origin = get_origin(annotation)
        if origin is Annotated:
            annotation = get_args(annotation)[0]
            continue
        if origin is Union or origin is types.UnionType:
            args = [a for a in get_args(annotation) if a is not type(None)]
            if len(args) == 1:
                annotation = args[0]
                continue
        return annotation


def env_key(info: FieldInfo) -> str | None:
    if isinstance(info.validation_alias, str):
        return info.validation_alias
    return info.alias or None


@lru_cache(maxsize=None)
def describe_fields(model_cls: type[BaseModel]) -> tuple[FieldDescriptor, ...]:
    """Field descriptors for a model class, in declaration order."""
    out = []
    for name, info in model_cls.model_fields.items():
        concrete = _unwrap(info.annotation)
        kind, decoder = _DECODERS.get(concrete, (None, None))
        out.append(FieldDescriptor(name, env_key(info), kind, decoder, info.annotation))
    return tuple(out)


def ensure_model(target: Any) -> BaseModel:
    """Only pydantic model instances have settable fields."""
    if isinstance(target, type) or not isinstance(target, BaseModel):
        name = target.__name__ if isinstance(target, type) else type(target).__name__
        raise FieldNotAssignableError(
            name, f"target must be a pydantic model instance, got {type(target).__name__}"
        )
    return target


def check_settable(target: BaseModel, field: FieldDescriptor) -> None:
    info = type(target).model_fields[field.name]
    if target.model_config.get("frozen") or info.frozen:
        raise FieldNotAssignableError(field.name)


def assign(target: BaseModel, field: FieldDescriptor, value: Any) -> None:
    """Set one field on the target; frozen models or fields are not settable."""
    check_settable(target, field)
    try:
        setattr(target, field.name, value)
    except ValidationError as e:
        # validate_assignment=True models check constraints on set
        raise ConfigValidationError(type(target).__name__, e.errors()) from e


def map_environ(env: Mapping[str, str], target: BaseModel) -> BaseModel:
    """
    Assign env values onto the tagged fields of target, converting each to its field type.

    Untagged fields and fields whose key is missing from env are left unchanged.

    Raises:
        FieldNotAssignableError: Target model or field is frozen.
        ConversionError: Value cannot be parsed as the field's type.
        UnsupportedTypeError: Field type is outside the supported set.
    """
    ensure_model(target)
    assigned: list[str] = []
    for field in describe_fields(type(target)):
        if not field.key:
            continue
        if field.key not in env:
            continue
        raw = env[field.key]
        check_settable(target, field)
        if field.decoder is None:
            raise UnsupportedTypeError(field.name)
        try:
            value = field.decoder(raw)
        except ValueError as e:
            raise ConversionError(field.key, field.kind, e) from e
        assign(target, field, value)
        assigned.append(field.key)
    logger.info("environ_mapped", model=type(target).__name__, keys=assigned)
    return target
