"""JSON encoding/decoding and the ISO-8601 date strategy."""

from __future__ import annotations

import dataclasses
import json
import logging
from datetime import datetime, timezone
from enum import Enum
from functools import lru_cache
from typing import Annotated, Any, Optional, TypeVar, get_args, get_origin, get_type_hints, is_typeddict

from pydantic import BaseModel, PlainSerializer, PlainValidator, TypeAdapter, ValidationError

from .errors import DecodingError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Tried in order: fractional seconds first, then whole seconds
_FRACTIONAL_SECONDS_FORMAT = "%Y-%m-%dT%H:%M:%S.%f%z"
_WHOLE_SECONDS_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def parse_iso8601(value: str) -> datetime:
    """
    Parse an ISO-8601 internet timestamp with or without fractional seconds.

    A timezone designator (``Z`` or a numeric offset) is required.

    Examples:
        >>> parse_iso8601("2024-12-01T14:45:30.123Z").microsecond
        123000
        >>> parse_iso8601("2024-06-15T10:30:00Z").second
        0

    Raises:
        ValueError: If the string matches neither form
    """
    for fmt in (_FRACTIONAL_SECONDS_FORMAT, _WHOLE_SECONDS_FORMAT):
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    raise ValueError(f"Invalid ISO8601 date: {value}")


def format_iso8601(value: datetime) -> str:
    """
    Format a datetime as ISO-8601 with millisecond precision in UTC.

    Naive datetimes are taken to be UTC already.

    Example:
        2024-01-01T12:34:56.789Z
    """
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return f"{value.strftime('%Y-%m-%dT%H:%M:%S')}.{value.microsecond // 1000:03d}Z"


def _coerce_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        return parse_iso8601(value)
    raise ValueError(f"Expected an ISO8601 string, got {type(value).__name__}")


IsoDateTime = Annotated[
    datetime,
    PlainValidator(_coerce_datetime),
    PlainSerializer(format_iso8601, return_type=str, when_used="json"),
]
"""
Datetime field type that decodes and encodes with the ISO-8601 strategy.

JsonDecoder refuses shapes with plain ``datetime`` fields, so every decoded
date goes through :func:`parse_iso8601`.
"""


def _is_iso_marker(metadata: Any) -> bool:
    return isinstance(metadata, PlainValidator) and metadata.func is _coerce_datetime


def _find_plain_datetime(shape: Any, location: str, seen: set) -> Optional[str]:
    """Return where ``shape`` declares a datetime without IsoDateTime, if anywhere."""
    if get_origin(shape) is Annotated:
        base, *metadata = get_args(shape)
        if any(_is_iso_marker(m) for m in metadata):
            return None
        return _find_plain_datetime(base, location, seen)

    if isinstance(shape, type) and get_origin(shape) is None:
        if issubclass(shape, datetime):
            return location
        if shape in seen:
            return None
        if issubclass(shape, BaseModel):
            seen.add(shape)
            for name, info in shape.model_fields.items():
                if any(_is_iso_marker(m) for m in info.metadata):
                    continue
                found = _find_plain_datetime(info.annotation, f"{shape.__name__}.{name}", seen)
                if found:
                    return found
            return None
        if dataclasses.is_dataclass(shape) or is_typeddict(shape):
            seen.add(shape)
            hints = get_type_hints(shape, include_extras=True)
            for name, hint in hints.items():
                found = _find_plain_datetime(hint, f"{shape.__name__}.{name}", seen)
                if found:
                    return found
            return None

    for arg in get_args(shape):
        found = _find_plain_datetime(arg, location, seen)
        if found:
            return found
    return None


@lru_cache(maxsize=128)
def _type_adapter(shape: Any) -> TypeAdapter:
    location = _find_plain_datetime(shape, _shape_name(shape), set())
    if location is not None:
        raise TypeError(f"{location} is a plain datetime; declare it as IsoDateTime")
    return TypeAdapter(shape)


def _shape_name(shape: Any) -> str:
    return getattr(shape, "__name__", None) or str(shape)


class JsonDecoder:
    """
    Decodes response bytes into typed models.

    Any shape pydantic can validate works as a model: BaseModel subclasses,
    dataclasses, TypedDicts and plain builtins. Date fields must be declared
    as :data:`IsoDateTime`; a shape with a plain ``datetime`` raises
    TypeError.

    Example:
        decoder = JsonDecoder()
        post = decoder.decode(b'{"id": 1, ...}', Post)
        posts = decoder.decode_many(b'[...]', Post)
    """

    def __init__(self, strict: bool = False) -> None:
        """
        Initialize the decoder.

        Args:
            strict: Disable pydantic's type coercion (e.g. "1" -> 1)
        """
        self.strict = strict

    def decode(self, data: bytes, model: type[T]) -> T:
        """Decode a single JSON value of shape ``model``."""
        return self._validate(data, model)

    def decode_many(self, data: bytes, model: type[T]) -> list[T]:
        """Decode a JSON array whose items have shape ``model``."""
        return self._validate(data, list[model])  # type: ignore[valid-type]

    def _validate(self, data: bytes, shape: Any) -> Any:
        adapter = _type_adapter(shape)
        try:
            return adapter.validate_json(data, strict=self.strict)
        except ValidationError as err:
            logger.debug(f"Failed to decode {_shape_name(shape)}: {err}")
            raise DecodingError(f"Could not decode {_shape_name(shape)}: {err}", cause=err) from err


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return format_iso8601(value)
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def encode_json(value: Any) -> bytes:
    """
    Serialize a request body to compact UTF-8 JSON.

    Datetimes are written with :func:`format_iso8601`, pydantic models are
    dumped in JSON mode and enums by value.

    Raises:
        TypeError: If a value has no JSON representation
    """
    return json.dumps(value, default=_json_default, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
