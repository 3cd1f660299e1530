"""Where: src/mbrainz/shared/codec.py
What: Map record dataclasses to and from the WS2 JSON shape.
Why: Keep entity declarations data-only; one reflective codec owns key naming,
     nested records, and the legacy snake_case mode.
"""

from __future__ import annotations

import dataclasses
import types
import typing
from functools import lru_cache
from typing import Any, TypeVar, Union, cast

T = TypeVar("T")


class SchemaError(ValueError):
    """A JSON value does not match the target record schema."""

    def __init__(self, message: str, path: tuple[str, ...] = ()) -> None:
        self.path = path
        location = ".".join(path) or "<root>"
        super().__init__(f"{location}: {message}")


def json_key(field: dataclasses.Field[Any], *, legacy: bool = False) -> str:
    """Return the JSON key used for ``field``.

    WS2 uses kebab-case keys. Fields may override the key through
    ``metadata={"key": ...}``; legacy mode writes Python snake_case names.
    """

    if legacy:
        return field.name
    override = field.metadata.get("key")
    if isinstance(override, str):
        return override
    return field.name.replace("_", "-")


@lru_cache(maxsize=None)
def _resolved_hints(cls: type) -> dict[str, Any]:
    return typing.get_type_hints(cls)


def decode(cls: type[T], data: Any, *, legacy: bool = False) -> T:
    """Build a ``cls`` instance from decoded JSON.

    Unknown keys are ignored. Missing keys fall back to the field default and
    are an error for fields without one. In legacy mode snake_case keys are
    accepted alongside the kebab-case ones.
    """

    return cast(T, _decode_record(cls, data, legacy, ()))


def encode(record: Any, *, legacy: bool = False) -> dict[str, Any]:
    """Serialize a record dataclass to a JSON-compatible ``dict``.

    ``None`` values are omitted, matching what WS2 does for absent data.
    """

    if not dataclasses.is_dataclass(record) or isinstance(record, type):
        raise TypeError(f"encode() expects a record instance, got {type(record).__name__}")
    return cast(dict[str, Any], _encode_value(record, legacy))


def _decode_record(cls: type, data: Any, legacy: bool, path: tuple[str, ...]) -> Any:
    if not isinstance(data, dict):
        raise SchemaError(f"expected object for {cls.__name__}, got {type(data).__name__}", path)
    payload = cast(dict[str, Any], data)
    hints = _resolved_hints(cls)
    kwargs: dict[str, Any] = {}
    for field in dataclasses.fields(cls):
        if not field.init:
            continue
        key = json_key(field)
        if key in payload:
            raw = payload[key]
        elif legacy and field.name in payload:
            raw = payload[field.name]
        elif field.default is not dataclasses.MISSING or field.default_factory is not dataclasses.MISSING:
            continue
        else:
            raise SchemaError(f"missing required key '{key}'", path)
        kwargs[field.name] = _decode_value(hints[field.name], raw, legacy, (*path, key))
    return cls(**kwargs)


def _decode_value(hint: Any, raw: Any, legacy: bool, path: tuple[str, ...]) -> Any:
    origin = typing.get_origin(hint)

    if origin in (Union, types.UnionType):
        members = [arg for arg in typing.get_args(hint) if arg is not type(None)]
        if raw is None:
            return None
        if len(members) == 1:
            return _decode_value(members[0], raw, legacy, path)
        return raw

    if hint is Any or hint is object:
        return raw

    if raw is None:
        raise SchemaError("unexpected null", path)

    if origin is list:
        (item_hint,) = typing.get_args(hint) or (Any,)
        if not isinstance(raw, list):
            raise SchemaError(f"expected array, got {type(raw).__name__}", path)
        items = cast(list[Any], raw)
        return [_decode_value(item_hint, item, legacy, (*path, str(i))) for i, item in enumerate(items)]

    if origin is dict:
        if not isinstance(raw, dict):
            raise SchemaError(f"expected object, got {type(raw).__name__}", path)
        return dict(cast(dict[str, Any], raw))

    if isinstance(hint, type) and dataclasses.is_dataclass(hint):
        return _decode_record(hint, raw, legacy, path)

    if hint is bool:
        if not isinstance(raw, bool):
            raise SchemaError(f"expected boolean, got {type(raw).__name__}", path)
        return raw

    if hint is int:
        if isinstance(raw, bool) or not isinstance(raw, int):
            raise SchemaError(f"expected integer, got {type(raw).__name__}", path)
        return raw

    if hint is float:
        if isinstance(raw, bool) or not isinstance(raw, (int, float)):
            raise SchemaError(f"expected number, got {type(raw).__name__}", path)
        return float(raw)

    if hint is str:
        if not isinstance(raw, str):
            raise SchemaError(f"expected string, got {type(raw).__name__}", path)
        return raw

    raise SchemaError(f"unsupported field type {hint!r}", path)


def _encode_value(value: Any, legacy: bool) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        out: dict[str, Any] = {}
        for field in dataclasses.fields(value):
            if not field.init:
                continue
            item = getattr(value, field.name)
            if item is None:
                continue
            out[json_key(field, legacy=legacy)] = _encode_value(item, legacy)
        return out
    if isinstance(value, list):
        return [_encode_value(item, legacy) for item in cast(list[Any], value)]
    if isinstance(value, dict):
        return dict(cast(dict[str, Any], value))
    return value


__all__ = ["SchemaError", "decode", "encode", "json_key"]
