"""
Summary: Paged result wrappers for browse and search responses.
Why: Browse and search payloads share a list-plus-counters shape keyed by kind.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar, cast

from .codec import SchemaError, decode
from .entities import Entity
from .kinds import EntityKind

T = TypeVar("T", bound=Entity)


def _int_value(payload: dict[str, Any], key: str) -> int:
    if key not in payload:
        raise SchemaError(f"missing required key '{key}'", (key,))
    value = payload[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise SchemaError(f"expected integer for '{key}'", (key,))
    return value


def _entity_list(
    record_type: type[T], payload: dict[str, Any], key: str, legacy: bool
) -> list[T]:
    if key not in payload:
        raise SchemaError(f"missing required key '{key}'", (key,))
    raw = payload[key]
    if not isinstance(raw, list):
        raise SchemaError(f"expected array for '{key}'", (key,))
    items = cast(list[Any], raw)
    return [decode(record_type, item, legacy=legacy) for item in items]


def _require_object(payload: Any) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise SchemaError(f"expected object, got {type(payload).__name__}")
    return cast(dict[str, Any], payload)


@dataclass
class BrowseResult(Generic[T]):
    """One page of entities linked to another entity."""

    count: int
    offset: int
    entities: list[T] = field(default_factory=list)

    @classmethod
    def from_json(
        cls, record_type: type[T], payload: Any, *, legacy: bool = False
    ) -> BrowseResult[T]:
        """Decode a browse page.

        ``url?resource=...`` answers with the url object itself rather than a
        page; that shape becomes a one-entity page.
        """
        data = _require_object(payload)
        kind = record_type.KIND
        if kind is EntityKind.URL and kind.plural not in data and "resource" in data:
            return cls(count=1, offset=0, entities=[decode(record_type, data, legacy=legacy)])
        return cls(
            count=_int_value(data, f"{kind.value}-count"),
            offset=_int_value(data, f"{kind.value}-offset"),
            entities=_entity_list(record_type, data, kind.plural, legacy),
        )


@dataclass
class SearchResult(Generic[T]):
    """One page of scored search hits."""

    count: int
    offset: int
    entities: list[T] = field(default_factory=list)
    created: str | None = None

    @classmethod
    def from_json(
        cls, record_type: type[T], payload: Any, *, legacy: bool = False
    ) -> SearchResult[T]:
        data = _require_object(payload)
        created = data.get("created")
        return cls(
            count=_int_value(data, "count"),
            offset=_int_value(data, "offset"),
            entities=_entity_list(record_type, data, record_type.KIND.plural, legacy),
            created=created if isinstance(created, str) else None,
        )


__all__ = ["BrowseResult", "SearchResult"]
