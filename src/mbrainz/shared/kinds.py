"""
Summary: Closed enumeration of the resource types exposed by WS2.
Why: Give builders, composers, and the codec one table keyed by entity kind.
"""

from __future__ import annotations

from enum import Enum


class Operation(str, Enum):
    """The three request shapes the web service understands."""

    LOOKUP = "lookup"
    BROWSE = "browse"
    SEARCH = "search"


class EntityKind(str, Enum):
    """Resource type; the value is the URL path segment."""

    AREA = "area"
    ARTIST = "artist"
    EVENT = "event"
    GENRE = "genre"
    INSTRUMENT = "instrument"
    LABEL = "label"
    PLACE = "place"
    RECORDING = "recording"
    RELEASE = "release"
    RELEASE_GROUP = "release-group"
    SERIES = "series"
    URL = "url"
    WORK = "work"
    ANNOTATION = "annotation"
    CDSTUB = "cdstub"
    DISCID = "discid"
    TAG = "tag"

    @property
    def path(self) -> str:
        """Resource path segment, e.g. ``release-group``."""

        return self.value

    @property
    def plural(self) -> str:
        """JSON key holding entity lists in browse and search payloads."""

        return _PLURALS.get(self, f"{self.value}s")

    def supports(self, operation: Operation) -> bool:
        return operation in _OPERATIONS[self]

    @classmethod
    def parse(cls, value: EntityKind | str) -> EntityKind:
        """Accept an enum member, its path segment, or its snake_case name."""

        if isinstance(value, EntityKind):
            return value
        normalized = value.strip().lower().replace("_", "-")
        return cls(normalized)


_PLURALS: dict[EntityKind, str] = {
    EntityKind.SERIES: "series",
    EntityKind.CDSTUB: "cdstubs",
}

_ALL = frozenset(Operation)
_LOOKUP_ONLY = frozenset({Operation.LOOKUP})
_SEARCH_ONLY = frozenset({Operation.SEARCH})

_OPERATIONS: dict[EntityKind, frozenset[Operation]] = {
    EntityKind.AREA: _ALL,
    EntityKind.ARTIST: _ALL,
    EntityKind.EVENT: _ALL,
    EntityKind.GENRE: _LOOKUP_ONLY,
    EntityKind.INSTRUMENT: _ALL,
    EntityKind.LABEL: _ALL,
    EntityKind.PLACE: _ALL,
    EntityKind.RECORDING: _ALL,
    EntityKind.RELEASE: _ALL,
    EntityKind.RELEASE_GROUP: _ALL,
    EntityKind.SERIES: _ALL,
    EntityKind.URL: frozenset({Operation.LOOKUP, Operation.BROWSE}),
    EntityKind.WORK: _ALL,
    EntityKind.ANNOTATION: _SEARCH_ONLY,
    EntityKind.CDSTUB: frozenset({Operation.LOOKUP, Operation.SEARCH}),
    EntityKind.DISCID: _LOOKUP_ONLY,
    EntityKind.TAG: _SEARCH_ONLY,
}

# Kinds that may appear as the target of a relationship (``<kind>-rels``).
RELATABLE_KINDS: tuple[EntityKind, ...] = (
    EntityKind.AREA,
    EntityKind.ARTIST,
    EntityKind.EVENT,
    EntityKind.GENRE,
    EntityKind.INSTRUMENT,
    EntityKind.LABEL,
    EntityKind.PLACE,
    EntityKind.RECORDING,
    EntityKind.RELEASE,
    EntityKind.RELEASE_GROUP,
    EntityKind.SERIES,
    EntityKind.URL,
    EntityKind.WORK,
)


__all__ = ["EntityKind", "Operation", "RELATABLE_KINDS"]
