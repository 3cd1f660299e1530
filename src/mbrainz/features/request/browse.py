"""
Summary: Browse link parameters and which entity kinds accept them.
Why: Browsing ``release`` by ``work`` is meaningless; reject it before dispatch.
"""

from __future__ import annotations

from enum import Enum
from typing import Final

from mbrainz.shared.kinds import EntityKind


class BrowseBy(str, Enum):
    """Query parameter naming the entity a browse request is linked to."""

    AREA = "area"
    ARTIST = "artist"
    COLLECTION = "collection"
    EDITOR = "editor"
    EVENT = "event"
    LABEL = "label"
    PLACE = "place"
    RECORDING = "recording"
    RELEASE = "release"
    RELEASE_GROUP = "release-group"
    TRACK = "track"
    TRACK_ARTIST = "track_artist"
    WORK = "work"
    RESOURCE = "resource"

    @classmethod
    def parse(cls, value: BrowseBy | EntityKind | str) -> BrowseBy:
        if isinstance(value, BrowseBy):
            return value
        if isinstance(value, EntityKind):
            return cls(value.value)
        normalized = value.strip().lower()
        if normalized != "track_artist":
            normalized = normalized.replace("_", "-")
        return cls(normalized)


B = BrowseBy

BROWSE_LINKS: Final[dict[EntityKind, frozenset[BrowseBy]]] = {
    EntityKind.AREA: frozenset({B.COLLECTION}),
    EntityKind.ARTIST: frozenset({
        B.AREA, B.COLLECTION, B.RECORDING, B.RELEASE, B.RELEASE_GROUP, B.WORK,
    }),
    EntityKind.EVENT: frozenset({B.AREA, B.ARTIST, B.COLLECTION, B.PLACE}),
    EntityKind.INSTRUMENT: frozenset({B.COLLECTION}),
    EntityKind.LABEL: frozenset({B.AREA, B.COLLECTION, B.RELEASE}),
    EntityKind.PLACE: frozenset({B.AREA, B.COLLECTION}),
    EntityKind.RECORDING: frozenset({B.ARTIST, B.COLLECTION, B.RELEASE, B.WORK}),
    EntityKind.RELEASE: frozenset({
        B.AREA, B.ARTIST, B.COLLECTION, B.LABEL, B.TRACK, B.TRACK_ARTIST,
        B.RECORDING, B.RELEASE_GROUP,
    }),
    EntityKind.RELEASE_GROUP: frozenset({B.ARTIST, B.COLLECTION, B.RELEASE}),
    EntityKind.SERIES: frozenset({B.COLLECTION}),
    EntityKind.URL: frozenset({B.RESOURCE}),
    EntityKind.WORK: frozenset({B.ARTIST, B.COLLECTION}),
}


def browse_links(kind: EntityKind) -> frozenset[BrowseBy]:
    return BROWSE_LINKS.get(kind, frozenset())


__all__ = ["BROWSE_LINKS", "BrowseBy", "browse_links"]
