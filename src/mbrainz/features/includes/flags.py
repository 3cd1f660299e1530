"""Where: src/mbrainz/features/includes/flags.py
What: ``inc=`` flag vocabulary plus the static legality and implication tables.
Why: Legality is a property of (entity kind, flag, operation); keeping the
     tables as data makes them auditable against the WS2 documentation.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Final

from mbrainz.errors import InvalidIncludeError
from mbrainz.shared.kinds import RELATABLE_KINDS, EntityKind


class IncludeFlag(str, Enum):
    """A sub-resource or relationship category requested with ``inc=``."""

    # Linked entities and per-entity data.
    ARTISTS = "artists"
    LABELS = "labels"
    RECORDINGS = "recordings"
    RELEASES = "releases"
    RELEASE_GROUPS = "release-groups"
    WORKS = "works"
    MEDIA = "media"
    DISCIDS = "discids"
    ISRCS = "isrcs"
    ARTIST_CREDITS = "artist-credits"
    VARIOUS_ARTISTS = "various-artists"
    ALIASES = "aliases"
    ANNOTATION = "annotation"
    TAGS = "tags"
    USER_TAGS = "user-tags"
    GENRES = "genres"
    USER_GENRES = "user-genres"
    RATINGS = "ratings"
    USER_RATINGS = "user-ratings"

    # Relationships by target kind.
    AREA_RELS = "area-rels"
    ARTIST_RELS = "artist-rels"
    EVENT_RELS = "event-rels"
    GENRE_RELS = "genre-rels"
    INSTRUMENT_RELS = "instrument-rels"
    LABEL_RELS = "label-rels"
    PLACE_RELS = "place-rels"
    RECORDING_RELS = "recording-rels"
    RELEASE_RELS = "release-rels"
    RELEASE_GROUP_RELS = "release-group-rels"
    SERIES_RELS = "series-rels"
    URL_RELS = "url-rels"
    WORK_RELS = "work-rels"
    RECORDING_LEVEL_RELS = "recording-level-rels"
    WORK_LEVEL_RELS = "work-level-rels"

    @property
    def is_relation(self) -> bool:
        return self.value.endswith("-rels")

    @classmethod
    def relation(cls, target: EntityKind | str) -> IncludeFlag:
        """Return the ``<target>-rels`` flag for a relatable kind."""

        kind = EntityKind.parse(target)
        if kind not in RELATABLE_KINDS:
            raise InvalidIncludeError(
                f"{kind.value} cannot be a relationship target", flag=f"{kind.value}-rels"
            )
        return cls(f"{kind.value}-rels")

    @classmethod
    def parse(cls, value: IncludeFlag | str) -> IncludeFlag:
        if isinstance(value, IncludeFlag):
            return value
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise InvalidIncludeError(f"Unknown include flag: {value!r}", flag=value) from None


def parse_flags(values: Iterable[IncludeFlag | str]) -> frozenset[IncludeFlag]:
    return frozenset(IncludeFlag.parse(value) for value in values)


F = IncludeFlag

RELATION_INCLUDES: Final[frozenset[IncludeFlag]] = frozenset(
    IncludeFlag.relation(kind) for kind in RELATABLE_KINDS
)
_TAGS = frozenset({F.TAGS, F.USER_TAGS})
_GENRES = frozenset({F.GENRES, F.USER_GENRES})
_RATINGS = frozenset({F.RATINGS, F.USER_RATINGS})
_FOLKSONOMY = _TAGS | _GENRES
_ANNOTATED = frozenset({F.ALIASES, F.ANNOTATION})

LOOKUP_INCLUDES: Final[Mapping[EntityKind, frozenset[IncludeFlag]]] = {
    EntityKind.AREA: _ANNOTATED | _FOLKSONOMY | RELATION_INCLUDES,
    EntityKind.ARTIST: frozenset({
        F.RECORDINGS, F.RELEASES, F.RELEASE_GROUPS, F.WORKS, F.VARIOUS_ARTISTS,
        F.DISCIDS, F.MEDIA, F.ISRCS,
    }) | _ANNOTATED | _FOLKSONOMY | _RATINGS | RELATION_INCLUDES,
    EntityKind.EVENT: _ANNOTATED | _FOLKSONOMY | _RATINGS | RELATION_INCLUDES,
    EntityKind.GENRE: frozenset({F.ALIASES}),
    EntityKind.INSTRUMENT: _ANNOTATED | _FOLKSONOMY | RELATION_INCLUDES,
    EntityKind.LABEL: frozenset({F.RELEASES, F.DISCIDS, F.MEDIA})
    | _ANNOTATED | _FOLKSONOMY | _RATINGS | RELATION_INCLUDES,
    EntityKind.PLACE: _ANNOTATED | _FOLKSONOMY | RELATION_INCLUDES,
    EntityKind.RECORDING: frozenset({
        F.ARTISTS, F.RELEASES, F.RELEASE_GROUPS, F.DISCIDS, F.MEDIA,
        F.ARTIST_CREDITS, F.ISRCS, F.WORK_LEVEL_RELS,
    }) | _ANNOTATED | _FOLKSONOMY | _RATINGS | RELATION_INCLUDES,
    EntityKind.RELEASE: frozenset({
        F.ARTISTS, F.LABELS, F.RECORDINGS, F.RELEASE_GROUPS, F.MEDIA,
        F.ARTIST_CREDITS, F.DISCIDS, F.ISRCS, F.RECORDING_LEVEL_RELS,
        F.WORK_LEVEL_RELS,
    }) | _ANNOTATED | _FOLKSONOMY | _RATINGS | RELATION_INCLUDES,
    EntityKind.RELEASE_GROUP: frozenset({
        F.ARTISTS, F.RELEASES, F.DISCIDS, F.MEDIA, F.ARTIST_CREDITS,
    }) | _ANNOTATED | _FOLKSONOMY | _RATINGS | RELATION_INCLUDES,
    EntityKind.SERIES: _ANNOTATED | _FOLKSONOMY | RELATION_INCLUDES,
    EntityKind.URL: RELATION_INCLUDES,
    EntityKind.WORK: _ANNOTATED | _FOLKSONOMY | _RATINGS | RELATION_INCLUDES,
    EntityKind.CDSTUB: frozenset(),
    EntityKind.DISCID: frozenset({
        F.ARTISTS, F.LABELS, F.RECORDINGS, F.RELEASE_GROUPS, F.ARTIST_CREDITS,
        F.ISRCS, F.RECORDING_LEVEL_RELS, F.WORK_LEVEL_RELS,
    }) | _ANNOTATED,
}

BROWSE_INCLUDES: Final[Mapping[EntityKind, frozenset[IncludeFlag]]] = {
    EntityKind.AREA: frozenset({F.ALIASES}) | _FOLKSONOMY | RELATION_INCLUDES,
    EntityKind.ARTIST: frozenset({F.ALIASES}) | _FOLKSONOMY | _RATINGS | RELATION_INCLUDES,
    EntityKind.EVENT: frozenset({F.ALIASES}) | _FOLKSONOMY | _RATINGS | RELATION_INCLUDES,
    EntityKind.INSTRUMENT: frozenset({F.ALIASES}) | _FOLKSONOMY | RELATION_INCLUDES,
    EntityKind.LABEL: frozenset({F.ALIASES}) | _FOLKSONOMY | _RATINGS | RELATION_INCLUDES,
    EntityKind.PLACE: frozenset({F.ALIASES}) | _FOLKSONOMY | RELATION_INCLUDES,
    EntityKind.RECORDING: frozenset({F.ARTIST_CREDITS, F.ISRCS})
    | _FOLKSONOMY | _RATINGS | RELATION_INCLUDES,
    EntityKind.RELEASE: frozenset({
        F.ARTIST_CREDITS, F.LABELS, F.RECORDINGS, F.ISRCS, F.RELEASE_GROUPS,
        F.MEDIA, F.DISCIDS, F.RECORDING_LEVEL_RELS, F.WORK_LEVEL_RELS,
    }) | RELATION_INCLUDES,
    EntityKind.RELEASE_GROUP: frozenset({F.ARTIST_CREDITS})
    | _FOLKSONOMY | _RATINGS | RELATION_INCLUDES,
    EntityKind.SERIES: frozenset({F.ALIASES}) | _FOLKSONOMY | RELATION_INCLUDES,
    EntityKind.URL: RELATION_INCLUDES,
    EntityKind.WORK: _ANNOTATED | _FOLKSONOMY | _RATINGS | RELATION_INCLUDES,
}

# flag -> flags it pulls in, per kind. Must stay acyclic.
IMPLIED_INCLUDES: Final[Mapping[EntityKind, Mapping[IncludeFlag, frozenset[IncludeFlag]]]] = {
    EntityKind.ARTIST: {
        F.RELEASE_GROUPS: frozenset({F.RELEASES}),
        F.VARIOUS_ARTISTS: frozenset({F.RELEASES}),
        F.DISCIDS: frozenset({F.MEDIA}),
        F.MEDIA: frozenset({F.RELEASES}),
        F.ISRCS: frozenset({F.RECORDINGS}),
    },
    EntityKind.LABEL: {
        F.DISCIDS: frozenset({F.MEDIA}),
        F.MEDIA: frozenset({F.RELEASES}),
    },
    EntityKind.RECORDING: {
        F.RELEASE_GROUPS: frozenset({F.RELEASES}),
        F.DISCIDS: frozenset({F.MEDIA}),
        F.MEDIA: frozenset({F.RELEASES}),
    },
    EntityKind.RELEASE: {
        F.DISCIDS: frozenset({F.MEDIA}),
        F.ISRCS: frozenset({F.RECORDINGS}),
        F.RECORDING_LEVEL_RELS: frozenset({F.RECORDINGS}),
        F.WORK_LEVEL_RELS: frozenset({F.RECORDING_LEVEL_RELS}),
    },
    EntityKind.RELEASE_GROUP: {
        F.DISCIDS: frozenset({F.MEDIA}),
        F.MEDIA: frozenset({F.RELEASES}),
    },
    EntityKind.DISCID: {
        F.ISRCS: frozenset({F.RECORDINGS}),
        F.RECORDING_LEVEL_RELS: frozenset({F.RECORDINGS}),
        F.WORK_LEVEL_RELS: frozenset({F.RECORDING_LEVEL_RELS}),
    },
}

# Values accepted by the ``type=`` and ``status=`` release filters.
RELEASE_TYPES: Final[frozenset[str]] = frozenset({
    "nat", "album", "single", "ep", "broadcast", "other",
    "compilation", "soundtrack", "spokenword", "interview", "audiobook",
    "audio drama", "live", "remix", "dj-mix", "mixtape/street", "demo",
    "field recording",
})
RELEASE_STATUSES: Final[frozenset[str]] = frozenset({
    "official", "promotion", "bootleg", "pseudo-release", "withdrawn", "cancelled",
})


__all__ = [
    "BROWSE_INCLUDES",
    "IMPLIED_INCLUDES",
    "IncludeFlag",
    "LOOKUP_INCLUDES",
    "RELATION_INCLUDES",
    "RELEASE_STATUSES",
    "RELEASE_TYPES",
    "parse_flags",
]
