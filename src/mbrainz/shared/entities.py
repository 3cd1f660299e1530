"""Where: src/mbrainz/shared/entities.py
What: Typed records for the entities returned by the MusicBrainz web service.
Why: Give callers plain dataclasses; the codec derives JSON keys from field names.

Only the commonly used subset of each WS2 schema is modelled. Unknown keys in a
response are ignored by the decoder.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, TypeVar

from .codec import decode, encode
from .kinds import EntityKind

E = TypeVar("E", bound="Entity")


class Entity:
    """Behaviour shared by every top-level record.

    Subclasses declare ``KIND`` and, when the identifier is not ``id``,
    ``ID_FIELD``.
    """

    __slots__ = ()

    KIND: ClassVar[EntityKind]
    ID_FIELD: ClassVar[str] = "id"

    @property
    def identifier(self) -> str:
        return str(getattr(self, self.ID_FIELD))

    @classmethod
    def from_json(cls: type[E], data: Any, *, legacy: bool = False) -> E:
        return decode(cls, data, legacy=legacy)

    def to_json(self, *, legacy: bool = False) -> dict[str, Any]:
        return encode(self, legacy=legacy)


# Shared value objects ------------------------------------------------------


@dataclass(slots=True)
class LifeSpan:
    begin: str | None = None
    end: str | None = None
    ended: bool | None = None


@dataclass(slots=True)
class Alias:
    name: str
    sort_name: str | None = None
    locale: str | None = None
    type: str | None = None
    type_id: str | None = None
    primary: bool | None = None
    begin: str | None = None
    end: str | None = None
    ended: bool | None = None


@dataclass(slots=True)
class Rating:
    value: float | None = None
    votes_count: int | None = None


@dataclass(slots=True)
class Tag(Entity):
    """A folksonomy tag; also the record returned by tag searches."""

    KIND: ClassVar[EntityKind] = EntityKind.TAG
    ID_FIELD: ClassVar[str] = "name"

    name: str
    count: int | None = None
    score: int | None = None


@dataclass(slots=True)
class Genre(Entity):
    KIND: ClassVar[EntityKind] = EntityKind.GENRE

    id: str
    name: str
    count: int | None = None
    disambiguation: str | None = None


@dataclass(slots=True)
class Relation:
    """A typed link to another entity; exactly one target field is set."""

    type: str
    type_id: str | None = None
    direction: str | None = None
    target_type: str | None = None
    target_credit: str | None = None
    source_credit: str | None = None
    begin: str | None = None
    end: str | None = None
    ended: bool | None = None
    attributes: list[str] | None = None
    attribute_values: dict[str, Any] | None = None
    ordering_key: int | None = None
    area: Area | None = None
    artist: Artist | None = None
    event: Event | None = None
    instrument: Instrument | None = None
    label: Label | None = None
    place: Place | None = None
    recording: Recording | None = None
    release: Release | None = None
    # Relationship payloads spell this key with an underscore.
    release_group: ReleaseGroup | None = field(default=None, metadata={"key": "release_group"})
    series: Series | None = None
    url: Url | None = None
    work: Work | None = None


@dataclass(slots=True)
class ArtistCredit:
    name: str
    artist: Artist
    joinphrase: str | None = None


# Top-level entities ----------------------------------------------------------


@dataclass(slots=True)
class Area(Entity):
    KIND: ClassVar[EntityKind] = EntityKind.AREA

    id: str
    name: str
    sort_name: str | None = None
    type: str | None = None
    type_id: str | None = None
    disambiguation: str | None = None
    iso_3166_1_codes: list[str] | None = None
    life_span: LifeSpan | None = None
    aliases: list[Alias] | None = None
    tags: list[Tag] | None = None
    genres: list[Genre] | None = None
    relations: list[Relation] | None = None
    annotation: str | None = None
    score: int | None = None


@dataclass(slots=True)
class Artist(Entity):
    KIND: ClassVar[EntityKind] = EntityKind.ARTIST

    id: str
    name: str
    sort_name: str | None = None
    type: str | None = None
    type_id: str | None = None
    gender: str | None = None
    gender_id: str | None = None
    country: str | None = None
    disambiguation: str | None = None
    area: Area | None = None
    begin_area: Area | None = None
    end_area: Area | None = None
    life_span: LifeSpan | None = None
    ipis: list[str] | None = None
    isnis: list[str] | None = None
    aliases: list[Alias] | None = None
    tags: list[Tag] | None = None
    genres: list[Genre] | None = None
    rating: Rating | None = None
    relations: list[Relation] | None = None
    recordings: list[Recording] | None = None
    releases: list[Release] | None = None
    release_groups: list[ReleaseGroup] | None = None
    works: list[Work] | None = None
    annotation: str | None = None
    score: int | None = None


@dataclass(slots=True)
class Recording(Entity):
    KIND: ClassVar[EntityKind] = EntityKind.RECORDING

    id: str
    title: str
    length: int | None = None
    video: bool | None = None
    disambiguation: str | None = None
    first_release_date: str | None = None
    artist_credit: list[ArtistCredit] | None = None
    releases: list[Release] | None = None
    isrcs: list[str] | None = None
    aliases: list[Alias] | None = None
    tags: list[Tag] | None = None
    genres: list[Genre] | None = None
    rating: Rating | None = None
    relations: list[Relation] | None = None
    annotation: str | None = None
    score: int | None = None


@dataclass(slots=True)
class Label(Entity):
    KIND: ClassVar[EntityKind] = EntityKind.LABEL

    id: str
    name: str
    sort_name: str | None = None
    type: str | None = None
    type_id: str | None = None
    label_code: int | None = None
    country: str | None = None
    disambiguation: str | None = None
    area: Area | None = None
    life_span: LifeSpan | None = None
    ipis: list[str] | None = None
    isnis: list[str] | None = None
    aliases: list[Alias] | None = None
    tags: list[Tag] | None = None
    genres: list[Genre] | None = None
    rating: Rating | None = None
    relations: list[Relation] | None = None
    releases: list[Release] | None = None
    annotation: str | None = None
    score: int | None = None


@dataclass(slots=True)
class LabelInfo:
    catalog_number: str | None = None
    label: Label | None = None


@dataclass(slots=True)
class Disc:
    id: str
    sectors: int
    offset_count: int
    offsets: list[int] = field(default_factory=list)


@dataclass(slots=True)
class Track:
    id: str
    title: str
    number: str
    position: int
    length: int | None = None
    recording: Recording | None = None
    artist_credit: list[ArtistCredit] | None = None


@dataclass(slots=True)
class Media:
    track_count: int
    title: str | None = None
    position: int | None = None
    format: str | None = None
    format_id: str | None = None
    track_offset: int | None = None
    discs: list[Disc] | None = None
    tracks: list[Track] | None = None


@dataclass(slots=True)
class TextRepresentation:
    language: str | None = None
    script: str | None = None


@dataclass(slots=True)
class ReleaseGroup(Entity):
    KIND: ClassVar[EntityKind] = EntityKind.RELEASE_GROUP

    id: str
    title: str
    primary_type: str | None = None
    primary_type_id: str | None = None
    secondary_types: list[str] | None = None
    secondary_type_ids: list[str] | None = None
    first_release_date: str | None = None
    disambiguation: str | None = None
    artist_credit: list[ArtistCredit] | None = None
    releases: list[Release] | None = None
    aliases: list[Alias] | None = None
    tags: list[Tag] | None = None
    genres: list[Genre] | None = None
    rating: Rating | None = None
    relations: list[Relation] | None = None
    annotation: str | None = None
    score: int | None = None


@dataclass(slots=True)
class Release(Entity):
    KIND: ClassVar[EntityKind] = EntityKind.RELEASE

    id: str
    title: str
    status: str | None = None
    status_id: str | None = None
    date: str | None = None
    country: str | None = None
    quality: str | None = None
    barcode: str | None = None
    disambiguation: str | None = None
    packaging: str | None = None
    packaging_id: str | None = None
    asin: str | None = None
    text_representation: TextRepresentation | None = None
    release_group: ReleaseGroup | None = None
    artist_credit: list[ArtistCredit] | None = None
    media: list[Media] | None = None
    label_info: list[LabelInfo] | None = None
    aliases: list[Alias] | None = None
    tags: list[Tag] | None = None
    genres: list[Genre] | None = None
    relations: list[Relation] | None = None
    annotation: str | None = None
    score: int | None = None


@dataclass(slots=True)
class Work(Entity):
    KIND: ClassVar[EntityKind] = EntityKind.WORK

    id: str
    title: str
    type: str | None = None
    type_id: str | None = None
    language: str | None = None
    languages: list[str] | None = None
    iswcs: list[str] | None = None
    disambiguation: str | None = None
    aliases: list[Alias] | None = None
    tags: list[Tag] | None = None
    genres: list[Genre] | None = None
    rating: Rating | None = None
    relations: list[Relation] | None = None
    annotation: str | None = None
    score: int | None = None


@dataclass(slots=True)
class Event(Entity):
    KIND: ClassVar[EntityKind] = EntityKind.EVENT

    id: str
    name: str
    type: str | None = None
    type_id: str | None = None
    time: str | None = None
    cancelled: bool | None = None
    setlist: str | None = None
    disambiguation: str | None = None
    life_span: LifeSpan | None = None
    aliases: list[Alias] | None = None
    tags: list[Tag] | None = None
    genres: list[Genre] | None = None
    rating: Rating | None = None
    relations: list[Relation] | None = None
    annotation: str | None = None
    score: int | None = None


@dataclass(slots=True)
class Coordinates:
    latitude: float
    longitude: float


@dataclass(slots=True)
class Place(Entity):
    KIND: ClassVar[EntityKind] = EntityKind.PLACE

    id: str
    name: str
    type: str | None = None
    type_id: str | None = None
    address: str | None = None
    coordinates: Coordinates | None = None
    area: Area | None = None
    disambiguation: str | None = None
    life_span: LifeSpan | None = None
    aliases: list[Alias] | None = None
    tags: list[Tag] | None = None
    genres: list[Genre] | None = None
    relations: list[Relation] | None = None
    annotation: str | None = None
    score: int | None = None


@dataclass(slots=True)
class Instrument(Entity):
    KIND: ClassVar[EntityKind] = EntityKind.INSTRUMENT

    id: str
    name: str
    type: str | None = None
    type_id: str | None = None
    description: str | None = None
    disambiguation: str | None = None
    aliases: list[Alias] | None = None
    tags: list[Tag] | None = None
    genres: list[Genre] | None = None
    relations: list[Relation] | None = None
    annotation: str | None = None
    score: int | None = None


@dataclass(slots=True)
class Series(Entity):
    KIND: ClassVar[EntityKind] = EntityKind.SERIES

    id: str
    name: str
    type: str | None = None
    type_id: str | None = None
    disambiguation: str | None = None
    aliases: list[Alias] | None = None
    tags: list[Tag] | None = None
    genres: list[Genre] | None = None
    relations: list[Relation] | None = None
    annotation: str | None = None
    score: int | None = None


@dataclass(slots=True)
class Url(Entity):
    KIND: ClassVar[EntityKind] = EntityKind.URL

    id: str
    resource: str
    relations: list[Relation] | None = None
    score: int | None = None


@dataclass(slots=True)
class Annotation(Entity):
    """Annotation search hit; ``entity`` holds the annotated MBID."""

    KIND: ClassVar[EntityKind] = EntityKind.ANNOTATION
    ID_FIELD: ClassVar[str] = "entity"

    entity: str
    type: str | None = None
    name: str | None = None
    text: str | None = None
    score: int | None = None


@dataclass(slots=True)
class CDStubTrack:
    title: str
    artist: str | None = None
    length: int | None = None


@dataclass(slots=True)
class CDStub(Entity):
    KIND: ClassVar[EntityKind] = EntityKind.CDSTUB

    id: str
    title: str
    artist: str | None = None
    barcode: str | None = None
    comment: str | None = None
    disambiguation: str | None = None
    count: int | None = None
    track_count: int | None = None
    tracks: list[CDStubTrack] | None = None
    score: int | None = None


@dataclass(slots=True)
class Discid(Entity):
    """Disc ID lookup: the TOC summary plus the releases carrying that disc."""

    KIND: ClassVar[EntityKind] = EntityKind.DISCID

    id: str
    offset_count: int | None = None
    sectors: int | None = None
    offsets: list[int] | None = None
    releases: list[Release] | None = None


RECORD_TYPES: dict[EntityKind, type[Entity]] = {
    record.KIND: record
    for record in (
        Annotation,
        Area,
        Artist,
        CDStub,
        Discid,
        Event,
        Genre,
        Instrument,
        Label,
        Place,
        Recording,
        Release,
        ReleaseGroup,
        Series,
        Tag,
        Url,
        Work,
    )
}


__all__ = [
    "Alias",
    "Annotation",
    "Area",
    "Artist",
    "ArtistCredit",
    "CDStub",
    "CDStubTrack",
    "Coordinates",
    "Disc",
    "Discid",
    "Entity",
    "Event",
    "Genre",
    "Instrument",
    "Label",
    "LabelInfo",
    "LifeSpan",
    "Media",
    "Place",
    "RECORD_TYPES",
    "Rating",
    "Recording",
    "Relation",
    "Release",
    "ReleaseGroup",
    "Series",
    "Tag",
    "TextRepresentation",
    "Track",
    "Url",
    "Work",
]
