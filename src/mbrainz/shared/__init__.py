# Where: mbrainz.shared.__init__
# What: Expose the entity model, kinds, and result wrappers.
# Why: Builders and transports import the data model from one place.

"""Entity data model shared across features."""

from .codec import SchemaError, decode, encode
from .entities import (
    RECORD_TYPES,
    Alias,
    Annotation,
    Area,
    Artist,
    ArtistCredit,
    CDStub,
    Discid,
    Entity,
    Event,
    Genre,
    Instrument,
    Label,
    Place,
    Recording,
    Relation,
    Release,
    ReleaseGroup,
    Series,
    Tag,
    Url,
    Work,
)
from .kinds import RELATABLE_KINDS, EntityKind, Operation
from .results import BrowseResult, SearchResult

__all__ = [
    "RECORD_TYPES",
    "RELATABLE_KINDS",
    "Alias",
    "Annotation",
    "Area",
    "Artist",
    "ArtistCredit",
    "BrowseResult",
    "CDStub",
    "Discid",
    "Entity",
    "EntityKind",
    "Event",
    "Genre",
    "Instrument",
    "Label",
    "Operation",
    "Place",
    "Recording",
    "Relation",
    "Release",
    "ReleaseGroup",
    "SchemaError",
    "SearchResult",
    "Series",
    "Tag",
    "Url",
    "Work",
    "decode",
    "encode",
]
