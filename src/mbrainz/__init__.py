"""mbrainz: typed client for the MusicBrainz web service (WS2).

Where: src/mbrainz/__init__.py
What: Public import surface for clients, builders, records, and errors.
Why: Applications should not need to know the internal package layout.
"""

from __future__ import annotations

from .config import ClientConfig, ExecutionMode, load_config
from .errors import (
    ApiError,
    ConfigurationError,
    DeserializationError,
    IncludeConfigurationError,
    InvalidFilterError,
    InvalidIncludeError,
    InvalidSearchFieldError,
    MusicBrainzError,
    PaginationError,
    RateLimitedError,
    TransportError,
    ValidationError,
)
from .features.includes import IncludeComposer, IncludeFlag
from .features.request import BrowseBy, RequestBuilder, RequestDescriptor
from .features.search import Join, SearchQuery
from .platform.logging import logger, setup_logger
from .platform.musicbrainz import (
    AsyncMusicBrainzClient,
    MusicBrainzClient,
    RequestState,
    RequestTrace,
    create_client,
)
from .shared import (
    Annotation,
    Area,
    Artist,
    BrowseResult,
    CDStub,
    Discid,
    EntityKind,
    Event,
    Genre,
    Instrument,
    Label,
    Operation,
    Place,
    Recording,
    Release,
    ReleaseGroup,
    SearchResult,
    Series,
    Tag,
    Url,
    Work,
)
from .version import __version__

__all__ = [
    "Annotation",
    "ApiError",
    "Area",
    "Artist",
    "AsyncMusicBrainzClient",
    "BrowseBy",
    "BrowseResult",
    "CDStub",
    "ClientConfig",
    "ConfigurationError",
    "DeserializationError",
    "Discid",
    "EntityKind",
    "Event",
    "ExecutionMode",
    "Genre",
    "IncludeComposer",
    "IncludeConfigurationError",
    "IncludeFlag",
    "Instrument",
    "InvalidFilterError",
    "InvalidIncludeError",
    "InvalidSearchFieldError",
    "Join",
    "Label",
    "MusicBrainzClient",
    "MusicBrainzError",
    "Operation",
    "PaginationError",
    "Place",
    "RateLimitedError",
    "Recording",
    "Release",
    "ReleaseGroup",
    "RequestBuilder",
    "RequestDescriptor",
    "RequestState",
    "RequestTrace",
    "SearchQuery",
    "SearchResult",
    "Series",
    "Tag",
    "TransportError",
    "Url",
    "ValidationError",
    "Work",
    "__version__",
    "create_client",
    "load_config",
    "logger",
    "setup_logger",
]
