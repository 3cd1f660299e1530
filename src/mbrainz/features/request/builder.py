"""Where: src/mbrainz/features/request/builder.py
What: Immutable fluent builder producing ``RequestDescriptor`` values.
Why: Every step returns a new builder so partially configured requests can be
     reused safely; all validation happens before anything touches the network.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Generic, Protocol, TypeVar

from mbrainz.errors import (
    InvalidFilterError,
    InvalidIncludeError,
    PaginationError,
    ValidationError,
)
from mbrainz.features.includes import DEFAULT_COMPOSER, IncludeComposer, IncludeFlag
from mbrainz.features.search import SearchQuery
from mbrainz.shared.entities import Entity
from mbrainz.shared.kinds import EntityKind, Operation

from .browse import BrowseBy, browse_links
from .descriptor import RequestDescriptor

T = TypeVar("T", bound=Entity)

MIN_LIMIT = 1
MAX_LIMIT = 100


class RequestExecutor(Protocol):
    """Anything able to run a builder; implemented by the client facades."""

    def execute(self, request: RequestBuilder[Any]) -> Any:
        ...


def _check_int(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise PaginationError(f"{name} must be an integer, got {value!r}")


@dataclass(frozen=True)
class RequestBuilder(Generic[T]):
    """Fluent request description bound to a record type.

    Exactly one target must be set before :meth:`build`: an identifier
    (lookup), a browse link (browse) or a search query (search).
    """

    record_type: type[T]
    identifier: str | None = None
    link: tuple[BrowseBy, str] | None = None
    search: SearchQuery | str | None = None
    includes: frozenset[IncludeFlag] = frozenset()
    release_types: tuple[str, ...] = ()
    release_statuses: tuple[str, ...] = ()
    page_limit: int | None = None
    page_offset: int | None = None
    composer: IncludeComposer = field(default=DEFAULT_COMPOSER, compare=False, repr=False)
    executor: RequestExecutor | None = field(default=None, compare=False, repr=False)

    @classmethod
    def for_record(cls, record_type: type[T]) -> RequestBuilder[T]:
        return cls(record_type=record_type)

    @property
    def kind(self) -> EntityKind:
        return self.record_type.KIND

    # Targets ---------------------------------------------------------------

    def id(self, mbid: str) -> RequestBuilder[T]:
        value = mbid.strip()
        if not value:
            raise ValidationError("Identifier must not be empty")
        return replace(self, identifier=value)

    def by(self, link: BrowseBy | EntityKind | str, mbid: str) -> RequestBuilder[T]:
        """Browse entities linked to ``mbid`` (``release`` by ``label``, ...)."""

        try:
            parsed = BrowseBy.parse(link)
        except ValueError:
            raise ValidationError(f"Unknown browse link: {link!r}") from None
        value = mbid.strip()
        if not value:
            raise ValidationError("Browse identifier must not be empty")
        return replace(self, link=(parsed, value))

    def query(self, search: SearchQuery | str) -> RequestBuilder[T]:
        return replace(self, search=search)

    # Includes --------------------------------------------------------------

    def include(self, *flags: IncludeFlag | str) -> RequestBuilder[T]:
        parsed = frozenset(IncludeFlag.parse(flag) for flag in flags)
        return replace(self, includes=self.includes | parsed)

    def with_relations(self, *targets: EntityKind | str) -> RequestBuilder[T]:
        return self.include(*(IncludeFlag.relation(target) for target in targets))

    def with_aliases(self) -> RequestBuilder[T]:
        return self.include(IncludeFlag.ALIASES)

    def with_annotation(self) -> RequestBuilder[T]:
        return self.include(IncludeFlag.ANNOTATION)

    def with_artists(self) -> RequestBuilder[T]:
        return self.include(IncludeFlag.ARTISTS)

    def with_artist_credits(self) -> RequestBuilder[T]:
        return self.include(IncludeFlag.ARTIST_CREDITS)

    def with_discids(self) -> RequestBuilder[T]:
        return self.include(IncludeFlag.DISCIDS)

    def with_genres(self) -> RequestBuilder[T]:
        return self.include(IncludeFlag.GENRES)

    def with_isrcs(self) -> RequestBuilder[T]:
        return self.include(IncludeFlag.ISRCS)

    def with_labels(self) -> RequestBuilder[T]:
        return self.include(IncludeFlag.LABELS)

    def with_media(self) -> RequestBuilder[T]:
        return self.include(IncludeFlag.MEDIA)

    def with_ratings(self) -> RequestBuilder[T]:
        return self.include(IncludeFlag.RATINGS)

    def with_recordings(self) -> RequestBuilder[T]:
        return self.include(IncludeFlag.RECORDINGS)

    def with_releases(self) -> RequestBuilder[T]:
        return self.include(IncludeFlag.RELEASES)

    def with_release_groups(self) -> RequestBuilder[T]:
        return self.include(IncludeFlag.RELEASE_GROUPS)

    def with_tags(self) -> RequestBuilder[T]:
        return self.include(IncludeFlag.TAGS)

    def with_works(self) -> RequestBuilder[T]:
        return self.include(IncludeFlag.WORKS)

    def with_artist_relations(self) -> RequestBuilder[T]:
        return self.include(IncludeFlag.ARTIST_RELS)

    def with_url_relations(self) -> RequestBuilder[T]:
        return self.include(IncludeFlag.URL_RELS)

    def with_recording_level_relations(self) -> RequestBuilder[T]:
        return self.include(IncludeFlag.RECORDING_LEVEL_RELS)

    def with_work_level_relations(self) -> RequestBuilder[T]:
        return self.include(IncludeFlag.WORK_LEVEL_RELS)

    # Filters and pagination ------------------------------------------------

    def release_type(self, *types: str) -> RequestBuilder[T]:
        return replace(self, release_types=(*self.release_types, *types))

    def release_status(self, *statuses: str) -> RequestBuilder[T]:
        return replace(self, release_statuses=(*self.release_statuses, *statuses))

    def limit(self, value: int) -> RequestBuilder[T]:
        _check_int("limit", value)
        if not MIN_LIMIT <= value <= MAX_LIMIT:
            raise PaginationError(f"limit must be between {MIN_LIMIT} and {MAX_LIMIT}, got {value}")
        return replace(self, page_limit=value)

    def offset(self, value: int) -> RequestBuilder[T]:
        _check_int("offset", value)
        if value < 0:
            raise PaginationError(f"offset must not be negative, got {value}")
        return replace(self, page_offset=value)

    def paginate(self, limit: int | None = None, offset: int | None = None) -> RequestBuilder[T]:
        builder = self
        if limit is not None:
            builder = builder.limit(limit)
        if offset is not None:
            builder = builder.offset(offset)
        return builder

    # Finalization ----------------------------------------------------------

    def operation(self) -> Operation:
        targets = [
            op
            for op, value in (
                (Operation.LOOKUP, self.identifier),
                (Operation.BROWSE, self.link),
                (Operation.SEARCH, self.search),
            )
            if value is not None
        ]
        if not targets:
            raise ValidationError(
                f"{self.kind.value} request needs an identifier, a browse link or a search query"
            )
        if len(targets) > 1:
            names = ", ".join(op.value for op in targets)
            raise ValidationError(f"Conflicting request targets: {names}")
        return targets[0]

    def build(self) -> RequestDescriptor:
        """Validate the accumulated steps and freeze them into a descriptor."""

        kind = self.kind
        operation = self.operation()
        if not kind.supports(operation):
            raise ValidationError(f"{kind.value} does not support {operation.value} requests")

        params: list[tuple[str, str]] = []

        if operation is Operation.SEARCH:
            if self.includes:
                raise InvalidIncludeError(
                    "Search requests do not accept include flags", kind=kind.value
                )
            if self.release_types or self.release_statuses:
                raise InvalidFilterError("Search requests do not accept release filters")
            params.append(("query", self._search_text()))
        else:
            if operation is Operation.LOOKUP and (
                self.page_limit is not None or self.page_offset is not None
            ):
                raise PaginationError("limit/offset apply to browse and search requests only")
            # Implied flags only have to be legal; the server gets what was asked for.
            _ = self.composer.validate(kind, self.includes, operation=operation)
            filters = self.composer.validate_filters(
                kind, self.includes, self.release_types, self.release_statuses
            )
            if self.includes:
                params.append(("inc", " ".join(sorted(flag.value for flag in self.includes))))
            if operation is Operation.BROWSE:
                params.append(self._browse_param())
            params.extend(filters.items())

        if self.page_limit is not None:
            params.append(("limit", str(self.page_limit)))
        if self.page_offset is not None:
            params.append(("offset", str(self.page_offset)))
        params.append(("fmt", "json"))

        return RequestDescriptor(
            operation=operation,
            kind=kind,
            identifier=self.identifier if operation is Operation.LOOKUP else None,
            params=tuple(params),
        )

    def execute(self) -> Any:
        """Run the request on the bound client.

        Returns the decoded record for blocking clients and an awaitable for
        asynchronous ones.
        """

        if self.executor is None:
            raise ValidationError("Builder is not bound to a client; use client.execute(builder)")
        return self.executor.execute(self)

    def _search_text(self) -> str:
        search = self.search
        if isinstance(search, SearchQuery):
            if search.kind is not None and search.kind is not self.kind:
                raise ValidationError(
                    f"Search query for {search.kind.value} used with {self.kind.value} request"
                )
            return search.encode()
        text = (search or "").strip()
        if not text:
            raise ValidationError("Search query must not be empty")
        return text

    def _browse_param(self) -> tuple[str, str]:
        assert self.link is not None
        link, mbid = self.link
        if link not in browse_links(self.kind):
            raise ValidationError(f"Cannot browse {self.kind.value} by {link.value}")
        return link.value, mbid


__all__ = ["MAX_LIMIT", "MIN_LIMIT", "RequestBuilder", "RequestExecutor"]
