"""Where: src/mbrainz/features/request/descriptor.py
What: Immutable description of one WS2 GET request.
Why: Transports, retries, and tests share a value that can be rendered and
     re-sent without consulting the builder that produced it.
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote, urlencode

from mbrainz.shared.kinds import EntityKind, Operation


@dataclass(frozen=True, slots=True)
class RequestDescriptor:
    """A finalized request; safe to share between threads and tasks."""

    operation: Operation
    kind: EntityKind
    identifier: str | None = None
    params: tuple[tuple[str, str], ...] = ()
    method: str = "GET"

    @property
    def path(self) -> str:
        if self.identifier is None:
            return f"/{self.kind.path}"
        return f"/{self.kind.path}/{quote(self.identifier, safe='')}"

    def param(self, name: str) -> str | None:
        for key, value in self.params:
            if key == name:
                return value
        return None

    def query_string(self) -> str:
        return urlencode(self.params)

    def path_and_query(self) -> str:
        query = self.query_string()
        return f"{self.path}?{query}" if query else self.path

    def url(self, base_url: str) -> str:
        """Absolute URL below ``base_url`` (e.g. ``https://musicbrainz.org/ws/2``)."""

        return f"{base_url.rstrip('/')}{self.path_and_query()}"


__all__ = ["RequestDescriptor"]
