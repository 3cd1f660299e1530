"""Where: src/mbrainz/features/search/encoder.py
What: Immutable search predicates and their Lucene text encoding.
Why: The search endpoint only takes a text query; encoding must escape user
     values and be deterministic so equal queries produce equal URLs.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import Final, Union

from mbrainz.errors import InvalidSearchFieldError, ValidationError
from mbrainz.shared.kinds import EntityKind

from .fields import search_fields

LUCENE_SPECIAL: Final[re.Pattern[str]] = re.compile(r'([+\-&|!(){}\[\]^"~*?:\\/])')


class Join(str, Enum):
    """Boolean operator placed before a clause."""

    AND = "AND"
    OR = "OR"
    AND_NOT = "AND NOT"
    OR_NOT = "OR NOT"

    @property
    def negated(self) -> bool:
        return self in (Join.AND_NOT, Join.OR_NOT)


@dataclass(frozen=True, slots=True)
class Term:
    field: str
    value: str
    join: Join = Join.AND


@dataclass(frozen=True, slots=True)
class RawFragment:
    """Lucene text inserted verbatim; the caller owns its escaping."""

    text: str
    join: Join = Join.AND


Clause = Union[Term, RawFragment]
TermValue = Union[str, int, bool]


def escape(value: str) -> str:
    """Backslash-escape every Lucene reserved character in ``value``."""

    return LUCENE_SPECIAL.sub(r"\\\1", value)


def _render_value(value: TermValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass(frozen=True, slots=True)
class SearchQuery:
    """Ordered search clauses, optionally bound to an entity kind.

    Every step returns a new query, so intermediate values can be reused::

        base = SearchQuery.for_kind(EntityKind.ARTIST).where("artist", "Nirvana")
        groups = base.and_("type", "group")
    """

    kind: EntityKind | None = None
    clauses: tuple[Clause, ...] = ()

    @classmethod
    def for_kind(cls, kind: EntityKind | str) -> SearchQuery:
        return cls(kind=EntityKind.parse(kind))

    def where(self, field: str, value: TermValue) -> SearchQuery:
        return self._add_term(field, value, Join.AND)

    def and_(self, field: str, value: TermValue) -> SearchQuery:
        return self._add_term(field, value, Join.AND)

    def or_(self, field: str, value: TermValue) -> SearchQuery:
        return self._add_term(field, value, Join.OR)

    def and_not(self, field: str, value: TermValue) -> SearchQuery:
        return self._add_term(field, value, Join.AND_NOT)

    def or_not(self, field: str, value: TermValue) -> SearchQuery:
        return self._add_term(field, value, Join.OR_NOT)

    def raw(self, fragment: str, join: Join = Join.AND) -> SearchQuery:
        if not fragment.strip():
            raise ValidationError("Raw search fragment must not be empty")
        return replace(self, clauses=(*self.clauses, RawFragment(fragment, join)))

    def is_empty(self) -> bool:
        return not self.clauses

    def encode(self) -> str:
        return encode(self)

    def __str__(self) -> str:
        return encode(self)

    def _add_term(self, field: str, value: TermValue, join: Join) -> SearchQuery:
        name = field.strip()
        if not name:
            raise InvalidSearchFieldError("Search field name must not be empty")
        if self.kind is not None and name not in search_fields(self.kind):
            raise InvalidSearchFieldError(
                f"'{name}' is not a valid search field for {self.kind.value}"
            )
        text = _render_value(value)
        if not text.strip():
            raise ValidationError(f"Search value for '{name}' must not be empty")
        return replace(self, clauses=(*self.clauses, Term(name, text, join)))


def encode(query: SearchQuery) -> str:
    """Render ``query`` in the WS2 Lucene grammar.

    Terms render as ``field:(escaped value)``. The first clause carries no
    join token, except that a negated join keeps its ``NOT``.
    """

    if query.is_empty():
        raise ValidationError("Search query has no clauses")

    parts: list[str] = []
    for index, clause in enumerate(query.clauses):
        if isinstance(clause, Term):
            rendered = f"{clause.field}:({escape(clause.value)})"
        else:
            rendered = clause.text
        if index:
            parts.append(clause.join.value)
        elif clause.join.negated:
            parts.append("NOT")
        parts.append(rendered)
    return " ".join(parts)


__all__ = [
    "Clause",
    "Join",
    "LUCENE_SPECIAL",
    "RawFragment",
    "SearchQuery",
    "Term",
    "encode",
    "escape",
]
