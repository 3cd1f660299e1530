"""Tests for Lucene search query encoding."""

from __future__ import annotations

import pytest

from mbrainz.errors import InvalidSearchFieldError, ValidationError
from mbrainz.features.search import Join, SearchQuery, encode, escape, search_fields
from mbrainz.shared import EntityKind


def test_single_term_renders_without_join_token() -> None:
    query = SearchQuery().where("artist", "Nirvana")

    assert encode(query) == "artist:(Nirvana)"


def test_terms_join_in_order_with_explicit_operators() -> None:
    query = (
        SearchQuery.for_kind(EntityKind.RELEASE)
        .where("release", "Nevermind")
        .and_("artist", "Nirvana")
        .or_("barcode", "720642442524")
        .and_not("status", "bootleg")
    )

    assert query.encode() == (
        "release:(Nevermind) AND artist:(Nirvana) "
        "OR barcode:(720642442524) AND NOT status:(bootleg)"
    )


@pytest.mark.parametrize(
    ("raw", "escaped"),
    [
        ("AC/DC", "AC\\/DC"),
        ("Guns N' Roses", "Guns N' Roses"),
        ("a+b-c", "a\\+b\\-c"),
        ("rock && roll || not!", "rock \\&\\& roll \\|\\| not\\!"),
        ('(x){y}[z]^"q"~*?:\\', '\\(x\\)\\{y\\}\\[z\\]\\^\\"q\\"\\~\\*\\?\\:\\\\'),
    ],
)
def test_escape_reserved_characters(raw: str, escaped: str) -> None:
    assert escape(raw) == escaped


def test_values_are_escaped_inside_parentheses() -> None:
    query = SearchQuery().where("artist", "AC/DC").and_("release", "High Voltage!")

    assert str(query) == "artist:(AC\\/DC) AND release:(High Voltage\\!)"


def test_raw_fragments_are_inserted_verbatim() -> None:
    query = SearchQuery().where("artist", "Nirvana").raw("date:[1990 TO 1995]", Join.OR)

    assert query.encode() == "artist:(Nirvana) OR date:[1990 TO 1995]"


def test_leading_raw_fragment_has_no_join() -> None:
    query = SearchQuery().raw("tag:grunge").where("country", "US")

    assert query.encode() == "tag:grunge AND country:(US)"


def test_leading_negated_clause_keeps_not() -> None:
    excluded = SearchQuery().and_not("artist", "Nirvana").where("country", "US")
    either = SearchQuery().or_not("type", "person")

    assert excluded.encode() == "NOT artist:(Nirvana) AND country:(US)"
    assert either.encode() == "NOT type:(person)"
    assert SearchQuery().raw("tag:grunge", Join.AND_NOT).encode() == "NOT tag:grunge"


def test_encoding_is_deterministic() -> None:
    first = SearchQuery().where("artist", "Nirvana").or_not("type", "person")
    second = SearchQuery().where("artist", "Nirvana").or_not("type", "person")

    assert first == second
    assert first.encode() == second.encode()


def test_steps_do_not_mutate_previous_queries() -> None:
    base = SearchQuery().where("artist", "Nirvana")
    extended = base.and_("country", "US")

    assert base.encode() == "artist:(Nirvana)"
    assert extended.encode() == "artist:(Nirvana) AND country:(US)"


def test_non_string_values_are_rendered() -> None:
    query = SearchQuery().where("video", True).and_("dur", 301920)

    assert query.encode() == "video:(true) AND dur:(301920)"


def test_unknown_field_rejected_for_bound_kind() -> None:
    query = SearchQuery.for_kind("artist")

    with pytest.raises(InvalidSearchFieldError, match="barcode"):
        _ = query.where("barcode", "123")


def test_unbound_query_accepts_any_field() -> None:
    assert SearchQuery().where("barcode", "123").encode() == "barcode:(123)"


def test_empty_values_rejected() -> None:
    with pytest.raises(ValidationError):
        _ = SearchQuery().where("artist", "   ")
    with pytest.raises(InvalidSearchFieldError):
        _ = SearchQuery().where(" ", "x")
    with pytest.raises(ValidationError):
        _ = SearchQuery().raw("")


def test_empty_query_cannot_be_encoded() -> None:
    with pytest.raises(ValidationError, match="no clauses"):
        _ = encode(SearchQuery())


def test_search_fields_cover_searchable_kinds() -> None:
    assert "artist" in search_fields(EntityKind.ARTIST)
    assert search_fields(EntityKind.GENRE) == frozenset()
