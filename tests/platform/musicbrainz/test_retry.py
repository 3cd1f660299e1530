"""Tests for status classification, Retry-After parsing, and tracing."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from mbrainz.config import ClientConfig
from mbrainz.errors import DeserializationError
from mbrainz.features.request import RequestBuilder
from mbrainz.platform.musicbrainz import (
    RequestState,
    RequestTrace,
    RetryPolicy,
    backoff_delay,
    is_throttled,
    parse_retry_after,
)
from mbrainz.platform.musicbrainz.retry import decode_body
from mbrainz.shared import Artist, BrowseResult, Release, SearchResult, Url


@pytest.mark.parametrize(("status", "expected"), [(429, True), (503, True), (500, False), (200, False)])
def test_is_throttled(status: int, expected: bool) -> None:
    assert is_throttled(status) is expected


def test_parse_retry_after_seconds() -> None:
    assert parse_retry_after(" 12 ") == 12.0


def test_parse_retry_after_http_date() -> None:
    now = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)

    assert parse_retry_after("Mon, 19 Oct 2026 12:00:30 GMT", now=now) == pytest.approx(30.0)


def test_parse_retry_after_past_date_is_zero() -> None:
    now = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)

    assert parse_retry_after("Mon, 19 Oct 2026 11:00:00 GMT", now=now) == 0.0


@pytest.mark.parametrize("value", [None, "", "soon", "-3"])
def test_parse_retry_after_garbage(value: str | None) -> None:
    assert parse_retry_after(value) is None


def test_backoff_uses_default_without_header() -> None:
    assert backoff_delay({}, default=1.5, maximum=60.0) == 1.5


def test_backoff_is_clamped() -> None:
    assert backoff_delay({"Retry-After": "3600"}, default=1.0, maximum=60.0) == 60.0


def test_retry_policy_from_config() -> None:
    policy = RetryPolicy.from_config(ClientConfig(max_retries=2, default_backoff=0.5, max_backoff=4.0))

    trace = RequestTrace()
    trace.record_retry(0.5)
    trace.record_retry(0.5)

    assert policy.exhausted(trace)
    assert policy.delay_for({"Retry-After": "9"}) == 4.0


def test_trace_counts_attempts_and_terminal_state() -> None:
    trace = RequestTrace()
    for state in (
        RequestState.WAITING,
        RequestState.DISPATCHED,
        RequestState.THROTTLED,
        RequestState.WAITING,
        RequestState.DISPATCHED,
        RequestState.SUCCESS,
    ):
        trace.transition(state)

    assert trace.states[0] is RequestState.PENDING
    assert trace.attempts == 2
    assert trace.finished


class TestDecodeBody:
    def test_lookup_decodes_record(self) -> None:
        descriptor = RequestBuilder.for_record(Artist).id("a").build()

        artist = decode_body(descriptor, Artist, '{"id": "a", "name": "Nirvana"}')

        assert artist == Artist(id="a", name="Nirvana")

    def test_browse_and_search_wrap_pages(self) -> None:
        browse = RequestBuilder.for_record(Release).by("label", "l").build()
        search = RequestBuilder.for_record(Artist).query("nirvana").build()

        page = decode_body(browse, Release, '{"release-count": 0, "release-offset": 0, "releases": []}')
        hits = decode_body(search, Artist, '{"count": 0, "offset": 0, "artists": []}')

        assert isinstance(page, BrowseResult)
        assert isinstance(hits, SearchResult)

    def test_url_resource_browse_decodes_single_object(self) -> None:
        browse = RequestBuilder.for_record(Url).by("resource", "https://www.nirvana.com/").build()
        body = '{"id": "u1", "resource": "https://www.nirvana.com/"}'

        page = decode_body(browse, Url, body)

        assert isinstance(page, BrowseResult)
        assert [url.resource for url in page.entities] == ["https://www.nirvana.com/"]

    def test_browse_body_missing_counters_is_a_deserialization_error(self) -> None:
        browse = RequestBuilder.for_record(Release).by("label", "l").build()

        with pytest.raises(DeserializationError) as excinfo:
            _ = decode_body(browse, Release, "{}")

        assert excinfo.value.raw_body == "{}"

    def test_invalid_json_keeps_raw_body(self) -> None:
        descriptor = RequestBuilder.for_record(Artist).id("a").build()

        with pytest.raises(DeserializationError) as excinfo:
            _ = decode_body(descriptor, Artist, "<html>oops</html>")

        assert excinfo.value.raw_body == "<html>oops</html>"

    def test_schema_mismatch_keeps_raw_body(self) -> None:
        descriptor = RequestBuilder.for_record(Artist).id("a").build()

        with pytest.raises(DeserializationError, match="Artist") as excinfo:
            _ = decode_body(descriptor, Artist, '{"id": "a"}')

        assert excinfo.value.raw_body == '{"id": "a"}'
