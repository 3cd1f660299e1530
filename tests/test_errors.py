"""Tests for the exception hierarchy."""

from __future__ import annotations

import pytest

from mbrainz import errors


@pytest.mark.parametrize(
    "error_type",
    [
        errors.InvalidIncludeError,
        errors.InvalidFilterError,
        errors.InvalidSearchFieldError,
        errors.PaginationError,
    ],
)
def test_builder_errors_are_validation_errors(error_type: type[Exception]) -> None:
    assert issubclass(error_type, errors.ValidationError)
    assert issubclass(error_type, errors.MusicBrainzError)


def test_include_configuration_error_is_configuration_error() -> None:
    assert issubclass(errors.IncludeConfigurationError, errors.ConfigurationError)


def test_api_error_extracts_ws2_message() -> None:
    error = errors.ApiError(404, '{"error": "Not Found", "help": "see docs"}', url="http://x")

    assert str(error) == "MusicBrainz HTTP error 404: Not Found"
    assert error.status == 404
    assert error.url == "http://x"


def test_api_error_with_non_json_body() -> None:
    assert str(errors.ApiError(502, "")) == "MusicBrainz HTTP error 502: <empty body>"
    assert "Bad Gateway" in str(errors.ApiError(502, "<h1>Bad Gateway</h1>"))


def test_rate_limited_error_reports_attempts() -> None:
    error = errors.RateLimitedError("http://x", 6)

    assert error.attempts == 6
    assert "6 attempts" in str(error)
