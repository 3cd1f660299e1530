"""Shared pytest fixtures: fake clocks and scripted HTTP sessions."""

from __future__ import annotations

import json
import os
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
import requests
from requests.structures import CaseInsensitiveDict

FIXTURES_DIR = Path(__file__).parent / "fixtures"


class FakeClock:
    """Monotonic clock that only advances when something sleeps."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def monotonic(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class FakeAsyncClock:
    """Awaitable variant of ``FakeClock``."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def monotonic(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


def make_response(
    status: int = 200,
    body: str | dict[str, Any] = "",
    headers: dict[str, str] | None = None,
) -> requests.Response:
    """Build a real ``requests.Response`` without touching the network."""

    response = requests.Response()
    response.status_code = status
    text = body if isinstance(body, str) else json.dumps(body)
    response._content = text.encode("utf-8")  # pyright: ignore[reportPrivateUsage]
    response.encoding = "utf-8"
    response.headers = CaseInsensitiveDict(headers or {})
    return response


class ScriptedSession(requests.Session):
    """Session replaying queued responses or exceptions in order."""

    def __init__(self, *outcomes: requests.Response | Exception) -> None:
        super().__init__()
        self.outcomes: list[requests.Response | Exception] = list(outcomes)
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    def request(self, method: str, url: str, *args: Any, **kwargs: Any) -> requests.Response:  # pyright: ignore[reportIncompatibleMethodOverride]
        self.calls.append({"method": method, "url": url, **kwargs})
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def close(self) -> None:
        self.closed = True
        super().close()


def load_fixture(relative: str) -> Any:
    return json.loads((FIXTURES_DIR / relative).read_text(encoding="utf-8"))


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fake_async_clock() -> FakeAsyncClock:
    return FakeAsyncClock()


@pytest.fixture
def artist_payload() -> dict[str, Any]:
    return load_fixture("lookup/artist.json")


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep real ``MBRAINZ_*`` variables from leaking into tests."""

    for name in list(os.environ):
        if name.startswith("MBRAINZ_"):
            monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def response_factory() -> Any:
    return make_response


@pytest.fixture
def session_factory() -> type[ScriptedSession]:
    return ScriptedSession


@pytest.fixture
def fixture_loader() -> Any:
    return load_fixture
