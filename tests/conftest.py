"""Pytest fixtures standing in for the GitHub API."""
from __future__ import annotations

from typing import Any

import pytest
import requests


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, headers: dict | None = None) -> None:
        self.status_code = status_code
        self._payload = payload
        self.headers = headers or {}

    def json(self) -> Any:
        return self._payload

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error", response=self)


class FakeSession:
    """Answers GET requests from a {url: FakeResponse} table and records calls."""

    def __init__(self, responses: dict[str, FakeResponse]) -> None:
        self.responses = responses
        self.headers: dict[str, str] = {}
        self.calls: list[tuple[str, Any]] = []

    def get(self, url: str, timeout: Any = None) -> FakeResponse:
        self.calls.append((url, timeout))
        if url not in self.responses:
            return FakeResponse(404, {"message": "Not Found"})
        return self.responses[url]


class StubClient:
    """Stands in for GitHubClient keyed by (owner, repo)."""

    def __init__(self, languages: dict[tuple[str, str], dict[str, int]]) -> None:
        self.languages = languages
        self.requested: list[tuple[str, str]] = []

    def list_languages(self, owner: str, repo: str) -> dict[str, int]:
        self.requested.append((owner, repo))
        if (owner, repo) not in self.languages:
            raise requests.HTTPError(f"404 Not Found: {owner}/{repo}")
        return dict(self.languages[(owner, repo)])


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def make_response():
    """Build canned API responses: make_response(status, payload, headers)."""
    return FakeResponse


@pytest.fixture
def make_session():
    """Build a session answering from a {url: response} table."""
    return FakeSession


@pytest.fixture
def make_stub_client():
    """Build a client answering from a {(owner, repo): languages} table."""
    return StubClient


@pytest.fixture
def fake_clock():
    """A controllable clock whose sleep() advances time."""
    return FakeClock()
