"""Shared test fixtures for the codelink test suite."""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from codelink.cache import UrlCache
from codelink.git import GitQueryResult


class FakeClock:
    """Manually advanced stand-in for time.monotonic."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@dataclass
class FakeInspector:
    """In-memory InspectorProtocol with per-query call counters."""

    root: str | None = "/repo"
    revision: str | None = "abc123"
    remote: str | None = "git@git.example.com:org/repo.git"
    calls: dict[str, int] = field(
        default_factory=lambda: {"find_root": 0, "current_revision": 0, "remote_url": 0}
    )

    @staticmethod
    def _result(value: str | None) -> GitQueryResult:
        if value is None:
            return GitQueryResult.missing("not configured")
        return GitQueryResult.found(value)

    async def find_root(self, start_dir: str) -> GitQueryResult:
        self.calls["find_root"] += 1
        return self._result(self.root)

    async def current_revision(self, root: str) -> GitQueryResult:
        self.calls["current_revision"] += 1
        return self._result(self.revision)

    async def remote_url(self, root: str) -> GitQueryResult:
        self.calls["remote_url"] += 1
        return self._result(self.remote)


@dataclass
class FakeLookup:
    """In-memory LookupProtocol returning a fixed URL."""

    url: str | None = "https://git.example.com/org/repo"
    error: Exception | None = None
    calls: int = 0

    async def fetch_original_url(self, api_endpoint: str, project_name: str) -> str | None:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.url


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def url_cache(clock: FakeClock) -> UrlCache:
    """A fresh cache per test, driven by the fake clock."""
    return UrlCache(clock=clock)


@pytest.fixture()
def inspector() -> FakeInspector:
    return FakeInspector()


@pytest.fixture()
def lookup() -> FakeLookup:
    return FakeLookup()
