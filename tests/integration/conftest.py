"""Integration test fixtures.

Provides a fully wired AppState: real UrlCache, resolver and lookup client
(over a respx-mockable httpx client), with a fake repository inspector so
handler tests do not depend on a git checkout. Shared fakes come from
tests/conftest.py.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import httpx
import pytest

from codelink.config import LookupSettings, Settings
from codelink.lookup import LookupClient
from codelink.resolver import UrlResolver
from codelink.state import AppState

if TYPE_CHECKING:
    from codelink.cache import UrlCache
    from tests.conftest import FakeInspector

API = "https://lookup.example.com/projects"


@pytest.fixture()
def subprocess_env() -> dict[str, str]:
    """Baseline env dict for subprocess-based MCP integration tests."""
    env = os.environ.copy()
    env["CODELINK__LOOKUP__API_ENDPOINT"] = ""
    env["CODELINK__LOGGING__LEVEL"] = "WARNING"
    return env


def _state(
    settings: Settings,
    url_cache: UrlCache,
    inspector: FakeInspector,
    client: httpx.AsyncClient,
) -> AppState:
    resolver = UrlResolver(
        url_cache,
        inspector,
        LookupClient(client),
        cache_timeout_seconds=settings.cache.timeout_seconds,
    )
    return AppState(
        settings=settings,
        cache=url_cache,
        inspector=inspector,
        resolver=resolver,
        http_client=client,
    )


@pytest.fixture()
async def app_state(url_cache: UrlCache, inspector: FakeInspector) -> AppState:
    """AppState in local remote mode."""
    async with httpx.AsyncClient() as client:
        yield _state(Settings(lookup=LookupSettings(api_endpoint="")), url_cache, inspector, client)


@pytest.fixture()
async def api_state(url_cache: UrlCache, inspector: FakeInspector) -> AppState:
    """AppState with the lookup service configured."""
    async with httpx.AsyncClient() as client:
        yield _state(
            Settings(lookup=LookupSettings(api_endpoint=API)), url_cache, inspector, client
        )
