"""HTTP client for the project URL lookup service.

The service answers ``GET {api_endpoint}/{project_name}`` with a JSON object
whose ``original_url`` field holds the project's base URL. The LookupClient
receives an httpx.AsyncClient via constructor injection; the server lifespan
owns the client lifecycle.
"""

from __future__ import annotations

from urllib.parse import quote

import httpx
import structlog
from pydantic import ValidationError

from codelink import __version__
from codelink.errors import CodeLinkError, ErrorCode
from codelink.models.link import LookupResponse

log = structlog.get_logger()

# Some lookup service deployments serialise a JSON null as this string
NULL_SENTINEL = "null"


def build_http_client(timeout_seconds: float = 5.0) -> httpx.AsyncClient:
    """Create the shared httpx client. Called once at startup."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout_seconds),
        headers={"User-Agent": f"codelink/{__version__}", "Accept": "application/json"},
        limits=httpx.Limits(
            max_connections=5,
            max_keepalive_connections=2,
        ),
    )


def build_lookup_url(api_endpoint: str, project_name: str) -> str:
    """``https://api/projects`` + ``my repo`` → ``https://api/projects/my%20repo``."""
    return f"{api_endpoint.rstrip('/')}/{quote(project_name, safe='')}"


class LookupClient:
    """Fetches a project's original URL from the lookup service."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def fetch_original_url(self, api_endpoint: str, project_name: str) -> str | None:
        """Return the project's base URL, or ``None`` if the service has none.

        Raises CodeLinkError on network errors, non-2xx responses and bodies
        that are not a JSON object of the expected shape.
        """
        url = build_lookup_url(api_endpoint, project_name)

        try:
            response = await self._client.get(url)
        except httpx.HTTPError as exc:
            raise CodeLinkError(
                code=ErrorCode.API_LOOKUP_FAILED,
                message=f"Network error fetching {url}: {exc}",
                suggestion="Check that the lookup service is reachable.",
                recoverable=True,
            ) from exc

        if not response.is_success:
            raise CodeLinkError(
                code=ErrorCode.API_LOOKUP_FAILED,
                message=f"HTTP {response.status_code} fetching {url}",
                suggestion="The lookup service may be temporarily unavailable.",
                recoverable=True,
            )

        try:
            body = LookupResponse.model_validate_json(response.content)
        except ValidationError as exc:
            raise CodeLinkError(
                code=ErrorCode.API_LOOKUP_FAILED,
                message=f"Unexpected response body from {url}",
                suggestion="The lookup service must return a JSON object with 'original_url'.",
                recoverable=False,
            ) from exc

        log.info("lookup_complete", url=url, status_code=response.status_code)

        if not body.original_url or body.original_url == NULL_SENTINEL:
            return None
        return body.original_url
