"""Base URL resolution with caching.

Order of precedence for a project:
  1. Cached value (unless force_refresh), skipping all I/O
  2. Lookup service, when an api_endpoint is configured
  3. Otherwise the repository's own git remote, normalised to HTTPS

Failures of either source come back as ``None``. Lookup errors are logged
here and never raised; the tool handler decides what the user sees.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from codelink.errors import CodeLinkError
from codelink.remote import normalize

if TYPE_CHECKING:
    from codelink.models.link import ResolutionRequest
    from codelink.protocols import CacheProtocol, InspectorProtocol, LookupProtocol

log = structlog.get_logger()


class UrlResolver:
    """Resolves a project's base URL. Holds the process-wide cache."""

    def __init__(
        self,
        cache: CacheProtocol,
        inspector: InspectorProtocol,
        lookup: LookupProtocol,
        *,
        cache_timeout_seconds: float,
    ) -> None:
        self._cache = cache
        self._inspector = inspector
        self._lookup = lookup
        self.cache_timeout_seconds = cache_timeout_seconds

    async def resolve(self, request: ResolutionRequest) -> str | None:
        project = request.project_name

        if not request.force_refresh:
            cached = self._cache.get(project, self.cache_timeout_seconds)
            if cached is not None:
                log.info("cache_hit", project=project)
                return cached

        if not request.api_endpoint:
            return await self._resolve_from_local_remote(project, request.local_remote_hint)
        return await self._resolve_from_lookup(request.api_endpoint, project)

    async def _resolve_from_local_remote(self, project: str, root: str | None) -> str | None:
        if not root:
            log.error("local_remote_missing_root", project=project)
            return None

        result = await self._inspector.remote_url(root)
        if not result.ok:
            log.warning("local_remote_unavailable", project=project, reason=result.reason)
            return None

        url = normalize(result.value)
        self._cache.put(project, url)
        log.info("resolved_from_local_remote", project=project, url=url)
        return url

    async def _resolve_from_lookup(self, api_endpoint: str, project: str) -> str | None:
        try:
            url = await self._lookup.fetch_original_url(api_endpoint, project)
        except CodeLinkError as exc:
            log.warning("lookup_failed", project=project, code=exc.code, message=exc.message)
            return None

        if url is None:
            log.warning("lookup_no_original_url", project=project)
            return None

        self._cache.put(project, url)
        log.info("resolved_from_lookup", project=project, url=url)
        return url
