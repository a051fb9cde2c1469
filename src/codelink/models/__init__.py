from __future__ import annotations

from codelink.models.cache import CacheEntry
from codelink.models.link import LinkArtifact, LookupResponse, ResolutionRequest, Selection
from codelink.models.tools import ClearCacheOutput, CopyCodeLinkOutput

__all__ = [
    # cache
    "CacheEntry",
    # link
    "Selection",
    "ResolutionRequest",
    "LinkArtifact",
    "LookupResponse",
    # tools
    "CopyCodeLinkOutput",
    "ClearCacheOutput",
]
