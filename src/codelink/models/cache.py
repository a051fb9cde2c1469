from __future__ import annotations

from pydantic import BaseModel


class CacheEntry(BaseModel):
    """A resolved base URL for one project."""

    value: str
    timestamp: float  # Monotonic clock reading, seconds
