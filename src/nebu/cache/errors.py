"""Cache module error types."""

from __future__ import annotations

from pathlib import Path


class CacheError(Exception):
    """Base error for cache operations."""

    def __init__(self, location: Path | str, reason: str) -> None:
        super().__init__(f"{reason} ({location})")
        self.location = Path(location)
        self.reason = reason


class ProbeError(CacheError):
    """Freshness could not be decided; the cache entry is inconsistent."""

    pass


class RefreshError(CacheError):
    """Synchronizing a cache entry failed."""

    pass


class CacheFilesystemError(RefreshError):
    """Cache directory could not be created."""

    pass
