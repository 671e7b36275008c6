"""Freshness-checked cache of remote resources."""

from nebu.cache.errors import CacheError, CacheFilesystemError, ProbeError, RefreshError
from nebu.cache.manager import CacheManager, CacheState
from nebu.cache.refresh import Refresh
from nebu.cache.repo import RepoCache, ResourceIdentity

__all__ = [
    "CacheManager",
    "CacheState",
    "Refresh",
    "RepoCache",
    "ResourceIdentity",
    # Errors
    "CacheError",
    "ProbeError",
    "RefreshError",
    "CacheFilesystemError",
]
