"""Test fixtures for the cache module."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest

from nebu.cache import CacheManager, RepoCache
from nebu.git._internal.access import RepoAccess

if TYPE_CHECKING:
    from conftest import TemplateOrigin


@dataclass
class BackendCalls:
    """Network operations performed through RepoAccess."""

    clones: list[str] = field(default_factory=list)
    fetches: list[list[str]] = field(default_factory=list)

    @property
    def network(self) -> int:
        return len(self.clones) + len(self.fetches)

    def reset(self) -> None:
        self.clones.clear()
        self.fetches.clear()


@pytest.fixture
def backend_calls(monkeypatch: pytest.MonkeyPatch) -> BackendCalls:
    """Record clone and fetch calls while still performing them."""
    calls = BackendCalls()
    original_clone = RepoAccess.clone
    original_fetch = RepoAccess.fetch

    def recording_clone(url: str, *args: Any, **kwargs: Any) -> RepoAccess:
        calls.clones.append(url)
        return original_clone(url, *args, **kwargs)

    def recording_fetch(self: RepoAccess, remote: Any, refspecs: list[str], callbacks: Any) -> None:
        calls.fetches.append(list(refspecs))
        original_fetch(self, remote, refspecs, callbacks)

    monkeypatch.setattr(RepoAccess, "clone", staticmethod(recording_clone))
    monkeypatch.setattr(RepoAccess, "fetch", recording_fetch)
    return calls


@pytest.fixture
def repo_cache(origin: TemplateOrigin) -> RepoCache:
    return RepoCache(origin.url, "main", "origin", credential_lookup=lambda _url: None)


@pytest.fixture
def manager(cache_root: Path, repo_cache: RepoCache) -> CacheManager[RepoCache]:
    return CacheManager(cache_root, repo_cache)


@pytest.fixture
def synced(manager: CacheManager[RepoCache]) -> CacheManager[RepoCache]:
    """Manager whose cache was just cloned from the origin."""
    manager.try_refresh()
    return manager
