"""Cache manager binding a cache root to a refreshable resource."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Generic, TypeVar

from nebu.cache.refresh import Refresh


class CacheState(Enum):
    """On-disk state of a cache entry."""

    ABSENT = "absent"
    UNINITIALIZED = "uninitialized"
    PRESENT = "present"


R = TypeVar("R", bound=Refresh)


class CacheManager(Generic[R]):
    """Owns the derived location of one resource under ``root``.

    Construction does no I/O. The manager never creates directories; the
    resource does that during ``refresh``.
    """

    def __init__(self, root: Path | str, resource: R) -> None:
        self._root = Path(root)
        self._resource = resource
        self._location = self._root / resource.cache_key()

    @property
    def root(self) -> Path:
        return self._root

    @property
    def resource(self) -> R:
        return self._resource

    @property
    def location(self) -> Path:
        return self._location

    def is_fresh(self) -> bool:
        return self._resource.is_fresh(self._location)

    def refresh(self) -> bool:
        return self._resource.refresh(self._location)

    def try_refresh(self) -> bool:
        return self._resource.try_refresh(self._location)

    def state(self) -> CacheState:
        if not self._location.is_dir():
            return CacheState.ABSENT
        if self._resource.exists(self._location):
            return CacheState.PRESENT
        return CacheState.UNINITIALIZED

    def __repr__(self) -> str:
        return f"CacheManager(location={str(self._location)!r})"
