"""Refresh contract implemented by every cacheable resource."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

import structlog

log = structlog.get_logger(__name__)


class Refresh(ABC):
    """A resource that can be cached under a location and kept up to date.

    Implementations never store the location; it is passed to every call.
    """

    @abstractmethod
    def cache_key(self) -> str:
        """Deterministic key for this resource's identity."""

    @abstractmethod
    def exists(self, location: Path) -> bool:
        """True if ``location`` holds a valid instance of the backing store."""

    @abstractmethod
    def is_fresh(self, location: Path) -> bool:
        """Whether the cached copy at ``location`` is up to date.

        Absence is a plain ``False``. Raises ``ProbeError`` only when the
        entry exists but cannot be judged.
        """

    @abstractmethod
    def refresh(self, location: Path) -> bool:
        """Synchronize unconditionally. Returns True if anything changed."""

    def try_refresh(self, location: Path) -> bool:
        """Refresh only if not fresh. Returns True if anything changed."""
        if self.is_fresh(location):
            log.debug("cache.fresh", location=str(location))
            return False
        log.debug("cache.stale", location=str(location))
        return self.refresh(location)
