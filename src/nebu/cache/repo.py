"""Git-backed template cache.

A cache entry is a full working copy of one branch of a remote repository.
Freshness is judged locally: the local branch tip against its remote-tracking
ref as of the last fetch. Updates are fetch plus fast-forward only; diverged
histories are left untouched.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from pathlib import Path

import structlog

from nebu.cache.errors import CacheFilesystemError, ProbeError, RefreshError
from nebu.cache.refresh import Refresh
from nebu.git._internal.access import RepoAccess
from nebu.git._internal.constants import FETCH_HEAD
from nebu.git.credentials import CredentialLookup, NegotiatingCallbacks
from nebu.git.errors import (
    BranchNotFoundError,
    NotARepositoryError,
    RefNotFoundError,
    RemoteNotFoundError,
    UpstreamNotFoundError,
)
from nebu.git.models import Divergence, VersionPointer

log = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ResourceIdentity:
    """What makes two template caches the same entry."""

    source_url: str
    branch_name: str = "main"
    remote_name: str = "origin"

    def cache_key(self) -> str:
        """SHA-256 hex digest over url, branch and remote, NUL-separated."""
        digest = hashlib.sha256()
        for part in (self.source_url, self.branch_name, self.remote_name):
            digest.update(part.encode("utf-8"))
            digest.update(b"\0")
        return digest.hexdigest()


class RepoCache(Refresh):
    """Refreshable cache of one branch of a remote git repository."""

    def __init__(
        self,
        url: str,
        branch: str = "main",
        remote: str = "origin",
        *,
        credential_lookup: CredentialLookup | None = None,
    ) -> None:
        self._identity = ResourceIdentity(url, branch, remote)
        self._credential_lookup = credential_lookup

    @property
    def identity(self) -> ResourceIdentity:
        return self._identity

    @property
    def url(self) -> str:
        return self._identity.source_url

    @property
    def branch(self) -> str:
        return self._identity.branch_name

    @property
    def remote(self) -> str:
        return self._identity.remote_name

    def cache_key(self) -> str:
        return self._identity.cache_key()

    def _callbacks(self) -> NegotiatingCallbacks:
        # One per clone/fetch: the attempt counter must start at zero
        return NegotiatingCallbacks(self._credential_lookup)

    def _open(self, location: Path) -> RepoAccess | None:
        try:
            return RepoAccess.open(location)
        except NotARepositoryError:
            return None

    def exists(self, location: Path) -> bool:
        return Path(location).is_dir() and self._open(Path(location)) is not None

    # =========================================================================
    # Freshness probe
    # =========================================================================

    def version_pointer(self, access: RepoAccess) -> VersionPointer:
        """Local branch tip and tracked upstream tip."""
        try:
            branch = access.find_local_branch(self.branch)
            local = access.branch_tip(branch)
            upstream = access.branch_tip(access.upstream_of(branch))
        except (BranchNotFoundError, UpstreamNotFoundError, RefNotFoundError) as e:
            raise ProbeError(access.path, str(e)) from e
        return VersionPointer(local=local, upstream=upstream)

    def divergence(self, location: Path) -> Divergence | None:
        """Divergence from the tracked upstream, or None if nothing is cached."""
        location = Path(location)
        if not location.is_dir():
            return None
        access = self._open(location)
        if access is None:
            return None
        pointer = self.version_pointer(access)
        return access.ahead_behind(pointer.local, pointer.upstream)

    def head_commit(self, location: Path) -> str | None:
        """Commit checked out in the cache, or None if nothing is cached."""
        access = self._open(Path(location)) if Path(location).is_dir() else None
        if access is None:
            return None
        return access.head_commit_id()

    def is_fresh(self, location: Path) -> bool:
        divergence = self.divergence(location)
        if divergence is None:
            return False
        log.debug(
            "cache.probe",
            location=str(location),
            ahead=divergence.ahead,
            behind=divergence.behind,
        )
        return divergence.is_synced

    # =========================================================================
    # Synchronization
    # =========================================================================

    def refresh(self, location: Path) -> bool:
        location = Path(location)
        try:
            location.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CacheFilesystemError(location, f"cannot create cache directory: {e}") from e

        access = self._open(location)
        if access is None:
            try:
                populated = next(location.iterdir(), None) is not None
            except OSError as e:
                raise CacheFilesystemError(location, f"cannot read cache directory: {e}") from e
            if populated:
                raise RefreshError(location, "cache directory is uninitialized and not empty")
            self._clone(location)
            return True
        return self._fetch_and_fast_forward(access, location)

    def _clone(self, location: Path) -> None:
        log.info("cache.clone", url=self.url, branch=self.branch, location=str(location))
        RepoAccess.clone(
            self.url,
            location,
            branch=self.branch,
            remote_name=self.remote,
            callbacks=self._callbacks(),
        )

    def _fetch_and_fast_forward(self, access: RepoAccess, location: Path) -> bool:
        try:
            remote = access.find_remote(self.remote)
        except RemoteNotFoundError as e:
            raise RefreshError(location, str(e)) from e

        refspecs = access.fetch_refspecs(remote)
        log.info("cache.fetch", remote=self.remote, refspecs=refspecs, location=str(location))
        access.fetch(remote, refspecs, self._callbacks())

        fetched = access.reference_commit_id(access.resolve_ref(FETCH_HEAD))
        analysis = access.merge_analysis(fetched)

        if analysis.up_to_date:
            log.debug("cache.up_to_date", location=str(location), commit=fetched)
            return False
        if analysis.unborn:
            log.warning("cache.unborn_head", location=str(location))
            return False
        if not analysis.fastforward_possible:
            log.warning(
                "cache.diverged",
                location=str(location),
                branch=self.branch,
                fetched=fetched,
            )
            return False

        ref_name = access.head_ref_name()
        access.set_ref_target(ref_name, fetched, f"nebu: fast-forward to {fetched}")
        access.set_head(ref_name)
        access.checkout_head(force=True)
        log.info("cache.fast_forward", location=str(location), ref=ref_name, commit=fetched)
        return True
