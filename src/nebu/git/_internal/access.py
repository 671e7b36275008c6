"""Repository access layer - owns pygit2.Repository and exposes computed facts.

Only commit ids (hex strings), reference names and paths leave this class;
callers never hold pygit2 graph objects beyond a single operation.
"""

from __future__ import annotations

from pathlib import Path

import pygit2

from nebu.git._internal.constants import CHECKOUT_FORCE, OPEN_NO_SEARCH
from nebu.git._internal.errors import git_operation, is_not_found
from nebu.git.errors import (
    BranchNotFoundError,
    DetachedHeadError,
    GitError,
    NotARepositoryError,
    RefNotFoundError,
    RemoteNotFoundError,
    UpstreamNotFoundError,
)
from nebu.git.models import Divergence, MergeAnalysis


class RepoAccess:
    """Owns pygit2.Repository and provides normalized access to repo state."""

    def __init__(self, repo_path: Path | str, repo: pygit2.Repository | None = None) -> None:
        self._path = Path(repo_path)
        if repo is not None:
            self._repo = repo
            return
        try:
            # NO_SEARCH: a cache dir nested in another checkout must not open the parent
            self._repo = pygit2.Repository(str(self._path), OPEN_NO_SEARCH)
        except (pygit2.GitError, KeyError) as e:
            if is_not_found(e):
                raise NotARepositoryError(str(self._path)) from e
            raise GitError(f"open failed: {e}") from e

    @classmethod
    def open(cls, repo_path: Path | str) -> RepoAccess:
        """Open an existing repository, raising NotARepositoryError if absent."""
        return cls(repo_path)

    @classmethod
    def clone(
        cls,
        url: str,
        repo_path: Path | str,
        *,
        branch: str,
        remote_name: str,
        callbacks: pygit2.RemoteCallbacks,
    ) -> RepoAccess:
        """Clone ``url`` into ``repo_path`` with ``branch`` checked out."""

        def create_remote(repo: pygit2.Repository, _name: str, remote_url: str) -> pygit2.Remote:
            return repo.remotes.create(remote_name, remote_url)

        with git_operation("clone", remote=remote_name):
            repo = pygit2.clone_repository(
                url,
                str(repo_path),
                remote=create_remote,
                checkout_branch=branch,
                callbacks=callbacks,
            )
        with git_operation("set upstream", remote=remote_name):
            # libgit2 records branch.<name>.remote = origin whatever the remote is called
            repo.branches.local[branch].upstream = repo.branches.remote[
                f"{remote_name}/{branch}"
            ]
        return cls(repo_path, repo)

    @property
    def repo(self) -> pygit2.Repository:
        return self._repo

    @property
    def path(self) -> Path:
        return Path(self._repo.workdir) if self._repo.workdir else self._path

    # =========================================================================
    # Repository State Facts
    # =========================================================================

    @property
    def is_unborn(self) -> bool:
        return self._repo.head_is_unborn

    @property
    def is_detached(self) -> bool:
        return self._repo.head_is_detached

    def head_commit_id(self) -> str | None:
        """HEAD commit id, or None if unborn."""
        if self.is_unborn:
            return None
        return str(self._repo.head.target)

    def head_ref_name(self) -> str:
        """Full name of the reference HEAD points at (e.g. refs/heads/main)."""
        if self.is_detached:
            raise DetachedHeadError("fast-forward")
        with git_operation("resolve HEAD"):
            head = self._repo.references["HEAD"]
        target = head.target
        if not isinstance(target, str):
            raise DetachedHeadError("fast-forward")
        return target

    # =========================================================================
    # Branch Access
    # =========================================================================

    def find_local_branch(self, name: str) -> pygit2.Branch:
        branch = self._repo.branches.local.get(name)
        if branch is None:
            raise BranchNotFoundError(name)
        return branch

    def branch_tip(self, branch: pygit2.Branch) -> str:
        """Commit id the branch points at, resolving symbolic refs."""
        try:
            return str(branch.resolve().target)
        except (pygit2.GitError, KeyError) as e:
            raise RefNotFoundError(branch.name) from e

    def upstream_of(self, branch: pygit2.Branch) -> pygit2.Branch:
        try:
            upstream = branch.upstream
        except (pygit2.GitError, KeyError, ValueError) as e:
            raise UpstreamNotFoundError(branch.branch_name) from e
        if upstream is None:
            raise UpstreamNotFoundError(branch.branch_name)
        return upstream

    def ahead_behind(self, local: str, upstream: str) -> Divergence:
        with git_operation("ahead/behind"):
            ahead, behind = self._repo.ahead_behind(
                pygit2.Oid(hex=local), pygit2.Oid(hex=upstream)
            )
        return Divergence(ahead=ahead, behind=behind)

    # =========================================================================
    # Remote Access
    # =========================================================================

    def find_remote(self, name: str) -> pygit2.Remote:
        if name not in [r.name for r in self._repo.remotes]:
            raise RemoteNotFoundError(name)
        return self._repo.remotes[name]

    def fetch_refspecs(self, remote: pygit2.Remote) -> list[str]:
        return list(remote.fetch_refspecs)

    def fetch(
        self,
        remote: pygit2.Remote,
        refspecs: list[str],
        callbacks: pygit2.RemoteCallbacks,
    ) -> None:
        """Fetch exactly ``refspecs`` from ``remote``; updates FETCH_HEAD."""
        with git_operation("fetch", remote=remote.name):
            remote.fetch(refspecs, callbacks=callbacks)

    # =========================================================================
    # References
    # =========================================================================

    def resolve_ref(self, name: str) -> pygit2.Reference:
        try:
            return self._repo.lookup_reference(name)
        except (KeyError, ValueError, pygit2.InvalidSpecError) as e:
            raise RefNotFoundError(name) from e

    def reference_commit_id(self, ref: pygit2.Reference) -> str:
        """Peel a reference to the id of the commit it designates."""
        try:
            return str(ref.peel(pygit2.Commit).id)
        except (pygit2.GitError, KeyError, ValueError) as e:
            raise RefNotFoundError(ref.name) from e

    def set_ref_target(self, ref_name: str, commit_id: str, reason: str) -> None:
        ref = self.resolve_ref(ref_name)
        with git_operation("update ref"):
            ref.set_target(pygit2.Oid(hex=commit_id), reason)

    def set_head(self, ref_name: str) -> None:
        """Set HEAD to a ref name (e.g., 'refs/heads/main')."""
        with git_operation("set HEAD"):
            self._repo.set_head(ref_name)

    def checkout_head(self, force: bool = True) -> None:
        """Check out HEAD; with force, local working-tree changes are discarded."""
        with git_operation("checkout"):
            if force:
                self._repo.checkout_head(strategy=CHECKOUT_FORCE)
            else:
                self._repo.checkout_head()

    # =========================================================================
    # Merge Analysis
    # =========================================================================

    def merge_analysis(self, their_id: str) -> MergeAnalysis:
        with git_operation("merge analysis"):
            analysis, _ = self._repo.merge_analysis(pygit2.Oid(hex=their_id))
        return MergeAnalysis.from_flags(analysis)
