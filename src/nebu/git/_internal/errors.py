"""Centralized error mapping for pygit2 exceptions."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager

import pygit2

from nebu.git.errors import AuthenticationError, GitError, RemoteError

_NOT_FOUND_MARKERS = ("not found", "could not find repository", "not a git repository")


def is_not_found(exc: BaseException) -> bool:
    """True if a pygit2 open failure means "no repository here"."""
    if isinstance(exc, KeyError):
        return True
    msg = str(exc).lower()
    return any(marker in msg for marker in _NOT_FOUND_MARKERS)


class ErrorMapper:
    """Maps pygit2 exceptions to domain errors."""

    @staticmethod
    @contextmanager
    def guard(operation: str, *, remote: str | None = None) -> Iterator[None]:
        """Context manager for consistent exception translation."""
        try:
            yield
        # libgit2 not-found and already-exists surface as KeyError and ValueError
        except (pygit2.GitError, KeyError, ValueError) as e:
            msg = str(e).lower()
            if ("authentication" in msg or "credential" in msg) and remote:
                raise AuthenticationError(remote, operation) from e
            if remote:
                raise RemoteError(remote, f"{operation} failed: {e}") from e
            raise GitError(f"{operation} failed: {e}") from e


def git_operation(operation: str, *, remote: str | None = None) -> AbstractContextManager[None]:
    """Wrap a backend call so pygit2 errors surface as domain errors."""
    return ErrorMapper.guard(operation, remote=remote)
