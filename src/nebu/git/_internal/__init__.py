"""Internal components for git operations - not part of public API."""

from nebu.git._internal.access import RepoAccess
from nebu.git._internal.errors import ErrorMapper, git_operation, is_not_found

__all__ = [
    "ErrorMapper",
    "RepoAccess",
    "git_operation",
    "is_not_found",
]
