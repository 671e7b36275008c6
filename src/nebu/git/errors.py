"""Git module error types."""


class GitError(Exception):
    """Base error for git operations."""

    pass


class NotARepositoryError(GitError):
    """Path is not a git repository."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Not a git repository: {path}")
        self.path = path


class RefNotFoundError(GitError):
    """Reference (branch, tag, commit) not found."""

    def __init__(self, ref: str) -> None:
        super().__init__(f"Reference not found: {ref}")
        self.ref = ref


class BranchNotFoundError(GitError):
    """Local branch not found."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Branch not found: {name}")
        self.name = name


class UpstreamNotFoundError(GitError):
    """Branch has no tracked upstream, or the upstream ref is missing."""

    def __init__(self, branch: str) -> None:
        super().__init__(f"Branch has no upstream: {branch}")
        self.branch = branch


class DetachedHeadError(GitError):
    """Operation requires a branch but HEAD is detached."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"Cannot {operation}: HEAD is detached")
        self.operation = operation


class RemoteNotFoundError(GitError):
    """Remote is not configured in the repository."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Remote not found: {name}")
        self.name = name


class RemoteError(GitError):
    """Error communicating with remote."""

    def __init__(self, remote: str, message: str) -> None:
        super().__init__(f"Remote error ({remote}): {message}")
        self.remote = remote


class AuthenticationError(GitError):
    """Authentication failed for remote operation."""

    def __init__(self, remote: str, operation: str | None = None) -> None:
        op_part = f" during {operation}" if operation else ""
        super().__init__(f"Authentication failed for remote {remote!r}{op_part}")
        self.remote = remote
        self.operation = operation


class NoCredentialsError(GitError):
    """Every credential strategy was exhausted for an auth challenge."""

    def __init__(self, url: str, allowed_types: int) -> None:
        super().__init__(f"No suitable credentials found for {url}")
        self.url = url
        self.allowed_types = allowed_types
