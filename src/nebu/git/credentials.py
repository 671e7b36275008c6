"""Credential negotiation for git remote operations.

The decision of *which* credential to offer is a pure function,
:func:`negotiate_credentials`, over explicit inputs: the credential types the
transport accepts, the remote URL, the username hint supplied by the
transport, a credential-helper lookup and the attempt number. The pygit2
callback object only counts attempts for a single clone/fetch and converts
the decision into pygit2 credential objects.

Order (fixed):

1. SSH agent, trying the transport username, then the helper username, then
   ``git``.
2. Username/password from the credential helper, falling back to ``git`` with
   a blank password.
3. The transport's default credential.
"""

from __future__ import annotations

import os
import subprocess
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import Enum, auto
from itertools import islice
from urllib.parse import urlparse

import pygit2

from nebu.git._internal.constants import CRED_DEFAULT, CRED_SSH_KEY, CRED_USERPASS_PLAINTEXT
from nebu.git.errors import NoCredentialsError

DEFAULT_USERNAME = "git"


class AuthMethod(Enum):
    """Kinds of authentication attempt the negotiator can choose."""

    SSH_AGENT = auto()
    USERPASS = auto()
    DEFAULT = auto()


@dataclass(frozen=True, slots=True)
class StoredCredential:
    """Credential material returned by a credential helper."""

    username: str
    password: str | None = None


@dataclass(frozen=True, slots=True)
class CredentialAttempt:
    """A single authentication attempt chosen by the negotiator."""

    method: AuthMethod
    username: str | None = None
    password: str | None = None


CredentialLookup = Callable[[str], StoredCredential | None]


def query_credential_helper(url: str) -> StoredCredential | None:
    """
    Query the system git credential helper without prompting.

    Invokes: git credential fill
    See: https://git-scm.com/docs/git-credential
    """
    parsed = urlparse(url)
    host = parsed.hostname or parsed.netloc
    if not parsed.scheme or not host:
        return None
    input_lines = [
        f"protocol={parsed.scheme}",
        f"host={host}",
    ]
    if parsed.port is not None:
        input_lines.append(f"port={parsed.port}")
    if parsed.path:
        input_lines.append(f"path={parsed.path.lstrip('/')}")
    input_lines.append("")  # Empty line terminates input
    input_data = "\n".join(input_lines)

    try:
        result = subprocess.run(
            ["git", "credential", "fill"],
            input=input_data,
            capture_output=True,
            text=True,
            timeout=30,
            check=False,
            env={**os.environ, "GIT_TERMINAL_PROMPT": "0"},
        )
    except (subprocess.TimeoutExpired, FileNotFoundError, OSError):
        # No git binary or no helper: same as nothing configured
        return None
    if result.returncode != 0:
        return None

    creds: dict[str, str] = {}
    for line in result.stdout.strip().split("\n"):
        if "=" in line:
            key, value = line.split("=", 1)
            creds[key] = value

    if not creds.get("username"):
        return None
    return StoredCredential(creds["username"], creds.get("password"))


def _ssh_usernames(url: str, username_hint: str | None, lookup: CredentialLookup) -> Iterator[str]:
    """Yield distinct SSH usernames in priority order; lookup runs only when reached."""
    seen: set[str] = set()

    def candidates() -> Iterator[str | None]:
        yield username_hint
        stored = lookup(url)
        yield stored.username if stored else None
        yield DEFAULT_USERNAME

    for name in candidates():
        if name and name not in seen:
            seen.add(name)
            yield name


def negotiate_credentials(
    allowed_types: int,
    url: str,
    username_hint: str | None,
    lookup: CredentialLookup,
    attempt: int = 0,
) -> CredentialAttempt:
    """Choose the credential to offer for one auth challenge.

    Args:
        allowed_types: Credential type flags accepted by the transport.
        url: Remote URL being authenticated against.
        username_hint: Username supplied by the transport (e.g. from the URL).
        lookup: Credential-helper lookup for ``url``.
        attempt: Zero-based number of earlier challenges in this operation.

    Returns:
        The credential attempt to make.

    Raises:
        NoCredentialsError: No strategy is left for this challenge.
    """
    if allowed_types & CRED_SSH_KEY:
        username = next(islice(_ssh_usernames(url, username_hint, lookup), attempt, None), None)
        if username is not None:
            return CredentialAttempt(AuthMethod.SSH_AGENT, username=username)
    elif allowed_types & CRED_USERPASS_PLAINTEXT:
        if attempt == 0:
            stored = lookup(url)
            if stored is None:
                return CredentialAttempt(AuthMethod.USERPASS, DEFAULT_USERNAME, "")
            return CredentialAttempt(AuthMethod.USERPASS, stored.username, stored.password or "")
    elif allowed_types & CRED_DEFAULT:
        if attempt == 0:
            return CredentialAttempt(AuthMethod.DEFAULT)

    raise NoCredentialsError(url, int(allowed_types))


def to_pygit2(
    attempt: CredentialAttempt,
) -> pygit2.KeypairFromAgent | pygit2.UserPass:
    """Convert a negotiated attempt into a pygit2 credential object.

    The default credential has no pygit2 object; raising ``Passthrough`` makes
    libgit2 behave as if no callback were set, which uses the default
    credential for the challenge.
    """
    if attempt.method is AuthMethod.SSH_AGENT:
        return pygit2.KeypairFromAgent(attempt.username)
    if attempt.method is AuthMethod.USERPASS:
        return pygit2.UserPass(attempt.username, attempt.password)
    raise pygit2.Passthrough


class NegotiatingCallbacks(pygit2.RemoteCallbacks):
    """RemoteCallbacks for one clone or fetch, backed by negotiate_credentials."""

    def __init__(self, lookup: CredentialLookup | None = None) -> None:
        super().__init__()
        self._lookup = lookup or query_credential_helper
        self._attempts = 0

    @property
    def attempts(self) -> int:
        return self._attempts

    def credentials(  # type: ignore[override]
        self,
        url: str,
        username_from_url: str | None,
        allowed_types: int,
    ) -> pygit2.KeypairFromAgent | pygit2.UserPass:
        """Provide credentials for remote operations."""
        attempt = self._attempts
        self._attempts += 1
        choice = negotiate_credentials(
            allowed_types, url, username_from_url, self._lookup, attempt=attempt
        )
        return to_pygit2(choice)


def get_default_callbacks(lookup: CredentialLookup | None = None) -> NegotiatingCallbacks:
    """Get fresh remote callbacks with system credential helper support."""
    return NegotiatingCallbacks(lookup)
