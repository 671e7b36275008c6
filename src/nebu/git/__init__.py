"""Git access for the template cache."""

from nebu.git.credentials import (
    AuthMethod,
    CredentialAttempt,
    NegotiatingCallbacks,
    StoredCredential,
    get_default_callbacks,
    negotiate_credentials,
    query_credential_helper,
)
from nebu.git.errors import (
    AuthenticationError,
    BranchNotFoundError,
    DetachedHeadError,
    GitError,
    NoCredentialsError,
    NotARepositoryError,
    RefNotFoundError,
    RemoteError,
    RemoteNotFoundError,
    UpstreamNotFoundError,
)
from nebu.git.models import Divergence, MergeAnalysis, VersionPointer

__all__ = [
    # Models
    "VersionPointer",
    "Divergence",
    "MergeAnalysis",
    # Credentials
    "AuthMethod",
    "CredentialAttempt",
    "NegotiatingCallbacks",
    "StoredCredential",
    "get_default_callbacks",
    "negotiate_credentials",
    "query_credential_helper",
    # Errors
    "GitError",
    "NotARepositoryError",
    "RefNotFoundError",
    "BranchNotFoundError",
    "UpstreamNotFoundError",
    "DetachedHeadError",
    "RemoteNotFoundError",
    "RemoteError",
    "AuthenticationError",
    "NoCredentialsError",
]
