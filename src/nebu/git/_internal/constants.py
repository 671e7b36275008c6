"""Internal pygit2 constants - keeps trivia out of public modules."""

from __future__ import annotations

from pygit2.enums import CheckoutStrategy, CredentialType, MergeAnalysis, RepositoryOpenFlag

# Repository open flags
OPEN_NO_SEARCH = RepositoryOpenFlag.NO_SEARCH

# Checkout strategies
CHECKOUT_FORCE = CheckoutStrategy.FORCE

# Merge analysis flags
MERGE_UP_TO_DATE = MergeAnalysis.UP_TO_DATE
MERGE_FASTFORWARD = MergeAnalysis.FASTFORWARD
MERGE_NORMAL = MergeAnalysis.NORMAL
MERGE_UNBORN = MergeAnalysis.UNBORN

# Credential types offered by a transport
CRED_SSH_KEY = CredentialType.SSH_KEY
CRED_USERPASS_PLAINTEXT = CredentialType.USERPASS_PLAINTEXT
CRED_DEFAULT = CredentialType.DEFAULT

# Special refs
FETCH_HEAD = "FETCH_HEAD"
