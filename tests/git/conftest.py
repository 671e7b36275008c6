"""Test fixtures for git module."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

import pygit2
import pytest

from nebu.git._internal.access import RepoAccess
from nebu.git.credentials import NegotiatingCallbacks

if TYPE_CHECKING:
    from conftest import TemplateOrigin


@pytest.fixture
def clone_path(tmp_path: Path) -> Path:
    return tmp_path / "clone"


@pytest.fixture
def cloned(origin: TemplateOrigin, clone_path: Path) -> RepoAccess:
    """Clone of the origin with main checked out and tracking origin/main."""
    return RepoAccess.clone(
        origin.url,
        clone_path,
        branch="main",
        remote_name="origin",
        callbacks=NegotiatingCallbacks(lambda _url: None),
    )


@pytest.fixture
def plain_dir(tmp_path: Path) -> Path:
    path = tmp_path / "plain"
    path.mkdir()
    (path / "file.txt").write_text("not a repository\n")
    return path


@pytest.fixture
def local_only_repo(
    tmp_path: Path, commit_file: Callable[..., str]
) -> pygit2.Repository:
    """Repository with a main branch and no remotes."""
    repo = pygit2.init_repository(str(tmp_path / "local"), initial_head="main")
    commit_file(repo, "README.md", "# Local\n", "Initial commit")
    return repo
