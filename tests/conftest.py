"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages and
provides a template "origin" repository shared by the git, cache and CLI
tests.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path

# Insert local src directory at the beginning of sys.path
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of nebu modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("nebu"):
        del sys.modules[module_name]

import pygit2  # noqa: E402
import pytest  # noqa: E402

SIGNATURE = pygit2.Signature("Test User", "test@example.com")


def commit_file(repo: pygit2.Repository, name: str, content: str, message: str | None = None) -> str:
    """Write, stage and commit one file on HEAD. Returns the new commit id."""
    workdir = Path(repo.workdir)
    (workdir / name).write_text(content)
    repo.index.add(name)
    repo.index.write()
    tree = repo.index.write_tree()
    parents = [] if repo.head_is_unborn else [repo.head.target]
    oid = repo.create_commit("HEAD", SIGNATURE, SIGNATURE, message or f"Update {name}", tree, parents)
    return str(oid)


class TemplateOrigin:
    """A bare repository standing in for the remote template, plus an author clone."""

    def __init__(self, root: Path) -> None:
        self.bare_path = root / "origin.git"
        self.bare = pygit2.init_repository(str(self.bare_path), bare=True, initial_head="main")
        self.author_path = root / "author"
        self.author = pygit2.init_repository(str(self.author_path), initial_head="main")
        self.author.remotes.create("origin", str(self.bare_path))
        self.publish("README.md", "# Template\n", "Initial commit")

    @property
    def url(self) -> str:
        return str(self.bare_path)

    @property
    def tip(self) -> str:
        return str(self.bare.references["refs/heads/main"].target)

    def publish(self, name: str, content: str, message: str | None = None) -> str:
        """Commit a file in the author clone and push it to the bare origin."""
        oid = commit_file(self.author, name, content, message)
        self.author.remotes["origin"].push(["refs/heads/main:refs/heads/main"])
        return oid


@pytest.fixture(name="commit_file")
def commit_file_fixture() -> Callable[..., str]:
    """The commit_file helper, for tests that build history by hand."""
    return commit_file


@pytest.fixture
def origin(tmp_path: Path) -> TemplateOrigin:
    """Template origin with a single initial commit on main."""
    return TemplateOrigin(tmp_path / "remote")


@pytest.fixture
def cache_root(tmp_path: Path) -> Path:
    """Empty cache root (not created)."""
    return tmp_path / "cache"


@pytest.fixture(autouse=True)
def isolate_nebu_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's environment and global config out of tests."""
    import os

    for name in list(os.environ):
        if name.startswith("NEBU"):
            monkeypatch.delenv(name)
    monkeypatch.setattr("nebu.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "no-global.yaml")
