"""nebu version command - show CLI and build information."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import asdict, dataclass

import click

from nebu.cli.utils import echo_json, output_format

__version__ = "0.1.0"


@dataclass(frozen=True, slots=True)
class CommitTagInfo:
    last_tag: str
    commits_since: str


@dataclass(frozen=True, slots=True)
class CommitInfo:
    short_hash: str
    hash: str
    date: str
    commit_tag_info: CommitTagInfo | None = None


@dataclass(frozen=True, slots=True)
class VersionInfo:
    """CLI version plus the commit it was built from, when known."""

    version: str
    commit_info: CommitInfo | None = None

    def __str__(self) -> str:
        text = self.version
        if self.commit_info is not None:
            text += f" {self.commit_info.date} ("
            if self.commit_info.commit_tag_info is not None:
                tag = self.commit_info.commit_tag_info
                text += f"{tag.last_tag}+{tag.commits_since} "
            text += f"{self.commit_info.short_hash})"
        return text


def nebu_version(env: Mapping[str, str] | None = None) -> VersionInfo:
    """Build version info from NEBU_COMMIT_* / NEBU_LAST_TAG* variables.

    Commit info needs hash, short hash and date all set; tag info needs both
    the tag and the distance.
    """
    env = os.environ if env is None else env

    commit_info = None
    hash_, short_hash, date = (
        env.get("NEBU_COMMIT_HASH"),
        env.get("NEBU_COMMIT_SHORT_HASH"),
        env.get("NEBU_COMMIT_DATE"),
    )
    if hash_ and short_hash and date:
        tag_info = None
        last_tag, distance = env.get("NEBU_LAST_TAG"), env.get("NEBU_LAST_TAG_DISTANCE")
        if last_tag and distance:
            tag_info = CommitTagInfo(last_tag=last_tag, commits_since=distance)
        commit_info = CommitInfo(
            short_hash=short_hash, hash=hash_, date=date, commit_tag_info=tag_info
        )

    return VersionInfo(version=__version__, commit_info=commit_info)


@click.command()
@click.pass_context
def version_command(ctx: click.Context) -> None:
    """Show the version of the nebu CLI."""
    info = nebu_version()
    if output_format(ctx) == "json":
        echo_json(asdict(info))
    else:
        click.echo(str(info))
