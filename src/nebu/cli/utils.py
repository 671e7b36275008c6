"""CLI utilities."""

from __future__ import annotations

import json
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import click
import structlog

from nebu.cache import CacheError, CacheManager, RepoCache
from nebu.config.models import NebuConfig, TemplateConfig
from nebu.core.errors import InternalError, NebuError
from nebu.git.errors import GitError

log = structlog.get_logger(__name__)

# Shared by `project init` and the `cache` subcommands
template_options = [
    click.option(
        "-u",
        "--repo-url",
        envvar="NEBU_TEMPLATE_REPO",
        default=None,
        help="Template repository URL",
    ),
    click.option(
        "-b",
        "--repo-branch",
        envvar="NEBU_TEMPLATE_BRANCH",
        default=None,
        help="Template branch",
    ),
    click.option(
        "-r",
        "--repo-remote",
        envvar="NEBU_TEMPLATE_REMOTE",
        default=None,
        help="Remote name used inside the cache",
    ),
]


def with_template_options(func: Any) -> Any:
    for option in reversed(template_options):
        func = option(func)
    return func


def get_config(ctx: click.Context) -> NebuConfig:
    obj = ctx.find_root().obj or {}
    config = obj.get("config")
    if config is None:
        return NebuConfig()
    return config  # type: ignore[no-any-return]


def output_format(ctx: click.Context) -> str:
    obj = ctx.find_root().obj or {}
    return obj.get("format", "text")  # type: ignore[no-any-return]


def resolve_template(
    config: NebuConfig,
    repo_url: str | None,
    repo_branch: str | None,
    repo_remote: str | None,
) -> TemplateConfig:
    """Command-line values win over configuration."""
    return TemplateConfig(
        url=repo_url or config.template.url,
        branch=repo_branch or config.template.branch,
        remote=repo_remote or config.template.remote,
    )


def build_cache(config: NebuConfig, template: TemplateConfig) -> CacheManager[RepoCache]:
    resource = RepoCache(template.url, template.branch, template.remote)
    return CacheManager(config.cache_root, resource)


def echo_json(payload: dict[str, Any]) -> None:
    click.echo(json.dumps(payload, indent=2))


@contextmanager
def cli_errors() -> Iterator[None]:
    """Surface domain errors as click errors (exit code 1)."""
    try:
        yield
    except (GitError, CacheError, NebuError) as e:
        log.debug("cli.error", error=str(e), error_type=type(e).__name__)
        raise click.ClickException(str(e)) from e
    except OSError as e:
        err = InternalError.unexpected(str(e), error_type=type(e).__name__)
        log.debug("cli.error", error=str(err), error_type=type(e).__name__)
        raise click.ClickException(str(err)) from e
