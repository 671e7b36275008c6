"""nebu project commands - create projects from the template."""

from __future__ import annotations

import shutil
import tempfile
from pathlib import Path

import click
import structlog

from nebu.cache import RepoCache
from nebu.cli.utils import (
    build_cache,
    cli_errors,
    echo_json,
    get_config,
    output_format,
    resolve_template,
    with_template_options,
)
from nebu.core.errors import ProjectError
from nebu.core.progress import spinner, status

log = structlog.get_logger(__name__)


def copy_template(source: Path, destination: Path) -> None:
    """Copy a template working tree to ``destination``, leaving out ``.git``."""
    if destination.exists():
        raise ProjectError.already_exists(str(destination))
    try:
        shutil.copytree(source, destination, ignore=shutil.ignore_patterns(".git"))
    except OSError as e:
        raise ProjectError.copy_failed(str(destination), str(e)) from e
    log.info("project.copied", source=str(source), destination=str(destination))


def _validate_name(_ctx: click.Context, _param: click.Parameter, value: str) -> str:
    if not value or value in (".", "..") or "/" in value or "\\" in value:
        raise click.BadParameter("must be a plain directory name")
    return value


@click.group()
def project_group() -> None:
    """Create and manage projects."""


@project_group.command("init")
@click.argument("name", callback=_validate_name)
@click.option(
    "--path",
    "parent",
    default=".",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory to create the project in",
)
@with_template_options
@click.option(
    "--no-cache",
    is_flag=True,
    envvar="NEBU_NO_CACHE",
    help="Clone the template into a throwaway directory instead of the cache",
)
@click.pass_context
def init_command(
    ctx: click.Context,
    name: str,
    parent: Path,
    repo_url: str | None,
    repo_branch: str | None,
    repo_remote: str | None,
    no_cache: bool,
) -> None:
    """Initialize project NAME from the template repository."""
    config = get_config(ctx)
    template = resolve_template(config, repo_url, repo_branch, repo_remote)
    destination = (parent / name).resolve()
    if destination.exists():
        raise click.ClickException(str(ProjectError.already_exists(str(destination))))

    with cli_errors():
        if no_cache:
            resource = RepoCache(template.url, template.branch, template.remote)
            with tempfile.TemporaryDirectory(prefix="nebu-") as tmp:
                source = Path(tmp) / "template"
                with spinner(f"Cloning {template.url}"):
                    refreshed = resource.refresh(source)
                copy_template(source, destination)
        else:
            manager = build_cache(config, template)
            with spinner("Updating template cache"):
                refreshed = manager.try_refresh()
            copy_template(manager.location, destination)

    if output_format(ctx) == "json":
        echo_json(
            {
                "name": name,
                "path": str(destination),
                "template": template.model_dump(),
                "cached": not no_cache,
                "refreshed": refreshed,
            }
        )
    else:
        status(f"Project {name} initialized at {destination}", style="success")
        status(f"Template: {template.url} ({template.branch})")
