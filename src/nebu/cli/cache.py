"""nebu cache commands - inspect and update the template cache."""

from __future__ import annotations

from typing import Any

import click

from nebu.cache import CacheState, ProbeError
from nebu.cli.utils import (
    build_cache,
    cli_errors,
    echo_json,
    get_config,
    output_format,
    resolve_template,
    with_template_options,
)
from nebu.core.progress import pluralize, spinner, status


@click.group()
def cache_group() -> None:
    """Inspect and update the template cache."""


@cache_group.command("path")
@with_template_options
@click.pass_context
def path_command(
    ctx: click.Context,
    repo_url: str | None,
    repo_branch: str | None,
    repo_remote: str | None,
) -> None:
    """Print the cache location of the template."""
    config = get_config(ctx)
    manager = build_cache(config, resolve_template(config, repo_url, repo_branch, repo_remote))
    click.echo(str(manager.location))


@cache_group.command("status")
@with_template_options
@click.pass_context
def status_command(
    ctx: click.Context,
    repo_url: str | None,
    repo_branch: str | None,
    repo_remote: str | None,
) -> None:
    """Show on-disk state and freshness of the template cache."""
    config = get_config(ctx)
    template = resolve_template(config, repo_url, repo_branch, repo_remote)
    manager = build_cache(config, template)

    payload: dict[str, Any] = {
        "location": str(manager.location),
        "url": template.url,
        "branch": template.branch,
        "remote": template.remote,
    }
    with cli_errors():
        state = manager.state()
        payload["state"] = state.value
        if state is CacheState.PRESENT:
            payload["commit"] = manager.resource.head_commit(manager.location)
            try:
                divergence = manager.resource.divergence(manager.location)
            except ProbeError as e:
                payload["error"] = e.reason
            else:
                if divergence is not None:
                    payload["ahead"] = divergence.ahead
                    payload["behind"] = divergence.behind
                    payload["fresh"] = divergence.is_synced

    if output_format(ctx) == "json":
        echo_json(payload)
        return

    click.echo(f"Location: {payload['location']}")
    click.echo(f"Template: {template.url} ({template.branch}, remote {template.remote})")
    click.echo(f"State: {payload['state']}")
    if payload.get("commit"):
        click.echo(f"Commit: {payload['commit']}")
    if "error" in payload:
        click.echo(f"Inconsistent: {payload['error']}")
    elif "fresh" in payload:
        if payload["fresh"]:
            click.echo("Fresh: yes")
        else:
            click.echo(
                f"Fresh: no ({pluralize(payload['ahead'], 'commit')} ahead, "
                f"{payload['behind']} behind)"
            )


@cache_group.command("refresh")
@with_template_options
@click.option("--if-stale", is_flag=True, help="Only refresh when the cache is not fresh")
@click.pass_context
def refresh_command(
    ctx: click.Context,
    repo_url: str | None,
    repo_branch: str | None,
    repo_remote: str | None,
    if_stale: bool,
) -> None:
    """Fetch the template and fast-forward the cache."""
    config = get_config(ctx)
    manager = build_cache(config, resolve_template(config, repo_url, repo_branch, repo_remote))

    with cli_errors(), spinner("Refreshing template cache"):
        changed = manager.try_refresh() if if_stale else manager.refresh()

    if output_format(ctx) == "json":
        echo_json({"location": str(manager.location), "refreshed": changed})
    elif changed:
        status("Template cache updated", style="success")
    else:
        status("Template cache unchanged", style="info")
