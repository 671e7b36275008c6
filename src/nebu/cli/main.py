"""nebu CLI - nebu command."""

import click

from nebu.cli.cache import cache_group
from nebu.cli.project import project_group
from nebu.cli.version import __version__, version_command
from nebu.config.loader import load_config
from nebu.core.errors import ConfigError
from nebu.core.logging import configure_logging


@click.group(epilog="For more information, visit https://github.com/lerpz-com")
@click.version_option(version=__version__, prog_name="nebu")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "-f",
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    envvar="NEBU_OUTPUT_FORMAT",
    show_default=True,
    help="Output format",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, output_format: str) -> None:
    """nebu - a command-line interface for Lerpz."""
    try:
        config = load_config()
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    logging_config = config.logging
    if verbose:
        logging_config = logging_config.model_copy(update={"level": "DEBUG"})
    configure_logging(config=logging_config)

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["format"] = output_format
    ctx.obj["config"] = config


cli.add_command(version_command, name="version")
cli.add_command(project_group, name="project")
cli.add_command(cache_group, name="cache")


if __name__ == "__main__":
    cli()
