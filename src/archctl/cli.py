"""Root CLI group: global output, logging, and config flags."""

from __future__ import annotations

from pathlib import Path

import click

from archctl import __version__
from archctl.commands import register_commands
from archctl.commands._context import AppContext
from archctl.config.settings import ArchSettings


@click.group(invoke_without_command=True, context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, "-V", "--version", prog_name="archctl")
@click.option("--json", "json_output", is_flag=True, help="Print the raw ServiceResult as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Print names only, one per line.")
@click.option("-v", "--verbose", is_flag=True, help="Show timing spans and debug logs.")
@click.option("--log-json", is_flag=True, help="Emit stderr logs as JSON lines.")
@click.option("--no-plugins", is_flag=True, help="Do not load entry-point or local plugins.")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=str),
    default=None,
    help="Use this archctl.toml instead of walking up from the cwd.",
)
@click.option(
    "-C",
    "--project-root",
    type=click.Path(file_okay=False, exists=True, path_type=Path),
    default=None,
    help="Run as if archctl was started in this directory.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: str | None,
    project_root: Path | None,
    **flags: bool,
) -> None:
    """Route feature requests to Clean Architecture responsibilities."""
    settings = ArchSettings.from_cli(
        config_path=config_path,
        project_root=project_root,
        **flags,
    )
    ctx.obj = AppContext(settings, working_dir=project_root)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
