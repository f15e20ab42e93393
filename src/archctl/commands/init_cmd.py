"""Command: scaffold archctl configuration."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from archctl.commands._base import ArchCommand

if TYPE_CHECKING:
    from archctl.commands._context import AppContext


@click.command(
    "init",
    cls=ArchCommand,
    examples="""\
  archctl init
  archctl init --with-catalog
  archctl init ./service --force""",
)
@click.argument("path", required=False, type=click.Path(file_okay=False, path_type=Path))
@click.option("--with-catalog", is_flag=True, help="Copy the default catalog for editing.")
@click.option("--force", is_flag=True, help="Overwrite existing files.")
@click.pass_obj
def init_cmd(app: AppContext, path: Path | None, with_catalog: bool, force: bool) -> None:
    """Write archctl.toml (and optionally .archctl/catalog.yaml) in PATH."""
    from archctl.services.init import InitService

    root = app.working_dir / path if path else app.working_dir
    root.mkdir(parents=True, exist_ok=True)
    app.emit(InitService.init_project(root, with_catalog=with_catalog, force=force))
