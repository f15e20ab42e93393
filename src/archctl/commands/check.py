"""Command: catalog content checks."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from archctl.commands._base import ArchCommand

if TYPE_CHECKING:
    from archctl.commands._context import AppContext


@click.command(
    cls=ArchCommand,
    examples="""\
  archctl check
  archctl check --errors-only
  archctl --json check""",
)
@click.option(
    "--min-severity",
    type=click.Choice(["warning", "error"]),
    default="warning",
    help="Hide issues below this severity.",
)
@click.option("--errors-only", is_flag=True, help="Shortcut for --min-severity error.")
@click.option("--strict", is_flag=True, help="Exit 1 when any error is found.")
@click.pass_obj
def check(app: AppContext, min_severity: str, errors_only: bool, strict: bool) -> None:
    """Check the catalog for missing descriptions, dangling skills, and rule gaps."""
    from archctl.services.check import CheckService

    threshold = "error" if errors_only else min_severity
    result = CheckService(app.workspace).check(min_severity=threshold)
    app.emit(result)
    if strict and result.ok and not result.data.get("healthy", True):
        raise SystemExit(1)
