"""Command group: inspect responsibilities ("agents")."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from archctl.commands._base import ArchGroup
from archctl.domain.types import Layer

if TYPE_CHECKING:
    from archctl.commands._context import AppContext


@click.group(
    cls=ArchGroup,
    examples="""\
  archctl agents list
  archctl agents list --layer api
  archctl agents show domain-agent""",
)
def agents() -> None:
    """List and inspect responsibilities."""


@agents.command(
    name="list",
    examples="""\
  archctl agents list
  archctl agents list --layer infrastructure
  archctl -q agents list""",
)
@click.option(
    "--layer",
    type=click.Choice([str(layer) for layer in Layer], case_sensitive=False),
    default=None,
    help="Only responsibilities covering this layer.",
)
@click.pass_obj
def list_cmd(app: AppContext, layer: str | None) -> None:
    """List responsibilities in catalog order."""
    from archctl.services.catalog import CatalogService

    app.emit(CatalogService(app.workspace).list_responsibilities(layer=layer))


@agents.command(
    examples="""\
  archctl agents show domain-agent
  archctl --json agents show mcp-agent""",
)
@click.argument("name")
@click.pass_obj
def show(app: AppContext, name: str) -> None:
    """Show a responsibility with its skills and triggers."""
    from archctl.services.catalog import CatalogService

    app.emit(CatalogService(app.workspace).get_responsibility(name))
