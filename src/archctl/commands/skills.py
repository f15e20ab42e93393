"""Command group: inspect knowledge documents ("skills")."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from archctl.commands._base import ArchGroup

if TYPE_CHECKING:
    from archctl.commands._context import AppContext


@click.group(
    cls=ArchGroup,
    examples="""\
  archctl skills list
  archctl skills show jwt-authentication""",
)
def skills() -> None:
    """List and read knowledge documents."""


@skills.command(name="list")
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List knowledge documents and the responsibilities using them."""
    from archctl.services.catalog import CatalogService

    app.emit(CatalogService(app.workspace).list_skills())


@skills.command(
    examples="""\
  archctl skills show cqrs-handlers
  archctl skills show cqrs-handlers --no-body
  archctl --json skills show mcp-tool-server""",
)
@click.argument("name")
@click.option("--body/--no-body", default=True, help="Include the document body.")
@click.pass_obj
def show(app: AppContext, name: str, body: bool) -> None:
    """Show a knowledge document."""
    from archctl.services.catalog import CatalogService

    app.emit(CatalogService(app.workspace).get_skill(name, include_body=body))
