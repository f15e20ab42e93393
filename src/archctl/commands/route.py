"""Commands: plan and classify feature requests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from archctl.commands._base import ArchCommand

if TYPE_CHECKING:
    from archctl.commands._context import AppContext


@click.command(
    cls=ArchCommand,
    examples="""\
  archctl plan "Add a Product entity with CRUD endpoints"
  archctl plan /orchestrator add an orders dashboard page
  archctl plan "Use the api-agent to add JWT login"
  archctl plan --markdown "Expose order lookup as an MCP tool"
  archctl --json plan "Add validation to the CreateOrder command"
  archctl -q plan "Add a customer entity and repository" """,
)
@click.argument("request", nargs=-1, required=True)
@click.option("--markdown", is_flag=True, help="Render the plan as a markdown checklist.")
@click.option(
    "--skills/--no-skills",
    "include_skills",
    default=None,
    help="Include knowledge documents per step (default from [routing]).",
)
@click.pass_obj
def plan(
    app: AppContext,
    request: tuple[str, ...],
    markdown: bool,
    include_skills: bool | None,
) -> None:
    """Build the ordered execution plan for a feature REQUEST."""
    from archctl.services.routing import RoutingService

    svc = RoutingService(app.workspace)
    app.emit(svc.plan(" ".join(request), include_skills=include_skills, markdown=markdown))


@click.command(
    cls=ArchCommand,
    examples="""\
  archctl classify "Add a Product entity with CRUD endpoints"
  archctl -q classify "Build an invoices page"
  archctl --json classify "Expose search as an MCP tool" """,
)
@click.argument("request", nargs=-1, required=True)
@click.pass_obj
def classify(app: AppContext, request: tuple[str, ...]) -> None:
    """Show which layers a feature REQUEST touches, and why."""
    from archctl.services.routing import RoutingService

    app.emit(RoutingService(app.workspace).classify(" ".join(request)))
