"""serve: run the MCP server for the current project."""

from __future__ import annotations

import click

from archctl.commands._base import ArchCommand
from archctl.commands._context import AppContext

TRANSPORTS = ("stdio", "sse", "streamable-http")


@click.command(
    cls=ArchCommand,
    examples="""\
  # stdio, for editors that spawn the server themselves
  archctl serve

  # Streamable HTTP on all interfaces
  archctl serve --transport streamable-http --host 0.0.0.0 --port 9000""",
)
@click.option(
    "--transport",
    type=click.Choice(TRANSPORTS),
    default=None,
    help="Transport to serve on; defaults to [mcp] transport.",
)
@click.option("--host", default="127.0.0.1", show_default=True, help="HTTP bind address.")
@click.option("--port", type=int, default=8000, show_default=True, help="HTTP port.")
@click.pass_obj
def serve(app: AppContext, transport: str | None, host: str, port: int) -> None:
    """Serve routing tools over MCP (needs the archctl[mcp] extra)."""
    from archctl.mcp import server as mcp_server

    if not mcp_server.mcp_available:
        raise click.ClickException("MCP not installed. Install with: pip install archctl[mcp]")
    if not app.settings.mcp.enabled:
        raise click.ClickException("MCP server disabled by [mcp] enabled = false")

    server = mcp_server.create_server(settings=app.settings, host=host, port=port)
    server.run(transport=transport or app.settings.mcp.transport)
