"""MCP prompt definitions.

``orchestrator`` turns a feature request into step-by-step instructions
for an MCP client, rendered from the same plan the CLI prints.
"""

from __future__ import annotations

from typing import Any


def orchestrator_impl(workspace: Any, request: str) -> str:
    """Render orchestration instructions for *request*."""
    from archctl.infrastructure.templates import build_template_environment
    from archctl.services.routing import RoutingService

    result = RoutingService(workspace).plan(request)
    if not result.ok:
        message = result.error.message if result.error else "Unknown error"
        return f"## Orchestrate: {request}\n\nNo plan could be built: {message}\n"

    env = build_template_environment("prompts", root=workspace.root)
    return env.get_template("orchestrator.md.j2").render(**result.data)


def register_prompts(server: Any, workspace: Any) -> None:
    """Register MCP prompts on the FastMCP server."""

    @server.prompt()  # type: ignore[untyped-decorator]
    def orchestrator(request: str) -> str:
        """Plan and sequence the responsibilities for a feature request."""
        return orchestrator_impl(workspace, request)
