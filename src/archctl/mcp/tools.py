"""MCP tool definitions — 6 tools across routing and catalog.

Each tool has a ``<name>_impl`` function testable without the mcp package;
``register_tools()`` wraps them with FastMCP decorators.
"""

from __future__ import annotations

from typing import Any

from archctl.services.result import ServiceResult


def _to_mcp_response(result: ServiceResult) -> dict[str, Any]:
    """Convert a ServiceResult to an MCP-friendly dict."""
    response: dict[str, Any] = {
        "ok": result.ok,
        "op": result.op,
        "data": result.data,
    }
    if result.warnings:
        response["warnings"] = result.warnings
    if result.error is not None:
        response["error"] = {
            "code": result.error.code,
            "message": result.error.message,
            "detail": result.error.detail,
        }
    return response


# ---------------------------------------------------------------------------
# Routing tools
# ---------------------------------------------------------------------------


def route_request_impl(
    workspace: Any,
    request: str,
    *,
    include_skills: bool | None = None,
) -> dict[str, Any]:
    """Build the execution plan for a feature request."""
    from archctl.services.routing import RoutingService

    result = RoutingService(workspace).plan(request, include_skills=include_skills)
    return _to_mcp_response(result)


def classify_request_impl(workspace: Any, request: str) -> dict[str, Any]:
    """Classify a feature request into layers."""
    from archctl.services.routing import RoutingService

    return _to_mcp_response(RoutingService(workspace).classify(request))


# ---------------------------------------------------------------------------
# Catalog tools
# ---------------------------------------------------------------------------


def list_responsibilities_impl(workspace: Any, *, layer: str | None = None) -> dict[str, Any]:
    """List responsibilities."""
    from archctl.services.catalog import CatalogService

    return _to_mcp_response(CatalogService(workspace).list_responsibilities(layer=layer))


def get_responsibility_impl(workspace: Any, name: str) -> dict[str, Any]:
    """Show one responsibility."""
    from archctl.services.catalog import CatalogService

    return _to_mcp_response(CatalogService(workspace).get_responsibility(name))


def get_skill_impl(workspace: Any, name: str) -> dict[str, Any]:
    """Read one knowledge document, body included."""
    from archctl.services.catalog import CatalogService

    return _to_mcp_response(CatalogService(workspace).get_skill(name))


def check_catalog_impl(workspace: Any) -> dict[str, Any]:
    """Run catalog content checks."""
    from archctl.services.check import CheckService

    return _to_mcp_response(CheckService(workspace).check())


def register_tools(server: Any, workspace: Any) -> None:
    """Register all 6 MCP tools on the FastMCP server."""

    @server.tool()  # type: ignore[untyped-decorator]
    def route_request(request: str, include_skills: bool | None = None) -> dict[str, Any]:
        """Plan which responsibilities to run, in order, for a feature request."""
        return route_request_impl(workspace, request, include_skills=include_skills)

    @server.tool()  # type: ignore[untyped-decorator]
    def classify_request(request: str) -> dict[str, Any]:
        """Classify a feature request into architectural layers."""
        return classify_request_impl(workspace, request)

    @server.tool()  # type: ignore[untyped-decorator]
    def list_responsibilities(layer: str | None = None) -> dict[str, Any]:
        """List responsibilities, optionally for one layer."""
        return list_responsibilities_impl(workspace, layer=layer)

    @server.tool()  # type: ignore[untyped-decorator]
    def get_responsibility(name: str) -> dict[str, Any]:
        """Show a responsibility with its skills and triggers."""
        return get_responsibility_impl(workspace, name)

    @server.tool()  # type: ignore[untyped-decorator]
    def get_skill(name: str) -> dict[str, Any]:
        """Read a knowledge document."""
        return get_skill_impl(workspace, name)

    @server.tool()  # type: ignore[untyped-decorator]
    def check_catalog() -> dict[str, Any]:
        """Check the catalog for content problems."""
        return check_catalog_impl(workspace)
