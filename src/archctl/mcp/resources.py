"""MCP resource definitions.

URIs: archctl://catalog, archctl://skills/{name}.
Each resource has a ``<name>_impl`` function testable without the mcp package.
"""

from __future__ import annotations

import json
from typing import Any


def catalog_impl(workspace: Any) -> dict[str, Any]:
    """Return responsibilities, skills, and rules as JSON-friendly data."""
    from archctl.infrastructure.catalog_store import CatalogError

    try:
        catalog = workspace.catalog
    except CatalogError as exc:
        return {"error": str(exc)}

    return {
        "responsibilities": [
            {
                "name": r.name,
                "layer": str(r.layer),
                "description": r.description,
                "skills": list(r.skills),
            }
            for r in catalog.responsibilities
        ],
        "skills": [{"name": s.name, "title": s.title} for s in catalog.skills],
        "rules": [
            {
                "name": rule.name,
                "layers": [str(layer) for layer in rule.layers],
                "triggers": list(rule.triggers),
            }
            for rule in catalog.rules
        ],
    }


def skill_impl(workspace: Any, name: str) -> str:
    """Return a knowledge document body as markdown."""
    from archctl.services.catalog import CatalogService

    result = CatalogService(workspace).get_skill(name)
    if not result.ok:
        message = result.error.message if result.error else "Unknown error"
        return f"Skill not found: {message}"
    return str(result.data.get("body") or f"# {result.data['title']}\n")


def register_resources(server: Any, workspace: Any) -> None:
    """Register MCP resources on the FastMCP server."""

    @server.resource("archctl://catalog")  # type: ignore[untyped-decorator]
    def catalog_resource() -> str:
        """Responsibilities, knowledge documents, and routing rules."""
        return json.dumps(catalog_impl(workspace), indent=2)

    @server.resource("archctl://skills/{name}")  # type: ignore[untyped-decorator]
    def skill_resource(name: str) -> str:
        """A knowledge document body."""
        return skill_impl(workspace, name)
