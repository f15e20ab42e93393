"""FastMCP server exposing routing as tools, resources, and prompts.

Needs the ``archctl[mcp]`` extra; :data:`mcp_available` reports whether it
is installed so callers can fail with an install hint instead of a traceback.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from archctl.config.settings import ArchSettings

try:
    from mcp.server.fastmcp import FastMCP  # type: ignore[import-not-found]
except ImportError:
    FastMCP = None  # type: ignore[assignment,misc]

mcp_available = FastMCP is not None

__all__ = ["create_server", "mcp_available"]


def create_server(
    *,
    settings: ArchSettings | None = None,
    project_root: Path | None = None,
    host: str = "127.0.0.1",
    port: int = 8000,
) -> Any:
    """Build a FastMCP server bound to one project's workspace.

    *settings* come from the CLI when started by ``archctl serve``; otherwise
    they are resolved for *project_root* (default: cwd).

    Raises:
        RuntimeError: The ``mcp`` extra is not installed.
    """
    if not mcp_available:
        raise RuntimeError("MCP extra not installed. Install with: pip install archctl[mcp]")

    from archctl.config.settings import ArchSettings
    from archctl.infrastructure.workspace import Workspace
    from archctl.mcp.prompts import register_prompts
    from archctl.mcp.resources import register_resources
    from archctl.mcp.tools import register_tools

    if settings is None:
        settings = ArchSettings.from_cli(project_root=project_root)
    workspace = Workspace(settings)
    if settings.plugins_enabled:
        workspace.init_plugins()

    server = FastMCP("archctl", host=host, port=port)
    for register in (register_tools, register_resources, register_prompts):
        register(server, workspace)
    return server
