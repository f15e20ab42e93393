"""Pluggy hook specifications for archctl.

One setup-time hook lets plugins extend the routing rule table; one
notification hook fires after every execution plan is built.
"""

from __future__ import annotations

from typing import Any

import pluggy

PROJECT_NAME = "archctl"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class ArchctlHookSpec:
    """Hook specifications for the archctl plugin system."""

    @hookspec
    def register_routing_rules(self) -> list[dict[str, Any]] | None:
        """Return extra routing rules as ``{"name", "layers", "triggers"}`` mappings."""

    @hookspec
    def post_plan(self, request: str, responsibilities: list[str]) -> None:
        """Called after an execution plan is built."""
