"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults live here, archctl.toml only holds overrides.
An empty archctl.toml is a valid configuration.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

from archctl.domain.types import LAYERED, Layer


class RoutingConfig(BaseModel):
    """[routing] section."""

    model_config = {"frozen": True}

    on_no_match: Literal["error", "fallback"] = "error"
    fallback_layers: tuple[Layer, ...] = LAYERED
    include_skills: bool = True


class CatalogConfig(BaseModel):
    """[catalog] section."""

    model_config = {"frozen": True}

    path: str | None = None


class McpConfig(BaseModel):
    """[mcp] section."""

    model_config = {"frozen": True}

    enabled: bool = True
    transport: Literal["stdio", "sse", "streamable-http"] = "stdio"


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    enabled: bool = True

