"""Architectural layers and their fixed precedence.

Layered categories run in a strict order: domain, application,
infrastructure, api, web.  MCP stands apart and is never ordered
relative to the others.
"""

from __future__ import annotations

from enum import StrEnum


class Layer(StrEnum):
    """Categories a request can be classified into."""

    DOMAIN = "domain"
    APPLICATION = "application"
    INFRASTRUCTURE = "infrastructure"
    API = "api"
    WEB = "web"
    MCP = "mcp"


LAYERED: tuple[Layer, ...] = (
    Layer.DOMAIN,
    Layer.APPLICATION,
    Layer.INFRASTRUCTURE,
    Layer.API,
    Layer.WEB,
)

INDEPENDENT: frozenset[Layer] = frozenset({Layer.MCP})

# MCP sorts after every layered category so plans stay deterministic.
LAYER_RANK: dict[Layer, int] = {layer: i for i, layer in enumerate(LAYERED)}
LAYER_RANK[Layer.MCP] = len(LAYERED)


def is_independent(layer: Layer | str) -> bool:
    """Whether *layer* is unordered relative to the layered categories."""
    return Layer(layer) in INDEPENDENT


def sort_layers(layers: set[Layer] | list[Layer]) -> list[Layer]:
    """Return *layers* in precedence order, independent layers last."""
    return sorted(set(layers), key=lambda layer: LAYER_RANK[layer])
