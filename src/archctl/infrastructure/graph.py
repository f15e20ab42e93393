"""Layer precedence graph used to order execution plans.

Selected layered categories are chained in precedence order; independent
layers (MCP) are isolated nodes.  A lexicographic topological sort keyed
by precedence turns the graph into a deterministic plan order.
"""

from __future__ import annotations

from collections.abc import Container, Iterable
from typing import TypeAlias

import networkx as nx

from archctl.domain.types import LAYER_RANK, Layer, is_independent, sort_layers

_Graph: TypeAlias = nx.DiGraph


def build_layer_graph(layers: Iterable[Layer]) -> _Graph:
    """Build the precedence DAG for the selected *layers*.

    Each layered category gets an edge to the next selected one, so the
    graph is a single chain plus isolated independent nodes.
    """
    ordered = sort_layers(list(layers))
    g: _Graph = nx.DiGraph()
    for layer in ordered:
        g.add_node(layer, independent=is_independent(layer), rank=LAYER_RANK[layer])

    chain = [layer for layer in ordered if not is_independent(layer)]
    for upstream, downstream in zip(chain, chain[1:], strict=False):
        g.add_edge(upstream, downstream)
    return g


def plan_order(g: _Graph) -> list[Layer]:
    """Topological order of *g*, ties broken by layer precedence."""
    return list(nx.lexicographical_topological_sort(g, key=lambda n: LAYER_RANK[n]))


def predecessors(g: _Graph, layer: Layer) -> list[Layer]:
    """Layers that must finish before *layer* starts."""
    return sort_layers(list(g.predecessors(layer)))


def nearest_predecessors(g: _Graph, layer: Layer, keep: Container[Layer]) -> list[Layer]:
    """Closest upstream layers of *layer* that are in *keep*.

    Upstream layers outside *keep* are walked through, so a layer whose
    direct predecessor was dropped still waits on the one before it.
    """
    frontier = predecessors(g, layer)
    while frontier and not any(up in keep for up in frontier):
        frontier = sort_layers([p for up in frontier for p in g.predecessors(up)])
    return [up for up in frontier if up in keep]
