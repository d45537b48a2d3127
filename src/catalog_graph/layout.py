"""Force-directed layout for catalog graphs.

Runs a fixed number of synchronous iterations, so it blocks the caller.
That is fine for the tens-to-hundreds of nodes a catalog holds.
"""
from __future__ import annotations

import logging

import networkx as nx

from src.shared.constants import (
    LAYOUT_CENTER,
    LAYOUT_ITERATIONS,
    LAYOUT_SCALE,
    LAYOUT_SEED,
)
from src.shared.models.graph import CatalogGraph, GraphView

logger = logging.getLogger(__name__)


def force_layout(
    graph: CatalogGraph | GraphView,
    iterations: int = LAYOUT_ITERATIONS,
    seed: int = LAYOUT_SEED,
    center: tuple[float, float] = LAYOUT_CENTER,
    scale: float = LAYOUT_SCALE,
) -> dict[str, dict[str, float]]:
    """Compute node positions with a seeded spring (Fruchterman-Reingold) layout.

    Both dependency and event edges pull their endpoints together.  The
    same graph and seed always produce the same positions.

    Returns:
        Mapping of node id to ``{"x": ..., "y": ...}``.
    """
    if not graph.nodes:
        return {}

    G = nx.Graph()
    G.add_nodes_from(node.id for node in graph.nodes)
    G.add_edges_from(
        (edge.source, edge.target)
        for edge in graph.edges
        if edge.source in G and edge.target in G
    )

    positions = nx.spring_layout(
        G,
        iterations=iterations,
        seed=seed,
        center=center,
        scale=scale,
    )
    logger.debug("Laid out %d nodes in %d iterations", len(positions), iterations)
    return {
        node_id: {"x": float(pos[0]), "y": float(pos[1])}
        for node_id, pos in positions.items()
    }
