"""NetworkX MultiDiGraph wrapper holding the indexed service catalog."""
from __future__ import annotations

from typing import Any

import networkx as nx

from src.shared.models.graph import EdgeKind, GraphEdge, GraphNode


class ServiceGraph:
    """Manages the catalog graph as an nx.MultiDiGraph.

    Node ids are service names.  Edges are keyed per node pair by their
    deterministic edge id, so re-adding the same ``(u, v, key)`` replaces
    the edge (last write wins).  Edges joining different pairs never
    replace each other, even when their ids read the same; such ids are
    made unique on export with a ``#n`` suffix.
    """

    def __init__(self) -> None:
        self.graph: nx.MultiDiGraph = nx.MultiDiGraph()
        self._edge_order: dict[tuple[str, str, str], None] = {}

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.graph

    def add_node(self, node_id: str, **attrs: Any) -> None:
        """Add a node, or update the attributes of an existing one."""
        self.graph.add_node(node_id, **attrs)

    def get_node(self, node_id: str) -> dict[str, Any] | None:
        """Return node attributes as dict, or None if not present."""
        if node_id in self.graph:
            return self.graph.nodes[node_id]
        return None

    def add_edge(self, u: str, v: str, key: str, **attrs: Any) -> None:
        """Add an edge from *u* to *v* under *key*, replacing the same triple."""
        if self.graph.has_edge(u, v, key=key):
            self.graph.edges[u, v, key].clear()
        self.graph.add_edge(u, v, key=key, **attrs)
        self._edge_order.setdefault((u, v, key), None)

    def inbound_dependency_count(self, node_id: str) -> int:
        """Number of dependency edges terminating at *node_id*."""
        if node_id not in self.graph:
            return 0
        return sum(
            1
            for _, _, kind in self.graph.in_edges(node_id, data="kind")
            if kind == EdgeKind.DEPENDENCY
        )

    def nodes(self) -> list[GraphNode]:
        """Nodes in first-seen order."""
        return [
            GraphNode(id=node_id, **attrs)
            for node_id, attrs in self.graph.nodes(data=True)
        ]

    def edges(self) -> list[GraphEdge]:
        """Edges in first-declared order, with ids unique across the graph."""
        result: list[GraphEdge] = []
        seen: dict[str, int] = {}
        for u, v, key in self._edge_order:
            seen[key] = seen.get(key, 0) + 1
            edge_id = key if seen[key] == 1 else f"{key}#{seen[key]}"
            attrs = self.graph.edges[u, v, key]
            result.append(GraphEdge(id=edge_id, source=u, target=v, **attrs))
        return result

    def edge_count(self) -> int:
        """Return the number of edges."""
        return self.graph.number_of_edges()
