"""Sizing, colouring and element export for graph front-ends."""
from __future__ import annotations

from typing import Any

from src.shared.constants import NODE_SIZE_MAX, NODE_SIZE_MIN
from src.shared.models.graph import CatalogGraph, EdgeKind, GraphView, Staleness

RAG_COLORS: dict[Staleness, str] = {
    Staleness.FRESH: "#22c55e",
    Staleness.AGING: "#f59e0b",
    Staleness.STALE: "#ef4444",
}
MISSING_NODE_COLOR = "#FFD966"
FALLBACK_TYPE_COLOR = "#6b7280"

# Checked in order; the first substring found in the lowercased type wins.
_TYPE_COLORS: list[tuple[tuple[str, ...], str]] = [
    (("edge",), "#f97316"),
    (("learner",), "#22c55e"),
    (("analytics",), "#a855f7"),
    (("notification",), "#3b82f6"),
    (("report",), "#6366f1"),
    (("audit",), "#facc15"),
    (("config", "settings"), "#ec4899"),
    (("api",), "#38bdf8"),
]


def rag_color(band: Staleness | None) -> str | None:
    if band is None:
        return None
    return RAG_COLORS[band]


def colour_for_type(node_type: str | None) -> str:
    """Map a node type (contract role) to a display colour."""
    lowered = (node_type or "").lower()
    for needles, colour in _TYPE_COLORS:
        if any(needle in lowered for needle in needles):
            return colour
    return FALLBACK_TYPE_COLOR


def node_size(
    weight: int,
    max_weight: int,
    min_size: float = NODE_SIZE_MIN,
    max_size: float = NODE_SIZE_MAX,
) -> float:
    """Scale a node linearly between *min_size* and *max_size* by weight."""
    if max_weight <= 0:
        return min_size
    return min_size + (weight / max_weight) * (max_size - min_size)


def to_elements(
    graph: CatalogGraph | GraphView,
    positions: dict[str, dict[str, float]] | None = None,
) -> list[dict[str, Any]]:
    """Export nodes then edges as cytoscape-style ``{data, position}`` elements."""
    positions = positions or {}
    elements: list[dict[str, Any]] = []

    for node in graph.nodes:
        data = node.model_dump(mode="json")
        data["size"] = node_size(node.weight, graph.max_inbound_weight)
        data["type_color"] = colour_for_type(node.type)
        data["color"] = MISSING_NODE_COLOR if node.missing else (
            node.rag_color or FALLBACK_TYPE_COLOR
        )
        element: dict[str, Any] = {"group": "nodes", "data": data}
        if node.id in positions:
            element["position"] = dict(positions[node.id])
        elements.append(element)

    for edge in graph.edges:
        data = edge.model_dump(mode="json", exclude_none=True)
        if edge.kind == EdgeKind.DEPENDENCY:
            data["line_style"] = "solid"
        else:
            data["line_style"] = "dotted"
        elements.append({"group": "edges", "data": data})

    return elements
