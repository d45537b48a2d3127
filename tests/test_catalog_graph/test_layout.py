"""Tests for the force-directed layout."""
from __future__ import annotations

import math

from src.catalog_graph.indexer import build_graph
from src.catalog_graph.layout import force_layout
from src.catalog_graph.view import filter_graph
from src.shared.models.graph import GraphFilter


def test_every_node_positioned(sample_services) -> None:
    graph = build_graph(sample_services)
    positions = force_layout(graph)

    assert set(positions) == {n.id for n in graph.nodes}
    for pos in positions.values():
        assert math.isfinite(pos["x"])
        assert math.isfinite(pos["y"])


def test_deterministic_for_same_seed(sample_services) -> None:
    graph = build_graph(sample_services)
    assert force_layout(graph, seed=7) == force_layout(graph, seed=7)


def test_empty_graph() -> None:
    assert force_layout(build_graph([])) == {}


def test_view_with_dangling_edges_ignored(sample_services) -> None:
    view = filter_graph(build_graph(sample_services), GraphFilter(service="profile"))
    positions = force_layout(view, iterations=10)
    assert set(positions) == {n.id for n in view.nodes}
