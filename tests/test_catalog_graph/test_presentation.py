"""Tests for node sizing, colouring and element export."""
from __future__ import annotations

import pytest

from src.catalog_graph.indexer import build_graph
from src.catalog_graph.presentation import (
    FALLBACK_TYPE_COLOR,
    MISSING_NODE_COLOR,
    colour_for_type,
    node_size,
    rag_color,
    to_elements,
)
from src.shared.models.graph import Staleness


class TestNodeSize:
    def test_flat_when_no_weights(self) -> None:
        assert node_size(0, 0) == 40.0

    def test_linear_scale(self) -> None:
        assert node_size(0, 4) == 40.0
        assert node_size(2, 4) == 75.0
        assert node_size(4, 4) == 110.0


class TestColours:
    @pytest.mark.parametrize(
        "node_type, expected",
        [
            ("edge", "#f97316"),
            ("Learner-API", "#22c55e"),
            ("analytics", "#a855f7"),
            ("settings", "#ec4899"),
            ("public-api", "#38bdf8"),
            (None, FALLBACK_TYPE_COLOR),
            ("database", FALLBACK_TYPE_COLOR),
        ],
    )
    def test_colour_for_type(self, node_type, expected) -> None:
        assert colour_for_type(node_type) == expected

    def test_rag_color(self) -> None:
        assert rag_color(Staleness.FRESH) == "#22c55e"
        assert rag_color(Staleness.AGING) == "#f59e0b"
        assert rag_color(Staleness.STALE) == "#ef4444"
        assert rag_color(None) is None


class TestToElements:
    def test_nodes_then_edges(self, sample_services) -> None:
        graph = build_graph(sample_services)
        elements = to_elements(graph, positions={"auth": {"x": 1.0, "y": 2.0}})

        groups = [el["group"] for el in elements]
        assert groups == ["nodes"] * len(graph.nodes) + ["edges"] * len(graph.edges)

        auth = next(el for el in elements if el["data"]["id"] == "auth")
        assert auth["position"] == {"x": 1.0, "y": 2.0}
        assert auth["data"]["size"] == 110.0

        user_db = next(el for el in elements if el["data"]["id"] == "user-db")
        assert user_db["data"]["color"] == MISSING_NODE_COLOR
        assert "position" not in user_db

    def test_edge_line_styles(self, sample_services) -> None:
        elements = to_elements(build_graph(sample_services))
        styles = {
            el["data"]["kind"]: el["data"]["line_style"]
            for el in elements
            if el["group"] == "edges"
        }
        assert styles == {"dependency": "solid", "event": "dotted"}
