"""Tests for the networkx view behind the info box."""

from __future__ import annotations

from basicflow.elements import Edge, initial_elements
from basicflow.topology import build_graph, describe_edge, describe_node


def test_build_graph_from_seed() -> None:
    G = build_graph(initial_elements())
    assert set(G.nodes) == {"1", "2"}
    assert G.has_edge("1", "2", key="e1-2")


def test_describe_node_lists_edges() -> None:
    elements = initial_elements() + [Edge(id="e2-1", source="2", target="1")]
    info = describe_node(elements, "1")
    assert info["label"] == "Start Node"
    assert info["kind"] == "input"
    assert info["outgoing"] == [("e1-2", "1", "2")]
    assert info["incoming"] == [("e2-1", "2", "1")]


def test_describe_unknown_ids() -> None:
    assert describe_node(initial_elements(), "nope") is None
    assert describe_edge(initial_elements(), "nope") is None


def test_dangling_endpoints_are_reported() -> None:
    elements = [el for el in initial_elements() if el.id != "2"]
    info = describe_edge(elements, "e1-2")
    assert info["dangling"] == ["2"]
    assert info["animated"] is True
    # placeholder endpoints are not described as nodes
    assert describe_node(elements, "2") is None
