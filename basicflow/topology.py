"""
networkx view of an element sequence, used for the info box.

Edges whose endpoints have no node still go in the graph; the missing
endpoints are added as placeholder nodes flagged ``dangling``.
"""

from __future__ import annotations

import networkx as nx

from .elements import Edge, Node


def build_graph(elements):
    G = nx.MultiDiGraph()
    for el in elements:
        if isinstance(el, Node):
            G.add_node(el.id, label=el.label, kind=el.kind, dangling=False)

    for el in elements:
        if not isinstance(el, Edge):
            continue
        for endpoint in (el.source, el.target):
            if endpoint not in G:
                G.add_node(endpoint, label=endpoint, kind=None, dangling=True)
        G.add_edge(el.source, el.target, key=el.id, animated=el.animated)
    return G


def describe_node(elements, node_id):
    G = build_graph(elements)
    if node_id not in G or G.nodes[node_id]["dangling"]:
        return None
    attrs = G.nodes[node_id]
    return {
        "id": node_id,
        "label": attrs["label"],
        "kind": attrs["kind"],
        "incoming": [(key, u, v) for u, v, key in G.in_edges(node_id, keys=True)],
        "outgoing": [(key, u, v) for u, v, key in G.out_edges(node_id, keys=True)],
    }


def describe_edge(elements, edge_id):
    G = build_graph(elements)
    for u, v, key, data in G.edges(keys=True, data=True):
        if key != edge_id:
            continue
        return {
            "id": key,
            "source": u,
            "target": v,
            "animated": data["animated"],
            "dangling": [n for n in dict.fromkeys((u, v)) if G.nodes[n]["dangling"]],
        }
    return None
