"""Conversion between edge lists, NetworkX graphs and `TrafficGraph`."""

from __future__ import annotations

from typing import Iterable, Optional, Tuple, Union

import networkx as nx

from trafficflow.graph.traffic_graph import TrafficGraph

NxGraph = Union[nx.DiGraph, nx.MultiDiGraph]


def from_edges(
    triples: Iterable[Tuple[str, str, int]],
    duplicate_edge_policy: Optional[str] = None,
) -> TrafficGraph:
    """Build a `TrafficGraph` from ``(from, to, capacity)`` triples.

    Args:
        triples: Edges in input order.
        duplicate_edge_policy: Override of the configured duplicate policy.

    Returns:
        A new graph with vertices created in first-seen order.
    """
    graph = TrafficGraph(duplicate_edge_policy=duplicate_edge_policy)
    graph.add_capacities_from(triples)
    return graph


def from_networkx(
    G: NxGraph,
    *,
    capacity_attr: str = "capacity",
    duplicate_edge_policy: Optional[str] = None,
) -> TrafficGraph:
    """Convert a directed NetworkX graph to a `TrafficGraph`.

    Node names are converted with ``str()``. Parallel edges of a
    ``MultiDiGraph`` go through ``add_edge`` one by one, so the duplicate
    policy decides how they combine. Isolated nodes are kept.

    Args:
        G: Directed NetworkX graph.
        capacity_attr: Edge attribute holding the integer capacity.
        duplicate_edge_policy: Override of the configured duplicate policy.

    Raises:
        TypeError: If G is not a directed NetworkX graph.
        ValueError: If an edge has no ``capacity_attr``.
    """
    if not isinstance(G, nx.DiGraph):
        raise TypeError(f"Expected a directed NetworkX graph, got {type(G).__name__}")

    graph = TrafficGraph(duplicate_edge_policy=duplicate_edge_policy)
    for node in G.nodes:
        graph.add_node(str(node))
    for u, v, data in G.edges(data=True):
        if capacity_attr not in data:
            raise ValueError(f"Edge '{u}'->'{v}' has no '{capacity_attr}' attribute.")
        graph.add_edge(str(u), str(v), data[capacity_attr])
    return graph


def to_networkx(graph: TrafficGraph, capacity_attr: str = "capacity") -> nx.DiGraph:
    """Return a plain ``networkx.DiGraph`` copy with capacities under ``capacity_attr``."""
    nx_graph = nx.DiGraph()
    nx_graph.add_nodes_from(graph.nodes)
    for u, v, data in graph.edges(data=True):
        nx_graph.add_edge(u, v, **{capacity_attr: data["capacity"]})
    return nx_graph
