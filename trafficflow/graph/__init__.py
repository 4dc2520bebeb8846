"""Capacitated directed graph model and conversion helpers."""

from trafficflow.graph.convert import from_edges, from_networkx, to_networkx
from trafficflow.graph.traffic_graph import CapacitySnapshot, NodeMap, TrafficGraph

__all__ = [
    "TrafficGraph",
    "CapacitySnapshot",
    "NodeMap",
    "from_edges",
    "from_networkx",
    "to_networkx",
]
