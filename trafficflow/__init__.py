"""trafficflow: maximum flow of capacitated traffic networks.

Builds directed road networks from ``(from, to, capacity)`` triples and
computes the maximum flow between two vertices with Edmonds-Karp and Dinic,
cross-checking the two and timing each run.

Primary API:
    TrafficGraph - Directed capacity graph keyed by string labels
    calc_max_flow() - Max flow with one named algorithm
    compare_max_flow() - Both algorithms, cross-validated and timed
    TrafficGameService - Grade a player's answer for a puzzle round

Example:
    from trafficflow import TrafficGraph, compare_max_flow

    g = TrafficGraph()
    g.add_edge("A", "B", 10)
    g.add_edge("B", "T", 5)

    result = compare_max_flow(g, "A", "T")
    result.flow  # 5
"""

from __future__ import annotations

from trafficflow import logging
from trafficflow._version import __version__
from trafficflow.algorithms import calc_max_flow, compute_max_flow, dinic, edmonds_karp
from trafficflow.comparison import AlgorithmDivergenceError, compare_max_flow
from trafficflow.config import TRAFFIC_CONFIG, TrafficFlowConfig
from trafficflow.game import (
    TrafficEdge,
    TrafficGameResult,
    TrafficGameService,
    TrafficNetwork,
)
from trafficflow.graph import TrafficGraph, from_edges, from_networkx, to_networkx
from trafficflow.types import (
    AlgorithmTiming,
    FlowSummary,
    MaxFlowAlgorithm,
    MaxFlowComparison,
)

__all__ = [
    "__version__",
    # Model
    "TrafficGraph",
    "from_edges",
    "from_networkx",
    "to_networkx",
    # Algorithms
    "edmonds_karp",
    "dinic",
    "calc_max_flow",
    "compute_max_flow",
    "compare_max_flow",
    "AlgorithmDivergenceError",
    # Types
    "MaxFlowAlgorithm",
    "AlgorithmTiming",
    "FlowSummary",
    "MaxFlowComparison",
    # Grading
    "TrafficEdge",
    "TrafficNetwork",
    "TrafficGameResult",
    "TrafficGameService",
    # Configuration
    "TrafficFlowConfig",
    "TRAFFIC_CONFIG",
    "logging",
]
