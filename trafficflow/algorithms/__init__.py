"""Maximum-flow algorithms over residual graphs."""

from trafficflow.algorithms.dinic import dinic
from trafficflow.algorithms.edmonds_karp import edmonds_karp
from trafficflow.algorithms.max_flow import calc_max_flow, compute_max_flow
from trafficflow.algorithms.residual import ResidualGraph

__all__ = [
    "ResidualGraph",
    "edmonds_karp",
    "dinic",
    "calc_max_flow",
    "compute_max_flow",
]
