"""Single entry point for maximum-flow computation.

`calc_max_flow` dispatches to one named algorithm. `compute_max_flow` is the
legacy entry point whose answer is, by contract, the Edmonds-Karp answer; it
delegates rather than carrying its own logic.
"""

from __future__ import annotations

from typing import Callable, Dict, Literal, Tuple, Union, overload

from trafficflow.algorithms.dinic import dinic
from trafficflow.algorithms.edmonds_karp import edmonds_karp
from trafficflow.algorithms.residual import GraphLike
from trafficflow.types.base import MaxFlowAlgorithm
from trafficflow.types.dto import FlowSummary

MaxFlowSolver = Callable[..., Union[int, Tuple[int, FlowSummary]]]

SOLVERS: Dict[MaxFlowAlgorithm, MaxFlowSolver] = {
    MaxFlowAlgorithm.EDMONDS_KARP: edmonds_karp,
    MaxFlowAlgorithm.DINIC: dinic,
}


@overload
def calc_max_flow(
    graph: GraphLike,
    src_node: str,
    dst_node: str,
    *,
    algorithm: Union[MaxFlowAlgorithm, str] = MaxFlowAlgorithm.EDMONDS_KARP,
    return_summary: Literal[False] = False,
) -> int: ...


@overload
def calc_max_flow(
    graph: GraphLike,
    src_node: str,
    dst_node: str,
    *,
    algorithm: Union[MaxFlowAlgorithm, str] = MaxFlowAlgorithm.EDMONDS_KARP,
    return_summary: Literal[True],
) -> Tuple[int, FlowSummary]: ...


def calc_max_flow(
    graph: GraphLike,
    src_node: str,
    dst_node: str,
    *,
    algorithm: Union[MaxFlowAlgorithm, str] = MaxFlowAlgorithm.EDMONDS_KARP,
    return_summary: bool = False,
) -> Union[int, Tuple[int, FlowSummary]]:
    """Compute the maximum flow between two vertices with one algorithm.

    Args:
        graph: Graph or capacity snapshot to solve.
        src_node: Source vertex label.
        dst_node: Sink vertex label.
        algorithm: Algorithm to run, as enum or string (``"dinic"``, ``"ek"``, ...).
        return_summary: If True, also return the final `FlowSummary`.

    Returns:
        ``int`` total flow, or ``(int, FlowSummary)`` when ``return_summary``.

    Examples:
        >>> from trafficflow.graph import from_edges
        >>> g = from_edges([("A", "B", 10), ("B", "C", 5)])
        >>> calc_max_flow(g, "A", "C")
        5
        >>> calc_max_flow(g, "A", "C", algorithm="dinic")
        5
    """
    if isinstance(algorithm, str):
        algorithm = MaxFlowAlgorithm.from_string(algorithm)
    solver = SOLVERS[algorithm]
    return solver(graph, src_node, dst_node, return_summary=return_summary)


def compute_max_flow(graph: GraphLike, src_node: str, dst_node: str) -> int:
    """Legacy entry point; always equals the Edmonds-Karp result."""
    return edmonds_karp(graph, src_node, dst_node)
