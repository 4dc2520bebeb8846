"""Edmonds-Karp maximum flow.

Repeatedly finds a shortest augmenting path (by hop count) with breadth-first
search over the residual graph and saturates its bottleneck. Shortest paths
bound the number of augmentations by O(V * E), giving O(V * E^2) overall.
"""

from __future__ import annotations

from collections import deque
from typing import List, Literal, Optional, Tuple, Union, overload

from trafficflow.algorithms.residual import GraphLike, ResidualGraph
from trafficflow.logging import get_logger
from trafficflow.types.dto import FlowSummary

logger = get_logger(__name__)


def _find_augmenting_path(
    residual: ResidualGraph, src: int, dst: int
) -> Optional[List[int]]:
    """Return arcs of a shortest ``src -> dst`` path with residual capacity.

    Each vertex is enqueued at most once, so cycles cannot stall the search.
    The search stops as soon as ``dst`` is discovered.
    """
    heads, cap, adjacency = residual.heads, residual.cap, residual.adjacency
    pred_arc = [-1] * residual.num_nodes
    visited = [False] * residual.num_nodes
    visited[src] = True
    queue = deque([src])

    while queue and not visited[dst]:
        u = queue.popleft()
        for arc in adjacency[u]:
            v = heads[arc]
            if cap[arc] > 0 and not visited[v]:
                visited[v] = True
                pred_arc[v] = arc
                if v == dst:
                    break
                queue.append(v)

    if not visited[dst]:
        return None

    path = []
    v = dst
    while v != src:
        arc = pred_arc[v]
        path.append(arc)
        v = residual.tail(arc)
    path.reverse()
    return path


@overload
def edmonds_karp(
    graph: GraphLike, source: str, sink: str, *, return_summary: Literal[False] = False
) -> int: ...


@overload
def edmonds_karp(
    graph: GraphLike, source: str, sink: str, *, return_summary: Literal[True]
) -> Tuple[int, FlowSummary]: ...


def edmonds_karp(
    graph: GraphLike, source: str, sink: str, *, return_summary: bool = False
) -> Union[int, Tuple[int, FlowSummary]]:
    """Compute the maximum ``source -> sink`` flow with Edmonds-Karp.

    A fresh residual state is built from the graph's base capacities on every
    call.

    Args:
        graph: Graph or capacity snapshot to solve.
        source: Source vertex label.
        sink: Sink vertex label.
        return_summary: If True, also return the final `FlowSummary`.

    Returns:
        The total flow, or ``(total_flow, summary)``. An absent source or sink,
        an unreachable sink, or ``source == sink`` all yield 0.
    """
    residual = ResidualGraph.from_graph(graph)
    src = residual.index_of(source)
    dst = residual.index_of(sink)

    total = 0
    augmentations = 0
    if src is not None and dst is not None and src != dst:
        cap = residual.cap
        while True:
            path = _find_augmenting_path(residual, src, dst)
            if path is None:
                break
            bottleneck = min(cap[arc] for arc in path)
            for arc in path:
                residual.push(arc, bottleneck)
            total += bottleneck
            augmentations += 1
            logger.debug(
                "Edmonds-Karp augmentation %d: %d hops, bottleneck %d",
                augmentations,
                len(path),
                bottleneck,
            )

    logger.debug(
        "Edmonds-Karp %s->%s: flow %d after %d augmentations",
        source,
        sink,
        total,
        augmentations,
    )
    if return_summary:
        return total, residual.summary(total, source)
    return total
