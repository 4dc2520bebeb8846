"""Dinic maximum flow.

Each phase levels the residual graph by BFS distance from the source, then
extracts a blocking flow along level-increasing arcs. A per-vertex
current-arc pointer skips arcs already found saturated or dead within the
phase, bounding a phase by O(V * E) and the whole run by O(V^2 * E).

The blocking-flow search is written with an explicit path stack instead of
recursion so long level graphs do not hit the interpreter's recursion limit.
"""

from __future__ import annotations

from collections import deque
from typing import List, Literal, Optional, Tuple, Union, overload

from trafficflow.algorithms.residual import GraphLike, ResidualGraph
from trafficflow.logging import get_logger
from trafficflow.types.dto import FlowSummary

logger = get_logger(__name__)

#: Level of a vertex the current phase never reached.
UNREACHED = -1


def _build_levels(residual: ResidualGraph, src: int, dst: int) -> Optional[List[int]]:
    """Assign BFS levels from ``src``; return None when ``dst`` gets no level."""
    heads, cap, adjacency = residual.heads, residual.cap, residual.adjacency
    level = [UNREACHED] * residual.num_nodes
    level[src] = 0
    queue = deque([src])

    while queue and level[dst] == UNREACHED:
        u = queue.popleft()
        next_level = level[u] + 1
        for arc in adjacency[u]:
            v = heads[arc]
            if cap[arc] > 0 and level[v] == UNREACHED:
                level[v] = next_level
                if v == dst:
                    break
                queue.append(v)

    if level[dst] == UNREACHED:
        return None
    return level


def _blocking_flow(
    residual: ResidualGraph, level: List[int], src: int, dst: int
) -> int:
    """Push a blocking flow through the level graph and return its value.

    ``current`` holds each vertex's current-arc pointer. It only moves forward
    within the phase: past arcs that are saturated, leave the level graph, or
    lead to a vertex that turned out to be a dead end.
    """
    heads, cap, adjacency = residual.heads, residual.cap, residual.adjacency
    current = [0] * residual.num_nodes
    pushed = 0
    path: List[int] = []
    u = src

    while True:
        if u == dst:
            bottleneck = min(cap[arc] for arc in path)
            for arc in path:
                residual.push(arc, bottleneck)
            pushed += bottleneck
            path.clear()
            u = src
            continue

        arcs = adjacency[u]
        wanted = level[u] + 1
        i = current[u]
        while i < len(arcs):
            arc = arcs[i]
            if cap[arc] > 0 and level[heads[arc]] == wanted:
                break
            i += 1
        current[u] = i

        if i < len(arcs):
            arc = arcs[i]
            path.append(arc)
            u = heads[arc]
            continue

        # Dead end: nothing more leaves u this phase
        if u == src:
            return pushed
        arc = path.pop()
        u = residual.tail(arc)
        current[u] += 1


@overload
def dinic(
    graph: GraphLike, source: str, sink: str, *, return_summary: Literal[False] = False
) -> int: ...


@overload
def dinic(
    graph: GraphLike, source: str, sink: str, *, return_summary: Literal[True]
) -> Tuple[int, FlowSummary]: ...


def dinic(
    graph: GraphLike, source: str, sink: str, *, return_summary: bool = False
) -> Union[int, Tuple[int, FlowSummary]]:
    """Compute the maximum ``source -> sink`` flow with Dinic's algorithm.

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
    phases = 0
    if src is not None and dst is not None and src != dst:
        while True:
            level = _build_levels(residual, src, dst)
            if level is None:
                break
            phases += 1
            pushed = _blocking_flow(residual, level, src, dst)
            total += pushed
            logger.debug(
                "Dinic phase %d: sink level %d, pushed %d", phases, level[dst], pushed
            )

    logger.debug("Dinic %s->%s: flow %d after %d phases", source, sink, total, phases)
    if return_summary:
        return total, residual.summary(total, source)
    return total
