"""Per-solve residual state over a `CapacitySnapshot`.

A `ResidualGraph` owns the only mutable data a solver touches: the residual
capacity of every arc. It is built fresh for each solve call from the
snapshot's base capacities and discarded afterwards, so two solver runs on
the same graph never observe each other's pushes.
"""

from __future__ import annotations

from collections import deque
from typing import Dict, FrozenSet, List, Optional, Union

from trafficflow.graph.traffic_graph import CapacitySnapshot, TrafficGraph
from trafficflow.types.base import EdgeKey
from trafficflow.types.dto import FlowSummary

GraphLike = Union[TrafficGraph, CapacitySnapshot]


def as_snapshot(graph: GraphLike) -> CapacitySnapshot:
    """Return ``graph`` itself if it is a snapshot, else a fresh snapshot of it."""
    if isinstance(graph, CapacitySnapshot):
        return graph
    if isinstance(graph, TrafficGraph):
        return graph.snapshot()
    raise TypeError(
        f"Expected TrafficGraph or CapacitySnapshot, got {type(graph).__name__}"
    )


class ResidualGraph:
    """Residual capacities of one solve call.

    Attributes:
        snapshot: The immutable base this state was built from.
        heads: Target vertex of each arc (shared, read-only).
        adjacency: Outgoing arcs of each vertex (shared, read-only).
        cap: Residual capacity of each arc (private to this instance).
    """

    __slots__ = ("snapshot", "heads", "adjacency", "cap")

    def __init__(self, snapshot: CapacitySnapshot) -> None:
        self.snapshot = snapshot
        self.heads = snapshot.heads
        self.adjacency = snapshot.adjacency
        self.cap: List[int] = list(snapshot.capacities)

    @classmethod
    def from_graph(cls, graph: GraphLike) -> "ResidualGraph":
        return cls(as_snapshot(graph))

    @property
    def num_nodes(self) -> int:
        return self.snapshot.num_nodes

    def index_of(self, label: str) -> Optional[int]:
        return self.snapshot.index_of(label)

    def tail(self, arc: int) -> int:
        """Return the vertex ``arc`` leaves from."""
        return self.heads[arc ^ 1]

    def push(self, arc: int, amount: int) -> None:
        """Send ``amount`` units along ``arc`` and credit its partner arc."""
        self.cap[arc] -= amount
        self.cap[arc ^ 1] += amount

    def edge_flow(self) -> Dict[EdgeKey, int]:
        """Return the flow on each input edge (the partner arc's residual)."""
        cap = self.cap
        return {edge: cap[2 * j + 1] for j, edge in enumerate(self.snapshot.edges)}

    def residual_capacity(self) -> Dict[EdgeKey, int]:
        """Return the remaining forward capacity of each input edge."""
        cap = self.cap
        return {edge: cap[2 * j] for j, edge in enumerate(self.snapshot.edges)}

    def reachable_from(self, source: int) -> List[bool]:
        """Mark vertices reachable from ``source`` over arcs with residual capacity."""
        seen = [False] * self.num_nodes
        seen[source] = True
        queue = deque([source])
        heads, cap, adjacency = self.heads, self.cap, self.adjacency
        while queue:
            u = queue.popleft()
            for arc in adjacency[u]:
                v = heads[arc]
                if cap[arc] > 0 and not seen[v]:
                    seen[v] = True
                    queue.append(v)
        return seen

    def summary(self, total_flow: int, source: str) -> FlowSummary:
        """Describe the current flow assignment.

        The min cut lists forward edges with positive base capacity that leave
        the residual-reachable set; at a maximum flow all of them are saturated.
        """
        src = self.index_of(source)
        names = self.snapshot.node_map.to_name
        reachable: FrozenSet[str] = frozenset()
        min_cut: List[EdgeKey] = []
        if src is not None:
            seen = self.reachable_from(src)
            reachable = frozenset(names[i] for i, hit in enumerate(seen) if hit)
            base = self.snapshot.capacities
            for j, edge in enumerate(self.snapshot.edges):
                arc = 2 * j
                if base[arc] > 0 and seen[self.tail(arc)] and not seen[self.heads[arc]]:
                    min_cut.append(edge)
            min_cut.sort()

        return FlowSummary(
            total_flow=total_flow,
            edge_flow=self.edge_flow(),
            residual_cap=self.residual_capacity(),
            reachable=reachable,
            min_cut=min_cut,
        )
