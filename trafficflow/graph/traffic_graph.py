"""Directed capacity graph keyed by string labels.

`TrafficGraph` extends `networkx.DiGraph`: vertices are created implicitly by
``add_edge`` and every edge carries a non-negative integer ``capacity``.
Solvers never read the graph directly; they work from a `CapacitySnapshot`,
an immutable, index-addressed copy of the base capacities produced by
``snapshot()``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional, Tuple

import networkx as nx

from trafficflow.config import DUPLICATE_EDGE_POLICIES, TRAFFIC_CONFIG
from trafficflow.logging import get_logger
from trafficflow.types.base import EdgeKey

logger = get_logger(__name__)


def validate_capacity(capacity: Any, u: Any = None, v: Any = None) -> int:
    """Return ``capacity`` if it is a non-negative integer.

    Raises:
        TypeError: If capacity is not an int (bools are rejected too).
        ValueError: If capacity is negative.
    """
    where = f" on edge '{u}'->'{v}'" if u is not None else ""
    if isinstance(capacity, bool) or not isinstance(capacity, int):
        raise TypeError(
            f"Capacity{where} must be an integer, got {type(capacity).__name__}."
        )
    if capacity < 0:
        raise ValueError(f"Capacity{where} must be non-negative, got {capacity}.")
    return capacity


def _validate_label(label: Any) -> str:
    if not isinstance(label, str):
        raise TypeError(f"Vertex label must be a string, got {type(label).__name__}.")
    if not label:
        raise ValueError("Vertex label must be a non-empty string.")
    return label


@dataclass(frozen=True)
class NodeMap:
    """Bidirectional mapping between vertex labels and dense integer indices.

    Attributes:
        to_index: Maps labels to indices ``0..n-1``.
        to_name: Labels in index order.
    """

    to_index: Dict[str, int] = field(default_factory=dict)
    to_name: Tuple[str, ...] = ()

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "NodeMap":
        ordered = tuple(names)
        return cls(
            to_index={name: i for i, name in enumerate(ordered)}, to_name=ordered
        )

    def __len__(self) -> int:
        return len(self.to_name)


@dataclass(frozen=True)
class CapacitySnapshot:
    """Immutable, index-addressed base capacities of a graph.

    Every input edge ``j`` owns the arc pair ``(2j, 2j + 1)``: arc ``2j`` is the
    forward arc with the edge's capacity and arc ``2j + 1`` is its reverse arc
    with capacity 0. The partner of arc ``a`` is therefore ``a ^ 1``.
    Self-loops are left out since they can never carry source-to-sink flow.

    Attributes:
        node_map: Label/index mapping.
        edges: Input edges in arc-pair order.
        heads: Target vertex index of each arc.
        capacities: Base capacity of each arc.
        adjacency: Arc indices leaving each vertex, forward and reverse.
    """

    node_map: NodeMap
    edges: Tuple[EdgeKey, ...]
    heads: Tuple[int, ...]
    capacities: Tuple[int, ...]
    adjacency: Tuple[Tuple[int, ...], ...]

    @property
    def num_nodes(self) -> int:
        return len(self.node_map)

    @property
    def num_arcs(self) -> int:
        return len(self.heads)

    def index_of(self, label: str) -> Optional[int]:
        """Return the index of ``label`` or None if the graph never saw it."""
        return self.node_map.to_index.get(label)


class TrafficGraph(nx.DiGraph):
    """A directed graph of road segments with integer capacities.

    Rules enforced on top of ``networkx.DiGraph``:
      - Vertex labels are non-empty strings.
      - ``add_edge`` requires a non-negative integer capacity and creates
        missing vertices on demand.
      - Registering the same ``(from, to)`` pair again either accumulates
        into or overwrites the stored capacity, per ``duplicate_edge_policy``.
      - Self-loops are stored but never contribute flow.
    """

    def __init__(
        self,
        incoming_graph_data: Any = None,
        duplicate_edge_policy: Optional[str] = None,
        **attr: Any,
    ) -> None:
        policy = duplicate_edge_policy or TRAFFIC_CONFIG.duplicate_edge_policy
        if policy not in DUPLICATE_EDGE_POLICIES:
            raise ValueError(
                f"Unknown duplicate_edge_policy '{policy}'. "
                f"Expected one of: {', '.join(DUPLICATE_EDGE_POLICIES)}"
            )
        super().__init__(incoming_graph_data, **attr)
        # Kept in the graph attribute dict so copy() carries it over
        self.graph["duplicate_edge_policy"] = policy

    @property
    def duplicate_edge_policy(self) -> str:
        return self.graph["duplicate_edge_policy"]

    def add_node(self, node_for_adding: str, **attr: Any) -> None:
        super().add_node(_validate_label(node_for_adding), **attr)

    def add_edge(  # pyright: ignore[reportIncompatibleMethodOverride]
        self,
        u_of_edge: str,
        v_of_edge: str,
        capacity: int,
        **attr: Any,
    ) -> None:
        """Add a directed edge ``u_of_edge -> v_of_edge`` with ``capacity``.

        Args:
            u_of_edge: Source vertex label, created if missing.
            v_of_edge: Target vertex label, created if missing.
            capacity: Non-negative integer capacity; 0 is valid and carries no flow.
            **attr: Extra edge attributes stored alongside the capacity.

        Raises:
            TypeError: If a label is not a string or capacity is not an integer.
            ValueError: If a label is empty or capacity is negative.
        """
        _validate_label(u_of_edge)
        _validate_label(v_of_edge)
        validate_capacity(capacity, u_of_edge, v_of_edge)

        if self.has_edge(u_of_edge, v_of_edge):
            previous = self[u_of_edge][v_of_edge]["capacity"]
            if self.duplicate_edge_policy == "accumulate":
                capacity = previous + capacity
            logger.debug(
                "Duplicate edge %s->%s: %s capacity %d -> %d",
                u_of_edge,
                v_of_edge,
                self.duplicate_edge_policy,
                previous,
                capacity,
            )
        super().add_edge(u_of_edge, v_of_edge, capacity=capacity, **attr)

    def add_capacities_from(self, triples: Iterable[Tuple[str, str, int]]) -> None:
        """Add edges from ``(from, to, capacity)`` triples in order."""
        for u, v, capacity in triples:
            self.add_edge(u, v, capacity)

    def capacity(self, u: str, v: str) -> int:
        """Return the capacity of ``u -> v``, or 0 when there is no such edge."""
        if not self.has_edge(u, v):
            return 0
        return self[u][v]["capacity"]

    def snapshot(self) -> CapacitySnapshot:
        """Build an immutable index-addressed copy of the base capacities.

        Indices follow vertex insertion order and arcs follow edge insertion
        order, so repeated snapshots of an unchanged graph are identical.

        Raises:
            ValueError: If an edge added through a NetworkX bulk API lacks a
                valid capacity.
        """
        node_map = NodeMap.from_names(self.nodes)
        to_index = node_map.to_index

        edges = []
        heads = []
        capacities = []
        adjacency = [[] for _ in range(len(node_map))]
        for u, v, data in self.edges(data=True):
            if u == v:
                continue
            if "capacity" not in data:
                raise ValueError(f"Edge '{u}'->'{v}' has no capacity attribute.")
            cap = validate_capacity(data["capacity"], u, v)
            ui, vi = to_index[u], to_index[v]
            forward = len(heads)
            edges.append((u, v))
            heads.extend((vi, ui))
            capacities.extend((cap, 0))
            adjacency[ui].append(forward)
            adjacency[vi].append(forward + 1)

        return CapacitySnapshot(
            node_map=node_map,
            edges=tuple(edges),
            heads=tuple(heads),
            capacities=tuple(capacities),
            adjacency=tuple(tuple(arcs) for arcs in adjacency),
        )
