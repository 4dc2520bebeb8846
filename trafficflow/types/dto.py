"""Immutable result containers for max-flow computations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Tuple

from trafficflow.types.base import EdgeKey


@dataclass(frozen=True)
class FlowSummary:
    """Final flow assignment of a single solver run.

    Attributes:
        total_flow: Maximum flow value achieved.
        edge_flow: Flow on each input edge, indexed by ``(from, to)``.
        residual_cap: Remaining capacity on each input edge.
        reachable: Vertices reachable from the source in the final residual graph.
        min_cut: Saturated edges leaving ``reachable``, sorted by label.
    """

    total_flow: int
    edge_flow: Dict[EdgeKey, int]
    residual_cap: Dict[EdgeKey, int]
    reachable: FrozenSet[str]
    min_cut: List[EdgeKey] = field(default_factory=list)

    def net_flow(self, node: str) -> int:
        """Return outflow minus inflow at ``node``."""
        out = sum(f for (u, _), f in self.edge_flow.items() if u == node)
        inc = sum(f for (_, v), f in self.edge_flow.items() if v == node)
        return out - inc


@dataclass(frozen=True)
class AlgorithmTiming:
    """Wall-clock duration of one solver run.

    Attributes:
        name: Display name, ``"Edmonds-Karp"`` or ``"Dinic"``.
        elapsed_ms: Duration in milliseconds.
    """

    name: str
    elapsed_ms: float

    def to_dict(self) -> Dict[str, Any]:
        return {"algorithmName": self.name, "timeTakenMs": self.elapsed_ms}


@dataclass(frozen=True)
class MaxFlowComparison:
    """Outcome of running both solvers on the same graph.

    Attributes:
        source: Source vertex label.
        sink: Sink vertex label.
        edmonds_karp_flow: Flow reported by Edmonds-Karp.
        dinic_flow: Flow reported by Dinic.
        edmonds_karp_time: Edmonds-Karp timing.
        dinic_time: Dinic timing.
    """

    source: str
    sink: str
    edmonds_karp_flow: int
    dinic_flow: int
    edmonds_karp_time: AlgorithmTiming
    dinic_time: AlgorithmTiming

    @property
    def flow(self) -> int:
        """Canonical flow value. Only constructed once both solvers agree."""
        return self.edmonds_karp_flow

    @property
    def timings(self) -> Tuple[AlgorithmTiming, AlgorithmTiming]:
        return (self.edmonds_karp_time, self.dinic_time)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable representation."""
        return {
            "source": self.source,
            "sink": self.sink,
            "maxFlow": self.flow,
            "algorithmTimes": [t.to_dict() for t in self.timings],
        }
