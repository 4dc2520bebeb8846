"""Grading a player's max-flow answer for a traffic-network round.

The calling layer hands over the round's road segments and the player's
answer; `TrafficGameService` builds a fresh graph for the round, solves it
with both algorithms and reports the verdict together with per-algorithm
timings. "No flow possible" is the ordinary answer 0. An algorithm
divergence propagates as `AlgorithmDivergenceError` and is never graded.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from trafficflow.comparison import compare_max_flow
from trafficflow.config import TRAFFIC_CONFIG, TrafficFlowConfig
from trafficflow.graph.traffic_graph import TrafficGraph
from trafficflow.logging import get_logger
from trafficflow.types.dto import AlgorithmTiming

logger = get_logger(__name__)

STATUS_CORRECT = "Correct"
STATUS_WRONG = "Wrong"


@dataclass(frozen=True)
class TrafficEdge:
    """One directed road segment and its capacity in vehicles per minute."""

    from_node: str
    to_node: str
    capacity: int

    @property
    def road_segment(self) -> str:
        return f"{self.from_node}->{self.to_node}"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TrafficEdge":
        """Build from a ``{"from", "to", "capacity"}`` mapping."""
        missing = [k for k in ("from", "to", "capacity") if k not in data]
        if missing:
            raise ValueError(f"Edge definition missing keys: {', '.join(missing)}")
        return cls(from_node=data["from"], to_node=data["to"], capacity=data["capacity"])


@dataclass
class TrafficNetwork:
    """Road segments of one puzzle round."""

    edges: List[TrafficEdge] = field(default_factory=list)

    def to_graph(self, duplicate_edge_policy: Optional[str] = None) -> TrafficGraph:
        """Build a new `TrafficGraph` from the segments in order."""
        graph = TrafficGraph(duplicate_edge_policy=duplicate_edge_policy)
        for edge in self.edges:
            graph.add_edge(edge.from_node, edge.to_node, edge.capacity)
        return graph


@dataclass(frozen=True)
class TrafficGameResult:
    """Verdict for one submitted answer.

    Attributes:
        player_answer: The submitted flow value.
        correct_answer: The computed maximum flow.
        status: ``"Correct"`` or ``"Wrong"``.
        edmonds_karp_time: Edmonds-Karp duration in milliseconds.
        dinic_time: Dinic duration in milliseconds.
        time_taken: Same as ``edmonds_karp_time``; kept for older clients.
    """

    player_answer: int
    correct_answer: int
    status: str
    edmonds_karp_time: float
    dinic_time: float
    time_taken: float

    @property
    def is_correct(self) -> bool:
        return self.status == STATUS_CORRECT

    @property
    def message(self) -> str:
        if self.is_correct:
            return "Correct! Your answer has been saved."
        return f"Wrong! The correct answer is {self.correct_answer}."

    def algorithm_times(self) -> List[AlgorithmTiming]:
        return [
            AlgorithmTiming("Edmonds-Karp", self.edmonds_karp_time),
            AlgorithmTiming("Dinic", self.dinic_time),
        ]

    def to_dict(self) -> Dict[str, Any]:
        """Return the response payload the puzzle front end expects."""
        return {
            "playerAnswer": self.player_answer,
            "correctAnswer": self.correct_answer,
            "edmondsKarpTime": self.edmonds_karp_time,
            "dinicTime": self.dinic_time,
            "status": self.status,
            "message": self.message,
        }


class TrafficGameService:
    """Grades answers for traffic-network rounds."""

    def __init__(self, config: Optional[TrafficFlowConfig] = None) -> None:
        self.config = config or TRAFFIC_CONFIG

    def calculate_max_flow(
        self,
        network: TrafficNetwork,
        player_answer: int,
        source: Optional[str] = None,
        sink: Optional[str] = None,
    ) -> TrafficGameResult:
        """Solve ``network`` and grade ``player_answer`` against it.

        Args:
            network: The round's road segments.
            player_answer: The player's claimed maximum flow.
            source: Source label, defaults to the configured puzzle source.
            sink: Sink label, defaults to the configured puzzle sink.

        Raises:
            TypeError, ValueError: If a segment is malformed.
            AlgorithmDivergenceError: If the two algorithms disagree.
        """
        source = source or self.config.default_source
        sink = sink or self.config.default_sink

        graph = network.to_graph(self.config.duplicate_edge_policy)
        comparison = compare_max_flow(
            graph, source, sink, parallel=self.config.parallel_comparison
        )

        correct = comparison.flow
        status = STATUS_CORRECT if player_answer == correct else STATUS_WRONG
        logger.info(
            "Graded %s->%s round: answer %d, max flow %d, %s",
            source,
            sink,
            player_answer,
            correct,
            status,
        )
        ek_ms = comparison.edmonds_karp_time.elapsed_ms
        return TrafficGameResult(
            player_answer=player_answer,
            correct_answer=correct,
            status=status,
            edmonds_karp_time=ek_ms,
            dinic_time=comparison.dinic_time.elapsed_ms,
            time_taken=ek_ms,
        )
