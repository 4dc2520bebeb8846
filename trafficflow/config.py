"""Configuration classes for trafficflow components."""

from dataclasses import dataclass
from typing import Literal

DuplicateEdgePolicy = Literal["accumulate", "overwrite"]

DUPLICATE_EDGE_POLICIES = ("accumulate", "overwrite")


@dataclass
class TrafficFlowConfig:
    """Defaults for graph construction and puzzle grading."""

    # Puzzle rounds always ask for the flow from "A" to "T"
    default_source: str = "A"
    default_sink: str = "T"

    # How a repeated (from, to) registration combines with the existing edge
    duplicate_edge_policy: DuplicateEdgePolicy = "accumulate"

    # Run the two solvers on separate worker threads when comparing
    parallel_comparison: bool = False

    def __post_init__(self) -> None:
        if self.duplicate_edge_policy not in DUPLICATE_EDGE_POLICIES:
            raise ValueError(
                f"Unknown duplicate_edge_policy '{self.duplicate_edge_policy}'. "
                f"Expected one of: {', '.join(DUPLICATE_EDGE_POLICIES)}"
            )


# Global configuration instance
TRAFFIC_CONFIG = TrafficFlowConfig()
