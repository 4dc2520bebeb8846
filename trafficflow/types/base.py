"""Base enums for max-flow algorithms."""

from __future__ import annotations

from enum import IntEnum
from typing import Tuple

#: Directed edge identifier by vertex labels: ``(from, to)``.
EdgeKey = Tuple[str, str]


class MaxFlowAlgorithm(IntEnum):
    """Max-flow algorithms available to solve and compare."""

    #: Shortest (BFS) augmenting paths, O(V * E^2).
    EDMONDS_KARP = 1
    #: Level graph plus blocking flow, O(V^2 * E).
    DINIC = 2

    @property
    def display_name(self) -> str:
        """Name used when reporting timings (e.g. ``"Edmonds-Karp"``)."""
        return _DISPLAY_NAMES[self]

    @classmethod
    def from_string(cls, value: str) -> "MaxFlowAlgorithm":
        """Parse a string into a MaxFlowAlgorithm enum value.

        Accepts member names (``"edmonds_karp"``), display names
        (``"Edmonds-Karp"``) and the short aliases ``"ek"`` / ``"dinic"``.

        Raises:
            ValueError: If the string doesn't match any algorithm.
        """
        normalized = value.strip().upper().replace("-", "_")
        if normalized == "EK":
            return cls.EDMONDS_KARP
        try:
            return cls[normalized]
        except KeyError:
            valid = ", ".join(e.name for e in cls)
            raise ValueError(
                f"Invalid algorithm '{value}'. Valid values are: {valid}"
            ) from None


_DISPLAY_NAMES = {
    MaxFlowAlgorithm.EDMONDS_KARP: "Edmonds-Karp",
    MaxFlowAlgorithm.DINIC: "Dinic",
}
