"""Reading traffic networks from YAML or JSON documents.

Accepted shape (JSON is a subset of YAML, so one loader serves both)::

    source: A        # optional
    sink: T          # optional
    edges:
      - {from: A, to: B, capacity: 10}
      - [B, T, 10]   # list form is accepted too

A bare top-level list is read as the ``edges`` section.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional, Union

import yaml

from trafficflow.game import TrafficEdge, TrafficNetwork


@dataclass
class NetworkDocument:
    """A parsed network file: road segments plus optional endpoints."""

    network: TrafficNetwork
    source: Optional[str] = None
    sink: Optional[str] = None


def _parse_label(value: Any, where: str) -> str:
    # YAML reads labels such as 1 or "on" as scalars of other types
    if isinstance(value, str):
        return value
    if isinstance(value, (bool, int, float)):
        return str(value)
    raise ValueError(
        f"{where}: vertex label must be a string or number, "
        f"got {type(value).__name__}"
    )


def _parse_edge(entry: Any, position: int) -> TrafficEdge:
    if isinstance(entry, dict):
        try:
            edge = TrafficEdge.from_dict(entry)
        except ValueError as exc:
            raise ValueError(f"Edge #{position}: {exc}") from None
        return TrafficEdge(
            _parse_label(edge.from_node, f"Edge #{position}"),
            _parse_label(edge.to_node, f"Edge #{position}"),
            edge.capacity,
        )
    if isinstance(entry, (list, tuple)):
        if len(entry) != 3:
            raise ValueError(
                f"Edge #{position} must have exactly 3 items [from, to, capacity], "
                f"got {len(entry)}"
            )
        return TrafficEdge(
            _parse_label(entry[0], f"Edge #{position}"),
            _parse_label(entry[1], f"Edge #{position}"),
            entry[2],
        )
    raise ValueError(
        f"Edge #{position} must be a mapping or a [from, to, capacity] list"
    )


def parse_network(text: str) -> NetworkDocument:
    """Parse a YAML/JSON network document.

    Raises:
        ValueError: If the document does not have the expected shape.
    """
    data = yaml.safe_load(text)
    if data is None:
        data = {}
    if isinstance(data, list):
        data = {"edges": data}
    if not isinstance(data, dict):
        raise ValueError("The network document must be a mapping or a list of edges.")

    unknown = set(data) - {"source", "sink", "edges"}
    if unknown:
        raise ValueError(f"Unrecognized keys: {', '.join(sorted(map(str, unknown)))}")

    raw_edges = data.get("edges", [])
    if not isinstance(raw_edges, list):
        raise ValueError("'edges' must be a list")

    edges: List[TrafficEdge] = [
        _parse_edge(entry, i) for i, entry in enumerate(raw_edges, start=1)
    ]
    source = data.get("source")
    sink = data.get("sink")
    return NetworkDocument(
        network=TrafficNetwork(edges=edges),
        source=None if source is None else _parse_label(source, "source"),
        sink=None if sink is None else _parse_label(sink, "sink"),
    )


def load_network(path: Union[str, Path]) -> NetworkDocument:
    """Read and parse a network file."""
    return parse_network(Path(path).read_text(encoding="utf-8"))
