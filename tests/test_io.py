import json
from pathlib import Path

import pytest

from trafficflow.game import TrafficEdge
from trafficflow.io import load_network, parse_network


def test_parse_yaml_mapping_form():
    doc = parse_network(
        """
source: A
sink: T
edges:
  - {from: A, to: B, capacity: 10}
  - {from: B, to: T, capacity: 5}
"""
    )
    assert doc.source == "A"
    assert doc.sink == "T"
    assert doc.network.edges == [TrafficEdge("A", "B", 10), TrafficEdge("B", "T", 5)]


def test_parse_list_form_and_bare_list():
    doc = parse_network("[[A, B, 3], [B, T, 4]]")
    assert doc.source is None and doc.sink is None
    assert doc.network.edges == [TrafficEdge("A", "B", 3), TrafficEdge("B", "T", 4)]


def test_parse_json_document():
    payload = {
        "edges": [{"from": "A", "to": "T", "capacity": 9}],
        "source": "A",
        "sink": "T",
    }
    doc = parse_network(json.dumps(payload))
    assert doc.network.to_graph().capacity("A", "T") == 9


def test_parse_empty_document():
    doc = parse_network("")
    assert doc.network.edges == []


@pytest.mark.parametrize(
    "text,match",
    [
        ("just a string", "mapping or a list"),
        ("edges: {A: B}", "'edges' must be a list"),
        ("edges: [[A, B]]", "exactly 3 items"),
        ("edges: [{from: A, to: B}]", "Edge #1: .*capacity"),
        ("edges: [42]", "Edge #1 must be a mapping"),
        ("nodes: []", "Unrecognized keys: nodes"),
    ],
)
def test_parse_errors(text, match):
    with pytest.raises(ValueError, match=match):
        parse_network(text)


def test_load_network_from_file(tmp_path: Path):
    path = tmp_path / "round.yaml"
    path.write_text("edges:\n  - [A, T, 12]\n", encoding="utf-8")
    doc = load_network(path)
    assert doc.network.edges == [TrafficEdge("A", "T", 12)]


def test_load_network_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_network(tmp_path / "missing.yaml")


@pytest.mark.parametrize(
    "text,match",
    [
        ("edges:\n  - {from: ~, to: T, capacity: 3}\n", "Edge #1: vertex label .* NoneType"),
        ("edges:\n  - [A, B, 1]\n  - [A, ~, 4]\n", "Edge #2: vertex label .* NoneType"),
        ("edges: [[[1, 2], T, 4]]", "Edge #1: vertex label .* list"),
        ("edges: [{from: A, to: {x: 1}, capacity: 4}]", "Edge #1: vertex label .* dict"),
        ("source: [A]\nedges: []", "source: vertex label"),
    ],
)
def test_null_and_collection_labels_rejected(text, match):
    with pytest.raises(ValueError, match=match):
        parse_network(text)


def test_numeric_labels_become_strings():
    doc = parse_network("source: 1\nsink: 3\nedges: [[1, 2, 5], {from: 2, to: 3, capacity: 4}]")
    assert doc.source == "1" and doc.sink == "3"
    assert doc.network.edges == [TrafficEdge("1", "2", 5), TrafficEdge("2", "3", 4)]
