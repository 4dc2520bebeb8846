import networkx as nx
import pytest

from trafficflow.graph import TrafficGraph, from_edges, from_networkx, to_networkx


def test_from_edges_builds_graph():
    g = from_edges([("A", "B", 10), ("B", "C", 5)])
    assert isinstance(g, TrafficGraph)
    assert g.capacity("A", "B") == 10
    assert g.capacity("B", "C") == 5


def test_from_edges_policy_override():
    triples = [("A", "B", 10), ("A", "B", 4)]
    assert from_edges(triples).capacity("A", "B") == 14
    assert from_edges(triples, duplicate_edge_policy="overwrite").capacity("A", "B") == 4


def test_from_edges_rejects_negative():
    with pytest.raises(ValueError):
        from_edges([("A", "B", 10), ("B", "C", -5)])


def test_to_networkx_roundtrip():
    g = from_edges([("A", "B", 10), ("B", "C", 5)])
    g.add_node("D")
    nxg = to_networkx(g)

    assert type(nxg) is nx.DiGraph
    assert set(nxg.nodes) == {"A", "B", "C", "D"}
    assert nxg.edges["A", "B"]["capacity"] == 10

    back = from_networkx(nxg)
    assert list(back.nodes) == list(g.nodes)
    assert back.capacity("B", "C") == 5


def test_to_networkx_custom_attribute():
    nxg = to_networkx(from_edges([("A", "B", 3)]), capacity_attr="cap")
    assert nxg.edges["A", "B"] == {"cap": 3}


def test_from_networkx_multidigraph_accumulates():
    G = nx.MultiDiGraph()
    G.add_edge("A", "B", capacity=3)
    G.add_edge("A", "B", capacity=4)
    assert from_networkx(G).capacity("A", "B") == 7


def test_from_networkx_stringifies_labels():
    G = nx.DiGraph()
    G.add_edge(1, 2, capacity=5)
    g = from_networkx(G)
    assert g.capacity("1", "2") == 5


def test_from_networkx_missing_capacity():
    G = nx.DiGraph()
    G.add_edge("A", "B")
    with pytest.raises(ValueError, match="'capacity'"):
        from_networkx(G)


def test_from_networkx_rejects_undirected():
    with pytest.raises(TypeError, match="directed NetworkX graph"):
        from_networkx(nx.Graph())
