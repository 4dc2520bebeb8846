import pytest

from trafficflow.algorithms.dinic import UNREACHED, _blocking_flow, _build_levels, dinic
from trafficflow.algorithms.residual import ResidualGraph
from trafficflow.graph import TrafficGraph

from tests.algorithms.sample_graphs import NAMED_CASES


@pytest.mark.parametrize("fixture_name,source,sink,expected", NAMED_CASES)
def test_dinic_known_graphs(request, fixture_name, source, sink, expected):
    graph = request.getfixturevalue(fixture_name)
    assert dinic(graph, source, sink) == expected


def test_dinic_zero_capacity():
    g = TrafficGraph()
    g.add_edge("A", "B", 0)
    assert dinic(g, "A", "B") == 0


def test_dinic_unknown_vertices_yield_zero(chain):
    assert dinic(chain, "X", "C") == 0
    assert dinic(chain, "A", "X") == 0
    assert dinic(TrafficGraph(), "A", "T") == 0


def test_dinic_source_equals_sink(chain):
    assert dinic(chain, "B", "B") == 0


def test_build_levels_bfs_distances(two_paths):
    residual = ResidualGraph.from_graph(two_paths)
    idx = residual.index_of
    level = _build_levels(residual, idx("A"), idx("D"))
    assert level is not None
    assert level[idx("A")] == 0
    assert level[idx("B")] == 1
    assert level[idx("D")] == 2


def test_build_levels_unreachable_sink(disconnected):
    residual = ResidualGraph.from_graph(disconnected)
    assert _build_levels(residual, residual.index_of("A"), residual.index_of("D")) is None


def test_build_levels_leaves_unreached_vertices_unleveled(disconnected):
    g = disconnected
    g.add_edge("B", "D", 1)
    residual = ResidualGraph.from_graph(g)
    idx = residual.index_of
    level = _build_levels(residual, idx("A"), idx("D"))
    assert level is not None
    assert level[idx("C")] == UNREACHED


def test_blocking_flow_single_phase(two_paths):
    residual = ResidualGraph.from_graph(two_paths)
    src, dst = residual.index_of("A"), residual.index_of("D")
    level = _build_levels(residual, src, dst)
    # Both routes have length 2, so one phase saturates everything
    assert _blocking_flow(residual, level, src, dst) == 15
    assert _build_levels(residual, src, dst) is None


def test_blocking_flow_ignores_longer_paths():
    g = TrafficGraph()
    g.add_edge("S", "T", 3)
    g.add_edge("S", "A", 5)
    g.add_edge("A", "T", 5)
    residual = ResidualGraph.from_graph(g)
    src, dst = residual.index_of("S"), residual.index_of("T")

    level = _build_levels(residual, src, dst)
    assert _blocking_flow(residual, level, src, dst) == 3

    level = _build_levels(residual, src, dst)
    assert _blocking_flow(residual, level, src, dst) == 5


def test_dinic_long_chain_no_recursion_limit():
    g = TrafficGraph()
    labels = [f"v{i}" for i in range(5000)]
    for u, v in zip(labels, labels[1:]):
        g.add_edge(u, v, 7)
    assert dinic(g, labels[0], labels[-1]) == 7


def test_dinic_summary(classic):
    flow, summary = dinic(classic, "S", "T", return_summary=True)
    assert flow == 15
    assert summary.total_flow == 15
    assert set(summary.min_cut) == {("S", "A"), ("S", "B")}
