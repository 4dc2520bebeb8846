import logging

import pytest

from trafficflow.algorithms.max_flow import SOLVERS
from trafficflow.comparison import AlgorithmDivergenceError, compare_max_flow
from trafficflow.graph import TrafficGraph
from trafficflow.types.base import MaxFlowAlgorithm
from trafficflow.types.dto import MaxFlowComparison


@pytest.mark.parametrize("parallel", [False, True])
def test_compare_returns_both_flows_and_timings(classic, parallel):
    result = compare_max_flow(classic, "S", "T", parallel=parallel)

    assert isinstance(result, MaxFlowComparison)
    assert result.flow == 15
    assert result.edmonds_karp_flow == result.dinic_flow == 15
    assert result.edmonds_karp_time.name == "Edmonds-Karp"
    assert result.dinic_time.name == "Dinic"
    assert result.edmonds_karp_time.elapsed_ms >= 0
    assert result.dinic_time.elapsed_ms >= 0


def test_compare_no_path_is_zero(disconnected):
    result = compare_max_flow(disconnected, "A", "D")
    assert result.flow == 0


def test_compare_unknown_vertices_is_zero():
    result = compare_max_flow(TrafficGraph(), "A", "T")
    assert result.flow == 0


def test_compare_accepts_snapshot(puzzle_round):
    snapshot = puzzle_round.snapshot()
    assert compare_max_flow(snapshot, "A", "T").flow == 20
    # Second comparison on the same snapshot starts from full capacities again
    assert compare_max_flow(snapshot, "A", "T").flow == 20


def test_compare_uses_config_default(monkeypatch, chain):
    from trafficflow import comparison

    calls = []
    real_executor = comparison.ThreadPoolExecutor

    class RecordingExecutor:
        def __init__(self, max_workers):
            calls.append(max_workers)
            self._inner = real_executor(max_workers=max_workers)

        def __enter__(self):
            return self._inner.__enter__()

        def __exit__(self, *exc):
            return self._inner.__exit__(*exc)

    monkeypatch.setattr(comparison.TRAFFIC_CONFIG, "parallel_comparison", True)
    monkeypatch.setattr(comparison, "ThreadPoolExecutor", RecordingExecutor)
    assert compare_max_flow(chain, "A", "C").flow == 5
    assert calls == [2]


def test_compare_divergence_raises_with_both_values(monkeypatch, chain, caplog):
    def broken_dinic(graph, source, sink, *, return_summary=False):
        return 4

    monkeypatch.setitem(SOLVERS, MaxFlowAlgorithm.DINIC, broken_dinic)

    with caplog.at_level(logging.ERROR, logger="trafficflow"):
        with pytest.raises(AlgorithmDivergenceError) as exc_info:
            compare_max_flow(chain, "A", "C")

    err = exc_info.value
    assert err.edmonds_karp_flow == 5
    assert err.dinic_flow == 4
    assert (err.source, err.sink) == ("A", "C")
    assert "Edmonds-Karp=5, Dinic=4" in str(err)
    assert "divergence" in caplog.text


def test_divergence_error_is_not_a_value_error():
    assert issubclass(AlgorithmDivergenceError, RuntimeError)
    assert not issubclass(AlgorithmDivergenceError, ValueError)


def test_comparison_to_dict(chain):
    payload = compare_max_flow(chain, "A", "C").to_dict()
    assert payload["maxFlow"] == 5
    assert payload["source"] == "A" and payload["sink"] == "C"
    assert [t["algorithmName"] for t in payload["algorithmTimes"]] == [
        "Edmonds-Karp",
        "Dinic",
    ]


@pytest.mark.parametrize("algorithm", list(MaxFlowAlgorithm))
def test_each_comparison_run_yields_plain_int_flow(monkeypatch, chain, algorithm):
    calls = []
    real_solver = SOLVERS[algorithm]

    def recording_solver(graph, s, t, return_summary=False):
        calls.append(return_summary)
        return real_solver(graph, s, t, return_summary=return_summary)

    monkeypatch.setitem(SOLVERS, algorithm, recording_solver)
    result = compare_max_flow(chain, "A", "C", parallel=False)

    assert calls == [False]
    assert type(result.edmonds_karp_flow) is int
    assert type(result.dinic_flow) is int
    assert result.flow == 5
