"""Command-line interface for trafficflow."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional, Tuple

from trafficflow.algorithms.max_flow import calc_max_flow
from trafficflow.comparison import AlgorithmDivergenceError, compare_max_flow
from trafficflow.config import TRAFFIC_CONFIG
from trafficflow.game import TrafficGameService
from trafficflow.io import NetworkDocument, load_network
from trafficflow.logging import get_logger, set_global_log_level
from trafficflow.types.base import MaxFlowAlgorithm

logger = get_logger(__name__)

#: Exit status when the two algorithms disagree (an engine defect).
EXIT_DIVERGENCE = 2


def _format_table(headers: List[str], rows: List[List[Any]], min_width: int = 8) -> str:
    """Format data as a simple ASCII table."""
    if not rows:
        return ""

    all_data = [headers] + [[str(item) for item in row] for row in rows]
    col_widths = [
        max(max(len(str(row[i])) for row in all_data), min_width)
        for i in range(len(headers))
    ]

    def format_row(row_data: List[Any]) -> str:
        return "   " + " | ".join(
            f"{str(item):<{col_widths[i]}}" for i, item in enumerate(row_data)
        )

    lines = [format_row(headers)]
    lines.append("   " + "-+-".join("-" * width for width in col_widths))
    lines.extend(format_row(row) for row in all_data[1:])
    return "\n".join(lines)


def _format_ms(value: float) -> str:
    """Return milliseconds with three decimals, e.g. ``0.042 ms``."""
    return f"{value:.3f} ms"


def _endpoints(
    doc: NetworkDocument, source: Optional[str], sink: Optional[str]
) -> Tuple[str, str]:
    """Resolve endpoints: command line, then the file, then configured defaults."""
    return (
        source or doc.source or TRAFFIC_CONFIG.default_source,
        sink or doc.sink or TRAFFIC_CONFIG.default_sink,
    )


def _solve(
    path: Path,
    source: Optional[str],
    sink: Optional[str],
    algorithm: str,
    parallel: bool,
    as_json: bool,
) -> None:
    logger.info(f"Loading network from: {path}")
    doc = load_network(path)
    src, dst = _endpoints(doc, source, sink)
    graph = doc.network.to_graph()
    logger.debug(
        f"Built graph with {graph.number_of_nodes()} vertices and "
        f"{graph.number_of_edges()} edges"
    )

    if algorithm == "both":
        comparison = compare_max_flow(graph, src, dst, parallel=parallel)
        if as_json:
            print(json.dumps(comparison.to_dict(), indent=2))
            return
        print(f"Max flow {src} -> {dst}: {comparison.flow}")
        print(
            _format_table(
                ["Algorithm", "Flow", "Time"],
                [
                    [t.name, flow, _format_ms(t.elapsed_ms)]
                    for t, flow in zip(
                        comparison.timings,
                        (comparison.edmonds_karp_flow, comparison.dinic_flow),
                    )
                ],
            )
        )
        return

    selected = MaxFlowAlgorithm.from_string(algorithm)
    flow, summary = calc_max_flow(
        graph, src, dst, algorithm=selected, return_summary=True
    )
    if as_json:
        payload = {
            "source": src,
            "sink": dst,
            "algorithm": selected.display_name,
            "maxFlow": flow,
            "minCut": [list(edge) for edge in summary.min_cut],
        }
        print(json.dumps(payload, indent=2))
        return
    print(f"Max flow {src} -> {dst} ({selected.display_name}): {flow}")
    if summary.min_cut:
        print(
            _format_table(
                ["Cut edge", "Capacity"],
                [[f"{u}->{v}", graph.capacity(u, v)] for u, v in summary.min_cut],
            )
        )


def _grade(
    path: Path,
    answer: int,
    source: Optional[str],
    sink: Optional[str],
    as_json: bool,
) -> None:
    logger.info(f"Loading network from: {path}")
    doc = load_network(path)
    src, dst = _endpoints(doc, source, sink)
    result = TrafficGameService().calculate_max_flow(doc.network, answer, src, dst)
    if as_json:
        print(json.dumps(result.to_dict(), indent=2))
        return
    print(result.message)
    print(
        _format_table(
            ["Algorithm", "Time"],
            [[t.name, _format_ms(t.elapsed_ms)] for t in result.algorithm_times()],
        )
    )


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``trafficflow`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="trafficflow",
        description="Compute and grade maximum flows of traffic networks.",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Only log warnings and errors"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{solve,grade}",
        help="Available commands",
    )

    solve_parser = subparsers.add_parser("solve", help="Compute the maximum flow")
    solve_parser.add_argument(
        "--algorithm",
        "-a",
        choices=["both", "edmonds-karp", "dinic"],
        default="both",
        help="Algorithm to run; 'both' cross-checks and times the two (default)",
    )
    solve_parser.add_argument(
        "--parallel",
        action="store_true",
        help="Run the two algorithms on separate threads (with --algorithm both)",
    )

    grade_parser = subparsers.add_parser(
        "grade", help="Grade a player's answer against the maximum flow"
    )
    grade_parser.add_argument(
        "--answer", type=int, required=True, help="The player's answer"
    )

    for p in (solve_parser, grade_parser):
        p.add_argument("network", type=Path, help="Path to network YAML or JSON")
        p.add_argument("--source", "-s", default=None, help="Source vertex label")
        p.add_argument("--sink", "-t", default=None, help="Sink vertex label")
        p.add_argument("--json", action="store_true", help="Print JSON output")

    effective_args = sys.argv[1:] if argv is None else argv
    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    if args.verbose:
        set_global_log_level(logging.DEBUG)
        logger.debug("Debug logging enabled")
    elif args.quiet:
        set_global_log_level(logging.WARNING)
    else:
        set_global_log_level(logging.INFO)

    try:
        if args.command == "solve":
            _solve(
                args.network,
                args.source,
                args.sink,
                args.algorithm,
                args.parallel,
                args.json,
            )
        elif args.command == "grade":
            _grade(args.network, args.answer, args.source, args.sink, args.json)
    except AlgorithmDivergenceError as e:
        logger.error(f"Internal consistency error: {e}")
        print(f"ERROR: internal consistency error: {e}", file=sys.stderr)
        sys.exit(EXIT_DIVERGENCE)
    except FileNotFoundError:
        logger.error(f"Network file not found: {args.network}")
        print(f"ERROR: Network file not found: {args.network}", file=sys.stderr)
        sys.exit(1)
    except (OSError, TypeError, ValueError) as e:
        logger.error(f"Failed to load network: {type(e).__name__}: {e}")
        print(f"ERROR: {type(e).__name__}: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
