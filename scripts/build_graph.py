"""CLI entrypoint for generating a synthetic routing graph."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

import numpy as np
import orjson
from networkx.readwrite import json_graph

from helproute.graph.build_graph import build_random_graph
from helproute.graph.build_graph_geojson import build_graph_geojson
from helproute.graph.stitch import stitch_path
from helproute.search.dijkstra import find_shortest_path

# region Configuration

LOGGER = logging.getLogger(__name__)
DEFAULT_NODE_COUNT = 6
DEFAULT_OUTPUT = Path("assets/random_graph.json")

# endregion Configuration


# region I/O Helpers


def _write_json(data: dict, output_path: Path) -> None:
    """Persist a JSON document to disk."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(orjson.dumps(data, option=orjson.OPT_INDENT_2))
    LOGGER.info(
        "Wrote %s (%d bytes)",
        output_path,
        output_path.stat().st_size,
    )


# endregion I/O Helpers


# region CLI


def run_cli(args: argparse.Namespace) -> None:
    """Build a random graph, solve one shortest path and persist both."""
    rng = np.random.default_rng(args.seed)
    graph = build_random_graph(args.nodes, rng=rng)
    LOGGER.info(
        "Graph built with %s nodes / %s edges",
        len(graph),
        graph.number_of_edges(),
    )
    _write_json(json_graph.node_link_data(graph.nx_graph, edges="edges"), args.output)

    node_ids = graph.node_ids()
    if args.geojson is None or len(node_ids) < 2:  # noqa: PLR2004
        return

    source, target = node_ids[0], node_ids[-1]
    result = find_shortest_path(graph, source, target)
    if result.reachable:
        LOGGER.info(
            "Shortest path %s -> %s: %s (%.1f)",
            source,
            target,
            " -> ".join(result.path),
            result.total_distance,
        )
    else:
        LOGGER.warning("No path from %s to %s", source, target)

    route = stitch_path(graph, result.path)
    _write_json(build_graph_geojson(graph, route, result.path), args.geojson)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Return parsed CLI arguments for graph generation."""
    parser = argparse.ArgumentParser(
        description="Generate a random routing graph and solve a sample path.",
    )
    parser.add_argument(
        "--nodes",
        type=int,
        default=DEFAULT_NODE_COUNT,
        help="Number of nodes to generate.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for reproducible graphs (default: fresh entropy).",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=DEFAULT_OUTPUT,
        help="Destination path for the node-link graph JSON.",
    )
    parser.add_argument(
        "--geojson",
        type=Path,
        default=None,
        help="Optional GeoJSON export of the graph and a first-to-last path.",
    )
    parser.set_defaults(func=run_cli)
    return parser.parse_args(argv)


def _configure_logging() -> None:
    """Configure a simple logging formatter for CLI runs."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point."""
    _configure_logging()
    args = parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()

# endregion CLI
