"""CLI entrypoint that locates the nearest help center for a GeoJSON point."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence, TextIO

import numpy as np
import orjson

from helproute.graph.build_graph import Facility
from helproute.graph.build_graph_geojson import build_graph_geojson
from helproute.logger import Logger, LoggingMode
from helproute.plan import locate_nearest
from helproute.setup import parse_facilities

Coordinate = tuple[float, float]


def echo(message: str = "", *, stream: TextIO | None = None) -> None:
    """Write a line to the chosen stream (stdout by default) and flush immediately."""
    stream = stream if stream is not None else sys.stdout
    stream.write(f"{message}\n")
    stream.flush()


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        description=(
            "Read a GeoJSON FeatureCollection of Point features where the first "
            "point is the user and the remaining points are help centers, then "
            "print the graph and the route to the nearest one as GeoJSON."
        ),
    )
    parser.add_argument("points", type=Path, help="GeoJSON file with Point features.")
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the random shortcuts between help centers.",
    )
    parser.add_argument(
        "--log",
        default=LoggingMode.NONE.value,
        choices=[mode.value for mode in LoggingMode],
        help="Pipeline log verbosity (written to stderr).",
    )
    return parser.parse_args(argv)


def load_points(path: Path) -> tuple[Coordinate, list[Facility]]:
    """Read the user point and help centers from the GeoJSON file."""
    raw_contents = path.read_bytes().strip()
    if not raw_contents:
        msg = "The GeoJSON file is empty."
        raise ValueError(msg)

    try:
        document = orjson.loads(raw_contents)
    except orjson.JSONDecodeError as exc:
        msg = f"Unable to parse JSON: {exc}"
        raise ValueError(msg) from exc

    points = parse_facilities(document)
    if len(points) < 2:  # noqa: PLR2004
        msg = "Provide at least two Point features (user + help center)."
        raise ValueError(msg)
    return points[0].coordinate, points[1:]


def main(argv: Sequence[str] | None = None) -> None:
    """Entry point for the GeoJSON-driven CLI."""
    args = parse_args(argv)

    try:
        start, facilities = load_points(args.points)
    except (OSError, TypeError, ValueError) as exc:
        echo(f"Invalid GeoJSON input: {exc}", stream=sys.stderr)
        sys.exit(1)

    logger = Logger(LoggingMode.from_value(args.log), stream=sys.stderr)
    rng = np.random.default_rng(args.seed)
    try:
        result = locate_nearest(start, facilities, rng=rng, logger=logger)
    except RuntimeError as exc:
        echo(str(exc), stream=sys.stderr)
        sys.exit(1)

    geojson = build_graph_geojson(
        result.graph,
        result.route,
        result.nearest.best_result.path,
    )
    echo(orjson.dumps(geojson).decode())


if __name__ == "__main__":
    main()
