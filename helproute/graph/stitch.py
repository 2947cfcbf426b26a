"""Helpers for expanding graph node paths into coordinate sequences."""

from __future__ import annotations

from itertools import pairwise
from typing import TYPE_CHECKING, Sequence

from shapely.geometry import LineString

from helproute.geo import ROUTE_SEGMENTS, interpolated_path

if TYPE_CHECKING:
    from helproute.geo import Coordinate
    from helproute.graph.model import Graph, NodeId

# Minimum coordinate count required for a valid LineString.
MIN_LINESTRING_COORDS = 2


def stitch_path(
    graph: Graph,
    nodes: Sequence[NodeId],
    segments: int = ROUTE_SEGMENTS,
) -> list[Coordinate]:
    """Expand a node path into a curved, drawable coordinate sequence."""
    if not nodes:
        return []

    stitched: list[Coordinate] = [node_position(graph, nodes[0])]

    for u, v in pairwise(nodes):
        segment = interpolated_path(
            node_position(graph, u),
            node_position(graph, v),
            segments,
        )
        # Skip the first coordinate to avoid duplicates.
        stitched.extend(segment[1:])

    return stitched


def stitch_linestring(
    graph: Graph,
    nodes: Sequence[NodeId],
    segments: int = ROUTE_SEGMENTS,
) -> LineString | None:
    """Return the stitched route as a `LineString`, or ``None`` for a single point."""
    coords = stitch_path(graph, nodes, segments)
    if len(coords) < MIN_LINESTRING_COORDS:
        return None
    return LineString(coords)


def node_position(graph: Graph, node_id: NodeId) -> Coordinate:
    """Return the coordinate of `node_id`, raising for unknown ids."""
    node = graph.get_node(node_id)
    if node is None:
        msg = f"Path references unknown node {node_id!r}."
        raise KeyError(msg)
    return node.position
