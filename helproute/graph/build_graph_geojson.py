"""Export a routing graph and its chosen route as GeoJSON."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from shapely.geometry import LineString, Point, mapping

from helproute.graph.stitch import MIN_LINESTRING_COORDS

if TYPE_CHECKING:
    from helproute.geo import Coordinate
    from helproute.graph.model import Graph, NodeId


# region API


def build_graph_geojson(
    graph: Graph,
    route: Sequence[Coordinate] | None = None,
    path: Sequence[NodeId] | None = None,
) -> dict:
    """Convert the graph (and optionally a route) into a FeatureCollection."""
    features = []
    on_path = set(path or ())

    # Nodes become Point features tagged with their role.
    for node in graph.nodes():
        features.append(
            _feature(
                Point(node.position),
                {
                    "node_id": node.id,
                    "name": node.name,
                    "on_path": node.id in on_path,
                },
            ),
        )

    # Each connection is stored in both directions; export it once.
    seen: set[frozenset[NodeId]] = set()
    for edge in graph.edges():
        pair = frozenset((edge.source, edge.target))
        if pair in seen:
            continue
        seen.add(pair)
        u = graph.get_node(edge.source)
        v = graph.get_node(edge.target)
        features.append(
            _feature(
                LineString([u.position, v.position]),  # type: ignore[union-attr]
                {"u": edge.source, "v": edge.target, "weight": edge.weight},
            ),
        )

    if route and len(route) >= MIN_LINESTRING_COORDS:
        features.append(_feature(LineString(route), {"role": "route"}))

    return {"type": "FeatureCollection", "features": features}


# endregion API


# region Conversion helpers


def _feature(geometry: Point | LineString, properties: dict) -> dict:
    """Wrap a shapely geometry into a GeoJSON Feature."""
    return {
        "type": "Feature",
        "geometry": _plain_geometry(geometry),
        "properties": properties,
    }


def _plain_geometry(geometry: Point | LineString) -> dict:
    """Return a geometry mapping with list coordinates, ready for JSON."""
    geo = dict(mapping(geometry))
    coords = geo["coordinates"]
    if geometry.geom_type == "Point":
        geo["coordinates"] = list(coords)
    else:
        geo["coordinates"] = [list(coord) for coord in coords]
    return geo


# endregion Conversion helpers
