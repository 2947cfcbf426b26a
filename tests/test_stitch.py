"""
Unit tests for turning node paths into drawable routes.
"""

import pytest

from helproute.geo import interpolated_path
from helproute.graph.build_graph_geojson import build_graph_geojson
from helproute.graph.stitch import node_position, stitch_linestring, stitch_path


def test_stitch_path_joins_curved_legs_without_duplicates(line_graph):
    coords = stitch_path(line_graph, ["A", "B", "C"], segments=4)

    assert len(coords) == 1 + 4 + 4
    assert coords[0] == (0.0, 0.0)
    assert coords[4] == (100.0, 0.0)
    assert coords[-1] == (200.0, 0.0)
    assert coords[:5] == interpolated_path((0.0, 0.0), (100.0, 0.0), 4)


def test_stitch_path_edge_cases(line_graph):
    assert stitch_path(line_graph, []) == []
    assert stitch_path(line_graph, ["B"]) == [(100.0, 0.0)]
    assert stitch_linestring(line_graph, ["B"]) is None


def test_stitch_linestring(line_graph):
    line = stitch_linestring(line_graph, ["A", "B"], segments=2)

    assert line is not None
    assert list(line.coords)[0] == (0.0, 0.0)
    assert list(line.coords)[-1] == (100.0, 0.0)


def test_node_position_rejects_unknown_id(line_graph):
    with pytest.raises(KeyError):
        node_position(line_graph, "Z")


def test_graph_geojson_exports_each_connection_once(line_graph):
    route = stitch_path(line_graph, ["A", "B"], segments=2)
    geojson = build_graph_geojson(line_graph, route, ["A", "B"])

    features = geojson["features"]
    points = [f for f in features if f["geometry"]["type"] == "Point"]
    lines = [f for f in features if f["geometry"]["type"] == "LineString"]

    assert geojson["type"] == "FeatureCollection"
    assert len(points) == 3
    # Two undirected connections plus the route itself.
    assert len(lines) == 3
    assert lines[-1]["properties"] == {"role": "route"}
    assert {p["properties"]["node_id"]: p["properties"]["on_path"] for p in points} == {
        "A": True,
        "B": True,
        "C": False,
    }
    assert points[1]["geometry"]["coordinates"] == [100.0, 0.0]


def test_graph_geojson_without_route(line_graph):
    geojson = build_graph_geojson(line_graph)

    roles = [f["properties"].get("role") for f in geojson["features"]]
    assert "route" not in roles
