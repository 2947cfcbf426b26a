"""
Unit tests for loading the facility catalogue.
"""

import json

import pytest

from helproute.graph.build_graph import Facility
from helproute.setup import DEFAULT_FACILITIES_FILE, parse_facilities, setup_facilities


def _point(lon, lat, name=None):
    properties = {"name": name} if name else {}
    return {
        "type": "Feature",
        "properties": properties,
        "geometry": {"type": "Point", "coordinates": [lon, lat]},
    }


def test_default_catalogue_ships_with_the_repo():
    assert DEFAULT_FACILITIES_FILE.exists()

    facilities = setup_facilities()

    assert len(facilities) == 3
    assert facilities[0] == Facility((90.4125, 23.8103), "Dhaka Medical College")


def test_custom_catalogue(tmp_path):
    path = tmp_path / "stations.geojson"
    document = {
        "type": "FeatureCollection",
        "features": [_point(1.0, 2.0, "North Station"), _point(3, 4)],
    }
    path.write_text(json.dumps(document), encoding="utf-8")

    assert setup_facilities(path) == [
        Facility((1.0, 2.0), "North Station"),
        Facility((3.0, 4.0), None),
    ]


def test_missing_catalogue(tmp_path):
    with pytest.raises(FileNotFoundError):
        setup_facilities(tmp_path / "missing.geojson")


def test_unparseable_catalogue(tmp_path):
    path = tmp_path / "broken.geojson"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ValueError, match="Unable to parse"):
        setup_facilities(path)


@pytest.mark.parametrize(
    ("document", "error", "match"),
    [
        ({"type": "Feature"}, ValueError, "FeatureCollection"),
        ({"type": "FeatureCollection", "features": []}, ValueError, "at least one"),
        (
            {"type": "FeatureCollection", "features": [{"type": "Feature"}]},
            TypeError,
            "missing its geometry",
        ),
        (
            {
                "type": "FeatureCollection",
                "features": [
                    {
                        "geometry": {
                            "type": "LineString",
                            "coordinates": [[0, 0], [1, 1]],
                        },
                    },
                ],
            },
            ValueError,
            "Point geometry",
        ),
        (
            {
                "type": "FeatureCollection",
                "features": [{"geometry": {"type": "Point", "coordinates": [1]}}],
            },
            ValueError,
            "longitude/latitude",
        ),
        (
            {
                "type": "FeatureCollection",
                "features": [{"geometry": {"type": "Point", "coordinates": ["a", 1]}}],
            },
            ValueError,
            "numeric",
        ),
    ],
)
def test_malformed_catalogue(document, error, match):
    with pytest.raises(error, match=match):
        parse_facilities(document)
