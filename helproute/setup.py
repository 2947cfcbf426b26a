"""Load the facility catalogue the locate pipeline searches."""

from __future__ import annotations

from pathlib import Path

import orjson

from helproute.graph.build_graph import Facility

PROJECT_ROOT = Path(__file__).resolve().parents[1]
ASSETS_DIR = PROJECT_ROOT / "assets"
DEFAULT_FACILITIES_FILE = ASSETS_DIR / "help_centers.geojson"

FEATURE_COLLECTION_TYPE = "FeatureCollection"
POINT_TYPE = "Point"
MIN_COORDINATE_COMPONENTS = 2


def setup_facilities(geojson_path: str | Path | None = None) -> list[Facility]:
    """Read help-center Point features from a GeoJSON FeatureCollection.

    Parameters
    ----------
    geojson_path:
        Optional custom path to the catalogue. When omitted, the bundled
        `assets/help_centers.geojson` file is used.

    Returns
    -------
    list[Facility]
        One facility per Point feature, named after its `name` property.

    """
    path = Path(geojson_path) if geojson_path is not None else DEFAULT_FACILITIES_FILE
    if not path.exists():
        msg = f"Facility catalogue not found: {path}"
        raise FileNotFoundError(msg)

    try:
        document = orjson.loads(path.read_bytes())
    except orjson.JSONDecodeError as exc:
        msg = f"Unable to parse facility catalogue {path}: {exc}"
        raise ValueError(msg) from exc

    return parse_facilities(document)


def parse_facilities(document: object) -> list[Facility]:
    """Return facilities from an already decoded FeatureCollection."""
    if (
        not isinstance(document, dict)
        or document.get("type") != FEATURE_COLLECTION_TYPE
    ):
        msg = "Facility catalogue must be a GeoJSON FeatureCollection."
        raise ValueError(msg)

    features = document.get("features")
    if not isinstance(features, list) or not features:
        msg = "Facility catalogue must contain at least one feature."
        raise ValueError(msg)

    return [
        _facility_from_feature(feature, idx + 1)
        for idx, feature in enumerate(features)
    ]


def _facility_from_feature(feature: object, index: int) -> Facility:
    """Return a facility from a single Point feature."""
    if not isinstance(feature, dict):
        msg = f"Feature #{index} must be an object."
        raise TypeError(msg)

    geometry = feature.get("geometry")
    if not isinstance(geometry, dict):
        msg = f"Feature #{index} is missing its geometry."
        raise TypeError(msg)
    if geometry.get("type") != POINT_TYPE:
        msg = f"Feature #{index} must be a Point geometry."
        raise ValueError(msg)

    coordinates = geometry.get("coordinates")
    if not isinstance(coordinates, (list, tuple)):
        msg = f"Feature #{index} coordinates must be a list or tuple."
        raise TypeError(msg)
    if len(coordinates) < MIN_COORDINATE_COMPONENTS:
        msg = f"Feature #{index} is missing longitude/latitude values."
        raise ValueError(msg)

    try:
        lon = float(coordinates[0])
        lat = float(coordinates[1])
    except (TypeError, ValueError) as exc:
        msg = f"Feature #{index} coordinates must be numeric."
        raise ValueError(msg) from exc

    properties = feature.get("properties") or {}
    name = properties.get("name") if isinstance(properties, dict) else None
    return Facility(coordinate=(lon, lat), name=str(name) if name else None)
