"""Geospatial helpers shared across routing modules."""

from __future__ import annotations

import math
from enum import Enum

import numpy as np
import osmnx as ox

Coordinate = tuple[float, float]  # (x, y); (lon, lat) for geographic input

# Number of legs used when drawing a schematic route between two points.
ROUTE_SEGMENTS = 10
# Amplitude of the sine offset, as a fraction of the start-end vector.
ROUTE_CURVATURE = 0.1

_GREAT_CIRCLE = getattr(ox.distance, "great_circle", None)
if _GREAT_CIRCLE is None:
    try:
        _GREAT_CIRCLE = ox.distance.great_circle_vec
    except AttributeError as exc:  # pragma: no cover - legacy fallback guard
        msg = "OSMnx distance helpers lack both `great_circle` and `great_circle_vec`."
        raise AttributeError(msg) from exc


class DistanceMetric(str, Enum):
    """Distance formulas understood by the graph builders."""

    EUCLIDEAN = "euclidean"
    GREAT_CIRCLE = "great_circle"

    @classmethod
    def from_value(cls, value: DistanceMetric | str | None) -> DistanceMetric:
        """Normalize arbitrary user input into a `DistanceMetric`."""
        if isinstance(value, cls):
            return value
        if value is None:
            return DEFAULT_METRIC
        try:
            return cls(value.lower())
        except ValueError as exc:
            valid = ", ".join(metric.value for metric in cls)
            msg = f"Invalid distance metric: {value!r}. Expected one of {{{valid}}}."
            raise ValueError(msg) from exc


# Metric used whenever a caller does not name one.
DEFAULT_METRIC = DistanceMetric.GREAT_CIRCLE


def great_circle_meters(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
) -> float:
    """Return the great-circle distance between two lat/lon points in meters."""
    return float(_GREAT_CIRCLE(lat1, lon1, lat2, lon2))


def euclidean(a: Coordinate, b: Coordinate) -> float:
    """Return the planar distance between two points."""
    return math.hypot(b[0] - a[0], b[1] - a[1])


def distance(
    a: Coordinate,
    b: Coordinate,
    metric: DistanceMetric | str = DEFAULT_METRIC,
) -> float:
    """Return the distance between `a` and `b` under the requested metric.

    Geographic coordinates are expected in `(lon, lat)` order, matching the
    rest of the package. The result is symmetric and exactly zero for equal
    points.
    """
    if a == b:
        return 0.0
    if DistanceMetric.from_value(metric) is DistanceMetric.GREAT_CIRCLE:
        return great_circle_meters(a[1], a[0], b[1], b[0])
    return euclidean(a, b)


def interpolated_path(
    start: Coordinate,
    end: Coordinate,
    segments: int = ROUTE_SEGMENTS,
) -> list[Coordinate]:
    """Return `segments + 1` points along a gently curved line from start to end.

    The curve bows away from the straight line by a sine-shaped offset so a
    drawn route does not look like a ruler line. It is purely cosmetic and
    carries no routing meaning.

    Parameters
    ----------
    start:
        First point of the curve.
    end:
        Last point of the curve.
    segments:
        Number of legs; must be at least one.

    """
    if segments < 1:
        msg = f"segments must be a positive integer, got {segments}."
        raise ValueError(msg)

    t = np.linspace(0.0, 1.0, segments + 1)
    bow = ROUTE_CURVATURE * np.sin(t * np.pi)
    x = start[0] + (end[0] - start[0]) * t + (start[0] - end[0]) * bow
    y = start[1] + (end[1] - start[1]) * t + (start[1] - end[1]) * bow

    # sin(pi) is not exactly zero in floating point; pin the endpoints.
    points = [(float(px), float(py)) for px, py in zip(x, y)]
    points[0] = (float(start[0]), float(start[1]))
    points[-1] = (float(end[0]), float(end[1]))
    return points
