"""Flask API surface for exposing the nearest-facility search."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

import numpy as np
from flask import Flask, Response, jsonify, request
from werkzeug.exceptions import BadRequest

from helproute.graph.build_graph import Facility
from helproute.plan import locate_nearest
from helproute.setup import setup_facilities

if TYPE_CHECKING:
    from helproute.geo import Coordinate
    from helproute.graph.model import Graph
    from helproute.search.nearest import NearestResult

app = Flask(__name__)

FACILITIES = setup_facilities()


def _parse_coordinate(payload: object, label: str) -> Coordinate:
    """Validate that payload looks like {'lat': float, 'lon': float}."""
    if not isinstance(payload, dict):
        msg = f"{label} must be an object with 'lat' and 'lon'."
        raise BadRequest(msg)

    lat = payload.get("lat")
    lon = payload.get("lon")
    if isinstance(lat, bool) or isinstance(lon, bool):
        msg = f"{label} must include numeric 'lat' and 'lon' fields."
        raise BadRequest(msg)
    if not isinstance(lat, (int, float)) or not isinstance(lon, (int, float)):
        msg = f"{label} must include numeric 'lat' and 'lon' fields."
        raise BadRequest(msg)

    return (float(lon), float(lat))


def _parse_facilities(payload: object) -> list[Facility]:
    if payload is None:
        return FACILITIES
    if not isinstance(payload, list) or not payload:
        msg = "facilities must be a non-empty array of coordinates."
        raise BadRequest(msg)

    facilities = []
    for index, item in enumerate(payload):
        label = f"facilities[{index}]"
        coordinate = _parse_coordinate(item, label)
        name = item.get("name")
        if name is not None and not isinstance(name, str):
            msg = f"{label}.name must be a string."
            raise BadRequest(msg)
        facilities.append(Facility(coordinate=coordinate, name=name))
    return facilities


def _parse_seed(payload: object) -> np.random.Generator | None:
    if payload is None:
        return None
    if isinstance(payload, bool) or not isinstance(payload, int) or payload < 0:
        msg = "seed must be a non-negative integer."
        raise BadRequest(msg)
    return np.random.default_rng(payload)


@app.after_request
def _inject_cors(response: Response) -> Response:  # type: ignore[override]
    """Allow simple cross-origin requests from the app frontend."""
    response.headers.setdefault("Access-Control-Allow-Origin", "*")
    response.headers.setdefault("Access-Control-Allow-Headers", "Content-Type")
    response.headers.setdefault("Access-Control-Allow-Methods", "POST, OPTIONS")
    return response


@app.route("/api/nearest", methods=["POST", "OPTIONS"])
def nearest_help_center() -> Response:
    """Locate the help center with the cheapest path from the start point."""
    if request.method == "OPTIONS":
        return Response("", status=204)

    raw_payload = request.get_json(silent=True)
    if raw_payload is None:
        payload: dict[str, object] = {}
    elif isinstance(raw_payload, dict):
        payload = raw_payload
    else:
        msg = "Request body must be a JSON object."
        raise BadRequest(msg)

    start = _parse_coordinate(payload.get("start"), "start")
    facilities = _parse_facilities(payload.get("facilities"))
    rng = _parse_seed(payload.get("seed"))

    try:
        result = locate_nearest(start, facilities, rng=rng)
    except (ValueError, RuntimeError) as exc:
        raise BadRequest(str(exc)) from exc

    best = result.graph.get_node(result.nearest.best_id)
    return jsonify(
        {
            "nearest": {
                "id": result.nearest.best_id,
                "name": best.name,  # type: ignore[union-attr]
                "coordinates": list(result.facility.coordinate),
            },
            "distance_m": result.nearest.total_distance,
            "path": result.nearest.best_result.path,
            "route": _serialize_coordinates(result.route),
            "ranking": _serialize_ranking(result.graph, result.ranking),
        },
    )


def _serialize_coordinates(coords: Sequence[Coordinate]) -> list[list[float]]:
    """Return JSON-serializable [lon, lat] coordinate lists."""
    return [[lon, lat] for lon, lat in coords]


def _serialize_ranking(graph: Graph, ranking: Sequence[NearestResult]) -> list[dict]:
    """Return reachable candidates in rank order; infinity is not valid JSON."""
    return [
        {
            "id": entry.best_id,
            "name": graph.get_node(entry.best_id).name,  # type: ignore[union-attr]
            "distance_m": entry.total_distance,
            "path": entry.best_result.path,
        }
        for entry in ranking
        if entry.best_result.reachable
    ]


if __name__ == "__main__":  # pragma: no cover
    app.run()
