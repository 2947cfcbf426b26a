"""High-level entrypoint that wires graph building, search and stitching."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable

from .geo import DEFAULT_METRIC, DistanceMetric
from .graph.build_graph import (
    USER_NODE_ID,
    Facility,
    FacilityLike,
    build_facility_graph,
    coerce_facilities,
    facility_node_id,
)
from .graph.stitch import stitch_path
from .logger import Logger, LoggingMode
from .search.nearest import NearestResult, rank_candidates
from .setup import setup_facilities

if TYPE_CHECKING:
    import numpy as np

    from .geo import Coordinate
    from .graph.model import Graph


@dataclass(slots=True)
class LocateResult:
    """Everything a caller needs to present the nearest help center."""

    graph: Graph
    nearest: NearestResult
    facility: Facility
    ranking: list[NearestResult]
    route: list[Coordinate]


def locate_nearest(
    start: Coordinate,
    facilities: Iterable[FacilityLike] | None = None,
    *,
    rng: np.random.Generator | None = None,
    metric: DistanceMetric | str = DEFAULT_METRIC,
    logging_mode: LoggingMode | str = LoggingMode.NONE,
    logger: Logger | None = None,
) -> LocateResult:
    """Find the help center with the cheapest path from `start`.

    All coordinates use `(lon, lat)` ordering unless `metric` is
    ``"euclidean"``, in which case any planar `(x, y)` pair works.

    Parameters
    ----------
    start:
        The user's coordinate.
    facilities:
        Candidate help centers. When omitted, the bundled catalogue loaded
        by `setup_facilities` is used.
    rng:
        Random source for the shortcut edges between facilities.
    metric:
        Distance formula for edge weights.
    logging_mode:
        Controls log verbosity when no `logger` is supplied.
    logger:
        Pre-built logger shared with the caller.

    Raises
    ------
    ValueError
        If the facility list is empty.
    RuntimeError
        If no facility can be reached from the user node.

    """
    if logger is None:
        logger = Logger(LoggingMode.from_value(logging_mode))

    if facilities is None:
        with logger.phase("facilities.setup"):
            facilities = setup_facilities()
    catalogue = coerce_facilities(facilities)
    if not catalogue:
        msg = "At least one facility coordinate is required."
        raise ValueError(msg)

    with logger.phase("graph.build", facilities=len(catalogue)):
        graph = build_facility_graph(start, catalogue, rng=rng, metric=metric)
    logger.graph_stats(graph)

    candidates = [facility_node_id(index) for index in range(len(catalogue))]
    with logger.phase("search.run", candidates=len(candidates)):
        ranking = rank_candidates(graph, USER_NODE_ID, candidates)
    # Stable sort with unreachable last, so the head agrees with `find_nearest`.
    nearest = ranking[0]

    if not nearest.best_result.reachable:
        msg = "No route found to any facility."
        raise RuntimeError(msg)
    logger.nearest(nearest)

    with logger.phase("stitch.path", nodes=len(nearest.best_result.path)):
        route = stitch_path(graph, nearest.best_result.path)
    logger.info("route.ready", coordinates=len(route))

    return LocateResult(
        graph=graph,
        nearest=nearest,
        facility=catalogue[candidates.index(nearest.best_id)],
        ranking=ranking,
        route=route,
    )
