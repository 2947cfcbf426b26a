"""Graph builders for the synthetic demo and for facility routing."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from itertools import combinations
from typing import Iterable, Mapping, Sequence

import numpy as np

from helproute.geo import DEFAULT_METRIC, Coordinate, DistanceMetric, distance
from helproute.graph.model import Edge, Graph, Node, NodeId

# region Types & Configuration

LOGGER = logging.getLogger(__name__)

USER_NODE_ID: NodeId = "user"
USER_NODE_NAME = "You"
FACILITY_ID_PREFIX = "facility_"

# Width/height of the plane used for synthetic node positions.
DEFAULT_AREA: tuple[float, float] = (300.0, 500.0)
NODE_NAMES: tuple[str, ...] = tuple("ABCDEFGHIJKLMNOPQRSTUVWXYZ")
MIN_CONNECTIONS = 2
MAX_CONNECTIONS = 4
JITTER_RANGE: tuple[float, float] = (0.5, 1.0)
SHORTCUT_PROBABILITY = 0.5


@dataclass(frozen=True, slots=True)
class Facility:
    """A candidate destination (help center, police station)."""

    coordinate: Coordinate
    name: str | None = None


FacilityLike = Facility | Coordinate

# endregion Types & Configuration


# region API


def build_random_graph(
    node_count: int,
    *,
    rng: np.random.Generator | None = None,
    area: tuple[float, float] = DEFAULT_AREA,
    names: Sequence[str] = NODE_NAMES,
) -> Graph:
    """Return a random planar graph for demos and tests.

    Every node tries to connect to between `MIN_CONNECTIONS` and
    `MAX_CONNECTIONS` distinct other nodes. Weights are the Euclidean
    distance between endpoints scaled by a factor drawn from `JITTER_RANGE`,
    and each connection is mirrored so both directions cost the same.

    Parameters
    ----------
    node_count:
        Number of nodes to create.
    rng:
        Random source. Omit for a fresh, entropy-seeded generator.
    area:
        `(width, height)` of the plane node positions are drawn from.
    names:
        Display labels assigned cyclically to the nodes.

    """
    if node_count < 0:
        msg = f"node_count must be non-negative, got {node_count}."
        raise ValueError(msg)
    if not names:
        msg = "At least one node name is required."
        raise ValueError(msg)

    rng = rng if rng is not None else np.random.default_rng()
    width, height = area

    nodes = [
        Node(
            id=f"n{index}",
            position=(float(rng.uniform(0, width)), float(rng.uniform(0, height))),
            name=names[index % len(names)],
        )
        for index in range(node_count)
    ]
    weights: dict[tuple[NodeId, NodeId], float] = {}

    for index, node in enumerate(nodes):
        others = [other for other in range(node_count) if other != index]
        if not others:
            continue
        wanted = int(rng.integers(MIN_CONNECTIONS, MAX_CONNECTIONS + 1))
        # Sampling without replacement rules out self loops and repeat targets.
        picks = rng.choice(others, size=min(wanted, len(others)), replace=False)
        for pick in picks:
            target = nodes[int(pick)]
            jitter = float(rng.uniform(*JITTER_RANGE))
            straight = distance(
                node.position,
                target.position,
                DistanceMetric.EUCLIDEAN,
            )
            weight = straight * jitter
            _connect(weights, node.id, target.id, weight)

    graph = Graph.from_edges(nodes, _edges_from_weights(weights))
    LOGGER.debug(
        "Random graph built with %s nodes / %s edges",
        len(graph),
        graph.number_of_edges(),
    )
    return graph


def build_facility_graph(
    user: Coordinate,
    facilities: Iterable[FacilityLike],
    *,
    rng: np.random.Generator | None = None,
    metric: DistanceMetric | str = DEFAULT_METRIC,
) -> Graph:
    """Return a graph linking the user to every facility plus random shortcuts.

    The user node is connected to each facility in both directions. Each
    unordered facility pair is then linked with probability
    `SHORTCUT_PROBABILITY`. All weights are real distances between the
    nodes' coordinates under `metric`, so paths through a shortcut are
    comparable with direct ones.

    """
    catalogue = coerce_facilities(facilities)
    if not catalogue:
        msg = "At least one facility coordinate is required."
        raise ValueError(msg)

    rng = rng if rng is not None else np.random.default_rng()
    metric = DistanceMetric.from_value(metric)

    user_node = Node(
        id=USER_NODE_ID,
        position=_as_coordinate(user),
        name=USER_NODE_NAME,
    )
    facility_nodes = [
        Node(
            id=facility_node_id(index),
            position=_as_coordinate(facility.coordinate),
            name=facility.name or f"Facility {index + 1}",
        )
        for index, facility in enumerate(catalogue)
    ]
    weights: dict[tuple[NodeId, NodeId], float] = {}

    for node in facility_nodes:
        weight = distance(user_node.position, node.position, metric)
        _connect(weights, user_node.id, node.id, weight)

    shortcuts = 0
    for first, second in combinations(facility_nodes, 2):
        if rng.random() < SHORTCUT_PROBABILITY:
            weight = distance(first.position, second.position, metric)
            _connect(weights, first.id, second.id, weight)
            shortcuts += 1

    LOGGER.debug(
        "Facility graph built with %s facilities and %s shortcuts",
        len(facility_nodes),
        shortcuts,
    )
    return Graph.from_edges([user_node, *facility_nodes], _edges_from_weights(weights))


def facility_node_id(index: int) -> NodeId:
    """Return the node id assigned to the facility at `index`."""
    return f"{FACILITY_ID_PREFIX}{index}"


def coerce_facilities(facilities: Iterable[FacilityLike]) -> list[Facility]:
    """Accept bare coordinates or `Facility` records and return records."""
    return [
        item
        if isinstance(item, Facility)
        else Facility(coordinate=_as_coordinate(item))
        for item in facilities
    ]


# endregion API


# region Helpers


def _connect(
    weights: dict[tuple[NodeId, NodeId], float],
    u: NodeId,
    v: NodeId,
    weight: float,
) -> None:
    """Record `u -> v` and its mirror unless they already exist."""
    weights.setdefault((u, v), weight)
    weights.setdefault((v, u), weight)


def _edges_from_weights(weights: Mapping[tuple[NodeId, NodeId], float]) -> list[Edge]:
    return [Edge(source=u, target=v, weight=w) for (u, v), w in weights.items()]


def _as_coordinate(value: Sequence[float]) -> Coordinate:
    """Return a plain `(x, y)` float tuple."""
    return (float(value[0]), float(value[1]))


# endregion Helpers
