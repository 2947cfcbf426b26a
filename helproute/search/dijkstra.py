"""Single-pair Dijkstra search over a `Graph`."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from heapq import heappop, heappush
from itertools import permutations
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from helproute.graph.model import Graph, NodeId


@dataclass(slots=True)
class ShortestPathResult:
    """Outcome of a single source/target search.

    `path` is empty and `total_distance` is ``inf`` when the target cannot be
    reached. `distances` and `previous` cover every node in the graph.
    """

    path: list[NodeId]
    total_distance: float
    distances: dict[NodeId, float] = field(default_factory=dict)
    previous: dict[NodeId, NodeId | None] = field(default_factory=dict)

    @property
    def reachable(self) -> bool:  # noqa: D102
        return bool(self.path)


def find_shortest_path(
    graph: Graph,
    source: NodeId,
    target: NodeId,
) -> ShortestPathResult:
    """Return the cheapest path from `source` to `target`.

    Weights must be non-negative. The search stops as soon as the target is
    settled, so `distances` holds final values only for settled nodes and
    tentative ones for the rest of the frontier. Unknown ids never raise;
    they simply produce an unreachable result.
    """
    distances: dict[NodeId, float] = dict.fromkeys(graph.node_ids(), math.inf)
    previous: dict[NodeId, NodeId | None] = dict.fromkeys(distances)

    if source not in graph:
        return ShortestPathResult([], math.inf, distances, previous)

    distances[source] = 0.0
    if source == target:
        return ShortestPathResult([source], 0.0, distances, previous)

    frontier: list[tuple[float, NodeId]] = [(0.0, source)]
    settled: set[NodeId] = set()

    while frontier:
        cost, node = heappop(frontier)
        # Stale heap entries are skipped instead of decreased in place.
        if node in settled or cost > distances[node]:
            continue
        if node == target:
            break
        settled.add(node)

        for edge in graph.get_edges_from_node(node):
            if edge.target in settled:
                continue
            new_cost = cost + edge.weight
            if new_cost < distances[edge.target]:
                distances[edge.target] = new_cost
                previous[edge.target] = node
                heappush(frontier, (new_cost, edge.target))

    path = _reconstruct_path(previous, source, target)
    if not path:
        return ShortestPathResult([], math.inf, distances, previous)
    return ShortestPathResult(path, distances[target], distances, previous)


def shortest_path_table(
    graph: Graph,
    pairs: Iterable[tuple[NodeId, NodeId]] | None = None,
) -> dict[tuple[NodeId, NodeId], ShortestPathResult]:
    """Run `find_shortest_path` for each pair; all ordered pairs by default."""
    if pairs is None:
        pairs = permutations(graph.node_ids(), 2)
    return {
        (source, target): find_shortest_path(graph, source, target)
        for source, target in pairs
    }


def _reconstruct_path(
    previous: dict[NodeId, NodeId | None],
    source: NodeId,
    target: NodeId,
) -> list[NodeId]:
    """Walk predecessor links back from `target`; empty when it was never reached."""
    if previous.get(target) is None:
        return []

    path: list[NodeId] = [target]
    node = target
    while node != source:
        parent = previous[node]
        if parent is None:
            return []
        path.append(parent)
        node = parent
    path.reverse()
    return path
