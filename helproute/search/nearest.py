"""Pick the facility with the cheapest path from a fixed source."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

from helproute.search.dijkstra import ShortestPathResult, find_shortest_path

if TYPE_CHECKING:
    from helproute.graph.model import Graph, NodeId


class NoCandidatesError(ValueError):
    """Raised when a nearest-facility query is given no candidates."""


@dataclass(slots=True)
class NearestResult:
    """Winning candidate and the path that reaches it."""

    best_id: NodeId
    best_result: ShortestPathResult

    @property
    def total_distance(self) -> float:  # noqa: D102
        return self.best_result.total_distance


def find_nearest(
    graph: Graph,
    source: NodeId,
    candidates: Sequence[NodeId],
) -> NearestResult:
    """Return the candidate with the lowest path cost from `source`.

    Each candidate gets its own Dijkstra run. Only a strictly smaller cost
    replaces the current best, so the earliest candidate wins ties. If no
    candidate is reachable the first one is returned with its unreachable
    result.
    """
    if not candidates:
        msg = "At least one candidate node is required."
        raise NoCandidatesError(msg)

    first = candidates[0]
    best = NearestResult(first, find_shortest_path(graph, source, first))
    for candidate in candidates[1:]:
        result = find_shortest_path(graph, source, candidate)
        if result.total_distance < best.total_distance:
            best = NearestResult(candidate, result)
    return best


def rank_candidates(
    graph: Graph,
    source: NodeId,
    candidates: Sequence[NodeId],
) -> list[NearestResult]:
    """Return every candidate ordered by path cost, unreachable ones last.

    The sort is stable, so candidates with equal cost keep their input order
    and the head of the list agrees with `find_nearest`.
    """
    if not candidates:
        msg = "At least one candidate node is required."
        raise NoCandidatesError(msg)

    ranking = [
        NearestResult(candidate, find_shortest_path(graph, source, candidate))
        for candidate in candidates
    ]
    return sorted(ranking, key=lambda entry: entry.total_distance)
