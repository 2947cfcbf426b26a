"""Read-only weighted graph used by the nearest-facility search."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Iterator, Mapping

import networkx as nx

if TYPE_CHECKING:
    from helproute.geo import Coordinate

NodeId = str


class GraphIntegrityError(ValueError):
    """Raised when node/edge data cannot form a consistent graph."""


@dataclass(frozen=True, slots=True)
class Node:
    """A point of interest: the user or a candidate facility."""

    id: NodeId
    position: Coordinate
    name: str


@dataclass(frozen=True, slots=True)
class Edge:
    """Directed, weighted arc between two node ids."""

    source: NodeId
    target: NodeId
    weight: float


class Graph:
    """Directed adjacency over `Node` objects, frozen after construction.

    Storage is a `networkx.DiGraph`; node attributes hold `x`, `y` and
    `name`, edge attributes hold `weight`. Builders insert both directions
    for every connection, so the graph is logically undirected.
    """

    __slots__ = ("_graph",)

    def __init__(
        self,
        nodes: Mapping[NodeId, Node] | Iterable[Node],
        adjacency: Mapping[NodeId, Iterable[Edge]] | None = None,
    ) -> None:
        node_list = list(nodes.values()) if isinstance(nodes, Mapping) else list(nodes)
        graph = nx.DiGraph()

        for node in node_list:
            if node.id in graph:
                msg = f"Duplicate node id: {node.id!r}."
                raise GraphIntegrityError(msg)
            graph.add_node(
                node.id,
                x=float(node.position[0]),
                y=float(node.position[1]),
                name=node.name,
            )

        for owner, edges in (adjacency or {}).items():
            if owner not in graph:
                msg = f"Adjacency lists edges for unknown node {owner!r}."
                raise GraphIntegrityError(msg)
            for edge in edges:
                _validate_edge(graph, owner, edge)
                graph.add_edge(edge.source, edge.target, weight=float(edge.weight))

        self._graph = nx.freeze(graph)

    @classmethod
    def from_edges(cls, nodes: Iterable[Node], edges: Iterable[Edge]) -> Graph:
        """Build a graph from a flat edge list."""
        adjacency: dict[NodeId, list[Edge]] = {}
        for edge in edges:
            adjacency.setdefault(edge.source, []).append(edge)
        return cls(nodes, adjacency)

    def get_node(self, node_id: NodeId) -> Node | None:
        """Return the node for `node_id`, or ``None`` when it is unknown."""
        attrs = self._graph.nodes.get(node_id)
        if attrs is None:
            return None
        return Node(id=node_id, position=(attrs["x"], attrs["y"]), name=attrs["name"])

    def get_edges_from_node(self, node_id: NodeId) -> list[Edge]:
        """Return outgoing edges of `node_id`; empty for unknown or isolated nodes."""
        if node_id not in self._graph:
            return []
        return [
            Edge(source=node_id, target=target, weight=attrs["weight"])
            for target, attrs in self._graph.adj[node_id].items()
        ]

    def adjacency(self) -> dict[NodeId, list[Edge]]:
        """Return the outgoing edge list of every node, isolated ones included."""
        return {node_id: self.get_edges_from_node(node_id) for node_id in self._graph}

    def edge_weight(self, source: NodeId, target: NodeId) -> float:
        """Return the weight of `source -> target`, or ``inf`` when absent."""
        attrs = self._graph.get_edge_data(source, target)
        if attrs is None:
            return math.inf
        return attrs["weight"]

    def node_ids(self) -> list[NodeId]:  # noqa: D102
        return list(self._graph.nodes)

    def nodes(self) -> Iterator[Node]:  # noqa: D102
        for node_id in self._graph.nodes:
            yield self.get_node(node_id)  # type: ignore[misc]

    def edges(self) -> Iterator[Edge]:  # noqa: D102
        for source, target, weight in self._graph.edges(data="weight"):
            yield Edge(source=source, target=target, weight=weight)

    def number_of_edges(self) -> int:  # noqa: D102
        return self._graph.number_of_edges()

    @property
    def nx_graph(self) -> nx.DiGraph:
        """Frozen NetworkX view, handy for serialization and stats."""
        return self._graph

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._graph

    def __len__(self) -> int:
        return self._graph.number_of_nodes()

    def __repr__(self) -> str:
        return f"Graph(nodes={len(self)}, edges={self.number_of_edges()})"


def _validate_edge(graph: nx.DiGraph, owner: NodeId, edge: Edge) -> None:
    """Reject edges that would leave the adjacency structure inconsistent."""
    if edge.source != owner:
        msg = f"Edge {edge.source!r}->{edge.target!r} listed under node {owner!r}."
        raise GraphIntegrityError(msg)
    for endpoint in (edge.source, edge.target):
        if endpoint not in graph:
            msg = f"Edge {edge.source!r}->{edge.target!r} references unknown node {endpoint!r}."  # noqa: E501
            raise GraphIntegrityError(msg)
    if not edge.weight >= 0:
        msg = f"Edge {edge.source!r}->{edge.target!r} has invalid weight {edge.weight!r}."  # noqa: E501
        raise GraphIntegrityError(msg)
