"""Shared fixtures for the helproute test suite."""

import numpy as np
import pytest

from helproute.graph.model import Edge, Graph, Node


def _undirected(nodes, connections):
    """Build a graph from (u, v, weight) triples, mirrored in both directions."""
    edges = []
    for u, v, weight in connections:
        edges.append(Edge(u, v, weight))
        edges.append(Edge(v, u, weight))
    return Graph.from_edges(nodes, edges)


@pytest.fixture
def undirected():
    return _undirected


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def line_graph():
    """A(0,0) - B(100,0) - C(200,0) with weights 10 and 5."""
    nodes = [
        Node("A", (0.0, 0.0), "A"),
        Node("B", (100.0, 0.0), "B"),
        Node("C", (200.0, 0.0), "C"),
    ]
    return _undirected(nodes, [("A", "B", 10.0), ("B", "C", 5.0)])


@pytest.fixture
def triangle_graph():
    """Source S with facilities F1 (8) and F2 (3), F1-F2 linked at 2."""
    nodes = [
        Node("S", (0.0, 0.0), "Source"),
        Node("F1", (8.0, 0.0), "Facility 1"),
        Node("F2", (0.0, 3.0), "Facility 2"),
    ]
    return _undirected(
        nodes,
        [("S", "F1", 8.0), ("S", "F2", 3.0), ("F1", "F2", 2.0)],
    )
