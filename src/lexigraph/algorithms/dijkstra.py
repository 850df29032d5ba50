"""Single-source shortest paths with Dijkstra's algorithm."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Any, NamedTuple

from lexigraph import exceptions, limits, metrics
from lexigraph.graph.model import Vertex
from lexigraph.graph.path import Path
from lexigraph.lexicon import Lexicon

if TYPE_CHECKING:
    from lexigraph.graph.graph import Graph
    from lexigraph.types import DistanceMap, PredecessorMap, WeightFunction

logger = logging.getLogger(__name__)


class ShortestPaths(NamedTuple):
    """Result of a Dijkstra run from one source.

    Attributes:
        distances: Distance from the source to every vertex, ``math.inf`` if unreachable.
        predecessors: Previous vertex on a shortest path, None for the source and
            unreachable vertices.
    """

    distances: DistanceMap
    predecessors: PredecessorMap


def unit_weight(u: Vertex[Any], v: Vertex[Any]) -> float:
    """Every edge costs 1, so distances count edges."""
    return 1.0


def _require(graph: Graph, vertex: Vertex[Any]) -> None:
    if vertex not in graph:
        raise exceptions.VertexNotFoundError(vertex.label, [v.label for v in graph.vertices])


def _checked_weight(weight: WeightFunction, u: Vertex[Any], v: Vertex[Any]) -> float:
    w = weight(u, v)
    if math.isnan(w) or w < 0:
        raise exceptions.InvalidWeightError(
            f"Weight between '{u.label}' and '{v.label}' must be >= 0, got {w}"
        )
    return w


def shortest_paths(
    graph: Graph, source: Vertex[Any], weight: WeightFunction = unit_weight
) -> ShortestPaths:
    """Compute distances and predecessors from ``source`` to every vertex.

    The next vertex settled is the first one, in graph order, with the smallest
    tentative distance. In an undirected graph edges are followed both ways.

    Args:
        graph: Graph to explore.
        source: Start vertex.
        weight: Cost of going from a vertex to an adjacent one. Must be >= 0.

    Raises:
        VertexNotFoundError: If ``source`` is not in the graph.
        InvalidWeightError: If ``weight`` returns a negative or NaN value.
        IterationLimitError: If the main loop runs more than m + n^2 + padding times.
    """
    _require(graph, source)

    distances: DistanceMap = {}
    predecessors: PredecessorMap = {}
    queue = Lexicon[Vertex[Any]](accept_duplicates=False, accept_null_values=False)
    for vertex in graph.vertices:
        distances[vertex] = math.inf
        predecessors[vertex] = None
        queue.add(vertex)
    distances[source] = 0.0

    guard = limits.IterationGuard(limits.graph_loop_limit(graph.n, graph.m), name="dijkstra")

    with metrics.timed("algorithms.dijkstra", vertices=graph.n, edges=graph.m):
        while queue:
            u = queue.first()
            dist_u = math.inf
            for candidate in queue:
                if distances[candidate] < dist_u:
                    u = candidate
                    dist_u = distances[candidate]
            queue.remove(u)

            for v in graph.get_successors(u):
                alt = distances[u] + _checked_weight(weight, u, v)
                if alt < distances[v]:
                    distances[v] = alt
                    predecessors[v] = u

            guard.increment()

    logger.debug(f"Dijkstra from {source.label} settled {graph.n} vertices")
    return ShortestPaths(distances, predecessors)


def get_path(
    graph: Graph,
    source: Vertex[Any],
    destination: Vertex[Any],
    weight: WeightFunction = unit_weight,
) -> Lexicon[Vertex[Any]]:
    """Vertices of a shortest path, from ``source`` to ``destination`` included.

    Raises:
        VertexNotFoundError: If either vertex is not in the graph.
        UnreachableVertexError: If ``destination`` cannot be reached from ``source``.
    """
    _require(graph, source)
    _require(graph, destination)

    result = shortest_paths(graph, source, weight)
    if result.distances[destination] == math.inf:
        raise exceptions.UnreachableVertexError(source.label, destination.label)

    guard = limits.IterationGuard(limits.graph_loop_limit(graph.n, graph.m), name="dijkstra path")
    backwards = [destination]
    current = destination
    while current != source:
        previous = result.predecessors[current]
        if previous is None:
            raise exceptions.UnreachableVertexError(source.label, destination.label)
        backwards.append(previous)
        current = previous
        guard.increment()

    return Lexicon(reversed(backwards), accept_duplicates=False, accept_null_values=False)


def get_edge_path(
    graph: Graph,
    source: Vertex[Any],
    destination: Vertex[Any],
    weight: WeightFunction = unit_weight,
) -> Path:
    """Same route as get_path(), as a Path of edges (empty when source == destination)."""
    vertices = get_path(graph, source, destination, weight)
    return Path.from_vertices(graph, vertices)
