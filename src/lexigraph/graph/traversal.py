"""Breadth-first and depth-first traversal, hop distances and topological numbering.

Traversals return a rank map covering every vertex of the graph in graph order:
reached vertices get their 1-based visiting rank, the others get 0.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Any

import networkx as nx

from lexigraph import exceptions, metrics
from lexigraph.graph.model import Vertex
from lexigraph.lexicon import Lexicon

if TYPE_CHECKING:
    from lexigraph.graph.graph import Graph
    from lexigraph.types import DistanceMap, RankMap, VisitCallback

logger = logging.getLogger(__name__)


def _frontier() -> Lexicon[Vertex[Any]]:
    return Lexicon(accept_duplicates=False, accept_null_values=False)


def _require(graph: Graph, vertex: Vertex[Any]) -> None:
    if vertex not in graph:
        raise exceptions.VertexNotFoundError(vertex.label, [v.label for v in graph.vertices])


def bfs(graph: Graph, start: Vertex[Any], callback: VisitCallback | None = None) -> RankMap:
    """Breadth-first traversal from ``start``.

    A vertex receives its rank when it leaves the FIFO frontier; ``callback`` is
    invoked right after with (vertex, rank).

    Raises:
        VertexNotFoundError: If ``start`` is not in the graph.
    """
    _require(graph, start)
    ranks: RankMap = {v: 0 for v in graph.vertices}
    marked = {start}
    frontier = _frontier()
    frontier.add(start)
    rank = 1

    with metrics.timed("traversal.bfs", vertices=graph.n, edges=graph.m):
        while frontier:
            x = frontier.first()
            for y in graph.get_successors(x):
                if y not in marked:
                    marked.add(y)
                    frontier.add(y)
            ranks[x] = rank
            frontier.remove_at(0)
            if callback is not None:
                callback(x, rank)
            rank += 1

    logger.debug(f"BFS from {start.label} reached {rank - 1} of {graph.n} vertices")
    return ranks


def dfs(graph: Graph, start: Vertex[Any], callback: VisitCallback | None = None) -> RankMap:
    """Depth-first traversal from ``start``.

    While the vertex on top of the stack has unmarked successors, they are all
    marked and pushed in descending label order, so the smallest label is
    explored first. A vertex with nothing left to explore is ranked, handed to
    ``callback`` and popped.

    Raises:
        VertexNotFoundError: If ``start`` is not in the graph.
    """
    _require(graph, start)
    ranks: RankMap = {v: 0 for v in graph.vertices}
    marked = {start}
    stack = _frontier()
    stack.add(start)
    rank = 1

    with metrics.timed("traversal.dfs", vertices=graph.n, edges=graph.m):
        while stack:
            head = stack.last()
            unmarked = _frontier()
            unmarked.add_all(y for y in graph.get_successors(head) if y not in marked)
            if unmarked:
                unmarked.sort(key=lambda v: v.label, reverse=True)
                for y in unmarked:
                    marked.add(y)
                    stack.add(y)
                continue

            ranks[head] = rank
            stack.remove_at(len(stack) - 1)
            if callback is not None:
                callback(head, rank)
            rank += 1

    logger.debug(f"DFS from {start.label} reached {rank - 1} of {graph.n} vertices")
    return ranks


def distances_from(
    graph: Graph, source: Vertex[Any], *, regarding_orientation: bool = True
) -> DistanceMap:
    """Number of edges on a shortest path from ``source`` to every vertex.

    Unreachable vertices get ``math.inf``. With ``regarding_orientation=False``
    edges are also followed backwards.

    Raises:
        VertexNotFoundError: If ``source`` is not in the graph.
    """
    _require(graph, source)
    distances: DistanceMap = {v: math.inf for v in graph.vertices}
    distances[source] = 0
    frontier = _frontier()
    frontier.add(source)
    follow_predecessors = not regarding_orientation and graph.oriented

    while frontier:
        x = frontier.first()
        frontier.remove_at(0)
        neighbors = graph.get_successors(x)
        if follow_predecessors:
            neighbors.add_all(graph.get_predecessors(x))
        for y in neighbors:
            if distances[y] == math.inf:
                distances[y] = distances[x] + 1
                frontier.add(y)

    return distances


def shortest_distance(
    graph: Graph, a: Vertex[Any], b: Vertex[Any], *, regarding_orientation: bool = True
) -> float:
    """Hop distance from ``a`` to ``b``, ``math.inf`` if unreachable."""
    _require(graph, b)
    return distances_from(graph, a, regarding_orientation=regarding_orientation)[b]


def has_cycle(graph: Graph) -> bool:
    """True if the graph has a cycle (a self-loop counts).

    Orientation is honoured for oriented graphs. In an undirected graph two
    parallel edges between the same pair of vertices form a cycle.
    """
    try:
        nx.find_cycle(graph.to_networkx(), orientation="original" if graph.oriented else None)
    except nx.NetworkXNoCycle:
        return False
    return True


def topological_numbering(graph: Graph) -> RankMap:
    """Number vertices so that every edge goes from a lower to a higher number.

    Vertices are numbered as they become sources (Kahn's algorithm), starting
    with the initial sources in graph order.

    Raises:
        GraphError: If the graph is undirected.
        CyclicGraphError: If the graph has a cycle.
    """
    if not graph.oriented:
        raise exceptions.GraphError("Topological numbering needs an oriented graph")
    if has_cycle(graph):
        raise exceptions.CyclicGraphError("Cannot number the vertices of a graph with a cycle")

    numbering: RankMap = {}
    in_degrees = {v: graph.get_in_degree(v) for v in graph.vertices}
    frontier = Lexicon[Vertex[Any]](accept_null_values=False)
    number = 1

    for v in graph.vertices:
        if in_degrees[v] == 0:
            frontier.add(v)
            numbering[v] = number
            number += 1

    while frontier:
        x = frontier.first()
        for y in graph.get_successors(x):
            in_degrees[y] -= 1
            if in_degrees[y] == 0:
                frontier.add(y)
                numbering[y] = number
                number += 1
        frontier.remove_at(0)

    return numbering
