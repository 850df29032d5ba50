"""Vertex and edge coloring heuristics.

Every vertex heuristic returns a ``{vertex: Color}`` mapping in graph vertex
order where adjacent vertices (self-loops aside) get different colors. Color
numbers start at 1 and a new number is only opened when no existing one fits.
The graph itself is never modified, except by color_edges() which writes
``Edge.color``.
"""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, Any

from lexigraph import metrics
from lexigraph.config import io as config_io
from lexigraph.graph.graph import Graph
from lexigraph.graph.model import Color, Edge, Vertex
from lexigraph.lexicon import Lexicon
from lexigraph.types import ColoringHeuristic, VertexOrdering

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from lexigraph.types import ColorMap, EdgeColorMap

logger = logging.getLogger(__name__)


def _resolve_rng(rng: random.Random | None) -> random.Random:
    if rng is not None:
        return rng
    return random.Random(config_io.get_coloring_config().random_seed)


def _ordered_vertices(
    graph: Graph, ordering: VertexOrdering, rng: random.Random | None = None
) -> Lexicon[Vertex[Any]]:
    """Working list of the graph's vertices in the requested order.

    Degree orderings use a stable sort, so equal degrees keep graph order.
    """
    vertices = Lexicon[Vertex[Any]](graph.vertices, accept_duplicates=False, accept_null_values=False)
    match VertexOrdering(ordering):
        case VertexOrdering.ASCENDING:
            vertices.sort(key=graph.get_degree)
        case VertexOrdering.DESCENDING:
            vertices.sort(key=graph.get_degree, reverse=True)
        case VertexOrdering.RANDOM:
            vertices.disarray(_resolve_rng(rng))
    return vertices


def _in_graph_order(graph: Graph, colors: Mapping[Vertex[Any], Color]) -> ColorMap:
    return {v: colors[v] for v in graph.vertices if v in colors}


def _smallest_free_color(
    graph: Graph, vertex: Vertex[Any], colors: Mapping[Vertex[Any], Color], k: int
) -> int:
    """Smallest color in 1..k unused by the neighbors of ``vertex``, or k + 1."""
    used = {colors[n].number for n in graph.get_neighbors(vertex) if n in colors}
    for candidate in range(1, k + 1):
        if candidate not in used:
            return candidate
    return k + 1


def greedy(
    graph: Graph,
    ordering: VertexOrdering = VertexOrdering.DESCENDING,
    rng: random.Random | None = None,
) -> ColorMap:
    """First-fit coloring of the vertices taken in ``ordering``.

    Args:
        graph: Graph to color.
        ordering: Degree ascending, degree descending, or a random shuffle.
        rng: Random source for the RANDOM ordering. Defaults to one seeded with
            coloring.random_seed from the config.
    """
    order = _ordered_vertices(graph, ordering, rng)
    colors = dict[Vertex[Any], Color]()
    k = 0
    for vertex in order:
        number = _smallest_free_color(graph, vertex, colors, k)
        k = max(k, number)
        colors[vertex] = Color(number)
    return _in_graph_order(graph, colors)


def welsh_powell(
    graph: Graph,
    ordering: VertexOrdering = VertexOrdering.DESCENDING,
    rng: random.Random | None = None,
) -> ColorMap:
    """Welsh-Powell coloring, one color class at a time.

    The first uncolored vertex opens color k; every later uncolored vertex with
    no neighbor already colored k joins it. Then k is incremented.
    """
    remaining = _ordered_vertices(graph, ordering, rng)
    colors = dict[Vertex[Any], Color]()
    k = 1
    while remaining:
        x = remaining.first()
        remaining.remove_at(0)
        colors[x] = Color(k)
        for y in remaining.to_list():
            assert y is not None
            if not any(colors.get(n) == Color(k) for n in graph.get_neighbors(y)):
                colors[y] = Color(k)
                remaining.remove(y)
        k += 1
    return _in_graph_order(graph, colors)


def dsatur(graph: Graph) -> ColorMap:
    """DSATUR coloring.

    Vertices are sorted by degree descending and the first one gets color 1.
    Each next vertex is the uncolored one with the highest saturation degree
    (number of distinct colors among its neighbors), ties broken by degree, then
    by position. It gets the smallest color its neighbors do not use.
    """
    remaining = _ordered_vertices(graph, VertexOrdering.DESCENDING)
    colors = dict[Vertex[Any], Color]()
    if not remaining:
        return colors

    first = remaining.first()
    remaining.remove_at(0)
    colors[first] = Color(1)
    k = 1

    while remaining:
        x = remaining.first()
        best = (graph.get_saturation_degree(x, colors), graph.get_degree(x))
        for i in range(1, len(remaining)):
            candidate = remaining.get(i)
            assert candidate is not None
            score = (graph.get_saturation_degree(candidate, colors), graph.get_degree(candidate))
            if score > best:
                x, best = candidate, score

        number = _smallest_free_color(graph, x, colors, k)
        k = max(k, number)
        remaining.remove(x)
        colors[x] = Color(number)

    return _in_graph_order(graph, colors)


_HEURISTICS: dict[ColoringHeuristic, Callable[[Graph, random.Random | None], ColorMap]] = {
    ColoringHeuristic.GREEDY_ASCENDING: lambda g, rng: greedy(g, VertexOrdering.ASCENDING),
    ColoringHeuristic.GREEDY_DESCENDING: lambda g, rng: greedy(g, VertexOrdering.DESCENDING),
    ColoringHeuristic.GREEDY_RANDOM: lambda g, rng: greedy(g, VertexOrdering.RANDOM, rng),
    ColoringHeuristic.WELSH_POWELL: lambda g, rng: welsh_powell(g, VertexOrdering.DESCENDING),
    ColoringHeuristic.WELSH_POWELL_ASCENDING: lambda g, rng: welsh_powell(
        g, VertexOrdering.ASCENDING
    ),
    ColoringHeuristic.WELSH_POWELL_RANDOM: lambda g, rng: welsh_powell(
        g, VertexOrdering.RANDOM, rng
    ),
    ColoringHeuristic.DSATUR: lambda g, rng: dsatur(g),
}


def color(
    graph: Graph,
    heuristic: ColoringHeuristic | str | None = None,
    rng: random.Random | None = None,
) -> ColorMap:
    """Color the vertices of ``graph`` with the named heuristic.

    Args:
        graph: Graph to color.
        heuristic: Heuristic to use. Defaults to coloring.default_heuristic from the config.
        rng: Random source for the random orderings.
    """
    if heuristic is None:
        heuristic = config_io.get_coloring_config().default_heuristic
    heuristic = ColoringHeuristic(heuristic)

    with metrics.timed(f"coloring.{heuristic}", vertices=graph.n, edges=graph.m):
        colors = _HEURISTICS[heuristic](graph, rng)

    logger.debug(f"{heuristic} colored {graph.n} vertices with {count_colors(colors)} colors")
    return colors


def line_graph(graph: Graph) -> Graph:
    """Undirected graph with one vertex per edge, linked when the edges share an endpoint.

    Each vertex carries its edge as data and the edge id as its own id.
    """
    by_edge = {edge: Vertex[Edge[Any]](label=repr(edge), data=edge, id=edge.id) for edge in graph.edges}
    lines = Graph(by_edge.values(), oriented=False)
    edges = graph.edges.to_list()
    for i, e1 in enumerate(edges):
        for e2 in edges[i + 1 :]:
            assert e1 is not None and e2 is not None
            if graph.are_edges_adjacent(e1, e2):
                lines.add_edge(Edge[Any](by_edge[e1], by_edge[e2]))
    return lines


def color_edges(
    graph: Graph,
    heuristic: ColoringHeuristic | str | None = None,
    rng: random.Random | None = None,
) -> EdgeColorMap:
    """Color the edges so that edges sharing an endpoint differ, and store it in Edge.color."""
    vertex_colors = color(line_graph(graph), heuristic, rng)
    for vertex, edge_color in vertex_colors.items():
        edge: Edge[Any] = vertex.data
        edge.color = edge_color
    return {edge: edge.color for edge in graph.edges if edge.color is not None}


def is_proper_coloring(graph: Graph, colors: Mapping[Vertex[Any], Color]) -> bool:
    """True if every vertex has an actual color and no edge joins two equal colors.

    Self-loops are ignored.
    """
    for vertex in graph.vertices:
        assigned = colors.get(vertex)
        if assigned is None or not assigned.is_colored:
            return False
    for edge in graph.edges:
        if not edge.is_loop and colors.get(edge.x) == colors.get(edge.y):
            return False
    return True


def count_colors(colors: Mapping[Any, Color]) -> int:
    """Number of distinct actual colors in a coloring."""
    return len({c for c in colors.values() if c.is_colored})


def color_classes[K](colors: Mapping[K, Color]) -> dict[Color, list[K]]:
    """Group colored items by color, colors in increasing order."""
    classes = dict[Color, list[K]]()
    for item, assigned in sorted(colors.items(), key=lambda pair: pair[1]):
        classes.setdefault(assigned, []).append(item)
    return classes
