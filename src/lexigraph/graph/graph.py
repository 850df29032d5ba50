"""Graph container and its adjacency queries."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, override

import networkx as nx

from lexigraph import exceptions
from lexigraph.graph.model import Color, Edge, Vertex
from lexigraph.lexicon import Lexicon

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from lexigraph.types import RankMap, VisitCallback

logger = logging.getLogger(__name__)


def _vertex_lexicon(vertices: Iterable[Vertex[Any]] = ()) -> Lexicon[Vertex[Any]]:
    return Lexicon(vertices, accept_duplicates=False, accept_null_values=False)


def _edge_lexicon(edges: Iterable[Edge[Any]] = ()) -> Lexicon[Edge[Any]]:
    return Lexicon(edges, accept_duplicates=False, accept_null_values=False)


class Graph:
    """A directed (default) or undirected multigraph.

    Vertices and edges are stored in Lexicons that refuse duplicates and None.
    Parallel edges are allowed as long as they have distinct ids. Keeping every
    edge endpoint inside ``vertices`` is the caller's responsibility; queries on
    an edge whose endpoints are missing simply never match them.
    """

    oriented: bool
    vertices: Lexicon[Vertex[Any]]
    edges: Lexicon[Edge[Any]]

    def __init__(
        self,
        vertices: Iterable[Vertex[Any]] = (),
        edges: Iterable[Edge[Any]] = (),
        *,
        oriented: bool = True,
    ) -> None:
        self.oriented = oriented
        self.vertices = _vertex_lexicon(vertices)
        self.edges = _edge_lexicon(edges)

    # --- Construction ---

    @property
    def n(self) -> int:
        """Number of vertices."""
        return len(self.vertices)

    @property
    def m(self) -> int:
        """Number of edges."""
        return len(self.edges)

    def add_vertex(self, vertex: Vertex[Any]) -> bool:
        return self.vertices.add(vertex)

    def add_edge(self, edge: Edge[Any]) -> bool:
        return self.edges.add(edge)

    def connect(self, x: Vertex[Any], y: Vertex[Any], data: Any = None) -> Edge[Any]:
        """Create an edge x -> y, adding missing endpoints to the graph."""
        self.vertices.add(x)
        self.vertices.add(y)
        edge = Edge[Any](x, y, data)
        self.edges.add(edge)
        return edge

    def subgraph(self, vertices: Iterable[Vertex[Any]]) -> Graph:
        """Induced subgraph over ``vertices`` (kept in this graph's order)."""
        wanted = set(vertices)
        kept = [v for v in self.vertices if v in wanted]
        kept_edges = [e for e in self.edges if e.x in wanted and e.y in wanted]
        return Graph(kept, kept_edges, oriented=self.oriented)

    # --- Lookups ---

    def __contains__(self, vertex: object) -> bool:
        return vertex in self.vertices

    def _require(self, vertex: Vertex[Any]) -> None:
        if vertex not in self.vertices:
            raise exceptions.VertexNotFoundError(
                getattr(vertex, "label", str(vertex)), [v.label for v in self.vertices]
            )

    def find_vertex(self, vertex_id: str) -> Vertex[Any] | None:
        """Return the vertex with this id, or None."""
        for vertex in self.vertices:
            if vertex.id == vertex_id:
                return vertex
        return None

    def find_vertex_by_label(self, label: str) -> Vertex[Any] | None:
        """Return the first vertex carrying this label, or None."""
        for vertex in self.vertices:
            if vertex.label == label:
                return vertex
        return None

    def find_edge(self, edge_id: str) -> Edge[Any] | None:
        for edge in self.edges:
            if edge.id == edge_id:
                return edge
        return None

    def _links(self, edge: Edge[Any], a: Vertex[Any], b: Vertex[Any]) -> bool:
        if edge.x == a and edge.y == b:
            return True
        return not self.oriented and edge.x == b and edge.y == a

    def find_edge_between(self, a: Vertex[Any], b: Vertex[Any]) -> Edge[Any] | None:
        """First edge a -> b (or b -> a in an undirected graph), or None."""
        for edge in self.edges:
            if self._links(edge, a, b):
                return edge
        return None

    def find_edges_between(self, a: Vertex[Any], b: Vertex[Any]) -> Lexicon[Edge[Any]]:
        return _edge_lexicon(e for e in self.edges if self._links(e, a, b))

    # --- Adjacency ---

    def get_successors(self, vertex: Vertex[Any]) -> Lexicon[Vertex[Any]]:
        """Vertices reachable from ``vertex`` through one edge.

        One entry per edge, so parallel edges give repeated vertices. In an
        undirected graph this is the opposite endpoint of every touching edge.

        Raises:
            VertexNotFoundError: If ``vertex`` is not in the graph.
        """
        self._require(vertex)
        successors = Lexicon[Vertex[Any]](accept_duplicates=True, accept_null_values=False)
        for edge in self.edges:
            if edge.x == vertex:
                successors.add(edge.y)
            elif not self.oriented and edge.y == vertex:
                successors.add(edge.x)
        return successors

    def get_predecessors(self, vertex: Vertex[Any]) -> Lexicon[Vertex[Any]]:
        """Vertices with an edge leading to ``vertex``, with multiplicity.

        Raises:
            VertexNotFoundError: If ``vertex`` is not in the graph.
        """
        self._require(vertex)
        predecessors = Lexicon[Vertex[Any]](accept_duplicates=True, accept_null_values=False)
        for edge in self.edges:
            if edge.y == vertex:
                predecessors.add(edge.x)
            elif not self.oriented and edge.x == vertex:
                predecessors.add(edge.y)
        return predecessors

    def get_neighbors(self, vertex: Vertex[Any]) -> Lexicon[Vertex[Any]]:
        """Distinct vertices sharing an edge with ``vertex``, in either direction."""
        neighbors = _vertex_lexicon(self.get_successors(vertex))
        neighbors.add_all(self.get_predecessors(vertex))
        return neighbors

    def get_edge_neighbors(self, edge: Edge[Any]) -> Lexicon[Edge[Any]]:
        """Edges other than ``edge`` that share at least one endpoint with it.

        Raises:
            EdgeNotFoundError: If ``edge`` is not in the graph.
        """
        if edge not in self.edges:
            raise exceptions.EdgeNotFoundError(f"{edge!r} is not in the graph")
        return _edge_lexicon(
            other for other in self.edges if other != edge and self.are_edges_adjacent(edge, other)
        )

    def get_sources(self) -> Lexicon[Vertex[Any]]:
        return _vertex_lexicon(v for v in self.vertices if not self.get_predecessors(v))

    def get_sinks(self) -> Lexicon[Vertex[Any]]:
        return _vertex_lexicon(v for v in self.vertices if not self.get_successors(v))

    def get_in_degree(self, vertex: Vertex[Any]) -> int:
        return len(self.get_predecessors(vertex))

    def get_out_degree(self, vertex: Vertex[Any]) -> int:
        return len(self.get_successors(vertex))

    def get_degree(self, vertex: Vertex[Any]) -> int:
        """In + out degree, or the number of edge endpoints at ``vertex`` if undirected.

        In an undirected graph a self-loop counts twice.
        """
        if self.oriented:
            return self.get_in_degree(vertex) + self.get_out_degree(vertex)
        self._require(vertex)
        return sum((edge.x == vertex) + (edge.y == vertex) for edge in self.edges)

    def get_max_degree(self) -> int:
        return max((self.get_degree(v) for v in self.vertices), default=0)

    def get_saturation_degree(self, vertex: Vertex[Any], colors: Mapping[Vertex[Any], Color]) -> int:
        """Number of distinct actual colors among the neighbors of ``vertex``."""
        seen = set[Color]()
        for neighbor in self.get_neighbors(vertex):
            color = colors.get(neighbor)
            if color is not None and color.is_colored:
                seen.add(color)
        return len(seen)

    def are_adjacent(self, a: Vertex[Any], b: Vertex[Any]) -> bool:
        """True if some edge connects a and b in either direction."""
        for edge in self.edges:
            if (edge.x == a and edge.y == b) or (edge.x == b and edge.y == a):
                return True
        return False

    def are_edges_adjacent(self, e1: Edge[Any], e2: Edge[Any]) -> bool:
        """True if the edges share at least one endpoint."""
        return e1.touches(e2.x) or e1.touches(e2.y)

    # --- Traversal ---

    def breadth_first_search(
        self, start: Vertex[Any], callback: VisitCallback | None = None
    ) -> RankMap:
        from lexigraph.graph import traversal

        return traversal.bfs(self, start, callback)

    def depth_first_search(
        self, start: Vertex[Any], callback: VisitCallback | None = None
    ) -> RankMap:
        from lexigraph.graph import traversal

        return traversal.dfs(self, start, callback)

    # --- networkx interop ---

    def to_networkx(self) -> nx.MultiDiGraph[Vertex[Any]] | nx.MultiGraph[Vertex[Any]]:
        """Export as a networkx multigraph whose nodes are the Vertex objects.

        Edge keys are edge ids; the Edge itself is stored under the "edge" attribute.
        """
        g: nx.MultiDiGraph[Vertex[Any]] | nx.MultiGraph[Vertex[Any]] = (
            nx.MultiDiGraph() if self.oriented else nx.MultiGraph()
        )
        g.add_nodes_from(self.vertices)
        for edge in self.edges:
            g.add_edge(edge.x, edge.y, key=edge.id, edge=edge)
        return g

    @classmethod
    def from_networkx(cls, g: nx.Graph[Any]) -> Graph:
        """Build a Graph from any networkx graph.

        Nodes that are already Vertex objects are reused; other nodes become
        vertices labelled ``str(node)`` with the node itself as data.
        """
        mapping = dict[Any, Vertex[Any]]()
        for node in g.nodes:
            mapping[node] = node if isinstance(node, Vertex) else Vertex[Any](str(node), node)

        graph = cls(mapping.values(), oriented=g.is_directed())
        for u, v, attrs in g.edges(data=True):
            stored = attrs.get("edge")
            if isinstance(stored, Edge):
                graph.add_edge(stored)
            else:
                graph.add_edge(Edge[Any](mapping[u], mapping[v], attrs.get("data")))
        logger.debug(f"Imported networkx graph with {graph.n} vertices and {graph.m} edges")
        return graph

    @override
    def __repr__(self) -> str:
        kind = "oriented" if self.oriented else "undirected"
        return f"Graph({kind}, n={self.n}, m={self.m})"
