from __future__ import annotations

from typing import Any

import networkx as nx
import pytest

import helpers
from lexigraph import exceptions
from lexigraph.graph import Color, Edge, Graph, Vertex

# =============================================================================
# Reference scenario: vertices 1..4
# =============================================================================


def test_scenario_successors(scenario_graph: Graph):
    v1 = helpers.vertex(scenario_graph, "1")
    assert sorted(helpers.labels(scenario_graph.get_successors(v1))) == ["2", "3"]


def test_scenario_degrees(scenario_graph: Graph):
    v1 = helpers.vertex(scenario_graph, "1")
    v2 = helpers.vertex(scenario_graph, "2")
    v4 = helpers.vertex(scenario_graph, "4")
    assert scenario_graph.get_in_degree(v2) == 3
    assert scenario_graph.get_out_degree(v1) == 2
    assert scenario_graph.get_in_degree(v4) == 2
    assert scenario_graph.get_out_degree(v4) == 2
    assert scenario_graph.get_degree(v4) == 4


def test_scenario_adjacency(scenario_graph: Graph):
    v1 = helpers.vertex(scenario_graph, "1")
    v3 = helpers.vertex(scenario_graph, "3")
    v4 = helpers.vertex(scenario_graph, "4")
    assert not scenario_graph.are_adjacent(v1, v4)
    assert scenario_graph.are_adjacent(v4, v4)
    assert scenario_graph.are_adjacent(v3, v1)


def test_scenario_counts(scenario_graph: Graph):
    assert scenario_graph.n == 4
    assert scenario_graph.m == 7


def test_parallel_edges_kept_with_multiplicity(scenario_graph: Graph):
    v3 = helpers.vertex(scenario_graph, "3")
    assert helpers.labels(scenario_graph.get_successors(v3)) == ["2", "2"]
    assert helpers.labels(scenario_graph.get_neighbors(v3)) == ["2", "1", "4"]


def test_sources_and_sinks(scenario_graph: Graph):
    assert helpers.labels(scenario_graph.get_sources()) == ["1"]
    assert helpers.labels(scenario_graph.get_sinks()) == []


def test_unknown_vertex_raises(scenario_graph: Graph):
    stranger = Vertex[Any]("1")
    with pytest.raises(exceptions.VertexNotFoundError) as exc_info:
        scenario_graph.get_successors(stranger)
    assert isinstance(exc_info.value, ValueError)
    with pytest.raises(exceptions.VertexNotFoundError):
        scenario_graph.get_predecessors(stranger)


def test_vertex_not_found_suggests_label():
    error = exceptions.VertexNotFoundError("alpah", ["alpha", "beta"])
    assert "Did you mean: 'alpha'" in error.format_user_message()


# =============================================================================
# Undirected graphs
# =============================================================================


def test_undirected_successors_equal_predecessors(triangle: Graph):
    x = helpers.vertex(triangle, "x")
    assert sorted(helpers.labels(triangle.get_successors(x))) == ["y", "z"]
    assert triangle.get_successors(x) == triangle.get_predecessors(x)


def test_undirected_self_loop_counts_twice_in_degree():
    graph = helpers.build_graph("ab", [("a", "a"), ("a", "b")], oriented=False)
    a = helpers.vertex(graph, "a")
    assert helpers.labels(graph.get_successors(a)) == ["a", "b"]
    assert graph.get_degree(a) == 3


def test_oriented_self_loop_counts_in_and_out():
    graph = helpers.build_graph("a", [("a", "a")])
    a = helpers.vertex(graph, "a")
    assert graph.get_in_degree(a) == 1
    assert graph.get_out_degree(a) == 1
    assert graph.get_degree(a) == 2


def test_max_degree(triangle: Graph):
    assert triangle.get_max_degree() == 2
    assert Graph().get_max_degree() == 0


# =============================================================================
# Edges
# =============================================================================


def test_edges_adjacent_when_sharing_endpoint(scenario_graph: Graph):
    e12, e13, e24 = scenario_graph.edges[0], scenario_graph.edges[1], scenario_graph.edges[2]
    assert scenario_graph.are_edges_adjacent(e12, e13)
    assert scenario_graph.are_edges_adjacent(e12, e12)
    assert not scenario_graph.are_edges_adjacent(e13, e24)


def test_edge_neighbors():
    graph = helpers.build_graph("abcd", [("a", "b"), ("b", "c"), ("c", "d")])
    middle = graph.edges[1]
    assert [repr(e) for e in graph.get_edge_neighbors(middle)] == [
        "Edge('a' -> 'b')",
        "Edge('c' -> 'd')",
    ]


def test_edge_neighbors_unknown_edge_raises():
    graph = helpers.build_graph("ab", [("a", "b")])
    with pytest.raises(exceptions.EdgeNotFoundError):
        graph.get_edge_neighbors(Edge[Any](graph.vertices[0], graph.vertices[1]))


def test_duplicate_edge_object_refused():
    graph = helpers.build_graph("ab", [("a", "b")])
    assert graph.add_edge(graph.edges[0]) is False
    assert graph.m == 1


def test_saturation_degree(triangle: Graph):
    x, y, z = (helpers.vertex(triangle, label) for label in "xyz")
    colors = {y: Color(1), z: Color(1)}
    assert triangle.get_saturation_degree(x, colors) == 1
    colors[z] = Color(2)
    assert triangle.get_saturation_degree(x, colors) == 2
    assert triangle.get_saturation_degree(x, {y: Color()}) == 0


# =============================================================================
# Lookups and construction
# =============================================================================


def test_find_vertex_and_edge(scenario_graph: Graph):
    v2 = helpers.vertex(scenario_graph, "2")
    edge = scenario_graph.edges[0]
    assert scenario_graph.find_vertex(v2.id) is v2
    assert scenario_graph.find_vertex("nope") is None
    assert scenario_graph.find_edge(edge.id) is edge
    assert scenario_graph.find_edge("nope") is None


def test_find_edges_between_respects_orientation(scenario_graph: Graph):
    v2 = helpers.vertex(scenario_graph, "2")
    v3 = helpers.vertex(scenario_graph, "3")
    assert len(scenario_graph.find_edges_between(v3, v2)) == 2
    assert scenario_graph.find_edge_between(v2, v3) is None


def test_find_edge_between_undirected_accepts_reverse(triangle: Graph):
    x = helpers.vertex(triangle, "x")
    z = helpers.vertex(triangle, "z")
    assert triangle.find_edge_between(x, z) is not None


def test_connect_adds_missing_vertices():
    graph = Graph()
    a, b = Vertex[Any]("a"), Vertex[Any]("b")
    edge = graph.connect(a, b, data=3)
    assert graph.n == 2
    assert edge.data == 3
    assert graph.get_successors(a) == [b]


def test_subgraph_is_induced(scenario_graph: Graph):
    keep = [helpers.vertex(scenario_graph, label) for label in ("2", "3", "4")]
    sub = scenario_graph.subgraph(keep)
    assert helpers.labels(sub.vertices) == ["2", "3", "4"]
    assert sub.m == 5


# =============================================================================
# networkx interop
# =============================================================================


def test_to_networkx_preserves_multiplicity(scenario_graph: Graph):
    g = scenario_graph.to_networkx()
    v2 = helpers.vertex(scenario_graph, "2")
    assert isinstance(g, nx.MultiDiGraph)
    assert g.number_of_nodes() == 4
    assert g.number_of_edges() == 7
    assert g.in_degree(v2) == 3


def test_to_networkx_undirected(triangle: Graph):
    assert isinstance(triangle.to_networkx(), nx.MultiGraph)
    assert not triangle.to_networkx().is_directed()


def test_from_networkx_round_trip_keeps_objects(scenario_graph: Graph):
    rebuilt = Graph.from_networkx(scenario_graph.to_networkx())
    assert rebuilt.oriented
    assert set(rebuilt.vertices) == set(scenario_graph.vertices)
    assert set(rebuilt.edges) == set(scenario_graph.edges)


def test_from_plain_networkx_graph():
    rebuilt = Graph.from_networkx(nx.path_graph(3))
    assert not rebuilt.oriented
    assert helpers.labels(rebuilt.vertices) == ["0", "1", "2"]
    assert rebuilt.vertices[0].data == 0
    assert rebuilt.m == 2


def test_degree_matches_networkx(traversal_graph: Graph):
    g = traversal_graph.to_networkx()
    for v in traversal_graph.vertices:
        assert traversal_graph.get_degree(v) == g.degree(v)
