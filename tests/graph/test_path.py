from __future__ import annotations

from typing import Any

import pytest

import helpers
from lexigraph import exceptions
from lexigraph.graph import Edge, Graph, Path
from lexigraph.types import LexiconEvent


@pytest.fixture
def cycle_graph() -> Graph:
    return helpers.build_graph("abcd", [("a", "b"), ("b", "c"), ("c", "a"), ("c", "d")])


def test_chained_edges_accepted(cycle_graph: Graph):
    ab, bc = cycle_graph.edges[0], cycle_graph.edges[1]
    path = Path([ab, bc])
    assert len(path) == 2
    assert path.is_valid()
    assert helpers.labels(path.vertices()) == ["a", "b", "c"]
    assert path.start is not None and path.start.label == "a"
    assert path.end is not None and path.end.label == "c"


def test_unchained_edge_refused(cycle_graph: Graph):
    ab, ca = cycle_graph.edges[0], cycle_graph.edges[2]
    path = Path([ab])
    assert path.add(ca) is False
    assert path.to_list() == [ab]


def test_refused_edge_fires_no_events(cycle_graph: Graph):
    ab, bc, ca = cycle_graph.edges[0], cycle_graph.edges[1], cycle_graph.edges[2]
    path = Path([ab, bc])
    events = list[tuple[LexiconEvent, int]]()
    for event in (LexiconEvent.ADD, LexiconEvent.REMOVE, LexiconEvent.SET):
        path.add_listener(event, lambda index, _edge, event=event: events.append((event, index)))

    assert path.add(ab) is False
    assert path.insert(0, bc) is False
    assert path.replace(1, ca) is False
    assert events == []

    assert path.add(ca) is True
    assert events == [(LexiconEvent.ADD, 2)]


def test_unchained_insert_refused(cycle_graph: Graph):
    ab, bc, cd = cycle_graph.edges[0], cycle_graph.edges[1], cycle_graph.edges[3]
    path = Path([ab, bc])
    assert path.insert(1, cd) is False
    assert path.to_list() == [ab, bc]


def test_none_refused():
    path = Path()
    assert path.add(None) is False
    assert len(path) == 0


def test_set_breaking_chain_is_reverted(cycle_graph: Graph):
    ab, bc, cd = cycle_graph.edges[0], cycle_graph.edges[1], cycle_graph.edges[3]
    path = Path([ab, bc])
    assert path.set(1, cd) is None
    assert path.to_list() == [ab, bc]


def test_set_keeping_chain(cycle_graph: Graph):
    ab, bc = cycle_graph.edges[0], cycle_graph.edges[1]
    parallel = Edge[Any](bc.x, bc.y, data="other")
    path = Path([ab, bc])
    assert path.set(1, bc) is bc
    assert path.set(1, parallel) is bc
    assert path.last() is parallel


def test_closed_path(cycle_graph: Graph):
    ab, bc, ca = cycle_graph.edges[0], cycle_graph.edges[1], cycle_graph.edges[2]
    path = Path([ab, bc, ca])
    assert path.is_closed()
    assert path.is_cycle()
    assert not path.is_open()
    assert path.is_simple()


def test_empty_path_is_open_and_simple():
    path = Path()
    assert path.is_open()
    assert path.is_simple()
    assert path.start is None
    assert list(path.vertices()) == []


def test_non_simple_path():
    graph = helpers.build_graph("abc", [("a", "b"), ("b", "a"), ("a", "c")])
    path = Path(graph.edges)
    assert path.is_valid()
    assert not path.is_simple()


def test_from_vertices(path_graph: Graph):
    vertices = [helpers.vertex(path_graph, label) for label in "ahel"]
    path = Path.from_vertices(path_graph, vertices)
    assert len(path) == 3
    assert repr(path) == "Path(a -> h -> e -> l)"


def test_from_vertices_missing_edge_raises(path_graph: Graph):
    vertices = [helpers.vertex(path_graph, label) for label in "la"]
    with pytest.raises(exceptions.EdgeNotFoundError, match="No edge from 'l' to 'a'"):
        Path.from_vertices(path_graph, vertices)


def test_undirected_from_vertices_keeps_origin():
    graph = helpers.build_graph("ab", [("a", "b"), ("a", "b")], oriented=False)
    b, a = helpers.vertex(graph, "b"), helpers.vertex(graph, "a")

    path = Path.from_vertices(graph, [b, a, b])

    assert len(path) == 2
    assert path.origin == b
    assert helpers.labels(path.vertices()) == ["b", "a", "b"]
    assert path.is_closed()
    assert repr(path) == "Path(b -> a -> b)"
    assert path.copy().origin == b


def test_origin_ignored_once_first_edge_no_longer_touches_it():
    graph = helpers.build_graph("abc", [("a", "b"), ("b", "c")], oriented=False)
    ab, bc = graph.edges[0], graph.edges[1]
    path = Path([ab, bc], oriented=False, origin=helpers.vertex(graph, "a"))

    path.remove_at(0)

    assert helpers.labels(path.vertices()) == ["b", "c"]


def test_from_vertices_ignoring_orientation(path_graph: Graph):
    vertices = [helpers.vertex(path_graph, label) for label in "leha"]
    path = Path.from_vertices(path_graph, vertices, regarding_orientation=False)
    assert helpers.labels(path.vertices()) == ["l", "e", "h", "a"]


def test_copy_keeps_validation(cycle_graph: Graph):
    ab, ca = cycle_graph.edges[0], cycle_graph.edges[2]
    clone = Path([ab]).copy()
    assert isinstance(clone, Path)
    assert clone.add(ca) is False
    assert clone.to_list() == [ab]
