"""Test helpers for building small graphs by label."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from lexigraph.graph import Edge, Graph, Vertex

if TYPE_CHECKING:
    from collections.abc import Iterable


def build_graph(
    labels: Iterable[str], edges: Iterable[tuple[str, str]], *, oriented: bool = True
) -> Graph:
    """Create a graph whose vertices carry ``labels`` and whose edges link labels."""
    vertices = {label: Vertex[Any](label) for label in labels}
    graph = Graph(vertices.values(), oriented=oriented)
    for x, y in edges:
        graph.add_edge(Edge[Any](vertices[x], vertices[y]))
    return graph


def vertex(graph: Graph, label: str) -> Vertex[Any]:
    """Look up a vertex by label, failing the test if it is missing."""
    found = graph.find_vertex_by_label(label)
    assert found is not None, f"no vertex labelled {label!r}"
    return found


def labels(vertices: Iterable[Vertex[Any] | None]) -> list[str]:
    return [v.label for v in vertices if v is not None]


def ranks_by_label(ranks: dict[Vertex[Any], int]) -> dict[str, int]:
    return {v.label: rank for v, rank in ranks.items()}
