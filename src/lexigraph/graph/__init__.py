from lexigraph.graph.graph import Graph
from lexigraph.graph.model import UNCOLORED, Color, Edge, Vertex, VertexBuilder
from lexigraph.graph.path import Path
from lexigraph.graph.traversal import (
    bfs,
    dfs,
    distances_from,
    has_cycle,
    shortest_distance,
    topological_numbering,
)

__all__ = [
    "UNCOLORED",
    "Color",
    "Edge",
    "Graph",
    "Path",
    "Vertex",
    "VertexBuilder",
    "bfs",
    "dfs",
    "distances_from",
    "has_cycle",
    "shortest_distance",
    "topological_numbering",
]
