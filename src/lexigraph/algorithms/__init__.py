from lexigraph.algorithms.coloring import (
    color,
    color_classes,
    color_edges,
    count_colors,
    dsatur,
    greedy,
    is_proper_coloring,
    line_graph,
    welsh_powell,
)
from lexigraph.algorithms.dijkstra import (
    ShortestPaths,
    get_edge_path,
    get_path,
    shortest_paths,
    unit_weight,
)

__all__ = [
    "ShortestPaths",
    "color",
    "color_classes",
    "color_edges",
    "count_colors",
    "dsatur",
    "get_edge_path",
    "get_path",
    "greedy",
    "is_proper_coloring",
    "line_graph",
    "shortest_paths",
    "unit_weight",
    "welsh_powell",
]
