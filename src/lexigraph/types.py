from __future__ import annotations

import enum
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from lexigraph.graph.model import Color, Edge, Vertex


class LexiconEvent(enum.StrEnum):
    """Kinds of notifications a Lexicon can emit."""

    ADD = "add"
    GET = "get"
    SET = "set"
    REMOVE = "remove"
    CLEAR = "clear"


class VertexOrdering(enum.StrEnum):
    """How a coloring heuristic orders vertices before coloring them."""

    ASCENDING = "ascending"
    DESCENDING = "descending"
    RANDOM = "random"


class ColoringHeuristic(enum.StrEnum):
    """Available vertex-coloring heuristics."""

    GREEDY_ASCENDING = "greedy_ascending"
    GREEDY_DESCENDING = "greedy_descending"
    GREEDY_RANDOM = "greedy_random"
    WELSH_POWELL = "welsh_powell"
    WELSH_POWELL_ASCENDING = "welsh_powell_ascending"
    WELSH_POWELL_RANDOM = "welsh_powell_random"
    DSATUR = "dsatur"


# Listener signature: (index, value). CLEAR events pass (-1, None).
type LexiconListener = Callable[[int, Any], None]

# Traversal callback: (vertex, 1-based rank)
type VisitCallback = Callable[[Vertex[Any], int], None]

# Distance function between two adjacent vertices
type WeightFunction = Callable[[Vertex[Any], Vertex[Any]], float]

# Vertex -> 1-based visitation rank (0 when unreachable)
type RankMap = dict[Vertex[Any], int]

# Vertex -> distance (math.inf when unreachable)
type DistanceMap = dict[Vertex[Any], float]

# Vertex -> previous vertex on a shortest path (None for the source and unreachable vertices)
type PredecessorMap = dict[Vertex[Any], Vertex[Any] | None]

type ColorMap = dict[Vertex[Any], Color]

type EdgeColorMap = dict[Edge[Any], Color]
