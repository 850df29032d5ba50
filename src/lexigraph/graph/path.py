"""Paths: Lexicons of edges where each edge starts where the previous one ended."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, override

from lexigraph import exceptions
from lexigraph.graph.model import Edge, Vertex
from lexigraph.lexicon import Lexicon

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from lexigraph.graph.graph import Graph

logger = logging.getLogger(__name__)


class Path(Lexicon[Edge[Any]]):
    """A chain of adjacent edges.

    Every edge added, inserted or set is checked against the chain first; an
    edge that would break it is refused and the call reports failure, as for
    any other policy rejection. None is refused.

    When ``oriented`` is False an edge may be walked from y to x, and ``origin``
    tells which end of the first edge the walk starts from. Without an origin
    (or once the first edge no longer touches it) x is tried before y.
    """

    oriented: bool
    origin: Vertex[Any] | None

    def __init__(
        self,
        edges: Iterable[Edge[Any]] = (),
        *,
        oriented: bool = True,
        origin: Vertex[Any] | None = None,
    ) -> None:
        super().__init__(accept_duplicates=True, accept_null_values=False)
        self.oriented = oriented
        self.origin = origin
        self.add_all(edges)

    @classmethod
    def from_vertices(
        cls,
        graph: Graph,
        vertices: Iterable[Vertex[Any]],
        *,
        regarding_orientation: bool = True,
    ) -> Path:
        """Build the path visiting ``vertices`` in order, using the first matching edge each step.

        Raises:
            EdgeNotFoundError: If two consecutive vertices are not linked.
        """
        can_go_backward = not regarding_orientation or not graph.oriented
        steps = list(vertices)
        path = cls(oriented=not can_go_backward, origin=steps[0] if steps else None)
        for current, following in zip(steps, steps[1:], strict=False):
            edge = _find_step(graph, current, following, can_go_backward)
            if edge is None:
                raise exceptions.EdgeNotFoundError(
                    f"No edge from '{current.label}' to '{following.label}' in the graph"
                )
            path.add(edge)
        return path

    def _chains(self, edges: Sequence[Edge[Any] | None], edge: Edge[Any]) -> bool:
        if self._walk_edges(edges) is not None:
            return True
        logger.debug(f"Rejected {edge!r}: it does not chain with the path")
        return False

    @override
    def add(self, value: Edge[Any] | None) -> bool:
        if value is not None and not self._chains([*self.to_list(), value], value):
            return False
        return super().add(value)

    @override
    def insert(self, index: int, value: Edge[Any] | None) -> bool:
        if value is not None and 0 <= index <= len(self):
            edges = self.to_list()
            edges.insert(index, value)
            if not self._chains(edges, value):
                return False
        return super().insert(index, value)

    @override
    def _replace(self, index: int, value: Edge[Any] | None) -> tuple[bool, Edge[Any] | None]:
        if value is not None and 0 <= index < len(self):
            edges = self.to_list()
            edges[index] = value
            if not self._chains(edges, value):
                return False, None
        return super()._replace(index, value)

    @override
    def copy(self) -> Path:
        return Path(self.to_list(), oriented=self.oriented, origin=self.origin)  # pyright: ignore[reportArgumentType]

    def _walk(self) -> list[Vertex[Any]] | None:
        return self._walk_edges(self.to_list())

    def _walk_edges(self, edges: Sequence[Edge[Any] | None]) -> list[Vertex[Any]] | None:
        if not edges:
            return []
        first = edges[0]
        assert first is not None
        if self.oriented:
            starts = [first.x]
        elif self.origin is not None and first.touches(self.origin):
            starts = [self.origin]
        else:
            starts = [first.x, first.y]
        for start in starts:
            visited = [start]
            current = start
            for edge in edges:
                assert edge is not None
                if edge.x == current:
                    current = edge.y
                elif not self.oriented and edge.y == current:
                    current = edge.x
                else:
                    break
                visited.append(current)
            else:
                return visited
        return None

    def is_valid(self) -> bool:
        """True if every edge starts where the previous one ended."""
        return self._walk() is not None

    def vertices(self) -> Lexicon[Vertex[Any]]:
        """Vertices in visiting order: the start, then the end of each edge."""
        return Lexicon(self._walk() or [], accept_duplicates=True, accept_null_values=False)

    @property
    def start(self) -> Vertex[Any] | None:
        walk = self._walk()
        return walk[0] if walk else None

    @property
    def end(self) -> Vertex[Any] | None:
        walk = self._walk()
        return walk[-1] if walk else None

    def is_closed(self) -> bool:
        """A non-empty path that ends where it starts."""
        walk = self._walk()
        return bool(walk) and walk[0] == walk[-1]

    def is_cycle(self) -> bool:
        return self.is_closed()

    def is_open(self) -> bool:
        return not self.is_closed()

    def is_simple(self) -> bool:
        """No vertex is visited twice, except the start of a closed path."""
        walk = self._walk() or []
        if self.is_closed():
            walk = walk[:-1]
        return len(walk) == len(set(walk))

    @override
    def __repr__(self) -> str:
        walk = self._walk()
        if walk is None:
            return "Path(<invalid>)"
        return "Path(" + " -> ".join(v.label for v in walk) + ")"


def _find_step(
    graph: Graph, current: Vertex[Any], following: Vertex[Any], can_go_backward: bool
) -> Edge[Any] | None:
    for edge in graph.edges:
        if edge.x == current and edge.y == following:
            return edge
        if can_go_backward and edge.y == current and edge.x == following:
            return edge
    return None
